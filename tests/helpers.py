"""Depth chart markup builders and test doubles shared across test modules."""

from __future__ import annotations

from depth_chart_manager.errors import RetrievalError

ATL_DEPTH_HTML = """
<html>
<body>
<div class="ResponsiveTable">
<div class="Table__Title">Atlanta Hawks Depth Chart</div>
<table class="Table Table--align-right">
  <thead class="Table__THEAD">
    <tr class="Table__TR">
      <th class="Table__TH"></th>
      <th class="Table__TH">PG</th>
      <th class="Table__TH">SG</th>
      <th class="Table__TH">SF</th>
      <th class="Table__TH">PF</th>
      <th class="Table__TH">C</th>
      <th class="Table__TH">Starter</th>
      <th class="Table__TH">2nd</th>
      <th class="Table__TH">3rd</th>
      <th class="Table__TH">4th</th>
      <th class="Table__TH">5th</th>
    </tr>
  </thead>
  <tbody class="Table__TBODY">
    <tr class="Table__TR">
      <td class="Table__TD"><a href="https://www.espn.com/nba/player/_/id/4869342/dyson-daniels">Dyson Daniels</a></td>
      <td class="Table__TD"><a href="https://www.espn.com/nba/player/_/id/4278355/keaton-wallace">Keaton Wallace</a></td>
      <td class="Table__TD">-</td>
      <td class="Table__TD"></td>
      <td class="Table__TD"><a href="https://www.espn.com/nba/player/_/id/4277905/trae-young">Trae Young</a><span class="n10">O</span></td>
    </tr>
    <tr class="Table__TR">
      <td class="Table__TD"><a href="https://www.espn.com/nba/player/_/id/4397014/nickeil-alexander-walker">Nickeil Alexander-Walker</a></td>
      <td class="Table__TD"><a href="https://www.espn.com/nba/player/_/id/4701230/zaccharie-risacher">Zaccharie Risacher</a></td>
      <td class="Table__TD"><a href="https://www.espn.com/nba/player/_/id/4432174/kobe-bufkin">Kobe Bufkin</a><span class="n10">DD</span></td>
      <td class="Table__TD"><a href="https://www.espn.com/nba/player/_/id/4594327/vit-krejci">Vit Krejci</a></td>
      <td class="Table__TD"><a href="https://www.espn.com/nba/player/_/id/5105565/asa-newell">Asa Newell</a></td>
    </tr>
    <tr class="Table__TR">
      <td class="Table__TD"><a href="https://www.espn.com/nba/player/_/id/4701230/zaccharie-risacher">Zaccharie Risacher</a></td>
      <td class="Table__TD"><a href="https://www.espn.com/nba/player/_/id/4065656/caleb-houstan">Caleb Houstan</a></td>
      <td class="Table__TD"></td>
      <td class="Table__TD"></td>
      <td class="Table__TD"></td>
    </tr>
    <tr class="Table__TR">
      <td class="Table__TD"><a href="https://www.espn.com/nba/player/_/id/4433134/jalen-johnson">Jalen Johnson</a></td>
      <td class="Table__TD"><a href="https://www.espn.com/nba/player/_/id/4432585/mouhamed-gueye">Mouhamed Gueye</a></td>
      <td class="Table__TD"><a href="/nba/players">Two-Way Slot</a></td>
      <td class="Table__TD"></td>
      <td class="Table__TD"></td>
    </tr>
    <tr class="Table__TR">
      <td class="Table__TD"><a href="https://www.espn.com/nba/player/_/id/4431680/onyeka-okongwu">Onyeka Okongwu</a></td>
      <td class="Table__TD"><a href="https://www.espn.com/nba/player/_/id/4066259/kristaps-porzingis">Kristaps Porzingis</a></td>
      <td class="Table__TD"><a href="https://www.espn.com/nba/player/_/id/4684742/n-faly-dante">N'Faly Dante</a></td>
      <td class="Table__TD"></td>
      <td class="Table__TD"></td>
    </tr>
  </tbody>
</table>
</div>
</body>
</html>
"""


def depth_table(headers: list[str], rows: list[list[str]], table_class: str = "Table") -> str:
    """Build a minimal depth chart page from header texts and raw ``<td>`` bodies."""
    head = "".join(f"<th>{h}</th>" for h in headers)
    body = "".join("<tr>" + "".join(f"<td>{cell}</td>" for cell in row) + "</tr>" for row in rows)
    return f'<table class="{table_class}"><thead><tr>{head}</tr></thead><tbody>{body}</tbody></table>'


def player_link(name: str, player_id: int | None = None) -> str:
    href = f"/nba/player/_/id/{player_id}/x" if player_id is not None else "/nba/player/unknown"
    return f'<a href="{href}">{name}</a>'


class FakePageFetcher:
    """Returns scripted responses in order; an exception in the script is raised."""

    def __init__(self, *responses: str | Exception) -> None:
        self._responses = list(responses)
        self.urls: list[str] = []

    def push(self, response: str | Exception) -> None:
        self._responses.append(response)

    async def fetch_page(self, url: str) -> str:
        self.urls.append(url)
        if not self._responses:
            raise RetrievalError(url, RuntimeError("no scripted response"))
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def call_count(self) -> int:
        return len(self.urls)


class ManualClock:
    def __init__(self, start: float = 1_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


