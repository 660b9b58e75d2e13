"""Parse an ESPN depth chart page into a DepthChart.

The page carries one ``<table class="Table ...">``:

- The first header row lists position labels (PG, SG, SF, PF, C) alongside
  rank labels (Starter, 2nd, 3rd, ...), which are dropped.
- Body row N holds the players for position label N, one cell per depth slot.
- An occupied slot has a link to the player's profile
  (``/nba/player/_/id/<digits>/<slug>``); empty slots have no link.
- Injury flags are short text markers next to the link ("O", "DD").
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from html.parser import HTMLParser

from depth_chart_manager.depth.models import DepthChart, DepthEntry, InjuryStatus
from depth_chart_manager.errors import ParseError

logger = logging.getLogger(__name__)

TABLE_CLASS = "Table"
RANK_LABELS = frozenset({"Starter", "2nd", "3rd", "4th", "5th"})

_PLAYER_ID_RE = re.compile(r"/id/(\d+)(?:/|$)")

_OUT_TOKENS = frozenset({"O", "OUT"})
_DAY_TO_DAY_TOKENS = frozenset({"DD", "DTD"})


class InjuryMatch(Enum):
    """How injury markers are read from a depth chart cell.

    SUBSTRING looks for "O" / "DD" anywhere in the cell text, player name
    included, so a name like "Royce O'Neale" reads as OUT. TOKEN only
    accepts whole status tokens found outside the player link.
    """

    SUBSTRING = "substring"
    TOKEN = "token"


@dataclass
class _Cell:
    href: str | None = None
    text: list[str] = field(default_factory=list)
    link_text: list[str] = field(default_factory=list)
    status_text: list[str] = field(default_factory=list)
    in_link: bool = False


class _DepthTableParser(HTMLParser):
    """Collect header labels and body cells from the first depth chart table.

    Only rows inside `<tbody>` are body rows; `<tfoot>` and stray rows are
    skipped. Tables nested inside the depth chart table are ignored, as is
    everything after the depth chart table closes.
    """

    def __init__(self, table_class: str = TABLE_CLASS) -> None:
        super().__init__()
        self.table_class = table_class
        self.found_table = False
        self.headers: list[str] = []
        self.rows: list[list[_Cell]] = []
        self._table_depth = 0
        self._done = False
        self._in_thead = False
        self._in_tbody = False
        self._header_seen = False
        self._in_header_row = False
        self._in_th = False
        self._th_text: list[str] = []
        self._row: list[_Cell] | None = None
        self._cell: _Cell | None = None

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if self._done:
            return
        if tag == "table":
            if self._table_depth:
                self._table_depth += 1
            elif self.table_class in (dict(attrs).get("class") or "").split():
                self.found_table = True
                self._table_depth = 1
            return
        if self._table_depth != 1:
            return

        if tag == "thead":
            self._in_thead = True
        elif tag in ("tbody", "tfoot"):
            self._close_row()
            self._end_header_row()
            self._in_thead = False
            self._in_tbody = tag == "tbody"
        elif tag == "tr":
            self._close_row()
            self._end_header_row()
            if self._in_thead:
                self._in_header_row = not self._header_seen
            elif self._in_tbody:
                self._row = []
        elif tag == "th" and self._in_header_row:
            self._close_th()
            self._in_th = True
            self._th_text = []
        elif tag == "td" and self._row is not None:
            self._close_cell()
            self._cell = _Cell()
        elif tag == "a" and self._cell is not None and self._cell.href is None:
            href = dict(attrs).get("href")
            if href:
                self._cell.href = href
                self._cell.in_link = True

    def handle_endtag(self, tag: str) -> None:
        if self._done or not self._table_depth:
            return
        if tag == "table":
            self._table_depth -= 1
            if not self._table_depth:
                self._close_row()
                self._done = True
            return
        if self._table_depth != 1:
            return

        if tag == "thead":
            self._in_thead = False
            self._end_header_row()
        elif tag == "tbody":
            self._in_tbody = False
            self._close_row()
        elif tag == "tr":
            if self._in_header_row:
                self._end_header_row()
            else:
                self._close_row()
        elif tag == "th":
            self._close_th()
        elif tag == "td":
            self._close_cell()
        elif tag == "a" and self._cell is not None:
            self._cell.in_link = False

    def handle_data(self, data: str) -> None:
        if self._done or self._table_depth != 1:
            return
        if self._in_th:
            self._th_text.append(data)
        elif self._cell is not None:
            self._cell.text.append(data)
            if self._cell.in_link:
                self._cell.link_text.append(data)
            else:
                self._cell.status_text.append(data)

    def _close_th(self) -> None:
        if self._in_th:
            self._in_th = False
            self.headers.append("".join(self._th_text).strip())

    def _end_header_row(self) -> None:
        self._close_th()
        if self._in_header_row:
            self._in_header_row = False
            self._header_seen = True

    def _close_cell(self) -> None:
        if self._cell is not None and self._row is not None:
            self._row.append(self._cell)
        self._cell = None

    def _close_row(self) -> None:
        self._close_cell()
        if self._row is not None:
            self.rows.append(self._row)
        self._row = None


def _injury_status(cell: _Cell, match: InjuryMatch) -> InjuryStatus:
    if match is InjuryMatch.TOKEN:
        tokens = {t.strip("()[],.").upper() for t in " ".join(cell.status_text).split()}
        if tokens & _OUT_TOKENS:
            return InjuryStatus.OUT
        if tokens & _DAY_TO_DAY_TOKENS:
            return InjuryStatus.DAY_TO_DAY
        return InjuryStatus.NONE

    text = "".join(cell.text)
    if "O" in text:
        return InjuryStatus.OUT
    if "DD" in text:
        return InjuryStatus.DAY_TO_DAY
    return InjuryStatus.NONE


def _external_id(href: str) -> str | None:
    m = _PLAYER_ID_RE.search(href)
    return m.group(1) if m else None


def position_labels(headers: list[str]) -> list[str]:
    """Header texts with empty cells and rank labels removed."""
    return [text for text in headers if text and text not in RANK_LABELS]


def parse_depth_chart(
    raw_markup: str,
    team_code: str,
    *,
    retrieved_at: datetime | None = None,
    injury_match: InjuryMatch = InjuryMatch.SUBSTRING,
    table_class: str = TABLE_CLASS,
) -> DepthChart:
    """Parse one team's depth chart page.

    Args:
        raw_markup: The page HTML.
        team_code: Team abbreviation; stored uppercased.
        retrieved_at: Timestamp to stamp on the chart (default: now, UTC).
        injury_match: Rule for reading injury markers.
        table_class: Class token identifying the depth chart table.

    Returns:
        The parsed DepthChart. A header with no position labels yields an
        empty ``positions`` mapping rather than an error.

    Raises:
        ParseError: If the page has no depth chart table.
    """
    parser = _DepthTableParser(table_class)
    parser.feed(raw_markup)
    parser.close()

    if not parser.found_table:
        raise ParseError("table not found")

    labels = position_labels(parser.headers)
    positions: dict[str, tuple[DepthEntry, ...]] = {}
    for row_index, row in enumerate(parser.rows):
        if row_index >= len(labels):
            logger.debug("Skipping body row %d for %s: no position label", row_index, team_code.upper())
            continue
        positions[labels[row_index]] = tuple(
            DepthEntry(
                depth=column,
                name="".join(cell.link_text).strip(),
                external_id=_external_id(cell.href),
                injury_status=_injury_status(cell, injury_match),
            )
            for column, cell in enumerate(row, start=1)
            if cell.href is not None
        )

    logger.debug("Parsed %d positions for %s", len(positions), team_code.upper())
    return DepthChart(
        team=team_code.upper(),
        retrieved_at=retrieved_at or datetime.now(UTC),
        positions=positions,
    )
