import json
from collections.abc import Iterator

import pytest
from typer.testing import CliRunner

from depth_chart_manager.cli.app import app
from depth_chart_manager.config import Settings, create_config
from depth_chart_manager.errors import RetrievalError
from depth_chart_manager.services.container import ServiceContainer, set_container
from tests.helpers import ATL_DEPTH_HTML, FakePageFetcher, ManualClock

runner = CliRunner()


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("depth_chart_manager.cli.app.configure_logging", lambda **kwargs: None)


@pytest.fixture
def fetcher() -> Iterator[FakePageFetcher]:
    fake = FakePageFetcher()
    set_container(ServiceContainer(fetcher=fake, settings=Settings(), clock=ManualClock()))
    yield fake
    set_container(None)


class TestShowCommand:
    def test_prints_positions(self, fetcher: FakePageFetcher) -> None:
        fetcher.push(ATL_DEPTH_HTML)
        result = runner.invoke(app, ["show", "ATL"])
        assert result.exit_code == 0
        assert "ATL" in result.output
        assert "PG: 1. Dyson Daniels, 2. Keaton Wallace, 5. Trae Young (O)" in result.output
        assert fetcher.urls == ["https://www.espn.com/nba/team/depth/_/name/atl"]

    def test_accepts_espn_slug(self, fetcher: FakePageFetcher) -> None:
        fetcher.push(ATL_DEPTH_HTML)
        result = runner.invoke(app, ["show", "gs"])
        assert result.exit_code == 0
        assert fetcher.urls == ["https://www.espn.com/nba/team/depth/_/name/gs"]

    def test_json_output(self, fetcher: FakePageFetcher) -> None:
        fetcher.push(ATL_DEPTH_HTML)
        result = runner.invoke(app, ["show", "ATL", "--json"])
        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["team"] == "ATL"
        assert [e["name"] for e in payload["positions"]["SF"]] == ["Zaccharie Risacher", "Caleb Houstan"]

    def test_unknown_team_exits_nonzero(self, fetcher: FakePageFetcher) -> None:
        result = runner.invoke(app, ["show", "XYZ"])
        assert result.exit_code == 1
        assert "Depth chart unavailable for XYZ" in result.output
        assert fetcher.call_count == 0

    def test_retrieval_failure_exits_nonzero(self, fetcher: FakePageFetcher) -> None:
        fetcher.push(RetrievalError("https://www.espn.com", RuntimeError("403")))
        result = runner.invoke(app, ["show", "ATL"])
        assert result.exit_code == 1
        assert "Error" in result.output


class TestBackupCommand:
    def test_prints_primary_backup(self, fetcher: FakePageFetcher) -> None:
        fetcher.push(ATL_DEPTH_HTML)
        result = runner.invoke(app, ["backup", "ATL", "okongwu"])
        assert result.exit_code == 0
        assert "Onyeka Okongwu (C, depth 1)" in result.output
        assert "Primary backup: 2. Kristaps Porzingis" in result.output

    def test_last_in_sequence(self, fetcher: FakePageFetcher) -> None:
        fetcher.push(ATL_DEPTH_HTML)
        result = runner.invoke(app, ["backup", "ATL", "Trae Young"])
        assert result.exit_code == 0
        assert "No backup listed behind this player" in result.output

    def test_json_output(self, fetcher: FakePageFetcher) -> None:
        fetcher.push(ATL_DEPTH_HTML)
        result = runner.invoke(app, ["backup", "ATL", "Jalen", "--json"])
        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["position"] == "PF"
        assert payload["primary_backup"]["name"] == "Mouhamed Gueye"
        assert [c["name"] for c in payload["candidates"]] == ["Mouhamed Gueye", "Two-Way Slot"]

    def test_player_not_found(self, fetcher: FakePageFetcher) -> None:
        fetcher.push(ATL_DEPTH_HTML)
        result = runner.invoke(app, ["backup", "atl", "Tatum"])
        assert result.exit_code == 1
        assert "No player matching 'Tatum' in ATL depth chart" in result.output


class TestInjuriesCommand:
    def test_lists_injured_players(self, fetcher: FakePageFetcher) -> None:
        fetcher.push(ATL_DEPTH_HTML)
        result = runner.invoke(app, ["injuries", "ATL"])
        assert result.exit_code == 0
        assert "Trae Young (PG) - OUT" in result.output
        assert "Kobe Bufkin (SG) - DAY_TO_DAY" in result.output

    def test_no_injuries(self, fetcher: FakePageFetcher) -> None:
        fetcher.push('<table class="Table"><thead><tr><th>PG</th></tr></thead><tbody></tbody></table>')
        result = runner.invoke(app, ["injuries", "BOS"])
        assert result.exit_code == 0
        assert "No injured players found in BOS depth chart" in result.output


class TestAllCommand:
    def test_fetches_every_team(self, fetcher: FakePageFetcher) -> None:
        for _ in range(30):
            fetcher.push(ATL_DEPTH_HTML)
        result = runner.invoke(app, ["all", "--delay", "0"])
        assert result.exit_code == 0
        assert fetcher.call_count == 30
        assert "Depth charts" in result.output

    def test_partial_failure_still_succeeds(self, fetcher: FakePageFetcher) -> None:
        fetcher.push(ATL_DEPTH_HTML)
        result = runner.invoke(app, ["all", "--delay", "0", "--json"])
        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["ATL"]["team"] == "ATL"
        assert "error" in payload["BOS"]

    def test_every_team_failing_exits_nonzero(self, fetcher: FakePageFetcher) -> None:
        result = runner.invoke(app, ["all", "--delay", "0"])
        assert result.exit_code == 1
        assert fetcher.call_count == 30


class TestAppCallback:
    def test_logging_configured_from_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[dict[str, object]] = []
        monkeypatch.setattr("depth_chart_manager.cli.app.configure_logging", lambda **kwargs: calls.append(kwargs))
        settings = Settings(log_level="DEBUG", quiet_loggers=("httpx",))
        set_container(ServiceContainer(fetcher=FakePageFetcher(ATL_DEPTH_HTML), settings=settings))
        try:
            result = runner.invoke(app, ["--verbose", "show", "ATL"])
        finally:
            set_container(None)

        assert result.exit_code == 0
        assert calls == [{"verbose": True, "level": "DEBUG", "quiet_loggers": ("httpx",)}]

    def test_invalid_configuration_exits_nonzero(self) -> None:
        cfg = create_config(yaml_path="/nonexistent/config.yaml", overrides={"http": {"retry_attempts": 0}})
        fetcher = FakePageFetcher(ATL_DEPTH_HTML)
        set_container(ServiceContainer(app_config=cfg, fetcher=fetcher))
        try:
            result = runner.invoke(app, ["show", "ATL"])
        finally:
            set_container(None)

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output
        assert fetcher.call_count == 0
