import asyncio
import json
from collections.abc import Awaitable, Callable
from typing import Annotated, TypeVar

import typer

from depth_chart_manager.cli._logging import configure_logging
from depth_chart_manager.cli._output import (
    print_backup_result,
    print_bulk_summary,
    print_depth_chart,
    print_error,
    print_injuries,
)
from depth_chart_manager.depth.models import DepthChart, NotFound
from depth_chart_manager.depth.teams import all_team_codes
from depth_chart_manager.errors import ConfigError, Unavailable
from depth_chart_manager.result import Err, Ok
from depth_chart_manager.services import ServiceContainer, fetch_all_depth_charts, get_container

T = TypeVar("T")

app = typer.Typer(name="dcm", help="NBA depth charts and injury backups scraped from ESPN.")


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
) -> None:
    try:
        settings = get_container().settings
    except ConfigError as e:
        print_error(f"Invalid configuration: {e}")
        raise typer.Exit(code=1) from e
    configure_logging(verbose=verbose, level=settings.log_level, quiet_loggers=settings.quiet_loggers)


def _run(work: Callable[[ServiceContainer], Awaitable[T]]) -> T:
    container = get_container()

    async def _main() -> T:
        try:
            return await work(container)
        finally:
            await container.aclose()

    return asyncio.run(_main())


def _echo_json(payload: object) -> None:
    typer.echo(json.dumps(payload, indent=2))


@app.command()
def show(
    team: Annotated[str, typer.Argument(help="Team abbreviation or ESPN slug (e.g. ATL, gs).")],
    output_json: Annotated[bool, typer.Option("--json", help="Print the chart as JSON.")] = False,
) -> None:
    """Print a team's depth chart."""
    result = _run(lambda c: c.cache.get_depth_chart(team))
    if result.is_err():
        print_error(str(result.unwrap_err()))
        raise typer.Exit(code=1)
    chart = result.unwrap()
    if output_json:
        _echo_json(chart.to_dict())
    else:
        print_depth_chart(chart)


@app.command()
def backup(
    team: Annotated[str, typer.Argument(help="Team abbreviation or ESPN slug.")],
    player: Annotated[str, typer.Argument(help="Player name or part of it (case-insensitive).")],
    output_json: Annotated[bool, typer.Option("--json", help="Print the result as JSON.")] = False,
) -> None:
    """Show who replaces a player when they are unavailable."""
    result = _run(lambda c: c.depth_charts.backups_for(team, player))
    if isinstance(result, Unavailable):
        print_error(str(result))
        raise typer.Exit(code=1)
    if isinstance(result, NotFound):
        print_error(f"No player matching {result.query!r} in {team.upper()} depth chart")
        raise typer.Exit(code=1)
    if output_json:
        _echo_json(result.summary())
    else:
        print_backup_result(result)


@app.command()
def injuries(
    team: Annotated[str, typer.Argument(help="Team abbreviation or ESPN slug.")],
) -> None:
    """List players flagged OUT or day-to-day in a team's depth chart."""
    result = _run(lambda c: c.depth_charts.injuries(team))
    if isinstance(result, Unavailable):
        print_error(str(result))
        raise typer.Exit(code=1)
    print_injuries(team.upper(), result)


@app.command(name="all")
def all_teams(
    delay: Annotated[
        float | None, typer.Option(help="Seconds to wait between requests (default from config).")
    ] = None,
    output_json: Annotated[bool, typer.Option("--json", help="Print every chart as JSON.")] = False,
) -> None:
    """Fetch every team's depth chart, pausing between requests."""

    async def work(c: ServiceContainer) -> dict[str, Ok[DepthChart] | Err[Unavailable]]:
        delay_seconds = c.settings.politeness_delay_seconds if delay is None else delay
        return await fetch_all_depth_charts(c.cache, all_team_codes(), delay_seconds=delay_seconds)

    results = _run(work)
    if output_json:
        _echo_json(
            {
                team: r.unwrap().to_dict() if r.is_ok() else {"error": str(r.unwrap_err())}
                for team, r in results.items()
            }
        )
    else:
        print_bulk_summary(results)
    if all(r.is_err() for r in results.values()):
        raise typer.Exit(code=1)
