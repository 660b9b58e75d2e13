from rich.console import Console
from rich.table import Table

from depth_chart_manager.depth.models import BackupResult, DepthChart, DepthEntry, InjuryStatus
from depth_chart_manager.errors import Unavailable
from depth_chart_manager.result import Err, Ok

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)

_STATUS_MARKERS = {
    InjuryStatus.OUT: " [red](O)[/red]",
    InjuryStatus.DAY_TO_DAY: " [yellow](DD)[/yellow]",
    InjuryStatus.NONE: "",
}


def print_error(message: str) -> None:
    err_console.print(f"[red bold]Error:[/red bold] {message}")


def _slot(entry: DepthEntry) -> str:
    return f"{entry.depth}. {entry.name}{_STATUS_MARKERS[entry.injury_status]}"


def print_depth_chart(chart: DepthChart) -> None:
    console.print(f"[bold]{chart.team}[/bold] depth chart (retrieved {chart.retrieved_at:%Y-%m-%d %H:%M} UTC)")
    if not chart.positions:
        console.print("  No positions found")
        return
    for position, entries in chart.positions.items():
        slots = ", ".join(_slot(e) for e in entries) or "-"
        console.print(f"  [bold]{position}[/bold]: {slots}", soft_wrap=True)


def print_backup_result(result: BackupResult) -> None:
    player = result.matched_entry
    console.print(f"[bold]{player.name}[/bold] ({result.position}, depth {player.depth})", soft_wrap=True)
    if result.primary_backup is None:
        console.print("  No backup listed behind this player")
        return
    console.print(f"  Primary backup: {_slot(result.primary_backup)}", soft_wrap=True)
    for entry in result.candidates:
        console.print(f"    - {_slot(entry)}", soft_wrap=True)


def print_injuries(team: str, injured: list[tuple[str, DepthEntry]]) -> None:
    if not injured:
        console.print(f"No injured players found in {team} depth chart")
        return
    console.print(f"[bold]{len(injured)}[/bold] injured player(s) on {team}:")
    for position, entry in injured:
        console.print(f"  - {entry.name} ({position}) - {entry.injury_status.value}", soft_wrap=True)


def print_bulk_summary(results: dict[str, Ok[DepthChart] | Err[Unavailable]]) -> None:
    table = Table(title="Depth charts")
    table.add_column("Team")
    table.add_column("Positions", justify="right")
    table.add_column("Players", justify="right")
    table.add_column("Status")
    for team, result in results.items():
        if result.is_ok():
            chart = result.unwrap()
            players = sum(len(entries) for entries in chart.positions.values())
            table.add_row(team, str(len(chart.positions)), str(players), "[green]ok[/green]")
        else:
            table.add_row(team, "-", "-", "[red]unavailable[/red]")
    console.print(table)
