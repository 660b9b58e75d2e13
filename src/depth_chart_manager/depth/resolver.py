"""Find the players who move up when a player is unavailable."""

from depth_chart_manager.depth.models import BackupResult, DepthChart, DepthEntry, InjuryStatus, NotFound

MAX_CANDIDATES = 3


def resolve(chart: DepthChart, query_name: str) -> BackupResult | NotFound:
    """Find ``query_name`` in the chart and return the players behind them.

    Matching is a case-insensitive substring test against each entry's
    name. Positions are scanned in the chart's order and entries in depth
    order; the first hit wins, so a name listed under two positions always
    resolves to the earlier one.
    """
    needle = query_name.lower()
    for position, entries in chart.positions.items():
        for index, entry in enumerate(entries):
            if needle in entry.name.lower():
                candidates = entries[index + 1 : index + 1 + MAX_CANDIDATES]
                return BackupResult(
                    position=position,
                    matched_entry=entry,
                    primary_backup=candidates[0] if candidates else None,
                    candidates=candidates,
                )
    return NotFound(query=query_name)


def injured_players(chart: DepthChart) -> list[tuple[str, DepthEntry]]:
    """(position, entry) pairs for every entry carrying an injury flag."""
    return [
        (position, entry)
        for position, entries in chart.positions.items()
        for entry in entries
        if entry.injury_status is not InjuryStatus.NONE
    ]
