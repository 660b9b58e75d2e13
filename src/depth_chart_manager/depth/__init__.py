"""Depth chart parsing and backup resolution."""

from depth_chart_manager.depth.models import BackupResult, DepthChart, DepthEntry, InjuryStatus, NotFound
from depth_chart_manager.depth.parser import InjuryMatch, parse_depth_chart
from depth_chart_manager.depth.resolver import injured_players, resolve
from depth_chart_manager.depth.teams import all_team_codes, depth_chart_url, team_code, team_for_balldontlie_id

__all__ = [
    "BackupResult",
    "DepthChart",
    "DepthEntry",
    "InjuryMatch",
    "InjuryStatus",
    "NotFound",
    "all_team_codes",
    "depth_chart_url",
    "injured_players",
    "parse_depth_chart",
    "resolve",
    "team_code",
    "team_for_balldontlie_id",
]
