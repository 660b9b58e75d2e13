"""Answer "who replaces this player" for a team."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from depth_chart_manager.depth.resolver import injured_players, resolve
from depth_chart_manager.depth.teams import team_for_balldontlie_id
from depth_chart_manager.errors import UnknownTeamError, Unavailable

if TYPE_CHECKING:
    from depth_chart_manager.cache.depth_chart_cache import DepthChartCache
    from depth_chart_manager.depth.models import BackupResult, DepthEntry, NotFound

logger = logging.getLogger(__name__)


class DepthChartService:
    """Compose the depth chart cache with the backup resolver."""

    def __init__(self, cache: DepthChartCache) -> None:
        self._cache = cache

    @property
    def cache(self) -> DepthChartCache:
        return self._cache

    async def backups_for(self, team: str, player_name: str) -> BackupResult | NotFound | Unavailable:
        result = await self._cache.get_depth_chart(team)
        if result.is_err():
            return result.unwrap_err()
        backup = resolve(result.unwrap(), player_name)
        logger.debug("Resolved %r on %s: %s", player_name, team, type(backup).__name__)
        return backup

    async def backups_for_balldontlie_player(
        self, team_id: int, first_name: str, last_name: str
    ) -> BackupResult | NotFound | Unavailable:
        """Look up backups for a player described by balldontlie's team id and name fields."""
        try:
            team = team_for_balldontlie_id(team_id)
        except UnknownTeamError as e:
            return Unavailable(str(team_id), e)
        return await self.backups_for(team, f"{first_name} {last_name}")

    async def injuries(self, team: str) -> list[tuple[str, DepthEntry]] | Unavailable:
        result = await self._cache.get_depth_chart(team)
        if result.is_err():
            return result.unwrap_err()
        return injured_players(result.unwrap())
