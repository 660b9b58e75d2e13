"""Fetch depth charts for many teams without hammering the source."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from depth_chart_manager.depth.teams import all_team_codes, team_code
from depth_chart_manager.errors import UnknownTeamError, Unavailable

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterable

    from depth_chart_manager.cache.depth_chart_cache import DepthChartCache
    from depth_chart_manager.depth.models import DepthChart
    from depth_chart_manager.result import Result

logger = logging.getLogger(__name__)

DEFAULT_POLITENESS_DELAY_SECONDS = 2.0


def _needs_retrieval(cache: DepthChartCache, team: str) -> bool:
    try:
        team_code(team)
    except UnknownTeamError:
        return False
    return not cache.is_fresh(team)


async def fetch_all_depth_charts(
    cache: DepthChartCache,
    teams: Iterable[str] | None = None,
    *,
    delay_seconds: float = DEFAULT_POLITENESS_DELAY_SECONDS,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> dict[str, Result[DepthChart, Unavailable]]:
    """Get every team's chart in order, one request at a time.

    ``delay_seconds`` is slept before each retrieval that follows another
    retrieval, so the source never sees back-to-back requests. Teams served
    fresh from the cache and names with no known team cost no request and no
    delay. A failed team is recorded in the result and the run continues.
    """
    results: dict[str, Result[DepthChart, Unavailable]] = {}
    retrieved_before = False
    for team in teams if teams is not None else all_team_codes():
        needs_retrieval = _needs_retrieval(cache, team)
        if needs_retrieval and retrieved_before and delay_seconds > 0:
            await sleep(delay_seconds)
        results[team] = await cache.get_depth_chart(team)
        retrieved_before = retrieved_before or needs_retrieval
        if results[team].is_err():
            logger.warning("Skipping %s: %s", team, results[team].unwrap_err())

    failed = sum(1 for r in results.values() if r.is_err())
    logger.info("Fetched %d depth charts (%d unavailable)", len(results) - failed, failed)
    return results
