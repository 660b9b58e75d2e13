"""Per-team TTL cache in front of the depth chart page.

Usage:
    async with EspnPageFetcher() as fetcher:
        cache = DepthChartCache(fetcher, ttl_seconds=6 * 3600)
        result = await cache.get_depth_chart("ATL")
        if result.is_ok():
            chart = result.unwrap()

Each team moves through absent -> fresh -> stale. A fresh record is served
without I/O. Absent and stale records trigger one retrieval; success replaces
the record (value and timestamp together), failure leaves it exactly as it
was. Records live for the lifetime of the cache object.

The cache runs on a single event loop and holds no locks. Two overlapping
refreshes for the same team both write; the last one to finish wins.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING

from depth_chart_manager.depth.parser import InjuryMatch, parse_depth_chart
from depth_chart_manager.depth.teams import depth_chart_url, team_code
from depth_chart_manager.errors import UnknownTeamError, Unavailable
from depth_chart_manager.result import Err, Ok, Result

if TYPE_CHECKING:
    from collections.abc import Callable

    from depth_chart_manager.depth.models import DepthChart
    from depth_chart_manager.ingest.espn_source import PageFetcher

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 6 * 60 * 60


@dataclass(frozen=True)
class CacheRecord:
    """The last successfully parsed chart for a team and when it was fetched."""

    value: DepthChart
    fetched_at: float


class DepthChartCache:
    def __init__(
        self,
        fetcher: PageFetcher,
        *,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        serve_stale_on_error: bool = False,
        injury_match: InjuryMatch = InjuryMatch.SUBSTRING,
        clock: Callable[[], float] = time.time,
        parser: Callable[[str, str], DepthChart] | None = None,
    ) -> None:
        """
        Args:
            fetcher: Retrieves page markup for a URL.
            ttl_seconds: How long a record stays fresh.
            serve_stale_on_error: When a refresh fails and an older record
                exists, return the older chart instead of Unavailable.
            injury_match: Injury marker rule handed to the default parser.
            clock: Returns the current time in seconds.
            parser: Replaces the default markup parser.
        """
        self._fetcher = fetcher
        self._ttl_seconds = ttl_seconds
        self._serve_stale_on_error = serve_stale_on_error
        self._clock = clock
        self._parse = parser or partial(parse_depth_chart, injury_match=injury_match)
        self._records: dict[str, CacheRecord] = {}

    @property
    def ttl_seconds(self) -> float:
        return self._ttl_seconds

    def record(self, team: str) -> CacheRecord | None:
        try:
            return self._records.get(team_code(team))
        except UnknownTeamError:
            return None

    def is_fresh(self, team: str) -> bool:
        record = self.record(team)
        return record is not None and self._clock() - record.fetched_at < self._ttl_seconds

    async def get_depth_chart(self, team: str) -> Result[DepthChart, Unavailable]:
        """Return the team's chart, fetching it when absent or stale.

        No retrieval or parse failure escapes, whatever its type; each comes back as
        Err(Unavailable), or as the previous chart when the cache was built
        with ``serve_stale_on_error=True``.
        """
        try:
            code = team_code(team)
        except UnknownTeamError as e:
            logger.warning("No depth chart source for %r", team)
            return Err(Unavailable(team, e))

        record = self._records.get(code)
        if record is not None and self._clock() - record.fetched_at < self._ttl_seconds:
            logger.debug("Cache hit for %s (age %.0fs)", code, self._clock() - record.fetched_at)
            return Ok(record.value)

        logger.debug("Cache %s for %s, fetching", "stale" if record else "miss", code)
        url = depth_chart_url(code)
        try:
            markup = await self._fetcher.fetch_page(url)
            chart = self._parse(markup, code)
        except Exception as e:
            logger.warning("Failed to refresh depth chart for %s: %s", code, e)
            if record is not None and self._serve_stale_on_error:
                logger.info("Serving depth chart for %s retrieved at %s", code, record.value.retrieved_at)
                return Ok(record.value)
            return Err(Unavailable(code, e))

        self._records[code] = CacheRecord(value=chart, fetched_at=self._clock())
        logger.info("Fetched depth chart for %s (%d positions)", code, len(chart.positions))
        return Ok(chart)
