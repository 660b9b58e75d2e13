"""Service container owning the process's depth chart cache."""

from __future__ import annotations

import logging
import time
from functools import cached_property
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from config import ConfigurationSet

    from depth_chart_manager.cache.depth_chart_cache import DepthChartCache
    from depth_chart_manager.config import Settings
    from depth_chart_manager.ingest.espn_source import EspnPageFetcher, PageFetcher
    from depth_chart_manager.services.depth_charts import DepthChartService

logger = logging.getLogger(__name__)


class ServiceContainer:
    """Lazily-initialized dependencies for the CLI.

    One container holds one cache, so cached charts live as long as the
    container does. Tests inject fakes through the constructor; anything
    not injected is built from configuration on first access.
    """

    def __init__(
        self,
        *,
        app_config: ConfigurationSet | None = None,
        settings: Settings | None = None,
        fetcher: PageFetcher | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._app_config = app_config
        self._settings = settings
        self._fetcher = fetcher
        self._clock = clock

    @cached_property
    def app_config(self) -> ConfigurationSet:
        if self._app_config is not None:
            return self._app_config
        from depth_chart_manager.config import create_config

        return create_config()

    @cached_property
    def settings(self) -> Settings:
        if self._settings is not None:
            return self._settings
        from depth_chart_manager.config import load_settings

        return load_settings(self.app_config)

    @cached_property
    def fetcher(self) -> PageFetcher:
        if self._fetcher is not None:
            return self._fetcher
        return self._espn_fetcher

    @cached_property
    def _espn_fetcher(self) -> EspnPageFetcher:
        from depth_chart_manager.ingest.espn_source import EspnPageFetcher

        return EspnPageFetcher(
            user_agent=self.settings.user_agent,
            timeout_seconds=self.settings.timeout_seconds,
            connect_timeout_seconds=self.settings.connect_timeout_seconds,
            retry_policy=self.settings.retry_policy,
        )

    @cached_property
    def cache(self) -> DepthChartCache:
        from depth_chart_manager.cache.depth_chart_cache import DepthChartCache

        logger.debug("Creating depth chart cache (ttl=%.0fs)", self.settings.ttl_seconds)
        return DepthChartCache(
            self.fetcher,
            ttl_seconds=self.settings.ttl_seconds,
            serve_stale_on_error=self.settings.serve_stale_on_error,
            injury_match=self.settings.injury_match,
            clock=self._clock,
        )

    @cached_property
    def depth_charts(self) -> DepthChartService:
        from depth_chart_manager.services.depth_charts import DepthChartService

        return DepthChartService(self.cache)

    async def aclose(self) -> None:
        """Close the HTTP client if this container created one.

        The container cannot fetch again afterwards.
        """
        if "_espn_fetcher" in self.__dict__:
            await self._espn_fetcher.aclose()


_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the global service container, creating one if needed."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def set_container(container: ServiceContainer | None) -> None:
    """Set or reset the global service container.

    Pass None to reset, which will cause get_container() to create
    a new container on next access.
    """
    global _container
    _container = container
