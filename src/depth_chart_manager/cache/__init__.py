from depth_chart_manager.cache.depth_chart_cache import DEFAULT_TTL_SECONDS, CacheRecord, DepthChartCache

__all__ = ["DEFAULT_TTL_SECONDS", "CacheRecord", "DepthChartCache"]
