"""Service layer: the depth chart service, bulk fetching, and the container that wires them."""

from depth_chart_manager.services.bulk import fetch_all_depth_charts
from depth_chart_manager.services.container import ServiceContainer, get_container, set_container
from depth_chart_manager.services.depth_charts import DepthChartService

__all__ = [
    "DepthChartService",
    "ServiceContainer",
    "fetch_all_depth_charts",
    "get_container",
    "set_container",
]
