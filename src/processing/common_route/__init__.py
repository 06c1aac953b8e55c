"""Common route extraction.

Finds the part of a trip two traces travelled together, its length, and a
reduced set of fixes describing its geometry.
"""

from .common_route_configs import CommonRouteConfig
from .extraction import CommonRouteResult, extract_common_route

__all__ = ["CommonRouteConfig", "CommonRouteResult", "extract_common_route"]
