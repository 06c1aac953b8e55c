"""Journey plausibility checks."""

from .checks import check_common_distance, check_edge_timestamps, check_edges, check_in_region
from .journey_check_configs import JourneyCheckConfig

__all__ = [
    "JourneyCheckConfig",
    "check_common_distance",
    "check_edge_timestamps",
    "check_edges",
    "check_in_region",
]
