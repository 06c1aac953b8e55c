"""Processing steps for carpool journey validation.

This module imports and exposes the step functions for easy access.
"""

from .common_route import CommonRouteConfig, CommonRouteResult, extract_common_route
from .confidence import ConfidenceConfig, confidence_score
from .geofence import Geofence
from .journey_checks import JourneyCheckConfig, check_common_distance, check_edges
from .preprocessing import PreprocessingConfig, preprocess
from .read_write import load_journey_input, write_outcome
from .simplification import simplify

__all__ = [
    "CommonRouteConfig",
    "CommonRouteResult",
    "ConfidenceConfig",
    "Geofence",
    "JourneyCheckConfig",
    "PreprocessingConfig",
    "check_common_distance",
    "check_edges",
    "confidence_score",
    "extract_common_route",
    "load_journey_input",
    "preprocess",
    "simplify",
    "write_outcome",
]
