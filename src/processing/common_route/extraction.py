"""Common route extraction between two cleaned traces.

See ``common_route_configs`` for the algorithm overview. The merge key is
role independent, so swapping the traces gives the same result.
"""

import logging
from dataclasses import dataclass

import numpy as np

from journey_canon.codebook.failures import FailureReason
from journey_canon.core.exceptions import JourneyValidationError
from journey_canon.models.point import Point, merge_order
from journey_canon.models.trace import CleanedTrace, require_stage
from utils.helpers import haversine_length, haversine_to_many

from .common_route_configs import CommonRouteConfig
from .filtering import representative_points

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommonRouteResult:
    """Shared portion of two traces.

    Attributes:
        common_distance_m: Summed length of the homogeneous runs and mixed
            segments of the window, in meters
        common_start_point: First fix of the window
        common_end_point: Last fix where the traces were still close
        common_route: Representative fixes of the shared portion, simplified
        common_route_length_m: Haversine length of ``common_route``
    """

    common_distance_m: float
    common_start_point: Point
    common_end_point: Point
    common_route: tuple[Point, ...]
    common_route_length_m: float

    def common_route_ids(self) -> list[str]:
        return [p.id for p in self.common_route]


def extract_common_route(
    trace_a: CleanedTrace,
    trace_b: CleanedTrace,
    config: CommonRouteConfig | None = None,
) -> CommonRouteResult:
    """Find the portion of the trip both traces travelled together.

    Args:
        trace_a: First cleaned trace (usually the driver)
        trace_b: Second cleaned trace
        config: Extraction thresholds, defaults when None

    Returns:
        CommonRouteResult for the shared portion

    Raises:
        JourneyValidationError: NoCommonPoints if the traces never came
            within the proximity radius of each other
    """
    require_stage(trace_a, CleanedTrace)
    require_stage(trace_b, CleanedTrace)
    config = config or CommonRouteConfig()

    merged = merge_traces(trace_a, trace_b)
    window = bound_window(merged, trace_a, trace_b, config.proximity_radius_m)

    runs, mixed = classify_segments(window)
    common_distance = segments_length(runs) + segments_length(mixed)

    route = representative_points(window, config)
    route_length = haversine_length(p.coords for p in route)

    logger.debug(
        "Common route: window of %d fixes, %d runs, %d mixed segments, "
        "%.1f m common distance, %d representative fixes (%.1f m)",
        len(window),
        len(runs),
        len(mixed),
        common_distance,
        len(route),
        route_length,
    )

    return CommonRouteResult(
        common_distance_m=common_distance,
        common_start_point=window[0],
        common_end_point=window[-1],
        common_route=tuple(route),
        common_route_length_m=route_length,
    )


# Step A -----------------------------------------------------------------------
def merge_traces(trace_a: CleanedTrace, trace_b: CleanedTrace) -> list[Point]:
    """Merge the fixes of both traces in time order."""
    return sorted([*trace_a.points, *trace_b.points], key=merge_order)


def bound_window(
    merged: list[Point],
    trace_a: CleanedTrace,
    trace_b: CleanedTrace,
    radius_m: float,
) -> list[Point]:
    """Truncate the merged fixes after the last moment the traces were close.

    The last fix overall belongs to the "leading" trace. Walking back, the
    latest fix of the other trace lying strictly within ``radius_m`` of any
    fix of the leading trace ends the window.

    Raises:
        JourneyValidationError: NoCommonPoints if no such fix exists
    """
    last = merged[-1]
    leading = trace_a if last.trace_id == trace_a.id else trace_b
    lons = np.array([p.longitude for p in leading])
    lats = np.array([p.latitude for p in leading])

    for idx in range(len(merged) - 1, -1, -1):
        point = merged[idx]
        if point.trace_id == leading.id:
            continue
        distances = haversine_to_many(point.longitude, point.latitude, lons, lats)
        if bool((distances < radius_m).any()):
            return merged[: idx + 1]

    raise JourneyValidationError(FailureReason.NO_COMMON_POINTS)


# Step B -----------------------------------------------------------------------
def classify_segments(window: list[Point]) -> tuple[list[list[Point]], list[list[Point]]]:
    """Split the window into homogeneous runs and mixed segments.

    A fix extends the current run when its predecessor has the same owner,
    and starts a new run when its successor has the same owner. Otherwise it
    is part of a mixed segment, starting a new one when its two predecessors
    share an owner.

    Returns:
        (homogeneous runs, mixed segments), each in window order
    """
    runs: list[list[Point]] = []
    mixed: list[list[Point]] = []

    for idx, current in enumerate(window):
        prev = window[idx - 1] if idx > 0 else None
        prev_prev = window[idx - 2] if idx > 1 else None
        following = window[idx + 1] if idx + 1 < len(window) else None

        if prev is not None and prev.trace_id == current.trace_id:
            runs[-1].append(current)
        elif following is not None and following.trace_id == current.trace_id:
            runs.append([current])
        elif (
            prev is not None
            and prev_prev is not None
            and prev_prev.trace_id == prev.trace_id
        ) or not mixed:
            mixed.append([current])
        else:
            mixed[-1].append(current)

    return runs, mixed


# Step C -----------------------------------------------------------------------
def segments_length(segments: list[list[Point]]) -> float:
    """Summed haversine length of each segment taken as its own polyline."""
    return sum(haversine_length(p.coords for p in segment) for segment in segments)
