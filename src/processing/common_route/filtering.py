"""Representative point filtering of the common route window.

Reduces the window to the fixes marking direction changes, then simplifies
the result. Used for the common route geometry only; the common distance is
measured on the unfiltered window.
"""

import logging
from collections import Counter

from journey_canon.models.point import Point, merge_order
from processing.simplification import simplify_points
from utils.helpers import angle_diff_deg, bearing_deg, haversine_m

from .common_route_configs import CommonRouteConfig

logger = logging.getLogger(__name__)


def representative_points(window: list[Point], config: CommonRouteConfig) -> list[Point]:
    """Filter and simplify the window into the common route geometry."""
    turns = detect_turns(window, config)
    consolidated = consolidate_windows(turns, config)
    rechecked = recheck_pairwise(consolidated, config)

    logger.debug(
        "Representative filtering: %d -> %d -> %d -> %d fixes",
        len(window),
        len(turns),
        len(consolidated),
        len(rechecked),
    )
    return simplify_points(sorted(rechecked, key=merge_order))


def turn_angle(prev: Point, point: Point, following: Point) -> float | None:
    """Heading change at ``point`` in degrees, in [0, 180].

    None when ``point`` coincides with one of its neighbours, since a
    heading is undefined over a zero-length hop.
    """
    if point.coords in (prev.coords, following.coords):
        return None
    heading_in = bearing_deg(prev.longitude, prev.latitude, point.longitude, point.latitude)
    heading_out = bearing_deg(
        point.longitude, point.latitude, following.longitude, following.latitude
    )
    return angle_diff_deg(heading_in, heading_out)


def is_turn(prev: Point, point: Point, following: Point, threshold_deg: float) -> bool:
    angle = turn_angle(prev, point, following)
    return angle is not None and angle >= threshold_deg


# Pass 1 -----------------------------------------------------------------------
def detect_turns(window: list[Point], config: CommonRouteConfig) -> list[Point]:
    """Keep the edges, interior fixes of one owner, and turns.

    When a fix's predecessor belongs to the other trace but its successor
    does not, and predecessor and successor are less than ``short_hop_m``
    apart, the fix is a brief ownership flicker: the successor replaces it
    and is skipped.
    """
    if len(window) <= 2:  # noqa: PLR2004
        return list(window)

    kept = [window[0]]
    last_idx = len(window) - 1
    idx = 1
    while idx < last_idx:
        prev, point, following = window[idx - 1], window[idx], window[idx + 1]

        if prev.trace_id == point.trace_id == following.trace_id:
            kept.append(point)
        elif (
            prev.trace_id != point.trace_id
            and prev.trace_id == following.trace_id
            and haversine_m(prev.longitude, prev.latitude, following.longitude, following.latitude)
            < config.short_hop_m
        ):
            kept.append(following)
            idx += 2
            continue
        elif is_turn(prev, point, following, config.turn_angle_deg):
            kept.append(point)
        idx += 1

    if kept[-1] is not window[last_idx]:
        kept.append(window[last_idx])
    return kept


# Pass 2 -----------------------------------------------------------------------
def consolidate_windows(points: list[Point], config: CommonRouteConfig) -> list[Point]:
    """Slide a fixed-size window and keep spans and dominating owners.

    The first window always keeps its first fix and the last window its last
    fix. A window spanning more than ``window_span_m`` end to end keeps its
    first fix; otherwise, if one owner has at least ``dominance_count`` fixes
    in it, all of them are kept.
    """
    size = config.window_size
    if len(points) <= size:
        return list(points)

    last_start = len(points) - size
    keep: set[int] = set()
    for start in range(last_start + 1):
        window = points[start : start + size]
        if start == 0:
            keep.add(start)
        if start == last_start:
            keep.add(start + size - 1)

        first, last = window[0], window[-1]
        span = haversine_m(first.longitude, first.latitude, last.longitude, last.latitude)
        if span > config.window_span_m:
            keep.add(start)
            continue

        owner, count = Counter(p.trace_id for p in window).most_common(1)[0]
        if count >= config.dominance_count:
            keep.update(start + i for i, p in enumerate(window) if p.trace_id == owner)

    return [points[i] for i in sorted(keep)]


# Pass 3 -----------------------------------------------------------------------
def recheck_pairwise(points: list[Point], config: CommonRouteConfig) -> list[Point]:
    """Drop candidates that do not turn relative to the last kept fix."""
    if len(points) <= 2:  # noqa: PLR2004
        return list(points)

    kept = [points[0]]
    for idx in range(1, len(points) - 1):
        if is_turn(kept[-1], points[idx], points[idx + 1], config.turn_angle_deg):
            kept.append(points[idx])
    kept.append(points[-1])
    return kept
