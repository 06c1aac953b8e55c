"""Identity-preserving Douglas-Peucker simplification.

Douglas-Peucker only deletes vertices and never moves the ones it keeps, so
each simplified vertex matches an input coordinate bit for bit. Identity is
recovered through an exact coordinate lookup; a miss is a bug, not a
tolerance problem.
"""

import logging
from collections.abc import Iterable

from shapely.geometry import LineString

from journey_canon.core.exceptions import SimplificationError
from journey_canon.models.point import Point
from journey_canon.models.trace import CleanedTrace, SimplifiedTrace, require_stage

logger = logging.getLogger(__name__)

# Tolerance in coordinate degrees (roughly one meter)
SIMPLIFY_EPSILON = 0.00001


def simplify(trace: CleanedTrace, epsilon: float = SIMPLIFY_EPSILON) -> SimplifiedTrace:
    """Simplify a cleaned trace, keeping the identity of retained fixes."""
    require_stage(trace, CleanedTrace)
    points = simplify_points(trace.points, epsilon)
    logger.debug("Simplified trace %s: %d -> %d fixes", trace.id, len(trace), len(points))
    return SimplifiedTrace.from_points(trace, points)


def simplify_points(points: Iterable[Point], epsilon: float = SIMPLIFY_EPSILON) -> list[Point]:
    """Simplify an ordered point sequence.

    Consecutive repeated coordinates are removed first. A sequence with a
    single distinct coordinate is returned as is.

    Raises:
        SimplificationError: If a simplified vertex has no exact match
    """
    distinct = remove_repeated(points)
    if len(distinct) < 2:  # noqa: PLR2004
        return distinct

    lookup: dict[tuple[float, float], Point] = {}
    for point in distinct:
        lookup.setdefault(point.coords, point)

    line = LineString([p.coords for p in distinct])
    simplified = line.simplify(epsilon, preserve_topology=False)

    kept = []
    for lon, lat in simplified.coords:
        point = lookup.get((lon, lat))
        if point is None:
            msg = f"Simplified vertex ({lon}, {lat}) does not match any input point"
            raise SimplificationError(msg)
        kept.append(point)
    return kept


def remove_repeated(points: Iterable[Point]) -> list[Point]:
    """Drop points repeating the coordinates of the preceding point."""
    distinct: list[Point] = []
    for point in points:
        if distinct and distinct[-1].coords == point.coords:
            continue
        distinct.append(point)
    return distinct
