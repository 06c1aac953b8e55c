"""Point and trace builders.

Traces are built directly at the stage a test needs, bypassing
preprocessing, so expected values stay easy to derive by hand.
"""

from datetime import UTC, datetime, timedelta

from journey_canon.models.point import Point
from journey_canon.models.trace import CleanedTrace, Trace

BASE_TIME = datetime(2024, 1, 15, 12, 0, 0, tzinfo=UTC)


def at(seconds: float = 0.0) -> datetime:
    """Timestamp ``seconds`` after BASE_TIME."""
    return BASE_TIME + timedelta(seconds=seconds)


def create_point(
    point_id: str,
    lon: float,
    lat: float,
    seconds: float = 0.0,
    trace_id: str = "driver-trace",
) -> Point:
    return Point(
        id=point_id,
        longitude=lon,
        latitude=lat,
        timestamp=at(seconds),
        trace_id=trace_id,
    )


def create_trace(
    specs: list[tuple[str, float, float, float]],
    trace_id: str = "driver-trace",
    owner_user_id: str = "driver-1",
    stage: type[Trace] = CleanedTrace,
) -> Trace:
    """Build a trace from (id, lon, lat, seconds after BASE_TIME) tuples."""
    points = tuple(
        create_point(point_id, lon, lat, seconds, trace_id)
        for point_id, lon, lat, seconds in specs
    )
    return stage(id=trace_id, owner_user_id=owner_user_id, points=points)


def line_specs(
    prefix: str,
    start: tuple[float, float],
    step: tuple[float, float],
    count: int,
    start_seconds: float = 0.0,
    interval_seconds: float = 10.0,
) -> list[tuple[str, float, float, float]]:
    """Specs of ``count`` evenly spaced fixes along a straight line."""
    return [
        (
            f"{prefix}{i}",
            start[0] + i * step[0],
            start[1] + i * step[1],
            start_seconds + i * interval_seconds,
        )
        for i in range(count)
    ]
