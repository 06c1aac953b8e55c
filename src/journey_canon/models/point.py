"""GPS fix model shared by every trace processing step."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Protocol


class Region(Protocol):
    """Anything that can answer a point-in-region question."""

    def is_inside(self, point: "Point") -> bool:  # pragma: no cover - protocol
        """Return True if the point lies within the region."""
        ...


@dataclass(frozen=True)
class Point:
    """A single GPS fix.

    Attributes:
        id: Identifier of the fix, preserved through every transformation
        longitude: WGS84 longitude (x)
        latitude: WGS84 latitude (y)
        timestamp: UTC instant of the fix
        trace_id: Identifier of the trace owning the fix
        interpolated: True for points inserted by densification
    """

    id: str
    longitude: float
    latitude: float
    timestamp: datetime
    trace_id: str
    interpolated: bool = False

    @property
    def coords(self) -> tuple[float, float]:
        """Exact (longitude, latitude) pair of the fix."""
        return (self.longitude, self.latitude)

    def ms_delta_with(self, other: "Point") -> int:
        """Absolute time difference with another fix, in whole milliseconds."""
        return abs(self.timestamp - other.timestamp) // timedelta(milliseconds=1)

    def is_in(self, region: Region) -> bool:
        """Whether the fix falls within the given region."""
        return region.is_inside(self)


def merge_order(point: Point) -> tuple[datetime, str, str]:
    """Sort key used whenever points of two traces are merged in time order."""
    return (point.timestamp, point.trace_id, point.id)
