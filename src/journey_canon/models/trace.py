"""Trace models typed by processing stage.

A trace moves through three stages: raw (as received), cleaned (outliers
removed, optionally densified, de-duplicated) and simplified (Douglas-Peucker). Each stage
is its own class so a step that needs simplified input declares it in its
signature, and ``require_stage`` rejects the wrong stage at API boundaries.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import TypeVar

from journey_canon.core.exceptions import TraceStageError
from journey_canon.models.point import Point, Region
from utils.helpers import bounding_box, haversine_length

TraceT = TypeVar("TraceT", bound="Trace")


@dataclass(frozen=True)
class Trace:
    """Ordered sequence of fixes belonging to one user.

    Attributes:
        id: Identifier of the GPS trace
        owner_user_id: Identifier of the user who recorded the trace
        points: Fixes sorted ascending by timestamp
    """

    id: str
    owner_user_id: str
    points: tuple[Point, ...] = field(default_factory=tuple)

    stage = "abstract"

    def __post_init__(self) -> None:
        """Freeze the point sequence in timestamp order (stable)."""
        points = tuple(sorted(self.points, key=lambda p: p.timestamp))
        object.__setattr__(self, "points", points)

    @classmethod
    def from_points(cls: type[TraceT], source: "Trace", points: Iterable[Point]) -> TraceT:
        """Build a trace of this stage reusing the identity of ``source``."""
        return cls(id=source.id, owner_user_id=source.owner_user_id, points=tuple(points))

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)

    def edges(self) -> tuple[Point, Point]:
        """First and last fixes of the trace."""
        if not self.points:
            msg = f"Trace {self.id} has no points"
            raise ValueError(msg)
        return self.points[0], self.points[-1]

    def coords(self) -> list[tuple[float, float]]:
        """Exact (longitude, latitude) pairs in trace order."""
        return [p.coords for p in self.points]

    def point_ids(self) -> list[str]:
        return [p.id for p in self.points]

    def haversine_length(self) -> float:
        """Cumulative great-circle length of the trace, in meters."""
        return haversine_length(self.coords())

    def bounding_box(self) -> dict[str, float]:
        return bounding_box(self.coords())

    def any_edge_in(self, region: Region) -> bool:
        start, end = self.edges()
        return start.is_in(region) or end.is_in(region)


@dataclass(frozen=True)
class RawTrace(Trace):
    """Trace exactly as received from the client."""

    stage = "raw"


@dataclass(frozen=True)
class CleanedTrace(Trace):
    """Trace after outlier removal, optional densification and de-duplication."""

    stage = "cleaned"


@dataclass(frozen=True)
class SimplifiedTrace(Trace):
    """Trace after Douglas-Peucker simplification."""

    stage = "simplified"


def require_stage(trace: Trace, stage: type[Trace]) -> None:
    """Raise TraceStageError unless ``trace`` is exactly at ``stage``."""
    if type(trace) is not stage:
        msg = (
            f"Trace {trace.id} is at stage '{trace.stage}', "
            f"expected '{stage.stage}'"
        )
        raise TraceStageError(msg)
