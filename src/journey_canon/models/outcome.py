"""Validation outcome models.

An outcome is built once per validation call and never mutated. Serialize
with ``to_json_dict`` to get the camelCase document consumers expect.
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from journey_canon.codebook.failures import FailureReason
from journey_canon.core.exceptions import JourneyValidationError
from journey_canon.models.point import Point
from journey_canon.models.trace import SimplifiedTrace


class _OutcomeModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_json_dict(self) -> dict[str, Any]:
        """Dump with camelCase keys, ISO timestamps and without null fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class PointOutput(_OutcomeModel):
    """A fix reported back to the caller."""

    id: str
    timestamp: datetime
    latitude: float
    longitude: float

    @classmethod
    def from_point(cls, point: Point) -> "PointOutput":
        return cls(
            id=point.id,
            timestamp=point.timestamp,
            latitude=point.latitude,
            longitude=point.longitude,
        )


class TraceOutput(_OutcomeModel):
    """A simplified trace reported as the ids of its retained fixes."""

    id: str
    points: list[str]

    @classmethod
    def from_trace(cls, trace: SimplifiedTrace) -> "TraceOutput":
        return cls(id=trace.id, points=trace.point_ids())


class TracesOutput(_OutcomeModel):
    driver_trace: TraceOutput
    passenger_trace: TraceOutput


class ValidationSuccess(_OutcomeModel):
    """The two traces describe a plausible shared trip.

    Attributes:
        average_confidence: Fréchet-based similarity score in [0, 1]
        common_distance: Length of the shared portion, in meters
        common_start_point: First fix of the shared portion
        common_end_point: Last fix where the traces were still close
        common_route: Ids of the representative fixes of the shared portion
        common_route_length: Length of the representative path, in meters
        distance_driver: Length of the cleaned driver trace, in meters
        distance_passenger: Length of the cleaned passenger trace, in meters
        traces: Simplified driver and passenger traces
    """

    success: Literal[True] = True
    average_confidence: float = Field(ge=0.0, le=1.0)
    common_distance: float = Field(ge=0.0)
    common_start_point: PointOutput
    common_end_point: PointOutput
    common_route: list[str] = Field(default_factory=list)
    common_route_length: float | None = None
    distance_driver: float | None = None
    distance_passenger: float | None = None
    traces: TracesOutput


class ValidationFailure(_OutcomeModel):
    """The journey was rejected.

    Attributes:
        reason_code: Machine-readable code, e.g. ``NotInFrance``
        cancel_reason: Human-readable message
        detail: Qualifier of the reason, e.g. ``driver`` or ``start``
    """

    success: Literal[False] = False
    reason_code: str
    cancel_reason: str
    detail: str | None = None

    @field_validator("reason_code")
    @classmethod
    def _known_code(cls, value: str) -> str:
        if FailureReason.from_code(value) is None:
            msg = f"Unknown failure reason code: {value}"
            raise ValueError(msg)
        return value

    @classmethod
    def from_error(cls, error: JourneyValidationError) -> "ValidationFailure":
        return cls(reason_code=error.code, cancel_reason=error.message, detail=error.detail)


ValidationOutcome = ValidationSuccess | ValidationFailure
