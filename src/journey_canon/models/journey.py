"""Journey input payload models and journey construction.

The payload models mirror the JSON produced by the ride-matching platform
(camelCase keys). Only the fields the validator needs are required; optional
sensor fields are accepted and ignored.
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from journey_canon.codebook.failures import FailureReason, TraceRole
from journey_canon.core.exceptions import JourneyValidationError
from journey_canon.models.point import Point
from journey_canon.models.trace import RawTrace, Trace

logger = logging.getLogger(__name__)

TraceT = TypeVar("TraceT", bound=Trace)

MIN_TRACE_POINTS = 2


# Payload Models ---------------------------------------------------------------
class _PayloadModel(BaseModel):
    """Common configuration for camelCase payload models."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


def _as_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class PointInput(_PayloadModel):
    """A GPS fix as received from the client."""

    id: str
    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)
    timestamp: datetime
    gps_trace_id: str | None = None
    accuracy: float | None = None
    altitude: float | None = None
    altitude_accuracy: float | None = None
    heading: float | None = None
    speed: float | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("timestamp")
    @classmethod
    def normalize_timestamp(cls, value: datetime) -> datetime:
        """Store every fix timestamp as an aware UTC datetime."""
        return _as_utc(value)


class TraceInput(_PayloadModel):
    """A GPS trace as received from the client."""

    id: str
    user_id: str
    points: list[PointInput] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_raw_trace(self) -> RawTrace:
        """Convert the payload trace into a raw trace owned by this trace id."""
        return RawTrace(
            id=self.id,
            owner_user_id=self.user_id,
            points=tuple(
                Point(
                    id=p.id,
                    longitude=p.longitude,
                    latitude=p.latitude,
                    timestamp=p.timestamp,
                    trace_id=self.id,
                )
                for p in self.points
            ),
        )


class JourneyInput(_PayloadModel):
    """A journey submitted for validation."""

    start_time: datetime | None = None
    end_time: datetime | None = None
    driver_id: str | None = None
    passenger_id: str | None = None
    gps_trace: list[TraceInput] = Field(default_factory=list)

    @field_validator("start_time", "end_time")
    @classmethod
    def normalize_times(cls, value: datetime | None) -> datetime | None:
        return _as_utc(value)


# Journey ----------------------------------------------------------------------
@dataclass(frozen=True)
class Journey(Generic[TraceT]):
    """Driver and passenger traces of one claimed carpool trip."""

    driver_trace: TraceT
    passenger_trace: TraceT

    @classmethod
    def from_input(cls, journey: JourneyInput) -> "Journey[RawTrace]":
        """Check the payload invariants and build the raw journey.

        Checks run in a fixed order and the first failure is raised.

        Raises:
            JourneyValidationError: MissingStartTime, MissingEndTime,
                MissingDriver, MissingPassenger, InvalidPassenger,
                MissingTrace(role) or EmptyTrace(role)
        """
        if journey.start_time is None:
            raise JourneyValidationError(FailureReason.MISSING_START_TIME)
        if journey.end_time is None:
            raise JourneyValidationError(FailureReason.MISSING_END_TIME)
        if journey.driver_id is None:
            raise JourneyValidationError(FailureReason.MISSING_DRIVER)
        if journey.passenger_id is None:
            raise JourneyValidationError(FailureReason.MISSING_PASSENGER)
        if journey.driver_id == journey.passenger_id:
            raise JourneyValidationError(FailureReason.INVALID_PASSENGER)

        driver_input = _find_trace(journey, journey.driver_id, TraceRole.DRIVER)
        passenger_input = _find_trace(journey, journey.passenger_id, TraceRole.PASSENGER)

        for trace_input, role in (
            (driver_input, TraceRole.DRIVER),
            (passenger_input, TraceRole.PASSENGER),
        ):
            if len(trace_input.points) < MIN_TRACE_POINTS:
                raise JourneyValidationError(FailureReason.EMPTY_TRACE, role.label)

        logger.debug(
            "Journey built: driver trace %s (%d points), passenger trace %s (%d points)",
            driver_input.id,
            len(driver_input.points),
            passenger_input.id,
            len(passenger_input.points),
        )

        return Journey(
            driver_trace=driver_input.to_raw_trace(),
            passenger_trace=passenger_input.to_raw_trace(),
        )


def _find_trace(journey: JourneyInput, user_id: str, role: TraceRole) -> TraceInput:
    for trace in journey.gps_trace:
        if trace.user_id == user_id:
            return trace
    raise JourneyValidationError(FailureReason.MISSING_TRACE, role.label)
