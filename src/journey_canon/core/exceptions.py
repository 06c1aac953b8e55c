"""Exceptions raised while validating carpool journeys.

Two families are kept apart so callers can tell "this journey is invalid"
from "this journey could not be evaluated":

- JourneyValidationError: domain rejection, turned into a failure outcome
- JourneyInputError, GeofenceLoadError: infrastructure problems, propagated
"""

from dataclasses import dataclass

from journey_canon.codebook.failures import FailureReason


@dataclass
class JourneyValidationError(Exception):
    """Structured domain validation error.

    Attributes:
        reason: Codebook entry describing why the journey was rejected
        detail: Optional qualifier ("driver", "start", "short", ...)
    """

    reason: FailureReason
    detail: str | None = None

    @property
    def code(self) -> str:
        """Machine-readable reason code, e.g. ``TimestampsDeltaTooBig``."""
        return self.reason.code

    @property
    def message(self) -> str:
        """Human-readable message for the rejection."""
        return self.reason.message(self.detail)

    def __str__(self) -> str:
        """Format error message."""
        return self.message


@dataclass
class JourneyInputError(Exception):
    """The raw journey payload could not be read or decoded.

    Attributes:
        message: Human-readable error description
        source: Optional file path or stream name the payload came from
    """

    message: str
    source: str | None = None

    def __str__(self) -> str:
        """Format error message."""
        if self.source:
            return f"{self.message} ({self.source})"
        return self.message


class GeofenceLoadError(RuntimeError):
    """The service-region geometry could not be loaded. Fatal at startup."""


class SimplificationError(RuntimeError):
    """A simplified vertex could not be matched back to an input point."""


class TraceStageError(TypeError):
    """A trace at the wrong processing stage was passed to a stage-typed step."""


__all__ = [
    "GeofenceLoadError",
    "JourneyInputError",
    "JourneyValidationError",
    "SimplificationError",
    "TraceStageError",
]
