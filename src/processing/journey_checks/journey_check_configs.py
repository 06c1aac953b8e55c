"""Configuration model for journey plausibility checks."""

from pydantic import BaseModel, Field, model_validator

MAX_EDGE_DELTA_MS = 90_000
MIN_DISTANCE_M = 1_000.0
MAX_DISTANCE_M = 80_000.0


class JourneyCheckConfig(BaseModel):
    """Configuration for edge and distance checks.

    Attributes:
        max_edge_delta_ms: Maximum time difference between the driver and
            passenger start (and end) fixes, in milliseconds
        min_distance_m: Shortest plausible common distance, in meters
        max_distance_m: Longest plausible common distance, in meters
    """

    max_edge_delta_ms: int = Field(
        default=MAX_EDGE_DELTA_MS,
        ge=0,
        description="Maximum start/end timestamp difference in milliseconds",
    )

    min_distance_m: float = Field(
        default=MIN_DISTANCE_M,
        ge=0,
        description="Common distances below this many meters are too short",
    )

    max_distance_m: float = Field(
        default=MAX_DISTANCE_M,
        gt=0,
        description="Common distances above this many meters are too long",
    )

    @model_validator(mode="after")
    def validate_distance_bounds(self) -> "JourneyCheckConfig":
        """Ensure the distance bounds form a non-empty interval."""
        if self.min_distance_m > self.max_distance_m:
            msg = (
                f"min_distance_m ({self.min_distance_m}) must not exceed "
                f"max_distance_m ({self.max_distance_m})"
            )
            raise ValueError(msg)
        return self
