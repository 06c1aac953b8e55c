"""Journey validation pipeline."""

from .decoration import step
from .pipeline import JourneyValidator, ValidationState, validate_journey
from .pipeline_configs import ValidationConfig

__all__ = [
    "JourneyValidator",
    "ValidationConfig",
    "ValidationState",
    "step",
    "validate_journey",
]
