"""Top-level validator configuration and YAML loading."""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from processing.common_route import CommonRouteConfig
from processing.confidence import ConfidenceConfig
from processing.geofence import Geofence
from processing.journey_checks import JourneyCheckConfig
from processing.preprocessing import PreprocessingConfig
from processing.simplification import SIMPLIFY_EPSILON

logger = logging.getLogger(__name__)


class ValidationConfig(BaseModel):
    """Configuration of a journey validator.

    Every section defaults to the reference thresholds, so an empty config
    (or an empty YAML file) is valid.

    Attributes:
        preprocessing: Raw trace cleaning parameters
        common_route: Common route extraction thresholds
        journey_checks: Edge timing and distance bounds
        confidence: Confidence score normalization
        simplify_epsilon: Douglas-Peucker tolerance in degrees for the
            reported traces
        geofence_path: Vector file of the service region. None uses the
            bundled outline of France.
        log_file: Optional log file used by the command line
    """

    preprocessing: PreprocessingConfig = Field(default_factory=PreprocessingConfig)
    common_route: CommonRouteConfig = Field(default_factory=CommonRouteConfig)
    journey_checks: JourneyCheckConfig = Field(default_factory=JourneyCheckConfig)
    confidence: ConfidenceConfig = Field(default_factory=ConfidenceConfig)

    simplify_epsilon: float = Field(
        default=SIMPLIFY_EPSILON,
        gt=0,
        description="Douglas-Peucker tolerance in coordinate degrees",
    )

    geofence_path: str | None = Field(
        default=None,
        description="Vector file of the service region, bundled France when None",
    )

    log_file: str | None = Field(
        default=None,
        description="Log file written by the command line, console only when None",
    )

    def load_geofence(self) -> Geofence:
        """Load the configured service region."""
        if self.geofence_path is None:
            return Geofence.france()
        return Geofence.from_file(self.geofence_path)

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> "ValidationConfig":
        """Load a configuration from a YAML file.

        Replaces template variables in the format {{ variable_name }} with
        the top-level string values defined in the same file.
        """
        with Path(config_path).open(encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}

        if not isinstance(config, dict):
            msg = f"Configuration in {config_path} must be a mapping, got {type(config).__name__}"
            raise ValueError(msg)  # noqa: TRY004

        logger.info("Loaded validation config from %s", config_path)
        return cls.model_validate(render_templates(config))


def render_templates(config: dict[str, Any]) -> dict[str, Any]:
    """Substitute {{ variable }} references with top-level string values."""
    variables = {key: value for key, value in config.items() if isinstance(value, str)}

    def replace_templates(obj: Any) -> Any:  # noqa: ANN401
        if isinstance(obj, str):
            for var_name, var_value in variables.items():
                obj = obj.replace(f"{{{{ {var_name} }}}}", str(var_value))
            return obj

        if isinstance(obj, dict):
            return {k: replace_templates(v) for k, v in obj.items()}

        if isinstance(obj, list):
            return [replace_templates(item) for item in obj]

        return obj

    return replace_templates(config)
