"""Journey validation pipeline.

``JourneyValidator`` runs the validation steps in a fixed order and stops at
the first rejection:

    build journey -> preprocess -> check edges -> extract common route
    -> check distance -> densify -> simplify -> score

The common route is extracted from the fixes as recorded. Densified
traces only feed simplification and scoring.

Rejections become ``ValidationFailure`` values. Infrastructure problems
(unreadable payload, geofence that cannot be loaded) are raised.
"""

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any

from journey_canon.codebook.failures import TraceRole
from journey_canon.core.exceptions import JourneyInputError, JourneyValidationError
from journey_canon.models.journey import Journey, JourneyInput
from journey_canon.models.outcome import (
    PointOutput,
    TraceOutput,
    TracesOutput,
    ValidationFailure,
    ValidationOutcome,
    ValidationSuccess,
)
from journey_canon.models.point import Point, Region
from journey_canon.models.trace import CleanedTrace, RawTrace, SimplifiedTrace
from pipeline.decoration import step
from pipeline.pipeline_configs import ValidationConfig
from processing.common_route import CommonRouteResult, extract_common_route
from processing.confidence import confidence_score
from processing.journey_checks import check_common_distance, check_edges
from processing.preprocessing import densify_trace, preprocess
from processing.read_write import journey_input_from_mapping
from processing.simplification import simplify

logger = logging.getLogger(__name__)


class ValidationState(Enum):
    """Last state reached by a validation run."""

    START = "start"
    EDGES_CHECKED = "edges_checked"
    COMMON_ROUTE_EXTRACTED = "common_route_extracted"
    DISTANCE_CHECKED = "distance_checked"
    SCORED = "scored"
    SUCCESS = "success"
    FAILURE = "failure"


class JourneyValidator:
    """Validate carpool journeys against an injected service region.

    A validator holds the last run's state and traces, so use one instance
    per thread. The geofence itself is read-only and can be shared.
    """

    state: ValidationState
    debug_traces: tuple[tuple[Point, ...], ...]

    def __init__(
        self,
        geofence: Region | None = None,
        config: ValidationConfig | None = None,
    ) -> None:
        """Initialize the validator.

        Args:
            geofence: Service region. Defaults to the region named by the
                config (bundled France outline when unset).
            config: Validation thresholds. Defaults to reference values.
        """
        self.config = config or ValidationConfig()
        self.geofence = geofence if geofence is not None else self.config.load_geofence()
        self.state = ValidationState.START
        self.debug_traces = ()

    def validate(self, raw_input: JourneyInput | Mapping[str, Any]) -> ValidationOutcome:
        """Validate one journey.

        Args:
            raw_input: Decoded journey payload, as a model or a JSON mapping

        Returns:
            ValidationSuccess, or ValidationFailure naming the first failed check

        Raises:
            JourneyInputError: If the payload does not match the journey schema
        """
        self.state = ValidationState.START
        self.debug_traces = ()
        journey_input = self._decode(raw_input)

        try:
            outcome = self._run(journey_input)
        except JourneyValidationError as err:
            logger.info("Journey rejected in state %s: %s", self.state.value, err)
            self.state = ValidationState.FAILURE
            return ValidationFailure.from_error(err)

        self.state = ValidationState.SUCCESS
        logger.info(
            "Journey validated: confidence %.3f over %.0f m",
            outcome.average_confidence,
            outcome.common_distance,
        )
        return outcome

    def _run(self, journey_input: JourneyInput) -> ValidationSuccess:
        raw = self._build_journey(journey_input)
        journey = self._preprocess(raw)
        self.debug_traces = (journey.driver_trace.points, journey.passenger_trace.points)

        self._check_edges(journey)
        self.state = ValidationState.EDGES_CHECKED

        common = self._extract_common_route(journey)
        self.state = ValidationState.COMMON_ROUTE_EXTRACTED

        self._check_distance(common)
        self.state = ValidationState.DISTANCE_CHECKED

        simplified = self._simplify(self._densify(journey))
        self.debug_traces = (
            simplified.driver_trace.points,
            simplified.passenger_trace.points,
            common.common_route,
        )
        confidence = self._score(simplified)
        self.state = ValidationState.SCORED

        return ValidationSuccess(
            average_confidence=confidence,
            common_distance=common.common_distance_m,
            common_start_point=PointOutput.from_point(common.common_start_point),
            common_end_point=PointOutput.from_point(common.common_end_point),
            common_route=common.common_route_ids(),
            common_route_length=common.common_route_length_m,
            distance_driver=journey.driver_trace.haversine_length(),
            distance_passenger=journey.passenger_trace.haversine_length(),
            traces=TracesOutput(
                driver_trace=TraceOutput.from_trace(simplified.driver_trace),
                passenger_trace=TraceOutput.from_trace(simplified.passenger_trace),
            ),
        )

    @staticmethod
    def _decode(raw_input: JourneyInput | Mapping[str, Any]) -> JourneyInput:
        if isinstance(raw_input, JourneyInput):
            return raw_input
        if isinstance(raw_input, Mapping):
            return journey_input_from_mapping(dict(raw_input))
        msg = f"Unsupported journey input type: {type(raw_input).__name__}"
        raise JourneyInputError(msg)

    # Steps --------------------------------------------------------------------
    @step()
    def _build_journey(self, journey_input: JourneyInput) -> Journey[RawTrace]:
        return Journey.from_input(journey_input)

    @step()
    def _preprocess(self, journey: Journey[RawTrace]) -> Journey[CleanedTrace]:
        config = self.config.preprocessing
        return Journey(
            driver_trace=preprocess(
                journey.driver_trace, config, TraceRole.DRIVER, densified=False
            ),
            passenger_trace=preprocess(
                journey.passenger_trace, config, TraceRole.PASSENGER, densified=False
            ),
        )

    @step()
    def _check_edges(self, journey: Journey[CleanedTrace]) -> None:
        check_edges(journey, self.geofence, self.config.journey_checks)

    @step()
    def _extract_common_route(self, journey: Journey[CleanedTrace]) -> CommonRouteResult:
        return extract_common_route(
            journey.driver_trace, journey.passenger_trace, self.config.common_route
        )

    @step()
    def _check_distance(self, common: CommonRouteResult) -> None:
        check_common_distance(common.common_distance_m, self.config.journey_checks)

    @step()
    def _densify(self, journey: Journey[CleanedTrace]) -> Journey[CleanedTrace]:
        spacing_m = self.config.preprocessing.densify_spacing_m
        return Journey(
            driver_trace=densify_trace(journey.driver_trace, spacing_m),
            passenger_trace=densify_trace(journey.passenger_trace, spacing_m),
        )

    @step()
    def _simplify(self, journey: Journey[CleanedTrace]) -> Journey[SimplifiedTrace]:
        epsilon = self.config.simplify_epsilon
        return Journey(
            driver_trace=simplify(journey.driver_trace, epsilon),
            passenger_trace=simplify(journey.passenger_trace, epsilon),
        )

    @step()
    def _score(self, journey: Journey[SimplifiedTrace]) -> float:
        return confidence_score(
            journey.driver_trace, journey.passenger_trace, self.config.confidence
        )


def validate_journey(
    raw_input: JourneyInput | Mapping[str, Any],
    geofence: Region | None = None,
    config: ValidationConfig | None = None,
) -> ValidationOutcome:
    """Validate one journey with a fresh validator.

    Args:
        raw_input: Decoded journey payload, as a model or a JSON mapping
        geofence: Service region, bundled France outline when None
        config: Validation thresholds, reference values when None

    Returns:
        ValidationSuccess or ValidationFailure

    Raises:
        JourneyInputError: If the payload does not match the journey schema
        GeofenceLoadError: If the configured geofence cannot be loaded
    """
    return JourneyValidator(geofence=geofence, config=config).validate(raw_input)
