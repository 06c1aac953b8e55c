"""Plausibility checks on a journey: edge timing, service region, distance.

Each check returns None when it passes and raises JourneyValidationError
otherwise.
"""

import logging

from journey_canon.codebook.failures import DistanceBound, Edge, FailureReason
from journey_canon.core.exceptions import JourneyValidationError
from journey_canon.models.journey import Journey
from journey_canon.models.point import Region
from journey_canon.models.trace import Trace

from .journey_check_configs import JourneyCheckConfig

logger = logging.getLogger(__name__)


def check_edge_timestamps(journey: Journey[Trace], config: JourneyCheckConfig) -> None:
    """Driver and passenger must start, then end, within the allowed delta.

    Raises:
        JourneyValidationError: TimestampsDeltaTooBig("start" or "end")
    """
    driver_edges = journey.driver_trace.edges()
    passenger_edges = journey.passenger_trace.edges()

    for edge, driver_point, passenger_point in zip(
        (Edge.START, Edge.END), driver_edges, passenger_edges, strict=True
    ):
        delta_ms = driver_point.ms_delta_with(passenger_point)
        logger.debug("%s edge delta: %d ms", edge.label, delta_ms)
        if delta_ms > config.max_edge_delta_ms:
            raise JourneyValidationError(FailureReason.TIMESTAMPS_DELTA_TOO_BIG, edge.label)


def check_in_region(journey: Journey[Trace], region: Region) -> None:
    """At least one of the four edge fixes must lie within the region.

    Raises:
        JourneyValidationError: NotInFrance
    """
    if not (
        journey.driver_trace.any_edge_in(region) or journey.passenger_trace.any_edge_in(region)
    ):
        raise JourneyValidationError(FailureReason.NOT_IN_FRANCE)


def check_edges(
    journey: Journey[Trace],
    region: Region,
    config: JourneyCheckConfig | None = None,
) -> None:
    """Run the edge timing check, then the region check."""
    config = config or JourneyCheckConfig()
    check_edge_timestamps(journey, config)
    check_in_region(journey, region)


def check_common_distance(distance_m: float, config: JourneyCheckConfig | None = None) -> None:
    """The common distance must lie within the configured bounds, inclusive.

    Raises:
        JourneyValidationError: InvalidDistance("short" or "long")
    """
    config = config or JourneyCheckConfig()
    if distance_m < config.min_distance_m:
        raise JourneyValidationError(FailureReason.INVALID_DISTANCE, DistanceBound.SHORT.label)
    if distance_m > config.max_distance_m:
        raise JourneyValidationError(FailureReason.INVALID_DISTANCE, DistanceBound.LONG.label)
