"""Test fixtures for carpool journey validation tests.

Modules:
    - locations: named coordinates inside and outside the service region
    - trace_records: create_point, create_trace, line_specs
    - scenario_builders: reference traces and journey payloads
    - geofences: synthetic rectangular geofences
"""

from .geofences import PARIS_BOX, box_geofence
from .locations import (
    CENTRAL_PARK,
    CONCORDE,
    ETOILE,
    ETOILE_NORTH,
    HOTEL_DE_VILLE,
    LYON,
    TIMES_SQUARE,
    Location,
)
from .scenario_builders import (
    DRIVER_FIXES,
    DRIVER_LENGTH_M,
    PASSENGER_FIXES,
    REFERENCE_CONFIDENCE,
    driver_trace,
    journey_payload,
    passenger_trace,
)
from .trace_records import BASE_TIME, at, create_point, create_trace, line_specs

__all__ = [
    "BASE_TIME",
    "CENTRAL_PARK",
    "CONCORDE",
    "DRIVER_FIXES",
    "DRIVER_LENGTH_M",
    "ETOILE",
    "ETOILE_NORTH",
    "HOTEL_DE_VILLE",
    "LYON",
    "PARIS_BOX",
    "PASSENGER_FIXES",
    "REFERENCE_CONFIDENCE",
    "TIMES_SQUARE",
    "Location",
    "at",
    "box_geofence",
    "create_point",
    "create_trace",
    "driver_trace",
    "journey_payload",
    "line_specs",
    "passenger_trace",
]
