"""Module for reading journeys, writing outcomes and debug exports."""

from .geojson_export import geojson_io_url, traces_to_geojson, write_geojson
from .read_write import (
    journey_input_from_mapping,
    load_journey_input,
    parse_journey_input,
    write_outcome,
)

__all__ = [
    "geojson_io_url",
    "journey_input_from_mapping",
    "load_journey_input",
    "parse_journey_input",
    "traces_to_geojson",
    "write_geojson",
    "write_outcome",
]
