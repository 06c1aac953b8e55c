"""GeoJSON debug export of traces.

Renders traces as styled LineString features that geojson.io displays
directly. Diagnostic only; nothing here affects validation.
"""

import json
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from urllib.parse import quote

from shapely.geometry import LineString, mapping
from shapely.geometry import Point as ShapelyPoint

from journey_canon.models.point import Point
from journey_canon.models.trace import Trace

logger = logging.getLogger(__name__)

GEOJSON_IO_URL = "http://geojson.io/#data=data:application/json,"
DRIVER_COLOR = "#00a3d7"
PASSENGER_COLOR = "#ff6251"
COMMON_ROUTE_COLOR = "#4caf50"


@dataclass(frozen=True)
class FeatureStyle:
    """simplestyle stroke properties of a rendered trace."""

    color: str
    width: int = 2
    opacity: float = 1.0

    def properties(self) -> dict[str, Any]:
        return {
            "stroke": self.color,
            "stroke-width": self.width,
            "stroke-opacity": self.opacity,
        }


DEFAULT_STYLES = (
    FeatureStyle(DRIVER_COLOR),
    FeatureStyle(PASSENGER_COLOR),
    FeatureStyle(COMMON_ROUTE_COLOR, width=4, opacity=0.7),
)


def traces_to_geojson(
    traces: Sequence[Trace | Sequence[Point]],
    styles: Iterable[FeatureStyle] | None = None,
) -> dict[str, Any]:
    """Build a FeatureCollection with one styled feature per trace.

    Styles default to blue for the first trace, red for the second and green
    for the third. Traces with a single fix are rendered as points.
    """
    styles = list(styles) if styles is not None else list(DEFAULT_STYLES)
    if len(styles) < len(traces):
        msg = f"Got {len(traces)} traces but only {len(styles)} styles"
        raise ValueError(msg)

    features = []
    for trace, style in zip(traces, styles, strict=False):
        coords = [p.coords for p in trace]
        if not coords:
            continue
        geometry = LineString(coords) if len(coords) > 1 else ShapelyPoint(coords[0])
        properties = style.properties()
        if isinstance(trace, Trace):
            properties["id"] = trace.id
        features.append(
            {
                "type": "Feature",
                "geometry": mapping(geometry),
                "properties": properties,
            }
        )

    return {"type": "FeatureCollection", "features": features}


def _dumps(collection: dict[str, Any]) -> str:
    return json.dumps(collection, separators=(",", ":"))


def geojson_io_url(collection: dict[str, Any]) -> str:
    """Encode a FeatureCollection into a shareable geojson.io URL."""
    return GEOJSON_IO_URL + quote(_dumps(collection), safe="")


def write_geojson(collection: dict[str, Any], path: str | Path) -> Path:
    """Write a FeatureCollection to a .geojson file, creating parent dirs."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(_dumps(collection), encoding="utf-8")
    logger.info("Wrote debug GeoJSON to %s", path)
    return path
