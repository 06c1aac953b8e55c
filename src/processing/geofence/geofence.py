"""Service-region geofence backed by a shapely (multi)polygon.

The geometry is loaded once, prepared, and then only read. Build one
``Geofence`` at startup and pass it to the validator; tests construct
synthetic geofences the same way.
"""

import functools
import json
import logging
from collections.abc import Mapping
from importlib import resources
from pathlib import Path
from typing import Any

import geopandas as gpd
import shapely
from shapely.geometry import shape
from shapely.geometry.base import BaseGeometry

from journey_canon.core.exceptions import GeofenceLoadError
from journey_canon.models.point import Point

logger = logging.getLogger(__name__)

FRANCE_RESOURCE = "france.geojson"
_AREAL_TYPES = {"Polygon", "MultiPolygon"}


class Geofence:
    """Point-in-region predicate over a polygonal service area.

    Points on the boundary count as inside.
    """

    def __init__(self, geometry: BaseGeometry, name: str = "geofence") -> None:
        """Wrap and prepare an areal geometry.

        Raises:
            GeofenceLoadError: If the geometry is empty or not a (multi)polygon
        """
        if geometry.is_empty or geometry.geom_type not in _AREAL_TYPES:
            msg = f"Geofence '{name}' must be a non-empty Polygon or MultiPolygon"
            raise GeofenceLoadError(msg)
        shapely.prepare(geometry)
        self._geometry = geometry
        self.name = name

    @property
    def geometry(self) -> BaseGeometry:
        return self._geometry

    def is_inside(self, point: Point) -> bool:
        """Whether the fix falls within the region."""
        return bool(shapely.intersects_xy(self._geometry, point.longitude, point.latitude))

    def __repr__(self) -> str:
        minx, miny, maxx, maxy = self._geometry.bounds
        return f"Geofence({self.name!r}, bounds=({minx}, {miny}, {maxx}, {maxy}))"

    # Loaders ------------------------------------------------------------------
    @classmethod
    def from_geojson(cls, data: Mapping[str, Any], name: str = "geofence") -> "Geofence":
        """Build a geofence from a GeoJSON geometry, Feature or FeatureCollection."""
        try:
            if data.get("type") == "FeatureCollection":
                geometries = [shape(feature["geometry"]) for feature in data["features"]]
                geometry = shapely.union_all(geometries)
            else:
                geometry = shape(data)
        except (KeyError, TypeError, ValueError, shapely.errors.GEOSException) as err:
            msg = f"Invalid GeoJSON for geofence '{name}': {err}"
            raise GeofenceLoadError(msg) from err
        return cls(geometry, name=name)

    @classmethod
    def from_file(cls, path: str | Path, name: str | None = None) -> "Geofence":
        """Load a geofence from any vector file geopandas can read.

        All features are unioned into a single region and reprojected to
        EPSG:4326 when the file declares another CRS.
        """
        path = Path(path)
        if not path.exists():
            msg = f"Geofence file does not exist: {path}"
            raise GeofenceLoadError(msg)

        try:
            gdf = gpd.read_file(path)
        except Exception as err:
            msg = f"Could not read geofence file {path}: {err}"
            raise GeofenceLoadError(msg) from err

        if gdf.empty:
            msg = f"Geofence file {path} contains no features"
            raise GeofenceLoadError(msg)
        if gdf.crs is not None and gdf.crs.to_epsg() != 4326:  # noqa: PLR2004
            gdf = gdf.to_crs("EPSG:4326")

        logger.info("Loaded geofence with %d feature(s) from %s", len(gdf), path)
        return cls(gdf.geometry.union_all(), name=name or path.stem)

    @classmethod
    @functools.cache
    def france(cls) -> "Geofence":
        """Bundled outline of metropolitan France and Corsica, loaded once."""
        resource = resources.files("processing.geofence").joinpath("data", FRANCE_RESOURCE)
        try:
            data = json.loads(resource.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as err:
            msg = f"Could not load bundled geofence {FRANCE_RESOURCE}: {err}"
            raise GeofenceLoadError(msg) from err
        return cls.from_geojson(data, name="france")
