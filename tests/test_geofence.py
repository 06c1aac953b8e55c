"""Tests for the service-region geofence."""

import json

import geopandas as gpd
import pytest
from shapely.geometry import Point as ShapelyPoint
from shapely.geometry import box, mapping

from journey_canon.core.exceptions import GeofenceLoadError
from processing.geofence import Geofence
from tests.fixtures import (
    CENTRAL_PARK,
    HOTEL_DE_VILLE,
    LYON,
    PARIS_BOX,
    TIMES_SQUARE,
    box_geofence,
    create_point,
)


def _point(lon: float, lat: float):
    return create_point("p", lon, lat)


def _feature(geometry) -> dict:
    return {"type": "Feature", "properties": {}, "geometry": mapping(geometry)}


class TestGeofence:
    """Test the point-in-region predicate."""

    def test_inside_and_outside(self):
        """Test fixes inside and outside a box."""
        geofence = box_geofence()
        assert geofence.is_inside(_point(*HOTEL_DE_VILLE.coords))
        assert not geofence.is_inside(_point(*TIMES_SQUARE.coords))

    def test_boundary_counts_as_inside(self):
        """Test fixes on the boundary are inside."""
        geofence = box_geofence()
        min_lon, min_lat, _, _ = PARIS_BOX
        assert geofence.is_inside(_point(min_lon, min_lat))
        assert geofence.is_inside(_point(min_lon, 48.9))

    def test_rejects_non_areal_geometry(self):
        """Test points and empty polygons are not regions."""
        with pytest.raises(GeofenceLoadError):
            Geofence(ShapelyPoint(2.0, 48.0))
        with pytest.raises(GeofenceLoadError):
            Geofence(box(0, 0, 1, 1).buffer(-1))

    def test_repr(self):
        """Test the repr shows the name and bounds."""
        assert repr(box_geofence()).startswith("Geofence('test-box', bounds=(2.2, 48.8")


class TestFromGeojson:
    """Test GeoJSON loading."""

    def test_geometry(self):
        """Test a bare geometry object."""
        geofence = Geofence.from_geojson(mapping(box(*PARIS_BOX)))
        assert geofence.is_inside(_point(*HOTEL_DE_VILLE.coords))

    def test_feature(self):
        """Test a single Feature."""
        geofence = Geofence.from_geojson(_feature(box(*PARIS_BOX)))
        assert geofence.is_inside(_point(*HOTEL_DE_VILLE.coords))

    def test_feature_collection_union(self):
        """Test every feature of a collection is part of the region."""
        collection = {
            "type": "FeatureCollection",
            "features": [
                _feature(box(*PARIS_BOX)),
                _feature(box(LYON.lon - 0.1, LYON.lat - 0.1, LYON.lon + 0.1, LYON.lat + 0.1)),
            ],
        }
        geofence = Geofence.from_geojson(collection, name="two-cities")
        assert geofence.is_inside(_point(*HOTEL_DE_VILLE.coords))
        assert geofence.is_inside(_point(*LYON.coords))
        assert not geofence.is_inside(_point(3.5, 47.5))
        assert geofence.name == "two-cities"

    def test_point_geometry_rejected(self):
        """Test a Point geometry is not a region."""
        with pytest.raises(GeofenceLoadError, match="Polygon or MultiPolygon"):
            Geofence.from_geojson(_feature(ShapelyPoint(2.0, 48.0)))

    def test_malformed(self):
        """Test malformed GeoJSON is reported as a load error."""
        with pytest.raises(GeofenceLoadError, match="Invalid GeoJSON"):
            Geofence.from_geojson({"type": "FeatureCollection"})


class TestFrance:
    """Test the bundled France outline."""

    def test_membership(self):
        """Test French cities are inside and New York is not."""
        france = Geofence.france()
        assert france.is_inside(_point(*HOTEL_DE_VILLE.coords))
        assert france.is_inside(_point(*LYON.coords))
        assert not france.is_inside(_point(*CENTRAL_PARK.coords))
        assert not france.is_inside(_point(0.0, 0.0))

    def test_loaded_once(self):
        """Test the bundled outline is cached."""
        assert Geofence.france() is Geofence.france()


class TestFromFile:
    """Test vector file loading through geopandas."""

    def test_geojson_file(self, tmp_path):
        """Test a GeoJSON file on disk."""
        path = tmp_path / "paris.geojson"
        path.write_text(
            json.dumps({"type": "FeatureCollection", "features": [_feature(box(*PARIS_BOX))]}),
            encoding="utf-8",
        )
        geofence = Geofence.from_file(path)
        assert geofence.name == "paris"
        assert geofence.is_inside(_point(*HOTEL_DE_VILLE.coords))
        assert not geofence.is_inside(_point(*LYON.coords))

    def test_reprojected(self, tmp_path):
        """Test files in another CRS are reprojected to WGS84."""
        gdf = gpd.GeoDataFrame(geometry=[box(*PARIS_BOX)], crs="EPSG:4326").to_crs("EPSG:3857")
        path = tmp_path / "paris.gpkg"
        gdf.to_file(path, driver="GPKG")

        geofence = Geofence.from_file(path, name="paris-3857")
        assert geofence.is_inside(_point(*HOTEL_DE_VILLE.coords))
        assert not geofence.is_inside(_point(*LYON.coords))

    def test_missing_file(self, tmp_path):
        """Test a missing file is a load error."""
        with pytest.raises(GeofenceLoadError, match="does not exist"):
            Geofence.from_file(tmp_path / "missing.geojson")

    def test_unreadable_file(self, tmp_path):
        """Test a file that is not a vector dataset is a load error."""
        path = tmp_path / "broken.geojson"
        path.write_text("not geojson", encoding="utf-8")
        with pytest.raises(GeofenceLoadError, match="Could not read"):
            Geofence.from_file(path)
