"""Geodesic helper functions shared by trace processing steps."""

import math
from collections.abc import Iterable, Sequence

import numpy as np
import polars as pl


# Mean Earth radius (meters), IUGG value used for all great-circle math
EARTH_RADIUS_M = 6371008.8


def haversine_m(lon1: float, lat1: float, lon2: float, lat2: float) -> float:
    """Great-circle distance in meters between two lon/lat points."""
    theta1 = math.radians(lat1)
    theta2 = math.radians(lat2)
    delta_theta = math.radians(lat2 - lat1)
    delta_lambda = math.radians(lon2 - lon1)
    a = (
        math.sin(delta_theta / 2) ** 2
        + math.cos(theta1) * math.cos(theta2) * math.sin(delta_lambda / 2) ** 2
    )
    return EARTH_RADIUS_M * 2 * math.asin(math.sqrt(a))


def haversine_to_many(
    lon: float,
    lat: float,
    lons: np.ndarray,
    lats: np.ndarray,
) -> np.ndarray:
    """Vectorized haversine distance from one point to many points (meters)."""
    theta1 = np.radians(lat)
    theta2 = np.radians(lats)
    delta_theta = np.radians(lats - lat)
    delta_lambda = np.radians(lons - lon)
    a = (
        np.sin(delta_theta / 2) ** 2
        + np.cos(theta1) * np.cos(theta2) * np.sin(delta_lambda / 2) ** 2
    )
    return EARTH_RADIUS_M * 2 * np.arcsin(np.sqrt(np.clip(a, 0.0, 1.0)))


def haversine_length(coords: Iterable[tuple[float, float]]) -> float:
    """Cumulative haversine length of a lon/lat polyline (meters).

    A polyline with fewer than two vertices has length zero.
    """
    total = 0.0
    previous = None
    for lon, lat in coords:
        if previous is not None:
            total += haversine_m(previous[0], previous[1], lon, lat)
        previous = (lon, lat)
    return total


def bearing_deg(lon1: float, lat1: float, lon2: float, lat2: float) -> float:
    """Initial great-circle bearing from point 1 to point 2, degrees in [0, 360)."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dlmb = math.radians(lon2 - lon1)

    y = math.sin(dlmb) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(dlmb)
    return (math.degrees(math.atan2(y, x)) + 360.0) % 360.0


def angle_diff_deg(a: float, b: float) -> float:
    """Absolute difference between two bearings folded into [0, 180]."""
    return abs((a - b + 180.0) % 360.0 - 180.0)


def intermediate_point(
    lon1: float,
    lat1: float,
    lon2: float,
    lat2: float,
    fraction: float,
) -> tuple[float, float]:
    """Point at ``fraction`` of the great-circle arc from point 1 to point 2.

    Returns:
        (longitude, latitude) of the interpolated point in degrees
    """
    phi1, lmb1 = math.radians(lat1), math.radians(lon1)
    phi2, lmb2 = math.radians(lat2), math.radians(lon2)

    angular = 2 * math.asin(
        math.sqrt(
            math.sin((phi1 - phi2) / 2) ** 2
            + math.cos(phi1) * math.cos(phi2) * math.sin((lmb1 - lmb2) / 2) ** 2
        )
    )
    if angular == 0:
        return lon1, lat1

    a = math.sin((1 - fraction) * angular) / math.sin(angular)
    b = math.sin(fraction * angular) / math.sin(angular)

    x = a * math.cos(phi1) * math.cos(lmb1) + b * math.cos(phi2) * math.cos(lmb2)
    y = a * math.cos(phi1) * math.sin(lmb1) + b * math.cos(phi2) * math.sin(lmb2)
    z = a * math.sin(phi1) + b * math.sin(phi2)

    lat = math.atan2(z, math.sqrt(x**2 + y**2))
    lon = math.atan2(y, x)
    return math.degrees(lon), math.degrees(lat)


def bounding_box(coords: Sequence[tuple[float, float]]) -> dict[str, float]:
    """Bounding box of lon/lat coordinates."""
    lons = [c[0] for c in coords]
    lats = [c[1] for c in coords]
    return {
        "min_lon": min(lons),
        "min_lat": min(lats),
        "max_lon": max(lons),
        "max_lat": max(lats),
    }


def bbox_diagonal_m(coords: Sequence[tuple[float, float]]) -> float:
    """Haversine length of the bounding-box diagonal of lon/lat coordinates."""
    if not coords:
        return 0.0
    bbox = bounding_box(coords)
    return haversine_m(bbox["min_lon"], bbox["min_lat"], bbox["max_lon"], bbox["max_lat"])


def expr_haversine(
    lat1: pl.Expr,
    lon1: pl.Expr,
    lat2: pl.Expr,
    lon2: pl.Expr,
    units: str = "meters",
) -> pl.Expr:
    """Return a Polars expression for Haversine distance.

    Returns null if any coordinate is null (e.g., the first row of a
    shifted segment column).
    """
    r = EARTH_RADIUS_M

    # Check if all coordinates are non-null before calculation
    all_coords_valid = (
        lat1.is_not_null() & lon1.is_not_null() & lat2.is_not_null() & lon2.is_not_null()
    )

    # Fill nulls with dummy values to prevent trigonometry errors
    # (result will be masked out by all_coords_valid check)
    lat1_safe = lat1.fill_null(0.0)
    lon1_safe = lon1.fill_null(0.0)
    lat2_safe = lat2.fill_null(0.0)
    lon2_safe = lon2.fill_null(0.0)

    # Calculate distance
    dlat = lat2_safe.radians() - lat1_safe.radians()
    dlon = lon2_safe.radians() - lon1_safe.radians()
    a = (dlat / 2).sin().pow(2) + lat1_safe.radians().cos() * lat2_safe.radians().cos() * (
        dlon / 2
    ).sin().pow(2)

    distance = 2 * r * a.sqrt().arcsin()

    if units in ["kilometers", "km"]:
        distance = distance / 1000.0
    elif units in ["miles", "mi"]:
        distance = distance / 1609.344

    # Return null if any coordinate is null, otherwise return distance
    return pl.when(all_coords_valid).then(distance).otherwise(None)
