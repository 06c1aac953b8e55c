"""Centralized location definitions for test fixtures.

Coordinates are (longitude, latitude) in WGS84. Paris locations fall inside
the bundled France geofence; the New York ones fall outside it.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Location:
    """A named location.

    Attributes:
        lon: Longitude (WGS84)
        lat: Latitude (WGS84)
    """

    lon: float
    lat: float

    @property
    def coords(self) -> tuple[float, float]:
        return (self.lon, self.lat)


# Reference journey locations in Paris
HOTEL_DE_VILLE = Location(lon=2.3522, lat=48.8566)
CONCORDE = Location(lon=2.3333, lat=48.8606)
ETOILE = Location(lon=2.295, lat=48.8738)
ETOILE_NORTH = Location(lon=2.296, lat=48.875)

# Outside the service region
TIMES_SQUARE = Location(lon=-73.9855, lat=40.7580)
CENTRAL_PARK = Location(lon=-73.9654, lat=40.7829)

# Far from Paris but inside France
LYON = Location(lon=4.8357, lat=45.7640)
