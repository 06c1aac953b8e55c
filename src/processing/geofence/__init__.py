"""Service-region geofence used by the journey edge check."""

from .geofence import Geofence

__all__ = ["Geofence"]
