"""GeoPoint - The fundamental geometry atom for race course planning.

A GeoPoint is an immutable (lat, lng) position in decimal degrees.
Every operation returns a new point.

Used by:
- Mark (position property)
- Start line centre, course centre, generated marks
- Angle-fit optimizer and course geometry helpers
"""

from dataclasses import dataclass
from typing import Literal

import numpy as np

from racecourse_planner.core.geo_calculator import GeoCalculator


@dataclass(frozen=True)
class GeoPoint:
    """A position on the Earth's surface.

    Attributes:
        lat: Latitude in decimal degrees
        lng: Longitude in decimal degrees

    Example:
        start = GeoPoint(lat=50.80, lng=-1.30)
        windward = start.moved(bearing_deg=225.0, distance_m=800.0)
    """

    lat: float
    lng: float

    def __post_init__(self) -> None:
        """Reject NaN and infinite coordinates at the boundary."""
        if not (np.isfinite(self.lat) and np.isfinite(self.lng)):
            raise ValueError(f"GeoPoint requires finite coordinates, got ({self.lat}, {self.lng})")

    @property
    def lat_lng(self) -> tuple[float, float]:
        return (self.lat, self.lng)

    def distance_to(self, other: "GeoPoint") -> float:
        """Haversine distance to another point in meters."""
        return GeoCalculator.haversine_distance_m(self.lat, self.lng, other.lat, other.lng)

    def distance_nm_to(self, other: "GeoPoint") -> float:
        """Haversine distance to another point in nautical miles."""
        return GeoCalculator.haversine_distance_nm(self.lat, self.lng, other.lat, other.lng)

    def bearing_to(self, other: "GeoPoint") -> float:
        """Initial bearing to another point (0-360)."""
        return GeoCalculator.initial_bearing_deg(self.lat, self.lng, other.lat, other.lng)

    def moved(self, bearing_deg: float, distance_m: float) -> "GeoPoint":
        """Point reached by travelling distance_m along bearing_deg."""
        lat, lng = GeoCalculator.destination(self.lat, self.lng, bearing_deg, distance_m)
        return GeoPoint(lat=lat, lng=lng)

    def __repr__(self) -> str:
        return f"GeoPoint(lat={self.lat:.6f}, lng={self.lng:.6f})"


def bearing_between(a: GeoPoint, b: GeoPoint) -> float:
    """Initial great-circle bearing from a to b, in [0, 360)."""
    return a.bearing_to(b)


def distance_between(a: GeoPoint, b: GeoPoint, unit: Literal["m", "nm"] = "m") -> float:
    """Great-circle distance from a to b in meters or nautical miles."""
    if unit == "nm":
        return a.distance_nm_to(b)
    return a.distance_to(b)


def destination_point(origin: GeoPoint, bearing_deg: float, distance_m: float) -> GeoPoint:
    """Forward geodesic: the point distance_m from origin along bearing_deg."""
    return origin.moved(bearing_deg=bearing_deg, distance_m=distance_m)
