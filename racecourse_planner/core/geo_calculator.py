"""Geodesic calculations on Earth's surface.

Provides geographic helper functions for race course planning:
- Distance calculation (Haversine formula), in meters or nautical miles
- Bearing calculation (initial heading between points)
- Destination calculation (endpoint from start, bearing, distance)

All calculations use a spherical Earth approximation (R = 6,371 km,
or 3,440.065 NM for course statistics; 1 NM = 1852 m).
"""

from math import asin, atan2, cos, degrees, radians, sin, sqrt

from racecourse_planner.constants import GeoConfig

EARTH_RADIUS_M = GeoConfig.EARTH_RADIUS_M
EARTH_RADIUS_NM = GeoConfig.EARTH_RADIUS_NM


class GeoCalculator:
    """Static methods for geodesic calculations on Earth's surface.

    Coordinates are in decimal degrees (lat, lng order throughout).
    Bearings are in degrees clockwise from North (0-360).
    Distances are in meters unless the method name says otherwise.
    """

    EARTH_RADIUS_M = EARTH_RADIUS_M
    EARTH_RADIUS_NM = EARTH_RADIUS_NM

    @staticmethod
    def _central_angle(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
        dlat = radians(lat2 - lat1)
        dlng = radians(lng2 - lng1)
        a = sin(dlat / 2) ** 2 + cos(radians(lat1)) * cos(radians(lat2)) * sin(dlng / 2) ** 2
        # Clamp guards sqrt against rounding just outside [0, 1]
        a = min(1.0, max(0.0, a))
        return 2 * atan2(sqrt(a), sqrt(1 - a))

    @staticmethod
    def haversine_distance_m(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
        """Calculate great-circle distance between two points using Haversine formula.

        Args:
            lat1: Latitude of first point (decimal degrees)
            lng1: Longitude of first point (decimal degrees)
            lat2: Latitude of second point (decimal degrees)
            lng2: Longitude of second point (decimal degrees)

        Returns:
            Distance in meters.
        """
        return EARTH_RADIUS_M * GeoCalculator._central_angle(lat1, lng1, lat2, lng2)

    @staticmethod
    def haversine_distance_nm(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
        """Great-circle distance in nautical miles (R = 3440.065 NM)."""
        return EARTH_RADIUS_NM * GeoCalculator._central_angle(lat1, lng1, lat2, lng2)

    @staticmethod
    def m_to_nm(distance_m: float) -> float:
        return distance_m / GeoConfig.METERS_PER_NM

    @staticmethod
    def nm_to_m(distance_nm: float) -> float:
        return distance_nm * GeoConfig.METERS_PER_NM

    @staticmethod
    def initial_bearing_deg(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
        """Calculate initial bearing from point 1 to point 2.

        The bearing is the compass direction to travel from start to end,
        measured clockwise from true North.

        Args:
            lat1: Latitude of start point (decimal degrees)
            lng1: Longitude of start point (decimal degrees)
            lat2: Latitude of end point (decimal degrees)
            lng2: Longitude of end point (decimal degrees)

        Returns:
            Bearing in degrees (0-360, clockwise from North).
        """
        lat1_rad, lat2_rad = radians(lat1), radians(lat2)
        dlng = radians(lng2 - lng1)
        y = sin(dlng) * cos(lat2_rad)
        x = cos(lat1_rad) * sin(lat2_rad) - sin(lat1_rad) * cos(lat2_rad) * cos(dlng)
        bearing = (degrees(atan2(y, x)) + 360) % 360
        # (-tiny + 360) % 360 can round up to exactly 360.0
        return 0.0 if bearing >= 360 else bearing

    @staticmethod
    def destination(
        lat: float,
        lng: float,
        bearing_deg: float,
        distance_m: float,
    ) -> tuple[float, float]:
        """Calculate destination point given start, bearing, and distance.

        Uses the direct formula for finding a point at given distance and
        bearing from a starting point on a sphere.

        Args:
            lat: Latitude of start point (decimal degrees)
            lng: Longitude of start point (decimal degrees)
            bearing_deg: Bearing in degrees (clockwise from North, any range)
            distance_m: Distance to travel in meters

        Returns:
            Tuple (lat, lng) of destination point in decimal degrees,
            longitude wrapped to [-180, 180).
        """
        brng = radians(bearing_deg)
        lat1 = radians(lat)
        lng1 = radians(lng)
        d_R = distance_m / EARTH_RADIUS_M

        sin_lat2 = sin(lat1) * cos(d_R) + cos(lat1) * sin(d_R) * cos(brng)
        lat2 = asin(min(1.0, max(-1.0, sin_lat2)))
        lng2 = lng1 + atan2(
            sin(brng) * sin(d_R) * cos(lat1),
            cos(d_R) - sin(lat1) * sin(lat2),
        )
        lng_deg = (degrees(lng2) + 540) % 360 - 180
        return degrees(lat2), lng_deg
