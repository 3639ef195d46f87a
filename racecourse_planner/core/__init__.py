"""Core foundation math for race course planning.

- GeoCalculator: Geodesic calculations (distances, bearings, destinations)
- bearings: Bearing normalization, deltas and wind-relative angles
- role_bearings: Wind-relative bearing tables (import directly from module)
- course_geometry: Whole-course centre, rotation, scaling, legs (import directly)
"""

from racecourse_planner.core.bearings import (
    WindAngle,
    angular_difference,
    bearing_delta,
    format_wind_relative,
    interior_angle,
    normalize_bearing,
    start_line_wind_angle,
    wind_relative_angle,
)
from racecourse_planner.core.geo_calculator import GeoCalculator

# role_bearings and course_geometry have circular import with model.geo_point
# Import directly: from racecourse_planner.core.role_bearings import target_leg_bearing

__all__ = [
    # Geo calculator
    "GeoCalculator",
    # Bearings
    "WindAngle",
    "normalize_bearing",
    "bearing_delta",
    "angular_difference",
    "wind_relative_angle",
    "start_line_wind_angle",
    "format_wind_relative",
    "interior_angle",
]
