"""Bearing normalization and wind-relative angles.

Circular math for compass bearings:
- Canonical bearings in [0, 360)
- Signed shortest rotation between bearings in (-180, 180]
- Leg angle relative to the wind (for "+15° to wind" displays)
- Start/finish line deviation from square-to-wind, folded to (-90, 90]
- Interior (turn) angle at a mark between its two legs
"""

from dataclasses import dataclass

from racecourse_planner.core.geo_calculator import GeoCalculator


@dataclass(frozen=True)
class WindAngle:
    """Angle of a leg or line relative to the wind.

    Attributes:
        signed: Signed deviation in degrees (positive = clockwise of reference)
        absolute: Magnitude of the deviation (0-180 for legs, 0-90 for lines)
    """

    signed: float
    absolute: float


def normalize_bearing(bearing: float) -> float:
    """Map any finite bearing into [0, 360)."""
    result = bearing % 360.0
    # Tiny negative inputs round up to exactly 360.0
    return 0.0 if result >= 360.0 else result


def bearing_delta(from_bearing: float, to_bearing: float) -> float:
    """Shortest signed rotation from one bearing to another.

    Returns:
        Degrees in (-180, 180]. Positive = rotate clockwise. Exactly opposite
        bearings always give +180 (half-open interval).
    """
    delta = normalize_bearing(to_bearing - from_bearing)
    if delta > 180.0:
        delta -= 360.0
    return delta


def angular_difference(a: float, b: float) -> float:
    """Unsigned shortest difference between two bearings (0-180)."""
    return abs(bearing_delta(a, b))


def wind_relative_angle(leg_bearing: float, wind_direction: float) -> WindAngle:
    """Angle of a leg relative to the wind direction.

    Args:
        leg_bearing: Bearing of the leg (degrees)
        wind_direction: Direction the wind blows from (degrees)

    Returns:
        WindAngle with signed in (-180, 180] and absolute TWA in [0, 180].
    """
    signed = bearing_delta(wind_direction, leg_bearing)
    return WindAngle(signed=signed, absolute=abs(signed))


def start_line_wind_angle(line_bearing: float, wind_direction: float) -> WindAngle:
    """Deviation of a start/finish line from square (perpendicular) to the wind.

    A line has no inherent direction, so a 190° line is the same as a 10°
    line and the result is folded into (-90, 90]. 0° means perfectly square.
    """
    perpendicular = normalize_bearing(wind_direction + 90.0)
    signed = bearing_delta(perpendicular, line_bearing)
    if signed > 90.0:
        signed -= 180.0
    elif signed <= -90.0:
        signed += 180.0
    return WindAngle(signed=signed, absolute=abs(signed))


def format_wind_relative(signed_relative: float) -> str:
    """Display string like '+15° to wind' or '-120° to wind'."""
    sign = "+" if signed_relative >= 0 else ""
    return f"{sign}{signed_relative:.0f}° to wind"


def interior_angle(
    prev_lat: float,
    prev_lng: float,
    mark_lat: float,
    mark_lng: float,
    next_lat: float,
    next_lng: float,
) -> float:
    """Interior angle at a mark between the legs to its neighbours.

    Measured at the mark: the difference between the bearing back to the
    previous mark and the bearing on to the next mark, folded to [0, 180].
    """
    to_prev = GeoCalculator.initial_bearing_deg(mark_lat, mark_lng, prev_lat, prev_lng)
    to_next = GeoCalculator.initial_bearing_deg(mark_lat, mark_lng, next_lat, next_lng)
    return angular_difference(to_prev, to_next)
