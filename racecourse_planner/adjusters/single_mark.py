"""Single-mark wind adjustment for guided, one-mark-at-a-time workflows.

The race officer steps through the course; for each mark the reference is
the previous (already adjusted) mark or the start line centre, and the mark
is swung to `wind + degrees_to_wind` at its current distance from that
reference. This is the primitive the sequential adjuster's per-leg step is
built from.
"""

import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from racecourse_planner.constants import RoleConfig
from racecourse_planner.core.bearings import angular_difference, normalize_bearing
from racecourse_planner.model.geo_point import GeoPoint
from racecourse_planner.model.mark import MarkRole

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SingleMarkAdjustment:
    """Result of moving one mark to a wind-relative bearing.

    Attributes:
        lat, lng: New mark position
        distance_from_ref: Distance from the reference in meters (unchanged)
        original_bearing: Bearing from the reference before adjustment
        new_bearing: Bearing from the reference after adjustment
    """

    lat: float
    lng: float
    distance_from_ref: float
    original_bearing: float
    new_bearing: float

    @property
    def position(self) -> GeoPoint:
        return GeoPoint(lat=self.lat, lng=self.lng)


def adjust_single_mark_to_wind(
    mark: GeoPoint,
    reference: GeoPoint,
    wind_direction: float,
    degrees_to_wind: float,
) -> SingleMarkAdjustment:
    """Swing a mark about a reference point to a wind-relative bearing.

    Args:
        mark: Current mark position
        reference: Previous mark or start line centre
        wind_direction: Direction the wind blows from (degrees)
        degrees_to_wind: Desired leg bearing relative to the wind

    Returns:
        SingleMarkAdjustment with the new position at the original distance.
    """
    distance = reference.distance_to(mark)
    original_bearing = reference.bearing_to(mark)
    new_bearing = normalize_bearing(wind_direction + degrees_to_wind)
    new_position = reference.moved(bearing_deg=new_bearing, distance_m=distance)

    logger.debug(
        f"Single mark: {original_bearing:.1f}° → {new_bearing:.1f}° at {distance:.0f}m "
        f"(wind {wind_direction:.0f}°, {degrees_to_wind:+.0f}°)"
    )

    return SingleMarkAdjustment(
        lat=new_position.lat,
        lng=new_position.lng,
        distance_from_ref=distance,
        original_bearing=original_bearing,
        new_bearing=new_bearing,
    )


def default_degrees_to_wind(
    role: MarkRole | str,
    overrides: Optional[Mapping[str, float]] = None,
) -> Optional[float]:
    """Pre-filled degrees-to-wind for a role in the guided workflow.

    Args:
        role: Mark role
        overrides: Club settings replacing the built-in defaults per role

    Returns:
        Degrees relative to the wind, or None for roles that need the user
        to enter a value (start/finish marks, custom roles).
    """
    role_value = MarkRole.parse(role).value
    if role_value not in RoleConfig.DEFAULT_DEGREES_TO_WIND:
        return None
    if overrides and role_value in overrides:
        return overrides[role_value]
    return RoleConfig.DEFAULT_DEGREES_TO_WIND[role_value]


def square_start_line(pin: GeoPoint, committee: GeoPoint, wind_direction: float) -> GeoPoint:
    """Move the pin so the start line is square (perpendicular) to the wind.

    The committee boat stays put and the line keeps its length. Of the two
    perpendicular directions, the one closest to the current line is used
    so the pin stays on the same end.

    Returns:
        New pin position.
    """
    length = committee.distance_to(pin)
    committee_to_pin = committee.bearing_to(pin)

    option_a = normalize_bearing(wind_direction + 90.0)
    option_b = normalize_bearing(wind_direction - 90.0)
    if angular_difference(committee_to_pin, option_a) <= angular_difference(committee_to_pin, option_b):
        target = option_a
    else:
        target = option_b

    logger.info(f"Squaring start line: {committee_to_pin:.1f}° → {target:.1f}° ({length:.0f}m)")
    return committee.moved(bearing_deg=target, distance_m=length)
