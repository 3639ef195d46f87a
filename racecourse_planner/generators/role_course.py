"""Role course generator - Lay out a course straight from the role bearing table.

Walks the sequenced table for a course type and boat class, placing each
mark from the previous mark at `wind + bearing` and
`distance_ratio × course_length`. The second member of a gate is laid from
the first at the gate member's bearing, GATE_WIDTH_M away, because the
sequential adjuster measures that leg from the first member too.

Because the bearings come from the same resolver the sequential adjuster
uses and the legs chain the same way, re-adjusting a freshly generated
course in the same wind leaves every mark where it is.
"""

import logging

from racecourse_planner.constants import CourseConfig, GateConfig
from racecourse_planner.core.role_bearings import calculate_new_position, sequenced_table
from racecourse_planner.model.geo_point import GeoPoint
from racecourse_planner.model.mark import BoatClass, CourseType, GateSide, Mark

logger = logging.getLogger(__name__)


def _mark_name(role: str, index: int, side_label: str) -> str:
    base = role.replace("_", " ").title()
    if side_label:
        return f"{base} {side_label}"
    return base if index == 0 else f"{base} {index + 1}"


def generate_role_course(
    course_type: CourseType | str,
    boat_class: BoatClass | str,
    start_line_center: GeoPoint,
    wind_direction: float,
    course_length_m: float = CourseConfig.DEFAULT_COURSE_LENGTH_M,
    first_order: int = 1,
) -> list[Mark]:
    """Generate role-tagged course marks for a course type.

    Args:
        course_type: Topology to lay out
        boat_class: Selects wing reach angles
        start_line_center: Origin of the first leg
        wind_direction: Direction the wind blows from (degrees)
        course_length_m: Length the distance ratios scale
        first_order: Rounding order given to the first mark

    Returns:
        Marks in rounding order with role, order and gate fields set.
    """
    marks: list[Mark] = []
    anchor = start_line_center

    for entry in sequenced_table(course_type=course_type, boat_class=boat_class):
        # Second gate member hangs off the first
        if entry.gate_side is GateSide.STARBOARD:
            distance_m = GateConfig.GATE_WIDTH_M
        else:
            distance_m = entry.distance_ratio * course_length_m

        position = calculate_new_position(
            center=anchor,
            wind_direction=wind_direction,
            bearing=entry.bearing,
            distance_m=distance_m,
        )
        order = first_order + len(marks)
        side_label = entry.gate_side.value.title() if entry.gate_side else ""
        marks.append(
            Mark(
                id=f"M{order}",
                lat=position.lat,
                lng=position.lng,
                role=entry.role,
                order=order,
                is_gate=entry.is_gate,
                gate_side=entry.gate_side,
                name=_mark_name(entry.role, entry.index, side_label),
            )
        )
        anchor = position

    logger.info(
        f"Generated {CourseType(course_type).value} course: {len(marks)} marks "
        f"({BoatClass(boat_class).value}, wind {wind_direction:.0f}°, {course_length_m:.0f}m)"
    )
    return marks
