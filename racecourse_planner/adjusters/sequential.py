"""Sequential wind adjustment - Re-align a whole course after a wind shift.

Walks the marks in rounding order, leg by leg, starting at the start line
centre. Each leg keeps its length and is rotated toward the bearing its
mark's role should have relative to the new wind:

    1. Validate preconditions (start line, orders, gate sides)
    2. Sort marks by order
    3. For each mark:
       - current leg bearing/distance from the previous position
       - target bearing = wind + role/occurrence/gate-aware offset
       - delta = shortest rotation; |delta| <= MICRO_THRESHOLD_DEG is
         damped by MICRO_FACTOR
       - new position = previous position + (current bearing + applied
         delta) at the unchanged leg distance
       - chain: the next leg starts at the NEW position

Chaining off the adjusted positions keeps the course a connected path
after several legs rotate; drift accumulates slightly along the sequence.
"""

import logging
from typing import Optional, Sequence

from shapely.geometry import LineString

from racecourse_planner.adjusters.validators import validate_marks_for_adjustment
from racecourse_planner.constants import AdjustmentConfig
from racecourse_planner.core.bearings import bearing_delta, normalize_bearing
from racecourse_planner.core.role_bearings import target_leg_bearing
from racecourse_planner.model.adjustment import AdjustmentResult, SequentialAdjustmentResult
from racecourse_planner.model.geo_point import GeoPoint
from racecourse_planner.model.mark import BoatClass, Mark, MarkRole
from racecourse_planner.model.warning import (
    AdjustmentWarning,
    CourseCrossesItselfWarning,
    InvalidStartLineWarning,
    NoCourseMarksWarning,
    NoStartLineWarning,
    NoWindTargetWarning,
)

logger = logging.getLogger(__name__)


def get_start_line_center(marks: Sequence[Mark]) -> Optional[GeoPoint]:
    """Centre of the start line.

    Returns:
        Midpoint of committee boat and pin, either one alone if only one
        exists, or None without a start line.
    """
    start_boat = next((m for m in marks if m.role is MarkRole.START_BOAT), None)
    pin = next((m for m in marks if m.role is MarkRole.PIN), None)

    if start_boat and pin:
        return GeoPoint(lat=(start_boat.lat + pin.lat) / 2, lng=(start_boat.lng + pin.lng) / 2)
    if start_boat:
        return start_boat.position
    if pin:
        return pin.position
    return None


def has_start_line(marks: Sequence[Mark]) -> bool:
    return any(m.role in (MarkRole.START_BOAT, MarkRole.PIN) for m in marks)


def damp_delta(delta: float) -> float:
    """Apply the near-target damping rule to a raw bearing delta."""
    if abs(delta) <= AdjustmentConfig.MICRO_THRESHOLD_DEG:
        return delta * AdjustmentConfig.MICRO_FACTOR
    return delta


def _path_crosses_itself(path: list[GeoPoint]) -> bool:
    # Fewer than three legs cannot cross
    if len(path) < 4:
        return False
    return not LineString([(p.lng, p.lat) for p in path]).is_simple


def calculate_sequential_adjustments(
    marks: Sequence[Mark],
    start_line_center: Optional[GeoPoint],
    wind_direction: float,
    boat_class: BoatClass | str,
    has_start_line: bool,
) -> SequentialAdjustmentResult:
    """Rotate every leg of the course toward its wind-relative target.

    Args:
        marks: Course marks to adjust (order, role and gate info set)
        start_line_center: Origin of the first leg (see get_start_line_center)
        wind_direction: Direction the wind blows from (degrees)
        boat_class: Selects wing reach angles
        has_start_line: Whether a committee boat or pin exists

    Returns:
        SequentialAdjustmentResult. can_apply is False (and results empty)
        when there are no marks, no start line centre, or validation failed.
    """
    if not marks:
        return SequentialAdjustmentResult(warnings=(NoCourseMarksWarning(),), can_apply=False)

    validation = validate_marks_for_adjustment(marks=marks, has_start_line=has_start_line)

    if start_line_center is None:
        extra = InvalidStartLineWarning() if has_start_line else NoStartLineWarning()
        warnings = validation.warnings if extra in validation.warnings else (*validation.warnings, extra)
        logger.info(f"Sequential adjustment blocked: {extra.message}")
        return SequentialAdjustmentResult(warnings=warnings, can_apply=False)

    if not validation.valid:
        logger.info(f"Sequential adjustment blocked: {validation.warning_messages}")
        return SequentialAdjustmentResult(warnings=validation.warnings, can_apply=False)

    sorted_marks = sorted(marks, key=lambda m: m.order)

    role_counts: dict[MarkRole, int] = {}
    results: list[AdjustmentResult] = []
    notes: list[AdjustmentWarning] = []
    path = [start_line_center]

    previous = start_line_center

    for mark in sorted_marks:
        role_index = role_counts.get(mark.role, 0)
        role_counts[mark.role] = role_index + 1

        original = mark.position
        leg_bearing = previous.bearing_to(original)
        leg_distance = previous.distance_to(original)

        target = target_leg_bearing(
            role=mark.role,
            wind_direction=wind_direction,
            boat_class=boat_class,
            role_index=role_index,
            is_gate=mark.is_gate,
            gate_side=mark.gate_side,
        )
        if target is None:
            # Left in place; it still anchors the next leg
            notes.append(NoWindTargetWarning(role=mark.role.value, mark_id=mark.id))
            path.append(original)
            previous = original
            continue

        delta = bearing_delta(leg_bearing, target)
        adjusted_delta = damp_delta(delta)

        new_bearing = normalize_bearing(leg_bearing + adjusted_delta)
        new_position = previous.moved(bearing_deg=new_bearing, distance_m=leg_distance)

        logger.debug(
            f"{mark.id} ({mark.role.value}#{role_index}): leg {leg_bearing:.1f}° → target {target:.1f}°, "
            f"delta {delta:+.1f}° applied {adjusted_delta:+.1f}° over {leg_distance:.0f}m"
        )

        results.append(
            AdjustmentResult(
                id=mark.id,
                lat=new_position.lat,
                lng=new_position.lng,
                original_lat=mark.lat,
                original_lng=mark.lng,
                role=mark.role.value,
                leg_bearing=leg_bearing,
                target_bearing=target,
                delta=delta,
                adjusted_delta=adjusted_delta,
            )
        )
        path.append(new_position)
        previous = new_position

    if _path_crosses_itself(path):
        notes.append(CourseCrossesItselfWarning())

    logger.info(
        f"Sequential adjustment: {len(results)} marks adjusted, {len(notes)} notes "
        f"(wind {wind_direction:.0f}°, {BoatClass(boat_class).value})"
    )

    return SequentialAdjustmentResult(
        results=tuple(results),
        warnings=(*validation.warnings, *notes),
        can_apply=True,
    )
