"""Role bearing tables - Wind-relative leg bearings per mark role.

A single resolver, `relative_bearing`, is the source of truth for every
wind-relative bearing in the package:
- The sequenced table (role + occurrence index, gate members split
  port/starboard) is derived from it and the course topology
- The simple table (one entry per role) is the index-0 view of the same data
- The sequential adjuster's per-leg target comes from it directly

Keeping one resolver means the table used to lay out a course and the
targets used to re-align it after a wind shift cannot drift apart.

Bearings are degrees relative to the wind (0 = dead upwind), distance
ratios are leg lengths as a fraction of the course length.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from racecourse_planner.constants import CourseConfig, GateConfig, RoleConfig
from racecourse_planner.core.bearings import normalize_bearing
from racecourse_planner.model.geo_point import GeoPoint
from racecourse_planner.model.mark import BoatClass, CourseType, GateSide, MarkRole

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoleBearing:
    """Simple-table entry: one bearing per role.

    Attributes:
        role: Mark role value
        bearing: Leg bearing relative to the wind, [0, 360)
        distance_ratio: Leg length as a fraction of course length (>= 0)
    """

    role: str
    bearing: float
    distance_ratio: float


@dataclass(frozen=True)
class SequencedMarkPosition:
    """Sequenced-table entry, keyed additionally by occurrence index.

    Attributes:
        role: Mark role value
        index: Occurrence of this role in the course (0 = first)
        bearing: Leg bearing relative to the wind, [0, 360)
        distance_ratio: Leg length as a fraction of course length (>= 0)
        gate_side: Port/starboard for gate members, None otherwise
    """

    role: str
    index: int
    bearing: float
    distance_ratio: float
    gate_side: Optional[GateSide] = None

    @property
    def is_gate(self) -> bool:
        return self.gate_side is not None


def _gate_offset(gate_side: Optional[GateSide]) -> float:
    if gate_side is GateSide.PORT:
        return -GateConfig.GATE_SPREAD_DEG
    if gate_side is GateSide.STARBOARD:
        return GateConfig.GATE_SPREAD_DEG
    return 0.0


def relative_bearing(
    role: MarkRole | str,
    index: int,
    boat_class: BoatClass | str,
    gate_side: GateSide | str | None = None,
) -> Optional[float]:
    """Wind-relative leg bearing for a role occurrence.

    Args:
        role: Mark role
        index: Occurrence of the role in rounding order (0 = first)
        boat_class: Selects the wing reach angle
        gate_side: Spreads leeward gate members by ±GATE_SPREAD_DEG

    Returns:
        Bearing in [0, 360) relative to the wind, or None when the role has
        no wind-relative target (start/finish marks, custom roles).
    """
    role = MarkRole.parse(role)
    boat_class = BoatClass(boat_class)
    gate_side = GateSide.parse(gate_side)

    if role is MarkRole.WINDWARD:
        relative = RoleConfig.ROLE_BEARINGS["windward"]
    elif role is MarkRole.LEEWARD:
        relative = RoleConfig.ROLE_BEARINGS["leeward"] + _gate_offset(gate_side)
    elif role is MarkRole.OFFSET:
        relative = RoleConfig.ROLE_BEARINGS["offset"]
    elif role is MarkRole.WING:
        wing_base = RoleConfig.WING_BEARINGS[boat_class.value]
        relative = wing_base if index == 0 else 360.0 - wing_base
    else:
        return None
    return normalize_bearing(relative)


def sequenced_table(
    course_type: CourseType | str,
    boat_class: BoatClass | str,
) -> tuple[SequencedMarkPosition, ...]:
    """All role occurrences of a course type, in rounding order.

    Gate topology entries expand into a port member followed by a starboard
    member, each taking its own occurrence index.
    """
    course_type = CourseType(course_type)
    entries: list[SequencedMarkPosition] = []
    role_counts: dict[str, int] = {}

    # constants.py guarantees every topology role is adjustable, so bearings are never None
    for role, ratio, is_gate in CourseConfig.TOPOLOGIES[course_type.value]:
        sides = (GateSide.PORT, GateSide.STARBOARD) if is_gate else (None,)
        for side in sides:
            index = role_counts.get(role, 0)
            role_counts[role] = index + 1
            bearing = relative_bearing(role=role, index=index, boat_class=boat_class, gate_side=side)
            entries.append(
                SequencedMarkPosition(
                    role=role,
                    index=index,
                    bearing=bearing,
                    distance_ratio=ratio,
                    gate_side=side,
                )
            )
    return tuple(entries)


def simple_table(
    course_type: CourseType | str,
    boat_class: BoatClass | str,
) -> dict[str, RoleBearing]:
    """One entry per role: the first occurrence, gates collapsed to their centre."""
    table: dict[str, RoleBearing] = {}
    for entry in sequenced_table(course_type=course_type, boat_class=boat_class):
        if entry.role in table:
            continue
        bearing = relative_bearing(role=entry.role, index=0, boat_class=boat_class)
        table[entry.role] = RoleBearing(role=entry.role, bearing=bearing, distance_ratio=entry.distance_ratio)
    return table


def resolve_bearing(
    role: MarkRole | str,
    index: int,
    course_type: CourseType | str,
    boat_class: BoatClass | str,
) -> Optional[SequencedMarkPosition]:
    """Look up a role occurrence in the sequenced table.

    Returns:
        The entry for the exact index if present, else the role's index-0
        entry, else None (no wind-relative target exists for this mark).
    """
    role_value = MarkRole.parse(role).value
    fallback: Optional[SequencedMarkPosition] = None
    for entry in sequenced_table(course_type=course_type, boat_class=boat_class):
        if entry.role != role_value:
            continue
        if entry.index == index:
            return entry
        if entry.index == 0:
            fallback = entry
    if fallback is None:
        logger.debug(f"No bearing for role={role_value} in {CourseType(course_type).value}")
    return fallback


def target_leg_bearing(
    role: MarkRole | str,
    wind_direction: float,
    boat_class: BoatClass | str,
    role_index: int,
    is_gate: bool = False,
    gate_side: GateSide | str | None = None,
) -> Optional[float]:
    """Absolute target bearing for the leg arriving at a mark.

    Returns:
        normalize(wind_direction + relative bearing), or None when the role
        has no wind-relative target.
    """
    relative = relative_bearing(
        role=role,
        index=role_index,
        boat_class=boat_class,
        gate_side=gate_side if is_gate else None,
    )
    if relative is None:
        return None
    return normalize_bearing(wind_direction + relative)


def role_bearing_label(role: MarkRole | str) -> str:
    """Short label describing where a role sits relative to the wind."""
    return RoleConfig.BEARING_LABELS.get(MarkRole.parse(role).value, RoleConfig.DEFAULT_BEARING_LABEL)


def calculate_new_position(
    center: GeoPoint,
    wind_direction: float,
    bearing: float,
    distance_m: float,
) -> GeoPoint:
    """Position at a wind-relative bearing and distance from a centre point."""
    return center.moved(bearing_deg=normalize_bearing(wind_direction + bearing), distance_m=distance_m)
