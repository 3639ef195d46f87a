"""Course-wide geometry helpers.

Operations on a whole set of mark positions:
- Course centre and radius (for framing the map)
- Whole-course rotation and scaling about a centre
- Leg list and total distance in nautical miles (course statistics)

Rotation swings each mark about the centre along the sphere, keeping its
distance. Scaling multiplies degree offsets; a uniform factor keeps the
course shape.
"""

from dataclasses import dataclass
from typing import Iterable, Sequence

from racecourse_planner.constants import CourseConfig
from racecourse_planner.core.bearings import normalize_bearing
from racecourse_planner.model.geo_point import GeoPoint


@dataclass(frozen=True)
class LegInfo:
    """One leg of the course.

    Attributes:
        from_id: Id (or name) of the start of the leg
        to_id: Id (or name) of the end of the leg
        distance_nm: Great-circle length in nautical miles
        bearing: Initial bearing (0-360)
    """

    from_id: str
    to_id: str
    distance_nm: float
    bearing: float


def get_course_center(points: Sequence[GeoPoint]) -> GeoPoint:
    """Arithmetic mean of the points; (0, 0) for an empty course."""
    if not points:
        return GeoPoint(lat=0.0, lng=0.0)
    return GeoPoint(
        lat=sum(p.lat for p in points) / len(points),
        lng=sum(p.lng for p in points) / len(points),
    )


def get_course_radius(points: Sequence[GeoPoint], center: GeoPoint) -> float:
    """Distance in meters from the centre to the farthest point.

    Never below MIN_COURSE_RADIUS_M; EMPTY_COURSE_RADIUS_M for no points.
    """
    if not points:
        return CourseConfig.EMPTY_COURSE_RADIUS_M
    return max(max(center.distance_to(p) for p in points), CourseConfig.MIN_COURSE_RADIUS_M)


def rotate_course(points: Iterable[GeoPoint], center: GeoPoint, angle_deg: float) -> list[GeoPoint]:
    """Rotate every point about the centre by angle_deg (clockwise on the map).

    Distance to the centre is kept; the centre itself stays put.
    """
    return [
        center.moved(bearing_deg=normalize_bearing(center.bearing_to(p) + angle_deg), distance_m=center.distance_to(p))
        for p in points
    ]


def clamp_course_scale(scale: float) -> float:
    """Clamp a course scale to the allowed slider range."""
    return max(CourseConfig.MIN_SCALE, min(CourseConfig.MAX_SCALE, scale))


def scale_course(points: Iterable[GeoPoint], center: GeoPoint, factor: float) -> list[GeoPoint]:
    """Scale every point's offset from the centre by factor."""
    return [
        GeoPoint(
            lat=center.lat + (p.lat - center.lat) * factor,
            lng=center.lng + (p.lng - center.lng) * factor,
        )
        for p in points
    ]


def build_legs(waypoints: Sequence[tuple[str, GeoPoint]]) -> list[LegInfo]:
    """Legs between consecutive (id, position) waypoints of a rounding sequence."""
    legs = []
    for (from_id, start), (to_id, end) in zip(waypoints, waypoints[1:]):
        legs.append(
            LegInfo(
                from_id=from_id,
                to_id=to_id,
                distance_nm=start.distance_nm_to(end),
                bearing=start.bearing_to(end),
            )
        )
    return legs


def total_distance_nm(legs: Iterable[LegInfo]) -> float:
    return sum(leg.distance_nm for leg in legs)
