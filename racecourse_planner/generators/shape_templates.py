"""Shape templates - Canonical triangle and trapezoid courses around a start line.

Generates a fresh set of course marks oriented to the current wind:

**Triangle (generate_triangle):**
    Course Start → M1 → M2 → M3, a closed triangle M1-M2-M3 whose interior
    angles match the template.
    1. Law of sines gives side lengths, with side M1→M2 fixed at
       TRIANGLE_SIDE_FACTOR × course length
    2. Local frame: origin at the start line centre, +y upwind; M1 at
       (0, course length); each next vertex is reached by turning to port
       through the exterior angle (180° - interior angle)
    3. Rotate the frame onto the wind bearing
    4. Convert meter offsets to lat/lng with a flat-earth scale
       (111,320 m/° latitude, 111,320·cos(lat) m/° longitude)

    The flat-earth step differs from the spherical formulas used elsewhere;
    at race-course scales the difference is centimeters and the layout is
    kept identical to what existing courses were generated with.

**Trapezoid (generate_trapezoid):**
    M1 windward directly upwind, M2 spreader downwind of M1 at the reach
    angle, M3/M4 a leeward gate either side of a point downwind of the start.
"""

import logging
from dataclasses import dataclass, field
from math import cos, radians, sin
from typing import Optional

from racecourse_planner.constants import CourseConfig, GateConfig, GeoConfig, TemplateConfig
from racecourse_planner.core.bearings import normalize_bearing
from racecourse_planner.model.geo_point import GeoPoint
from racecourse_planner.model.mark import Mark, MarkRole
from racecourse_planner.model.warning import AdjustmentWarning, AngleSumWarning

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShapeTemplate:
    """A named course shape.

    Attributes:
        id: Stable identifier (e.g. "triangle-60-60-60")
        name: Display name
        description: One-line description
        type: "triangle" or "trapezoid"
        angles: Interior angles at M1, M2, M3 (triangle) or [reach angle]
        leg_ratios: Informational leg length ratios, if known
    """

    id: str
    name: str
    description: str
    type: str
    angles: tuple[float, ...]
    leg_ratios: Optional[tuple[float, ...]] = None


@dataclass(frozen=True)
class GeneratedMark:
    """A generated course mark, not yet assigned to a buoy."""

    name: str
    lat: float
    lng: float
    role: str = MarkRole.TURNING_MARK.value
    is_course_mark: bool = True

    @property
    def position(self) -> GeoPoint:
        return GeoPoint(lat=self.lat, lng=self.lng)

    def to_mark(self, order: int) -> Mark:
        """Mark record for the adjusters, using the name as id."""
        return Mark(id=self.name, lat=self.lat, lng=self.lng, role=self.role, order=order, name=self.name)


@dataclass(frozen=True)
class TemplateGeneration:
    """Generated marks plus any warnings raised while building them."""

    marks: tuple[GeneratedMark, ...]
    warnings: tuple[AdjustmentWarning, ...] = field(default_factory=tuple)


TRIANGLE_TEMPLATES = [
    ShapeTemplate(
        id="triangle-60-60-60",
        name="Triangle 60-60-60",
        description="Equilateral - all legs equal",
        type="triangle",
        angles=(60, 60, 60),
        leg_ratios=(1, 1, 1),
    ),
    ShapeTemplate(
        id="triangle-45-90-45",
        name="Triangle 45-90-45",
        description="Right-angled - reaches 71% of beat",
        type="triangle",
        angles=(45, 90, 45),
        leg_ratios=(1, 0.71, 0.71),
    ),
    ShapeTemplate(
        id="triangle-65-50-65",
        name="Triangle 65-50-65",
        description="Tighter reach angles",
        type="triangle",
        angles=(65, 50, 65),
    ),
    ShapeTemplate(
        id="triangle-70-40-70",
        name="Triangle 70-40-70",
        description="Very tight reach",
        type="triangle",
        angles=(70, 40, 70),
    ),
]

TRAPEZOID_TEMPLATES = [
    ShapeTemplate(id="trapezoid-60", name="Trapezoid 60°", description="60° reach angle", type="trapezoid", angles=(60,)),
    ShapeTemplate(id="trapezoid-70", name="Trapezoid 70°", description="70° reach angle", type="trapezoid", angles=(70,)),
    ShapeTemplate(id="trapezoid-45", name="Trapezoid 45°", description="45° reach angle", type="trapezoid", angles=(45,)),
]

ALL_SHAPE_TEMPLATES = TRIANGLE_TEMPLATES + TRAPEZOID_TEMPLATES


def get_template_by_id(template_id: str) -> Optional[ShapeTemplate]:
    return next((t for t in ALL_SHAPE_TEMPLATES if t.id == template_id), None)


def get_templates_for_mark_count(count: int) -> list[ShapeTemplate]:
    """Templates that use exactly `count` course marks."""
    if count == 3:
        return list(TRIANGLE_TEMPLATES)
    if count == 4:
        return list(TRAPEZOID_TEMPLATES)
    return []


def _local_to_latlng(x: float, y: float, wind_direction: float, origin: GeoPoint) -> GeoPoint:
    """Rotate a local (+y = upwind) offset onto the wind and convert to lat/lng."""
    theta = radians(wind_direction)
    east = x * cos(theta) + y * sin(theta)
    north = -x * sin(theta) + y * cos(theta)

    meters_per_deg_lat = GeoConfig.METERS_PER_DEGREE_LAT
    meters_per_deg_lng = GeoConfig.METERS_PER_DEGREE_LAT * cos(radians(origin.lat))
    return GeoPoint(lat=origin.lat + north / meters_per_deg_lat, lng=origin.lng + east / meters_per_deg_lng)


def generate_triangle(
    angles: tuple[float, float, float],
    start_line_center: GeoPoint,
    wind_direction: float,
    course_length_m: float = CourseConfig.DEFAULT_COURSE_LENGTH_M,
) -> TemplateGeneration:
    """Build a triangle whose interior angles at M1, M2, M3 match `angles`.

    Angles that do not sum to 180° (±ANGLE_SUM_TOLERANCE_DEG) produce an
    AngleSumWarning; the supplied values are still used.

    Raises:
        ValueError: If three angles are not given or any is outside (0, 180).
    """
    if len(angles) != 3:
        raise ValueError(f"Triangle needs 3 interior angles, got {len(angles)}")
    if not all(0 < a < 180 for a in angles):
        raise ValueError(f"Triangle interior angles must be in (0, 180), got {tuple(angles)}")

    warnings: list[AdjustmentWarning] = []
    angle_sum = sum(angles)
    if abs(angle_sum - 180) > TemplateConfig.ANGLE_SUM_TOLERANCE_DEG:
        logger.warning(f"Template angles sum to {angle_sum}, not 180°")
        warnings.append(AngleSumWarning(angle_sum=angle_sum))

    angle_m1, angle_m2, angle_m3 = angles

    # Law of sines: side a (M2→M3) opposite M1, side c (M1→M2) opposite M3
    side_c = course_length_m * TemplateConfig.TRIANGLE_SIDE_FACTOR
    scale = side_c / sin(radians(angle_m3))
    side_a = scale * sin(radians(angle_m1))

    m1 = (0.0, course_length_m)

    # Port rounding: heading after a mark = heading + interior - 180
    heading_m1_m2 = angle_m1 - 180
    m2 = (
        m1[0] + side_c * sin(radians(heading_m1_m2)),
        m1[1] + side_c * cos(radians(heading_m1_m2)),
    )
    heading_m2_m3 = heading_m1_m2 + angle_m2 - 180
    m3 = (
        m2[0] + side_a * sin(radians(heading_m2_m3)),
        m2[1] + side_a * cos(radians(heading_m2_m3)),
    )

    marks = []
    for name, (x, y) in (("M1", m1), ("M2", m2), ("M3", m3)):
        point = _local_to_latlng(x=x, y=y, wind_direction=wind_direction, origin=start_line_center)
        marks.append(GeneratedMark(name=name, lat=point.lat, lng=point.lng))

    logger.info(
        f"Generated triangle {tuple(angles)} at wind {wind_direction:.0f}°, "
        f"course length {course_length_m:.0f}m, reaching side {side_c:.0f}m"
    )
    return TemplateGeneration(marks=tuple(marks), warnings=tuple(warnings))


def generate_trapezoid(
    reach_angle: float,
    start_line_center: GeoPoint,
    wind_direction: float,
    course_length_m: float = CourseConfig.DEFAULT_COURSE_LENGTH_M,
) -> TemplateGeneration:
    """Build a 4-mark trapezoid: windward, spreader, and a leeward gate.

    Course: Start → M1 → M2 → M1 → M3/M4 → Finish.
    """
    m1 = start_line_center.moved(bearing_deg=normalize_bearing(wind_direction), distance_m=course_length_m)

    spreader_bearing = normalize_bearing(wind_direction + 180 - reach_angle)
    m2 = m1.moved(
        bearing_deg=spreader_bearing,
        distance_m=course_length_m * TemplateConfig.TRAPEZOID_SPREADER_RATIO,
    )

    gate_center = start_line_center.moved(
        bearing_deg=normalize_bearing(wind_direction + 180),
        distance_m=course_length_m * TemplateConfig.TRAPEZOID_LEEWARD_RATIO,
    )
    half_width = GateConfig.GATE_WIDTH_M / 2
    m3 = gate_center.moved(bearing_deg=normalize_bearing(wind_direction - 90), distance_m=half_width)
    m4 = gate_center.moved(bearing_deg=normalize_bearing(wind_direction + 90), distance_m=half_width)

    marks = tuple(
        GeneratedMark(name=name, lat=p.lat, lng=p.lng) for name, p in (("M1", m1), ("M2", m2), ("M3", m3), ("M4", m4))
    )
    logger.info(f"Generated trapezoid (reach {reach_angle:.0f}°) at wind {wind_direction:.0f}°")
    return TemplateGeneration(marks=marks)


def generate_template_marks(
    template: ShapeTemplate,
    start_line_center: GeoPoint,
    wind_direction: float,
    course_length_m: float = CourseConfig.DEFAULT_COURSE_LENGTH_M,
) -> TemplateGeneration:
    """Generate the marks for a named template.

    Raises:
        ValueError: For an unknown template type.
    """
    if template.type == "triangle":
        return generate_triangle(
            angles=template.angles,
            start_line_center=start_line_center,
            wind_direction=wind_direction,
            course_length_m=course_length_m,
        )
    if template.type == "trapezoid":
        reach = (template.angles[0] if template.angles else 0) or TemplateConfig.DEFAULT_REACH_ANGLE_DEG
        return generate_trapezoid(
            reach_angle=reach,
            start_line_center=start_line_center,
            wind_direction=wind_direction,
            course_length_m=course_length_m,
        )
    raise ValueError(f"Unknown template type: {template.type}")
