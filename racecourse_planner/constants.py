"""Configuration constants for Race Course Planner.

All configurable parameters are centralized here for easy tuning.

Classes:
    GeoConfig: Earth model radii and unit conversions
    AdjustmentConfig: Sequential wind-adjustment damping
    GateConfig: Gate spread and width
    RoleConfig: Wind-relative bearings per mark role and boat class
    CourseConfig: Course lengths and per-course-type leg topology
    TemplateConfig: Triangle/trapezoid template construction
    OptimizerConfig: Angle-fit sweep parameters
    WindConfig: Wind shift detection
    UndoConfig: Undo stack sizing
"""


class GeoConfig:
    """Earth model and unit conversions."""

    # Spherical Earth radius in meters (metric call sites)
    EARTH_RADIUS_M = 6_371_000

    # Spherical Earth radius in nautical miles (course statistics)
    EARTH_RADIUS_NM = 3440.065

    METERS_PER_NM = 1852

    # 1 degree of latitude ≈ 111,320 m (Earth circumference 40,075 km / 360)
    # Longitude degrees shrink by cos(lat)
    METERS_PER_DEGREE_LAT = 111_320.0


# Both radii describe the same sphere within 0.01%
assert abs(GeoConfig.EARTH_RADIUS_NM * GeoConfig.METERS_PER_NM - GeoConfig.EARTH_RADIUS_M) < 1_000


class AdjustmentConfig:
    """Sequential wind-adjustment damping.

    Legs already within MICRO_THRESHOLD_DEG of their target are nudged by
    MICRO_FACTOR of the delta instead of snapped, so a re-run after a small
    wind wobble does not make buoys jump around.
    """

    MICRO_THRESHOLD_DEG = 7.0
    MICRO_FACTOR = 0.3


assert 0.0 < AdjustmentConfig.MICRO_FACTOR < 1.0


class GateConfig:
    """Gate geometry."""

    # Leeward gate members sit this many degrees either side of the leeward bearing
    GATE_SPREAD_DEG = 5.0

    # Separation of the two generated gate marks (meters)
    GATE_WIDTH_M = 50.0

    SIDES = ("port", "starboard")


class RoleConfig:
    """Wind-relative leg bearings per mark role.

    Bearings are degrees clockwise from the wind direction (0 = dead upwind).
    Wing marks use a boat-class reach angle; the first wing is passed at
    +WING_BEARING, any later wing at 360 - WING_BEARING.
    """

    ROLE_BEARINGS = {
        "windward": 0.0,
        "leeward": 180.0,
        "offset": 10.0,
    }

    # Faster boats sail deeper reaches
    WING_BEARINGS = {
        "spinnaker": 120.0,
        "non_spinnaker": 110.0,
        "foiling": 100.0,
    }

    # Roles that get a wind-relative target during automated adjustment
    ADJUSTABLE_ROLES = ("windward", "leeward", "wing", "offset")

    # Pre-filled "degrees to wind" for guided single-mark adjustment
    DEFAULT_DEGREES_TO_WIND = {
        "windward": 0.0,
        "leeward": 180.0,
        "wing": -120.0,
        "offset": 10.0,
        "turning_mark": 0.0,
    }

    BEARING_LABELS = {
        "windward": "Windward (0° from wind)",
        "leeward": "Leeward (180° from wind)",
        "wing": "Wing (reach angle)",
        "offset": "Offset (near windward)",
        "start_boat": "Start Line",
        "pin": "Start Line",
        "finish": "Finish",
    }
    DEFAULT_BEARING_LABEL = "Custom"


assert set(RoleConfig.ADJUSTABLE_ROLES) == set(RoleConfig.ROLE_BEARINGS) | {"wing"}
assert all(0 < b < 180 for b in RoleConfig.WING_BEARINGS.values())


class CourseConfig:
    """Course sizing and leg topology per course type.

    Each topology entry is (role, distance_ratio, is_gate). The ratio scales
    the course length to give the leg length from the previous anchor.
    Gate entries expand to a port and a starboard member sharing one anchor.
    """

    DEFAULT_COURSE_LENGTH_M = 500.0

    TOPOLOGIES = {
        "windward_leeward": (
            ("windward", 1.0, False),
            ("offset", 0.1, False),
            ("leeward", 1.0, True),
        ),
        "triangle": (
            ("windward", 1.0, False),
            ("wing", 0.7, False),
            ("leeward", 0.7, False),
        ),
        "trapezoid": (
            ("windward", 1.0, False),
            ("offset", 0.1, False),
            ("wing", 0.6, False),
            ("leeward", 0.8, True),
            ("wing", 0.6, False),
        ),
    }
    COURSE_TYPES = list(TOPOLOGIES.keys())

    # Course scale slider limits (multiplier of current size)
    MIN_SCALE = 0.5
    MAX_SCALE = 3.0

    # Radius reported for an empty course / minimum radius (meters)
    EMPTY_COURSE_RADIUS_M = 500.0
    MIN_COURSE_RADIUS_M = 100.0


assert all(ratio >= 0 for topo in CourseConfig.TOPOLOGIES.values() for _, ratio, _ in topo)
assert all(role in RoleConfig.ADJUSTABLE_ROLES for topo in CourseConfig.TOPOLOGIES.values() for role, _, _ in topo)


class TemplateConfig:
    """Triangle and trapezoid template construction."""

    # Side M1→M2 of a generated triangle, as a multiple of the course length
    TRIANGLE_SIDE_FACTOR = 1.5

    # Interior angles may deviate this much from 180° before a warning is raised
    ANGLE_SUM_TOLERANCE_DEG = 0.1

    # Trapezoid spreader leg and leeward gate offset as fractions of course length
    TRAPEZOID_SPREADER_RATIO = 0.5
    TRAPEZOID_LEEWARD_RATIO = 0.2
    DEFAULT_REACH_ANGLE_DEG = 60.0

    COMMON_ANGLES = [30, 45, 60, 70, 90, 120]


class OptimizerConfig:
    """Angle-fit optimizer sweep parameters (degrees)."""

    COARSE_STEP_DEG = 2.0
    COARSE_SPAN_DEG = 360.0  # samples 0, 2, ..., 358

    FINE_WINDOW_DEG = 3.0
    FINE_STEP_DEG = 0.2

    # Candidates whose errors differ by less than this prefer the smaller rotation
    TIE_TOLERANCE_DEG = 2.0


assert OptimizerConfig.FINE_WINDOW_DEG >= OptimizerConfig.COARSE_STEP_DEG


class WindConfig:
    """Wind shift detection."""

    # Shift from the wind at course setup that invalidates the course
    SHIFT_THRESHOLD_DEG = 15.0


class UndoConfig:
    """Undo system configuration."""

    # Older position batches are discarded when limit is reached
    MAX_UNDO_STACK_SIZE = 50
