"""Data model classes for race courses.

- GeoPoint: Geometry atom (lat, lng)
- Mark: Course buoy with role, rounding order and gate metadata
- MarkRole, GateSide, CourseType, BoatClass: Course enumerations
- AdjustmentWarning: Typed warnings shown before changes are applied
- AdjustmentResult / SequentialAdjustmentResult / ValidationResult: Engine output
- CourseState: Container owning one course, with observers and undo
"""

from racecourse_planner.model.adjustment import (
    AdjustmentResult,
    SequentialAdjustmentResult,
    ValidationResult,
)
from racecourse_planner.model.course_state import (
    CourseState,
    CourseValidity,
    PositionBatchAction,
)
from racecourse_planner.model.geo_point import (
    GeoPoint,
    bearing_between,
    destination_point,
    distance_between,
)
from racecourse_planner.model.mark import BoatClass, CourseType, GateSide, Mark, MarkRole
from racecourse_planner.model.warning import (
    AdjustmentWarning,
    AngleSumWarning,
    CourseCrossesItselfWarning,
    DuplicateOrderWarning,
    InvalidStartLineWarning,
    MissingGateSideWarning,
    MissingOrderWarning,
    NoCourseMarksWarning,
    NoStartLineWarning,
    NoWindTargetWarning,
)

__all__ = [
    "GeoPoint",
    "bearing_between",
    "distance_between",
    "destination_point",
    "Mark",
    "MarkRole",
    "GateSide",
    "CourseType",
    "BoatClass",
    "AdjustmentWarning",
    "NoCourseMarksWarning",
    "NoStartLineWarning",
    "InvalidStartLineWarning",
    "MissingOrderWarning",
    "DuplicateOrderWarning",
    "MissingGateSideWarning",
    "NoWindTargetWarning",
    "CourseCrossesItselfWarning",
    "AngleSumWarning",
    "AdjustmentResult",
    "SequentialAdjustmentResult",
    "ValidationResult",
    "CourseState",
    "CourseValidity",
    "PositionBatchAction",
]
