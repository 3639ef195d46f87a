"""Wind adjustment algorithms.

- validators: Preconditions for automated adjustment, degree input parsing
- sequential: Re-align a whole course leg by leg after a wind shift
- single_mark: Guided one-mark-at-a-time adjustment, start line squaring
- angle_fit: Snap a mark so the turn at it matches a target angle
"""

from racecourse_planner.adjusters.angle_fit import AngleFitOptimizer, AngleFitResult, fit_mark_to_angle
from racecourse_planner.adjusters.sequential import (
    calculate_sequential_adjustments,
    damp_delta,
    get_start_line_center,
    has_start_line,
)
from racecourse_planner.adjusters.single_mark import (
    SingleMarkAdjustment,
    adjust_single_mark_to_wind,
    default_degrees_to_wind,
    square_start_line,
)
from racecourse_planner.adjusters.validators import parse_degrees, validate_marks_for_adjustment

__all__ = [
    # Validation
    "validate_marks_for_adjustment",
    "parse_degrees",
    # Sequential
    "calculate_sequential_adjustments",
    "get_start_line_center",
    "has_start_line",
    "damp_delta",
    # Single mark
    "SingleMarkAdjustment",
    "adjust_single_mark_to_wind",
    "default_degrees_to_wind",
    "square_start_line",
    # Angle fit
    "AngleFitOptimizer",
    "AngleFitResult",
    "fit_mark_to_angle",
]
