"""Validators - Precondition checks for automated mark adjustment.

Validators never raise for expected failures:
- validate_marks_for_adjustment returns a ValidationResult with one typed
  warning per failed check; validity is the AND of all checks
- parse_degrees returns None for input the engine must not see
  (empty, non-numeric, NaN, infinite)
"""

from collections import Counter
from typing import Optional, Sequence

import numpy as np

from racecourse_planner.model.adjustment import ValidationResult
from racecourse_planner.model.mark import Mark
from racecourse_planner.model.warning import (
    AdjustmentWarning,
    DuplicateOrderWarning,
    MissingGateSideWarning,
    MissingOrderWarning,
    NoStartLineWarning,
)


def validate_marks_for_adjustment(
    marks: Sequence[Mark],
    has_start_line: bool,
) -> ValidationResult:
    """Check that a mark list can be adjusted sequentially.

    Checks (all run, failures accumulate):
    - A start line exists
    - Every mark has a non-negative order
    - Orders are unique among marks that have one
    - Every gate mark declares a side (one warning per offending mark)

    Returns:
        ValidationResult with valid=False if any check failed.
    """
    warnings: list[AdjustmentWarning] = []

    if not has_start_line:
        warnings.append(NoStartLineWarning())

    missing = tuple(m.id for m in marks if not m.has_valid_order)
    if missing:
        warnings.append(MissingOrderWarning(mark_ids=missing))

    order_counts = Counter(m.order for m in marks if m.has_valid_order)
    duplicates = tuple(sorted(order for order, count in order_counts.items() if count > 1))
    if duplicates:
        warnings.append(DuplicateOrderWarning(orders=duplicates))

    for mark in marks:
        if mark.is_gate and mark.gate_side is None:
            warnings.append(MissingGateSideWarning(role=mark.role.value, mark_id=mark.id))

    return ValidationResult(valid=not warnings, warnings=tuple(warnings))


def parse_degrees(text: Optional[str]) -> Optional[float]:
    """Parse a degrees value typed by the user.

    Returns:
        The value as float, or None if it is empty, not a number, NaN or
        infinite.
    """
    if text is None:
        return None
    try:
        value = float(text.strip())
    except ValueError:
        return None
    if not np.isfinite(value):
        return None
    return value
