"""Warning - Adjustment and generation warnings shown before changes are applied.

Warnings indicate situations the race officer should know about:
- Preconditions that block an automated adjustment (start line, orders, gates)
- Marks the adjuster could not target and left in place
- Degenerate or suspicious geometry (crossing legs, template angle sums)

Blocking warnings set `blocks_adjustment`; the rest are informational.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class AdjustmentWarning(ABC):
    """Abstract base class for adjustment warnings.

    Subclasses store specific parameters and compute message as property.
    Use isinstance() to check warning type.
    """

    @property
    @abstractmethod
    def message(self) -> str:
        """Human-readable warning message."""

    @property
    def blocks_adjustment(self) -> bool:
        return True

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class NoCourseMarksWarning(AdjustmentWarning):
    """Nothing to adjust."""

    @property
    def message(self) -> str:
        return "No course marks to adjust"


@dataclass(frozen=True)
class NoStartLineWarning(AdjustmentWarning):
    """Neither a committee boat nor a pin exists, so the first leg has no origin."""

    @property
    def message(self) -> str:
        return "No start line - cannot calculate leg bearings"


@dataclass(frozen=True)
class InvalidStartLineWarning(AdjustmentWarning):
    """Start line marks exist but no centre could be derived from them."""

    @property
    def message(self) -> str:
        return "Start line marks have invalid coordinates"


@dataclass(frozen=True)
class MissingOrderWarning(AdjustmentWarning):
    """At least one mark has no (or a negative) rounding order.

    Attributes:
        mark_ids: Marks without a usable order
    """

    mark_ids: tuple[str, ...] = ()

    @property
    def message(self) -> str:
        return "Some marks have missing order values"


@dataclass(frozen=True)
class DuplicateOrderWarning(AdjustmentWarning):
    """Two or more marks share a rounding order.

    Attributes:
        orders: The order values used more than once
    """

    orders: tuple[int, ...] = ()

    @property
    def message(self) -> str:
        return "Some marks have duplicate order values"


@dataclass(frozen=True)
class MissingGateSideWarning(AdjustmentWarning):
    """A gate member without a declared port/starboard side.

    Attributes:
        role: Role of the gate mark
        mark_id: Offending mark
    """

    role: str
    mark_id: str = ""

    @property
    def message(self) -> str:
        return f'Gate mark "{self.role}" missing side (port/starboard)'


@dataclass(frozen=True)
class NoWindTargetWarning(AdjustmentWarning):
    """Mark role has no wind-relative target; the mark was left in place.

    Attributes:
        role: Role of the skipped mark
        mark_id: Skipped mark
    """

    role: str
    mark_id: str = ""

    @property
    def blocks_adjustment(self) -> bool:
        return False

    @property
    def message(self) -> str:
        return f'Mark "{self.mark_id}" ({self.role}) has no wind target - enter degrees manually'


@dataclass(frozen=True)
class CourseCrossesItselfWarning(AdjustmentWarning):
    """Adjusted legs intersect each other."""

    @property
    def blocks_adjustment(self) -> bool:
        return False

    @property
    def message(self) -> str:
        return "Adjusted course legs cross each other - check mark order"


@dataclass(frozen=True)
class AngleSumWarning(AdjustmentWarning):
    """Triangle template interior angles do not sum to 180°.

    Attributes:
        angle_sum: Actual sum of the supplied angles
    """

    angle_sum: float

    @property
    def blocks_adjustment(self) -> bool:
        return False

    @property
    def message(self) -> str:
        return f"Template angles sum to {self.angle_sum:g}°, not 180°"
