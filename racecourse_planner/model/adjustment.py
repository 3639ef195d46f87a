"""Adjustment results - Audit records returned by the wind adjusters.

The engine never writes positions back itself. Callers show these records,
apply `updates` if the officer accepts, and keep `original_positions` to
offer an undo.
"""

from dataclasses import dataclass, field

from racecourse_planner.model.geo_point import GeoPoint
from racecourse_planner.model.warning import AdjustmentWarning


@dataclass(frozen=True)
class AdjustmentResult:
    """Per-mark outcome of a sequential wind adjustment.

    Attributes:
        id: Mark id
        lat, lng: New position
        original_lat, original_lng: Position before adjustment
        role: Mark role value
        leg_bearing: Actual bearing of the leg before adjustment
        target_bearing: Wind-derived target bearing for the leg
        delta: Raw signed rotation to reach the target (-180, 180]
        adjusted_delta: Rotation actually applied after damping
    """

    id: str
    lat: float
    lng: float
    original_lat: float
    original_lng: float
    role: str
    leg_bearing: float
    target_bearing: float
    delta: float
    adjusted_delta: float

    @property
    def position(self) -> GeoPoint:
        return GeoPoint(lat=self.lat, lng=self.lng)

    @property
    def original_position(self) -> GeoPoint:
        return GeoPoint(lat=self.original_lat, lng=self.original_lng)

    @property
    def was_damped(self) -> bool:
        return self.adjusted_delta != self.delta


@dataclass(frozen=True)
class SequentialAdjustmentResult:
    """Outcome of a full sequential wind adjustment.

    Attributes:
        results: One record per adjusted mark, in rounding order
        warnings: Blocking and informational warnings
        can_apply: False when validation failed or no start line centre exists
            (results is then empty)
    """

    results: tuple[AdjustmentResult, ...] = ()
    warnings: tuple[AdjustmentWarning, ...] = ()
    can_apply: bool = False

    @property
    def warning_messages(self) -> list[str]:
        return [w.message for w in self.warnings]

    @property
    def updates(self) -> list[tuple[str, float, float]]:
        """(id, lat, lng) triples for the persistence layer."""
        return [(r.id, r.lat, r.lng) for r in self.results]

    @property
    def original_positions(self) -> list[tuple[str, float, float]]:
        """(id, lat, lng) triples to restore on undo."""
        return [(r.id, r.original_lat, r.original_lng) for r in self.results]

    def result_for(self, mark_id: str) -> AdjustmentResult | None:
        return next((r for r in self.results if r.id == mark_id), None)


@dataclass(frozen=True)
class ValidationResult:
    """Result of checking marks before an automated adjustment.

    Attributes:
        valid: Logical AND of every check
        warnings: One warning per failed check (per mark for gate sides)
    """

    valid: bool
    warnings: tuple[AdjustmentWarning, ...] = field(default_factory=tuple)

    @property
    def warning_messages(self) -> list[str]:
        return [w.message for w in self.warnings]
