"""CourseState - Explicit container for the course being worked on.

Owns the marks of one course plus its metadata and provides:
- Observer subscriptions (subscribe returns an unsubscribe callable)
- Applying adjusted positions from the engine, with undo
- Course validity against the current wind (wind shift detection)

Each UI context holds its own CourseState; there is no module-level
instance.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Callable, Iterable, Optional

from racecourse_planner.constants import UndoConfig, WindConfig
from racecourse_planner.core.bearings import angular_difference
from racecourse_planner.model.mark import BoatClass, CourseType, Mark

logger = logging.getLogger(__name__)

CourseListener = Callable[["CourseState"], None]


@dataclass(frozen=True)
class PositionBatchAction:
    """Undo action for one batch of applied positions.

    Attributes:
        previous: (id, lat, lng) of every moved mark before the batch
    """

    previous: tuple[tuple[str, float, float], ...]


@dataclass(frozen=True)
class CourseValidity:
    """Whether the course still suits the wind.

    Attributes:
        is_valid: False when the wind has shifted beyond the threshold
        wind_shift_detected: Shift exceeds WindConfig.SHIFT_THRESHOLD_DEG
        wind_shift_deg: Shortest angular difference from the setup wind
        recommendations: Messages for the race officer
    """

    is_valid: bool
    wind_shift_detected: bool
    wind_shift_deg: float
    recommendations: tuple[str, ...] = field(default_factory=tuple)


class CourseState:
    """State of one course: marks, course type, boat class, setup wind.

    Example:
        state = CourseState(marks=marks, wind_direction=225.0)
        unsubscribe = state.subscribe(lambda s: redraw(s.marks))
        result = calculate_sequential_adjustments(...)
        if result.can_apply:
            state.apply_positions(result.updates)
    """

    def __init__(
        self,
        marks: Iterable[Mark] = (),
        course_type: CourseType | str = CourseType.WINDWARD_LEEWARD,
        boat_class: BoatClass | str = BoatClass.SPINNAKER,
        wind_direction: float = 0.0,
    ) -> None:
        self._marks: dict[str, Mark] = {m.id: m for m in marks}
        self.course_type = CourseType(course_type)
        self.boat_class = BoatClass(boat_class)
        self.setup_wind_direction = wind_direction
        self.undo_stack: list[PositionBatchAction] = []
        self._listeners: list[CourseListener] = []

    # =========================================================================
    # Observers
    # =========================================================================

    def subscribe(self, listener: CourseListener) -> Callable[[], None]:
        """Register a listener; it is called immediately and on every change.

        Returns:
            Callable that removes the listener.
        """
        self._listeners.append(listener)
        listener(self)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # =========================================================================
    # Marks
    # =========================================================================

    @property
    def marks(self) -> list[Mark]:
        """Marks sorted by rounding order (unordered marks last)."""
        return sorted(self._marks.values(), key=lambda m: (m.order is None, m.order or 0))

    def get_mark(self, mark_id: str) -> Optional[Mark]:
        return self._marks.get(mark_id)

    def set_marks(self, marks: Iterable[Mark], wind_direction: Optional[float] = None) -> None:
        """Replace all marks (new course). Clears undo history."""
        self._marks = {m.id: m for m in marks}
        if wind_direction is not None:
            self.setup_wind_direction = wind_direction
        self.undo_stack.clear()
        self._notify()

    def update_mark(self, mark: Mark) -> None:
        self._marks[mark.id] = mark
        self._notify()

    def apply_positions(self, updates: Iterable[tuple[str, float, float]]) -> int:
        """Move marks to new positions as one undoable batch.

        Args:
            updates: (id, lat, lng) triples; unknown ids are ignored

        Returns:
            Number of marks moved.
        """
        previous = []
        for mark_id, lat, lng in updates:
            mark = self._marks.get(mark_id)
            if mark is None:
                logger.warning(f"apply_positions: unknown mark {mark_id}")
                continue
            previous.append((mark_id, mark.lat, mark.lng))
            self._marks[mark_id] = replace(mark, lat=lat, lng=lng)

        if previous:
            self._push_undo(PositionBatchAction(previous=tuple(previous)))
            self._notify()
        return len(previous)

    def _push_undo(self, action: PositionBatchAction) -> None:
        """Push action to undo stack, discarding the oldest beyond MAX_UNDO_STACK_SIZE."""
        self.undo_stack.append(action)
        while len(self.undo_stack) > UndoConfig.MAX_UNDO_STACK_SIZE:
            self.undo_stack.pop(0)

    def undo_last(self) -> PositionBatchAction:
        """Restore the positions from before the last applied batch.

        Raises:
            RuntimeError: If undo stack is empty (caller should check first).
        """
        if not self.undo_stack:
            raise RuntimeError("undo_last called with empty undo_stack")

        action = self.undo_stack.pop()
        for mark_id, lat, lng in action.previous:
            mark = self._marks.get(mark_id)
            if mark is not None:
                self._marks[mark_id] = replace(mark, lat=lat, lng=lng)
        logger.info(f"Restored {len(action.previous)} mark positions")
        self._notify()
        return action

    # =========================================================================
    # Wind
    # =========================================================================

    def validity(self, current_wind_direction: float) -> CourseValidity:
        """Compare the current wind with the wind the course was set for."""
        shift = angular_difference(self.setup_wind_direction, current_wind_direction)
        detected = shift > WindConfig.SHIFT_THRESHOLD_DEG

        recommendations = ()
        if detected:
            recommendations = (f"Wind has shifted {shift:.0f}°. Consider rotating course.",)

        return CourseValidity(
            is_valid=not detected,
            wind_shift_detected=detected,
            wind_shift_deg=shift,
            recommendations=recommendations,
        )

    def acknowledge_wind(self, wind_direction: float) -> None:
        """Record that the course has been re-laid for this wind."""
        self.setup_wind_direction = wind_direction
        self._notify()
