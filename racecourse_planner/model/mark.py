"""Mark - A race course buoy position with its rounding metadata.

Enumerations describing the course:
- MarkRole: What the mark is for (selects its bearing-table entry)
- GateSide: Which member of a gate pair the mark is
- CourseType / BoatClass: Select the bearing-table variant

A Mark is consumed as plain data from the persistence layer and never
mutated; adjusters return new positions keyed by mark id.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from racecourse_planner.model.geo_point import GeoPoint


class MarkRole(Enum):
    """Role of a mark in the course."""

    WINDWARD = "windward"
    LEEWARD = "leeward"
    WING = "wing"
    OFFSET = "offset"
    TURNING_MARK = "turning_mark"
    PIN = "pin"
    START_BOAT = "start_boat"
    FINISH = "finish"
    GATE = "gate"
    OTHER = "other"

    @classmethod
    def parse(cls, value: "MarkRole | str") -> "MarkRole":
        """Coerce a role or role string; unknown strings become OTHER."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER


class GateSide(Enum):
    """Side of a gate pair, as seen sailing through it downwind."""

    PORT = "port"
    STARBOARD = "starboard"

    @classmethod
    def parse(cls, value: "GateSide | str | None") -> Optional["GateSide"]:
        """Coerce a side or side string; empty or unknown values become None."""
        if value is None or isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


class CourseType(Enum):
    """Course topology."""

    WINDWARD_LEEWARD = "windward_leeward"
    TRIANGLE = "triangle"
    TRAPEZOID = "trapezoid"


class BoatClass(Enum):
    """Boat performance class (affects reach angles)."""

    SPINNAKER = "spinnaker"
    NON_SPINNAKER = "non_spinnaker"
    FOILING = "foiling"


@dataclass(frozen=True)
class Mark:
    """A mark as supplied for adjustment.

    Attributes:
        id: Identifier from the persistence layer
        lat: Latitude in decimal degrees
        lng: Longitude in decimal degrees
        role: Mark role (string values are coerced to MarkRole)
        order: Position in the rounding sequence (None = not set)
        is_gate: True if the mark is one member of a gate pair
        gate_side: Port/starboard for gate members (strings coerced)
        name: Display name
    """

    id: str
    lat: float
    lng: float
    role: MarkRole = MarkRole.OTHER
    order: Optional[int] = None
    is_gate: bool = False
    gate_side: Optional[GateSide] = None
    name: str = ""

    def __post_init__(self) -> None:
        # Frozen dataclass: coerce through object.__setattr__
        object.__setattr__(self, "role", MarkRole.parse(self.role))
        object.__setattr__(self, "gate_side", GateSide.parse(self.gate_side))

    @property
    def position(self) -> GeoPoint:
        return GeoPoint(lat=self.lat, lng=self.lng)

    @property
    def has_valid_order(self) -> bool:
        return self.order is not None and self.order >= 0

    def __repr__(self) -> str:
        gate = f", gate={self.gate_side.value if self.gate_side else '?'}" if self.is_gate else ""
        return f"Mark({self.id}, {self.role.value}, order={self.order}{gate}, ({self.lat:.5f}, {self.lng:.5f}))"
