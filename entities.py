# entities.py
"""
Plain records for the entities of the garden scene.

Stems, flowers and rain drops are mutable dataclasses held in ordered
lists by the SimulationContext. Particles are numerous and short-lived, so
they live in the array-backed ParticleSystem (see particle.py) instead.
"""
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple

from constants import (
    VASE_WIDTH, VASE_HEIGHT, VASE_OPENING_WIDTH, DEFAULT_VASE_CAPACITY
)

Color = Tuple[int, int, int]

# --- Data Contracts ---
#
# Stem:
#   - points only grow while grown is False; never two consecutive points
#     closer than the configured minimum spacing.
# Flower:
#   - stem_id references a live Stem until both are removed together.
#   - state only moves forward: BLOOMING -> ALIVE -> WITHERED.
#   - opacity is in [0, 1] and non-increasing once WITHERED.
# RainDrop:
#   - opacity is in [0, 1] and non-decreasing (fade-in).
# Vase:
#   - 0 <= current_volume <= max_capacity, current_volume non-decreasing.


class FlowerState(Enum):
    BLOOMING = "blooming"
    ALIVE = "alive"
    WITHERED = "withered"


class FlowerVariant(Enum):
    COSMOS = "cosmos"
    ROSE = "rose"
    LILY = "lily"


FLOWER_VARIANTS = (FlowerVariant.COSMOS, FlowerVariant.ROSE, FlowerVariant.LILY)


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def distance_to(self, other: "Point") -> float:
        return math.hypot(other.x - self.x, other.y - self.y)


@dataclass
class Vector:
    x: float = 0.0
    y: float = 0.0


@dataclass
class Stem:
    id: int
    points: List[Point]
    width: float
    # Advisory only; growth is bounded by the pointer, not by this value.
    max_length: float
    grown: bool = False

    @property
    def tip(self) -> Point:
        return self.points[-1]


@dataclass
class Flower:
    id: int
    stem_id: int
    x: float
    y: float
    color: Color
    petal_count: int
    max_radius: float
    max_life: int
    variant: FlowerVariant
    rotation: float
    # Drives the gentle sway; advanced once per tick while alive.
    sway_phase: float
    radius: float = 0.0
    state: FlowerState = FlowerState.BLOOMING
    age: int = 0
    opacity: float = 1.0


@dataclass
class RainDrop:
    id: int
    char: str
    x: float
    y: float
    velocity: Vector
    size: float
    opacity: float = 0.0


@dataclass
class Vase:
    """
    The singleton vase. Its position is the centre of the base and is
    recomputed whenever the viewport changes size.
    """
    x: float = 0.0
    y: float = 0.0
    width: float = VASE_WIDTH
    height: float = VASE_HEIGHT
    opening_width: float = VASE_OPENING_WIDTH
    max_capacity: float = DEFAULT_VASE_CAPACITY
    current_volume: float = field(default=0.0)

    @property
    def top_y(self) -> float:
        return self.y - self.height

    @property
    def is_full(self) -> bool:
        return self.current_volume >= self.max_capacity

    @property
    def fill_ratio(self) -> float:
        if self.max_capacity <= 0:
            return 0.0
        return min(self.current_volume / self.max_capacity, 1.0)

    def add_volume(self, amount: float) -> float:
        """Adds water up to capacity and returns the amount actually added."""
        added = max(0.0, min(amount, self.max_capacity - self.current_volume))
        self.current_volume += added
        return added
