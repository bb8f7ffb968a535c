# state.py
"""
The explicit simulation context.

Everything one tick reads or writes lives on a SimulationContext: the
entity stores, the vase, the day/night flag, the viewport and the random
number generator. Passing it around explicitly lets the whole engine run
without a window, which is how the tests drive it.
"""
import itertools
import logging
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from constants import (
    VASE_BOTTOM_OFFSET, DEFAULT_VASE_CAPACITY, DEFAULT_FILL_AMOUNT,
    DEFAULT_STEM_MIN_SPACING, DEFAULT_FLOWER_RADIUS_RANGE,
    DEFAULT_FLOWER_LIFE_RANGE
)
from entities import Flower, RainDrop, Stem, Vase
from particle import ParticleSystem

# --- Data Contracts ---
#
# class SimulationContext:
#   - __init__(self, params: Dict[str, Any], width: int, height: int, is_night: bool = False):
#     - Inputs:
#       - params: the "simulation_parameters" section of config.json.
#         - "seed": Optional[int]
#         - "vase_capacity": float > 0
#         - "fill_amount": float > 0
#         - "stem_min_spacing": float >= 0
#         - "flower_radius_min"/"flower_radius_max": 0 < min <= max
#         - "flower_life_min"/"flower_life_max": 0 < min <= max
#       - width, height: initial viewport size.
#     - Raises: ValueError on invalid parameters.
#
#   - resize(self, width: int, height: int) -> bool:
#     - Side Effects: recentres the vase. Zero-sized surfaces are ignored
#       and leave every position unchanged.
#     - Outputs: True if the new size was applied.

class SimulationContext:
    """
    Owns the entity stores and shared flags for one garden scene.
    """
    def __init__(self, params: Dict[str, Any], width: int, height: int, is_night: bool = False):
        self.seed = params.get('seed')
        # All randomness is controlled by a single generator so a seeded
        # context replays identically.
        self.rng = np.random.default_rng(self.seed)

        self.fill_amount = float(params.get('fill_amount', DEFAULT_FILL_AMOUNT))
        self.stem_min_spacing = float(params.get('stem_min_spacing', DEFAULT_STEM_MIN_SPACING))
        self.flower_radius_range: Tuple[float, float] = (
            float(params.get('flower_radius_min', DEFAULT_FLOWER_RADIUS_RANGE[0])),
            float(params.get('flower_radius_max', DEFAULT_FLOWER_RADIUS_RANGE[1])),
        )
        self.flower_life_range: Tuple[int, int] = (
            int(params.get('flower_life_min', DEFAULT_FLOWER_LIFE_RANGE[0])),
            int(params.get('flower_life_max', DEFAULT_FLOWER_LIFE_RANGE[1])),
        )
        capacity = float(params.get('vase_capacity', DEFAULT_VASE_CAPACITY))
        self._validate(capacity)

        # --- Entity Stores (insertion ordered) ---
        self.stems: List[Stem] = []
        self.flowers: List[Flower] = []
        self.rain_drops: List[RainDrop] = []
        self.particles = ParticleSystem()
        self.vase = Vase(max_capacity=capacity)

        # Written by the UI, read once per tick by the renderer.
        self.is_night = is_night
        self.tick_count = 0
        self._ids = itertools.count(1)

        self.width = 0
        self.height = 0
        self.resize(width, height)

        logging.info(
            f"SimulationContext initialized ({self.width}x{self.height}, "
            f"seed={self.seed}, vase capacity {capacity:.0f})."
        )

    def _validate(self, capacity: float) -> None:
        problems = []
        if capacity <= 0:
            problems.append(f"vase_capacity must be positive, got {capacity}")
        if self.fill_amount <= 0:
            problems.append(f"fill_amount must be positive, got {self.fill_amount}")
        if self.stem_min_spacing < 0:
            problems.append(f"stem_min_spacing must not be negative, got {self.stem_min_spacing}")
        low, high = self.flower_radius_range
        if low <= 0 or low > high:
            problems.append(f"flower radius range must satisfy 0 < min <= max, got {low}..{high}")
        low, high = self.flower_life_range
        if low <= 0 or low > high:
            problems.append(f"flower life range must satisfy 0 < min <= max, got {low}..{high}")
        if problems:
            msg = "Configuration error: " + "; ".join(problems) + "."
            logging.critical(msg)
            raise ValueError(msg)

    def next_id(self) -> int:
        return next(self._ids)

    def uniform(self, low: float, high: float) -> float:
        return float(self.rng.uniform(low, high))

    def resize(self, width: int, height: int) -> bool:
        """
        Applies a new viewport size and recentres the vase.
        """
        if width <= 0 or height <= 0:
            logging.debug(f"Ignoring resize to empty surface ({width}x{height}).")
            return False
        self.width = int(width)
        self.height = int(height)
        self.vase.x = self.width / 2
        self.vase.y = self.height - VASE_BOTTOM_OFFSET
        logging.debug(f"Viewport resized to {self.width}x{self.height}; vase at ({self.vase.x}, {self.vase.y}).")
        return True

    def toggle_night(self) -> bool:
        self.is_night = not self.is_night
        logging.info(f"Switched to {'night' if self.is_night else 'day'} mode.")
        return self.is_night

    def find_stem(self, stem_id: Optional[int]) -> Optional[Stem]:
        for stem in self.stems:
            if stem.id == stem_id:
                return stem
        return None

    def remove_stem(self, stem_id: int) -> bool:
        for index, stem in enumerate(self.stems):
            if stem.id == stem_id:
                del self.stems[index]
                return True
        return False
