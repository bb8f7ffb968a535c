# simulation.py
"""
Handles the per-tick advance of the garden scene.

This module defines the Simulation class, which is responsible for
advancing every entity by one tick. It runs in the same order the scene
is painted (rain, then flowers, then particles) so that anything spawned
earlier in a tick is also advanced later in that tick.
"""
import logging
from typing import Dict

from collision import resolve_drop
from lifecycle import advance_flowers
from particle import ParticleKind
from physics import step_particles, step_rain_drop
from state import SimulationContext

# --- Data Contracts ---
#
# class Simulation:
#   - __init__(self, context: SimulationContext):
#     - Inputs: an initialized SimulationContext.
#     - Side Effects: stores a reference to the context.
#
#   - step(self) -> None:
#     - Inputs: None (operates on the context).
#     - Outputs: None
#     - Side Effects: advances rain drops (physics then collision), flowers
#       (lifecycle, cascade removal of stems) and particles (physics then
#       culling); increments context.tick_count.
#     - Invariants: vase volume never decreases nor exceeds capacity.
#       Stores keep insertion order.
#
#   - stats(self) -> Dict[str, float]:
#     - Outputs: aggregate entity counts for throttled logging.

class Simulation:
    """
    Drives the explicit advance pass for one SimulationContext.
    """
    def __init__(self, context: SimulationContext):
        """
        Initializes the simulation driver.

        Args:
            context (SimulationContext): The scene to advance.
        """
        self.context = context
        self.drops_collected = 0
        logging.info("Simulation logic initialized.")

    def step(self):
        """
        Executes one tick of the simulation.
        """
        ctx = self.context

        # 1. Rain: integrate, then test against the vase and the bottom edge.
        #    Reverse iteration keeps deletions from skipping a drop.
        for index in range(len(ctx.rain_drops) - 1, -1, -1):
            drop = ctx.rain_drops[index]
            step_rain_drop(drop)
            if resolve_drop(ctx, drop):
                if drop.y <= ctx.height:
                    self.drops_collected += 1
                del ctx.rain_drops[index]

        # 2. Flowers: lifecycle state machines, shedding petals as they wither.
        advance_flowers(ctx)

        # 3. Particles: petals and splashes spawned above move this tick too.
        step_particles(ctx.particles, ctx.height)

        ctx.tick_count += 1

    def stats(self) -> Dict[str, float]:
        ctx = self.context
        return {
            "stems": len(ctx.stems),
            "flowers": len(ctx.flowers),
            "rain_drops": len(ctx.rain_drops),
            "petals": ctx.particles.count_kind(ParticleKind.PETAL),
            "splashes": ctx.particles.count_kind(ParticleKind.WATER),
            "fill_ratio": ctx.vase.fill_ratio,
        }
