# physics.py
"""
Per-tick integration for rain drops and particles.

Rain drops fall under a light gravity and fade in. Particles follow one
of two rules depending on their kind: water falls and splashes under
half-strength gravity, while petals drift slowly and flutter sideways on
a per-particle phase.
"""
import numpy as np
from numba import jit

from constants import (
    RAIN_GRAVITY, RAIN_FADE_IN, WATER_GRAVITY, PETAL_ACCELERATION,
    PETAL_FLUTTER_AMPLITUDE, PETAL_FLUTTER_RATE, PARTICLE_CULL_MARGIN
)
from entities import RainDrop
from particle import ParticleKind, ParticleSystem

# Plain ints so the jitted kernel sees them as compile-time constants.
_PETAL = int(ParticleKind.PETAL)
_WATER = int(ParticleKind.WATER)

# --- Data Contracts ---
#
# step_rain_drop(drop: RainDrop) -> None:
#   - Side Effects: velocity.y += RAIN_GRAVITY; position += velocity;
#     opacity rises by RAIN_FADE_IN, saturating at 1.
#
# step_particles(particles: ParticleSystem, height: float) -> int:
#   - Side Effects: advances every particle by one tick, then removes
#     particles with life <= 0 or y > height + PARTICLE_CULL_MARGIN.
#   - Outputs: number of particles removed.


def step_rain_drop(drop: RainDrop) -> None:
    drop.velocity.y += RAIN_GRAVITY
    drop.x += drop.velocity.x
    drop.y += drop.velocity.y
    if drop.opacity < 1.0:
        drop.opacity = min(1.0, drop.opacity + RAIN_FADE_IN)


@jit(nopython=True)
def _step_particles_numba(
    positions, velocities, life, decay, kinds, phases,
    water_gravity, petal_acceleration, flutter_amplitude, flutter_rate
):
    """
    Numba-jitted function advancing every particle by one tick in place.
    """
    for i in range(positions.shape[0]):
        life[i] -= decay[i]

        if kinds[i] == _WATER:
            # Water falls at full speed.
            velocities[i, 1] += water_gravity
            positions[i, 0] += velocities[i, 0]
            positions[i, 1] += velocities[i, 1]
        elif kinds[i] == _PETAL:
            # Petals flutter sideways and drift down at half speed.
            phases[i] += flutter_rate
            positions[i, 0] += np.sin(phases[i]) * flutter_amplitude + velocities[i, 0] * 0.5
            positions[i, 1] += velocities[i, 1] * 0.5
            velocities[i, 1] += petal_acceleration
        else:
            positions[i, 0] += velocities[i, 0]
            positions[i, 1] += velocities[i, 1]


def step_particles(particles: ParticleSystem, height: float) -> int:
    """
    Advances all particles and culls the spent ones.

    Returns:
        int: The number of particles removed this tick.
    """
    if len(particles) == 0:
        return 0

    _step_particles_numba(
        particles.positions, particles.velocities,
        particles.life, particles.decay, particles.kinds, particles.phases,
        WATER_GRAVITY, PETAL_ACCELERATION,
        PETAL_FLUTTER_AMPLITUDE, PETAL_FLUTTER_RATE
    )

    alive = (particles.life > 0) & (particles.positions[:, 1] <= height + PARTICLE_CULL_MARGIN)
    return particles.keep(alive)
