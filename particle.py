# particle.py
"""
Manages the state of all particles in the scene.

This module defines the ParticleSystem class, which stores falling petals
and water splashes in parallel NumPy arrays. Particles are appended in
spawn order and removed by order-preserving mask compaction, so no
particle is ever skipped or processed twice within a tick.
"""
import logging
from enum import IntEnum
from typing import Sequence

import numpy as np

# --- Data Contracts ---
#
# class ParticleSystem:
#   - spawn(...) -> int:
#     - Appends one particle at the end of every array.
#     - Outputs: the index of the new particle.
#   - keep(mask: np.ndarray) -> int:
#     - Inputs: boolean array of shape (N,).
#     - Outputs: number of particles removed.
#     - Invariants: surviving particles keep their relative order.
#   - Invariants (always):
#     - self.positions and self.velocities have shape (N, 2), dtype float64.
#     - self.colors has shape (N, 4), dtype uint8 (RGBA).
#     - self.life, self.decay, self.sizes, self.phases have shape (N,), float64.
#     - self.kinds has shape (N,), dtype int32; self.ids shape (N,), int64.


class ParticleKind(IntEnum):
    PETAL = 0
    WATER = 1
    # Reserved; spawned by nothing yet.
    SPARKLE = 2


class ParticleSystem:
    """
    A container for all particles, managing their state via NumPy arrays.
    """
    def __init__(self):
        self.ids = np.zeros(0, dtype=np.int64)
        self.positions = np.zeros((0, 2), dtype=np.float64)
        self.velocities = np.zeros((0, 2), dtype=np.float64)
        self.colors = np.zeros((0, 4), dtype=np.uint8)
        self.life = np.zeros(0, dtype=np.float64)
        self.decay = np.zeros(0, dtype=np.float64)
        self.sizes = np.zeros(0, dtype=np.float64)
        self.kinds = np.zeros(0, dtype=np.int32)
        self.phases = np.zeros(0, dtype=np.float64)

        logging.debug("ParticleSystem initialized with empty particle arrays.")

    def __len__(self) -> int:
        return self.ids.shape[0]

    def spawn(
        self,
        particle_id: int,
        x: float,
        y: float,
        vx: float,
        vy: float,
        color: Sequence[int],
        decay: float,
        size: float,
        kind: ParticleKind,
        phase: float = 0.0,
        life: float = 1.0,
    ) -> int:
        """
        Appends a particle and returns its index.

        Args:
            color: RGB or RGBA; alpha defaults to fully opaque.
        """
        rgba = tuple(color) if len(color) == 4 else tuple(color) + (255,)
        self.ids = np.append(self.ids, np.int64(particle_id))
        self.positions = np.vstack((self.positions, [[x, y]]))
        self.velocities = np.vstack((self.velocities, [[vx, vy]]))
        self.colors = np.vstack((self.colors, np.array([rgba], dtype=np.uint8)))
        self.life = np.append(self.life, life)
        self.decay = np.append(self.decay, decay)
        self.sizes = np.append(self.sizes, size)
        self.kinds = np.append(self.kinds, np.int32(kind)).astype(np.int32)
        self.phases = np.append(self.phases, phase)
        return len(self) - 1

    def keep(self, mask: np.ndarray) -> int:
        """
        Drops every particle whose mask entry is False.

        Returns:
            int: The number of particles removed.
        """
        removed = int(len(self) - np.count_nonzero(mask))
        if removed == 0:
            return 0
        self.ids = self.ids[mask]
        self.positions = self.positions[mask]
        self.velocities = self.velocities[mask]
        self.colors = self.colors[mask]
        self.life = self.life[mask]
        self.decay = self.decay[mask]
        self.sizes = self.sizes[mask]
        self.kinds = self.kinds[mask]
        self.phases = self.phases[mask]
        return removed

    def count_kind(self, kind: ParticleKind) -> int:
        return int(np.count_nonzero(self.kinds == int(kind)))
