import numpy as np
import pytest

from entities import RainDrop, Vector
from particle import ParticleKind, ParticleSystem
from physics import step_particles, step_rain_drop


def make_drop(**overrides):
    fields = dict(id=1, char="a", x=100.0, y=0.0, velocity=Vector(0.0, 4.0), size=16.0)
    fields.update(overrides)
    return RainDrop(**fields)


def spawn(system, kind, x=100.0, y=100.0, vx=0.0, vy=1.0, decay=0.01, phase=0.0):
    return system.spawn(len(system) + 1, x, y, vx, vy, (200, 100, 100), decay, 3.0, kind, phase=phase)


def test_rain_drop_falls_with_light_gravity():
    drop = make_drop()
    step_rain_drop(drop)
    assert drop.velocity.y == pytest.approx(4.02)
    assert drop.y == pytest.approx(4.02)
    assert drop.x == 100.0


def test_rain_drop_fades_in_and_saturates():
    drop = make_drop()
    opacities = []
    for _ in range(25):
        step_rain_drop(drop)
        opacities.append(drop.opacity)
    assert opacities[0] == pytest.approx(0.05)
    assert opacities == sorted(opacities)
    assert opacities[-1] == 1.0


def test_water_particle_falls_under_half_gravity():
    system = ParticleSystem()
    spawn(system, ParticleKind.WATER, vx=1.0, vy=-2.0, decay=0.015)
    step_particles(system, height=600)
    assert system.velocities[0, 1] == pytest.approx(-2.0 + 0.075)
    assert system.positions[0, 0] == pytest.approx(101.0)
    assert system.positions[0, 1] == pytest.approx(100.0 - 2.0 + 0.075)
    assert system.life[0] == pytest.approx(0.985)


def test_petal_drifts_slowly_and_flutters():
    system = ParticleSystem()
    spawn(system, ParticleKind.PETAL, vx=1.0, vy=1.0, phase=0.0)
    step_particles(system, height=600)
    phase = system.phases[0]
    assert phase == pytest.approx(0.033)
    assert system.positions[0, 0] == pytest.approx(100.0 + np.sin(phase) * 0.5 + 0.5)
    assert system.positions[0, 1] == pytest.approx(100.5)
    assert system.velocities[0, 1] == pytest.approx(1.005)


def test_petals_fall_slower_than_water():
    system = ParticleSystem()
    spawn(system, ParticleKind.PETAL, vy=1.0, decay=0.0001)
    spawn(system, ParticleKind.WATER, vy=1.0, decay=0.0001)
    for _ in range(20):
        step_particles(system, height=10_000)
    petal_y, water_y = system.positions[:, 1]
    assert petal_y < water_y


def test_spent_particles_are_culled_in_order():
    system = ParticleSystem()
    spawn(system, ParticleKind.PETAL, decay=0.5)
    spawn(system, ParticleKind.PETAL, decay=1.0)   # life hits 0
    spawn(system, ParticleKind.WATER, decay=0.1)
    spawn(system, ParticleKind.WATER, y=700.0)     # below height + 50
    ids_before = system.ids.copy()

    removed = step_particles(system, height=600)

    assert removed == 2
    assert list(system.ids) == [ids_before[0], ids_before[2]]


def test_empty_system_is_a_noop():
    system = ParticleSystem()
    assert step_particles(system, height=600) == 0
    assert len(system) == 0


def test_keep_preserves_all_columns():
    system = ParticleSystem()
    for i in range(5):
        spawn(system, ParticleKind.PETAL, x=float(i))
    system.keep(np.array([True, False, True, False, True]))
    assert list(system.positions[:, 0]) == [0.0, 2.0, 4.0]
    assert system.colors.shape == (3, 4)
    assert system.kinds.dtype == np.int32
