import os

# Run pygame without a real display or audio device.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from input_adapter import InputAdapter
from simulation import Simulation
from state import SimulationContext

WIDTH = 800
HEIGHT = 600


@pytest.fixture
def params():
    return {
        "seed": 1234,
        "vase_capacity": 5000,
        "fill_amount": 30,
        "stem_min_spacing": 5.0,
        "flower_radius_min": 20.0,
        "flower_radius_max": 45.0,
        "flower_life_min": 600,
        "flower_life_max": 1200,
    }


@pytest.fixture
def ctx(params):
    return SimulationContext(params, WIDTH, HEIGHT)


@pytest.fixture
def sim(ctx):
    return Simulation(ctx)


@pytest.fixture
def adapter(ctx):
    return InputAdapter(ctx)
