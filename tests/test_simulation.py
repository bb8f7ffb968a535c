import json

import pytest

from entities import FlowerState
from state import SimulationContext
from utils import DEFAULT_CONFIG, clamp01, load_config, merge_config, to_alpha


def test_zero_sized_resize_keeps_positions(ctx):
    before = (ctx.width, ctx.height, ctx.vase.x, ctx.vase.y)
    assert ctx.resize(0, 0) is False
    assert ctx.resize(1024, 0) is False
    assert (ctx.width, ctx.height, ctx.vase.x, ctx.vase.y) == before


def test_resize_recentres_vase(ctx):
    assert ctx.resize(1000, 700)
    assert ctx.vase.x == 500
    assert ctx.vase.y == 620


def test_resize_preserves_volume(ctx):
    ctx.vase.current_volume = 1200
    ctx.resize(1000, 700)
    assert ctx.vase.current_volume == 1200


@pytest.mark.parametrize("override", [
    {"vase_capacity": 0},
    {"fill_amount": -1},
    {"stem_min_spacing": -0.5},
    {"flower_radius_min": 0},
    {"flower_radius_min": 50, "flower_radius_max": 40},
    {"flower_life_min": 0},
    {"flower_life_min": 900, "flower_life_max": 600},
])
def test_invalid_parameters_are_rejected(params, override):
    params.update(override)
    with pytest.raises(ValueError):
        SimulationContext(params, 800, 600)


def test_defaults_fill_missing_parameters():
    ctx = SimulationContext({}, 800, 600)
    assert ctx.vase.max_capacity == 5000
    assert ctx.fill_amount == 30
    assert ctx.stem_min_spacing == 5.0


def test_toggle_night(ctx):
    assert ctx.is_night is False
    assert ctx.toggle_night() is True
    assert ctx.toggle_night() is False


def test_step_advances_everything_once(ctx, sim, adapter):
    adapter.on_pointer_down(200, 400)
    adapter.on_pointer_move(200, 300)
    flower = adapter.on_pointer_up()
    drop = adapter.on_key_press("x")
    y = drop.y

    sim.step()

    assert ctx.tick_count == 1
    assert flower.radius > 0
    assert drop.y > y
    assert sim.stats()["flowers"] == 1
    assert sim.stats()["rain_drops"] == 1


def test_full_garden_cycle_clears_itself(params):
    params.update(flower_life_min=10, flower_life_max=10, seed=7)
    ctx = SimulationContext(params, 800, 600)
    from input_adapter import InputAdapter
    from simulation import Simulation
    sim = Simulation(ctx)
    adapter = InputAdapter(ctx)
    adapter.on_pointer_down(300, 500)
    adapter.on_pointer_move(310, 400)
    adapter.on_pointer_up()
    for char in "hello":
        adapter.on_key_press(char)

    saw_petals = False
    for _ in range(3000):
        sim.step()
        saw_petals = saw_petals or sim.stats()["petals"] > 0
        if not ctx.flowers and not ctx.rain_drops and len(ctx.particles) == 0:
            break

    assert saw_petals
    assert ctx.flowers == []
    assert ctx.stems == []
    assert ctx.rain_drops == []
    assert len(ctx.particles) == 0


def test_flower_state_survives_many_ticks(ctx, sim, adapter):
    adapter.on_pointer_down(200, 400)
    adapter.on_pointer_move(200, 300)
    flower = adapter.on_pointer_up()
    for _ in range(300):
        sim.step()
    assert flower.state is FlowerState.ALIVE


def test_load_config_merges_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"simulation_parameters": {"seed": 3}, "logging": {"level": "DEBUG"}}))
    config = load_config(str(path))
    assert config["simulation_parameters"]["seed"] == 3
    assert config["simulation_parameters"]["vase_capacity"] == 5000
    assert config["logging"]["level"] == "DEBUG"
    assert config["run_control"] == DEFAULT_CONFIG["run_control"]


def test_load_config_reraises_file_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "missing.json"))
    broken = tmp_path / "broken.json"
    broken.write_text("{not json")
    with pytest.raises(json.JSONDecodeError):
        load_config(str(broken))


@pytest.mark.parametrize("run_control", [
    {"log_throttle_steps": 0},
    {"log_throttle_steps": -5},
    {"max_steps": -1},
])
def test_load_config_rejects_unusable_loop_settings(tmp_path, run_control):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"run_control": run_control}))
    with pytest.raises(ValueError, match="Configuration error"):
        load_config(str(path))


def test_merge_config_does_not_mutate_defaults():
    merge_config({"run_control": {"max_steps": 10}})
    assert DEFAULT_CONFIG["run_control"]["max_steps"] == 0


def test_alpha_helpers_clamp():
    assert clamp01(-0.2) == 0.0
    assert clamp01(1.3) == 1.0
    assert to_alpha(1.0) == 255
    assert to_alpha(-0.001) == 0
    assert to_alpha(1.0, 0.5) == 128
