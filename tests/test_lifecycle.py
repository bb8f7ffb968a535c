import pytest

from constants import PETAL_SHED_THRESHOLD
from entities import FlowerState, FlowerVariant
from lifecycle import (
    advance_flower, advance_flowers, complete_stem, extend_stem, spawn_flower,
    start_stem
)
from particle import ParticleKind
from state import SimulationContext

STATE_ORDER = [FlowerState.BLOOMING, FlowerState.ALIVE, FlowerState.WITHERED]


def grow_flower(ctx, variant=None, at=(100.0, 500.0)):
    stem = start_stem(ctx, *at)
    extend_stem(ctx, stem.id, at[0], at[1] - 50)
    flower = complete_stem(ctx, stem.id)
    if variant is not None:
        ctx.flowers.remove(flower)
        flower = spawn_flower(ctx, stem, variant)
    return stem, flower


def test_pointer_gesture_grows_stem_and_blooming_flower(adapter, ctx):
    adapter.on_pointer_down(100, 500)
    assert adapter.on_pointer_move(100, 450)
    flower = adapter.on_pointer_up()

    assert len(ctx.stems) == 1
    stem = ctx.stems[0]
    assert len(stem.points) == 2
    assert stem.grown
    assert ctx.flowers == [flower]
    assert flower.state is FlowerState.BLOOMING
    assert flower.radius == 0
    assert (flower.x, flower.y) == (100, 450)
    assert flower.stem_id == stem.id


def test_stem_points_respect_minimum_spacing(ctx):
    stem = start_stem(ctx, 0, 0)
    for i in range(1, 200):
        extend_stem(ctx, stem.id, i * 0.7, i * 0.7)
    pairs = zip(stem.points, stem.points[1:])
    assert all(a.distance_to(b) > ctx.stem_min_spacing for a, b in pairs)
    assert len(stem.points) > 1


def test_move_exactly_at_spacing_is_rejected(ctx):
    stem = start_stem(ctx, 0, 0)
    assert not extend_stem(ctx, stem.id, 5, 0)
    assert extend_stem(ctx, stem.id, 5.01, 0)


def test_grown_stem_is_frozen(ctx):
    stem = start_stem(ctx, 0, 0)
    complete_stem(ctx, stem.id)
    assert not extend_stem(ctx, stem.id, 100, 100)
    assert complete_stem(ctx, stem.id) is None
    assert len(stem.points) == 1
    assert len(ctx.flowers) == 1


def test_missing_stem_lookups_are_noops(ctx):
    assert not extend_stem(ctx, 999, 10, 10)
    assert complete_stem(ctx, 999) is None
    assert not ctx.remove_stem(999)


def test_lily_always_has_six_petals(ctx):
    for _ in range(20):
        _, flower = grow_flower(ctx, FlowerVariant.LILY)
        assert flower.petal_count == 6


@pytest.mark.parametrize("variant", [FlowerVariant.COSMOS, FlowerVariant.ROSE])
def test_other_variants_petal_count_in_range(ctx, variant):
    counts = {grow_flower(ctx, variant)[1].petal_count for _ in range(60)}
    assert counts <= {5, 6, 7, 8}
    assert len(counts) > 1


def test_same_seed_gives_same_flowers(params):
    a = SimulationContext(params, 800, 600)
    b = SimulationContext(params, 800, 600)
    fa = grow_flower(a)[1]
    fb = grow_flower(b)[1]
    assert (fa.variant, fa.petal_count, fa.max_radius, fa.color) == \
        (fb.variant, fb.petal_count, fb.max_radius, fb.color)


def test_flower_parameters_within_bounds(ctx):
    for _ in range(30):
        _, flower = grow_flower(ctx)
        assert 20 <= flower.max_radius <= 45
        assert 600 <= flower.max_life <= 1200
        assert all(0 <= c <= 255 for c in flower.color)


def test_states_only_move_forward_until_removal(ctx):
    stem, flower = grow_flower(ctx)
    flower.max_life = 5
    seen = [flower.state]
    for _ in range(5000):
        advance_flowers(ctx)
        if flower not in ctx.flowers:
            break
        if flower.state is not seen[-1]:
            seen.append(flower.state)
    assert seen == STATE_ORDER
    assert flower not in ctx.flowers
    assert stem not in ctx.stems


def test_blooming_eases_toward_max_radius(ctx):
    _, flower = grow_flower(ctx)
    flower.max_radius = 40.0
    advance_flower(ctx, flower)
    assert flower.radius == pytest.approx(40.0 * 0.03)
    while flower.state is FlowerState.BLOOMING:
        advance_flower(ctx, flower)
    assert abs(flower.max_radius - flower.radius) < 0.5


def test_alive_flower_ages_and_sways(ctx):
    _, flower = grow_flower(ctx)
    flower.state = FlowerState.ALIVE
    rotation = flower.rotation
    advance_flower(ctx, flower)
    assert flower.age == 1
    assert flower.rotation != rotation
    assert abs(flower.rotation - rotation) <= 0.002


def test_withered_opacity_non_increasing_and_removed_at_zero(ctx):
    stem, flower = grow_flower(ctx)
    flower.state = FlowerState.WITHERED
    previous = flower.opacity
    removed = False
    for _ in range(1100):
        removed = advance_flower(ctx, flower)
        assert flower.opacity <= previous
        previous = flower.opacity
        if removed:
            break
        assert flower.opacity > 0
    assert removed
    assert flower.opacity == 0


def test_removal_cascades_to_stem_only(ctx):
    stem_a, flower_a = grow_flower(ctx)
    stem_b, flower_b = grow_flower(ctx, at=(300.0, 500.0))
    flower_a.state = FlowerState.WITHERED
    flower_a.opacity = 0.0005

    assert advance_flowers(ctx) == 1
    assert ctx.flowers == [flower_b]
    assert ctx.stems == [stem_b]


def test_faded_flower_always_sheds_a_petal(ctx):
    _, flower = grow_flower(ctx)
    flower.state = FlowerState.WITHERED
    flower.opacity = PETAL_SHED_THRESHOLD
    advance_flower(ctx, flower)
    assert ctx.particles.count_kind(ParticleKind.PETAL) == 1
    petal_color = tuple(int(c) for c in ctx.particles.colors[0][:3])
    assert petal_color == flower.color


def test_shed_petals_start_near_flower(ctx):
    _, flower = grow_flower(ctx)
    flower.state = FlowerState.WITHERED
    flower.opacity = 0.05
    for _ in range(10):
        advance_flower(ctx, flower)
    assert len(ctx.particles) == 10
    offsets = ctx.particles.positions - (flower.x, flower.y)
    assert (abs(offsets) <= 15).all()
    assert (ctx.particles.velocities[:, 1] >= 0.5).all()
