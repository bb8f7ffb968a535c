# lifecycle.py
"""
Creation and lifecycle rules for stems, flowers and rain drops.

Stems are drawn by the pointer and freeze when released. Each finished
stem grows one flower, which blooms, lives, withers while shedding petals,
and finally disappears together with its stem.
"""
import logging
import math
from typing import Optional

import pygame

from constants import (
    BLOOM_RATE, BLOOM_EPSILON, SWAY_AMPLITUDE, SWAY_RATE, WITHER_RATE,
    PETAL_SHED_CHANCE, PETAL_SHED_THRESHOLD, LILY_PETAL_COUNT,
    PETAL_COUNT_RANGE, FULL_TURN, STEM_WIDTH_RANGE, STEM_LENGTH_RANGE,
    PETAL_JITTER, PETAL_SPEED_X, PETAL_SPEED_Y, PETAL_DECAY_RANGE,
    PETAL_SIZE_RANGE, RAIN_SPAWN_Y, RAIN_SPEED_RANGE, RAIN_SIZE_RANGE,
    FLOWER_HUE_BANDS, FLOWER_SATURATION_DAY, FLOWER_SATURATION_NIGHT,
    FLOWER_LIGHTNESS_DAY, FLOWER_LIGHTNESS_NIGHT
)
from entities import (
    Color, Flower, FlowerState, FlowerVariant, FLOWER_VARIANTS, Point,
    RainDrop, Stem, Vector
)
from particle import ParticleKind
from state import SimulationContext

# --- Data Contracts ---
#
# advance_flower(ctx, flower) -> bool:
#   - BLOOMING: radius eases toward max_radius; ALIVE once within BLOOM_EPSILON.
#   - ALIVE: age += 1 and sway; WITHERED once age > max_life.
#   - WITHERED: opacity -= WITHER_RATE (floored at 0); sheds a petal with
#     probability PETAL_SHED_CHANCE, always when opacity <= PETAL_SHED_THRESHOLD.
#   - Outputs: True exactly when the flower must be removed (opacity <= 0).
#
# advance_flowers(ctx) -> int:
#   - Side Effects: removes finished flowers and, with each, its stem.
#   - Outputs: number of flowers removed.


# --- Stems ---

def start_stem(ctx: SimulationContext, x: float, y: float) -> Stem:
    stem = Stem(
        id=ctx.next_id(),
        points=[Point(x, y)],
        width=ctx.uniform(*STEM_WIDTH_RANGE),
        max_length=ctx.uniform(*STEM_LENGTH_RANGE),
    )
    ctx.stems.append(stem)
    logging.debug(f"Stem {stem.id} started at ({x:.1f}, {y:.1f}).")
    return stem


def extend_stem(ctx: SimulationContext, stem_id: int, x: float, y: float) -> bool:
    """
    Appends a point to a growing stem if it is far enough from the tip.

    Returns:
        bool: True if a point was appended. Unknown or grown stems no-op.
    """
    stem = ctx.find_stem(stem_id)
    if stem is None or stem.grown:
        return False
    point = Point(x, y)
    if stem.tip.distance_to(point) <= ctx.stem_min_spacing:
        return False
    stem.points.append(point)
    return True


def complete_stem(ctx: SimulationContext, stem_id: int) -> Optional[Flower]:
    """Freezes a stem and grows its flower at the tip."""
    stem = ctx.find_stem(stem_id)
    if stem is None or stem.grown:
        return None
    stem.grown = True
    flower = spawn_flower(ctx, stem)
    logging.debug(
        f"Stem {stem.id} grown with {len(stem.points)} points; "
        f"{flower.variant.value} flower {flower.id} blooming."
    )
    return flower


# --- Flowers ---

def random_flower_color(ctx: SimulationContext) -> Color:
    """Picks a muted, pastel colour, paler by day than by night."""
    roll = ctx.rng.random()
    hue_range = FLOWER_HUE_BANDS[-1][1]
    for threshold, band in FLOWER_HUE_BANDS:
        if roll < threshold:
            hue_range = band
            break
    if ctx.is_night:
        saturation = ctx.uniform(*FLOWER_SATURATION_NIGHT)
        lightness = ctx.uniform(*FLOWER_LIGHTNESS_NIGHT)
    else:
        saturation = ctx.uniform(*FLOWER_SATURATION_DAY)
        lightness = ctx.uniform(*FLOWER_LIGHTNESS_DAY)

    color = pygame.Color(0, 0, 0)
    color.hsla = (ctx.uniform(*hue_range) % 360, saturation, lightness, 100)
    return (color.r, color.g, color.b)


def spawn_flower(
    ctx: SimulationContext, stem: Stem, variant: Optional[FlowerVariant] = None
) -> Flower:
    if variant is None:
        variant = FLOWER_VARIANTS[int(ctx.rng.integers(len(FLOWER_VARIANTS)))]
    if variant is FlowerVariant.LILY:
        petal_count = LILY_PETAL_COUNT
    else:
        low, high = PETAL_COUNT_RANGE
        petal_count = int(ctx.rng.integers(low, high + 1))

    tip = stem.tip
    life_low, life_high = ctx.flower_life_range
    flower = Flower(
        id=ctx.next_id(),
        stem_id=stem.id,
        x=tip.x,
        y=tip.y,
        color=random_flower_color(ctx),
        petal_count=petal_count,
        max_radius=ctx.uniform(*ctx.flower_radius_range),
        max_life=int(ctx.rng.integers(life_low, life_high + 1)),
        variant=variant,
        rotation=ctx.uniform(0.0, FULL_TURN),
        sway_phase=tip.x,
    )
    ctx.flowers.append(flower)
    return flower


def shed_petal(ctx: SimulationContext, flower: Flower) -> None:
    ctx.particles.spawn(
        ctx.next_id(),
        flower.x + ctx.uniform(-PETAL_JITTER, PETAL_JITTER),
        flower.y + ctx.uniform(-PETAL_JITTER, PETAL_JITTER),
        vx=ctx.uniform(*PETAL_SPEED_X),
        vy=ctx.uniform(*PETAL_SPEED_Y),
        color=flower.color,
        decay=ctx.uniform(*PETAL_DECAY_RANGE),
        size=ctx.uniform(*PETAL_SIZE_RANGE),
        kind=ParticleKind.PETAL,
        phase=ctx.uniform(0.0, FULL_TURN),
    )


def advance_flower(ctx: SimulationContext, flower: Flower) -> bool:
    if flower.state is FlowerState.BLOOMING:
        flower.radius += (flower.max_radius - flower.radius) * BLOOM_RATE
        if abs(flower.max_radius - flower.radius) < BLOOM_EPSILON:
            flower.state = FlowerState.ALIVE

    elif flower.state is FlowerState.ALIVE:
        flower.age += 1
        flower.sway_phase += SWAY_RATE
        flower.rotation += math.sin(flower.sway_phase) * SWAY_AMPLITUDE
        if flower.age > flower.max_life:
            flower.state = FlowerState.WITHERED
            logging.debug(f"Flower {flower.id} withered after {flower.age} ticks.")

    elif flower.state is FlowerState.WITHERED:
        flower.opacity = max(0.0, flower.opacity - WITHER_RATE)
        if ctx.rng.random() < PETAL_SHED_CHANCE or flower.opacity <= PETAL_SHED_THRESHOLD:
            shed_petal(ctx, flower)
        return flower.opacity <= 0.0

    return False


def advance_flowers(ctx: SimulationContext) -> int:
    removed = 0
    # Reverse so deletions never shift an unvisited flower.
    for index in range(len(ctx.flowers) - 1, -1, -1):
        flower = ctx.flowers[index]
        if advance_flower(ctx, flower):
            del ctx.flowers[index]
            ctx.remove_stem(flower.stem_id)
            removed += 1
            logging.debug(f"Flower {flower.id} and stem {flower.stem_id} removed.")
    return removed


# --- Rain ---

def spawn_rain_drop(ctx: SimulationContext, char: str) -> RainDrop:
    drop = RainDrop(
        id=ctx.next_id(),
        char=char,
        x=ctx.uniform(0.0, ctx.width),
        y=RAIN_SPAWN_Y,
        velocity=Vector(0.0, ctx.uniform(*RAIN_SPEED_RANGE)),
        size=ctx.uniform(*RAIN_SIZE_RANGE),
    )
    ctx.rain_drops.append(drop)
    return drop
