# collision.py
"""
Rain drop collision against the vase opening, and what a hit turns into.

A drop that lands in the thin band just below the rim is consumed. While
the vase has room the drop becomes water volume; once the vase is full it
becomes a small overflow splash instead, never both.
"""
import logging

from constants import (
    VASE_HIT_BAND, SPLASH_COUNT, SPLASH_SPEED_X, SPLASH_SPEED_Y,
    SPLASH_DECAY_RANGE, SPLASH_SIZE_RANGE, SPLASH_DAY, SPLASH_NIGHT, FULL_TURN
)
from entities import RainDrop, Vase
from particle import ParticleKind
from state import SimulationContext


def hits_vase_opening(vase: Vase, x: float, y: float) -> bool:
    """True if (x, y) is inside the opening span and the band below the rim."""
    half_opening = vase.opening_width / 2
    top = vase.top_y
    in_span = vase.x - half_opening < x < vase.x + half_opening
    in_band = top < y < top + VASE_HIT_BAND
    return in_span and in_band


def spawn_splash(ctx: SimulationContext, x: float, y: float) -> None:
    color = SPLASH_NIGHT if ctx.is_night else SPLASH_DAY
    for _ in range(SPLASH_COUNT):
        ctx.particles.spawn(
            ctx.next_id(), x, y,
            vx=ctx.uniform(*SPLASH_SPEED_X),
            vy=ctx.uniform(*SPLASH_SPEED_Y),
            color=color,
            decay=ctx.uniform(*SPLASH_DECAY_RANGE),
            size=ctx.uniform(*SPLASH_SIZE_RANGE),
            kind=ParticleKind.WATER,
            phase=ctx.uniform(0.0, FULL_TURN),
        )


def fill_or_splash(ctx: SimulationContext, x: float) -> bool:
    """
    Converts one vase hit into volume, or into overflow particles when full.

    Returns:
        bool: True if the hit added volume, False if it splashed.
    """
    vase = ctx.vase
    if vase.current_volume < vase.max_capacity:
        vase.add_volume(ctx.fill_amount)
        if vase.is_full:
            logging.info(f"Vase is full ({vase.current_volume:.0f}/{vase.max_capacity:.0f}).")
        return True
    spawn_splash(ctx, x, vase.top_y)
    logging.debug(f"Overflow splash at x={x:.1f}.")
    return False


def resolve_drop(ctx: SimulationContext, drop: RainDrop) -> bool:
    """
    Applies collision rules to a drop that has already moved this tick.

    Returns:
        bool: True if the drop is consumed and must leave its store.
    """
    if hits_vase_opening(ctx.vase, drop.x, drop.y):
        fill_or_splash(ctx, drop.x)
        return True
    return drop.y > ctx.height
