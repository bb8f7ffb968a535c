# compositor.py
"""
Paints the garden scene onto a pygame surface.

The compositor only reads the SimulationContext; all motion happens in
Simulation.step() beforehand. Layers are painted in a fixed order every
frame:

1. sky gradient and sun or moon
2. back glass of the vase and the water inside it
3. stems
4. front glass of the vase
5. rain glyphs
6. flowers (lighten-blended over the scene at night)
7. petals and splashes
8. window sill, contact shadow and frame
"""
import logging
import math
from typing import Callable, Dict, Sequence, Tuple

import numpy as np
import pygame

from constants import (
    VASE_PERSPECTIVE, FULL_TURN, SKY_DAY, SKY_NIGHT, SUN_COLOR, SUN_RADIUS,
    SUN_OFFSET, MOON_COLOR, MOON_RADIUS, MOON_POSITION, CELESTIAL_HALO_RATIO,
    CELESTIAL_HALO_ALPHA, VASE_BACK_DAY, VASE_BACK_NIGHT, VASE_EDGE_DAY,
    VASE_EDGE_NIGHT, WATER_BODY_DAY, WATER_BODY_NIGHT, WATER_SURFACE_DAY,
    WATER_SURFACE_NIGHT, WATER_SURFACE_EDGE, RIM_HIGHLIGHT, REFLECTION,
    GLASS_SHEEN_STOPS, STEM_DAY, STEM_NIGHT, STEM_WIDTH_SCALE, RAIN_DAY,
    RAIN_NIGHT, RAIN_ALPHA, PARTICLE_ALPHA, PETAL_SPIN_RATIO,
    FLOWER_CENTER_DAY, FLOWER_CENTER_NIGHT, SILL_HEIGHT, SILL_TOP_DEPTH,
    SILL_TOP_DAY, SILL_TOP_NIGHT, SILL_FRONT_DAY, SILL_FRONT_NIGHT, VASE_SHADOW,
    FRAME_DAY, FRAME_NIGHT, FRAME_WIDTH, FRAME_INNER_INSET, FRAME_INNER
)
from entities import Flower, FlowerVariant, RainDrop, Stem, Vase
from geometry import cubic_bezier, quadratic_bezier, rotate, vase_outline
from particle import ParticleKind, ParticleSystem
from state import SimulationContext
from utils import to_alpha

# --- Data Contracts ---
#
# class SceneCompositor:
#   - render(self, surface: pygame.Surface, context: SimulationContext) -> None:
#     - Inputs: any pygame surface; its size is the viewport size.
#     - Side Effects: paints the eight layers in order onto surface.
#     - Invariants: never mutates the context. The day/night flag is read
#       once per call.

Painter = Callable[[pygame.Surface, Tuple[float, float], Flower, bool], None]

# Padding around the vase's local drawing area.
_VASE_PAD = 4


# --- Small alpha-aware drawing helpers ---
# pygame.draw writes pixels without blending, so translucent shapes are
# drawn onto a scratch SRCALPHA surface and blitted.

def _draw_alpha_ellipse(
    surface: pygame.Surface, color, center: Sequence[float], rx: float, ry: float, width: int = 0
) -> None:
    rect = pygame.Rect(0, 0, max(1, int(round(2 * rx))), max(1, int(round(2 * ry))))
    layer = pygame.Surface(rect.size, pygame.SRCALPHA)
    pygame.draw.ellipse(layer, color, rect, width)
    surface.blit(layer, (int(round(center[0] - rx)), int(round(center[1] - ry))))


def _stamp_petals(
    layer: pygame.Surface, center: Tuple[float, float], outline: np.ndarray,
    count: int, rotation: float, color
) -> None:
    """Fills `count` copies of a petal outline spread evenly around center."""
    for i in range(count):
        pts = rotate(outline, rotation + FULL_TURN * i / count) + center
        pygame.draw.polygon(layer, color, pts.tolist())


# --- Flower painters, one per variant ---
# Petal outlines are built pointing down (+y) from the flower centre.

def paint_cosmos(layer: pygame.Surface, center, flower: Flower, is_night: bool) -> None:
    r = flower.radius
    w = r * 0.35
    outline = np.vstack((
        quadratic_bezier((0, 0), (w, r * 0.6), (w * 0.6, r)),
        quadratic_bezier((w * 0.6, r), (0, r * 0.9), (-w * 0.6, r))[1:],
        quadratic_bezier((-w * 0.6, r), (-w, r * 0.6), (0, 0))[1:-1],
    ))
    _stamp_petals(layer, center, outline, flower.petal_count, flower.rotation, flower.color)
    disc = FLOWER_CENTER_NIGHT if is_night else FLOWER_CENTER_DAY
    _draw_alpha_ellipse(layer, disc, center, r * 0.2, r * 0.2)


def paint_lily(layer: pygame.Surface, center, flower: Flower, is_night: bool) -> None:
    w = flower.radius * 0.3
    length = flower.radius * 1.1
    outline = np.vstack((
        cubic_bezier((0, 0), (w, length * 0.4), (w * 0.2, length * 0.9), (0, length)),
        cubic_bezier((0, length), (-w * 0.2, length * 0.9), (-w, length * 0.4), (0, 0))[1:-1],
    ))
    _stamp_petals(layer, center, outline, flower.petal_count, flower.rotation, flower.color)


def paint_rose(layer: pygame.Surface, center, flower: Flower, is_night: bool) -> None:
    """Three rings of overlapping discs, each smaller and fainter."""
    for ring_index in range(3):
        petals = 3 + ring_index
        ring_radius = flower.radius * (1 - ring_index * 0.25)
        ring = pygame.Surface(layer.get_size(), pygame.SRCALPHA)
        for p in range(petals):
            angle = flower.rotation + FULL_TURN * p / petals + ring_index
            offset = rotate(np.array([[ring_radius * 0.5, 0.0]]), angle)[0] + center
            pygame.draw.circle(ring, flower.color, offset.tolist(), max(1.0, ring_radius * 0.5))
        ring.set_alpha(int(255 * (1 - ring_index * 0.1)))
        layer.blit(ring, (0, 0))


FLOWER_PAINTERS: Dict[FlowerVariant, Painter] = {
    FlowerVariant.COSMOS: paint_cosmos,
    FlowerVariant.ROSE: paint_rose,
    FlowerVariant.LILY: paint_lily,
}


class SceneCompositor:
    """
    Renders a SimulationContext with a fixed z-order.
    """
    def __init__(self, painters: Dict[FlowerVariant, Painter] = None):
        if not pygame.font.get_init():
            pygame.font.init()
        self.flower_painters = dict(painters or FLOWER_PAINTERS)
        self._fonts: Dict[int, pygame.font.Font] = {}
        # One (key, surface) entry per static layer; rebuilt when the key changes.
        self._cache: Dict[str, tuple] = {}
        logging.debug("SceneCompositor initialized.")

    def render(self, surface: pygame.Surface, context: SimulationContext) -> None:
        is_night = context.is_night
        size = surface.get_size()
        if size[0] <= 0 or size[1] <= 0:
            return

        self._draw_background(surface, size, is_night)
        self._draw_vase_back(surface, context.vase, is_night)
        self._draw_stems(surface, context.stems, is_night)
        self._draw_vase_front(surface, context.vase)
        self._draw_rain(surface, context.rain_drops, is_night)
        self._draw_flowers(surface, context.flowers, is_night)
        self._draw_particles(surface, context.particles)
        self._draw_sill_and_frame(surface, size, context.vase, is_night)

    def _cached(self, name: str, key, build: Callable[[], pygame.Surface]) -> pygame.Surface:
        entry = self._cache.get(name)
        if entry is None or entry[0] != key:
            entry = (key, build())
            self._cache[name] = entry
        return entry[1]

    def _font(self, size: float) -> pygame.font.Font:
        key = max(1, int(round(size)))
        if key not in self._fonts:
            try:
                self._fonts[key] = pygame.font.SysFont("serif", key)
            except (pygame.error, OSError) as e:
                logging.warning(f"Serif font unavailable ({e}), falling back to the default font.")
                self._fonts[key] = pygame.font.Font(None, key)
        return self._fonts[key]

    # --- 1. Sky ---

    def _draw_background(self, surface: pygame.Surface, size, is_night: bool) -> None:
        sky = self._cached("sky", (size, is_night), lambda: self._build_sky(size, is_night))
        surface.blit(sky, (0, 0))

        width, _ = size
        if is_night:
            self._draw_celestial(surface, MOON_POSITION, MOON_RADIUS, MOON_COLOR)
        else:
            center = (width - SUN_OFFSET[0], SUN_OFFSET[1])
            self._draw_celestial(surface, center, SUN_RADIUS, SUN_COLOR)

    @staticmethod
    def _build_sky(size, is_night: bool) -> pygame.Surface:
        width, height = size
        top, bottom = SKY_NIGHT if is_night else SKY_DAY
        t = np.linspace(0.0, 1.0, height)[:, np.newaxis]
        rows = (1 - t) * np.array(top, dtype=np.float64) + t * np.array(bottom, dtype=np.float64)
        pixels = np.broadcast_to(rows[np.newaxis, :, :], (width, height, 3)).astype(np.uint8)
        return pygame.surfarray.make_surface(pixels)

    def _draw_celestial(self, surface, center, radius: int, color) -> None:
        halo = self._cached(
            f"halo-{radius}", (radius, color[:3]),
            lambda: self._build_halo(int(radius * CELESTIAL_HALO_RATIO), color[:3])
        )
        surface.blit(halo, halo.get_rect(center=center))
        _draw_alpha_ellipse(surface, color, center, radius, radius)

    @staticmethod
    def _build_halo(radius: int, rgb) -> pygame.Surface:
        """Stepped radial falloff standing in for a blurred shadow."""
        halo = pygame.Surface((radius * 2, radius * 2), pygame.SRCALPHA)
        steps = 10
        for i in range(steps):
            alpha = int(CELESTIAL_HALO_ALPHA * (i + 1) / steps)
            pygame.draw.circle(halo, tuple(rgb) + (alpha,), (radius, radius), radius * (1 - i / steps))
        return halo

    # --- 2 & 4. Vase ---

    @staticmethod
    def _vase_local_frame(vase: Vase):
        """Size of the vase's local canvas and the base centre inside it."""
        width = int(vase.width * 1.2) + 2 * _VASE_PAD
        height = int(vase.height + 2 * VASE_PERSPECTIVE) + 2 * _VASE_PAD
        local_x = width / 2
        local_y = _VASE_PAD + VASE_PERSPECTIVE + vase.height
        return (width, height), local_x, local_y

    def _vase_origin(self, vase: Vase) -> Tuple[int, int]:
        _, local_x, local_y = self._vase_local_frame(vase)
        return int(round(vase.x - local_x)), int(round(vase.y - local_y))

    def _vase_mask(self, vase: Vase) -> pygame.Surface:
        def build():
            size, local_x, local_y = self._vase_local_frame(vase)
            mask = pygame.Surface(size, pygame.SRCALPHA)
            outline = vase_outline(
                local_x, local_y, vase.width, vase.height, vase.opening_width, VASE_PERSPECTIVE
            )
            pygame.draw.polygon(mask, (255, 255, 255, 255), outline.tolist())
            return mask
        return self._cached("vase-mask", (vase.width, vase.height, vase.opening_width), build)

    def _draw_vase_back(self, surface: pygame.Surface, vase: Vase, is_night: bool) -> None:
        def build():
            size, local_x, local_y = self._vase_local_frame(vase)
            glass = pygame.Surface(size, pygame.SRCALPHA)
            outline = vase_outline(
                local_x, local_y, vase.width, vase.height, vase.opening_width, VASE_PERSPECTIVE
            ).tolist()
            pygame.draw.polygon(glass, VASE_BACK_NIGHT if is_night else VASE_BACK_DAY, outline)
            pygame.draw.polygon(glass, VASE_EDGE_NIGHT if is_night else VASE_EDGE_DAY, outline, 1)
            return glass

        origin = self._vase_origin(vase)
        glass = self._cached("vase-back", (vase.width, vase.height, is_night), build)
        surface.blit(glass, origin)

        ratio = vase.fill_ratio
        if ratio <= 0:
            return

        size, local_x, local_y = self._vase_local_frame(vase)
        water_y = local_y - vase.height * ratio
        # The surface narrows toward the opening and bulges slightly mid-way.
        half = vase.width / 2
        top_half = vase.opening_width / 2
        bulge = 1 + math.sin(ratio * math.pi) * 0.05
        surface_half = (half * (1 - ratio) + top_half * ratio) * bulge

        water = pygame.Surface(size, pygame.SRCALPHA)
        pygame.draw.rect(water, WATER_BODY_NIGHT if is_night else WATER_BODY_DAY,
                         (0, int(water_y), size[0], size[1] - int(water_y)))
        surface_color = WATER_SURFACE_NIGHT if is_night else WATER_SURFACE_DAY
        ry = VASE_PERSPECTIVE * 0.9
        _draw_alpha_ellipse(water, surface_color, (local_x, water_y), surface_half, ry)
        _draw_alpha_ellipse(water, WATER_SURFACE_EDGE, (local_x, water_y), surface_half, ry, 1)
        # Clip to the vase silhouette.
        water.blit(self._vase_mask(vase), (0, 0), special_flags=pygame.BLEND_RGBA_MULT)
        surface.blit(water, origin)

    def _draw_vase_front(self, surface: pygame.Surface, vase: Vase) -> None:
        front = self._cached(
            "vase-front", (vase.width, vase.height, vase.opening_width),
            lambda: self._build_vase_front(vase)
        )
        surface.blit(front, self._vase_origin(vase))

    def _build_vase_front(self, vase: Vase) -> pygame.Surface:
        size, local_x, local_y = self._vase_local_frame(vase)
        half = vase.width / 2
        top = local_y - vase.height

        # Diagonal sheen from the top-left to the bottom-right of the body.
        start = np.array([local_x - half, top])
        direction = np.array([2 * half, vase.height])
        xs = np.arange(size[0])[:, np.newaxis] + 0.5
        ys = np.arange(size[1])[np.newaxis, :] + 0.5
        t = ((xs - start[0]) * direction[0] + (ys - start[1]) * direction[1]) / direction.dot(direction)
        offsets, alphas = zip(*GLASS_SHEEN_STOPS)
        sheen_alpha = np.interp(np.clip(t, 0.0, 1.0), offsets, alphas)

        front = pygame.Surface(size, pygame.SRCALPHA)
        front.fill((255, 255, 255, 0))
        alpha = pygame.surfarray.pixels_alpha(front)
        alpha[:] = sheen_alpha.astype(np.uint8)
        del alpha  # Unlocks the surface.
        front.blit(self._vase_mask(vase), (0, 0), special_flags=pygame.BLEND_RGBA_MULT)

        top_half = vase.opening_width / 2
        rim = pygame.Rect(0, 0, int(2 * top_half), int(2 * VASE_PERSPECTIVE))
        rim.center = (int(round(local_x)), int(round(top)))
        pygame.draw.ellipse(front, RIM_HIGHLIGHT, rim, 2)

        reflection = quadratic_bezier(
            (local_x + half * 0.3, top + 30),
            (local_x + half * 0.4, local_y - 40),
            (local_x + half * 0.2, local_y - 20),
        )
        pygame.draw.lines(front, REFLECTION, False, reflection.tolist(), 3)
        return front

    # --- 3. Stems ---

    def _draw_stems(self, surface: pygame.Surface, stems: Sequence[Stem], is_night: bool) -> None:
        color = STEM_NIGHT if is_night else STEM_DAY
        for stem in stems:
            if len(stem.points) < 2:
                continue
            width = max(1, int(round(stem.width * STEM_WIDTH_SCALE)))
            pygame.draw.lines(surface, color, False, [(p.x, p.y) for p in stem.points], width)

    # --- 5. Rain ---

    def _draw_rain(self, surface: pygame.Surface, drops: Sequence[RainDrop], is_night: bool) -> None:
        color = RAIN_NIGHT if is_night else RAIN_DAY
        for drop in drops:
            alpha = to_alpha(drop.opacity, RAIN_ALPHA)
            if alpha == 0:
                continue
            glyph = self._font(drop.size).render(drop.char, True, color)
            glyph.set_alpha(alpha)
            # Glyphs sit on their baseline like canvas text.
            surface.blit(glyph, glyph.get_rect(midbottom=(round(drop.x), round(drop.y))))

    # --- 6. Flowers ---

    def _draw_flowers(self, surface: pygame.Surface, flowers: Sequence[Flower], is_night: bool) -> None:
        for flower in flowers:
            alpha = to_alpha(flower.opacity)
            if alpha == 0 or flower.radius < 0.5:
                continue
            extent = int(math.ceil(flower.radius * 1.15)) + 2
            layer = pygame.Surface((2 * extent, 2 * extent), pygame.SRCALPHA)
            self.flower_painters[flower.variant](layer, (extent, extent), flower, is_night)
            layer.set_alpha(alpha)

            position = (round(flower.x - extent), round(flower.y - extent))
            if is_night:
                surface.blit(self._lighten_layer(layer), position, special_flags=pygame.BLEND_RGB_MAX)
            else:
                surface.blit(layer, position)

    @staticmethod
    def _lighten_layer(layer: pygame.Surface) -> pygame.Surface:
        """Flattens a translucent layer onto black for a lighten blit.

        BLEND_RGB_MAX ignores alpha, so opacity is baked into the colour
        first; black pixels then leave the scene beneath untouched.
        """
        flat = pygame.Surface(layer.get_size())
        flat.fill((0, 0, 0))
        flat.blit(layer, (0, 0))
        return flat

    # --- 7. Particles ---

    def _draw_particles(self, surface: pygame.Surface, particles: ParticleSystem) -> None:
        for i in range(len(particles)):
            rgba = particles.colors[i]
            alpha = to_alpha(particles.life[i], PARTICLE_ALPHA * rgba[3] / 255)
            if alpha == 0:
                continue
            x, y = particles.positions[i]
            size = particles.sizes[i]
            color = (int(rgba[0]), int(rgba[1]), int(rgba[2]), alpha)

            if particles.kinds[i] == ParticleKind.PETAL:
                petal = pygame.Surface(
                    (max(1, int(math.ceil(2 * size))), max(1, int(math.ceil(size)))), pygame.SRCALPHA
                )
                pygame.draw.ellipse(petal, color, petal.get_rect())
                spin = particles.phases[i] * PETAL_SPIN_RATIO + x * 0.1
                petal = pygame.transform.rotate(petal, -math.degrees(spin))
                surface.blit(petal, petal.get_rect(center=(round(x), round(y))))
            else:
                _draw_alpha_ellipse(surface, color, (x, y), size, size)

    # --- 8. Sill and frame ---

    def _draw_sill_and_frame(self, surface: pygame.Surface, size, vase: Vase, is_night: bool) -> None:
        key = (size, is_night, round(vase.x), vase.width)
        overlay = self._cached("overlay", key, lambda: self._build_overlay(size, vase, is_night))
        surface.blit(overlay, (0, 0))

    @staticmethod
    def _build_overlay(size, vase: Vase, is_night: bool) -> pygame.Surface:
        width, height = size
        overlay = pygame.Surface(size, pygame.SRCALPHA)
        sill_y = height - SILL_HEIGHT

        pygame.draw.rect(overlay, SILL_TOP_NIGHT if is_night else SILL_TOP_DAY,
                         (0, sill_y, width, SILL_TOP_DEPTH))
        pygame.draw.rect(overlay, SILL_FRONT_NIGHT if is_night else SILL_FRONT_DAY,
                         (0, sill_y + SILL_TOP_DEPTH, width, SILL_HEIGHT - SILL_TOP_DEPTH))
        _draw_alpha_ellipse(overlay, VASE_SHADOW, (vase.x, sill_y + 8), vase.width / 2.5, 3)

        pygame.draw.rect(overlay, FRAME_NIGHT if is_night else FRAME_DAY, (0, 0, width, height), FRAME_WIDTH)
        inner = pygame.Surface(size, pygame.SRCALPHA)
        pygame.draw.rect(
            inner, FRAME_INNER,
            (FRAME_INNER_INSET, FRAME_INNER_INSET,
             width - 2 * FRAME_INNER_INSET, height - 2 * FRAME_INNER_INSET), 1
        )
        overlay.blit(inner, (0, 0))
        return overlay
