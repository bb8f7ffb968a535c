# visualization.py
"""
Handles the garden window, its events and its UI chrome using Pygame.

The scene itself is painted by the SceneCompositor; this module owns the
display surface, forwards pointer and keyboard events to the InputAdapter,
keeps the SimulationContext in step with the window size, and draws the
caption card and the day/night toggle on top.
"""
import logging
from typing import Any, Dict, Optional, Tuple

import pygame

from compositor import SceneCompositor
from constants import (
    DEFAULT_WINDOW_WIDTH, DEFAULT_WINDOW_HEIGHT, FPS, WINDOW_TITLE, UI_MARGIN,
    UI_BACKGROUND_ALPHA, TOGGLE_BUTTON_SIZE
)
from input_adapter import InputAdapter
from state import SimulationContext

# --- Data Contracts ---
#
# class Visualizer:
#   - __init__(self, vis_params: Optional[Dict[str, Any]] = None):
#     - Inputs:
#       - vis_params: the "visualization" section of config.json.
#         - "fullscreen": bool
#         - "window_width"/"window_height": int, used when not fullscreen.
#         - "fps": int, frame cap.
#     - Side Effects: Initializes Pygame and creates a resizable display surface.
#
#   - draw(self, context: SimulationContext, input_adapter: InputAdapter) -> bool:
#     - Outputs:
#       - bool: False if the user has quit, True otherwise.
#     - Side Effects: forwards events as commands, resizes the context,
#       toggles day/night, renders the scene and UI, waits for the next frame.

class Visualizer:
    """
    Owns the pygame window the garden is painted into.
    """
    def __init__(self, vis_params: Optional[Dict[str, Any]] = None):
        """
        Initializes Pygame and the display window.
        """
        pygame.init()
        pygame.font.init()
        vis_params = vis_params if vis_params is not None else {}

        if vis_params.get('fullscreen', False):
            display_info = pygame.display.Info()
            width, height = display_info.current_w, display_info.current_h
            self.screen = pygame.display.set_mode((width, height), pygame.FULLSCREEN)
        else:
            width = vis_params.get('window_width', DEFAULT_WINDOW_WIDTH)
            height = vis_params.get('window_height', DEFAULT_WINDOW_HEIGHT)
            self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)

        pygame.display.set_caption(WINDOW_TITLE)
        self.clock = pygame.time.Clock()
        self.fps = vis_params.get('fps', FPS)
        self.compositor = SceneCompositor()

        try:
            self.font_title = pygame.font.SysFont("serif", 20)
            self.font_main = pygame.font.SysFont("serif", 13)
            self.font_icon = pygame.font.SysFont("serif", 14, bold=True)
        except pygame.error:
            logging.warning("Serif font not found, falling back to the default font.")
            self.font_title = pygame.font.SysFont(None, 24)
            self.font_main = pygame.font.SysFont(None, 16)
            self.font_icon = pygame.font.SysFont(None, 18, bold=True)

        # --- UI Configuration ---
        self.caption_rect = pygame.Rect(UI_MARGIN, UI_MARGIN, 270, TOGGLE_BUTTON_SIZE + 12)
        self.toggle_button_rect = pygame.Rect(
            self.caption_rect.right + 16, UI_MARGIN + 6, TOGGLE_BUTTON_SIZE, TOGGLE_BUTTON_SIZE
        )

        logging.info(f"Visualizer initialized with Pygame display ({width}x{height}).")

    @property
    def size(self) -> Tuple[int, int]:
        return self.screen.get_size()

    def _handle_event(self, event: pygame.event.Event, context: SimulationContext,
                      input_adapter: InputAdapter) -> bool:
        if event.type == pygame.QUIT:
            logging.info("Quit event received. Shutting down visualizer.")
            return False

        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            logging.info("ESC key pressed. Shutting down visualizer.")
            return False

        if event.type == pygame.VIDEORESIZE:
            context.resize(event.w, event.h)
            return True

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            # The toggle belongs to the UI, so it never starts a stem.
            if self.toggle_button_rect.collidepoint(event.pos):
                context.toggle_night()
                return True

        input_adapter.dispatch(event)
        return True

    def _draw_caption(self, is_night: bool) -> None:
        card = pygame.Surface(self.caption_rect.size, pygame.SRCALPHA)
        card.fill((15, 23, 42, UI_BACKGROUND_ALPHA) if is_night else (255, 255, 255, UI_BACKGROUND_ALPHA))
        accent = (49, 46, 129) if is_night else (156, 163, 175)
        pygame.draw.line(card, accent, (0, 0), (0, card.get_height()), 2)
        self.screen.blit(card, self.caption_rect)

        text_color = (209, 213, 219) if is_night else (75, 85, 99)
        title = self.font_title.render("mono no aware", True, text_color)
        subtitle = self.font_main.render("Create life with touch, rain with keys.", True, text_color)
        self.screen.blit(title, (self.caption_rect.x + 16, self.caption_rect.y + 8))
        self.screen.blit(subtitle, (self.caption_rect.x + 16, self.caption_rect.y + 14 + title.get_height()))

    def _draw_toggle_button(self, mouse_pos: Tuple[int, int], is_night: bool) -> None:
        """Draws the day/night toggle and handles its hover state."""
        is_hovered = self.toggle_button_rect.collidepoint(mouse_pos)
        button = pygame.Surface(self.toggle_button_rect.size, pygame.SRCALPHA)
        alpha = 255 if is_hovered else 204
        color = (199, 210, 254, alpha) if is_night else (253, 186, 116, alpha)
        radius = TOGGLE_BUTTON_SIZE // 2
        pygame.draw.circle(button, color, (radius, radius), radius, 2)
        label = self.font_icon.render("night" if is_night else "day", True, color[:3])
        button.blit(label, label.get_rect(center=(radius, radius)))
        self.screen.blit(button, self.toggle_button_rect)

    def draw(self, context: SimulationContext, input_adapter: InputAdapter) -> bool:
        """
        Handles events, then draws the scene and UI.

        Returns:
            bool: False if the garden should close, True otherwise.
        """
        for event in pygame.event.get():
            if not self._handle_event(event, context, input_adapter):
                return False

        # Fullscreen switches and platform quirks can change the surface
        # without a VIDEORESIZE event.
        if self.size != (context.width, context.height):
            context.resize(*self.size)

        self.compositor.render(self.screen, context)
        self._draw_caption(context.is_night)
        self._draw_toggle_button(pygame.mouse.get_pos(), context.is_night)

        pygame.display.flip()
        self.clock.tick(self.fps)
        return True

    def close(self):
        """Shuts down Pygame."""
        pygame.font.quit()
        pygame.quit()
