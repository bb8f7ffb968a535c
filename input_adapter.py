# input_adapter.py
"""
Turns pointer and keyboard input into garden commands.

The adapter keeps track of the stem currently being drawn. Its command
methods take already-normalized coordinates and characters; dispatch()
translates raw pygame events into those commands.
"""
import logging
from typing import Optional

import pygame

from entities import Flower, RainDrop, Stem
from lifecycle import complete_stem, extend_stem, spawn_rain_drop, start_stem
from state import SimulationContext

# --- Data Contracts ---
#
# class InputAdapter:
#   - on_pointer_down(x, y) -> Stem: starts a new stem and makes it current.
#   - on_pointer_move(x, y) -> bool: extends the current stem; no-op (False)
#     when nothing is being drawn or the stem has gone.
#   - on_pointer_up() -> Optional[Flower]: finishes the current stem.
#   - on_key_press(char) -> Optional[RainDrop]: only single printable
#     characters make rain; key names such as "Enter" are ignored.
#   - dispatch(event) -> bool: True if the event was turned into a command.

LEFT_BUTTON = 1


class InputAdapter:
    def __init__(self, context: SimulationContext):
        self.context = context
        self.current_stem_id: Optional[int] = None

    @property
    def drawing(self) -> bool:
        return self.current_stem_id is not None

    def on_pointer_down(self, x: float, y: float) -> Stem:
        stem = start_stem(self.context, x, y)
        self.current_stem_id = stem.id
        return stem

    def on_pointer_move(self, x: float, y: float) -> bool:
        if self.current_stem_id is None:
            return False
        return extend_stem(self.context, self.current_stem_id, x, y)

    def on_pointer_up(self) -> Optional[Flower]:
        if self.current_stem_id is None:
            return None
        flower = complete_stem(self.context, self.current_stem_id)
        self.current_stem_id = None
        return flower

    def on_key_press(self, char: str) -> Optional[RainDrop]:
        if not isinstance(char, str) or len(char) != 1 or not char.isprintable():
            return None
        return spawn_rain_drop(self.context, char)

    def dispatch(self, event: pygame.event.Event) -> bool:
        """Translates one pygame event into a command."""
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == LEFT_BUTTON:
            self.on_pointer_down(*event.pos)
            return True
        if event.type == pygame.MOUSEMOTION:
            return self.on_pointer_move(*event.pos)
        if event.type == pygame.MOUSEBUTTONUP and event.button == LEFT_BUTTON:
            return self.on_pointer_up() is not None
        if event.type == pygame.KEYDOWN:
            drop = self.on_key_press(getattr(event, 'unicode', ''))
            if drop is not None:
                logging.debug(f"Rain drop {drop.id} '{drop.char}' spawned at x={drop.x:.1f}.")
            return drop is not None
        return False
