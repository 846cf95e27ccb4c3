from __future__ import annotations

import collections.abc
import logging

from .hwtypes import AnnotatedKeyEvent
from .keyboard_consts import KeyCode, KeyPress

logger = logging.getLogger(__name__)


class KeyboardState:
    """Collects a keystream between ticks and reports it one tick at a time.

    Events arrive whenever the keyboard produces them; advance_tick() moves everything typed since
    the previous tick into the new tick and snapshots which keys are held, so the frame source sees
    a stable view for the whole tick.
    """

    def __init__(self):
        self._tick = 0
        self._held: set[KeyCode] = set()
        self._pending_characters: list[str] = []
        self._pending_press = False
        self._typed_text = ""
        self._held_this_tick: frozenset[KeyCode] = frozenset()
        self._pressed_this_tick = False

    @property
    def tick(self) -> int:
        return self._tick

    @property
    def typed_text(self) -> str:
        return self._typed_text

    @property
    def any_key_held(self) -> bool:
        return bool(self._held_this_tick)

    @property
    def any_key_pressed(self) -> bool:
        return self._pressed_this_tick

    def is_key_held(self, key: KeyCode) -> bool:
        return key in self._held_this_tick

    def handle_key_event(self, event: AnnotatedKeyEvent):
        if event.press is KeyPress.RELEASED:
            self._held.discard(event.key)
            return
        self._held.add(event.key)
        if event.press is KeyPress.PRESSED:
            self._pending_press = True
        if event.character is None or event.annotation.is_command:
            return
        self._pending_characters.append(event.character)

    def advance_tick(self) -> int:
        self._tick += 1
        self._typed_text = "".join(self._pending_characters)
        self._pending_characters.clear()
        self._pressed_this_tick = self._pending_press
        self._pending_press = False
        self._held_this_tick = frozenset(self._held)
        return self._tick

    async def pump(self, keystream: collections.abc.AsyncIterable[AnnotatedKeyEvent]):
        async for event in keystream:
            self.handle_key_event(event)
        logger.debug("keystream closed")
