# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import logging
import typing

from ..device.keyboard_consts import KeyCode
from ..util import inputs_equal

logger = logging.getLogger(__name__)


class PlatformInput(typing.Protocol):
    """What the host's input layer reports about the current tick."""

    @property
    def tick(self) -> int: ...

    @property
    def typed_text(self) -> str: ...

    @property
    def any_key_held(self) -> bool: ...

    @property
    def any_key_pressed(self) -> bool: ...

    def is_key_held(self, key: KeyCode) -> bool: ...


class InputFrameSource:
    """Turns the platform's input for one tick into an ordered tuple of single-character tokens.

    Tokens are derived at most once per tick; repeated reads return the same tuple. Injected
    ("virtual") input is folded into the current tick unless that tick's tokens have already been
    claimed for dispatch, in which case it waits for the next tick.
    """

    def __init__(self, platform: PlatformInput, *, tab_key: typing.Optional[KeyCode] = KeyCode.KEY_TAB):
        self.platform = platform
        self.tab_key = tab_key
        self._tokens: tuple[str, ...] = ()
        self._derived_tick: typing.Optional[int] = None
        self._claimed_tick: typing.Optional[int] = None
        self._current_tick: typing.Optional[int] = None
        self._pending_virtual_input = ""
        # virtual input already folded into the current tick, kept for re-derivation
        self._tick_virtual_input = ""
        self._last_character: typing.Optional[str] = None
        self._last_character_before_tick: typing.Optional[str] = None

    @property
    def current_tick(self) -> int:
        return self.platform.tick

    @property
    def pending_virtual_input(self) -> str:
        return self._pending_virtual_input

    def received_inputs(self) -> tuple[str, ...]:
        tick = self.platform.tick
        if tick == self._derived_tick:
            return self._tokens
        if tick != self._current_tick:
            self._current_tick = tick
            self._tick_virtual_input = ""
            self._last_character_before_tick = self._last_character
        self._tick_virtual_input += self._pending_virtual_input
        self._pending_virtual_input = ""
        self._tokens = self._derive_tokens()
        self._derived_tick = tick
        return self._tokens

    def claim_inputs(self) -> tuple[str, ...]:
        "This tick's tokens, for dispatch. Virtual input added afterwards is held for the next tick."
        tokens = self.received_inputs()
        self._claimed_tick = self._derived_tick
        return tokens

    def add_input(self, text: str):
        self._pending_virtual_input += text
        if self._claimed_tick is not None and self._claimed_tick == self.platform.tick:
            return
        self._derived_tick = None
        self.received_inputs()

    def contains_input(self, token: str, case_sensitive: bool) -> bool:
        return any(inputs_equal(received, token, case_sensitive) for received in self.received_inputs())

    def _derive_tokens(self) -> tuple[str, ...]:
        raw = self.platform.typed_text + self._tick_virtual_input
        if self.tab_key is not None and self.platform.is_key_held(self.tab_key):
            raw += "\t"
        if raw == "":
            return ()
        # a held key replaying the last character is the repeat timer, not a keystroke
        if self.platform.any_key_held and not self.platform.any_key_pressed and raw[0] == self._last_character_before_tick:
            logger.debug("suppressing repeated input %r", raw)
            self._last_character = self._last_character_before_tick
            return ()
        self._last_character = raw[-1]
        return tuple(raw)
