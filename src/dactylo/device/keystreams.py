# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import abc
import unicodedata
from contextlib import aclosing, asynccontextmanager
from typing import TYPE_CHECKING, Any, AsyncIterable, cast

import msgspec
import trio

from .hwtypes import AnnotatedKeyEvent, KeyEvent, ModifierAnnotation
from .keyboard_consts import KeyCode, KeyPress

if TYPE_CHECKING:
    from ..settings import Settings


class Section(abc.ABC):
    @abc.abstractmethod
    async def pump(self, source: trio.MemoryReceiveChannel[Any], sink: trio.MemorySendChannel[Any]): ...


# modifier keys and the ModifierAnnotation field each one sets while held
MOMENTARY_MODIFIERS = {
    KeyCode.KEY_LEFTALT: "alt",
    KeyCode.KEY_RIGHTALT: "alt",
    KeyCode.KEY_LEFTCTRL: "ctrl",
    KeyCode.KEY_RIGHTCTRL: "ctrl",
    KeyCode.KEY_LEFTMETA: "meta",
    KeyCode.KEY_RIGHTMETA: "meta",
    KeyCode.KEY_LEFTSHIFT: "shift",
    KeyCode.KEY_RIGHTSHIFT: "shift",
}
# lock keys toggle on each keydown
LOCK_MODIFIERS = {
    KeyCode.KEY_CAPSLOCK: "capslock",
}


# stage 1: track modifier keydown/up and annotate keystream with current modifiers
class ModifierTracking(Section):
    def __init__(self):
        self.held_modifiers: set[KeyCode] = set()
        self.locked: set[KeyCode] = set()

    def _make_annotation(self):
        active = {MOMENTARY_MODIFIERS[key] for key in self.held_modifiers}
        active.update(LOCK_MODIFIERS[key] for key in self.locked)
        return ModifierAnnotation(**{name: True for name in active})

    def _track(self, event: KeyEvent) -> bool:
        if event.key in MOMENTARY_MODIFIERS:
            if event.press is KeyPress.RELEASED:
                self.held_modifiers.discard(event.key)
            else:
                self.held_modifiers.add(event.key)
            return True
        if event.key in LOCK_MODIFIERS:
            if event.press is KeyPress.PRESSED:
                self.locked ^= {event.key}
            return True
        return False

    async def pump(self, source: trio.MemoryReceiveChannel[KeyEvent], sink: trio.MemorySendChannel[AnnotatedKeyEvent]):
        async with aclosing(source), aclosing(sink):
            async for event in source:
                is_modifier = self._track(event)
                await sink.send(
                    AnnotatedKeyEvent(
                        key=event.key,
                        press=event.press,
                        annotation=self._make_annotation(),
                        is_modifier=is_modifier,
                    )
                )


# stage 2: convert key event + modifier into character; releases never type anything
class MakeCharacter(Section):
    def __init__(self, keymaps: dict[KeyCode, list[str]]):
        self.keymaps = keymaps

    async def pump(self, source: trio.MemoryReceiveChannel[AnnotatedKeyEvent], sink: trio.MemorySendChannel[AnnotatedKeyEvent]):
        async with aclosing(source), aclosing(sink):
            async for event in source:
                if event.press is not KeyPress.RELEASED and event.key in self.keymaps:
                    keymap = self.keymaps[event.key]
                    is_shifted = event.annotation.shift
                    is_letter = unicodedata.category(keymap[0]).startswith("L")
                    if is_letter:
                        is_shifted ^= event.annotation.capslock
                    level = 1 if is_shifted else 0
                    await sink.send(msgspec.structs.replace(event, character=keymap[level]))
                else:
                    await sink.send(event)


@asynccontextmanager
async def pump_all(first_source: AsyncIterable[Any], *sections: Section):
    async with trio.open_nursery() as nursery:
        section_input = first_source
        for section in sections:
            section_send_channel, section_receive_channel = trio.open_memory_channel(0)
            nursery.start_soon(section.pump, section_input, section_send_channel)
            section_input = section_receive_channel
        yield section_input
        nursery.cancel_scope.cancel()


@asynccontextmanager
async def make_keystream(
    key_event_channel: trio.MemoryReceiveChannel[KeyEvent],
    settings: Settings,
):
    sections = [
        ModifierTracking(),
        MakeCharacter(settings.keymaps),
    ]

    async with pump_all(key_event_channel, *sections) as keystream:
        yield cast(trio.MemoryReceiveChannel[AnnotatedKeyEvent], keystream)
