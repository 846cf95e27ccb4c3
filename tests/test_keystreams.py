# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import collections.abc
import typing
from contextlib import aclosing

from trio.lowlevel import checkpoint

from dactylo.device.hwtypes import AnnotatedKeyEvent, KeyEvent, ModifierAnnotation
from dactylo.device.keyboard import KeyboardState
from dactylo.device.keyboard_consts import KeyCode, KeyPress
from dactylo.device.keystreams import MakeCharacter, ModifierTracking, make_keystream, pump_all
from dactylo.engine.context import MatchingContext
from dactylo.settings import Settings

T = typing.TypeVar("T")


async def make_async_source(
    items: collections.abc.Sequence[T],
):
    for item in items:
        await checkpoint()
        yield item


def type_keys(*keys: KeyCode) -> list[KeyEvent]:
    events = []
    for key in keys:
        events.append(KeyEvent.pressed(key))
        events.append(KeyEvent.released(key))
    return events


async def test_modifier_tracking():
    async with (
        aclosing(
            make_async_source(
                [
                    KeyEvent.pressed(KeyCode.KEY_LEFTSHIFT),
                    KeyEvent.pressed(KeyCode.KEY_H),
                    KeyEvent.released(KeyCode.KEY_H),
                    KeyEvent.released(KeyCode.KEY_LEFTSHIFT),
                    KeyEvent.pressed(KeyCode.KEY_CAPSLOCK),
                    KeyEvent.released(KeyCode.KEY_CAPSLOCK),
                    KeyEvent.pressed(KeyCode.KEY_I),
                ]
            )
        ) as keysource,
        pump_all(keysource, ModifierTracking()) as resultsource,
    ):
        results = [event async for event in resultsource]
        assert results == [
            AnnotatedKeyEvent(
                key=KeyCode.KEY_LEFTSHIFT, press=KeyPress.PRESSED, annotation=ModifierAnnotation(shift=True), is_modifier=True
            ),
            AnnotatedKeyEvent(key=KeyCode.KEY_H, press=KeyPress.PRESSED, annotation=ModifierAnnotation(shift=True)),
            AnnotatedKeyEvent(key=KeyCode.KEY_H, press=KeyPress.RELEASED, annotation=ModifierAnnotation(shift=True)),
            AnnotatedKeyEvent(key=KeyCode.KEY_LEFTSHIFT, press=KeyPress.RELEASED, annotation=ModifierAnnotation(), is_modifier=True),
            AnnotatedKeyEvent(
                key=KeyCode.KEY_CAPSLOCK, press=KeyPress.PRESSED, annotation=ModifierAnnotation(capslock=True), is_modifier=True
            ),
            AnnotatedKeyEvent(
                key=KeyCode.KEY_CAPSLOCK, press=KeyPress.RELEASED, annotation=ModifierAnnotation(capslock=True), is_modifier=True
            ),
            AnnotatedKeyEvent(key=KeyCode.KEY_I, press=KeyPress.PRESSED, annotation=ModifierAnnotation(capslock=True)),
        ]


async def test_make_characters():
    keymaps = {
        KeyCode.KEY_H: ["h", "H"],
        KeyCode.KEY_I: ["i", "I"],
        KeyCode.KEY_1: ["1", "!"],
    }
    async with (
        aclosing(
            make_async_source(
                [
                    KeyEvent.pressed(KeyCode.KEY_LEFTSHIFT),
                    KeyEvent.pressed(KeyCode.KEY_H),
                    KeyEvent.released(KeyCode.KEY_H),
                    KeyEvent.released(KeyCode.KEY_LEFTSHIFT),
                    KeyEvent.pressed(KeyCode.KEY_I),
                    KeyEvent.repeated(KeyCode.KEY_I),
                    KeyEvent.released(KeyCode.KEY_I),
                    KeyEvent.pressed(KeyCode.KEY_CAPSLOCK),
                    KeyEvent.pressed(KeyCode.KEY_1),
                    KeyEvent.pressed(KeyCode.KEY_I),
                ]
            )
        ) as keysource,
        pump_all(keysource, ModifierTracking(), MakeCharacter(keymaps)) as resultsource,
    ):
        characters = [event.character async for event in resultsource]
        # releases and unmapped keys carry no character; caps lock only shifts letters
        assert characters == [None, "H", None, None, "i", "i", None, None, "1", "I"]


async def test_keyboard_state_from_keystream():
    settings = Settings.for_test()
    keyboard = KeyboardState()
    events = [
        *type_keys(KeyCode.KEY_C, KeyCode.KEY_A),
        KeyEvent.pressed(KeyCode.KEY_LEFTCTRL),
        *type_keys(KeyCode.KEY_T),
        KeyEvent.released(KeyCode.KEY_LEFTCTRL),
        *type_keys(KeyCode.KEY_SPACE),
        KeyEvent.pressed(KeyCode.KEY_TAB),
    ]
    async with aclosing(make_async_source(events)) as keysource, make_keystream(keysource, settings) as keystream:
        await keyboard.pump(keystream)
    assert keyboard.tick == 0
    assert keyboard.typed_text == ""
    keyboard.advance_tick()
    assert keyboard.tick == 1
    # ctrl+t is a shortcut, not text
    assert keyboard.typed_text == "ca "
    assert keyboard.any_key_pressed
    assert keyboard.is_key_held(KeyCode.KEY_TAB)
    assert not keyboard.is_key_held(KeyCode.KEY_C)
    keyboard.advance_tick()
    assert keyboard.typed_text == ""
    assert not keyboard.any_key_pressed
    assert keyboard.any_key_held


async def test_held_key_typed_once():
    settings = Settings.for_test()
    keyboard = KeyboardState()
    context = MatchingContext(keyboard)
    aa = context.create_sequence("aab")
    ticks = [
        [KeyEvent.pressed(KeyCode.KEY_A)],
        [KeyEvent.repeated(KeyCode.KEY_A)],
        [KeyEvent.repeated(KeyCode.KEY_A)],
        [KeyEvent.released(KeyCode.KEY_A), *type_keys(KeyCode.KEY_A)],
    ]
    progress = []
    for tick_events in ticks:
        async with aclosing(make_async_source(tick_events)) as keysource, make_keystream(keysource, settings) as keystream:
            await keyboard.pump(keystream)
        keyboard.advance_tick()
        context.process_input()
        progress.append(aa.progress)
    assert progress == [1, 1, 1, 2]


async def test_modifier_tracking_both_hands_and_lock_toggle():
    async with (
        aclosing(
            make_async_source(
                [
                    KeyEvent.pressed(KeyCode.KEY_LEFTCTRL),
                    KeyEvent.pressed(KeyCode.KEY_RIGHTCTRL),
                    KeyEvent.released(KeyCode.KEY_LEFTCTRL),
                    KeyEvent.repeated(KeyCode.KEY_RIGHTCTRL),
                    KeyEvent.released(KeyCode.KEY_RIGHTCTRL),
                    KeyEvent.pressed(KeyCode.KEY_CAPSLOCK),
                    KeyEvent.repeated(KeyCode.KEY_CAPSLOCK),
                    KeyEvent.released(KeyCode.KEY_CAPSLOCK),
                    KeyEvent.pressed(KeyCode.KEY_CAPSLOCK),
                    KeyEvent.pressed(KeyCode.KEY_A),
                ]
            )
        ) as keysource,
        pump_all(keysource, ModifierTracking()) as resultsource,
    ):
        annotations = [event.annotation async for event in resultsource]
        assert annotations == [
            ModifierAnnotation(ctrl=True),
            ModifierAnnotation(ctrl=True),
            # the other ctrl is still down
            ModifierAnnotation(ctrl=True),
            ModifierAnnotation(ctrl=True),
            ModifierAnnotation(),
            ModifierAnnotation(capslock=True),
            ModifierAnnotation(capslock=True),
            ModifierAnnotation(capslock=True),
            ModifierAnnotation(),
            ModifierAnnotation(),
        ]
