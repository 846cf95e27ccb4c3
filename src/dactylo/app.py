from __future__ import annotations

import argparse
import collections.abc
import logging
import pathlib
import sys
import typing

import trio
import trio_util

from .device.keyboard import KeyboardState
from .device.keystreams import make_keystream
from .engine.context import MatchingContext
from .settings import Settings
from .statistics import InputStatistics, TypingSpeed
from .texts import TextCollection, TextExtractor

if typing.TYPE_CHECKING:
    from .device.hwtypes import KeyEvent
    from .engine.registry import SequenceRegistry
    from .engine.sequence import Sequence

logger = logging.getLogger(__name__)


class DactyloHost:
    """Drives a matching context: one tick per period, keeping the board stocked with sequences."""

    ticks: trio_util.AsyncValue[int]

    def __init__(self, settings: Settings, collection: TextCollection):
        self.settings = settings
        self.collection = collection
        self.keyboard = KeyboardState()
        self.context = MatchingContext.from_settings(self.keyboard, settings)
        self.statistics = InputStatistics(self.context.registry)
        self.speed = TypingSpeed(self.context.registry, clock=trio.current_time)
        self.ticks = trio_util.AsyncValue(0)
        self._queued_input: list[str] = []

    @property
    def registry(self) -> SequenceRegistry:
        return self.context.registry

    def spawn_sequence(self) -> typing.Optional[Sequence]:
        text = self.collection.find_uniquely_targetable_text(self.registry)
        if text is None:
            return None
        return self.context.create_sequence(text)

    def replenish(self):
        while len(self.registry) < self.settings.active_sequences:
            if self.spawn_sequence() is None:
                break

    def queue_input(self, text: str):
        "Virtual input, fed in at the start of the next tick."
        self._queued_input.append(text)

    def tick(self):
        self.keyboard.advance_tick()
        if self._queued_input:
            self.context.add_input("".join(self._queued_input))
            self._queued_input.clear()
        self.context.process_input()
        self.replenish()
        self.ticks.value += 1

    async def wait_ticks(self, count: int = 1):
        target = self.ticks.value + count
        await self.ticks.wait_value(lambda value: value >= target)

    async def pump_keys(self, key_event_channel: trio.MemoryReceiveChannel[KeyEvent]):
        async with make_keystream(key_event_channel, self.settings) as keystream:
            await self.keyboard.pump(keystream)

    async def run(
        self,
        key_event_channel: typing.Optional[trio.MemoryReceiveChannel[KeyEvent]] = None,
        *,
        task_status=trio.TASK_STATUS_IGNORED,
    ):
        async with trio.open_nursery() as nursery:
            if key_event_channel is not None:
                nursery.start_soon(self.pump_keys, key_event_channel)
            self.replenish()
            task_status.started()
            logger.debug("ticking every %.4f seconds", self.settings.tick_interval)
            async for _ in trio_util.periodic(self.settings.tick_interval):
                self.tick()


def format_board(registry: SequenceRegistry) -> str:
    lines = []
    for sequence in registry.sequences:
        marker = ">" if sequence.is_targeted else " "
        lines.append(f"{marker} {sequence.completed_text}|{sequence.remaining_text}")
    return "\n".join(lines)


async def stdin_lines() -> collections.abc.AsyncIterator[str]:
    while True:
        line = await trio.to_thread.run_sync(sys.stdin.readline, abandon_on_cancel=True)
        if line == "":
            return
        yield line.rstrip("\n")


async def play(host: DactyloHost, lines: collections.abc.AsyncIterable[str], out=print):
    """A line-based game: each line typed is fed to the board as virtual input."""

    def announce(sequence: Sequence):
        out(f"* {sequence.text}")

    with host.registry.sequence_completed.connect(announce):
        async with trio.open_nursery() as nursery:
            await nursery.start(host.run)
            out(format_board(host.registry))
            async for line in lines:
                host.queue_input(line)
                await host.wait_ticks()
                out(format_board(host.registry))
            nursery.cancel_scope.cancel()
    out(f"accuracy {host.statistics.accuracy:.0%}, {host.statistics.accepted_inputs} keys accepted")


parser = argparse.ArgumentParser(prog="dactylo-play", description="Type the words on the board.")
parser.add_argument("wordlist", type=pathlib.Path)
parser.add_argument("--settings", type=pathlib.Path)
parser.add_argument("--debug", action="store_true")


def main():
    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING)
    settings = Settings.load(args.settings) if args.settings is not None else Settings.default()
    texts = TextExtractor.from_settings(settings).extract(args.wordlist.read_text())
    if not texts:
        parser.error(f"no texts found in {args.wordlist}")
    host = DactyloHost(settings, TextCollection(texts))
    trio.run(play, host, stdin_lines())


if __name__ == "__main__":
    main()
