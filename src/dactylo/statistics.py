from __future__ import annotations

import collections
import collections.abc
import contextlib
import dataclasses
import time
import typing

if typing.TYPE_CHECKING:
    from .engine.registry import InputOutcome, SequenceRegistry

# conventional typing-test word length
KEYS_PER_WORD = 5


@dataclasses.dataclass
class CharStatistics:
    accepted_count: int = 0
    rejected_count: int = 0

    @property
    def total_received_count(self):
        return self.accepted_count + self.rejected_count


class InputStatistics(contextlib.AbstractContextManager):
    """Counts accepted and rejected input on a registry, overall and per token.

    Every dispatched token counts once: a token accepted by two targets in multi-target mode counts
    as two accepted inputs, as the registry reports it twice.
    """

    def __init__(self, registry: SequenceRegistry):
        self.registry = registry
        self.accepted_inputs = 0
        self.rejected_inputs = 0
        self._per_input: dict[str, CharStatistics] = {}
        self._connections = [
            registry.input_accepted.connect(self._on_input_accepted),
            registry.input_rejected.connect(self._on_input_rejected),
        ]

    @property
    def total_inputs(self):
        return self.accepted_inputs + self.rejected_inputs

    @property
    def accuracy(self) -> float:
        if self.total_inputs == 0:
            return 1.0
        return self.accepted_inputs / self.total_inputs

    def input_stats(self, token: str) -> CharStatistics:
        return self._per_input.setdefault(token, CharStatistics())

    def reset(self):
        self.accepted_inputs = 0
        self.rejected_inputs = 0
        self._per_input.clear()

    def close(self):
        for connection in self._connections:
            connection.disconnect()

    def __exit__(self, _exc_type, _exc_value, _traceback):
        self.close()
        return False

    def _on_input_accepted(self, outcome: InputOutcome):
        self.input_stats(outcome.token).accepted_count += 1
        self.accepted_inputs += 1

    def _on_input_rejected(self, outcome: InputOutcome):
        self.input_stats(outcome.token).rejected_count += 1
        self.rejected_inputs += 1


class TypingSpeed(contextlib.AbstractContextManager):
    "Keys and words per minute over a sliding window of recent input."

    def __init__(
        self,
        registry: SequenceRegistry,
        *,
        window: float = 5.0,
        include_rejected: bool = False,
        clock: collections.abc.Callable[[], float] = time.monotonic,
    ):
        self.window = window
        self.include_rejected = include_rejected
        self.clock = clock
        self._timestamps: collections.deque[float] = collections.deque()
        self._connections = [
            registry.input_accepted.connect(self._on_input_accepted),
            registry.input_rejected.connect(self._on_input_rejected),
        ]

    @property
    def kpm(self) -> float:
        self._expire()
        return len(self._timestamps) * (60 / self.window)

    @property
    def wpm(self) -> float:
        return self.kpm / KEYS_PER_WORD

    def close(self):
        for connection in self._connections:
            connection.disconnect()

    def __exit__(self, _exc_type, _exc_value, _traceback):
        self.close()
        return False

    def _expire(self):
        now = self.clock()
        while self._timestamps and now - self._timestamps[0] > self.window:
            self._timestamps.popleft()

    def _on_input_accepted(self, _outcome: InputOutcome):
        self._timestamps.append(self.clock())

    def _on_input_rejected(self, _outcome: InputOutcome):
        if self.include_rejected:
            self._timestamps.append(self.clock())
