from __future__ import annotations

import collections.abc
import contextlib
import typing

T = typing.TypeVar("T")


class Connection(contextlib.AbstractContextManager):
    """A receiver's subscription to a signal. Leaving the context disconnects it."""

    def __init__(self, signal: Signal[T], receiver: collections.abc.Callable[[T], None]):
        self.signal = signal
        self.receiver = receiver

    @property
    def connected(self):
        return self.receiver in self.signal

    def disconnect(self):
        self.signal.disconnect(self.receiver)

    def __exit__(self, _exc_type, _exc_value, _traceback):
        self.disconnect()
        return False


class Signal(typing.Generic[T]):
    """A synchronous observer list.

    Receivers are called in connection order. Receivers connected or disconnected while the signal
    is being emitted take effect from the next emit.
    """

    def __init__(self, name: str):
        self.name = name
        self._receivers: list[collections.abc.Callable[[T], None]] = []

    def __repr__(self):
        return f"<Signal {self.name} receivers={len(self._receivers)}>"

    def __len__(self):
        return len(self._receivers)

    def __contains__(self, receiver):
        return receiver in self._receivers

    def connect(self, receiver: collections.abc.Callable[[T], None]) -> Connection:
        if receiver not in self._receivers:
            self._receivers.append(receiver)
        return Connection(self, receiver)

    def disconnect(self, receiver: collections.abc.Callable[[T], None]):
        if receiver in self._receivers:
            self._receivers.remove(receiver)

    def clear(self):
        self._receivers.clear()

    def emit(self, payload: T):
        for receiver in tuple(self._receivers):
            receiver(payload)
