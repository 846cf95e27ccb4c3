# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import collections.abc
import logging
import typing

import msgspec

from ..commontypes import SequenceNotRegisteredError, SequenceRemovedError
from .signals import Connection, Signal

if typing.TYPE_CHECKING:
    from .frames import InputFrameSource
    from .sequence import Sequence

logger = logging.getLogger(__name__)


class InputOutcome(msgspec.Struct, frozen=True):
    token: str
    # None when no sequence could be targeted with the token
    sequence: typing.Optional[Sequence] = None


class SequenceRegistry:
    """Routes one shared stream of tokens across the live sequences.

    With no target held, the first sequence (in registration order) that accepts a token becomes
    the target; in multi-target mode every accepting sequence does. Tokens are then fed only to
    the targets until they complete or are untargeted.
    """

    input_accepted: Signal[InputOutcome]
    input_rejected: Signal[InputOutcome]
    sequence_completed: Signal[Sequence]

    def __init__(self, frames: InputFrameSource, *, multi_target: bool = False):
        self.frames = frames
        self.multi_target = multi_target
        self._sequences: dict[Sequence, tuple[Connection, ...]] = {}
        # the sequence dispatch is feeding, whose completion dispatch announces itself
        self._feeding: typing.Optional[Sequence] = None
        self._targeted: list[Sequence] = []
        self._last_processed_tick: typing.Optional[int] = None
        self._latest_processed_input: typing.Optional[str] = None
        self.input_accepted = Signal("input_accepted")
        self.input_rejected = Signal("input_rejected")
        self.sequence_completed = Signal("sequence_completed")

    def __len__(self):
        return len(self._sequences)

    def __contains__(self, sequence):
        return sequence in self._sequences

    @property
    def sequences(self) -> tuple[Sequence, ...]:
        return tuple(self._sequences)

    @property
    def targeted_sequences(self) -> tuple[Sequence, ...]:
        return tuple(self._targeted)

    @property
    def receiving_sequences(self) -> tuple[Sequence, ...]:
        return self.targeted_sequences if self._targeted else self.sequences

    @property
    def latest_processed_input(self) -> typing.Optional[str]:
        return self._latest_processed_input

    @property
    def acceptable_inputs(self) -> frozenset[str]:
        "Every token that at least one receiving sequence would accept."
        return frozenset().union(*(sequence.acceptable_inputs for sequence in self.receiving_sequences))

    def register(self, sequence: Sequence):
        if sequence.is_removed:
            raise SequenceRemovedError(sequence)
        if sequence in self._sequences:
            return
        self._sequences[sequence] = (
            sequence.removal.connect(self.unregister),
            sequence.completed.connect(self._on_sequence_completed),
        )
        logger.debug("registered %r", sequence)

    def unregister(self, sequence: Sequence):
        for connection in self._sequences.pop(sequence, ()):
            connection.disconnect()
        if sequence in self._targeted:
            self._targeted.remove(sequence)
            sequence._set_targeted(False)

    def remove_all(self):
        for sequence in tuple(self._sequences):
            sequence.remove()
        self._sequences.clear()
        self._targeted.clear()

    def target_sequence(self, sequence: Sequence):
        if sequence not in self._sequences:
            raise SequenceNotRegisteredError(sequence)
        if sequence in self._targeted:
            return
        if not self.multi_target:
            self.clear_targets()
        self._targeted.append(sequence)
        sequence._set_targeted(True)
        logger.debug("targeted %r", sequence)

    def untarget_sequence(self, sequence: Sequence):
        if sequence in self._targeted:
            self._targeted.remove(sequence)
            sequence._set_targeted(False)

    def clear_targets(self):
        for sequence in tuple(self._targeted):
            sequence.untarget()

    def process_input(self):
        "Dispatch this tick's tokens. Further calls within the same tick do nothing."
        tick = self.frames.current_tick
        if tick == self._last_processed_tick:
            return
        self._last_processed_tick = tick
        # leave the tick's input unread when there is nothing to type
        if not self._sequences:
            return
        self.dispatch(self.frames.claim_inputs())

    def dispatch(self, tokens: collections.abc.Iterable[str]):
        if not self._sequences:
            return
        for token in tokens:
            self._latest_processed_input = token
            if not self._targeted:
                self._attempt_to_acquire_target(token)

            # completion unregisters sequences mid-loop, and its handlers may remove the rest
            for sequence in tuple(self._targeted):
                if sequence.is_completed or sequence not in self._targeted:
                    continue
                self._feeding = sequence
                try:
                    accepted = sequence.receive_input(token)
                finally:
                    self._feeding = None
                if accepted:
                    self.input_accepted.emit(InputOutcome(token=token, sequence=sequence))
                    if sequence.is_completed:
                        self._complete(sequence)
                else:
                    self.input_rejected.emit(InputOutcome(token=token, sequence=sequence))
                    if not self.multi_target:
                        break

    def _attempt_to_acquire_target(self, token: str):
        acquired = False
        for sequence in tuple(self._sequences):
            if sequence.does_accept_input(token):
                sequence.target()
                acquired = True
                if not self.multi_target:
                    return
        if not acquired:
            self.input_rejected.emit(InputOutcome(token=token))

    def _on_sequence_completed(self, sequence: Sequence):
        # completed outside dispatch, through receive_input or an empty text
        if sequence is not self._feeding:
            self._complete(sequence)

    def _complete(self, sequence: Sequence):
        logger.debug("completed %r", sequence)
        self.sequence_completed.emit(sequence)
        self.unregister(sequence)
