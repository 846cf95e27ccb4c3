# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import logging
import typing

from ..commontypes import SequenceRemovedError
from ..util import inputs_equal, is_whitespace
from .signals import Signal

if typing.TYPE_CHECKING:
    from .registry import SequenceRegistry

logger = logging.getLogger(__name__)


class Sequence:
    """A text that may be typed, and how much of it has been typed so far.

    A sequence registers itself with its registry when it is created. Progress only moves forward,
    one accepted character at a time, until the sequence is reset or given a new text.
    """

    def __init__(
        self,
        registry: SequenceRegistry,
        text: str = "",
        *,
        case_sensitive: bool = False,
        optional_whitespace: bool = False,
    ):
        self._registry = registry
        self._is_case_sensitive = case_sensitive
        self._optional_whitespace = optional_whitespace
        self._text = ""
        self._progress = 0
        self._acceptable_inputs: frozenset[str] = frozenset()
        self._acceptable_inputs_dirty = True
        self._is_targeted = False
        self._is_removed = False
        self.last_processed_input: typing.Optional[str] = None

        self.completed: Signal[Sequence] = Signal("completed")
        self.input_accepted: Signal[Sequence] = Signal("input_accepted")
        self.input_rejected: Signal[Sequence] = Signal("input_rejected")
        self.removal: Signal[Sequence] = Signal("removal")
        self.targeted: Signal[Sequence] = Signal("targeted")
        self.untargeted: Signal[Sequence] = Signal("untargeted")
        self.text_updated: Signal[Sequence] = Signal("text_updated")

        self._set_text(text)
        registry.register(self)

    def __repr__(self):
        return f"<Sequence {self._text!r} progress={self._progress}>"

    @property
    def _signals(self):
        return (
            self.completed,
            self.input_accepted,
            self.input_rejected,
            self.removal,
            self.targeted,
            self.untargeted,
            self.text_updated,
        )

    @property
    def text(self) -> str:
        return self._text

    @text.setter
    def text(self, value: str):
        self._set_text(value)
        # an empty text is complete as soon as it is assigned
        if self.is_completed and not self._is_removed:
            self.completed.emit(self)

    @property
    def progress(self) -> int:
        return self._progress

    @property
    def is_case_sensitive(self) -> bool:
        return self._is_case_sensitive

    @property
    def optional_whitespace(self) -> bool:
        return self._optional_whitespace

    @property
    def is_targeted(self) -> bool:
        return self._is_targeted

    @property
    def is_removed(self) -> bool:
        return self._is_removed

    @property
    def is_completed(self) -> bool:
        return self._progress >= len(self._text)

    @property
    def completed_text(self) -> str:
        return self._text[: self._progress]

    @property
    def remaining_text(self) -> str:
        return self._text[self._progress :]

    @property
    def acceptable_inputs(self) -> frozenset[str]:
        "The tokens that would currently be accepted, recomputed only after progress or text changes."
        if self._acceptable_inputs_dirty:
            self._acceptable_inputs = self._evaluate_acceptable_inputs()
            self._acceptable_inputs_dirty = False
        return self._acceptable_inputs

    def does_accept_input(self, token: str) -> bool:
        return any(inputs_equal(token, acceptable, self._is_case_sensitive) for acceptable in self.acceptable_inputs)

    def receive_input(self, token: str) -> bool:
        """Accept or reject a single token.

        When optional whitespace is enabled and the token does not match at the cursor, it is tried
        against the next non-whitespace character instead, so untyped whitespace is skipped but a
        required character never is.
        """
        if self._is_removed or self.is_completed:
            logger.debug("%r ignoring input %r", self, token)
            return False

        self.last_processed_input = token
        index = self._progress
        if self._optional_whitespace and not self._matches_at(token, index):
            index = self._next_non_whitespace_index()

        if self._matches_at(token, index):
            self._set_progress(index + 1)
            self.text_updated.emit(self)
            self.input_accepted.emit(self)
            if self.is_completed:
                self.completed.emit(self)
            return True

        self.input_rejected.emit(self)
        return False

    def reset(self):
        self._set_progress(0)
        self.text_updated.emit(self)

    def target(self):
        if self._is_removed:
            raise SequenceRemovedError(self)
        self._registry.target_sequence(self)

    def untarget(self):
        self._registry.untarget_sequence(self)

    def remove(self):
        "Announce removal, then drop every receiver so nothing calls back into a dead sequence."
        if self._is_removed:
            return
        self.removal.emit(self)
        self._is_removed = True
        for signal in self._signals:
            signal.clear()

    def _set_targeted(self, targeted: bool):
        # called by the registry once membership has changed
        if targeted == self._is_targeted:
            return
        self._is_targeted = targeted
        if targeted:
            self.targeted.emit(self)
        else:
            self.untargeted.emit(self)

    def _set_progress(self, progress: int):
        self._progress = progress
        self._acceptable_inputs_dirty = True

    def _set_text(self, text: str):
        self._text = text.strip() if self._optional_whitespace else text
        self._set_progress(0)
        self.text_updated.emit(self)

    def _required_input(self, index: int) -> typing.Optional[str]:
        if 0 <= index < len(self._text):
            return self._text[index]
        return None

    def _matches_at(self, token: str, index: int) -> bool:
        required = self._required_input(index)
        return required is not None and inputs_equal(required, token, self._is_case_sensitive)

    def _next_non_whitespace_index(self) -> int:
        # may return len(text) when only whitespace remains
        index = self._progress
        while index < len(self._text) and is_whitespace(self._text[index]):
            index += 1
        return index

    def _evaluate_acceptable_inputs(self) -> frozenset[str]:
        if self.is_completed:
            return frozenset()
        inputs = {self._text[self._progress]}
        if self._optional_whitespace:
            skipped_to = self._required_input(self._next_non_whitespace_index())
            if skipped_to is not None:
                inputs.add(skipped_to)
        if not self._is_case_sensitive:
            for character in tuple(inputs):
                # str.upper() can widen or remap a character ("ß" -> "SS"); keep only variants the matcher agrees with
                inputs.update(
                    variant for variant in (character.lower(), character.upper()) if inputs_equal(variant, character, False)
                )
        return frozenset(inputs)
