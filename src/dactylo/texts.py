from __future__ import annotations

import collections.abc
import enum
import logging
import random
import typing

import attr
import pygtrie

if typing.TYPE_CHECKING:
    from .engine.registry import SequenceRegistry
    from .settings import Settings

logger = logging.getLogger(__name__)


@enum.unique
class Separator(enum.Enum):
    NEWLINE = "newline"
    ANY_WHITESPACE = "any_whitespace"


@attr.frozen(kw_only=True)
class TextExtractor:
    separator: Separator = attr.field(default=Separator.NEWLINE)
    trim_whitespace: bool = attr.field(default=True)
    character_filter: str = attr.field(default=".,`\"'")

    @classmethod
    def from_settings(cls, settings: Settings):
        return cls(
            separator=settings.separator,
            trim_whitespace=settings.trim_whitespace,
            character_filter=settings.character_filter,
        )

    def filter_characters(self, text: str) -> str:
        return text.translate({ord(c): None for c in self.character_filter})

    def extract(self, source: str) -> list[str]:
        match self.separator:
            case Separator.NEWLINE:
                pieces = source.split("\n")
            case Separator.ANY_WHITESPACE:
                pieces = source.split()
        texts = (self.filter_characters(piece) for piece in pieces)
        if self.trim_whitespace:
            texts = (text.strip() for text in texts)
        return [text for text in texts if len(text) > 0]


class TextCollection:
    """Candidate texts for new sequences, indexed by their initial character.

    Two tries are kept: one keyed by the texts themselves for case-sensitive lookups, and one keyed
    by their uppercased form for case-insensitive ones.
    """

    def __init__(self, texts: collections.abc.Iterable[str], *, rng: typing.Optional[random.Random] = None):
        self.texts = tuple(dict.fromkeys(text for text in texts if text))
        self._rng = rng if rng is not None else random.Random()
        self._by_text = pygtrie.CharTrie()
        self._by_upper_text = pygtrie.CharTrie()
        for text in self.texts:
            self._by_text[text] = text
            self._by_upper_text.setdefault(text.upper(), []).append(text)

    def __len__(self):
        return len(self.texts)

    def initials(self, case_sensitive: bool) -> list[str]:
        if case_sensitive:
            return sorted({text[0] for text in self.texts})
        return sorted({text.upper()[0] for text in self.texts})

    def texts_by_initial(self, initial: str, case_sensitive: bool) -> list[str]:
        if case_sensitive:
            if not self._by_text.has_node(initial):
                return []
            return list(self._by_text.values(prefix=initial))
        upper_initial = initial.upper()
        if not self._by_upper_text.has_node(upper_initial):
            return []
        return [text for texts in self._by_upper_text.values(prefix=upper_initial) for text in texts]

    def pick_random_text(self) -> typing.Optional[str]:
        if not self.texts:
            return None
        return self._rng.choice(self.texts)

    def unique_initial_text(self, other_texts: collections.abc.Iterable[str], case_sensitive: bool) -> typing.Optional[str]:
        "A text whose initial no other text starts with, weighting each initial by how many texts it has."
        taken = {(text if case_sensitive else text.upper())[0] for text in other_texts if text}
        available = [initial for initial in self.initials(case_sensitive) if initial not in taken]
        if not available:
            return None
        weights = [len(self.texts_by_initial(initial, case_sensitive)) for initial in available]
        initial = self._rng.choices(available, weights=weights)[0]
        return self._rng.choice(self.texts_by_initial(initial, case_sensitive))

    def find_uniquely_targetable_text(self, registry: SequenceRegistry) -> typing.Optional[str]:
        sequences = registry.sequences
        case_sensitive = any(sequence.is_case_sensitive for sequence in sequences)
        text = self.unique_initial_text((sequence.remaining_text for sequence in sequences), case_sensitive)
        if text is None:
            logger.warning("No text with a unique initial among %d live sequences; picking at random", len(sequences))
            text = self.pick_random_text()
        return text
