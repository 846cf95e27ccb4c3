from __future__ import annotations

import typing

from ..device.keyboard_consts import KeyCode
from .frames import InputFrameSource, PlatformInput
from .registry import SequenceRegistry
from .sequence import Sequence

if typing.TYPE_CHECKING:
    from ..settings import Settings


class MatchingContext:
    """One game session's registry and frame source.

    Independent sessions (split-screen, tests) each get their own context; nothing is shared
    between them.
    """

    def __init__(
        self,
        platform: PlatformInput,
        *,
        multi_target: bool = False,
        case_sensitive: bool = False,
        optional_whitespace: bool = False,
        tab_key: typing.Optional[KeyCode] = KeyCode.KEY_TAB,
    ):
        self.platform = platform
        self.case_sensitive = case_sensitive
        self.optional_whitespace = optional_whitespace
        self.frames = InputFrameSource(platform, tab_key=tab_key)
        self.registry = SequenceRegistry(self.frames, multi_target=multi_target)

    @classmethod
    def from_settings(cls, platform: PlatformInput, settings: Settings):
        return cls(
            platform,
            multi_target=settings.multi_target,
            case_sensitive=settings.case_sensitive,
            optional_whitespace=settings.optional_whitespace,
            tab_key=settings.tab_key,
        )

    def create_sequence(
        self,
        text: str,
        *,
        case_sensitive: typing.Optional[bool] = None,
        optional_whitespace: typing.Optional[bool] = None,
    ) -> Sequence:
        return Sequence(
            self.registry,
            text,
            case_sensitive=self.case_sensitive if case_sensitive is None else case_sensitive,
            optional_whitespace=self.optional_whitespace if optional_whitespace is None else optional_whitespace,
        )

    def add_input(self, text: str):
        self.frames.add_input(text)

    def process_input(self):
        self.registry.process_input()
