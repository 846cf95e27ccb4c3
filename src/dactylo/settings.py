import dataclasses
import json
import operator
import pathlib
import typing

import cattrs
from cattrs.gen import make_dict_structure_fn, override

from .device.keyboard_consts import KeyCode
from .texts import Separator

KEYMAPS = {
    "KEY_GRAVE": ["`", "~"],
    "KEY_1": ["1", "!"],
    "KEY_2": ["2", "@"],
    "KEY_3": ["3", "#"],
    "KEY_4": ["4", "$"],
    "KEY_5": ["5", "%"],
    "KEY_6": ["6", "^"],
    "KEY_7": ["7", "&"],
    "KEY_8": ["8", "*"],
    "KEY_9": ["9", "("],
    "KEY_0": ["0", ")"],
    "KEY_MINUS": ["-", "_"],
    "KEY_EQUAL": ["=", "+"],
    "KEY_Q": ["q", "Q"],
    "KEY_W": ["w", "W"],
    "KEY_E": ["e", "E"],
    "KEY_R": ["r", "R"],
    "KEY_T": ["t", "T"],
    "KEY_Y": ["y", "Y"],
    "KEY_U": ["u", "U"],
    "KEY_I": ["i", "I"],
    "KEY_O": ["o", "O"],
    "KEY_P": ["p", "P"],
    "KEY_LEFTBRACE": ["[", "{"],
    "KEY_RIGHTBRACE": ["]", "}"],
    "KEY_BACKSLASH": ["\\", "|"],
    "KEY_A": ["a", "A"],
    "KEY_S": ["s", "S"],
    "KEY_D": ["d", "D"],
    "KEY_F": ["f", "F"],
    "KEY_G": ["g", "G"],
    "KEY_H": ["h", "H"],
    "KEY_J": ["j", "J"],
    "KEY_K": ["k", "K"],
    "KEY_L": ["l", "L"],
    "KEY_SEMICOLON": [";", ":"],
    "KEY_APOSTROPHE": ["'", '"'],
    "KEY_Z": ["z", "Z"],
    "KEY_X": ["x", "X"],
    "KEY_C": ["c", "C"],
    "KEY_V": ["v", "V"],
    "KEY_B": ["b", "B"],
    "KEY_N": ["n", "N"],
    "KEY_M": ["m", "M"],
    "KEY_COMMA": [",", "<"],
    "KEY_DOT": [".", ">"],
    "KEY_SLASH": ["/", "?"],
    "KEY_SPACE": [" ", " "],
}

DEFAULTS = {
    "multi_target": False,
    "case_sensitive": False,
    "optional_whitespace": False,
    "tab_key": "KEY_TAB",
    "keymaps": KEYMAPS,
    "tick_rate": 60.0,
    "active_sequences": 4,
    "separator": "newline",
    "trim_whitespace": True,
    "character_filter": ".,`\"'",
}


settings_converter = cattrs.Converter()
settings_converter.register_unstructure_hook(KeyCode, operator.attrgetter("name"))
settings_converter.register_structure_hook(KeyCode, lambda v, _: KeyCode[v])


def structure_tick_rate(v: typing.Any, _typ: type[float]):
    rate = float(v)
    if rate <= 0:
        raise ValueError(f"tick_rate must be positive, not {v}")
    return rate


@dataclasses.dataclass(kw_only=True)
class Settings:
    _path: pathlib.Path
    multi_target: bool
    case_sensitive: bool
    optional_whitespace: bool
    tab_key: typing.Optional[KeyCode]
    keymaps: dict[KeyCode, list[str]]
    # ticks per second
    tick_rate: float
    active_sequences: int
    separator: Separator
    trim_whitespace: bool
    character_filter: str

    @property
    def tick_interval(self) -> float:
        return 1 / self.tick_rate

    def save(self, dest: typing.Optional[pathlib.Path] = None):
        if dest is None:
            dest = self._path
        raw = settings_converter.unstructure(self)
        del raw["_path"]
        with dest.open("w") as outfile:
            json.dump(raw, outfile, indent=2)

    @classmethod
    def load(cls, src: pathlib.Path):
        with src.open() as infile:
            raw = DEFAULTS | json.load(infile)
        raw["_path"] = src
        return settings_converter.structure(raw, cls)

    @classmethod
    def default(cls, path: pathlib.Path = pathlib.Path("dactylo.settings.json")):
        return settings_converter.structure(DEFAULTS | {"_path": path}, cls)

    @classmethod
    def for_test(cls):
        return cls.default(pathlib.Path("test.settings.json"))


settings_converter.register_structure_hook(
    Settings,
    make_dict_structure_fn(Settings, settings_converter, tick_rate=override(struct_hook=structure_tick_rate)),
)
