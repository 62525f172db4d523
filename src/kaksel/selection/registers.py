"""Register names understood by the editor."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

from .errors import ParseError

_SYMBOLIC_NAMES = MappingProxyType(
    {
        '"': "dquote",
        "/": "slash",
        "@": "arobase",
        "^": "caret",
        "|": "pipe",
        "%": "percent",
        ".": "dot",
        "#": "hash",
        "_": "underscore",
        ":": "colon",
    }
)
_BY_LONG_NAME = MappingProxyType({v: k for k, v in _SYMBOLIC_NAMES.items()})


@dataclass(frozen=True, slots=True)
class Register:
    """Single-character register slot; ``_`` stands for the live selection."""

    char: str

    def __post_init__(self) -> None:
        char = self.char
        valid = len(char) == 1 and (
            (char.isascii() and char.isalnum()) or char in _SYMBOLIC_NAMES
        )
        if not valid:
            raise ParseError(f"Register '{char}' could not be parsed")

    @classmethod
    def parse(cls, name: str) -> "Register":
        """Accept ``a``, ``"`` or a long name such as ``dquote``."""

        return cls(_BY_LONG_NAME.get(name, name))

    @property
    def expanded(self) -> str:
        """Name usable inside ``%reg{...}``."""

        return _SYMBOLIC_NAMES.get(self.char, self.char)

    @property
    def is_current_selection(self) -> bool:
        return self.char == "_"

    def __str__(self) -> str:
        return self.char


CURRENT_SELECTION = Register("_")
DEFAULT_REGISTER = Register('"')

__all__ = ["Register", "CURRENT_SELECTION", "DEFAULT_REGISTER"]
