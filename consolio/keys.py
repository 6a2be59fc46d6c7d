"""Keys that can be read from the keyboard."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Union

__all__ = ["Key", "Char", "UnknownEscSeq", "KeyEvent"]


class Key(Enum):
    """Keys without a payload.

    This is an incomplete set of the keys that can be read.
    """

    UNKNOWN = auto()
    ARROW_LEFT = auto()
    ARROW_RIGHT = auto()
    ARROW_UP = auto()
    ARROW_DOWN = auto()
    ENTER = auto()
    ESCAPE = auto()
    BACKSPACE = auto()
    HOME = auto()
    END = auto()
    TAB = auto()
    BACK_TAB = auto()
    ALT = auto()
    DEL = auto()
    SHIFT = auto()
    INSERT = auto()
    PAGE_UP = auto()
    PAGE_DOWN = auto()
    CTRL_C = auto()


@dataclass(frozen=True)
class Char:
    """A single printable character key."""

    char: str

    def __post_init__(self) -> None:
        if not isinstance(self.char, str) or len(self.char) != 1:
            raise ValueError(f"expected a single character, got {self.char!r}")

    def __str__(self) -> str:
        return self.char


@dataclass(frozen=True)
class UnknownEscSeq:
    """An unrecognised sequence: the characters that followed Esc."""

    chars: tuple[str, ...] = field(default=())

    def __post_init__(self) -> None:
        chars = tuple(self.chars) if isinstance(self.chars, Iterable) else None
        if chars is None or any(not isinstance(c, str) or len(c) != 1 for c in chars):
            raise ValueError(f"expected single characters, got {self.chars!r}")
        object.__setattr__(self, "chars", chars)


KeyEvent = Union[Key, Char, UnknownEscSeq]