"""Scanning of ANSI escape sequences in text."""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum, auto

__all__ = ["AnsiCodeIterator", "find_ansi_codes", "strip_ansi_codes"]


class _State(Enum):
    START = auto()
    S1 = auto()
    S2 = auto()
    S3 = auto()
    S4 = auto()
    S5 = auto()
    S6 = auto()
    S7 = auto()
    S8 = auto()
    S9 = auto()
    S10 = auto()
    S11 = auto()
    TRAP = auto()


_ESCAPES = frozenset("\x1b\x9b")
_FINAL_STATES = frozenset(
    {_State.S3, _State.S5, _State.S6, _State.S7, _State.S8, _State.S9, _State.S11}
)

_TERMINATORS = frozenset(
    [chr(c) for c in range(ord("A"), ord("P") + 1)]
    + [chr(c) for c in range(ord("f"), ord("n") + 1)]
    + list("RZcqry=><")
)

_PAREN = {_State.S1: _State.S2, _State.S2: _State.S4, _State.S4: _State.S4}
_SEMICOLON = {
    _State.S1: _State.S4,
    _State.S2: _State.S4,
    _State.S4: _State.S4,
    _State.S5: _State.S10,
    _State.S6: _State.S10,
    _State.S7: _State.S10,
    _State.S8: _State.S10,
    _State.S10: _State.S10,
}
_INTRODUCER = {_State.S1: _State.S4, _State.S2: _State.S4, _State.S4: _State.S4}
_DIGIT_LOW = {
    _State.S1: _State.S5,
    _State.S4: _State.S5,
    _State.S2: _State.S3,
    _State.S5: _State.S6,
    _State.S6: _State.S7,
    _State.S7: _State.S8,
    _State.S8: _State.S9,
    _State.S10: _State.S5,
}
_DIGIT_HIGH = {**_DIGIT_LOW, _State.S2: _State.S5}
_TERMINATOR = {
    state: _State.S11
    for state in (
        _State.S1,
        _State.S2,
        _State.S4,
        _State.S5,
        _State.S6,
        _State.S7,
        _State.S8,
        _State.S10,
    )
}


def _transition(state: _State, c: str) -> _State:
    if c in _ESCAPES:
        return _State.S1 if state is _State.START else _State.TRAP
    if c in "()":
        table = _PAREN
    elif c == ";":
        table = _SEMICOLON
    elif c in "[#?":
        table = _INTRODUCER
    elif "0" <= c <= "2":
        table = _DIGIT_LOW
    elif "3" <= c <= "9":
        table = _DIGIT_HIGH
    elif c in _TERMINATORS:
        table = _TERMINATOR
    else:
        return _State.TRAP
    return table.get(state, _State.TRAP)


def find_ansi_codes(s: str) -> Iterator[tuple[int, int]]:
    """Yield ``(start, end)`` index pairs of the escape sequences in ``s``.

    Matching is greedy: a candidate runs until the state machine traps and
    the longest prefix that ended in an accepting state is reported.
    """
    pos = 0
    length = len(s)
    while pos < length:
        if s[pos] not in _ESCAPES:
            pos += 1
            continue
        start = pos
        state = _State.START
        last_final: int | None = None
        while True:
            if pos < length:
                state = _transition(state, s[pos])
                if state in _FINAL_STATES:
                    last_final = pos
            if state is _State.TRAP or pos >= length:
                if last_final is not None:
                    yield start, last_final + 1
                # The character that trapped is left in place: it may start
                # the next sequence.
                break
            pos += 1


def strip_ansi_codes(s: str) -> str:
    """Return ``s`` with every ANSI escape sequence removed."""
    return "".join(text for text, is_ansi in AnsiCodeIterator(s) if not is_ansi)


class AnsiCodeIterator:
    """Iterate over ``(text, is_ansi)`` pieces of a string.

    Each piece is a slice of the original string; ``is_ansi`` tells whether
    it is an escape sequence or plain text.
    """

    def __init__(self, s: str) -> None:
        self._s = s
        self._pending: tuple[str, bool] | None = None
        self._last_idx = 0
        self._cur_idx = 0
        self._matches = find_ansi_codes(s)

    def __iter__(self) -> AnsiCodeIterator:
        return self

    def __next__(self) -> tuple[str, bool]:
        if self._pending is not None:
            item, self._pending = self._pending, None
            self._cur_idx += len(item[0])
            return item

        found = next(self._matches, None)
        if found is not None:
            start, end = found
            code = self._s[start:end]
            text = self._s[self._last_idx:start]
            self._last_idx = end
            if not text:
                self._cur_idx = end
                return code, True
            self._cur_idx = start
            self._pending = (code, True)
            return text, False

        if self._last_idx < len(self._s):
            rest = self._s[self._last_idx:]
            self._cur_idx = self._last_idx = len(self._s)
            return rest, False

        raise StopIteration

    def current_slice(self) -> str:
        """Return the part of the string up to the current position."""
        return self._s[: self._cur_idx]

    def rest_slice(self) -> str:
        """Return the part of the string from the current position on."""
        return self._s[self._cur_idx:]