"""Measuring, truncating and padding text that may hold escape sequences."""

from __future__ import annotations

from enum import Enum

from wcwidth import wcwidth

from consolio.ansi import AnsiCodeIterator

__all__ = [
    "Alignment",
    "str_width",
    "char_width",
    "measure_text_width",
    "truncate_str",
    "pad_str",
    "pad_str_with",
]


class Alignment(Enum):
    """Where text is placed when it is padded."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


def _check_width(width: int) -> None:
    if width < 0:
        raise ValueError(f"width must not be negative, got {width}")


def char_width(c: str) -> int:
    """Return the number of terminal columns one character takes.

    Control characters and other characters without a width count as 0.
    """
    if len(c) != 1:
        raise ValueError(f"expected a single character, got {c!r}")
    return max(wcwidth(c), 0)


def str_width(s: str) -> int:
    """Return the number of terminal columns a plain string takes."""
    return sum(char_width(c) for c in s)


def measure_text_width(s: str) -> int:
    """Return the displayed width of ``s``, ignoring escape sequences."""
    return sum(str_width(text) for text, is_ansi in AnsiCodeIterator(s) if not is_ansi)


def _prefix_within(text: str, max_width: int) -> str:
    """Return the longest prefix of ``text`` that fits in ``max_width`` columns."""
    used = 0
    taken = 0
    for c in text:
        taken += 1
        used += char_width(c)
        if used == max_width:
            break
        if used > max_width:
            taken -= 1
            break
    return text[:taken]


def truncate_str(s: str, width: int, tail: str) -> str:
    """Cut ``s`` down to ``width`` columns, appending ``tail`` if it was cut.

    Escape sequences are kept intact: those after the cut are still
    emitted so that styles are closed properly.
    """
    _check_width(width)
    if measure_text_width(s) <= width:
        return s

    budget = max(width - str_width(tail), 0)
    iterator = AnsiCodeIterator(s)
    length = 0
    parts: list[str] | None = None

    for text, is_ansi in iterator:
        if is_ansi:
            if parts is not None:
                parts.append(text)
            continue
        if parts is not None:
            continue
        text_width = str_width(text)
        if text_width + length > budget:
            before = iterator.current_slice()[: -len(text)]
            parts = [before, _prefix_within(text, max(budget - length, 0)), tail]
        length += text_width

    return s if parts is None else "".join(parts)


def pad_str(
    s: str,
    width: int,
    align: Alignment,
    truncate: str | None = None,
) -> str:
    """Pad ``s`` with spaces to ``width`` columns.

    If ``s`` is already as wide and ``truncate`` is given, it is truncated
    with ``truncate`` as the tail.
    """
    return pad_str_with(s, width, align, truncate, " ")


def pad_str_with(
    s: str,
    width: int,
    align: Alignment,
    truncate: str | None = None,
    pad: str = " ",
) -> str:
    """Pad ``s`` with the character ``pad`` to ``width`` columns."""
    _check_width(width)
    if len(pad) != 1:
        raise ValueError(f"padding must be a single character, got {pad!r}")

    cols = measure_text_width(s)
    if cols >= width:
        return s if truncate is None else truncate_str(s, width, truncate)

    diff = width - cols
    if align is Alignment.LEFT:
        left, right = 0, diff
    elif align is Alignment.RIGHT:
        left, right = diff, 0
    else:
        left, right = diff // 2, diff - diff // 2
    return f"{pad * left}{s}{pad * right}"