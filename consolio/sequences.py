"""Escape sequences for cursor movement and screen clearing."""

from __future__ import annotations

__all__ = [
    "move_cursor_down",
    "move_cursor_up",
    "move_cursor_left",
    "move_cursor_right",
    "move_cursor_to",
    "clear_chars",
    "clear_line",
    "clear_screen",
    "clear_to_end_of_screen",
    "show_cursor",
    "hide_cursor",
]


def _check_count(n: int) -> None:
    if n < 0:
        raise ValueError(f"count must not be negative, got {n}")


def _relative(n: int, code: str) -> str:
    _check_count(n)
    return f"\x1b[{n}{code}" if n > 0 else ""


def move_cursor_down(n: int) -> str:
    """Sequence that moves the cursor down by ``n`` lines (empty for 0)."""
    return _relative(n, "B")


def move_cursor_up(n: int) -> str:
    """Sequence that moves the cursor up by ``n`` lines (empty for 0)."""
    return _relative(n, "A")


def move_cursor_left(n: int) -> str:
    """Sequence that moves the cursor left by ``n`` columns (empty for 0)."""
    return _relative(n, "D")


def move_cursor_right(n: int) -> str:
    """Sequence that moves the cursor right by ``n`` columns (empty for 0)."""
    return _relative(n, "C")


def move_cursor_to(x: int, y: int) -> str:
    """Sequence that moves the cursor to column ``x`` and row ``y`` (0-based)."""
    _check_count(x)
    _check_count(y)
    return f"\x1b[{y + 1};{x + 1}H"


def clear_chars(n: int) -> str:
    """Sequence that erases the last ``n`` characters (empty for 0)."""
    _check_count(n)
    return f"\x1b[{n}D\x1b[0K" if n > 0 else ""


def clear_line() -> str:
    """Sequence that clears the current line and returns to its start."""
    return "\r\x1b[2K"


def clear_screen() -> str:
    """Sequence that clears the screen and moves the cursor home."""
    return "\r\x1b[2J\r\x1b[H"


def clear_to_end_of_screen() -> str:
    """Sequence that clears from the cursor to the end of the screen."""
    return "\r\x1b[0J"


def show_cursor() -> str:
    """Sequence that makes the cursor visible."""
    return "\x1b[?25h"


def hide_cursor() -> str:
    """Sequence that hides the cursor."""
    return "\x1b[?25l"