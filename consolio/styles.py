"""Colours, attributes and styled values for terminal output."""

from __future__ import annotations

import os
import threading
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Any, ClassVar

from consolio.unixterm import is_a_color_terminal, wants_emoji

__all__ = [
    "Color",
    "Attribute",
    "Style",
    "StyledObject",
    "Emoji",
    "colors_enabled",
    "set_colors_enabled",
    "colors_enabled_stderr",
    "set_colors_enabled_stderr",
    "style",
]

_STDOUT_FD = 1
_STDERR_FD = 2
_RESET = "\x1b[0m"

_colors_lock = threading.Lock()
_colors: dict[int, bool] = {}


def _default_colors_enabled(fd: int) -> bool:
    supported = is_a_color_terminal(fd) and os.environ.get("CLICOLOR", "1") != "0"
    return supported or os.environ.get("CLICOLOR_FORCE", "0") != "0"


def _colors_for(fd: int) -> bool:
    with _colors_lock:
        if fd not in _colors:
            _colors[fd] = _default_colors_enabled(fd)
        return _colors[fd]


def _set_colors_for(fd: int, val: bool) -> None:
    with _colors_lock:
        _colors[fd] = bool(val)


def colors_enabled() -> bool:
    """Return whether colours should be used on stdout.

    Honours ``CLICOLOR`` and ``CLICOLOR_FORCE``; the default is computed once.
    """
    return _colors_for(_STDOUT_FD)


def set_colors_enabled(val: bool) -> None:
    """Force colours on or off for stdout."""
    _set_colors_for(_STDOUT_FD, val)


def colors_enabled_stderr() -> bool:
    """Return whether colours should be used on stderr."""
    return _colors_for(_STDERR_FD)


def set_colors_enabled_stderr(val: bool) -> None:
    """Force colours on or off for stderr."""
    _set_colors_for(_STDERR_FD, val)


@dataclass(frozen=True)
class Color:
    """A terminal colour: one of the eight basic colours or a 256-colour index."""

    number: int
    is_color256: bool = False

    BLACK: ClassVar[Color]
    RED: ClassVar[Color]
    GREEN: ClassVar[Color]
    YELLOW: ClassVar[Color]
    BLUE: ClassVar[Color]
    MAGENTA: ClassVar[Color]
    CYAN: ClassVar[Color]
    WHITE: ClassVar[Color]

    def __post_init__(self) -> None:
        if isinstance(self.number, bool) or not isinstance(self.number, int):
            raise TypeError(f"colour number must be an int, got {self.number!r}")
        limit = 255 if self.is_color256 else 7
        if not 0 <= self.number <= limit:
            raise ValueError(f"colour number out of range 0..{limit}: {self.number}")

    @classmethod
    def color256(cls, number: int) -> Color:
        """Return the colour with the given 256-colour palette index."""
        return cls(number, True)


Color.BLACK = Color(0)
Color.RED = Color(1)
Color.GREEN = Color(2)
Color.YELLOW = Color(3)
Color.BLUE = Color(4)
Color.MAGENTA = Color(5)
Color.CYAN = Color(6)
Color.WHITE = Color(7)


class Attribute(IntEnum):
    """A text attribute; its SGR code is its value plus one."""

    BOLD = 0
    DIM = 1
    ITALIC = 2
    UNDERLINED = 3
    BLINK = 4
    BLINK_FAST = 5
    REVERSE = 6
    HIDDEN = 7
    STRIKE_THROUGH = 8


def _parse_u8(text: str) -> int | None:
    digits = text[1:] if text.startswith("+") else text
    if not digits or not all("0" <= ch <= "9" for ch in digits):
        return None
    value = int(digits)
    return value if value <= 255 else None


def _color_code(color: Color, bright: bool, extended: int, base: int) -> str:
    if color.is_color256:
        return f"\x1b[{extended};5;{color.number}m"
    if bright:
        return f"\x1b[{extended};5;{color.number + 8}m"
    return f"\x1b[{base + color.number}m"


_DOTTED_NAMES = {
    "black": lambda s: s.black(),
    "red": lambda s: s.red(),
    "green": lambda s: s.green(),
    "yellow": lambda s: s.yellow(),
    "blue": lambda s: s.blue(),
    "magenta": lambda s: s.magenta(),
    "cyan": lambda s: s.cyan(),
    "white": lambda s: s.white(),
    "bright": lambda s: s.bright(),
    "on_black": lambda s: s.on_black(),
    "on_red": lambda s: s.on_red(),
    "on_green": lambda s: s.on_green(),
    "on_yellow": lambda s: s.on_yellow(),
    "on_blue": lambda s: s.on_blue(),
    "on_magenta": lambda s: s.on_magenta(),
    "on_cyan": lambda s: s.on_cyan(),
    "on_white": lambda s: s.on_white(),
    "on_bright": lambda s: s.on_bright(),
    "bold": lambda s: s.bold(),
    "dim": lambda s: s.dim(),
    "underlined": lambda s: s.underlined(),
    "blink": lambda s: s.blink(),
    "blink_fast": lambda s: s.blink_fast(),
    "reverse": lambda s: s.reverse(),
    "hidden": lambda s: s.hidden(),
    "strikethrough": lambda s: s.strikethrough(),
}


@dataclass(frozen=True)
class Style:
    """An immutable style; every builder method returns a new style."""

    foreground: Color | None = None
    background: Color | None = None
    fg_bright: bool = False
    bg_bright: bool = False
    attrs: frozenset[Attribute] = frozenset()
    force: bool | None = None
    stderr: bool = False

    @classmethod
    def from_dotted_str(cls, s: str) -> Style:
        """Build a style from terms such as ``red.on_blue`` or ``9.on_12``.

        Unknown terms are ignored.
        """
        rv = cls()
        for part in s.split("."):
            named = _DOTTED_NAMES.get(part)
            if named is not None:
                rv = named(rv)
            elif part.startswith("on_"):
                number = _parse_u8(part[3:])
                if number is not None:
                    rv = rv.on_color256(number)
            else:
                number = _parse_u8(part)
                if number is not None:
                    rv = rv.color256(number)
        return rv

    def apply_to(self, val: Any) -> StyledObject:
        """Wrap a value so that it is shown in this style."""
        return StyledObject(self, val)

    def force_styling(self, value: bool) -> Style:
        """Force styling on or off, overriding detection."""
        return replace(self, force=bool(value))

    def for_stderr(self) -> Style:
        """Decide on colours as for stderr."""
        return replace(self, stderr=True)

    def for_stdout(self) -> Style:
        """Decide on colours as for stdout (the default)."""
        return replace(self, stderr=False)

    def fg(self, color: Color) -> Style:
        """Set the foreground colour."""
        return replace(self, foreground=color)

    def bg(self, color: Color) -> Style:
        """Set the background colour."""
        return replace(self, background=color)

    def attr(self, attr: Attribute) -> Style:
        """Add an attribute."""
        return replace(self, attrs=self.attrs | {Attribute(attr)})

    def black(self) -> Style:
        return self.fg(Color.BLACK)

    def red(self) -> Style:
        return self.fg(Color.RED)

    def green(self) -> Style:
        return self.fg(Color.GREEN)

    def yellow(self) -> Style:
        return self.fg(Color.YELLOW)

    def blue(self) -> Style:
        return self.fg(Color.BLUE)

    def magenta(self) -> Style:
        return self.fg(Color.MAGENTA)

    def cyan(self) -> Style:
        return self.fg(Color.CYAN)

    def white(self) -> Style:
        return self.fg(Color.WHITE)

    def color256(self, color: int) -> Style:
        return self.fg(Color.color256(color))

    def bright(self) -> Style:
        return replace(self, fg_bright=True)

    def on_black(self) -> Style:
        return self.bg(Color.BLACK)

    def on_red(self) -> Style:
        return self.bg(Color.RED)

    def on_green(self) -> Style:
        return self.bg(Color.GREEN)

    def on_yellow(self) -> Style:
        return self.bg(Color.YELLOW)

    def on_blue(self) -> Style:
        return self.bg(Color.BLUE)

    def on_magenta(self) -> Style:
        return self.bg(Color.MAGENTA)

    def on_cyan(self) -> Style:
        return self.bg(Color.CYAN)

    def on_white(self) -> Style:
        return self.bg(Color.WHITE)

    def on_color256(self, color: int) -> Style:
        return self.bg(Color.color256(color))

    def on_bright(self) -> Style:
        return replace(self, bg_bright=True)

    def bold(self) -> Style:
        return self.attr(Attribute.BOLD)

    def dim(self) -> Style:
        return self.attr(Attribute.DIM)

    def italic(self) -> Style:
        return self.attr(Attribute.ITALIC)

    def underlined(self) -> Style:
        return self.attr(Attribute.UNDERLINED)

    def blink(self) -> Style:
        return self.attr(Attribute.BLINK)

    def blink_fast(self) -> Style:
        return self.attr(Attribute.BLINK_FAST)

    def reverse(self) -> Style:
        return self.attr(Attribute.REVERSE)

    def hidden(self) -> Style:
        return self.attr(Attribute.HIDDEN)

    def strikethrough(self) -> Style:
        return self.attr(Attribute.STRIKE_THROUGH)

    def _enabled(self) -> bool:
        if self.force is not None:
            return self.force
        return colors_enabled_stderr() if self.stderr else colors_enabled()

    def _codes(self) -> str:
        codes = []
        if self.foreground is not None:
            codes.append(_color_code(self.foreground, self.fg_bright, 38, 30))
        if self.background is not None:
            codes.append(_color_code(self.background, self.bg_bright, 48, 40))
        codes.extend(f"\x1b[{attr.value + 1}m" for attr in sorted(self.attrs))
        return "".join(codes)


def style(val: Any) -> StyledObject:
    """Wrap a value in an empty style, ready for styling."""
    return Style().apply_to(val)


@dataclass(frozen=True)
class StyledObject:
    """A value together with the style it is shown in."""

    style: Style
    val: Any

    def __str__(self) -> str:
        return format(self, "")

    def __format__(self, spec: str) -> str:
        body = format(self.val, spec)
        codes = self.style._codes() if self.style._enabled() else ""
        if not codes:
            return body
        return f"{codes}{body}{_RESET}"

    def _with(self, new_style: Style) -> StyledObject:
        return replace(self, style=new_style)

    def force_styling(self, value: bool) -> StyledObject:
        return self._with(self.style.force_styling(value))

    def for_stderr(self) -> StyledObject:
        return self._with(self.style.for_stderr())

    def for_stdout(self) -> StyledObject:
        return self._with(self.style.for_stdout())

    def fg(self, color: Color) -> StyledObject:
        return self._with(self.style.fg(color))

    def bg(self, color: Color) -> StyledObject:
        return self._with(self.style.bg(color))

    def attr(self, attr: Attribute) -> StyledObject:
        return self._with(self.style.attr(attr))

    def black(self) -> StyledObject:
        return self.fg(Color.BLACK)

    def red(self) -> StyledObject:
        return self.fg(Color.RED)

    def green(self) -> StyledObject:
        return self.fg(Color.GREEN)

    def yellow(self) -> StyledObject:
        return self.fg(Color.YELLOW)

    def blue(self) -> StyledObject:
        return self.fg(Color.BLUE)

    def magenta(self) -> StyledObject:
        return self.fg(Color.MAGENTA)

    def cyan(self) -> StyledObject:
        return self.fg(Color.CYAN)

    def white(self) -> StyledObject:
        return self.fg(Color.WHITE)

    def color256(self, color: int) -> StyledObject:
        return self.fg(Color.color256(color))

    def bright(self) -> StyledObject:
        return self._with(self.style.bright())

    def on_black(self) -> StyledObject:
        return self.bg(Color.BLACK)

    def on_red(self) -> StyledObject:
        return self.bg(Color.RED)

    def on_green(self) -> StyledObject:
        return self.bg(Color.GREEN)

    def on_yellow(self) -> StyledObject:
        return self.bg(Color.YELLOW)

    def on_blue(self) -> StyledObject:
        return self.bg(Color.BLUE)

    def on_magenta(self) -> StyledObject:
        return self.bg(Color.MAGENTA)

    def on_cyan(self) -> StyledObject:
        return self.bg(Color.CYAN)

    def on_white(self) -> StyledObject:
        return self.bg(Color.WHITE)

    def on_color256(self, color: int) -> StyledObject:
        return self.bg(Color.color256(color))

    def on_bright(self) -> StyledObject:
        return self._with(self.style.on_bright())

    def bold(self) -> StyledObject:
        return self.attr(Attribute.BOLD)

    def dim(self) -> StyledObject:
        return self.attr(Attribute.DIM)

    def italic(self) -> StyledObject:
        return self.attr(Attribute.ITALIC)

    def underlined(self) -> StyledObject:
        return self.attr(Attribute.UNDERLINED)

    def blink(self) -> StyledObject:
        return self.attr(Attribute.BLINK)

    def blink_fast(self) -> StyledObject:
        return self.attr(Attribute.BLINK_FAST)

    def reverse(self) -> StyledObject:
        return self.attr(Attribute.REVERSE)

    def hidden(self) -> StyledObject:
        return self.attr(Attribute.HIDDEN)

    def strikethrough(self) -> StyledObject:
        return self.attr(Attribute.STRIKE_THROUGH)


@dataclass(frozen=True)
class Emoji:
    """An emoji shown only where emoji are wanted, with a fallback elsewhere."""

    emoji: str
    fallback: str

    def __str__(self) -> str:
        return self.emoji if wants_emoji() else self.fallback