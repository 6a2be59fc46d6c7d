"""A handle on a terminal: writing, cursor control and reading input."""

from __future__ import annotations

import errno
import io
import sys
import threading
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

from consolio import sequences
from consolio.keys import Char, Key, KeyEvent
from consolio.styles import Style
from consolio.text import char_width
from consolio.unixterm import (
    DEFAULT_WIDTH,
    is_a_color_terminal,
    is_a_terminal,
    read_secure,
    read_single_key,
    set_title as _set_title,
    terminal_size,
    wants_emoji as _wants_emoji,
)

__all__ = [
    "TermFamily",
    "TermTarget",
    "TermFeatures",
    "Term",
    "user_attended",
    "user_attended_stderr",
]

_DEFAULT_ROWS = 24


class TermTarget(Enum):
    """Where a terminal writes to."""

    STDOUT = auto()
    STDERR = auto()
    READ_WRITE_PAIR = auto()


class TermFamily(Enum):
    """The family of a terminal."""

    FILE = auto()
    """Redirected to a file or file-like thing."""
    UNIX_TERM = auto()
    """A standard unix terminal."""
    WINDOWS_CONSOLE = auto()
    """A cmd.exe-like console."""
    DUMMY = auto()
    """A terminal without any real capabilities."""


@dataclass
class _ReadWritePair:
    read: Any
    write: Any
    style: Style | None


@dataclass(frozen=True)
class TermFeatures:
    """Access to the features of a terminal."""

    term: Term

    def is_attended(self) -> bool:
        """Return whether a user is attending the terminal (it is a tty)."""
        fd = self.term._fd()
        return fd is not None and is_a_terminal(fd)

    def colors_supported(self) -> bool:
        """Return whether the terminal can show colours.

        This does not check whether colours are enabled.
        """
        fd = self.term._fd()
        return fd is not None and is_a_color_terminal(fd)

    def is_msys_tty(self) -> bool:
        """Return whether this is an msys terminal; never true here."""
        return False

    def wants_emoji(self) -> bool:
        """Return whether the terminal should be sent emoji."""
        return self.is_attended() and _wants_emoji()

    def family(self) -> TermFamily:
        """Return the family of the terminal."""
        if not self.is_attended():
            return TermFamily.FILE
        if sys.platform == "win32":
            return TermFamily.WINDOWS_CONSOLE
        return TermFamily.UNIX_TERM


class Term:
    """A terminal, writing either straight through or into a buffer.

    A buffered terminal keeps what is written until :meth:`flush`.
    """

    def __init__(
        self,
        target: TermTarget,
        *,
        buffered: bool = False,
        pair: _ReadWritePair | None = None,
    ) -> None:
        if (target is TermTarget.READ_WRITE_PAIR) != (pair is not None):
            raise ValueError("a read/write pair target needs a pair, and only it")
        self._target = target
        self._pair = pair
        self._buffer: bytearray | None = bytearray() if buffered else None
        self._buffer_lock = threading.Lock()
        self._prompt = ""
        self._prompt_lock = threading.Lock()
        self._prompt_guard = threading.Lock()
        self.is_msys_tty = self.features().is_msys_tty()
        self.is_tty = self.features().is_attended()

    @classmethod
    def stdout(cls) -> Term:
        """Return an unbuffered terminal on stdout."""
        return cls(TermTarget.STDOUT)

    @classmethod
    def stderr(cls) -> Term:
        """Return an unbuffered terminal on stderr."""
        return cls(TermTarget.STDERR)

    @classmethod
    def buffered_stdout(cls) -> Term:
        """Return a buffered terminal on stdout."""
        return cls(TermTarget.STDOUT, buffered=True)

    @classmethod
    def buffered_stderr(cls) -> Term:
        """Return a buffered terminal on stderr."""
        return cls(TermTarget.STDERR, buffered=True)

    @classmethod
    def read_write_pair(cls, read: Any, write: Any) -> Term:
        """Return a terminal on the given streams, styled like stderr."""
        return cls.read_write_pair_with_style(read, write, None)

    @classmethod
    def read_write_pair_with_style(cls, read: Any, write: Any, style: Style | None) -> Term:
        """Return a terminal on the given streams with the given style."""
        return cls(TermTarget.READ_WRITE_PAIR, pair=_ReadWritePair(read, write, style))

    def style(self) -> Style:
        """Return the style for this terminal."""
        if self._target is TermTarget.STDERR:
            return Style().for_stderr()
        if self._target is TermTarget.STDOUT:
            return Style().for_stdout()
        assert self._pair is not None
        if self._pair.style is None:
            return Style().for_stderr()
        return self._pair.style

    def target(self) -> TermTarget:
        """Return where this terminal writes to."""
        return self._target

    def fileno(self) -> int:
        """Return the file descriptor written to."""
        if self._target is TermTarget.STDOUT:
            return 1
        if self._target is TermTarget.STDERR:
            return 2
        assert self._pair is not None
        return self._pair.write.fileno()

    def _fd(self) -> int | None:
        try:
            return self.fileno()
        except (OSError, ValueError, AttributeError):
            return None

    def _stream(self) -> Any:
        if self._target is TermTarget.STDOUT:
            stream = sys.stdout
        elif self._target is TermTarget.STDERR:
            stream = sys.stderr
        else:
            assert self._pair is not None
            stream = self._pair.write
        if stream is None:
            raise OSError(errno.EBADF, "output stream is not available")
        return stream

    def _write_through(self, data: bytes) -> None:
        stream = self._stream()
        if isinstance(stream, io.TextIOBase):
            binary = getattr(stream, "buffer", None)
            if binary is None:
                stream.write(data.decode("utf-8", "replace"))
                stream.flush()
                return
            stream.flush()
            binary.write(data)
            binary.flush()
            return
        stream.write(data)
        stream.flush()

    def write(self, data: bytes | str) -> int:
        """Write bytes or text, buffered if this terminal buffers."""
        raw = data.encode("utf-8") if isinstance(data, str) else bytes(data)
        if self._buffer is not None:
            with self._buffer_lock:
                self._buffer.extend(raw)
        else:
            self._write_through(raw)
        return len(data)

    def write_str(self, s: str) -> None:
        """Write a string to the terminal."""
        self.write(s)

    def write_line(self, s: str) -> None:
        """Write a string and a newline, redrawing any active prompt."""
        with self._prompt_lock:
            prompt = self._prompt
        if prompt:
            self.clear_line()
        data = f"{s}\n{prompt}".encode("utf-8")
        if self._buffer is not None:
            with self._buffer_lock:
                self._buffer.extend(data)
        else:
            self._write_through(data)

    def read_char(self) -> str:
        """Read one character without echoing it.

        Enter is returned as a newline; other keys are skipped.
        Raises OSError if this is not a terminal.
        """
        if not self.is_tty:
            raise OSError(errno.ENOTCONN, "Not a terminal")
        while True:
            key = self.read_key()
            if isinstance(key, Char):
                return key.char
            if key is Key.ENTER:
                return "\n"

    def read_key(self) -> KeyEvent:
        """Read one key; ``Key.UNKNOWN`` if this is not a terminal."""
        if not self.is_tty:
            return Key.UNKNOWN
        return read_single_key(False)

    def read_key_raw(self) -> KeyEvent:
        """Read one key, returning ``Key.CTRL_C`` rather than interrupting."""
        if not self.is_tty:
            return Key.UNKNOWN
        return read_single_key(True)

    def read_line(self) -> str:
        """Read one line of input without its newline."""
        return self.read_line_initial_text("")

    def read_line_initial_text(self, initial: str) -> str:
        """Read one line after showing editable initial text.

        Returns only what was typed after the initial text, or an empty
        string if this is not a terminal.
        """
        if not self.is_tty:
            return ""
        with self._prompt_lock:
            self._prompt = initial
        try:
            with self._prompt_guard:
                self.write_str(initial)
                return self._read_line_after(initial)
        finally:
            with self._prompt_lock:
                self._prompt = ""

    def _read_line_after(self, initial: str) -> str:
        prefix_len = len(initial)
        chars = list(initial)
        while True:
            key = self.read_key()
            if key is Key.BACKSPACE:
                if prefix_len < len(chars):
                    self.clear_chars(char_width(chars.pop()))
                self.flush()
            elif isinstance(key, Char):
                chars.append(key.char)
                self.write_str(key.char)
                self.flush()
            elif key is Key.ENTER:
                self._write_through(f"\n{initial}".encode("utf-8"))
                break
        return "".join(chars[prefix_len:])

    def read_secure_line(self) -> str:
        """Read one line without echoing it."""
        if not self.is_tty:
            return ""
        line = read_secure()
        self.write_line("")
        return line

    def flush(self) -> None:
        """Write out whatever is buffered."""
        if self._buffer is None:
            return
        with self._buffer_lock:
            if self._buffer:
                self._write_through(bytes(self._buffer))
                self._buffer.clear()

    def is_term(self) -> bool:
        """Return whether this is really a terminal."""
        return self.is_tty

    def features(self) -> TermFeatures:
        """Return access to the features of this terminal."""
        return TermFeatures(self)

    def size(self) -> tuple[int, int]:
        """Return ``(rows, columns)``, or sensible defaults if unknown."""
        return self.size_checked() or (_DEFAULT_ROWS, DEFAULT_WIDTH)

    def size_checked(self) -> tuple[int, int] | None:
        """Return ``(rows, columns)``, or None if it cannot be determined."""
        fd = self._fd()
        return None if fd is None else terminal_size(fd)

    def move_cursor_to(self, x: int, y: int) -> None:
        """Move the cursor to column ``x`` and row ``y`` (0-based)."""
        self.write_str(sequences.move_cursor_to(x, y))

    def move_cursor_up(self, n: int) -> None:
        """Move the cursor up by ``n`` lines."""
        self.write_str(sequences.move_cursor_up(n))

    def move_cursor_down(self, n: int) -> None:
        """Move the cursor down by ``n`` lines."""
        self.write_str(sequences.move_cursor_down(n))

    def move_cursor_left(self, n: int) -> None:
        """Move the cursor left by ``n`` columns."""
        self.write_str(sequences.move_cursor_left(n))

    def move_cursor_right(self, n: int) -> None:
        """Move the cursor right by ``n`` columns."""
        self.write_str(sequences.move_cursor_right(n))

    def clear_line(self) -> None:
        """Clear the current line and move to its start."""
        self.write_str(sequences.clear_line())

    def clear_last_lines(self, n: int) -> None:
        """Clear the ``n`` lines above the current one.

        The cursor ends at the start of the first cleared line.
        """
        self.move_cursor_up(n)
        for _ in range(n):
            self.clear_line()
            self.move_cursor_down(1)
        self.move_cursor_up(n)

    def clear_screen(self) -> None:
        """Clear the screen and move the cursor to the top left."""
        self.write_str(sequences.clear_screen())

    def clear_to_end_of_screen(self) -> None:
        """Clear from the cursor to the end of the screen."""
        self.write_str(sequences.clear_to_end_of_screen())

    def clear_chars(self, n: int) -> None:
        """Clear the last ``n`` characters of the current line."""
        self.write_str(sequences.clear_chars(n))

    def set_title(self, title: object) -> None:
        """Set the terminal title; does nothing if this is not a terminal."""
        if not self.is_tty:
            return
        _set_title(title)

    def show_cursor(self) -> None:
        """Make the cursor visible."""
        self.write_str(sequences.show_cursor())

    def hide_cursor(self) -> None:
        """Hide the cursor."""
        self.write_str(sequences.hide_cursor())


def user_attended() -> bool:
    """Return whether stdout is connected to a terminal."""
    return Term.stdout().features().is_attended()


def user_attended_stderr() -> bool:
    """Return whether stderr is connected to a terminal."""
    return Term.stderr().features().is_attended()