"""Terminal access on POSIX systems."""

from __future__ import annotations

import os
import signal
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TextIO

from consolio.keys import Char, Key, KeyEvent, UnknownEscSeq

__all__ = [
    "DEFAULT_WIDTH",
    "is_a_terminal",
    "is_a_color_terminal",
    "terminal_size",
    "read_secure",
    "read_key_from_fd",
    "read_single_key",
    "key_from_utf8",
    "wants_emoji",
    "set_title",
]

DEFAULT_WIDTH = 80

_TILDE_KEYS = {
    "1": Key.HOME,
    "2": Key.INSERT,
    "3": Key.DEL,
    "4": Key.END,
    "5": Key.PAGE_UP,
    "6": Key.PAGE_DOWN,
    "7": Key.HOME,
    "8": Key.END,
}

_CSI_KEYS = {
    "A": Key.ARROW_UP,
    "B": Key.ARROW_DOWN,
    "C": Key.ARROW_RIGHT,
    "D": Key.ARROW_LEFT,
    "H": Key.HOME,
    "F": Key.END,
    "Z": Key.BACK_TAB,
}

_CONTROL_KEYS = {
    "\n": Key.ENTER,
    "\r": Key.ENTER,
    "\x7f": Key.BACKSPACE,
    "\t": Key.TAB,
    "\x01": Key.HOME,
    "\x05": Key.END,
    "\x08": Key.BACKSPACE,
}


def is_a_terminal(fd: int) -> bool:
    """Return whether the file descriptor refers to a terminal."""
    try:
        return os.isatty(fd)
    except OSError:
        return False


def is_a_color_terminal(fd: int) -> bool:
    """Return whether the descriptor is a terminal that can show colours."""
    if not is_a_terminal(fd):
        return False
    if "NO_COLOR" in os.environ:
        return False
    term = os.environ.get("TERM")
    return term is not None and term != "dumb"


def terminal_size(fd: int) -> tuple[int, int] | None:
    """Return ``(rows, columns)`` of the terminal, or None if unknown."""
    if not is_a_terminal(fd):
        return None
    try:
        size = os.get_terminal_size(fd)
    except OSError:
        return None
    if size.lines > 0 and size.columns > 0:
        return size.lines, size.columns
    return None


@contextmanager
def _input_fd() -> Iterator[int]:
    """Yield a descriptor to read keys from: stdin if a tty, else /dev/tty."""
    if is_a_terminal(0):
        yield 0
        return
    fd = os.open("/dev/tty", os.O_RDWR)
    try:
        yield fd
    finally:
        os.close(fd)


@contextmanager
def _input_file() -> Iterator[TextIO]:
    """Yield a text stream to read lines from: stdin if a tty, else /dev/tty."""
    if is_a_terminal(0) and sys.stdin is not None:
        yield sys.stdin
        return
    with open("/dev/tty", "r+", encoding="utf-8") as f:
        yield f


def read_secure() -> str:
    """Read one line from the terminal without echoing it."""
    import termios

    with _input_file() as stream:
        fd = stream.fileno()
        original = termios.tcgetattr(fd)
        silent = list(original)
        silent[3] &= ~termios.ECHO
        termios.tcsetattr(fd, termios.TCSAFLUSH, silent)
        try:
            line = stream.readline()
        finally:
            termios.tcsetattr(fd, termios.TCSAFLUSH, original)
    return line.rstrip("\r\n")


def _wait_readable(fd: int, timeout: int) -> bool:
    """Wait up to ``timeout`` ms (negative: forever) until ``fd`` has input."""
    import select

    if sys.platform == "darwin" and os.isatty(fd):
        # ttys cannot be polled on macOS, only select() works there.
        ready, _, _ = select.select([fd], [], [], None if timeout < 0 else timeout / 1000)
        return bool(ready)
    poller = select.poll()
    poller.register(fd, select.POLLIN)
    events = poller.poll(None if timeout < 0 else timeout)
    return any(mask & select.POLLIN for _, mask in events)


def _read_bytes(fd: int, count: int) -> bytes:
    data = os.read(fd, count)
    if not data:
        raise EOFError("Reached end of file")
    if data[0] == 0x03:
        raise InterruptedError("read interrupted")
    return data


def _read_char(fd: int) -> str | None:
    """Read one byte as a character if one is ready, without blocking."""
    if not _wait_readable(fd, 0):
        return None
    return chr(_read_bytes(fd, 1)[0])


def _read_escape(fd: int) -> KeyEvent:
    c1 = _read_char(fd)
    if c1 is None:
        return Key.ESCAPE
    if c1 != "[":
        return UnknownEscSeq((c1,))
    c2 = _read_char(fd)
    if c2 is None:
        return UnknownEscSeq((c1,))
    if c2 in _CSI_KEYS:
        return _CSI_KEYS[c2]
    c3 = _read_char(fd)
    if c3 is None:
        return UnknownEscSeq((c1, c2))
    if c3 == "~" and c2 in _TILDE_KEYS:
        return _TILDE_KEYS[c2]
    return UnknownEscSeq((c1, c2, c3))


def read_key_from_fd(fd: int) -> KeyEvent:
    """Read one key from a descriptor that is already in raw mode.

    Raises EOFError at end of input and InterruptedError on Ctrl-C.
    """
    while True:
        c = _read_char(fd)
        if c is None:
            _wait_readable(fd, -1)
            continue
        if c == "\x1b":
            return _read_escape(fd)
        byte = ord(c)
        if byte & 0xE0 == 0xC0:
            extra = 1
        elif byte & 0xF0 == 0xE0:
            extra = 2
        elif byte & 0xF8 == 0xF0:
            extra = 3
        else:
            return _CONTROL_KEYS.get(c, Char(c))
        return key_from_utf8(bytes([byte]) + _read_bytes(fd, extra))


def _raw_attributes(original: list) -> list:
    """Raw-mode terminal attributes that keep the original output flags."""
    import termios

    iflag, oflag, cflag, lflag, ispeed, ospeed, cc = original
    iflag &= ~(
        termios.IGNBRK
        | termios.BRKINT
        | termios.PARMRK
        | termios.ISTRIP
        | termios.INLCR
        | termios.IGNCR
        | termios.ICRNL
        | termios.IXON
    )
    lflag &= ~(termios.ECHO | termios.ECHONL | termios.ICANON | termios.ISIG | termios.IEXTEN)
    cflag = (cflag & ~(termios.CSIZE | termios.PARENB)) | termios.CS8
    cc = list(cc)
    cc[termios.VMIN] = 1
    cc[termios.VTIME] = 0
    return [iflag, oflag, cflag, lflag, ispeed, ospeed, cc]


def read_single_key(ctrlc_key: bool) -> KeyEvent:
    """Read a single key from the terminal in raw mode.

    On Ctrl-C this returns ``Key.CTRL_C`` if ``ctrlc_key`` is true, and
    otherwise raises SIGINT in the current process.
    """
    import termios

    with _input_fd() as fd:
        original = termios.tcgetattr(fd)
        termios.tcsetattr(fd, termios.TCSADRAIN, _raw_attributes(original))
        try:
            return read_key_from_fd(fd)
        except InterruptedError:
            if ctrlc_key:
                return Key.CTRL_C
            signal.raise_signal(signal.SIGINT)
            raise
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, original)


def key_from_utf8(data: bytes) -> KeyEvent:
    """Turn UTF-8 bytes into a character key, or ``Key.UNKNOWN``."""
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        return Key.UNKNOWN
    return Char(text[0]) if text else Key.UNKNOWN


def wants_emoji() -> bool:
    """Return whether the environment is expected to render emoji."""
    if sys.platform == "darwin":
        return True
    return os.environ.get("LANG", "").upper().endswith("UTF-8")


def set_title(title: object) -> None:
    """Set the terminal window title by writing to stdout."""
    sys.stdout.write(f"\x1b]0;{title}\x07")