import fcntl
import os
import struct
import sys
import termios

import pytest

from consolio import unixterm
from consolio.keys import Char, Key, UnknownEscSeq


@pytest.fixture
def pipe():
    read_end, write_end = os.pipe()
    yield read_end, write_end
    os.close(read_end)
    os.close(write_end)


@pytest.fixture
def pty_pair():
    master, slave = os.openpty()
    yield master, slave
    os.close(master)
    os.close(slave)


def _key(pipe, data):
    read_end, write_end = pipe
    os.write(write_end, data)
    return unixterm.read_key_from_fd(read_end)


@pytest.mark.parametrize(
    "data,expected",
    [
        (b"\x1b[A", Key.ARROW_UP),
        (b"\x1b[B", Key.ARROW_DOWN),
        (b"\x1b[C", Key.ARROW_RIGHT),
        (b"\x1b[D", Key.ARROW_LEFT),
        (b"\x1b[H", Key.HOME),
        (b"\x1b[F", Key.END),
        (b"\x1b[Z", Key.BACK_TAB),
        (b"\x1b[2~", Key.INSERT),
        (b"\x1b[3~", Key.DEL),
        (b"\x1b[5~", Key.PAGE_UP),
        (b"\x1b[6~", Key.PAGE_DOWN),
        (b"\x1b[7~", Key.HOME),
        (b"\x1b[8~", Key.END),
        (b"\x1b", Key.ESCAPE),
        (b"\r", Key.ENTER),
        (b"\n", Key.ENTER),
        (b"\x7f", Key.BACKSPACE),
        (b"\x08", Key.BACKSPACE),
        (b"\t", Key.TAB),
        (b"\x01", Key.HOME),
        (b"\x05", Key.END),
    ],
)
def test_named_keys(pipe, data, expected):
    assert _key(pipe, data) is expected


@pytest.mark.parametrize(
    "data,chars",
    [
        (b"\x1bx", ("x",)),
        (b"\x1b[", ("[",)),
        (b"\x1b[9", ("[", "9")),
        (b"\x1b[9~", ("[", "9", "~")),
        (b"\x1b[1x", ("[", "1", "x")),
    ],
)
def test_unknown_escape_sequences(pipe, data, chars):
    assert _key(pipe, data) == UnknownEscSeq(chars)


@pytest.mark.parametrize("text", ["a", "Z", "é", "バ", "🐶"])
def test_characters(pipe, text):
    assert _key(pipe, text.encode("utf-8")) == Char(text)


def test_ctrl_c_is_interrupt(pipe):
    with pytest.raises(InterruptedError):
        _key(pipe, b"\x03")


def test_keys_read_one_at_a_time(pipe):
    read_end, write_end = pipe
    os.write(write_end, b"ab\x1b[A")
    keys = [unixterm.read_key_from_fd(read_end) for _ in range(3)]
    assert keys == [Char("a"), Char("b"), Key.ARROW_UP]


def test_key_from_utf8():
    assert unixterm.key_from_utf8("ü".encode("utf-8")) == Char("ü")
    assert unixterm.key_from_utf8(b"\xff\xfe") is Key.UNKNOWN
    assert unixterm.key_from_utf8(b"") is Key.UNKNOWN


def test_pipe_is_not_terminal(pipe):
    read_end, _ = pipe
    assert unixterm.is_a_terminal(read_end) is False
    assert unixterm.is_a_color_terminal(read_end) is False
    assert unixterm.terminal_size(read_end) is None


def test_pty_is_terminal(pty_pair):
    _, slave = pty_pair
    assert unixterm.is_a_terminal(slave) is True


def test_color_terminal_env(pty_pair, monkeypatch):
    _, slave = pty_pair
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.setenv("TERM", "xterm")
    assert unixterm.is_a_color_terminal(slave) is True
    monkeypatch.setenv("TERM", "dumb")
    assert unixterm.is_a_color_terminal(slave) is False
    monkeypatch.delenv("TERM")
    assert unixterm.is_a_color_terminal(slave) is False
    monkeypatch.setenv("TERM", "xterm")
    monkeypatch.setenv("NO_COLOR", "1")
    assert unixterm.is_a_color_terminal(slave) is False


def test_terminal_size_of_pty(pty_pair):
    _, slave = pty_pair
    fcntl.ioctl(slave, termios.TIOCSWINSZ, struct.pack("HHHH", 24, 80, 0, 0))
    assert unixterm.terminal_size(slave) == (24, 80)


def test_terminal_size_zero_is_unknown(pty_pair):
    _, slave = pty_pair
    fcntl.ioctl(slave, termios.TIOCSWINSZ, struct.pack("HHHH", 0, 0, 0, 0))
    assert unixterm.terminal_size(slave) is None


def test_wants_emoji_follows_lang(monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")
    monkeypatch.setenv("LANG", "en_US.utf-8")
    assert unixterm.wants_emoji() is True
    monkeypatch.setenv("LANG", "C")
    assert unixterm.wants_emoji() is False
    monkeypatch.delenv("LANG")
    assert unixterm.wants_emoji() is False


def test_wants_emoji_on_macos(monkeypatch):
    monkeypatch.setattr(sys, "platform", "darwin")
    monkeypatch.setenv("LANG", "C")
    assert unixterm.wants_emoji() is True


def test_set_title_writes_osc(capsys):
    unixterm.set_title("Counting...")
    assert capsys.readouterr().out == "\x1b]0;Counting...\x07"