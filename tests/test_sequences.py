import pytest
from hypothesis import given
from hypothesis import strategies as st

from consolio import sequences
from consolio.ansi import find_ansi_codes, strip_ansi_codes

RELATIVE = [
    (sequences.move_cursor_down, "B"),
    (sequences.move_cursor_up, "A"),
    (sequences.move_cursor_left, "D"),
    (sequences.move_cursor_right, "C"),
]


def test_zero_moves_produce_nothing():
    assert sequences.move_cursor_down(0) == ""
    assert sequences.move_cursor_up(0) == ""
    assert sequences.move_cursor_left(0) == ""
    assert sequences.move_cursor_right(0) == ""


def test_clear_chars_zero_is_empty():
    assert sequences.clear_chars(0) == ""


@pytest.mark.parametrize("func,code", RELATIVE)
@given(n=st.integers(min_value=1, max_value=100_000))
def test_relative_moves_are_single_codes(func, code, n):
    seq = func(n)
    assert list(find_ansi_codes(seq)) == [(0, len(seq))]
    assert seq.startswith("\x1b[")
    assert seq[-1] == code
    assert int(seq[2:-1]) == n


def test_negative_count_rejected():
    with pytest.raises(ValueError):
        sequences.move_cursor_down(-1)
    with pytest.raises(ValueError):
        sequences.move_cursor_up(-1)
    with pytest.raises(ValueError):
        sequences.move_cursor_left(-1)
    with pytest.raises(ValueError):
        sequences.move_cursor_right(-1)


def test_move_cursor_up_pinned():
    assert sequences.move_cursor_up(2) == "\x1b[2A"


def test_move_cursor_to_is_one_based():
    assert sequences.move_cursor_to(4, 9) == "\x1b[10;5H"


@given(
    x=st.integers(min_value=0, max_value=5000),
    y=st.integers(min_value=0, max_value=5000),
)
def test_move_cursor_to_round_trip(x, y):
    seq = sequences.move_cursor_to(x, y)
    assert strip_ansi_codes(seq) == ""
    row, col = seq[2:-1].split(";")
    assert (int(col) - 1, int(row) - 1) == (x, y)


def test_clear_chars_pinned():
    assert sequences.clear_chars(3) == "\x1b[3D\x1b[0K"


@given(n=st.integers(min_value=1, max_value=10_000))
def test_clear_chars_is_only_escape_codes(n):
    assert strip_ansi_codes(sequences.clear_chars(n)) == ""


def test_fixed_sequences():
    assert sequences.clear_line() == "\r\x1b[2K"
    assert sequences.clear_screen() == "\r\x1b[2J\r\x1b[H"
    assert sequences.clear_to_end_of_screen() == "\r\x1b[0J"
    assert sequences.show_cursor() == "\x1b[?25h"
    assert sequences.hide_cursor() == "\x1b[?25l"


def test_fixed_sequences_strip_to_control_chars():
    assert strip_ansi_codes(sequences.clear_screen()) == "\r\r"
    assert strip_ansi_codes(sequences.show_cursor()) == ""