# consolio

A library for building nicer command line interfaces: styled text, ANSI
escape code handling, display-width aware padding and truncation, and a
terminal handle with cursor control and key input.

## Installation

    pip install consolio

## Modules

- `consolio.styles` – `Style`, `StyledObject`, `Color`, `Attribute`, `Emoji`,
  `style()` and the colour switches `colors_enabled()`,
  `set_colors_enabled()`, `colors_enabled_stderr()`,
  `set_colors_enabled_stderr()`.
- `consolio.ansi` – `AnsiCodeIterator`, `find_ansi_codes()`,
  `strip_ansi_codes()`.
- `consolio.text` – `Alignment`, `str_width()`, `char_width()`,
  `measure_text_width()`, `truncate_str()`, `pad_str()`, `pad_str_with()`.
- `consolio.sequences` – functions returning the escape sequences for cursor
  movement, clearing and showing/hiding the cursor.
- `consolio.keys` – `Key`, `Char` and `UnknownEscSeq`, the values key reads
  return.
- `consolio.unixterm` – POSIX terminal queries and raw key reading.
- `consolio.term` – `Term`, `TermFeatures`, `TermTarget`, `TermFamily`,
  `user_attended()` and `user_attended_stderr()`.

## Styling text

```python
from consolio.styles import Style, style

print(f"This is {style('quite').cyan()} neat")

cyan = Style().cyan().bold()
print(f"Stored style: {cyan.apply_to('hello')}")

warn = Style.from_dotted_str("yellow.on_black.bold")
print(warn.apply_to("careful"))

print(f"{style(42).red():05d}")   # format specs apply to the wrapped value
```

`Style` is immutable; each builder method returns a new style.
`Style.from_dotted_str` understands colour names, `on_<colour>`, `bright`,
`on_bright`, attribute names and 256-colour numbers such as `9.on_12`;
unknown terms are ignored.

Colours are enabled by default when the stream is a colour-capable terminal
(not when `NO_COLOR` is set or `TERM` is `dumb`), unless `CLICOLOR=0`;
`CLICOLOR_FORCE` set to anything but `0` turns them on regardless. Override
the detection with `set_colors_enabled(...)` / `set_colors_enabled_stderr(...)`,
or per object with `.force_styling(True)`.

`Emoji("✨", ":-)")` renders the emoji where the environment wants emoji
(macOS, or a `LANG` ending in `UTF-8`) and the fallback elsewhere.

## Working with ANSI codes

```python
from consolio.ansi import AnsiCodeIterator, strip_ansi_codes
from consolio.text import Alignment, measure_text_width, pad_str, truncate_str

s = "\x1b[31mWorld\x1b[0m!"
strip_ansi_codes(s)                        # "World!"
list(AnsiCodeIterator(s))
# [("\x1b[31m", True), ("World", False), ("\x1b[0m", True), ("!", False)]
measure_text_width(s)                      # 6
truncate_str("foo bar baz", 10, "...")     # "foo bar..."
pad_str("foo", 7, Alignment.CENTER, None)  # "  foo  "
```

`truncate_str` keeps escape sequences that follow the cut, so styles are
still reset. Widths are measured in terminal columns using `wcwidth`.

## Terminal access

```python
from consolio.term import Term

term = Term.stdout()
term.write_line("Hello World!")
term.hide_cursor()
term.move_cursor_up(1)
term.clear_line()
term.show_cursor()

rows, cols = term.size()          # (24, 80) when the size is unknown
key = term.read_key()
name = term.read_line_initial_text("default")
```

`Term.buffered_stdout()` and `Term.buffered_stderr()` collect output until
`flush()` is called. `Term.read_write_pair(read, write)` writes to a stream
of your own. When the stream is not a terminal, `read_key` returns
`Key.UNKNOWN`, `read_line` and `read_secure_line` return an empty string, and
`read_char` raises `OSError`.

## What it does not do

Key input, secure line reading and terminal size detection rely on POSIX
terminal interfaces (`termios`, `/dev/tty`). There is no support for the
native Windows console: cursor movement and clearing are always sent as ANSI
escape sequences, and `TermFeatures.is_msys_tty()` is always false. The
package provides no command-line program.

## Running the tests

    pip install -e ".[test]"
    pytest