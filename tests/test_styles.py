import sys

import pytest

from consolio.styles import (
    Attribute,
    Color,
    Emoji,
    Style,
    colors_enabled,
    colors_enabled_stderr,
    set_colors_enabled,
    set_colors_enabled_stderr,
    style,
)


@pytest.fixture
def restore_colors():
    saved = (colors_enabled(), colors_enabled_stderr())
    yield
    set_colors_enabled(saved[0])
    set_colors_enabled_stderr(saved[1])


def test_red_forced():
    assert str(style("World").red().force_styling(True)) == "\x1b[31mWorld\x1b[0m"


def test_colour_then_attribute_order():
    assert str(style("a").red().bold().force_styling(True)) == "\x1b[31m\x1b[1ma\x1b[0m"


def test_format_spec_reaches_value():
    styled = style(42).red().on_black().bold().force_styling(True)
    assert f"{styled:010x}" == "\x1b[31m\x1b[40m\x1b[1m000000002a\x1b[0m"


def test_forced_off_is_plain():
    assert str(style("x").red().bold().force_styling(False)) == "x"


def test_no_style_has_no_reset():
    assert str(style("x").force_styling(True)) == "x"


def test_bright_colours():
    assert str(style("x").black().bright().force_styling(True)) == "\x1b[38;5;8mx\x1b[0m"
    assert str(style("x").on_red().on_bright().force_styling(True)) == "\x1b[48;5;9mx\x1b[0m"


def test_color256():
    assert str(style("x").color256(200).force_styling(True)) == "\x1b[38;5;200mx\x1b[0m"
    assert str(style("x").on_color256(17).force_styling(True)) == "\x1b[48;5;17mx\x1b[0m"


def test_color256_ignores_bright():
    assert str(style("x").color256(3).bright().force_styling(True)) == "\x1b[38;5;3mx\x1b[0m"


@pytest.mark.parametrize(
    "attr,code",
    [
        (Attribute.BOLD, 1),
        (Attribute.DIM, 2),
        (Attribute.ITALIC, 3),
        (Attribute.UNDERLINED, 4),
        (Attribute.BLINK, 5),
        (Attribute.BLINK_FAST, 6),
        (Attribute.REVERSE, 7),
        (Attribute.HIDDEN, 8),
        (Attribute.STRIKE_THROUGH, 9),
    ],
)
def test_attributes_single(attr, code):
    assert str(style("x").attr(attr).force_styling(True)) == f"\x1b[{code}mx\x1b[0m"


def test_attributes_many_are_ordered():
    styled = style("x").hidden().blink_fast().underlined().bold().force_styling(True)
    assert str(styled) == "\x1b[1m\x1b[4m\x1b[6m\x1b[8mx\x1b[0m"
    other = style("x").strikethrough().reverse().blink().italic().dim().force_styling(True)
    assert str(other) == "\x1b[2m\x1b[3m\x1b[5m\x1b[7m\x1b[9mx\x1b[0m"


def test_attribute_added_twice_once():
    assert Style().bold().bold() == Style().bold()


def test_style_is_immutable():
    base = Style()
    red = base.red()
    assert base == Style()
    assert red != base


def test_apply_to():
    cyan = Style().cyan().force_styling(True)
    assert f"This is {cyan.apply_to('quite')} neat" == "This is \x1b[36mquite\x1b[0m neat"


def test_from_dotted_str():
    assert Style.from_dotted_str("red.on_blue") == Style().red().on_blue()
    assert Style.from_dotted_str("9.on_12") == Style().color256(9).on_color256(12)
    assert Style.from_dotted_str("red.nonsense.on_999.300") == Style().red()
    assert Style.from_dotted_str("bold.bright.strikethrough") == (
        Style().bold().bright().strikethrough()
    )


def test_from_dotted_str_has_no_italic():
    assert Style.from_dotted_str("italic") == Style()


def test_colour_validation():
    with pytest.raises(ValueError):
        Color(8)
    with pytest.raises(ValueError):
        Color.color256(256)
    with pytest.raises(TypeError):
        Color(True)
    with pytest.raises(ValueError):
        Style().color256(300)


def test_basic_and_256_colours_differ():
    assert Color.RED == Color(1)
    assert Color.RED != Color.color256(1)


def test_colors_enabled_setting(restore_colors):
    set_colors_enabled(False)
    assert colors_enabled() is False
    assert str(style("x").red()) == "x"
    set_colors_enabled(True)
    assert colors_enabled() is True
    assert str(style("x").red()) == "\x1b[31mx\x1b[0m"


def test_stderr_setting_is_separate(restore_colors):
    set_colors_enabled(True)
    set_colors_enabled_stderr(False)
    assert colors_enabled_stderr() is False
    assert str(style("x").red().for_stderr()) == "x"
    assert str(style("x").red().for_stderr().for_stdout()) == "\x1b[31mx\x1b[0m"


def test_emoji_follows_environment(monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")
    monkeypatch.setenv("LANG", "en_US.UTF-8")
    assert str(Emoji("✨", ":-)")) == "✨"
    monkeypatch.setenv("LANG", "C")
    assert f"{Emoji('✨', ':-)')} Done!" == ":-) Done!"