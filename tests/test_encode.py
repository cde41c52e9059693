import pytest

from keypaddle import tables
from keypaddle.encode import (
    MAX_MACRO_LENGTH,
    MacroEncodeError,
    macro_encode,
)
from keypaddle.tables import Modifier


def test_modifier_chain_with_character():
    assert macro_encode("CTRL+c") == bytes(
        [tables.PRESS_CTRL, ord("c"), tables.RELEASE_CTRL]
    )


def test_multi_modifier_chain_uses_mask():
    mask = int(Modifier.CTRL | Modifier.SHIFT)
    assert macro_encode("ctrl+shift+t") == bytes(
        [tables.PRESS_MULTI, mask, ord("t"), tables.RELEASE_MULTI, mask]
    )


def test_win_and_gui_are_cmd():
    expected = bytes([tables.PRESS_CMD, ord("r"), tables.RELEASE_CMD])
    assert macro_encode("WIN+r") == expected
    assert macro_encode("GUI+r") == expected


def test_cmd_is_not_a_chain_modifier():
    with pytest.raises(MacroEncodeError, match="Unknown token"):
        macro_encode("CMD+c")


def test_modifier_chain_with_keyword_suffix():
    assert macro_encode("ALT+F4") == bytes(
        [tables.PRESS_ALT, tables.KEY_F4, tables.RELEASE_ALT]
    )


def test_modifier_applies_to_next_token():
    assert macro_encode("CTRL TAB") == bytes(
        [tables.PRESS_CTRL, tables.TAB, tables.RELEASE_CTRL]
    )


def test_modifier_applies_to_first_char_of_next_string():
    assert macro_encode('CTRL "x"') == bytes(
        [tables.PRESS_CTRL, ord("x"), tables.RELEASE_CTRL]
    )


def test_modifier_before_empty_string_is_pressed_and_released():
    assert macro_encode('SHIFT ""') == bytes(
        [tables.PRESS_SHIFT, tables.RELEASE_SHIFT]
    )


def test_trailing_modifier_is_pressed_and_released():
    assert macro_encode("CTRL") == bytes([tables.PRESS_CTRL, tables.RELEASE_CTRL])


def test_plus_after_modifier_types_plus():
    assert macro_encode("CTRL++") == bytes(
        [tables.PRESS_CTRL, ord("+"), tables.RELEASE_CTRL]
    )


def test_explicit_press_and_release():
    assert macro_encode("+SHIFT a -SHIFT") == bytes(
        [tables.PRESS_SHIFT, ord("a"), tables.RELEASE_SHIFT]
    )


def test_explicit_multi_press():
    mask = int(Modifier.CTRL | Modifier.ALT)
    assert macro_encode("+CTRL+ALT -CTRL+ALT") == bytes(
        [tables.PRESS_MULTI, mask, tables.RELEASE_MULTI, mask]
    )


def test_quoted_string_is_literal():
    assert macro_encode('"Hello world"') == b"Hello world"


def test_escapes_in_quoted_string():
    assert macro_encode(r'"a\nb\tc\"\\"') == (
        b"a" + bytes([tables.ENTER]) + b"b" + bytes([tables.TAB]) + b'c"\\'
    )


def test_bell_escape_is_dropped_and_unknown_escape_kept():
    assert macro_encode(r'"x\ay\qz"') == b"xy\\qz"


def test_unterminated_string_runs_to_end():
    assert macro_encode('"abc') == b"abc"


def test_keywords_and_single_characters():
    assert macro_encode("F1 enter x DEL") == bytes(
        [tables.KEY_F1, tables.ENTER, ord("x"), tables.KEY_DELETE]
    )


def test_bytes_input_accepted():
    assert macro_encode(b"CTRL+c") == macro_encode("CTRL+c")


def test_utf8_inside_quotes_is_kept():
    assert macro_encode('"café"') == "café".encode("utf-8")


@pytest.mark.parametrize("text", ["", "   ", "\t\r\n"])
def test_missing_sequence(text):
    with pytest.raises(MacroEncodeError, match="Missing macro sequence"):
        macro_encode(text)


@pytest.mark.parametrize("text", ["BOGUS", "CTRL+BOGUS", "CTRL BOGUS"])
def test_unknown_token(text):
    with pytest.raises(MacroEncodeError, match="Unknown token"):
        macro_encode(text)


def test_maximum_length_fits():
    text = '"' + "a" * MAX_MACRO_LENGTH + '"'
    assert macro_encode(text) == b"a" * MAX_MACRO_LENGTH


def test_overflow_raises():
    text = '"' + "a" * (MAX_MACRO_LENGTH + 1) + '"'
    with pytest.raises(MacroEncodeError, match="Macro too long"):
        macro_encode(text)


def test_error_is_value_error():
    with pytest.raises(ValueError):
        macro_encode("")