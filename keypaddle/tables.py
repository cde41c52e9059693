"""Shared lookup tables and constants for the UTF-8+ macro format.

A macro is a byte string in which printable bytes are typed as-is and a
small set of control bytes press or release modifier keys.
"""

from __future__ import annotations

import enum
from typing import Optional, Union

MAX_SWITCHES = 24

# Single modifier press/release opcodes.
PRESS_CTRL = 0x1A
PRESS_ALT = 0x1B
PRESS_SHIFT = 0x1C
PRESS_CMD = 0x1D
RELEASE_CTRL = 0x1E
RELEASE_ALT = 0x1F
RELEASE_SHIFT = 0x05
RELEASE_CMD = 0x19

# Two-byte opcodes: opcode followed by a modifier mask.
PRESS_MULTI = 0x0E
RELEASE_MULTI = 0x0F

# Named control codes.
TAB = 0x09
ENTER = 0x0A
ESCAPE = 0x0B
BACKSPACE = 0x08

# Keyboard codes for non-printing keys.
KEY_UP_ARROW = 0xDA
KEY_DOWN_ARROW = 0xD9
KEY_LEFT_ARROW = 0xD8
KEY_RIGHT_ARROW = 0xD7
KEY_PAGE_UP = 0xD3
KEY_PAGE_DOWN = 0xD6
KEY_HOME = 0xD2
KEY_END = 0xD5
KEY_DELETE = 0xD4
KEY_F1 = 0xC2
KEY_F2 = 0xC3
KEY_F3 = 0xC4
KEY_F4 = 0xC5
KEY_F5 = 0xC6
KEY_F6 = 0xC7
KEY_F7 = 0xC8
KEY_F8 = 0xC9
KEY_F9 = 0xCA
KEY_F10 = 0xCB
KEY_F11 = 0xCC
KEY_F12 = 0xCD


class Modifier(enum.IntFlag):
    """Bits of the modifier mask used by the multi-modifier opcodes."""

    CTRL = 0x01
    SHIFT = 0x02
    ALT = 0x04
    CMD = 0x08


# The first entry for a code is its preferred display name.
KEYWORD_TABLE: tuple[tuple[str, int], ...] = (
    ("F1", KEY_F1),
    ("F2", KEY_F2),
    ("F3", KEY_F3),
    ("F4", KEY_F4),
    ("F5", KEY_F5),
    ("F6", KEY_F6),
    ("F7", KEY_F7),
    ("F8", KEY_F8),
    ("F9", KEY_F9),
    ("F10", KEY_F10),
    ("F11", KEY_F11),
    ("F12", KEY_F12),
    ("UP", KEY_UP_ARROW),
    ("DOWN", KEY_DOWN_ARROW),
    ("LEFT", KEY_LEFT_ARROW),
    ("RIGHT", KEY_RIGHT_ARROW),
    ("HOME", KEY_HOME),
    ("END", KEY_END),
    ("PAGEUP", KEY_PAGE_UP),
    ("PAGEDOWN", KEY_PAGE_DOWN),
    ("DELETE", KEY_DELETE),
    ("DEL", KEY_DELETE),
    ("ENTER", ENTER),
    ("TAB", TAB),
    ("ESC", ESCAPE),
    ("ESCAPE", ESCAPE),
    ("BACKSPACE", BACKSPACE),
    ("SPACE", ord(" ")),
)

MODIFIERS: tuple[tuple[str, Modifier], ...] = (
    ("CTRL", Modifier.CTRL),
    ("ALT", Modifier.ALT),
    ("SHIFT", Modifier.SHIFT),
    ("CMD", Modifier.CMD),
    ("WIN", Modifier.CMD),
    ("GUI", Modifier.CMD),
)

# Names accepted inside a modifier chain such as CTRL+SHIFT+x.
_CHAIN_MODIFIERS = {
    "CTRL": Modifier.CTRL,
    "SHIFT": Modifier.SHIFT,
    "ALT": Modifier.ALT,
    "WIN": Modifier.CMD,
    "GUI": Modifier.CMD,
}

_ASCII_UPPER = str.maketrans(
    "abcdefghijklmnopqrstuvwxyz", "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
)

_KEYWORD_CODES: dict[str, int] = {}
for _name, _code in KEYWORD_TABLE:
    _KEYWORD_CODES.setdefault(_name, _code)

_CODE_KEYWORDS: dict[int, str] = {}
for _name, _code in KEYWORD_TABLE:
    _CODE_KEYWORDS.setdefault(_code, _name)


def _normalise(name: Union[str, bytes]) -> str:
    """Upper-case ASCII letters only, as a C-locale case-insensitive compare does."""
    if isinstance(name, (bytes, bytearray)):
        name = bytes(name).decode("latin-1")
    return name.translate(_ASCII_UPPER)


def find_hid_code_for_keyword(keyword: Union[str, bytes]) -> Optional[int]:
    """Return the key code for a keyword, case-insensitively, or None."""
    return _KEYWORD_CODES.get(_normalise(keyword))


def find_modifier_bit(name: Union[str, bytes]) -> Modifier:
    """Return the modifier bit for a chain name, or an empty flag if unknown."""
    return _CHAIN_MODIFIERS.get(_normalise(name), Modifier(0))


def find_keyword_for_hid(code: int) -> Optional[str]:
    """Return the preferred keyword for a key code, or None."""
    return _CODE_KEYWORDS.get(code)


def is_regular_character(b: int) -> bool:
    """True for printable ASCII and bytes of extended UTF-8 characters."""
    return (0x20 <= b <= 0x7E) or b > 0x7E


def needs_quoting(b: int) -> bool:
    """True for bytes that must appear inside quotes when displayed."""
    return b in b' \t\n\r"\\' or b < 0x20