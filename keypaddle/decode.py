"""Render UTF-8+ byte sequences back into human-readable macro text."""

from __future__ import annotations

from typing import Union

from .tables import (
    PRESS_ALT,
    PRESS_CMD,
    PRESS_CTRL,
    PRESS_MULTI,
    PRESS_SHIFT,
    RELEASE_ALT,
    RELEASE_CMD,
    RELEASE_CTRL,
    RELEASE_MULTI,
    RELEASE_SHIFT,
    Modifier,
    find_keyword_for_hid,
    is_regular_character,
    needs_quoting,
)

EMPTY = "(empty)"

_SINGLE_MODIFIERS = {
    PRESS_CTRL: "+CTRL",
    PRESS_ALT: "+ALT",
    PRESS_SHIFT: "+SHIFT",
    PRESS_CMD: "+WIN",
    RELEASE_CTRL: "-CTRL",
    RELEASE_ALT: "-ALT",
    RELEASE_SHIFT: "-SHIFT",
    RELEASE_CMD: "-WIN",
}

_MULTI_PREFIX = {PRESS_MULTI: "+", RELEASE_MULTI: "-"}

_MASK_NAMES = (
    (Modifier.CTRL, "CTRL"),
    (Modifier.SHIFT, "SHIFT"),
    (Modifier.ALT, "ALT"),
    (Modifier.CMD, "WIN"),
)

_QUOTED_ESCAPES = {
    ord('"'): b'\\"',
    ord("\\"): b"\\\\",
    ord("\n"): b"\\n",
    ord("\r"): b"\\r",
    ord("\t"): b"\\t",
    0x07: b"\\a",
}


def _mask_text(mask: int) -> str:
    return "+".join(name for bit, name in _MASK_NAMES if mask & bit)


def _tokens(data: bytes):
    """Yield the display form of each token in a macro, as bytes."""
    i = 0
    length = len(data)
    while i < length:
        b = data[i]

        single = _SINGLE_MODIFIERS.get(b)
        if single is not None:
            yield single.encode("ascii")
            i += 1
            continue

        prefix = _MULTI_PREFIX.get(b)
        if prefix is not None:
            if i + 1 < length:
                yield (prefix + _mask_text(data[i + 1])).encode("ascii")
                i += 2
            else:
                yield b""
                i += 1
            continue

        keyword = find_keyword_for_hid(b)
        if keyword is not None:
            yield keyword.encode("ascii")
            i += 1
            continue

        if is_regular_character(b):
            start = i
            while i < length and is_regular_character(data[i]):
                i += 1
            run = data[start:i]
            if len(run) > 1 or needs_quoting(run[0]):
                body = b"".join(_QUOTED_ESCAPES.get(c, bytes([c])) for c in run)
                yield b'"' + body + b'"'
            else:
                yield run
            continue

        yield f"[0x{b:02x}]".encode("ascii")
        i += 1


def macro_decode(data: Union[bytes, bytearray, None]) -> str:
    """Return the readable form of a UTF-8+ macro, or ``(empty)`` for none."""
    if not data:
        return EMPTY
    out = bytearray()
    for token in _tokens(bytes(data)):
        if out:
            out += b" "
        out += token
    return out.decode("utf-8", errors="replace")