"""Compile human-readable macro text into UTF-8+ byte sequences."""

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
    ENTER,
    TAB,
    Modifier,
    find_hid_code_for_keyword,
    find_modifier_bit,
)

MAX_MACRO_LENGTH = 256

ERR_MISSING_SEQUENCE = "Missing macro sequence"
ERR_TOO_LONG = "Macro too long"
ERR_UNKNOWN_TOKEN = "Unknown token"

_TOKEN_LIMIT = 63
_PART_LIMIT = 31
_WHITESPACE = b" \t\r\n"
_QUOTE = ord('"')
_BACKSLASH = ord("\\")
_PLUS = ord("+")

_SINGLE_PRESS = (
    (Modifier.CTRL, PRESS_CTRL),
    (Modifier.SHIFT, PRESS_SHIFT),
    (Modifier.ALT, PRESS_ALT),
    (Modifier.CMD, PRESS_CMD),
)
_SINGLE_RELEASE = (
    (Modifier.CTRL, RELEASE_CTRL),
    (Modifier.SHIFT, RELEASE_SHIFT),
    (Modifier.ALT, RELEASE_ALT),
    (Modifier.CMD, RELEASE_CMD),
)
_ESCAPES = {
    ord("n"): bytes([ENTER]),
    ord("r"): b"\r",
    ord("t"): bytes([TAB]),
    ord("a"): b"",
    _QUOTE: b'"',
    _BACKSLASH: b"\\",
}


class MacroEncodeError(ValueError):
    """Raised when macro text cannot be compiled."""


def _split_modifier_chain(content: bytes) -> tuple[Modifier, bytes]:
    """Split ``CTRL+SHIFT+x`` into its modifier mask and the remaining suffix."""
    mask = Modifier(0)
    pos = 0
    while pos < len(content):
        end = pos
        while end < len(content) and content[end] != _PLUS and end - pos < _PART_LIMIT:
            end += 1
        bit = find_modifier_bit(content[pos:end])
        if not bit:
            return mask, content[pos:pos + _PART_LIMIT]
        mask |= bit
        pos = end + 1 if end < len(content) and content[end] == _PLUS else end
    return mask, b""


class _Encoder:
    def __init__(self, data: bytes) -> None:
        self._data = data
        self._pos = 0
        self._out = bytearray()

    def _peek(self) -> int | None:
        return self._data[self._pos] if self._pos < len(self._data) else None

    def _skip_whitespace(self) -> None:
        while self._pos < len(self._data) and self._data[self._pos] in _WHITESPACE:
            self._pos += 1

    def _read_token(self) -> bytes:
        start = self._pos
        while (
            self._pos < len(self._data)
            and self._data[self._pos] not in _WHITESPACE
            and self._pos - start < _TOKEN_LIMIT
        ):
            self._pos += 1
        return self._data[start:self._pos]

    def _add(self, chunk: bytes) -> None:
        if len(self._out) + len(chunk) > MAX_MACRO_LENGTH:
            raise MacroEncodeError(ERR_TOO_LONG)
        self._out += chunk

    def _add_key(self, token: bytes) -> None:
        if len(token) == 1:
            self._add(token)
            return
        code = find_hid_code_for_keyword(token)
        if code is None:
            raise MacroEncodeError(ERR_UNKNOWN_TOKEN)
        self._add(bytes([code]))

    def _modifiers(self, mask: Modifier, multi: int, singles) -> None:
        if not mask:
            return
        if bin(int(mask)).count("1") > 1:
            self._add(bytes([multi, int(mask)]))
            return
        for bit, code in singles:
            if mask & bit:
                self._add(bytes([code]))

    def _press(self, mask: Modifier) -> None:
        self._modifiers(mask, PRESS_MULTI, _SINGLE_PRESS)

    def _release(self, mask: Modifier) -> None:
        self._modifiers(mask, RELEASE_MULTI, _SINGLE_RELEASE)

    def _parse_quoted(self) -> None:
        """Consume one opening byte, then text up to a closing quote."""
        if self._pos < len(self._data):
            self._pos += 1
        while (c := self._peek()) is not None and c != _QUOTE:
            self._pos += 1
            if c != _BACKSLASH:
                self._add(bytes([c]))
                continue
            nxt = self._peek()
            if nxt is None:
                self._add(b"\\")
                continue
            self._pos += 1
            self._add(_ESCAPES.get(nxt, bytes([_BACKSLASH, nxt])))
        if self._peek() == _QUOTE:
            self._pos += 1

    def _apply_to_next(self, mask: Modifier) -> bool:
        """Type the next token under held modifiers.

        Returns True when the modifiers were already released.
        """
        self._skip_whitespace()
        c = self._peek()
        if c is None:
            return False
        if c == _QUOTE:
            first = self._pos + 1
            if first < len(self._data) and self._data[first] != _QUOTE:
                self._add(bytes([self._data[first]]))
                self._pos = first + 1
                self._release(mask)
                self._parse_quoted()
                return True
            return False
        self._add_key(self._read_token())
        return False

    def _encode_token(self, token: bytes) -> None:
        prefix = token[:1]
        content = token[1:] if prefix in (b"+", b"-") else token
        mask, suffix = _split_modifier_chain(content)
        if prefix == b"+":
            self._press(mask)
            return
        if prefix == b"-":
            self._release(mask)
            return
        if not mask:
            self._add_key(token)
            return
        self._press(mask)
        if suffix:
            self._add_key(suffix)
        elif self._apply_to_next(mask):
            return
        self._release(mask)

    def run(self) -> bytes:
        self._skip_whitespace()
        if self._peek() is None:
            raise MacroEncodeError(ERR_MISSING_SEQUENCE)
        while True:
            self._skip_whitespace()
            c = self._peek()
            if c is None:
                break
            if c == _QUOTE:
                self._parse_quoted()
            else:
                self._encode_token(self._read_token())
        return bytes(self._out)


def macro_encode(text: Union[str, bytes]) -> bytes:
    """Compile macro text such as ``CTRL+c "hello" ENTER`` into UTF-8+ bytes.

    Raises MacroEncodeError for empty input, unknown tokens, or output
    longer than MAX_MACRO_LENGTH bytes.
    """
    data = text.encode("utf-8") if isinstance(text, str) else bytes(text)
    return _Encoder(data).run()