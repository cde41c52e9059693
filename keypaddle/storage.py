"""Persist switch macros in an EEPROM image.

Layout: a 4-byte little-endian magic number, then for every switch its
down macro and its up macro, each a NUL-terminated byte string.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import MutableSequence, Optional

from .tables import MAX_SWITCHES

MAGIC_VALUE = 0xCAFE2025
MAGIC_ADDR = 0
DATA_START = 4

_READ_LIMIT = 255


class StorageError(Exception):
    """Raised when macros cannot be loaded from or saved to storage."""


@dataclass
class SwitchMacros:
    """The macros played when a switch goes down and when it comes up."""

    down: Optional[bytes] = None
    up: Optional[bytes] = None


class MacroStorage:
    """The macros of every switch, backed by a writable byte image."""

    def __init__(
        self, eeprom: MutableSequence[int], num_switches: int = MAX_SWITCHES
    ) -> None:
        self.eeprom = eeprom
        self.macros = [SwitchMacros() for _ in range(num_switches)]

    def reset(self) -> None:
        """Forget every macro."""
        for entry in self.macros:
            entry.down = None
            entry.up = None

    def _read_string(self, offset: int) -> tuple[Optional[bytes], int]:
        buf = bytearray()
        size = len(self.eeprom)
        while len(buf) < _READ_LIMIT and offset < size:
            ch = self.eeprom[offset]
            offset += 1
            if ch == 0:
                return (bytes(buf) or None), offset
            buf.append(ch)
        if len(buf) >= _READ_LIMIT:
            raise StorageError("Stored macro is not terminated")
        return (bytes(buf) or None), offset

    def _write_string(self, offset: int, data: Optional[bytes]) -> int:
        size = len(self.eeprom)
        payload = (data or b"").split(b"\0", 1)[0] + b"\0"
        for byte in payload:
            if offset >= size:
                break
            self.eeprom[offset] = byte
            offset += 1
        return offset

    def load(self) -> None:
        """Replace the macros with those stored in the image."""
        stored = bytes(self.eeprom[MAGIC_ADDR:MAGIC_ADDR + 4])
        if len(stored) < 4 or int.from_bytes(stored, "little") != MAGIC_VALUE:
            raise StorageError("No valid data found")
        self.reset()
        offset = DATA_START
        for entry in self.macros:
            entry.down, offset = self._read_string(offset)
            entry.up, offset = self._read_string(offset)

    def save(self) -> None:
        """Write every macro to the image."""
        size = len(self.eeprom)
        if size < DATA_START:
            raise StorageError("Out of space")
        self.eeprom[MAGIC_ADDR:MAGIC_ADDR + 4] = MAGIC_VALUE.to_bytes(4, "little")
        offset = DATA_START
        for entry in self.macros:
            for data in (entry.down, entry.up):
                offset = self._write_string(offset, data)
                if offset >= size:
                    raise StorageError("Out of space")