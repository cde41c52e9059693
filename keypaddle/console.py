"""Line-oriented command interface for viewing and editing switch macros."""

from __future__ import annotations

import argparse
import re
import sys
from pathlib import Path
from typing import Callable, Optional, TextIO, Union

from .decode import EMPTY, macro_decode
from .encode import MacroEncodeError, macro_encode
from .storage import MacroStorage, StorageError

MAX_CMD_LINE = 128
EEPROM_SIZE = 1024
BANNER = "UTF-8+ Key Paddle v1.0"
PROMPT = "keypad> "

_SPACE = " \t\n\v\f\r"
_WORD = re.compile(r"[^ \t\n\v\f\r]*")
_NUMBER = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")
_DIRECTION = re.compile(r"(down|up)(?=[ \t\n\v\f\r]|$)", re.IGNORECASE)

HELP_TEXT = (
    "",
    "Commands:",
    "HELP - show this help",
    "SHOW <key|ALL> [up] - show macro(s)",
    "MAP <key> [up] <macro> - set macro",
    "CLEAR <key> [up] - clear macro",
    "LOAD - load from EEPROM",
    "SAVE - save to EEPROM",
    "STAT - show status",
    "",
    "Keys: 0-23, direction: down(default) or up",
)


class LineReader:
    """Assemble command lines from characters typed one at a time."""

    def __init__(
        self, echo: Optional[Callable[[str], object]] = None, limit: int = MAX_CMD_LINE
    ) -> None:
        self._echo = echo
        self._limit = limit
        self._buffer: list[str] = []

    def _show(self, text: str) -> None:
        if self._echo is not None:
            self._echo(text)

    def feed(self, data: Union[str, bytes]) -> list[str]:
        """Consume input and return every line it completes."""
        if isinstance(data, (bytes, bytearray)):
            data = bytes(data).decode("latin-1")
        lines = []
        for ch in data:
            if ch in "\r\n":
                if self._buffer:
                    lines.append("".join(self._buffer))
                    self._buffer.clear()
            elif ch in "\b\x7f":
                if self._buffer:
                    self._buffer.pop()
                    self._show("\b \b")
            elif " " <= ch <= "~" and len(self._buffer) < self._limit - 1:
                self._buffer.append(ch)
                self._show(ch)
        return lines


class CommandInterface:
    """Run text commands against a set of stored macros."""

    def __init__(
        self,
        storage: MacroStorage,
        out: Optional[TextIO] = None,
        switch_state: Optional[Callable[[], int]] = None,
    ) -> None:
        self.storage = storage
        self.out = out if out is not None else sys.stdout
        self.switch_state = switch_state if switch_state is not None else (lambda: 0)

    def _println(self, text: str = "") -> None:
        self.out.write(text + "\n")

    @property
    def _count(self) -> int:
        return len(self.storage.macros)

    def _parse_key(self, args: str) -> Optional[tuple[int, str]]:
        match = _NUMBER.match(args)
        if match is None or not 0 <= int(match.group(1)) < self._count:
            self._println(f"Invalid key 0-{self._count - 1}")
            return None
        return int(match.group(1)), args[match.end():]

    @staticmethod
    def _is_up(rest: str) -> bool:
        return rest.lstrip(_SPACE)[:2].upper() == "UP"

    def process(self, line: str) -> None:
        """Run one command line."""
        cmd = line.lstrip(_SPACE)
        if not cmd:
            return
        args = cmd[_WORD.match(cmd).end():].lstrip(_SPACE)
        head = cmd.upper()
        if head.startswith("HELP"):
            self.help()
        elif head.startswith("SHOW"):
            self.show(args)
        elif head.startswith("MAP"):
            self.map(args)
        elif head.startswith("CLEAR"):
            self.clear(args)
        elif head.startswith("LOAD"):
            self.load()
        elif head.startswith("SAVE"):
            self.save()
        elif head.startswith("STAT"):
            self.stat()
        else:
            self._println("Unknown command - type HELP")

    def help(self) -> None:
        for text in HELP_TEXT:
            self._println(text)

    def show(self, args: str) -> None:
        args = args.lstrip(_SPACE)
        if args[:3].upper() == "ALL" and (len(args) == 3 or args[3] in _SPACE):
            for index, entry in enumerate(self.storage.macros):
                self._println(f"{index} DOWN: " + (macro_decode(entry.down) if entry.down else ""))
                self._println(f"{index} UP: " + (macro_decode(entry.up) if entry.up else ""))
            return
        parsed = self._parse_key(args)
        if parsed is None:
            return
        key, rest = parsed
        up = self._is_up(rest)
        entry = self.storage.macros[key]
        macro = entry.up if up else entry.down
        label = "UP" if up else "DOWN"
        self._println(f"Key {key} {label}: " + (macro_decode(macro) if macro else EMPTY))

    def map(self, args: str) -> None:
        parsed = self._parse_key(args.lstrip(_SPACE))
        if parsed is None:
            return
        key, rest = parsed
        rest = rest.lstrip(_SPACE)
        up = False
        direction = _DIRECTION.match(rest)
        if direction is not None:
            up = direction.group(1).lower() == "up"
            rest = rest[direction.end():].lstrip(_SPACE)
        try:
            sequence = macro_encode(rest)
        except MacroEncodeError as exc:
            self._println(f"Parse error: {exc}")
            return
        entry = self.storage.macros[key]
        if up:
            entry.up = sequence
        else:
            entry.down = sequence
        self._println("OK")

    def clear(self, args: str) -> None:
        parsed = self._parse_key(args.lstrip(_SPACE))
        if parsed is None:
            return
        key, rest = parsed
        entry = self.storage.macros[key]
        if self._is_up(rest):
            entry.up = None
        else:
            entry.down = None
        self._println("Cleared")

    def load(self) -> None:
        try:
            self.storage.load()
        except StorageError:
            self._println("Load failed")
        else:
            self._println("Loaded")

    def save(self) -> None:
        try:
            self.storage.save()
        except StorageError:
            self._println("Save failed")
        else:
            self._println("Saved")

    def stat(self) -> None:
        self._println(f"Switches: 0x{self.switch_state():X}")


def main(argv: Optional[list[str]] = None) -> int:
    """Run the command interface on standard input and output."""
    parser = argparse.ArgumentParser(prog="keypaddle", description="Edit key paddle macros.")
    parser.add_argument("--eeprom", type=Path, help="file holding the EEPROM image")
    options = parser.parse_args(argv)

    if options.eeprom is not None and options.eeprom.exists():
        image = bytearray(options.eeprom.read_bytes())
    else:
        image = bytearray(b"\xff" * EEPROM_SIZE)

    out = sys.stdout
    console = CommandInterface(MacroStorage(image), out)
    reader = LineReader()
    out.write(f"\n{BANNER}\nType HELP for commands\n{PROMPT}")
    for raw in sys.stdin:
        for line in reader.feed(raw):
            out.write(f"> {line}\n")
            console.process(line)
            if options.eeprom is not None:
                options.eeprom.write_bytes(bytes(image))
            out.write(PROMPT)
    out.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())