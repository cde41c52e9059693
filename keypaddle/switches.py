"""Debounced reading of up to 24 switches wired to active-low input pins."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from .tables import MAX_SWITCHES

DEBOUNCE_MS = 50

_CLOCK_MASK = 0xFFFFFFFF
_PORTS = ("B", "C", "D", "F")


@dataclass(frozen=True)
class PinMapping:
    """Where one switch lives: an input port and a bit within it."""

    port: str
    bit: int
    arduino_pin: int

    @property
    def mask(self) -> int:
        return 1 << self.bit


PIN_MAPPINGS: tuple[PinMapping, ...] = (
    PinMapping("B", 0, 0),
    PinMapping("B", 1, 1),
    PinMapping("B", 2, 2),
    PinMapping("B", 3, 3),
    PinMapping("B", 7, 4),
    PinMapping("D", 0, 5),
    PinMapping("D", 1, 6),
    PinMapping("D", 2, 7),
    PinMapping("D", 3, 8),
    PinMapping("C", 6, 9),
    PinMapping("C", 7, 10),
    PinMapping("D", 6, 11),
    PinMapping("D", 7, 12),
    PinMapping("B", 4, 13),
    PinMapping("B", 5, 14),
    PinMapping("B", 6, 15),
    PinMapping("F", 7, 16),
    PinMapping("F", 6, 17),
    PinMapping("F", 5, 18),
    PinMapping("F", 4, 19),
    PinMapping("F", 1, 20),
    PinMapping("F", 0, 21),
    PinMapping("D", 4, 22),
    PinMapping("D", 5, 23),
)


class SwitchBank:
    """A set of pulled-up switches; a low pin reads as pressed.

    ``read_port`` takes a port letter (B, C, D or F) and returns the byte
    currently on that port; ``clock`` returns the time in milliseconds.
    """

    def __init__(
        self,
        read_port: Callable[[str], int],
        clock: Callable[[], int],
        num_switches: int = MAX_SWITCHES,
    ) -> None:
        self._read_port = read_port
        self._clock = clock
        self.num_switches = min(num_switches, MAX_SWITCHES)
        self.state = 0
        self.debounced = 0
        self._last_change = [0] * MAX_SWITCHES

    def begin(self) -> None:
        """Take the current switch positions as the settled state."""
        self.debounced = self.read_all()

    def read_all(self) -> int:
        """Return a bitmap of pressed switches, without debouncing."""
        values = {port: self._read_port(port) for port in _PORTS}
        state = 0
        for index, mapping in enumerate(PIN_MAPPINGS[: self.num_switches]):
            if not values[mapping.port] & mapping.mask:
                state |= 1 << index
        self.state = state
        return state

    def update(self) -> int:
        """Read the switches and return the debounced bitmap."""
        current = self.read_all()
        changed = current ^ self.debounced
        now = self._clock() & _CLOCK_MASK
        for index in range(self.num_switches):
            bit = 1 << index
            if not changed & bit:
                continue
            if (now - self._last_change[index]) & _CLOCK_MASK >= DEBOUNCE_MS:
                if current & bit:
                    self.debounced |= bit
                else:
                    self.debounced &= ~bit
            self._last_change[index] = now
        return self.debounced