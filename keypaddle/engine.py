"""Play UTF-8+ macro sequences on a keyboard."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, Union

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
)

KEY_LEFT_CTRL = 0x80
KEY_LEFT_SHIFT = 0x81
KEY_LEFT_ALT = 0x82
KEY_LEFT_GUI = 0x83

_PRESS = {
    PRESS_CTRL: KEY_LEFT_CTRL,
    PRESS_ALT: KEY_LEFT_ALT,
    PRESS_SHIFT: KEY_LEFT_SHIFT,
    PRESS_CMD: KEY_LEFT_GUI,
}
_RELEASE = {
    RELEASE_CTRL: KEY_LEFT_CTRL,
    RELEASE_ALT: KEY_LEFT_ALT,
    RELEASE_SHIFT: KEY_LEFT_SHIFT,
    RELEASE_CMD: KEY_LEFT_GUI,
}
_MASK_KEYS = (
    (Modifier.CTRL, KEY_LEFT_CTRL),
    (Modifier.SHIFT, KEY_LEFT_SHIFT),
    (Modifier.ALT, KEY_LEFT_ALT),
    (Modifier.CMD, KEY_LEFT_GUI),
)


class Keyboard(Protocol):
    """Anything that can press, release and type keys."""

    def press(self, key: int) -> None: ...

    def release(self, key: int) -> None: ...

    def write(self, key: int) -> None: ...


@dataclass
class RecordingKeyboard:
    """A keyboard that records every action as ``(action, key)``."""

    events: list[tuple[str, int]] = field(default_factory=list)

    def press(self, key: int) -> None:
        self.events.append(("press", key))

    def release(self, key: int) -> None:
        self.events.append(("release", key))

    def write(self, key: int) -> None:
        self.events.append(("write", key))


def _mask_keys(mask: int):
    return [key for bit, key in _MASK_KEYS if mask & bit]


def execute_macro(data: Union[bytes, bytearray, None], keyboard: Keyboard) -> None:
    """Send each step of a UTF-8+ macro to ``keyboard``."""
    if not data:
        return
    stream = iter(bytes(data))
    for b in stream:
        if b in _PRESS:
            keyboard.press(_PRESS[b])
        elif b in _RELEASE:
            keyboard.release(_RELEASE[b])
        elif b in (PRESS_MULTI, RELEASE_MULTI):
            mask = next(stream, None)
            if mask is None:
                break
            action = keyboard.press if b == PRESS_MULTI else keyboard.release
            for key in _mask_keys(mask):
                action(key)
        elif b >= 0x04:
            keyboard.write(b)