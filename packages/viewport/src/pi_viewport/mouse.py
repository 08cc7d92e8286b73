"""
SGR mouse report parsing.

Terminals with SGR mouse mode (DECSET 1006) report events as
``ESC [ < btn ; col ; row M`` for presses/motion and ``... m`` for releases.
Bits of ``btn``: 0-1 button, 2 shift, 3 alt, 4 ctrl, 5 motion, 6 wheel.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

MouseButton = Literal[
    "none",
    "left",
    "middle",
    "right",
    "wheelUp",
    "wheelDown",
    "wheelLeft",
    "wheelRight",
]

MouseAction = Literal["press", "release", "motion"]

_SGR_MOUSE_RE = re.compile(r"^\x1b\[<(\d+);(\d+);(\d+)([Mm])$")

_BUTTON_BITS = 0b11
_SHIFT_BIT = 0b0000_0100
_ALT_BIT = 0b0000_1000
_CTRL_BIT = 0b0001_0000
_MOTION_BIT = 0b0010_0000
_WHEEL_BIT = 0b0100_0000

_WHEEL_BUTTONS: tuple[MouseButton, ...] = ("wheelUp", "wheelDown", "wheelLeft", "wheelRight")
_PLAIN_BUTTONS: tuple[MouseButton, ...] = ("left", "middle", "right", "none")


@dataclass(frozen=True)
class MouseEvent:
    button: MouseButton
    col: int
    row: int
    action: MouseAction = "press"
    shift: bool = False
    alt: bool = False
    ctrl: bool = False

    @property
    def is_wheel(self) -> bool:
        return self.button in _WHEEL_BUTTONS


def is_mouse_sequence(data: str) -> bool:
    return data.startswith("\x1b[<")


def parse_mouse(data: str) -> MouseEvent | None:
    """Decode one SGR mouse report, or return None if data is not one."""
    m = _SGR_MOUSE_RE.match(data)
    if not m:
        return None
    btn = int(m.group(1))
    col = int(m.group(2))
    row = int(m.group(3))

    if btn & _WHEEL_BIT:
        button = _WHEEL_BUTTONS[btn & _BUTTON_BITS]
    else:
        button = _PLAIN_BUTTONS[btn & _BUTTON_BITS]

    if m.group(4) == "m":
        action: MouseAction = "release"
    elif btn & _MOTION_BIT:
        action = "motion"
    else:
        action = "press"

    return MouseEvent(
        button=button,
        col=col,
        row=row,
        action=action,
        shift=bool(btn & _SHIFT_BIT),
        alt=bool(btn & _ALT_BIT),
        ctrl=bool(btn & _CTRL_BIT),
    )
