"""
Key decoding for viewport navigation.

Raw terminal input is decoded into a canonical key id ("pagedown", "ctrl+d",
"shift+g") and configured ids are brought to the same form, so a binding is a
plain string comparison. Legacy sequences and the Kitty keyboard protocol are
both understood.
See: https://sw.kovidgoyal.net/kitty/keyboard-protocol/

API:
- parse_key(data) — canonical key id of one input event, or None
- normalize_key_id(key_id) — canonical form of a configured key id
- matches_key(data, key_id) — check if input matches a key identifier
- is_key_release(data) — check if event is a Kitty key release
- KEY — helper constants for the keys a pager cares about
"""
from __future__ import annotations

import re

# KeyId is a plain string such as "pageDown", "ctrl+d" or "shift+g"
KeyId = str


class _KeyHelper:
    """Helper object for building key identifier strings."""

    space = "space"
    home = "home"
    end = "end"
    page_up = "pageUp"
    page_down = "pageDown"
    up = "up"
    down = "down"
    left = "left"
    right = "right"

    @staticmethod
    def ctrl(key: str) -> str:
        return f"ctrl+{key}"

    @staticmethod
    def shift(key: str) -> str:
        return f"shift+{key}"


KEY = _KeyHelper()

# ─────────────────────────────────────────────────────────────────────────────
# Lookup tables
# ─────────────────────────────────────────────────────────────────────────────

_MOD_SHIFT = 1
_MOD_ALT = 2
_MOD_CTRL = 4
_MOD_BITS = {"ctrl": _MOD_CTRL, "alt": _MOD_ALT, "shift": _MOD_SHIFT}
_CAPS_NUM_LOCK = 64 | 128

_EVENT_RELEASE = 3

# xterm, rxvt and application-mode sequences
_LEGACY_SEQUENCES: dict[str, KeyId] = {
    "\x1b[A": "up", "\x1bOA": "up",
    "\x1b[B": "down", "\x1bOB": "down",
    "\x1b[C": "right", "\x1bOC": "right",
    "\x1b[D": "left", "\x1bOD": "left",
    "\x1b[H": "home", "\x1bOH": "home", "\x1b[1~": "home", "\x1b[7~": "home",
    "\x1b[F": "end", "\x1bOF": "end", "\x1b[4~": "end", "\x1b[8~": "end",
    "\x1b[5~": "pageup", "\x1b[[5~": "pageup",
    "\x1b[6~": "pagedown", "\x1b[[6~": "pagedown",
    "\x1b[a": "shift+up", "\x1b[b": "shift+down",
    "\x1b[c": "shift+right", "\x1b[d": "shift+left",
    "\x1b[5$": "shift+pageup", "\x1b[6$": "shift+pagedown",
    "\x1b[7$": "shift+home", "\x1b[8$": "shift+end",
    "\x1bOa": "ctrl+up", "\x1bOb": "ctrl+down",
    "\x1bOc": "ctrl+right", "\x1bOd": "ctrl+left",
    "\x1b[5^": "ctrl+pageup", "\x1b[6^": "ctrl+pagedown",
    "\x1b[7^": "ctrl+home", "\x1b[8^": "ctrl+end",
}

_NAMED_CHARS: dict[str, KeyId] = {
    " ": "space",
    "\t": "tab",
    "\r": "enter",
    "\x1b": "escape",
    "\x7f": "backspace",
}
_NAMED_CODEPOINTS: dict[int, KeyId] = {ord(ch): name for ch, name in _NAMED_CHARS.items()}

_KEY_ALIASES: dict[str, KeyId] = {"esc": "escape", "return": "enter"}

# CSI codepoint[:shifted[:base]] [;modifiers[:event]] u
_CSI_U_RE = re.compile(r"^\x1b\[(\d+)(?::\d*)?(?::(\d+))?(?:;(\d+)(?::(\d+))?)?u$")
# CSI 1;modifiers[:event] {A,B,C,D,H,F}
_CSI_LETTER_RE = re.compile(r"^\x1b\[1;(\d+)(?::(\d+))?([ABCDHF])$")
# CSI number;modifiers[:event] ~
_CSI_TILDE_RE = re.compile(r"^\x1b\[(\d+);(\d+)(?::(\d+))?~$")

_CSI_LETTER_KEYS = {"A": "up", "B": "down", "C": "right", "D": "left", "H": "home", "F": "end"}
_CSI_TILDE_KEYS = {1: "home", 4: "end", 5: "pageup", 6: "pagedown", 7: "home", 8: "end"}


def _compose(key: str, modifiers: int) -> KeyId:
    mods = [name for name, bit in _MOD_BITS.items() if modifiers & bit]
    return "+".join(mods + [key])


# ─────────────────────────────────────────────────────────────────────────────
# Kitty protocol
# ─────────────────────────────────────────────────────────────────────────────

def _kitty_codepoint_key(cp: int) -> str | None:
    name = _NAMED_CODEPOINTS.get(cp)
    if name:
        return name
    if 33 <= cp <= 126:
        return chr(cp)
    return None


def _kitty_event(key: str | None, modifiers: str | None, event: str | None) -> tuple[KeyId, int] | None:
    if key is None:
        return None
    mods = (int(modifiers) - 1 if modifiers else 0) & ~_CAPS_NUM_LOCK
    # super, hyper and meta are never bound
    if mods < 0 or mods & ~(_MOD_SHIFT | _MOD_ALT | _MOD_CTRL):
        return None
    return _compose(key, mods), (int(event) if event else 1)


def _decode_kitty(data: str) -> tuple[KeyId, int] | None:
    """Return (key id, event type) for a Kitty-encoded key, or None."""
    m = _CSI_U_RE.match(data)
    if m:
        key = _kitty_codepoint_key(int(m.group(1)))
        if key is None and m.group(2):
            # non-Latin layouts report the US-layout key separately
            key = _kitty_codepoint_key(int(m.group(2)))
        return _kitty_event(key, m.group(3), m.group(4))

    m = _CSI_LETTER_RE.match(data)
    if m:
        return _kitty_event(_CSI_LETTER_KEYS[m.group(3)], m.group(1), m.group(2))

    m = _CSI_TILDE_RE.match(data)
    if m:
        return _kitty_event(_CSI_TILDE_KEYS.get(int(m.group(1))), m.group(2), m.group(3))

    return None


# ─────────────────────────────────────────────────────────────────────────────
# Legacy input
# ─────────────────────────────────────────────────────────────────────────────

def _legacy_char(ch: str) -> tuple[str, int] | None:
    name = _NAMED_CHARS.get(ch)
    if name:
        return name, 0
    code = ord(ch)
    if code == 0:
        return "space", _MOD_CTRL
    if 1 <= code <= 26:
        return chr(code + 96), _MOD_CTRL
    if "A" <= ch <= "Z":
        return ch.lower(), _MOD_SHIFT
    if ch.isprintable():
        return ch, 0
    return None


# ─────────────────────────────────────────────────────────────────────────────
# Public API
# ─────────────────────────────────────────────────────────────────────────────

def parse_key(data: str) -> KeyId | None:
    """Decode one key event from raw terminal input into a canonical key id."""
    kitty = _decode_kitty(data)
    if kitty:
        return kitty[0]

    seq_key = _LEGACY_SEQUENCES.get(data)
    if seq_key:
        return seq_key

    # ESC prefix is how legacy terminals report alt
    alt = len(data) == 2 and data[0] == "\x1b"
    if len(data) != 1 and not alt:
        return None
    decoded = _legacy_char(data[-1])
    if decoded is None:
        return None
    key, mods = decoded
    return _compose(key, mods | (_MOD_ALT if alt else 0))


def normalize_key_id(key_id: KeyId) -> KeyId | None:
    """
    Bring a configured key id to the form parse_key produces.

    Modifier and key names are case-insensitive, except that a lone capital
    letter means shift ("G" is "shift+g"). Returns None for a malformed id.
    """
    parts = key_id.split("+")
    key = parts[-1]
    mods = {p.lower() for p in parts[:-1]}
    if not key or not mods.issubset(_MOD_BITS):
        return None
    if not mods and len(key) == 1 and "A" <= key <= "Z":
        mods.add("shift")
    key = key.lower()
    key = _KEY_ALIASES.get(key, key)
    return _compose(key, sum(_MOD_BITS[m] for m in mods))


def matches_key(data: str, key_id: KeyId) -> bool:
    """Check if *data* (raw terminal input) matches the given key identifier."""
    target = normalize_key_id(key_id)
    return target is not None and parse_key(data) == target


def is_key_release(data: str) -> bool:
    """Check if data is a Kitty key-release event (flag 2)."""
    kitty = _decode_kitty(data)
    return kitty is not None and kitty[1] == _EVENT_RELEASE
