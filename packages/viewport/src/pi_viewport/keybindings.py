"""
Viewport keybindings.

Provides ViewportAction, DEFAULT_VIEWPORT_KEYBINDINGS and the
ViewportKeybindingsManager that merges user overrides over the defaults.
"""
from __future__ import annotations

import json
import logging
import os
from typing import Literal, Union

from .keys import KEY, KeyId, matches_key, normalize_key_id, parse_key

logger = logging.getLogger(__name__)

# ─────────────────────────────────────────────────────────────────────────────
# ViewportAction type
# ─────────────────────────────────────────────────────────────────────────────

ViewportAction = Literal[
    "pageDown",
    "pageUp",
    "halfPageDown",
    "halfPageUp",
    "lineDown",
    "lineUp",
    "scrollLeft",
    "scrollRight",
    "gotoTop",
    "gotoBottom",
]

# ─────────────────────────────────────────────────────────────────────────────
# Default keybindings (less/vim style)
# ─────────────────────────────────────────────────────────────────────────────

ViewportKeybindingsConfig = dict[str, Union[KeyId, list[KeyId], None]]

DEFAULT_VIEWPORT_KEYBINDINGS: dict[str, list[KeyId]] = {
    "pageDown":     [KEY.page_down, KEY.space, "f"],
    "pageUp":       [KEY.page_up, "b"],
    "halfPageDown": ["d", KEY.ctrl("d")],
    "halfPageUp":   ["u", KEY.ctrl("u")],
    "lineDown":     [KEY.down, "j"],
    "lineUp":       [KEY.up, "k"],
    "scrollLeft":   [KEY.left, "h"],
    "scrollRight":  [KEY.right, "l"],
    "gotoTop":      [KEY.home, "g"],
    "gotoBottom":   [KEY.end, KEY.shift("g")],
}


# ─────────────────────────────────────────────────────────────────────────────
# ViewportKeybindingsManager
# ─────────────────────────────────────────────────────────────────────────────

class ViewportKeybindingsManager:
    """Maps raw terminal input to viewport actions."""

    def __init__(self, config: ViewportKeybindingsConfig | None = None) -> None:
        self._action_to_keys: dict[str, list[KeyId]] = {}
        self._key_to_action: dict[KeyId, str] = {}
        self._build_maps(config or {})

    @classmethod
    def from_file(cls, path: str) -> "ViewportKeybindingsManager":
        """
        Load overrides from a JSON object file and merge with defaults.
        A missing file yields the defaults; an unreadable one is logged.
        """
        user_config: ViewportKeybindingsConfig = {}
        if os.path.exists(path):
            try:
                with open(path, encoding="utf-8") as f:
                    loaded = json.load(f)
            except (OSError, ValueError) as exc:
                logger.warning("Ignoring keybindings file %s: %s", path, exc)
            else:
                if isinstance(loaded, dict):
                    user_config = loaded
                else:
                    logger.warning("Ignoring keybindings file %s: expected a JSON object", path)
        return cls(user_config)

    def _build_maps(self, config: ViewportKeybindingsConfig) -> None:
        self._action_to_keys.clear()
        for action, keys in DEFAULT_VIEWPORT_KEYBINDINGS.items():
            self._action_to_keys[action] = list(keys)
        for action, keys in config.items():
            if action not in DEFAULT_VIEWPORT_KEYBINDINGS:
                logger.warning("Unknown viewport action in keybindings: %r", action)
                continue
            if keys is None:
                continue
            self._action_to_keys[action] = list(keys) if isinstance(keys, list) else [keys]

        # canonical key -> first action declaring it
        self._key_to_action.clear()
        for action, keys in self._action_to_keys.items():
            for key_id in keys:
                canonical = normalize_key_id(key_id) if isinstance(key_id, str) else None
                if canonical is None:
                    logger.warning("Ignoring malformed key %r bound to %s", key_id, action)
                    continue
                self._key_to_action.setdefault(canonical, action)

    def matches(self, data: str, action: str) -> bool:
        """Check if input data matches a specific action."""
        keys = self._action_to_keys.get(action)
        if not keys:
            return False
        return any(matches_key(data, k) for k in keys)

    def action_for(self, data: str) -> str | None:
        """Return the first action bound to data, in declaration order."""
        key = parse_key(data)
        if key is None:
            return None
        return self._key_to_action.get(key)

    def get_keys(self, action: str) -> list[KeyId]:
        return self._action_to_keys.get(action, [])

    def set_config(self, config: ViewportKeybindingsConfig) -> None:
        self._build_maps(config)


# ─────────────────────────────────────────────────────────────────────────────
# Global instance
# ─────────────────────────────────────────────────────────────────────────────

_global_viewport_keybindings: ViewportKeybindingsManager | None = None


def get_viewport_keybindings() -> ViewportKeybindingsManager:
    global _global_viewport_keybindings
    if _global_viewport_keybindings is None:
        _global_viewport_keybindings = ViewportKeybindingsManager()
    return _global_viewport_keybindings


def set_viewport_keybindings(manager: ViewportKeybindingsManager) -> None:
    global _global_viewport_keybindings
    _global_viewport_keybindings = manager
