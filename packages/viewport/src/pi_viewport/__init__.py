"""
pi_viewport — scrollable text window for terminal user interfaces.

Tracks vertical and horizontal scroll offsets over a block of text and
extracts the ANSI-aware visible window on demand.
"""
from .components import Pager, ViewportOptions
from .keybindings import (
    DEFAULT_VIEWPORT_KEYBINDINGS,
    ViewportAction,
    ViewportKeybindingsManager,
    get_viewport_keybindings,
    set_viewport_keybindings,
)
from .keys import KEY, is_key_release, matches_key, normalize_key_id, parse_key
from .mouse import MouseEvent, parse_mouse
from .utils import (
    AnsiCodeTracker,
    cut,
    extract_ansi_code,
    longest_line_width,
    strip_ansi,
    visible_width,
)
from .viewport import FrameInsets, Viewport

__all__ = [
    # components
    "Pager",
    "ViewportOptions",
    # keybindings
    "DEFAULT_VIEWPORT_KEYBINDINGS",
    "ViewportAction",
    "ViewportKeybindingsManager",
    "get_viewport_keybindings",
    "set_viewport_keybindings",
    # keys
    "KEY",
    "is_key_release",
    "matches_key",
    "normalize_key_id",
    "parse_key",
    # mouse
    "MouseEvent",
    "parse_mouse",
    # utils
    "AnsiCodeTracker",
    "cut",
    "extract_ansi_code",
    "longest_line_width",
    "strip_ansi",
    "visible_width",
    # viewport
    "FrameInsets",
    "Viewport",
]
