"""
Terminal text measurement for the viewport.

Provides:
- visible_width(): terminal column width of a string
- longest_line_width(): widest line of a block
- strip_ansi(): remove escape sequences
- AnsiCodeTracker: track active SGR codes while walking a line
- cut(): width-aware horizontal crop that keeps styling intact
"""
from __future__ import annotations

import re
import unicodedata
from typing import NamedTuple

from wcwidth import wcswidth

# ─────────────────────────────────────────────────────────────────────────────
# Grapheme clusters
# ─────────────────────────────────────────────────────────────────────────────

_ZWJ = "\u200d"
_VS15 = "\ufe0e"
_VS16 = "\ufe0f"
_KEYCAP = "\u20e3"

_EXTENDING_CATEGORIES = ("Mn", "Me", "Cf")


def _is_regional_indicator(ch: str) -> bool:
    return "\U0001f1e6" <= ch <= "\U0001f1ff"


def _is_emoji_modifier(ch: str) -> bool:
    # Fitzpatrick skin tones
    return "\U0001f3fb" <= ch <= "\U0001f3ff"


def _extends_cluster(ch: str) -> bool:
    return (
        ch in (_VS15, _VS16, _KEYCAP) or
        _is_emoji_modifier(ch) or
        unicodedata.category(ch) in _EXTENDING_CATEGORIES
    )


def _segment_graphemes(text: str) -> list[str]:
    """
    Split text into the clusters a terminal draws as one glyph: a base code
    point with its combining marks, selectors and skin tones, ZWJ-joined
    emoji, and regional-indicator pairs.
    """
    clusters: list[str] = []
    n = len(text)
    i = 0
    while i < n:
        start = i
        i += 1
        if _is_regional_indicator(text[start]) and i < n and _is_regional_indicator(text[i]):
            i += 1
        while i < n:
            if text[i] == _ZWJ and i + 1 < n:
                i += 2
            elif _extends_cluster(text[i]):
                i += 1
            else:
                break
        clusters.append(text[start:i])
    return clusters


def _grapheme_width(cluster: str) -> int:
    """Terminal columns taken by one grapheme cluster."""
    if _is_regional_indicator(cluster[0]):
        return 2 if len(cluster) > 1 else 1
    if len(cluster) > 1 and (
        _VS16 in cluster or _ZWJ in cluster[:-1] or _is_emoji_modifier(cluster[1])
    ):
        return 2
    return max(wcswidth(cluster), 0)


# ─────────────────────────────────────────────────────────────────────────────
# ANSI code extraction
# ─────────────────────────────────────────────────────────────────────────────

class _AnsiExtract(NamedTuple):
    code: str
    length: int


def extract_ansi_code(s: str, pos: int) -> _AnsiExtract | None:
    """Extract the escape sequence starting at pos. Returns None if there is none."""
    if s[pos:pos + 1] != "\x1b" or pos + 1 >= len(s):
        return None
    kind = s[pos + 1]

    # CSI ends at the first final byte
    if kind == "[":
        for j in range(pos + 2, len(s)):
            if "\x40" <= s[j] <= "\x7e":
                return _AnsiExtract(s[pos:j + 1], j + 1 - pos)
        return None

    # OSC / APC end at BEL or ST
    if kind in ("]", "_"):
        for j in range(pos + 2, len(s)):
            if s[j] == "\x07":
                return _AnsiExtract(s[pos:j + 1], j + 1 - pos)
            if s.startswith("\x1b\\", j):
                return _AnsiExtract(s[pos:j + 2], j + 2 - pos)
        return None

    return None


def strip_ansi(s: str) -> str:
    """Remove all recognised escape sequences from s."""
    if "\x1b" not in s:
        return s
    out: list[str] = []
    i = 0
    while i < len(s):
        ansi = extract_ansi_code(s, i)
        if ansi:
            i += ansi.length
        else:
            out.append(s[i])
            i += 1
    return "".join(out)


# ─────────────────────────────────────────────────────────────────────────────
# Width
# ─────────────────────────────────────────────────────────────────────────────

_WIDTH_CACHE_SIZE = 512
_width_cache: dict[str, int] = {}


def visible_width(s: str) -> int:
    """
    Calculate the visible terminal column width of a string.
    Escape sequences, combining marks and control characters are zero-width;
    wide CJK glyphs and emoji take two columns.
    """
    if s.isascii() and s.isprintable():
        return len(s)

    cached = _width_cache.get(s)
    if cached is not None:
        return cached

    width = sum(_grapheme_width(g) for g in _segment_graphemes(strip_ansi(s)))

    if len(_width_cache) >= _WIDTH_CACHE_SIZE:
        # evict the oldest entry
        del _width_cache[next(iter(_width_cache))]
    _width_cache[s] = width
    return width


def longest_line_width(lines: list[str]) -> int:
    """Return the widest display width across lines (0 for no lines)."""
    return max((visible_width(ln) for ln in lines), default=0)


# ─────────────────────────────────────────────────────────────────────────────
# SGR state
# ─────────────────────────────────────────────────────────────────────────────

_SGR_RE = re.compile(r"\x1b\[([\d;:]*)m")

RESET = "\x1b[0m"
HYPERLINK_CLOSE = "\x1b]8;;\x1b\\"

# bold, dim, italic, underline, blink, inverse, hidden, strikethrough
_SGR_ATTRS = frozenset((1, 2, 3, 4, 5, 7, 8, 9))
_SGR_ATTR_OFF: dict[int, tuple[int, ...]] = {
    21: (1,), 22: (1, 2), 23: (3,), 24: (4,),
    25: (5,), 27: (7,), 28: (8,), 29: (9,),
}


def _extended_color(code: int, params: list[str], i: int) -> tuple[str | None, int]:
    """Read a 38/48 colour whose sub-parameters start at params[i]."""
    if i + 1 < len(params) and params[i] == "5":
        return f"{code};5;{params[i + 1]}", i + 2
    if i + 3 < len(params) and params[i] == "2":
        return f"{code};2;{';'.join(params[i + 1:i + 4])}", i + 4
    return None, i


class AnsiCodeTracker:
    """Track active ANSI SGR codes so a cropped fragment can restore them."""

    __slots__ = ("_attrs", "_fg", "_bg")

    def __init__(self) -> None:
        self._attrs: set[int] = set()
        self._fg: str | None = None
        self._bg: str | None = None

    def process(self, ansi_code: str) -> None:
        """Update state from an escape sequence. Non-SGR sequences are ignored."""
        m = _SGR_RE.fullmatch(ansi_code)
        if not m:
            return
        params = m.group(1).replace(":", ";").split(";")
        i = 0
        while i < len(params):
            code = int(params[i]) if params[i] else 0
            i += 1
            if code == 0:
                self._attrs.clear()
                self._fg = self._bg = None
            elif code in _SGR_ATTRS:
                self._attrs.add(code)
            elif code in _SGR_ATTR_OFF:
                self._attrs.difference_update(_SGR_ATTR_OFF[code])
            elif code == 39:
                self._fg = None
            elif code == 49:
                self._bg = None
            elif 30 <= code <= 37 or 90 <= code <= 97:
                self._fg = str(code)
            elif 40 <= code <= 47 or 100 <= code <= 107:
                self._bg = str(code)
            elif code in (38, 48):
                color, i = _extended_color(code, params, i)
                if color and code == 38:
                    self._fg = color
                elif color:
                    self._bg = color

    def get_active_codes(self) -> str:
        """Return an escape sequence restoring the current SGR state, or ''."""
        codes = [str(a) for a in sorted(self._attrs)]
        codes += [c for c in (self._fg, self._bg) if c]
        return f"\x1b[{';'.join(codes)}m" if codes else ""

    def has_active_codes(self) -> bool:
        return bool(self._attrs or self._fg or self._bg)


def _hyperlink_uri(code: str) -> str | None:
    """URI of an OSC 8 sequence ('' for the closing form), or None for anything else."""
    if not code.startswith("\x1b]8;"):
        return None
    body = code[4:-1] if code.endswith("\x07") else code[4:-2]
    return body.partition(";")[2]


# ─────────────────────────────────────────────────────────────────────────────
# Column cropping
# ─────────────────────────────────────────────────────────────────────────────

def cut(line: str, start_col: int, end_col: int) -> str:
    """
    Return the display columns [start_col, end_col) of a styled line.

    Only graphemes lying wholly inside the range are kept, so a wide glyph
    crossing either edge is dropped rather than split. Escape sequences count
    as zero columns. Those before the first kept cell collapse into the SGR
    state (and any open hyperlink) re-emitted ahead of it, later ones are
    copied through. A reset is appended when a style is still open at the
    end, and a hyperlink still open is closed.
    """
    start_col = max(0, start_col)
    if end_col <= start_col or not line:
        return ""

    tracker = AnsiCodeTracker()
    link: str | None = None
    out: list[str] = []
    started = False
    col = 0
    i = 0

    while i < len(line) and col < end_col:
        ansi = extract_ansi_code(line, i)
        if ansi:
            uri = _hyperlink_uri(ansi.code)
            if uri is None:
                tracker.process(ansi.code)
            else:
                link = ansi.code if uri else None
            if started:
                out.append(ansi.code)
            i += ansi.length
            continue

        end = line.find("\x1b", i + 1)
        if end == -1:
            end = len(line)

        for g in _segment_graphemes(line[i:end]):
            w = _grapheme_width(g)
            if col >= start_col and col + w <= end_col:
                if not started:
                    out.append(tracker.get_active_codes())
                    if link:
                        out.append(link)
                    started = True
                out.append(g)
            col += w
            if col >= end_col:
                break
        i = end

    if started and tracker.has_active_codes():
        out.append(RESET)
    if started and link:
        out.append(HYPERLINK_CLOSE)
    return "".join(out)
