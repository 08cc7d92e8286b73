"""
Viewport — scroll state and content windowing for a block of text.

Provides:
- FrameInsets: space taken by decoration around the content area
- Viewport: content store, clamped scroll offsets and the visible-window extractor

Every mutator leaves 0 <= y_offset <= max_y_offset() and
0 <= x_offset <= max_x_offset(), except set_geometry(), which only reports a
past-bottom position through past_bottom() and leaves correcting it to the caller.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from .utils import cut, longest_line_width

logger = logging.getLogger(__name__)


def _clamp(value: int, low: int, high: int) -> int:
    if high < low:
        low, high = high, low
    return min(high, max(low, value))


@dataclass(frozen=True)
class FrameInsets:
    top: int = 0
    right: int = 0
    bottom: int = 0
    left: int = 0

    @property
    def horizontal(self) -> int:
        return self.left + self.right

    @property
    def vertical(self) -> int:
        return self.top + self.bottom


class Viewport:
    """
    A width × height window over text, scrolled by row and column offsets.

    Content is replaced wholesale with set_content(). Rendering callers read
    visible_lines(); the relative scroll operations also return the lines
    they newly reveal so incremental renderers can draw just those.
    """

    def __init__(self, width: int = 0, height: int = 0, frame: FrameInsets | None = None) -> None:
        self._width = max(0, width)
        self._height = max(0, height)
        self._frame = frame or FrameInsets()
        self._lines: list[str] = []
        self._longest_line_width = 0
        self._y_offset = 0
        self._x_offset = 0
        self._horizontal_step = 0

    # ─── Geometry ─────────────────────────────────────────────────────────────

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def frame(self) -> FrameInsets:
        return self._frame

    @property
    def visible_width(self) -> int:
        return max(0, self._width - self._frame.horizontal)

    @property
    def visible_height(self) -> int:
        return max(0, self._height - self._frame.vertical)

    def set_geometry(self, width: int, height: int, frame: FrameInsets | None = None) -> None:
        """Resize the viewport. Offsets are not re-clamped; see past_bottom()."""
        self._width = max(0, width)
        self._height = max(0, height)
        if frame is not None:
            self._frame = frame
        logger.debug(
            "Viewport geometry %dx%d (visible %dx%d)",
            self._width, self._height, self.visible_width, self.visible_height,
        )

    @property
    def horizontal_step(self) -> int:
        return self._horizontal_step

    def set_horizontal_step(self, n: int) -> None:
        """Columns moved per horizontal key/wheel step. 0 disables it."""
        self._horizontal_step = max(n, 0)

    # ─── Content store ────────────────────────────────────────────────────────

    def set_content(self, text: str) -> None:
        """Replace all content. Never fails; '' becomes a single empty line."""
        self._lines = text.replace("\r\n", "\n").split("\n")
        self._longest_line_width = longest_line_width(self._lines)
        logger.debug(
            "Viewport content set: %d lines, longest %d columns",
            len(self._lines), self._longest_line_width,
        )

        if self._y_offset > len(self._lines) - 1 or self.past_bottom():
            logger.debug("Offset %d past new content, snapping to bottom", self._y_offset)
            self.goto_bottom()
        if self._x_offset > self.max_x_offset():
            self.set_x_offset(self._x_offset)

    def line_count(self) -> int:
        return len(self._lines)

    def total_line_count(self) -> int:
        return len(self._lines)

    def longest_line_width(self) -> int:
        return self._longest_line_width

    # ─── Scroll state ─────────────────────────────────────────────────────────

    @property
    def y_offset(self) -> int:
        return self._y_offset

    @property
    def x_offset(self) -> int:
        return self._x_offset

    def max_y_offset(self) -> int:
        return max(0, len(self._lines) - self.visible_height)

    def max_x_offset(self) -> int:
        return max(0, self._longest_line_width - self.visible_width)

    def set_y_offset(self, n: int) -> None:
        self._y_offset = _clamp(n, 0, self.max_y_offset())

    def set_x_offset(self, n: int) -> None:
        self._x_offset = _clamp(n, 0, self.max_x_offset())

    def at_top(self) -> bool:
        return self._y_offset <= 0

    def at_bottom(self) -> bool:
        return self._y_offset >= self.max_y_offset()

    def past_bottom(self) -> bool:
        """True after the viewport grew taller than the remaining content."""
        return self._y_offset > self.max_y_offset()

    def scroll_percent(self) -> float:
        """Vertical position as a fraction in [0, 1]."""
        total = len(self._lines)
        height = self.visible_height
        if height >= total:
            return 1.0
        return max(0.0, min(1.0, self._y_offset / (total - height)))

    def horizontal_scroll_percent(self) -> float:
        """Horizontal position as a fraction in [0, 1]."""
        span = self._longest_line_width - self.visible_width
        if self._x_offset >= span:
            return 1.0
        return max(0.0, min(1.0, self._x_offset / span))

    # ─── Window extractor ─────────────────────────────────────────────────────

    def visible_lines(self) -> list[str]:
        """The rows currently in view, cropped to the visible column range."""
        if not self._lines:
            return []

        top = max(0, self._y_offset)
        bottom = _clamp(self._y_offset + self.visible_height, top, len(self._lines))
        lines = self._lines[top:bottom]

        width = self.visible_width
        if (self._x_offset == 0 and self._longest_line_width <= width) or width == 0:
            return lines

        start = self._x_offset
        return [cut(ln, start, start + width) for ln in lines]

    def visible_line_count(self) -> int:
        return len(self.visible_lines())

    # ─── Relative scrolling ───────────────────────────────────────────────────

    def scroll_down(self, n: int) -> list[str]:
        """Move down n lines and return the rows that came into view at the bottom."""
        if n < 0:
            return self.scroll_up(-n)
        if self.at_bottom() or n == 0 or not self._lines:
            return []

        previous = self._y_offset
        self.set_y_offset(previous + n)
        moved = self._y_offset - previous
        if moved <= 0:
            return []

        bottom = _clamp(self._y_offset + self.visible_height, 0, len(self._lines))
        top = _clamp(bottom - moved, 0, bottom)
        return self._lines[top:bottom]

    def scroll_up(self, n: int) -> list[str]:
        """Move up n lines and return the rows that came into view at the top."""
        if n < 0:
            return self.scroll_down(-n)
        if self.at_top() or n == 0 or not self._lines:
            return []

        previous = self._y_offset
        self.set_y_offset(previous - n)
        moved = previous - self._y_offset
        if moved <= 0:
            return []

        top = self._y_offset
        bottom = _clamp(top + min(moved, self.visible_height), top, len(self._lines))
        return self._lines[top:bottom]

    def page_down(self) -> list[str]:
        if self.at_bottom():
            return []
        return self.scroll_down(self.visible_height)

    def page_up(self) -> list[str]:
        if self.at_top():
            return []
        return self.scroll_up(self.visible_height)

    def half_page_down(self) -> list[str]:
        if self.at_bottom():
            return []
        return self.scroll_down(self.visible_height // 2)

    def half_page_up(self) -> list[str]:
        if self.at_top():
            return []
        return self.scroll_up(self.visible_height // 2)

    def scroll_left(self, n: int) -> None:
        self.set_x_offset(self._x_offset - n)

    def scroll_right(self, n: int) -> None:
        self.set_x_offset(self._x_offset + n)

    def goto_top(self) -> list[str]:
        if self.at_top():
            return []
        self.set_y_offset(0)
        return self.visible_lines()

    def goto_bottom(self) -> list[str]:
        if self._y_offset == self.max_y_offset():
            return []
        self.set_y_offset(self.max_y_offset())
        return self.visible_lines()
