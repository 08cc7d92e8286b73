"""Pager component — a Viewport driven by keyboard and mouse-wheel input"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from ..keybindings import ViewportKeybindingsManager, get_viewport_keybindings
from ..keys import is_key_release
from ..mouse import MouseEvent, is_mouse_sequence, parse_mouse
from ..viewport import FrameInsets, Viewport


@dataclass
class ViewportOptions:
    mouse_wheel_enabled: bool = True
    mouse_wheel_delta: int = 3
    horizontal_step: int = 0  # 0 disables horizontal keys and wheel


class Pager:
    """
    Scrollable text component.

    Renders the visible window of its Viewport and translates key and
    mouse-wheel input into scroll operations. Decoration is left to the
    enclosing container.
    """

    def __init__(
        self,
        text: str = "",
        height: int = 0,
        options: ViewportOptions | None = None,
        keybindings: ViewportKeybindingsManager | None = None,
        frame: FrameInsets | None = None,
    ) -> None:
        self.options = options or ViewportOptions()
        self.viewport = Viewport(0, height, frame)
        self.viewport.set_horizontal_step(self.options.horizontal_step)
        self.viewport.set_content(text)
        self._keybindings = keybindings

        self.on_scroll: Callable[[list[str]], None] | None = None

        self._actions: dict[str, Callable[[], list[str] | None]] = {
            "pageDown": self.viewport.page_down,
            "pageUp": self.viewport.page_up,
            "halfPageDown": self.viewport.half_page_down,
            "halfPageUp": self.viewport.half_page_up,
            "lineDown": lambda: self.viewport.scroll_down(1),
            "lineUp": lambda: self.viewport.scroll_up(1),
            "scrollLeft": lambda: self.viewport.scroll_left(self.viewport.horizontal_step),
            "scrollRight": lambda: self.viewport.scroll_right(self.viewport.horizontal_step),
            "gotoTop": self.viewport.goto_top,
            "gotoBottom": self.viewport.goto_bottom,
        }

    @property
    def keybindings(self) -> ViewportKeybindingsManager:
        return self._keybindings or get_viewport_keybindings()

    def set_text(self, text: str) -> None:
        self.viewport.set_content(text)

    def set_height(self, height: int) -> None:
        self.viewport.set_geometry(self.viewport.width, height)

    def invalidate(self) -> None:
        pass

    def handle_input(self, data: str) -> None:
        if is_mouse_sequence(data):
            event = parse_mouse(data)
            if event is not None:
                self.handle_mouse(event)
            return
        if is_key_release(data):
            return

        action = self.keybindings.action_for(data)
        if action is None:
            return
        self._emit(self._actions[action]())

    def handle_mouse(self, event: MouseEvent) -> None:
        if not self.options.mouse_wheel_enabled or event.action != "press":
            return

        vp = self.viewport
        step = vp.horizontal_step
        if event.button == "wheelUp":
            if event.shift:
                # Not every terminal reports shift with wheel events
                vp.scroll_left(step)
            else:
                self._emit(vp.scroll_up(self.options.mouse_wheel_delta))
        elif event.button == "wheelDown":
            if event.shift:
                vp.scroll_right(step)
            else:
                self._emit(vp.scroll_down(self.options.mouse_wheel_delta))
        elif event.button == "wheelLeft":
            vp.scroll_left(step)
        elif event.button == "wheelRight":
            vp.scroll_right(step)

    def _emit(self, lines: list[str] | None) -> None:
        if lines and self.on_scroll:
            self.on_scroll(lines)

    def render(self, width: int) -> list[str]:
        vp = self.viewport
        if width != vp.width:
            vp.set_geometry(width, vp.height)
        return vp.visible_lines()
