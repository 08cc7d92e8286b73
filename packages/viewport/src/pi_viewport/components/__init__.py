"""
pi_viewport.components — renderable components built on the viewport.
"""
from .pager import Pager, ViewportOptions

__all__ = [
    "Pager",
    "ViewportOptions",
]
