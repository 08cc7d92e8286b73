"""
Root conftest.py — isolates module-level input state between tests.

pi_viewport keeps one process-wide setting, the global keybindings manager.
Each test starts from the defaults.
"""
from __future__ import annotations

import pytest

from pi_viewport.keybindings import ViewportKeybindingsManager, set_viewport_keybindings


@pytest.fixture(autouse=True)
def _reset_keybindings():
    set_viewport_keybindings(ViewportKeybindingsManager())
    yield
