"""Tests for pi_viewport.keybindings"""
import json
import logging

import pytest

from pi_viewport.keybindings import (
    DEFAULT_VIEWPORT_KEYBINDINGS,
    ViewportKeybindingsManager,
    get_viewport_keybindings,
    set_viewport_keybindings,
)


class TestDefaults:
    def test_all_actions_bound(self):
        kb = ViewportKeybindingsManager()
        for action in DEFAULT_VIEWPORT_KEYBINDINGS:
            assert kb.get_keys(action)

    @pytest.mark.parametrize("data,action", [
        ("\x1b[6~", "pageDown"),
        (" ", "pageDown"),
        ("f", "pageDown"),
        ("\x1b[5~", "pageUp"),
        ("b", "pageUp"),
        ("d", "halfPageDown"),
        ("\x04", "halfPageDown"),
        ("u", "halfPageUp"),
        ("\x15", "halfPageUp"),
        ("j", "lineDown"),
        ("\x1b[B", "lineDown"),
        ("k", "lineUp"),
        ("h", "scrollLeft"),
        ("\x1b[C", "scrollRight"),
        ("g", "gotoTop"),
        ("G", "gotoBottom"),
    ])
    def test_action_for(self, data, action):
        assert ViewportKeybindingsManager().action_for(data) == action

    @pytest.mark.parametrize("data,action", [
        ("\x1b[6;1~", "pageDown"),
        ("\x1b[32u", "pageDown"),
        ("\x1b[100;5u", "halfPageDown"),
        ("\x1b[103;2u", "gotoBottom"),
        ("\x1b[1;1H", "gotoTop"),
    ])
    def test_action_for_kitty(self, data, action):
        assert ViewportKeybindingsManager().action_for(data) == action

    def test_unbound_input(self):
        assert ViewportKeybindingsManager().action_for("z") is None


class TestOverrides:
    def test_override_replaces_keys(self):
        kb = ViewportKeybindingsManager({"lineDown": "n"})
        assert kb.matches("n", "lineDown")
        assert not kb.matches("j", "lineDown")

    def test_list_override(self):
        kb = ViewportKeybindingsManager({"pageUp": ["p", "pageUp"]})
        assert kb.get_keys("pageUp") == ["p", "pageUp"]

    def test_none_keeps_default(self):
        kb = ViewportKeybindingsManager({"lineUp": None})
        assert kb.get_keys("lineUp") == ["up", "k"]

    def test_unknown_action_is_skipped(self, caplog):
        with caplog.at_level(logging.WARNING, logger="pi_viewport.keybindings"):
            kb = ViewportKeybindingsManager({"explode": "x"})
        assert kb.action_for("x") is None
        assert "explode" in caplog.text

    def test_malformed_key_is_skipped(self, caplog):
        with caplog.at_level(logging.WARNING, logger="pi_viewport.keybindings"):
            kb = ViewportKeybindingsManager({"lineDown": ["hyper+j", "n"]})
        assert kb.action_for("n") == "lineDown"
        assert "hyper+j" in caplog.text

    def test_capital_letter_binding(self):
        kb = ViewportKeybindingsManager({"gotoTop": "G", "gotoBottom": "end"})
        assert kb.action_for("G") == "gotoTop"
        assert kb.action_for("g") is None

    def test_alt_binding(self):
        kb = ViewportKeybindingsManager({"pageUp": "alt+v"})
        assert kb.action_for("\x1bv") == "pageUp"

    def test_key_bound_twice_goes_to_first_action(self):
        kb = ViewportKeybindingsManager({"lineUp": ["k", "j"]})
        assert kb.action_for("j") == "lineDown"
        assert kb.matches("j", "lineUp")

    def test_set_config_rebuilds(self):
        kb = ViewportKeybindingsManager({"lineDown": "n"})
        kb.set_config({})
        assert kb.matches("j", "lineDown")


class TestFromFile:
    def test_loads_json(self, tmp_path):
        path = tmp_path / "keybindings.json"
        path.write_text(json.dumps({"gotoBottom": ["e"]}), encoding="utf-8")
        kb = ViewportKeybindingsManager.from_file(str(path))
        assert kb.action_for("e") == "gotoBottom"

    def test_missing_file_uses_defaults(self, tmp_path):
        kb = ViewportKeybindingsManager.from_file(str(tmp_path / "nope.json"))
        assert kb.action_for("j") == "lineDown"

    def test_invalid_json_logged(self, tmp_path, caplog):
        path = tmp_path / "keybindings.json"
        path.write_text("{not json", encoding="utf-8")
        with caplog.at_level(logging.WARNING, logger="pi_viewport.keybindings"):
            kb = ViewportKeybindingsManager.from_file(str(path))
        assert kb.action_for("j") == "lineDown"
        assert "Ignoring keybindings file" in caplog.text

    def test_non_object_json_logged(self, tmp_path, caplog):
        path = tmp_path / "keybindings.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with caplog.at_level(logging.WARNING, logger="pi_viewport.keybindings"):
            ViewportKeybindingsManager.from_file(str(path))
        assert "expected a JSON object" in caplog.text


class TestGlobalInstance:
    def test_set_and_get(self):
        previous = get_viewport_keybindings()
        custom = ViewportKeybindingsManager({"lineDown": "n"})
        set_viewport_keybindings(custom)
        try:
            assert get_viewport_keybindings() is custom
        finally:
            set_viewport_keybindings(previous)
