"""Tests for logical input and remappable key bindings."""

import json

import pytest

from treasure_dash.controls import DEFAULT_KEYS, Action, InputState, KeyBindings


class TestKeyBindings:
    def test_defaults_when_no_file(self, bindings_path):
        bindings = KeyBindings(bindings_path)
        assert bindings.keys == DEFAULT_KEYS
        assert not bindings_path.exists()

    def test_in_memory(self):
        bindings = KeyBindings(path=None)
        assert bindings.set_key("dash", "e")
        assert bindings.key_for(Action.DASH) == "e"

    def test_set_key_persists(self, bindings_path):
        bindings = KeyBindings(bindings_path)
        assert bindings.set_key(Action.DASH, "E") is True
        assert json.loads(bindings_path.read_text())["dash"] == "e"
        assert KeyBindings(bindings_path).key_for("dash") == "e"

    def test_duplicate_key_rejected(self, bindings_path):
        """Binding jump to the key already used by left changes nothing."""
        bindings = KeyBindings(bindings_path)
        bindings.set_key("left", "a")
        assert bindings.set_key("jump", "a") is False
        assert bindings.key_for("jump") == "w"
        assert bindings.key_for("left") == "a"

    def test_dash_onto_left_key_rejected(self, bindings_path):
        bindings = KeyBindings(bindings_path)
        assert bindings.set_key(Action.DASH, "a") is False
        assert bindings.key_for("dash") == "space"
        assert bindings.key_for("left") == "a"
        assert not bindings_path.exists()

    def test_duplicate_check_is_case_insensitive(self):
        bindings = KeyBindings(path=None)
        assert bindings.set_key("jump", "A") is False

    def test_rebinding_same_action_to_own_key(self):
        bindings = KeyBindings(path=None)
        assert bindings.set_key("left", "a") is True

    def test_non_bindable_key_rejected(self):
        bindings = KeyBindings(path=None)
        assert bindings.set_key("jump", "f5") is False
        assert bindings.key_for("jump") == "w"

    def test_unknown_action(self):
        bindings = KeyBindings(path=None)
        with pytest.raises(ValueError):
            bindings.set_key("fly", "q")

    def test_action_for(self):
        bindings = KeyBindings(path=None)
        assert bindings.action_for("SPACE") is Action.DASH
        assert bindings.action_for("q") is None

    def test_reset(self, bindings_path):
        bindings = KeyBindings(bindings_path)
        bindings.set_key("jump", "up")
        bindings.reset()
        assert bindings.keys == DEFAULT_KEYS
        assert json.loads(bindings_path.read_text()) == DEFAULT_KEYS

    def test_corrupt_file_falls_back(self, bindings_path, capsys):
        bindings_path.write_text("{not json")
        bindings = KeyBindings(bindings_path)
        assert bindings.keys == DEFAULT_KEYS
        assert "unreadable" in capsys.readouterr().out

    def test_non_utf8_file_falls_back(self, bindings_path, capsys):
        bindings_path.write_bytes(b'{"jump": "\xff\xfe"}')
        bindings = KeyBindings(bindings_path)
        assert bindings.keys == DEFAULT_KEYS
        assert "unreadable" in capsys.readouterr().out

    def test_unreadable_path_falls_back(self, tmp_path):
        folder = tmp_path / "keys.json"
        folder.mkdir()
        assert KeyBindings(folder).keys == DEFAULT_KEYS

    def test_saved_key_shared_by_two_actions_falls_back(self, bindings_path, capsys):
        """A file binding jump to left's key must not leave "a" driving both."""
        bindings_path.write_text(json.dumps({"jump": "a"}))
        bindings = KeyBindings(bindings_path)
        assert bindings.keys == DEFAULT_KEYS
        assert bindings.key_for("jump") != bindings.key_for("left")
        assert bindings.resolve(held={"a"}, pressed={"a"}) == InputState(left=True)
        assert "conflicting" in capsys.readouterr().out

    def test_saved_swap_loads(self, bindings_path):
        bindings_path.write_text(json.dumps({"jump": "a", "left": "w"}))
        bindings = KeyBindings(bindings_path)
        assert bindings.key_for("jump") == "a"
        assert bindings.key_for("left") == "w"

    def test_non_dict_file_falls_back(self, bindings_path):
        bindings_path.write_text("[1, 2]")
        assert KeyBindings(bindings_path).keys == DEFAULT_KEYS

    def test_partial_file_merges_with_defaults(self, bindings_path):
        bindings_path.write_text(json.dumps({"dash": "shift", "bogus": "x", "jump": "f9"}))
        bindings = KeyBindings(bindings_path)
        assert bindings.key_for("dash") == "shift"
        assert bindings.key_for("jump") == "w"
        assert "bogus" not in bindings.keys

    @pytest.mark.parametrize("key,name", [("space", "SPACE"), ("return", "ENTER"), ("q", "Q"), ("up", "UP")])
    def test_display_name(self, key, name):
        assert KeyBindings.display_name(key) == name


class TestResolve:
    def test_held_directions(self):
        state = KeyBindings(path=None).resolve(held={"a", "d"})
        assert state == InputState(left=True, right=True)

    def test_jump_and_dash_need_press(self):
        bindings = KeyBindings(path=None)
        assert bindings.resolve(held={"w", "space"}) == InputState()
        assert bindings.resolve(held=set(), pressed={"w", "space"}) == InputState(jump=True, dash=True)

    def test_follows_remap(self):
        bindings = KeyBindings(path=None)
        bindings.set_key("jump", "up")
        assert bindings.resolve(held=set(), pressed={"w"}).jump is False
        assert bindings.resolve(held=set(), pressed={"UP"}).jump is True
