"""Tests for the command-line entry point (key binding flags only; no window)."""

import json

import pytest

from treasure_dash.__main__ import apply_bindings, build_parser, main
from treasure_dash.controls import DEFAULT_KEYS, KeyBindings


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.config == "default"
        assert args.level is None
        assert args.bind == []
        assert not args.mute

    def test_repeated_bind(self):
        args = build_parser().parse_args(["--bind", "jump=up", "--bind", "dash=e"])
        assert args.bind == ["jump=up", "dash=e"]

    def test_level_below_one_rejected(self, bindings_path, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--keys", str(bindings_path), "--level", "0"])
        assert exc.value.code == 2
        assert "--level must be >= 1" in capsys.readouterr().err


class TestApplyBindings:
    def test_outcomes(self, capsys):
        bindings = KeyBindings(path=None)
        apply_bindings(bindings, ["dash=e", "jump=a", "left=f7", "nonsense"])
        out = capsys.readouterr().out
        assert "dash: Key set!" in out
        assert "jump: Key in use!" in out
        assert "left: Invalid key!" in out
        assert "Invalid binding" in out
        assert bindings.key_for("dash") == "e"
        assert bindings.key_for("jump") == "w"


class TestMain:
    def test_show_keys(self, bindings_path, capsys):
        assert main(["--keys", str(bindings_path), "--show-keys"]) == 0
        out = capsys.readouterr().out
        assert "SPACE" in out
        assert "jump" in out

    def test_bind_persists(self, bindings_path):
        main(["--keys", str(bindings_path), "--bind", "jump=up", "--show-keys"])
        assert json.loads(bindings_path.read_text())["jump"] == "up"

    def test_reset_keys(self, bindings_path):
        main(["--keys", str(bindings_path), "--bind", "jump=up", "--show-keys"])
        main(["--keys", str(bindings_path), "--reset-keys", "--show-keys"])
        assert json.loads(bindings_path.read_text()) == DEFAULT_KEYS
