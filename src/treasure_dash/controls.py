"""Logical input actions and the remappable key table.

The simulation only ever sees an InputState: which logical actions are held
or were pressed this frame. Physical key identifiers (pygame key names such
as "a", "space", "left") stay on this side of the boundary.

KeyBindings persists the action -> key map as a small JSON object.
"""

import json
import string
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, Optional, Union


class Action(Enum):
    JUMP = "jump"
    LEFT = "left"
    RIGHT = "right"
    DASH = "dash"


@dataclass(frozen=True)
class InputState:
    """Polled input snapshot, consumed once per tick.

    left/right are level-triggered (held); jump/dash are edge-triggered
    (pressed since the previous tick).
    """
    left: bool = False
    right: bool = False
    jump: bool = False
    dash: bool = False


DEFAULT_KEYS: Dict[str, str] = {
    "jump": "w",
    "left": "a",
    "right": "d",
    "dash": "space",
}

BINDABLE_KEYS = frozenset(
    list(string.ascii_lowercase)
    + ["space", "return", "up", "down", "left", "right", "shift", "ctrl", "alt"]
)

_DISPLAY_NAMES = {
    "space": "SPACE",
    "return": "ENTER",
    "up": "UP",
    "down": "DOWN",
    "left": "LEFT",
    "right": "RIGHT",
    "shift": "SHIFT",
    "ctrl": "CTRL",
    "alt": "ALT",
}

DEFAULT_BINDINGS_PATH = Path.home() / ".treasure_dash" / "keys.json"


def _action_name(action: Union[Action, str]) -> str:
    if isinstance(action, Action):
        return action.value
    try:
        return Action(action).value
    except ValueError:
        raise ValueError(f"Unknown action: {action!r}") from None


class KeyBindings:
    """Remappable action -> key table with JSON persistence.

    Usage:
        bindings = KeyBindings(path="keys.json")
        bindings.set_key("dash", "e")      # True, saved immediately
        bindings.set_key("jump", "a")      # False, "a" is bound to left
        state = bindings.resolve(held={"d"}, pressed={"w"})
    """

    def __init__(self, path: Optional[Union[str, Path]] = DEFAULT_BINDINGS_PATH):
        self.path = Path(path) if path is not None else None
        self.keys: Dict[str, str] = self.load()

    @staticmethod
    def is_bindable(key: str) -> bool:
        return key.lower() in BINDABLE_KEYS

    @staticmethod
    def display_name(key: str) -> str:
        key = key.lower()
        return _DISPLAY_NAMES.get(key, key.upper())

    def key_for(self, action: Union[Action, str]) -> str:
        return self.keys[_action_name(action)]

    def action_for(self, key: str) -> Optional[Action]:
        """Reverse lookup: which action (if any) is bound to key."""
        key = key.lower()
        for name, bound in self.keys.items():
            if bound.lower() == key:
                return Action(name)
        return None

    def load(self) -> Dict[str, str]:
        """Read bindings from disk, falling back to defaults."""
        keys = dict(DEFAULT_KEYS)
        if self.path is None or not self.path.exists():
            return keys

        try:
            with open(self.path, encoding="utf-8") as f:
                saved = json.load(f)
        except (ValueError, OSError):
            # JSONDecodeError and UnicodeDecodeError are both ValueErrors
            print(f"Ignoring unreadable key bindings in {self.path}")
            return keys

        if not isinstance(saved, dict):
            print(f"Ignoring malformed key bindings in {self.path}")
            return keys

        merged = dict(keys)
        for name, key in saved.items():
            if name in merged and isinstance(key, str) and self.is_bindable(key):
                merged[name] = key.lower()

        # One key per action, same rule as set_key
        if len(set(merged.values())) != len(merged):
            print(f"Ignoring conflicting key bindings in {self.path}")
            return keys
        return merged

    def save(self) -> None:
        """Write bindings to disk (no-op for in-memory bindings)."""
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(self.keys, f, indent=2)

    def reset(self) -> None:
        """Restore default keys and persist them."""
        self.keys = dict(DEFAULT_KEYS)
        self.save()

    def set_key(self, action: Union[Action, str], key: str) -> bool:
        """Bind key to action.

        Returns False, leaving every binding unchanged, when the key is not
        bindable or is already bound to a different action.
        """
        name = _action_name(action)
        key = key.lower()
        if not self.is_bindable(key):
            return False
        for other, bound in self.keys.items():
            if other != name and bound.lower() == key:
                return False
        self.keys[name] = key
        self.save()
        return True

    def resolve(self, held: Iterable[str], pressed: Iterable[str] = ()) -> InputState:
        """Turn physical key sets into a logical InputState.

        Args:
            held: Keys currently down
            pressed: Keys that went down since the last poll
        """
        held = {k.lower() for k in held}
        pressed = {k.lower() for k in pressed}
        return InputState(
            left=self.keys["left"] in held,
            right=self.keys["right"] in held,
            jump=self.keys["jump"] in pressed,
            dash=self.keys["dash"] in pressed,
        )
