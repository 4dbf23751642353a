"""treasure-dash — 2D treasure-collecting platformer with a deterministic tick simulation.

The simulation (GameSession) advances one fixed tick per display frame:
input, physics, collision, treasure, goal and timer, in that order. A pygame
host drives it interactively and a Gymnasium environment drives it headlessly.
"""

from .config import PhysicsConfig, LayoutConfig, GameConfig, CONFIGS
from .physics import Body, Vector2, overlaps
from .entities import Player, Platform, PlatformKind, Collectible
from .collision import Contact, CollisionReport, resolve_platform_collisions
from .level_gen import Level, LevelGenerator, LevelSpec, build_level
from .controls import Action, InputState, KeyBindings
from .events import Cue, GameEvent
from .session import GameSession, SessionState

__all__ = [
    "PhysicsConfig",
    "LayoutConfig",
    "GameConfig",
    "CONFIGS",
    "Body",
    "Vector2",
    "overlaps",
    "Player",
    "Platform",
    "PlatformKind",
    "Collectible",
    "Contact",
    "CollisionReport",
    "resolve_platform_collisions",
    "Level",
    "LevelGenerator",
    "LevelSpec",
    "build_level",
    "Action",
    "InputState",
    "KeyBindings",
    "Cue",
    "GameEvent",
    "GameSession",
    "SessionState",
]
