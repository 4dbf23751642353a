"""Simulation events and the fire-and-forget sinks that consume them.

The session calls an AudioSink and a ParticleEmitter at event points and
never waits for, or reads back, anything from them.
"""

from enum import Enum, auto
from typing import Protocol, Tuple

from .physics import Vector2

Color = Tuple[int, int, int]


class GameEvent(Enum):
    JUMP = auto()
    DASH = auto()
    LAND = auto()
    COLLECT = auto()
    DEATH = auto()
    LEVEL_COMPLETE = auto()
    GAME_OVER = auto()
    WON = auto()


class Cue(Enum):
    """Audio cue names with their play duration (seconds)."""
    JUMP = ("jump", 0.1)
    DASH = ("dash", 0.1)
    COLLECTIBLE = ("collectible", 0.2)
    LEVEL_COMPLETE = ("level_complete", 0.5)
    DAMAGE = ("damage", 0.3)

    @property
    def cue_name(self) -> str:
        return self.value[0]

    @property
    def duration(self) -> float:
        return self.value[1]


class AudioSink(Protocol):
    def play(self, cue: Cue) -> None: ...


class ParticleEmitter(Protocol):
    def emit(self, position: Vector2, count: int, color: Color, speed_range: float = 3.0) -> None: ...


class SilentAudio:
    """AudioSink that ignores every cue."""

    def play(self, cue: Cue) -> None:
        pass


class NullEmitter:
    """ParticleEmitter that ignores every request."""

    def emit(self, position: Vector2, count: int, color: Color, speed_range: float = 3.0) -> None:
        pass
