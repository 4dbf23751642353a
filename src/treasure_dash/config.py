"""Configuration system for the platformer.

PhysicsConfig holds the per-tick movement constants. Everything is expressed
in pixels and ticks (one tick = 1/fps seconds), never in seconds, so the
simulation stays deterministic regardless of frame pacing.

LayoutConfig holds the knobs used by the random level generator, and
GameConfig ties both together with world size, timing and scoring rules.
"""

from dataclasses import dataclass, field
from typing import Tuple, Dict, Any


@dataclass
class PhysicsConfig:
    """Movement constants, applied once per tick."""

    gravity: float = 0.6  # px/tick^2, positive = down (screen coordinates)
    friction: float = 0.85  # Horizontal velocity multiplier applied every tick
    player_speed: float = 5.0  # px/tick while a direction key is held
    jump_power: float = 12.0  # Upward velocity set on jump
    dash_power: float = 15.0  # Horizontal velocity set on dash
    dash_cooldown: int = 30  # Ticks before the next dash is allowed

    # Spike platforms bob around their original height
    spike_amplitude: float = 3.0
    spike_phase_step: float = 0.02

    @property
    def jump_apex(self) -> float:
        """Height (px) gained by a jump from rest under Euler integration."""
        ticks = int(self.jump_power / self.gravity) + 1
        return sum(max(self.jump_power - self.gravity * k, 0.0) for k in range(1, ticks + 1))

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary."""
        return {
            "gravity": self.gravity,
            "friction": self.friction,
            "player_speed": self.player_speed,
            "jump_power": self.jump_power,
            "dash_power": self.dash_power,
            "dash_cooldown": self.dash_cooldown,
            "spike_amplitude": self.spike_amplitude,
            "spike_phase_step": self.spike_phase_step,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, float]) -> "PhysicsConfig":
        """Create from dictionary, falling back to defaults for missing keys."""
        return cls(
            gravity=d.get("gravity", 0.6),
            friction=d.get("friction", 0.85),
            player_speed=d.get("player_speed", 5.0),
            jump_power=d.get("jump_power", 12.0),
            dash_power=d.get("dash_power", 15.0),
            dash_cooldown=int(d.get("dash_cooldown", 30)),
            spike_amplitude=d.get("spike_amplitude", 3.0),
            spike_phase_step=d.get("spike_phase_step", 0.02),
        )


@dataclass
class LayoutConfig:
    """Level layout parameters for generated levels (index > 3)."""
    platform_count: int = 10
    platform_spacing: float = 80.0  # Vertical distance between stacked platforms
    platform_width: float = 120.0
    platform_height: float = 30.0
    first_platform_offset: float = 150.0  # Distance of the lowest platform from the world bottom
    collectible_count: int = 8
    collectible_offset: float = 100.0  # Collectibles sit this far above the world bottom

    # Shared by all levels
    ground_height: float = 40.0
    goal_width: float = 80.0
    goal_height: float = 40.0
    goal_inset_x: float = 100.0  # Goal left edge, measured from the right world edge
    goal_inset_y: float = 120.0  # Goal top edge, measured from the world bottom

    def to_dict(self) -> Dict[str, float]:
        return {
            "platform_count": self.platform_count,
            "platform_spacing": self.platform_spacing,
            "platform_width": self.platform_width,
            "platform_height": self.platform_height,
            "first_platform_offset": self.first_platform_offset,
            "collectible_count": self.collectible_count,
            "collectible_offset": self.collectible_offset,
            "ground_height": self.ground_height,
            "goal_width": self.goal_width,
            "goal_height": self.goal_height,
            "goal_inset_x": self.goal_inset_x,
            "goal_inset_y": self.goal_inset_y,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, float]) -> "LayoutConfig":
        defaults = cls()
        values = {k: d.get(k, v) for k, v in defaults.to_dict().items()}
        values["platform_count"] = int(values["platform_count"])
        values["collectible_count"] = int(values["collectible_count"])
        return cls(**values)


@dataclass
class GameConfig:
    """Complete game configuration combining all parameter groups."""
    physics: PhysicsConfig = field(default_factory=PhysicsConfig)
    layout: LayoutConfig = field(default_factory=LayoutConfig)

    # World / display settings
    screen_width: int = 1000
    screen_height: int = 600
    fps: int = 60

    # Progression and scoring
    max_levels: int = 3
    base_time_limit: float = 60.0  # Seconds
    time_limit_per_level: float = 5.0  # Extra seconds per level index
    collectible_value: int = 100

    # When False a dead player keeps falling until the timer runs out
    death_ends_run: bool = False

    @property
    def player_start(self) -> Tuple[float, float]:
        """Top-left spawn position for the player."""
        return (50.0, self.screen_height - 100.0)

    @property
    def tick_seconds(self) -> float:
        return 1.0 / self.fps

    def time_limit(self, level_index: int) -> float:
        """Seconds allowed for the given level (60 + 5 * index by default)."""
        return self.base_time_limit + self.time_limit_per_level * level_index

    def to_dict(self) -> Dict[str, Any]:
        """Convert to nested dictionary."""
        return {
            "physics": self.physics.to_dict(),
            "layout": self.layout.to_dict(),
            "screen_width": self.screen_width,
            "screen_height": self.screen_height,
            "fps": self.fps,
            "max_levels": self.max_levels,
            "base_time_limit": self.base_time_limit,
            "time_limit_per_level": self.time_limit_per_level,
            "collectible_value": self.collectible_value,
            "death_ends_run": self.death_ends_run,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "GameConfig":
        return cls(
            physics=PhysicsConfig.from_dict(d.get("physics", {})),
            layout=LayoutConfig.from_dict(d.get("layout", {})),
            screen_width=d.get("screen_width", 1000),
            screen_height=d.get("screen_height", 600),
            fps=d.get("fps", 60),
            max_levels=d.get("max_levels", 3),
            base_time_limit=d.get("base_time_limit", 60.0),
            time_limit_per_level=d.get("time_limit_per_level", 5.0),
            collectible_value=d.get("collectible_value", 100),
            death_ends_run=d.get("death_ends_run", False),
        )


# Predefined configurations
CONFIGS = {
    # The original feel
    "default": GameConfig(),

    # Lower gravity, longer hang time
    "floaty": GameConfig(physics=PhysicsConfig(gravity=0.4, jump_power=10.0)),

    # Strong gravity, short hops, slippery floor
    "heavy": GameConfig(physics=PhysicsConfig(gravity=0.9, jump_power=15.0, friction=0.92)),

    # Any death ends the run immediately
    "hardcore": GameConfig(death_ends_run=True, base_time_limit=45.0),
}
