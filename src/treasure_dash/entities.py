"""Game entities: Player, platforms, collectibles.

Each entity owns a physics Body (composition, not inheritance) and adds its
own game-specific state on top. The `kind` tag on Platform decides how
collision resolution treats it.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .config import PhysicsConfig
from .physics import Body, Vector2


@dataclass
class PlayerVisuals:
    """Player size and colour (non-behavioral)."""
    width: float = 30.0
    height: float = 40.0
    color: Tuple[int, int, int] = (0, 212, 255)


class Player:
    """Player entity with jump, dash and a dash cooldown.

    State is a set of orthogonal flags rather than a single enum:
    grounded/airborne (body.on_ground), dash ready/cooling down
    (dash_cooldown <= 0), alive/dead.
    """

    def __init__(
        self,
        position: Tuple[float, float],
        physics_config: Optional[PhysicsConfig] = None,
        visuals: Optional[PlayerVisuals] = None,
    ):
        """Create player at given top-left position.

        Args:
            position: Initial (x, y) position
            physics_config: Movement constants. Uses defaults if None.
            visuals: Size/colour config. Uses defaults if None.
        """
        self.physics_config = physics_config or PhysicsConfig()
        self.visuals = visuals or PlayerVisuals()
        self.body = Body(position, self.visuals.width, self.visuals.height)

        self.score = 0
        self.dash_cooldown = 0
        self.alive = True
        self.direction = 1  # 1 = facing right, -1 = facing left
        self.is_jumping = False
        self.is_dashing = False

    @property
    def position(self) -> Vector2:
        return self.body.position

    @property
    def velocity(self) -> Vector2:
        return self.body.velocity

    @property
    def on_ground(self) -> bool:
        return self.body.on_ground

    @property
    def dash_ready(self) -> bool:
        return self.dash_cooldown <= 0

    @property
    def width(self) -> float:
        return self.body.width

    @property
    def height(self) -> float:
        return self.body.height

    def move(self, direction: int) -> None:
        """Set walking velocity for this tick (direction is -1 or +1)."""
        self.body.set_velocity(vx=direction * self.physics_config.player_speed)
        self.direction = direction

    def jump(self) -> bool:
        """Jump if grounded. Returns False (and does nothing) when airborne."""
        if not self.body.on_ground:
            return False
        self.body.set_velocity(vy=-self.physics_config.jump_power)
        self.body.on_ground = False
        self.is_jumping = True
        return True

    def dash(self, direction: int) -> bool:
        """Dash horizontally if the cooldown has elapsed."""
        if self.dash_cooldown > 0:
            return False
        self.body.set_velocity(vx=direction * self.physics_config.dash_power)
        self.dash_cooldown = self.physics_config.dash_cooldown
        self.is_dashing = True
        return True

    def update(self) -> None:
        """Integrate one tick, then tick the cooldown and apply friction."""
        self.body.integrate(self.physics_config.gravity)
        self.dash_cooldown -= 1
        self.body.set_velocity(vx=self.body.velocity.x * self.physics_config.friction)
        if self.dash_cooldown < 0:
            self.is_dashing = False

    def land(self, surface_y: float) -> None:
        """Snap onto a surface whose top is at surface_y."""
        self.body.move_to(y=surface_y - self.body.height)
        self.body.set_velocity(vy=0.0)
        self.body.on_ground = True
        self.is_jumping = False

    def kill(self) -> bool:
        """Mark the player dead. Returns True only on the alive -> dead transition."""
        if not self.alive:
            return False
        self.alive = False
        return True


class PlatformKind(Enum):
    NORMAL = "normal"
    MOVING = "moving"
    SPIKE = "spike"
    GOAL = "goal"
    COLLECTIBLE_MARKER = "collectible"


class Platform:
    """Axis-aligned platform.

    Spike platforms bob vertically around original_y as a function of phase;
    every other kind stays where it was created.
    """

    def __init__(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        kind: PlatformKind = PlatformKind.NORMAL,
        phase: float = 0.0,
        physics_config: Optional[PhysicsConfig] = None,
    ):
        self.body = Body((x, y), width, height)
        self.kind = kind
        self.original_y = y
        self.phase = phase
        self.physics_config = physics_config or PhysicsConfig()

    @property
    def is_hazard(self) -> bool:
        return self.kind is PlatformKind.SPIKE

    @property
    def is_goal(self) -> bool:
        return self.kind is PlatformKind.GOAL

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        return self.body.bounds

    def update(self) -> None:
        self.phase += self.physics_config.spike_phase_step
        if self.kind is PlatformKind.SPIKE:
            offset = math.sin(self.phase) * self.physics_config.spike_amplitude
            self.body.move_to(y=self.original_y + offset)


class Collectible:
    """Treasure that is picked up once by an alive player."""

    SIZE = 15.0

    def __init__(self, x: float, y: float, spin: float = 0.0, bob: float = 0.0):
        self.body = Body((x, y), self.SIZE, self.SIZE)
        self.collected = False

        # Cosmetic animation phases, read by the renderer only
        self.spin = spin
        self.bob = bob

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        return self.body.bounds

    def collect(self) -> bool:
        """Mark collected. Returns False if it was already collected."""
        if self.collected:
            return False
        self.collected = True
        return True

    def update(self) -> None:
        self.spin += 0.08
        self.bob += 0.05
