"""Shared physics component for all entity kinds.

Every entity (player, platform, collectible) embeds one Body. The body does
plain Euler integration in screen coordinates (y grows downward) with a
fixed per-tick gravity. There is no sub-stepping: platforms are thick
relative to per-tick displacement in the authored levels.
"""

from dataclasses import dataclass, field
from typing import Tuple

from pymunk import Vec2d

# Immutable 2D vector: `a + b` adds, `v * k` scales.
Vector2 = Vec2d


@dataclass
class Body:
    """Axis-aligned box with position (top-left corner) and velocity."""
    position: Vector2
    width: float
    height: float
    velocity: Vector2 = field(default_factory=Vec2d.zero)
    on_ground: bool = False
    previous_position: Vector2 = None

    def __post_init__(self):
        self.position = Vec2d(*self.position)
        self.velocity = Vec2d(*self.velocity)
        if self.previous_position is None:
            self.previous_position = self.position
        else:
            self.previous_position = Vec2d(*self.previous_position)

    @property
    def x(self) -> float:
        return self.position.x

    @property
    def y(self) -> float:
        return self.position.y

    @property
    def left(self) -> float:
        return self.position.x

    @property
    def right(self) -> float:
        return self.position.x + self.width

    @property
    def top(self) -> float:
        return self.position.y

    @property
    def bottom(self) -> float:
        return self.position.y + self.height

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        """Get (left, top, right, bottom) bounds."""
        return (self.left, self.top, self.right, self.bottom)

    @property
    def previous_bounds(self) -> Tuple[float, float, float, float]:
        """Bounds at the start of the current tick, before integration."""
        px, py = self.previous_position
        return (px, py, px + self.width, py + self.height)

    @property
    def center(self) -> Vector2:
        return self.position + Vec2d(self.width / 2, self.height / 2)

    def integrate(self, gravity: float) -> None:
        """Advance one tick: apply gravity, then move by velocity.

        on_ground is cleared here; collision resolution must re-assert it
        when the body is still supported.
        """
        self.previous_position = self.position
        self.velocity = Vec2d(self.velocity.x, self.velocity.y + gravity)
        self.position = self.position + self.velocity
        self.on_ground = False

    def move_to(self, x: float = None, y: float = None) -> None:
        """Snap position along one or both axes."""
        self.position = Vec2d(
            self.position.x if x is None else x,
            self.position.y if y is None else y,
        )

    def set_velocity(self, vx: float = None, vy: float = None) -> None:
        self.velocity = Vec2d(
            self.velocity.x if vx is None else vx,
            self.velocity.y if vy is None else vy,
        )


def overlaps(a: Body, b: Body) -> bool:
    """Strict AABB overlap. Boxes whose edges only touch do not overlap."""
    return (
        a.left < b.right
        and a.right > b.left
        and a.top < b.bottom
        and a.bottom > b.top
    )
