"""Player vs. platform collision resolution.

Broad phase is a linear scan over the level's platforms (levels hold a few
dozen at most); narrow phase is a strict AABB overlap test. Each overlapping
platform is then resolved by kind:

- spike: kills the player, no positional correction
- goal: sensor, reported by the session's goal check, no correction
- anything else: one of four outcomes, chosen from the pre-resolution
  velocity and the player's edges at the start of the tick. Vertical
  outcomes are tested before horizontal ones, so they win ties.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterable, List, Optional, Tuple

from .entities import Platform, Player
from .physics import Body, overlaps


class Contact(Enum):
    NONE = auto()  # Already overlapping at tick start; left uncorrected
    LANDING = auto()
    HEAD_BUMP = auto()
    LEFT_SIDE = auto()  # Player ran into the platform's left edge
    RIGHT_SIDE = auto()  # Player ran into the platform's right edge


@dataclass
class CollisionReport:
    """What happened during one resolution pass."""
    landed: bool = False
    landing_speed: float = 0.0  # Vertical speed just before the landing clamp
    spike_hit: bool = False
    fell: bool = False
    death_cause: Optional[str] = None  # "spike" or "fall", set on the killing tick only
    contacts: List[Tuple[Platform, Contact]] = field(default_factory=list)


def classify_contact(body: Body, other: Body) -> Contact:
    """Decide which side of `other` the moving `body` hit."""
    prev_left, prev_top, prev_right, prev_bottom = body.previous_bounds
    vy = body.velocity.y

    if vy > 0 and prev_bottom <= other.top:
        return Contact.LANDING
    if vy < 0 and prev_top >= other.bottom:
        return Contact.HEAD_BUMP
    if prev_right <= other.left:
        return Contact.LEFT_SIDE
    if prev_left >= other.right:
        return Contact.RIGHT_SIDE
    return Contact.NONE


def apply_contact(player: Player, platform: Platform, contact: Contact) -> None:
    """Clamp the player against the platform for the given contact side."""
    body = player.body
    other = platform.body
    if contact is Contact.LANDING:
        player.land(other.top)
    elif contact is Contact.HEAD_BUMP:
        body.move_to(y=other.bottom)
        body.set_velocity(vy=0.0)
    elif contact is Contact.LEFT_SIDE:
        body.move_to(x=other.left - body.width)
    elif contact is Contact.RIGHT_SIDE:
        body.move_to(x=other.right)


def clamp_to_world(body: Body, world_width: float) -> None:
    """Keep the body horizontally inside [0, world_width - width]."""
    if body.left < 0:
        body.move_to(x=0.0)
    if body.right > world_width:
        body.move_to(x=world_width - body.width)


def resolve_platform_collisions(
    player: Player,
    platforms: Iterable[Platform],
    world_width: float,
    world_height: float,
) -> CollisionReport:
    """Resolve the player against every overlapping platform, then the world.

    Args:
        player: The player, already integrated for this tick
        platforms: Level platforms in level order
        world_width, world_height: World size in pixels

    Returns:
        CollisionReport describing landings and deaths for this tick
    """
    report = CollisionReport()
    body = player.body

    for platform in platforms:
        if not overlaps(body, platform.body):
            continue

        if platform.is_hazard:
            report.spike_hit = True
            if player.kill():
                report.death_cause = "spike"
            continue

        if platform.is_goal:
            continue

        speed = body.velocity.y
        contact = classify_contact(body, platform.body)
        apply_contact(player, platform, contact)
        report.contacts.append((platform, contact))
        if contact is Contact.LANDING:
            report.landed = True
            report.landing_speed = speed

    clamp_to_world(body, world_width)

    if body.top > world_height:
        report.fell = True
        if player.kill():
            report.death_cause = "fall"

    return report
