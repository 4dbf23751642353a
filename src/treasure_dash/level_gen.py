"""Level layouts and generation.

Levels 1-3 are hand-authored. Any higher index gets a random stack of
platforms climbing toward the top of the world with treasure scattered at a
fixed height. Every level starts with a full-width ground platform and ends
with the goal platform near the bottom-right corner.

Geometry lives in a LevelSpec (plain tuples, easy to compare and inspect);
build_level turns a spec into runtime entities.
"""

import math
import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .config import GameConfig
from .entities import Collectible, Platform, PlatformKind
from .physics import Vector2


PlatformTuple = Tuple[float, float, float, float, str]  # (x, y, width, height, kind)


# Hand-authored content, added between the ground and the goal.
LEVEL_LAYOUTS: Dict[int, Dict[str, list]] = {
    # Simple intro: four steps, one treasure on each
    1: {
        "platforms": [
            (150, 480, 150, 30, "normal"),
            (350, 420, 150, 30, "normal"),
            (550, 360, 150, 30, "normal"),
            (750, 300, 150, 30, "normal"),
        ],
        "collectibles": [(225, 460), (425, 400), (625, 340), (825, 280)],
    },
    # Narrower steps, a high shelf and a spike strip
    2: {
        "platforms": [
            (100, 450, 100, 30, "normal"),
            (300, 380, 100, 30, "normal"),
            (500, 320, 100, 30, "normal"),
            (700, 380, 100, 30, "normal"),
            (300, 200, 400, 30, "normal"),
            (450, 290, 100, 20, "spike"),
        ],
        "collectibles": [
            (150, 430), (350, 360), (550, 300), (750, 360), (500, 180), (500, 180),
        ],
    },
    # Expert: small platforms and a long spike bar over the middle
    3: {
        "platforms": [
            (50, 500, 80, 30, "normal"),
            (200, 420, 80, 30, "normal"),
            (350, 340, 80, 30, "normal"),
            (500, 260, 80, 30, "normal"),
            (650, 330, 80, 30, "normal"),
            (800, 240, 80, 30, "normal"),
            (400, 200, 200, 20, "spike"),
        ],
        "collectibles": [
            (90, 480), (240, 400), (390, 320), (540, 240),
            (690, 310), (840, 220), (450, 160), (550, 160),
        ],
    },
}


@dataclass
class LevelSpec:
    """Specification for one level."""
    index: int
    platforms: List[PlatformTuple]  # Ground first, goal last
    collectibles: List[Tuple[float, float]]  # (x, y) top-left
    goal_position: Tuple[float, float]
    time_limit: float
    player_start: Tuple[float, float]
    generated: bool = False  # True when produced by the random generator


@dataclass
class Level:
    """Runtime level: entity collections plus goal and timer data.

    Structure is fixed once built; only member entities mutate, and
    collectibles are dropped from the list when picked up.
    """
    index: int
    platforms: List[Platform]
    collectibles: List[Collectible]
    goal_position: Vector2
    time_limit: float
    player_start: Tuple[float, float] = (50.0, 500.0)
    collected_count: int = 0
    total_collectibles: int = field(init=False)

    def __post_init__(self):
        self.total_collectibles = len(self.collectibles)
        goals = [p for p in self.platforms if p.is_goal]
        assert len(goals) == 1, f"level {self.index} must have exactly one goal, got {len(goals)}"
        self._goal = goals[0]

    @property
    def goal(self) -> Platform:
        return self._goal

    @property
    def hazards(self) -> List[Platform]:
        return [p for p in self.platforms if p.is_hazard]

    def update(self) -> None:
        """Advance platform oscillation and collectible animation."""
        for platform in self.platforms:
            platform.update()
        for collectible in self.collectibles:
            collectible.update()

    def remove_collectible(self, collectible: Collectible) -> None:
        self.collectibles.remove(collectible)
        self.collected_count += 1


class LevelGenerator:
    """Produces LevelSpecs for any level index.

    The same seed always yields the same random layouts and the same
    cosmetic phases.
    """

    def __init__(self, config: Optional[GameConfig] = None, seed: Optional[int] = None):
        self.config = config or GameConfig()
        self.seed = seed
        self.rng = random.Random(seed)

    def generate(self, index: int) -> LevelSpec:
        """Generate the spec for a level.

        Args:
            index: Level number, starting at 1

        Returns:
            LevelSpec with ground, level content and goal
        """
        if index < 1:
            raise ValueError(f"Level index must be >= 1, got {index}")

        cfg = self.config
        layout = cfg.layout
        width, height = cfg.screen_width, cfg.screen_height

        platforms: List[PlatformTuple] = [
            (0.0, height - layout.ground_height, float(width), layout.ground_height, "normal"),
        ]
        collectibles: List[Tuple[float, float]] = []

        generated = index not in LEVEL_LAYOUTS
        if generated:
            content, treasure = self._random_content()
        else:
            content = LEVEL_LAYOUTS[index]["platforms"]
            treasure = LEVEL_LAYOUTS[index]["collectibles"]
        platforms.extend(tuple(p) for p in content)
        collectibles.extend(tuple(c) for c in treasure)

        goal_position = (width - layout.goal_inset_x, height - layout.goal_inset_y)
        platforms.append(
            (goal_position[0], goal_position[1], layout.goal_width, layout.goal_height, "goal")
        )

        return LevelSpec(
            index=index,
            platforms=platforms,
            collectibles=collectibles,
            goal_position=goal_position,
            time_limit=cfg.time_limit(index),
            player_start=cfg.player_start,
            generated=generated,
        )

    def _random_content(self) -> Tuple[List[PlatformTuple], List[Tuple[float, float]]]:
        """Stacked platforms at increasing height plus treasure at a fixed height."""
        cfg = self.config
        layout = cfg.layout
        max_x = cfg.screen_width - layout.platform_width - 30

        platforms = []
        for i in range(layout.platform_count):
            x = self.rng.random() * max_x
            y = cfg.screen_height - layout.first_platform_offset - i * layout.platform_spacing
            platforms.append((x, y, layout.platform_width, layout.platform_height, "normal"))

        treasure_y = cfg.screen_height - layout.collectible_offset
        collectibles = [
            (self.rng.random() * cfg.screen_width, treasure_y)
            for _ in range(layout.collectible_count)
        ]
        return platforms, collectibles

    def build(self, index: int) -> Level:
        """Generate and build a runtime level in one go."""
        return build_level(self.generate(index), self.config, self.rng)


def build_level(
    spec: LevelSpec,
    config: Optional[GameConfig] = None,
    rng: Optional[random.Random] = None,
) -> Level:
    """Build actual game entities from a level spec.

    Args:
        spec: Level specification
        config: Game config (for physics constants). Uses defaults if None.
        rng: Source for cosmetic phases. A fresh unseeded one if None.

    Returns:
        Level ready to simulate
    """
    config = config or GameConfig()
    rng = rng or random.Random()

    platforms = [
        Platform(
            x, y, w, h,
            kind=PlatformKind(kind),
            phase=rng.random() * 2 * math.pi,
            physics_config=config.physics,
        )
        for x, y, w, h, kind in spec.platforms
    ]
    collectibles = [
        Collectible(x, y, spin=rng.random() * 2 * math.pi, bob=rng.random() * 2 * math.pi)
        for x, y in spec.collectibles
    ]

    return Level(
        index=spec.index,
        platforms=platforms,
        collectibles=collectibles,
        goal_position=Vector2(*spec.goal_position),
        time_limit=spec.time_limit,
        player_start=spec.player_start,
    )
