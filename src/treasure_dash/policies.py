"""Scripted policies for automated play.

Each policy takes an observation and returns an action array
compatible with TreasureDashEnv's action space: [left, right, jump, dash].
"""

from typing import Iterable, Optional

import numpy as np

# Observation indices (see TreasureDashEnv)
OBS_X = 0
OBS_VX = 2
OBS_GROUNDED = 4
OBS_DASH_READY = 5


class BasePolicy:
    """Base class for scripted policies."""

    name: str = "base"

    def __call__(self, obs: np.ndarray) -> np.ndarray:
        return self.act(obs)

    def act(self, obs: np.ndarray) -> np.ndarray:
        raise NotImplementedError

    def reset(self):
        """Called at the start of each episode."""
        pass

    def _make_action(self, left=0, right=0, jump=0, dash=0) -> np.ndarray:
        return np.array([left, right, jump, dash], dtype=np.int8)


class RandomPolicy(BasePolicy):
    """Random actions each step.

    Broad state coverage, many deaths, good baseline.
    """

    name = "random"

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng or np.random.default_rng()

    def act(self, obs):
        direction = self.rng.integers(-1, 2)
        jump = int(self.rng.random() < 0.15)  # 15% jump chance per step
        dash = int(self.rng.random() < 0.02)
        return self._make_action(left=int(direction < 0), right=int(direction > 0), jump=jump, dash=dash)


class RushPolicy(BasePolicy):
    """Always move right, jump when stalled or on a timer, dash when ready.

    Fast runs, misses treasure, dies often.
    """

    name = "rush"

    def __init__(self, jump_interval: int = 25):
        self.jump_interval = jump_interval
        self._step = 0

    def reset(self):
        self._step = 0

    def act(self, obs):
        vx = obs[OBS_VX]
        grounded = obs[OBS_GROUNDED] > 0.5
        dash_ready = obs[OBS_DASH_READY] > 0.5

        self._step += 1

        # Jump if: on ground AND (periodic timer OR horizontal speed stalled)
        should_jump = grounded and (
            self._step % self.jump_interval == 0
            or abs(vx) < 1.0
        )
        should_dash = dash_ready and not grounded

        return self._make_action(right=1, jump=int(should_jump), dash=int(should_dash))


class WaypointPolicy(BasePolicy):
    """Hold right and jump from the ground at given x positions.

    Waypoints are consumed in order; once they run out the policy just
    walks right. With the default waypoints this clears level 1 and
    collects every treasure on the way.
    """

    name = "waypoint"

    LEVEL_1_WAYPOINTS = (90.0, 235.0, 450.0, 640.0)

    def __init__(self, waypoints: Optional[Iterable[float]] = None):
        self.waypoints = tuple(waypoints if waypoints is not None else self.LEVEL_1_WAYPOINTS)
        self._pending = list(self.waypoints)

    def reset(self):
        self._pending = list(self.waypoints)

    def act(self, obs):
        x = obs[OBS_X]
        grounded = obs[OBS_GROUNDED] > 0.5

        jump = 0
        if grounded and self._pending and x >= self._pending[0]:
            self._pending.pop(0)
            jump = 1
        return self._make_action(right=1, jump=jump)


POLICIES = {
    "random": RandomPolicy,
    "rush": RushPolicy,
    "waypoint": WaypointPolicy,
}
