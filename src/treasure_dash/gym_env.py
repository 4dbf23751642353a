"""Gymnasium environment wrapper for the platformer.

Runs a GameSession headlessly, one session tick per env step. Observations
are a structured state vector; RGB frames are rendered only on request.
"""

from typing import Any, Dict, Optional

import gymnasium
import numpy as np
import pygame
from gymnasium import spaces

from .config import GameConfig
from .controls import InputState
from .events import GameEvent
from .render import Renderer
from .session import GameSession, SessionState

STATE_SIZE = 12


class TreasureDashEnv(gymnasium.Env):
    """Gymnasium wrapper for the platformer.

    Observation space: float32 array of shape (12,) containing:
        [0-1] player position (x, y), top-left corner
        [2-3] player velocity (vx, vy)
        [4]   player grounded (0/1)
        [5]   dash ready (0/1)
        [6]   player alive (0/1)
        [7]   score
        [8]   seconds remaining
        [9]   level index
        [10-11] offset from player to goal (dx, dy)

    Action space: MultiBinary(4) = [left, right, jump, dash]. Jump and dash
    act as "pressed this step".

    Reward = weighted sum of raw signals (stored in info['reward_signals']):
        score: points gained this step
        goal:  1.0 when the level is finished
        death: 1.0 on the step the player dies
        step:  1.0 every step
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 60}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        level_index: int = 1,
        max_episode_steps: int = 3000,
        reward_weights: Optional[Dict[str, float]] = None,
    ):
        super().__init__()

        self.config = config or GameConfig()
        self.render_mode = render_mode
        self.level_index = level_index
        self.max_episode_steps = max_episode_steps

        self.reward_weights = reward_weights or {
            "score": 0.01,
            "goal": 10.0,
            "death": -5.0,
            "step": -0.001,
        }

        self.action_space = spaces.MultiBinary(4)
        self.observation_space = spaces.Box(
            low=-np.inf, high=np.inf, shape=(STATE_SIZE,), dtype=np.float32,
        )

        self._session: Optional[GameSession] = None
        self._episode_steps = 0
        self._prev_score = 0

        self._renderer: Optional[Renderer] = None
        self._surface: Optional[pygame.Surface] = None
        if render_mode == "rgb_array":
            # Caller sets SDL_VIDEODRIVER for headless
            if not pygame.get_init():
                pygame.init()
            self._renderer = Renderer(self.config.screen_width, self.config.screen_height)
            self._surface = pygame.Surface((self.config.screen_width, self.config.screen_height))

    @property
    def session(self) -> Optional[GameSession]:
        return self._session

    def reset(self, *, seed=None, options=None):
        super().reset(seed=seed)
        options = options or {}

        level_seed = int(self.np_random.integers(0, 2**31))
        self._session = GameSession(self.config, seed=level_seed)
        self._session.start_game(options.get("level", self.level_index))

        self._episode_steps = 0
        self._prev_score = 0
        return self._get_obs(), self._get_info()

    def step(self, action):
        assert self._session is not None, "Must call reset() before step()"

        action = np.asarray(action).astype(bool).ravel()
        inputs = InputState(
            left=bool(action[0]), right=bool(action[1]),
            jump=bool(action[2]), dash=bool(action[3]),
        )
        events = self._session.tick(inputs)
        self._episode_steps += 1

        reward_signals = self._compute_rewards(events)
        reward = sum(
            self.reward_weights.get(k, 0.0) * v
            for k, v in reward_signals.items()
        )

        player = self._session.player
        terminated = (
            self._session.state is not SessionState.PLAYING
            or not player.alive
        )
        truncated = self._episode_steps >= self.max_episode_steps

        info = self._get_info()
        info["reward_signals"] = reward_signals
        info["events"] = [e.name.lower() for e in events]
        return self._get_obs(), float(reward), terminated, truncated, info

    def _compute_rewards(self, events) -> Dict[str, float]:
        score = self._session.player.score
        signals = {
            "score": float(score - self._prev_score),
            "goal": 1.0 if GameEvent.LEVEL_COMPLETE in events or GameEvent.WON in events else 0.0,
            "death": 1.0 if GameEvent.DEATH in events else 0.0,
            "step": 1.0,
        }
        self._prev_score = score
        return signals

    def _get_obs(self) -> np.ndarray:
        state = np.zeros(STATE_SIZE, dtype=np.float32)
        session = self._session
        player = session.player
        if player is None:
            return state

        body = player.body
        state[0] = body.x
        state[1] = body.y
        state[2] = body.velocity.x
        state[3] = body.velocity.y
        state[4] = float(body.on_ground)
        state[5] = float(player.dash_ready)
        state[6] = float(player.alive)
        state[7] = float(player.score)
        state[8] = session.time_remaining
        state[9] = float(session.current_level_index)
        goal = session.level.goal.body
        state[10] = goal.x - body.x
        state[11] = goal.y - body.y
        return state

    def _get_info(self) -> Dict[str, Any]:
        info = self._session.get_state()
        info["episode_steps"] = self._episode_steps
        return info

    def render(self):
        if self.render_mode != "rgb_array" or self._session is None:
            return None
        self._renderer.draw(self._surface, self._session, hud=False)
        # surfarray gives (W, H, 3); transpose to (H, W, 3)
        array = pygame.surfarray.array3d(self._surface)
        return np.transpose(array, (1, 0, 2)).astype(np.uint8)

    def close(self):
        self._surface = None
        self._renderer = None
