"""Game session: the per-tick simulation loop and level/game state machine.

A GameSession is created once per run and passed to whoever drives it. The
host calls tick() once per display frame; nothing else mutates simulation
state. Within a tick the stages always run in this order, because each one
consumes the positions and velocities produced by the previous one:

    input -> physics -> collision -> treasure -> goal -> timer
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from .collision import CollisionReport, resolve_platform_collisions
from .config import GameConfig
from .controls import InputState
from .entities import Player
from .events import AudioSink, Cue, GameEvent, NullEmitter, ParticleEmitter, SilentAudio
from .level_gen import Level, LevelGenerator
from .physics import Vector2, overlaps


# Particle colours (RGB)
COLOR_DASH = (0, 212, 255)
COLOR_LAND = (102, 126, 234)
COLOR_TREASURE = (255, 255, 0)
COLOR_SPIKE = (255, 0, 85)
COLOR_FALL = (0, 212, 255)

# Landings faster than this (px/tick) throw up dust
HARD_LANDING_SPEED = 2.0


class SessionState(Enum):
    MENU = "menu"
    PLAYING = "playing"
    PAUSED = "paused"
    LEVEL_COMPLETE = "level_complete"
    GAME_OVER = "game_over"
    WON = "won"


class GameSession:
    """Owns the current level and player and advances them tick by tick.

    `state` is the single source of truth for whether tick() does anything.
    Commands that do not apply to the current state return False and change
    nothing.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        audio: Optional[AudioSink] = None,
        particles: Optional[ParticleEmitter] = None,
        seed: Optional[int] = None,
    ):
        """Create a session sitting at the menu.

        Args:
            config: Game configuration. Uses defaults if None.
            audio: Cue sink. Silent if None.
            particles: Particle sink. Discards requests if None.
            seed: Seed for generated layouts and cosmetic phases
        """
        self.config = config or GameConfig()
        self.audio = audio if audio is not None else SilentAudio()
        self.particles = particles if particles is not None else NullEmitter()
        self.generator = LevelGenerator(self.config, seed=seed)

        self.state = SessionState.MENU
        self.current_level_index = 1
        self.ticks = 0
        self.level: Optional[Level] = None
        self.player: Optional[Player] = None

        self.level_scores: Dict[int, int] = {}
        self.death_cause: Optional[str] = None
        self.game_over_reason: Optional[str] = None  # "time" or "death"

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def elapsed_seconds(self) -> float:
        """Seconds spent in the current level (ticks / fps)."""
        return self.ticks / self.config.fps

    @property
    def time_remaining(self) -> float:
        if self.level is None:
            return 0.0
        return max(self.level.time_limit - self.elapsed_seconds, 0.0)

    @property
    def is_final_level(self) -> bool:
        return self.current_level_index >= self.config.max_levels

    @property
    def total_score(self) -> int:
        """Sum of the scores banked by completed levels."""
        return sum(self.level_scores.values())

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def start_game(self, level_index: int = 1) -> None:
        """Start a fresh run (from any state) at the given level."""
        self._load_level(level_index)
        self.level_scores = {}
        self.state = SessionState.PLAYING

    def pause(self) -> bool:
        if self.state is not SessionState.PLAYING:
            return False
        self.state = SessionState.PAUSED
        return True

    def resume(self) -> bool:
        if self.state is not SessionState.PAUSED:
            return False
        self.state = SessionState.PLAYING
        return True

    def toggle_pause(self) -> bool:
        """Pause when playing, resume when paused."""
        return self.pause() or self.resume()

    def retry_level(self) -> bool:
        """Rebuild the current level from scratch and play it again."""
        if self.state is SessionState.MENU:
            return False
        self.level_scores.pop(self.current_level_index, None)
        self._load_level(self.current_level_index)
        self.state = SessionState.PLAYING
        return True

    def next_level(self) -> bool:
        """Advance after a completed level; past the last level the game is won."""
        if self.state is not SessionState.LEVEL_COMPLETE:
            return False
        if self.is_final_level:
            self.state = SessionState.WON
            return True
        self._load_level(self.current_level_index + 1)
        self.state = SessionState.PLAYING
        return True

    def go_to_menu(self) -> None:
        """Tear down the current run and return to the menu."""
        self.state = SessionState.MENU
        self.level = None
        self.player = None

    def _load_level(self, level_index: int) -> None:
        # Invalid indexes raise here, before any session state changes
        level = self.generator.build(level_index)
        self.current_level_index = level_index
        self.level = level
        self.player = Player(self.level.player_start, physics_config=self.config.physics)
        self.ticks = 0
        self.death_cause = None
        self.game_over_reason = None

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def tick(self, inputs: Optional[InputState] = None) -> List[GameEvent]:
        """Advance the simulation by one tick.

        Args:
            inputs: Input snapshot for this tick. No input if None.

        Returns:
            Events raised during the tick, in order.
        """
        if self.state is not SessionState.PLAYING:
            return []
        assert self.level is not None and self.player is not None, "playing without a level"

        events: List[GameEvent] = []
        self.ticks += 1

        self._apply_input(inputs or InputState(), events)

        self.player.update()
        self.level.update()

        report = resolve_platform_collisions(
            self.player,
            self.level.platforms,
            self.config.screen_width,
            self.config.screen_height,
        )
        self._handle_collisions(report, events)

        self._collect_treasure(events)
        self._check_goal(events)
        self._check_timer(events)
        return events

    def _apply_input(self, inputs: InputState, events: List[GameEvent]) -> None:
        player = self.player
        if not player.alive:
            return

        if inputs.left:
            player.move(-1)
        if inputs.right:
            player.move(1)

        if inputs.jump and player.jump():
            events.append(GameEvent.JUMP)
            self.audio.play(Cue.JUMP)

        # After movement so walking speed does not overwrite the dash
        if inputs.dash and player.dash(player.direction):
            events.append(GameEvent.DASH)
            self.audio.play(Cue.DASH)
            self.particles.emit(player.body.center, 15, COLOR_DASH, 4)

    def _handle_collisions(self, report: CollisionReport, events: List[GameEvent]) -> None:
        player = self.player
        body = player.body

        if report.landed and report.landing_speed > HARD_LANDING_SPEED:
            events.append(GameEvent.LAND)
            self.particles.emit(Vector2(body.center.x, body.bottom), 8, COLOR_LAND, 2)

        if report.death_cause is None:
            return

        self.death_cause = report.death_cause
        events.append(GameEvent.DEATH)
        if report.death_cause == "spike":
            self.audio.play(Cue.DAMAGE)
            self.particles.emit(body.center, 20, COLOR_SPIKE, 5)
        else:
            self.particles.emit(Vector2(body.center.x, self.config.screen_height), 25, COLOR_FALL, 6)

        if self.config.death_ends_run:
            self._game_over("death", events)

    def _collect_treasure(self, events: List[GameEvent]) -> None:
        player = self.player
        if not player.alive:
            return

        for collectible in list(self.level.collectibles):
            if not overlaps(player.body, collectible.body):
                continue
            if not collectible.collect():
                continue
            player.score += self.config.collectible_value
            self.level.remove_collectible(collectible)
            events.append(GameEvent.COLLECT)
            self.audio.play(Cue.COLLECTIBLE)
            self.particles.emit(collectible.body.center, 15, COLOR_TREASURE, 4)

    def _check_goal(self, events: List[GameEvent]) -> None:
        if self.state is not SessionState.PLAYING or not self.player.alive:
            return
        if not overlaps(self.player.body, self.level.goal.body):
            return

        self.level_scores[self.current_level_index] = self.player.score
        self.audio.play(Cue.LEVEL_COMPLETE)
        if self.is_final_level:
            self.state = SessionState.WON
            events.append(GameEvent.WON)
        else:
            self.state = SessionState.LEVEL_COMPLETE
            events.append(GameEvent.LEVEL_COMPLETE)

    def _check_timer(self, events: List[GameEvent]) -> None:
        if self.state is not SessionState.PLAYING:
            return
        if self.elapsed_seconds > self.level.time_limit:
            self.audio.play(Cue.DAMAGE)
            self._game_over("time", events)

    def _game_over(self, reason: str, events: List[GameEvent]) -> None:
        self.state = SessionState.GAME_OVER
        self.game_over_reason = reason
        events.append(GameEvent.GAME_OVER)

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    def get_state(self) -> Dict[str, Any]:
        """Get current session state for UI display and logging."""
        state: Dict[str, Any] = {
            "state": self.state.value,
            "level": self.current_level_index,
            "elapsed_seconds": self.elapsed_seconds,
            "total_score": self.total_score,
            "death_cause": self.death_cause,
            "game_over_reason": self.game_over_reason,
        }
        if self.level is not None:
            state["time_limit"] = self.level.time_limit
            state["collectibles_left"] = len(self.level.collectibles)
        if self.player is not None:
            state["score"] = self.player.score
            state["alive"] = self.player.alive
            state["player_position"] = tuple(self.player.position)
            state["player_velocity"] = tuple(self.player.velocity)
            state["player_grounded"] = self.player.on_ground
        return state
