"""Interactive pygame host.

Owns the window, the clock and the real input devices. Each frame it turns
keyboard events into an InputState through the key bindings, runs one
session tick, advances particles and draws.
"""

from typing import Optional, Set

import numpy as np
import pygame

from .audio import ToneAudio
from .config import GameConfig
from .controls import InputState, KeyBindings
from .events import AudioSink
from .particles import ParticleSystem
from .render import Renderer
from .session import GameSession, SessionState


def key_identifier(key: int) -> str:
    """Normalize a pygame key code to a binding identifier ("left shift" -> "shift")."""
    name = pygame.key.name(key).lower()
    for modifier in ("shift", "ctrl", "alt"):
        if name in (f"left {modifier}", f"right {modifier}"):
            return modifier
    return name


class PlatformerEngine:
    """Main game engine coordinating session, input, audio and rendering.

    Handles:
    - Game loop with fixed timestep (one tick per frame)
    - Keyboard input through remappable bindings
    - Menu / pause / retry / next-level commands
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        bindings: Optional[KeyBindings] = None,
        audio: Optional[AudioSink] = None,
        seed: Optional[int] = None,
    ):
        """Initialize game engine.

        Args:
            config: Game configuration. Uses defaults if None.
            bindings: Key bindings. Loaded from the default path if None.
            audio: Cue sink. A ToneAudio if None.
            seed: Seed for generated levels and particles
        """
        self.config = config or GameConfig()
        self.bindings = bindings if bindings is not None else KeyBindings()
        self.audio = audio if audio is not None else ToneAudio()

        pygame.init()
        self.screen = pygame.display.set_mode(
            (self.config.screen_width, self.config.screen_height)
        )
        pygame.display.set_caption("Treasure Dash")
        self.clock = pygame.time.Clock()

        self.particles = ParticleSystem(rng=np.random.default_rng(seed))
        self.session = GameSession(
            self.config, audio=self.audio, particles=self.particles, seed=seed,
        )
        self.renderer = Renderer(self.config.screen_width, self.config.screen_height)

        self.running = False
        self._held: Set[str] = set()
        self._pressed: Set[str] = set()

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                self.key_down(key_identifier(event.key))
            elif event.type == pygame.KEYUP:
                self.key_up(key_identifier(event.key))

    def key_down(self, key: str) -> None:
        if key == "f2":
            if isinstance(self.audio, ToneAudio):
                print(f"Sound {'on' if self.audio.toggle() else 'off'}")
            return
        if self._handle_command(key):
            return
        self._held.add(key)
        self._pressed.add(key)

    def key_up(self, key: str) -> None:
        self._held.discard(key)

    def _handle_command(self, key: str) -> bool:
        """Menu/pause commands. Returns True when the key was consumed."""
        session = self.session
        state = session.state

        if state is SessionState.MENU:
            if key == "return":
                self.start()
            elif key == "escape":
                self.running = False
            return True

        if state is SessionState.PLAYING:
            if key == "escape":
                session.pause()
            elif key == "tab":
                self._restart()
            else:
                return False
            return True

        if key == "backspace":
            session.go_to_menu()
            self.particles.clear()
        elif state is SessionState.PAUSED:
            if key == "escape":
                session.resume()
            elif key == "tab":
                self._restart()
        elif state is SessionState.LEVEL_COMPLETE:
            if key == "return":
                self.particles.clear()
                if session.next_level():
                    print(f"LEVEL {session.current_level_index}: time limit {session.level.time_limit:.0f}s")
            elif key == "tab":
                self._restart()
        elif state is SessionState.GAME_OVER:
            if key in ("return", "tab"):
                self._restart()
        elif state is SessionState.WON:
            if key == "return":
                self.start()
        return True

    def _restart(self) -> None:
        self.particles.clear()
        self.session.retry_level()

    def start(self, level_index: int = 1) -> None:
        """Start a new run."""
        self.particles.clear()
        self._held.clear()
        self._pressed.clear()
        self.session.start_game(level_index)
        print(f"LEVEL {level_index}: time limit {self.session.level.time_limit:.0f}s")

    def poll_input(self) -> InputState:
        """Snapshot logical input and reset the pressed-this-frame set."""
        state = self.bindings.resolve(self._held, self._pressed)
        self._pressed.clear()
        return state

    # ------------------------------------------------------------------
    # Loop
    # ------------------------------------------------------------------

    def update(self) -> None:
        """Advance one frame of simulation."""
        inputs = self.poll_input()
        if self.session.state is not SessionState.PLAYING:
            return
        self.session.tick(inputs)
        self.particles.update()

    def render(self) -> None:
        self.renderer.draw(self.screen, self.session, self.particles)
        pygame.display.flip()

    def run(self) -> None:
        """Main game loop."""
        self.running = True
        while self.running:
            self.handle_events()
            self.update()
            self.render()
            self.clock.tick(self.config.fps)
        pygame.quit()
