"""Pygame drawing of a session.

The renderer only reads simulation state; it never mutates it. Both the
interactive engine and the gymnasium environment draw through it.
"""

import math
from typing import Optional, Tuple

import pygame

from .entities import PlatformKind
from .particles import PARTICLE_SIZE, ParticleSystem
from .session import GameSession, SessionState


# Colors (RGB)
COLOR_BG_TOP = (10, 31, 46)
COLOR_BG_BOTTOM = (26, 58, 82)
COLOR_GRID = (20, 42, 64)
COLOR_PLAYER = (0, 212, 255)
COLOR_TREASURE = (255, 255, 0)
COLOR_TEXT = (255, 255, 255)
COLOR_DIM = (200, 200, 200)

PLATFORM_COLORS = {
    PlatformKind.NORMAL: (102, 126, 234),
    PlatformKind.MOVING: (255, 170, 0),
    PlatformKind.SPIKE: (255, 0, 85),
    PlatformKind.GOAL: (0, 255, 136),
    PlatformKind.COLLECTIBLE_MARKER: (255, 255, 0),
}

STATE_TITLES = {
    SessionState.MENU: ("TREASURE DASH", "Enter = Start    Esc = Quit"),
    SessionState.PAUSED: ("PAUSED", "Esc = Resume    Tab = Restart    Backspace = Menu"),
    SessionState.LEVEL_COMPLETE: ("LEVEL COMPLETE!", "Enter = Next level    Tab = Retry    Backspace = Menu"),
    SessionState.GAME_OVER: ("TIME'S UP!", "Enter = Retry    Backspace = Menu"),
    SessionState.WON: ("GAME WON!", "Enter = Play again    Backspace = Menu"),
}


class Renderer:
    """Draws background, level, player, particles, HUD and overlays."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self._background = self._make_background()

        # Requires pygame.font to be initialised (pygame.init())
        self.hud_font = pygame.font.Font(None, 28)
        self.title_font = pygame.font.Font(None, 48)
        self.hint_font = pygame.font.Font(None, 24)

    def _make_background(self) -> pygame.Surface:
        surface = pygame.Surface((self.width, self.height))
        for y in range(self.height):
            t = y / max(self.height - 1, 1)
            color = tuple(
                int(a + (b - a) * t) for a, b in zip(COLOR_BG_TOP, COLOR_BG_BOTTOM)
            )
            pygame.draw.line(surface, color, (0, y), (self.width, y))
        for x in range(0, self.width, 50):
            pygame.draw.line(surface, COLOR_GRID, (x, 0), (x, self.height))
        return surface

    def draw(
        self,
        surface: pygame.Surface,
        session: GameSession,
        particles: Optional[ParticleSystem] = None,
        hud: bool = True,
    ) -> None:
        """Render the full frame onto surface."""
        surface.blit(self._background, (0, 0))

        if session.level is not None:
            self._draw_level(surface, session)
        if session.player is not None and session.player.alive:
            self._draw_player(surface, session)
        if particles is not None:
            self._draw_particles(surface, particles)

        if hud:
            if session.level is not None:
                self._draw_hud(surface, session)
            self._draw_overlay(surface, session)

    def _draw_level(self, surface: pygame.Surface, session: GameSession) -> None:
        for platform in session.level.platforms:
            left, top, right, bottom = platform.bounds
            rect = pygame.Rect(int(left), int(top), int(right - left), int(bottom - top))
            pygame.draw.rect(surface, PLATFORM_COLORS[platform.kind], rect)
            pygame.draw.rect(surface, COLOR_DIM, rect, width=1)

            if platform.kind is PlatformKind.SPIKE:
                for i in range(0, int(right - left), 15):
                    x = left + i
                    pygame.draw.polygon(surface, PLATFORM_COLORS[PlatformKind.SPIKE], [
                        (x, top), (x + 7, top - 8), (x + 14, top),
                    ])

        for collectible in session.level.collectibles:
            left, top, right, bottom = collectible.bounds
            cx = (left + right) / 2
            cy = (top + bottom) / 2 + math.sin(collectible.bob) * 3
            points = []
            for k in range(6):
                angle = collectible.spin + k * math.pi / 3
                points.append((cx + math.cos(angle) * 8, cy + math.sin(angle) * 7))
            pygame.draw.polygon(surface, COLOR_TREASURE, points)

    def _draw_player(self, surface: pygame.Surface, session: GameSession) -> None:
        player = session.player
        left, top, right, bottom = player.body.bounds
        rect = pygame.Rect(int(left), int(top), int(right - left), int(bottom - top))
        pygame.draw.rect(surface, player.visuals.color, rect)

        cx, cy = rect.center
        for dx in (-8, 8):
            pygame.draw.circle(surface, COLOR_TEXT, (cx + dx, cy - 10), 5)
            pygame.draw.circle(surface, (0, 0, 0), (cx + dx + player.direction, cy - 10), 2)

        if player.is_dashing:
            for i in range(3):
                pygame.draw.circle(surface, player.visuals.color, (cx, cy), 20 + i * 10, width=1)

    def _draw_particles(self, surface: pygame.Surface, particles: ParticleSystem) -> None:
        for (x, y), color, alpha in zip(particles.positions, particles.colors, particles.alpha):
            radius = max(int(PARTICLE_SIZE * alpha), 1)
            pygame.draw.circle(surface, tuple(int(c) for c in color), (int(x), int(y)), radius)

    def _draw_hud(self, surface: pygame.Surface, session: GameSession) -> None:
        score = session.player.score if session.player else 0
        text = (
            f"Level {session.current_level_index}  |  "
            f"Time: {int(session.elapsed_seconds)}s / {int(session.level.time_limit)}s  |  "
            f"Score: {score}"
        )
        text_surface = self.hud_font.render(text, True, COLOR_TREASURE)
        surface.blit(text_surface, text_surface.get_rect(topright=(self.width - 10, 10)))

    def _draw_overlay(self, surface: pygame.Surface, session: GameSession) -> None:
        titles = STATE_TITLES.get(session.state)
        if titles is None:
            return
        title, hint = titles
        if session.state is SessionState.GAME_OVER and session.game_over_reason == "death":
            title = "GAME OVER!"

        overlay = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 160))
        surface.blit(overlay, (0, 0))

        self._draw_centered(surface, title, self.title_font, COLOR_TEXT, -30)
        if session.state in (SessionState.LEVEL_COMPLETE, SessionState.WON):
            score = f"Score: {session.player.score}  |  Time: {int(session.elapsed_seconds)}s"
            self._draw_centered(surface, score, self.hud_font, COLOR_TREASURE, 10)
        self._draw_centered(surface, hint, self.hint_font, COLOR_DIM, 45)

    def _draw_centered(
        self, surface: pygame.Surface, text: str, font: pygame.font.Font, color: Tuple[int, int, int], dy: int,
    ) -> None:
        text_surface = font.render(text, True, color)
        surface.blit(text_surface, text_surface.get_rect(center=(self.width // 2, self.height // 2 + dy)))
