"""Pytest configuration and shared fixtures."""

import os

# Ensure headless pygame for all tests
os.environ['SDL_VIDEODRIVER'] = 'dummy'
os.environ['SDL_AUDIODRIVER'] = 'dummy'

import pytest

from treasure_dash.config import GameConfig
from treasure_dash.session import GameSession


@pytest.fixture
def game_config():
    """Default game configuration."""
    return GameConfig()


@pytest.fixture
def session(game_config):
    """Session already playing level 1."""
    s = GameSession(game_config, seed=0)
    s.start_game(1)
    return s


@pytest.fixture
def bindings_path(tmp_path):
    """Throwaway key bindings file location."""
    return tmp_path / "keys.json"
