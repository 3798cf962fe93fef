import os

# Headless pygame for every test
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import numpy as np
import pygame
import pytest

from retro_arcade.core.config import GameInfo
from retro_arcade.engine.input import InputState
from retro_arcade.engine.loop import FrameScheduler
from retro_arcade.engine.session import GameSession
from retro_arcade.games.asteroids import Asteroids
from retro_arcade.games.pacman import Pacman


class RecordingAudio:
    """Audio sink that remembers every cue it was asked to play."""

    def __init__(self):
        self.cues: list[str] = []

    def play(self, cue: str) -> None:
        self.cues.append(str(cue))


class CounterGame(GameSession):
    """Minimal session counting update and render calls."""

    info = GameInfo(id="counter", title="Counter", description="Counts ticks")

    def reset_game(self) -> None:
        self.updates = 0
        self.renders = 0

    def update(self, delta_time: float) -> None:
        self.updates += 1

    def render(self, surface: pygame.Surface) -> None:
        self.renders += 1


@pytest.fixture
def surface():
    """Return an off-screen 800x600 surface."""
    return pygame.Surface((800, 600))


@pytest.fixture
def controls():
    return InputState()


@pytest.fixture
def audio():
    return RecordingAudio()


@pytest.fixture
def scheduler():
    return FrameScheduler()


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def counter_game(surface, controls, audio, scheduler):
    game = CounterGame(surface, controls, audio=audio, scheduler=scheduler)
    game.init()
    return game


@pytest.fixture
def asteroids(surface, controls, audio, scheduler, rng):
    game = Asteroids(surface, controls, audio=audio, scheduler=scheduler, rng=rng)
    game.init()
    return game


@pytest.fixture
def pacman(surface, controls, audio, scheduler, rng):
    game = Pacman(surface, controls, audio=audio, scheduler=scheduler, rng=rng)
    game.init()
    return game
