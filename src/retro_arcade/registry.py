"""
Game registry and loader.

GAMES is the static id -> session class table the hosting shell picks from.
"""

import logging
from typing import Any

import numpy as np
import pygame

from retro_arcade.core.config import GameInfo
from retro_arcade.engine.audio import AudioSink
from retro_arcade.engine.input import InputSource
from retro_arcade.engine.loop import FrameScheduler
from retro_arcade.engine.session import GameSession
from retro_arcade.games import Asteroids, Pacman

log = logging.getLogger(__name__)

GAMES: dict[str, type[GameSession]] = {
    Asteroids.info.id: Asteroids,
    Pacman.info.id: Pacman,
}


def list_games() -> list[GameInfo]:
    return [game.info for game in GAMES.values()]


def get_game_class(game_id: str) -> type[GameSession]:
    if game_id not in GAMES:
        raise ValueError(f"Game not found: {game_id}. Available games: {sorted(GAMES)}")
    return GAMES[game_id]


def create_game(
    game_id: str,
    surface: pygame.Surface,
    input_source: InputSource,
    audio: AudioSink | None = None,
    scheduler: FrameScheduler | None = None,
    rng: np.random.Generator | None = None,
    overrides: dict[str, Any] | None = None,
) -> GameSession:
    """
    Build and initialize a registered game.

    Args:
        game_id: Registry id.
        surface: Drawing surface.
        input_source: Control state collaborator.
        audio: Cue player.
        scheduler: Host frame scheduler.
        rng: Random source.
        overrides: Config field overrides for the game's config class.

    Returns:
        An idle, initialized session.
    """
    game_class = get_game_class(game_id)
    config = game_class.config_class.from_overrides(overrides)
    game = game_class(
        surface,
        input_source,
        audio=audio,
        scheduler=scheduler,
        rng=rng,
        config=config,
    )
    game.init()
    log.info(f"Loaded {game_class.info.title}")
    return game


class GameLoader:
    """Holds the single active session; loading a game unloads the previous one."""

    def __init__(
        self,
        surface: pygame.Surface,
        input_source: InputSource,
        audio: AudioSink | None = None,
        scheduler: FrameScheduler | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.surface = surface
        self.input = input_source
        self.audio = audio
        self.scheduler = scheduler if scheduler is not None else FrameScheduler()
        self.rng = rng
        self.current: GameSession | None = None

    def load(self, game_id: str, overrides: dict[str, Any] | None = None) -> GameSession:
        get_game_class(game_id)
        self.unload()
        self.current = create_game(
            game_id,
            self.surface,
            self.input,
            audio=self.audio,
            scheduler=self.scheduler,
            rng=self.rng,
            overrides=overrides,
        )
        return self.current

    def unload(self) -> None:
        if self.current is None:
            return
        self.current.destroy()
        log.debug(f"Unloaded {self.current.info.id}")
        self.current = None
