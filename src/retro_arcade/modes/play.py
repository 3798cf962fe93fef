import logging
from pathlib import Path

import numpy as np
import pygame
from hydra.core.hydra_config import HydraConfig
from omegaconf import DictConfig, OmegaConf

from retro_arcade.core.constants import GameState
from retro_arcade.engine.audio import MixerAudio
from retro_arcade.engine.draw import draw_text
from retro_arcade.engine.input import KeyboardInput
from retro_arcade.engine.loop import FrameScheduler
from retro_arcade.registry import GameLoader
from retro_arcade.utils import close_handlers, setup_logging

log = logging.getLogger(__name__)

RESUME_KEYS = (pygame.K_ESCAPE, pygame.K_p, pygame.K_RETURN)
RESTART_KEYS = (pygame.K_RETURN, pygame.K_SPACE)


def create_window(size: tuple[int, int], title: str) -> pygame.Surface:
    try:
        pygame.init()
        if not pygame.display.get_init():
            pygame.display.init()
        screen = pygame.display.set_mode(size)
        pygame.display.set_caption(title)
        return screen
    except pygame.error as e:
        raise RuntimeError(
            f"Failed to initialize pygame: {e}. Make sure you have a display available."
        ) from e


def game_overrides(cfg: DictConfig, game_id: str) -> dict:
    """Per-game config overrides from cfg.games.<id>, empty when absent."""
    games = cfg.get("games") or {}
    overrides = games.get(game_id)
    if overrides is None:
        return {}
    return OmegaConf.to_container(overrides, resolve=True)


def _draw_overlay(screen: pygame.Surface, title: str, subtitle: str) -> None:
    width, height = screen.get_size()
    shade = pygame.Surface((width, height), pygame.SRCALPHA)
    shade.fill((0, 0, 0, 160))
    screen.blit(shade, (0, 0))
    draw_text(screen, title, (width / 2, height / 2 - 20), size=48, align="center")
    draw_text(screen, subtitle, (width / 2, height / 2 + 25), size=24, align="center")


def play(cfg: DictConfig) -> None:
    """
    Run one game in a pygame window with keyboard control.

    The frame scheduler is pumped from the pygame clock. Pause/Enter resumes
    a paused game; Enter/Space restarts after game over.

    Args:
        cfg: Configuration containing:
            - game: Registry id of the game to play.
            - window: Width and height in pixels.
            - fps: Host frame rate cap.
            - seed: RNG seed, random when null.
            - log_level: Logging level.
            - audio: Sound directory, volume and mute flag.
            - games: Optional per-game config overrides.
    """
    try:
        log_dir = Path(HydraConfig.get().runtime.output_dir)
    except ValueError:
        log_dir = None
    logger = setup_logging("play", level=cfg.log_level, log_dir=log_dir)

    screen = create_window((cfg.window.width, cfg.window.height), "Retro Arcade")
    scheduler = FrameScheduler(start_time=pygame.time.get_ticks())
    loader = GameLoader(
        screen,
        KeyboardInput(),
        audio=MixerAudio(cfg.audio.sound_dir, cfg.audio.volume, cfg.audio.muted),
        scheduler=scheduler,
        rng=np.random.default_rng(cfg.seed),
    )

    game = loader.load(cfg.game, overrides=game_overrides(cfg, cfg.game))
    game.on_game_over(lambda score: log.info(f"{game.info.title} final score: {score}"))
    pygame.display.set_caption(f"Retro Arcade - {game.info.title}")
    game.start()

    clock = pygame.time.Clock()
    running = True
    try:
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if game.state == GameState.PAUSED and event.key in RESUME_KEYS:
                        game.resume()
                    elif game.state == GameState.GAMEOVER and event.key in RESTART_KEYS:
                        game.start()

            clock.tick(cfg.fps)
            scheduler.run_frame(pygame.time.get_ticks())

            if game.state == GameState.PAUSED:
                game.render(screen)
                _draw_overlay(screen, "PAUSED", "Press Escape to resume")
            elif game.state == GameState.GAMEOVER:
                game.render(screen)
                _draw_overlay(screen, "GAME OVER", f"Score {game.score} - Enter to play again")

            pygame.display.flip()
    finally:
        loader.unload()
        pygame.quit()
        close_handlers(logger)
