"""
Base game session: lifecycle state machine and fixed-timestep game loop.

Every game subclasses GameSession and supplies update/render plus a
reset_game hook that (re)builds its entities. Lifecycle methods are
implemented once here; calling one in a state where it does not apply is a
silent no-op so that hosting shells never need to check state first.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, ClassVar

import numpy as np
import pygame

from retro_arcade.core.config import GameInfo, SessionConfig
from retro_arcade.core.constants import Control, GameState, SoundCue
from retro_arcade.engine.audio import AudioSink, NullAudio
from retro_arcade.engine.input import InputSource
from retro_arcade.engine.loop import FixedTimestep, FrameScheduler

log = logging.getLogger(__name__)

GameOverCallback = Callable[[int], None]


class GameSession(ABC):
    """
    Shared contract for all arcade games.

    Attributes:
        info: Static metadata for the menu and registry.
        config_class: Dataclass used when no config is passed in.
        state: Lifecycle state (idle, running, paused, gameover).
        score: Points accumulated since the last reset.
        lives: Remaining lives, never negative.
        level: Level/wave/round counter, starts at 1.
        ticks: Simulation ticks run since the last reset.
    """

    info: ClassVar[GameInfo] = GameInfo(
        id="base-game",
        title="Base Game",
        description="Base game class - do not use directly",
    )
    config_class: ClassVar[type[SessionConfig]] = SessionConfig

    def __init__(
        self,
        surface: pygame.Surface,
        input_source: InputSource,
        audio: AudioSink | None = None,
        scheduler: FrameScheduler | None = None,
        rng: np.random.Generator | None = None,
        config: SessionConfig | None = None,
    ) -> None:
        """
        Initialize a session. Entities are built by init()/reset().

        Args:
            surface: Drawing surface; its size is the playfield.
            input_source: Per-tick control state.
            audio: Cue player, silent when omitted.
            scheduler: Host frame scheduler.
            rng: Random source for every randomized element of the game.
            config: Game tuning, defaults to config_class().
        """
        self.surface = surface
        self.width, self.height = surface.get_size()
        self.input = input_source
        self.audio = audio if audio is not None else NullAudio()
        self.scheduler = scheduler if scheduler is not None else FrameScheduler()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.config = config if config is not None else self.config_class()

        self.state = GameState.IDLE
        self.score = 0
        self.lives = self.config.start_lives
        self.level = 1
        self.ticks = 0

        self.timestep = FixedTimestep(
            step=self.config.fixed_time_step,
            max_frame_delta=self.config.max_frame_delta,
        )
        self.frame_handle: int | None = None
        self._game_over_callback: GameOverCallback | None = None

    # ============ LIFECYCLE ============

    def init(self) -> None:
        """Build the initial game state. Called once after loading."""
        self.reset()

    def start(self) -> None:
        """idle/gameover -> running. Starting after a game over resets first."""
        if self.state in (GameState.RUNNING, GameState.PAUSED):
            return
        if self.state == GameState.GAMEOVER:
            self.reset()

        self.state = GameState.RUNNING
        self.timestep.clear()
        log.info(f"{self.info.id}: started")
        self.play_sound(SoundCue.GAME_START)
        self.game_loop(self.scheduler.now())

    def pause(self) -> None:
        if self.state != GameState.RUNNING:
            return
        self.state = GameState.PAUSED
        self._cancel_frame()
        log.debug(f"{self.info.id}: paused")

    def resume(self) -> None:
        if self.state != GameState.PAUSED:
            return
        self.state = GameState.RUNNING
        now = self.scheduler.now()
        self.timestep.restart(now)
        log.debug(f"{self.info.id}: resumed")
        self.game_loop(now)

    def reset(self) -> None:
        """Any state -> idle with fresh score, lives, level and entities."""
        self._cancel_frame()
        self.state = GameState.IDLE
        self.score = 0
        self.lives = self.config.start_lives
        self.level = 1
        self.ticks = 0
        self.timestep.clear()
        self.reset_game()

    def destroy(self) -> None:
        """Tear down before unloading; no further ticks or callbacks fire."""
        self.pause()
        self._cancel_frame()
        self._game_over_callback = None

    def game_over(self, final_score: int | None = None) -> None:
        """
        Transition to gameover and report the final score once.

        Args:
            final_score: Score to report, the current score when omitted.
        """
        if self.state == GameState.GAMEOVER:
            return
        self.state = GameState.GAMEOVER
        if final_score is not None:
            self.score = final_score
        self._cancel_frame()

        log.info(f"{self.info.id}: game over with score {self.score}")
        self.play_sound(SoundCue.GAME_OVER)

        if self._game_over_callback is not None:
            self._game_over_callback(self.score)

    def on_game_over(self, callback: GameOverCallback | None) -> None:
        self._game_over_callback = callback

    def _cancel_frame(self) -> None:
        self.scheduler.cancel_frame(self.frame_handle)
        self.frame_handle = None

    # ============ GAME LOOP ============

    def game_loop(self, current_time: float) -> None:
        """
        One host frame: run every whole tick banked, then render once.

        Args:
            current_time: Frame timestamp in milliseconds.
        """
        if self.state != GameState.RUNNING:
            return
        self.frame_handle = None

        self.timestep.accumulate(current_time)
        while self.state == GameState.RUNNING and self.timestep.consume():
            self.tick()

        self.render(self.surface)

        if self.state == GameState.RUNNING:
            self.frame_handle = self.scheduler.request_frame(self.game_loop)

    def tick(self) -> None:
        """Poll input and advance the simulation by one fixed step."""
        if self.state != GameState.RUNNING:
            return

        self.input.update()
        if self.input.is_just_pressed(Control.PAUSE):
            self.pause()
            return

        self.update(self.config.fixed_time_step)
        self.ticks += 1

    # ============ ABSTRACT METHODS ============

    @abstractmethod
    def update(self, delta_time: float) -> None:
        """
        Advance game logic by one tick.

        Args:
            delta_time: Tick length in milliseconds.
        """
        raise NotImplementedError("update() must be implemented by subclass")

    @abstractmethod
    def render(self, surface: pygame.Surface) -> None:
        """Draw the current entity state onto surface."""
        raise NotImplementedError("render() must be implemented by subclass")

    def reset_game(self) -> None:
        """Rebuild game-specific entities (optional override)."""
        pass

    # ============ HELPERS ============

    def add_score(self, points: int) -> None:
        self.score += points
        self.play_sound(SoundCue.SCORE)

    def lose_life(self) -> bool:
        """
        Lose a life, ending the game when none remain.

        Returns:
            True if play continues, False if the game is over.
        """
        self.lives = max(self.lives - 1, 0)
        self.play_sound(SoundCue.DEATH)

        if self.lives == 0:
            self.game_over()
            return False
        return True

    def next_level(self) -> None:
        self.level += 1
        self.play_sound(SoundCue.POWERUP)
        log.info(f"{self.info.id}: advanced to level {self.level}")

    def play_sound(self, cue: str) -> None:
        self.audio.play(cue)

    def clear(self, color: tuple[int, int, int] = (10, 10, 15)) -> None:
        self.surface.fill(color)

    @property
    def dimensions(self) -> tuple[int, int]:
        return self.width, self.height

    # ============ INSPECTION ============

    def get_state(self) -> dict[str, Any]:
        """
        Detached snapshot for external tooling; reading never mutates the game.

        Returns:
            Session fields merged with get_game_state().
        """
        return {
            "game_id": self.info.id,
            "state": str(self.state),
            "score": self.score,
            "lives": self.lives,
            "level": self.level,
            **self.get_game_state(),
        }

    def get_game_state(self) -> dict[str, Any]:
        """Game-specific entity snapshot (optional override)."""
        return {}
