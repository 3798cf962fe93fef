import gymnasium as gym
import numpy as np
import pygame
from gymnasium import spaces

from retro_arcade.core.constants import CONTROLS, Control, GameState
from retro_arcade.engine.input import InputState
from retro_arcade.registry import create_game

# Pause/start belong to the host shell, not the agent
ACTION_CONTROLS: tuple[Control, ...] = tuple(c for c in CONTROLS if c not in (Control.PAUSE, Control.START))


class ArcadeEnv(gym.Env):
    """
    Gymnasium wrapper around a registered game session.

    Each step holds the controls whose action bit is set and advances the
    session by frame_skip fixed ticks. The reward is the score gained.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 60}

    def __init__(
        self,
        game_id: str = "asteroids",
        render_mode: str | None = None,
        world_size: tuple[int, int] = (800, 600),
        frame_skip: int = 1,
        overrides: dict | None = None,
    ):
        super().__init__()
        assert render_mode is None or render_mode in self.metadata["render_modes"]
        assert frame_skip >= 1, "frame_skip must be at least 1"

        self.game_id = game_id
        self.render_mode = render_mode
        self.world_size = world_size
        self.frame_skip = frame_skip
        self.overrides = overrides

        self.surface = pygame.Surface(world_size)
        self.input = InputState()
        self.game = create_game(
            game_id,
            self.surface,
            self.input,
            rng=self.np_random,
            overrides=overrides,
        )
        self.last_score = 0

    @property
    def action_space(self) -> spaces.Space:
        return spaces.MultiBinary(len(ACTION_CONTROLS))

    @property
    def observation_space(self) -> spaces.Space:
        """[score, lives, level]"""
        return spaces.Box(low=0.0, high=np.inf, shape=(3,), dtype=np.float32)

    def _get_obs(self) -> np.ndarray:
        return np.array([self.game.score, self.game.lives, self.game.level], dtype=np.float32)

    def reset(self, *, seed: int | None = None, options: dict | None = None) -> tuple[np.ndarray, dict]:
        super().reset(seed=seed)

        self.game.rng = self.np_random
        self.input.release_all()
        self.input.update()
        self.game.reset()
        self.game.start()
        self.last_score = self.game.score

        return self._get_obs(), self.game.get_state()

    def step(self, action) -> tuple[np.ndarray, float, bool, bool, dict]:
        action = np.asarray(action)
        self.input.set_held(control for control, bit in zip(ACTION_CONTROLS, action) if bit)

        for _ in range(self.frame_skip):
            if self.game.state != GameState.RUNNING:
                break
            self.game.tick()

        reward = float(self.game.score - self.last_score)
        self.last_score = self.game.score
        terminated = self.game.state == GameState.GAMEOVER

        return self._get_obs(), reward, terminated, False, self.game.get_state()

    def render(self) -> np.ndarray | None:
        if self.render_mode != "rgb_array":
            return None
        self.game.render(self.surface)
        # surfarray is (width, height, 3)
        return np.transpose(pygame.surfarray.array3d(self.surface), (1, 0, 2))

    def close(self):
        self.game.destroy()
