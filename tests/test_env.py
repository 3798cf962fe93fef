"""
Tests for the gymnasium wrapper.
"""

import numpy as np
import pytest

from retro_arcade.env import ACTION_CONTROLS, ArcadeEnv


@pytest.fixture(params=["asteroids", "pacman"])
def env(request):
    env = ArcadeEnv(game_id=request.param, render_mode="rgb_array")
    yield env
    env.close()


class TestArcadeEnv:
    def test_spaces(self, env):
        assert env.action_space.n == len(ACTION_CONTROLS)
        assert env.observation_space.shape == (3,)

    def test_reset(self, env):
        obs, info = env.reset(seed=42)
        assert obs.dtype == np.float32
        assert list(obs) == [0.0, 3.0, 1.0]
        assert info["state"] == "running"

    def test_step(self, env):
        env.reset(seed=0)
        action = np.zeros(len(ACTION_CONTROLS), dtype=np.int8)
        obs, reward, terminated, truncated, info = env.step(action)

        assert env.observation_space.contains(obs)
        assert reward >= 0.0
        assert not terminated
        assert not truncated
        assert env.game.ticks == 1

    def test_same_seed_same_rollout(self, env):
        rng = np.random.default_rng(3)
        actions = [rng.integers(0, 2, len(ACTION_CONTROLS)) for _ in range(30)]

        env.reset(seed=11)
        first = [env.step(a)[4] for a in actions][-1]
        env.reset(seed=11)
        second = [env.step(a)[4] for a in actions][-1]

        assert first == second

    def test_render_rgb_array(self, env):
        env.reset(seed=0)
        frame = env.render()
        assert frame.shape == (600, 800, 3)

    def test_frame_skip(self):
        env = ArcadeEnv(game_id="pacman", frame_skip=4)
        env.reset(seed=0)
        env.step(np.zeros(len(ACTION_CONTROLS), dtype=np.int8))
        assert env.game.ticks == 4
        assert env.render() is None
        env.close()

    def test_game_over_terminates(self, env):
        env.reset(seed=0)
        env.game.lives = 1
        env.game.lose_life()
        _, _, terminated, _, _ = env.step(np.zeros(len(ACTION_CONTROLS), dtype=np.int8))
        assert terminated
