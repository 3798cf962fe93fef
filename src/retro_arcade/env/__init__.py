from .arcade_env import ACTION_CONTROLS, ArcadeEnv

__all__ = ["ACTION_CONTROLS", "ArcadeEnv"]
