from .game import Asteroids

__all__ = ["Asteroids"]
