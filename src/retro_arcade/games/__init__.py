from .asteroids import Asteroids
from .pacman import Pacman

__all__ = ["Asteroids", "Pacman"]
