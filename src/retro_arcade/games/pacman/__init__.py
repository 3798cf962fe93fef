from .game import Pacman

__all__ = ["Pacman"]
