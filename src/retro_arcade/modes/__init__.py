from .list_games import list_available
from .play import play

__all__ = ["list_available", "play"]
