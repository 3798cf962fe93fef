"""Retro Arcade: fixed-timestep arcade game sessions on pygame."""

from .registry import GAMES, GameLoader, create_game, list_games

__all__ = ["GAMES", "GameLoader", "create_game", "list_games"]
