"""
Pygame rendering for Pac-Man.

The maze is scaled to fit the surface with a HUD strip on top.
"""

from typing import TYPE_CHECKING

import numpy as np
import pygame

from retro_arcade.engine.draw import WHITE, draw_text

from .maze import WALL

if TYPE_CHECKING:
    from .entities import Ghost
    from .game import Pacman

BACKGROUND = (10, 10, 15)
WALL_COLOR = (33, 33, 222)
GATE_COLOR = (255, 184, 222)
DOT_COLOR = (255, 184, 151)
PACMAN_COLOR = (255, 255, 0)
FRIGHTENED_COLOR = (33, 33, 255)
FLASH_COLOR = (255, 255, 255)
FRUIT_COLOR = (255, 0, 0)

HUD_HEIGHT = 40


def _layout(surface: pygame.Surface, game: "Pacman") -> tuple[float, float, float]:
    """Tile size and top-left offset of the maze on this surface."""
    width, height = surface.get_size()
    tile = min(width / game.maze.cols, (height - HUD_HEIGHT) / game.maze.rows)
    offset_x = (width - tile * game.maze.cols) / 2
    return tile, offset_x, float(HUD_HEIGHT)


def _ghost_color(ghost: "Ghost", game: "Pacman") -> tuple[int, int, int]:
    if not ghost.frightened:
        return ghost.color
    # Flash during the last stretch of the frightened window
    remaining = game.frightened_timer
    if remaining < game.config.frightened_flash_time and int(remaining // 200) % 2 == 0:
        return FLASH_COLOR
    return FRIGHTENED_COLOR


def _draw_ghost(surface: pygame.Surface, ghost: "Ghost", game: "Pacman", center: tuple[float, float], r: float) -> None:
    x, y = center
    if not ghost.eaten:
        color = _ghost_color(ghost, game)
        pygame.draw.circle(surface, color, (int(x), int(y)), int(r))
        pygame.draw.rect(surface, color, pygame.Rect(x - r, y, 2 * r, r))

    # Eyes look along the direction of travel; eaten ghosts are only eyes
    dx, dy = ghost.direction
    for side in (-1, 1):
        eye = (int(x + side * r * 0.4), int(y - r * 0.2))
        pygame.draw.circle(surface, WHITE, eye, max(int(r * 0.3), 1))
        pupil = (int(eye[0] + dx * r * 0.12), int(eye[1] + dy * r * 0.12))
        pygame.draw.circle(surface, (0, 0, 80), pupil, max(int(r * 0.15), 1))


def _draw_pacman(surface: pygame.Surface, game: "Pacman", center: tuple[float, float], r: float) -> None:
    pacman = game.pacman
    mouth = pacman.mouth_angle * np.pi
    dx, dy = pacman.direction if pacman.direction != (0, 0) else (1, 0)
    facing = np.arctan2(dy, dx)

    angles = np.linspace(facing + mouth, facing + 2 * np.pi - mouth, 24)
    points = [center] + [(center[0] + r * np.cos(a), center[1] + r * np.sin(a)) for a in angles]
    pygame.draw.polygon(surface, PACMAN_COLOR, points)


def draw_pacman(surface: pygame.Surface, game: "Pacman") -> None:
    """
    Draw the full Pac-Man frame.

    Args:
        surface: Target surface.
        game: Session to draw.
    """
    surface.fill(BACKGROUND)
    tile, ox, oy = _layout(surface, game)
    maze = game.maze

    def center_of(x: float, y: float) -> tuple[float, float]:
        return ox + (x + 0.5) * tile, oy + (y + 0.5) * tile

    rows, cols = np.nonzero(maze.grid == WALL)
    for row, col in zip(rows, cols):
        pygame.draw.rect(surface, WALL_COLOR, pygame.Rect(ox + col * tile, oy + row * tile, tile, tile), 1)

    for col, row in maze.gates:
        x, y = center_of(col, row)
        pygame.draw.line(surface, GATE_COLOR, (x - tile / 2, y), (x + tile / 2, y), 2)

    for dot in game.dots:
        if not dot.eaten:
            pygame.draw.circle(surface, DOT_COLOR, center_of(dot.col, dot.row), max(tile * 0.1, 1))

    # Power pellets blink
    if (game.ticks // 15) % 2 == 0:
        for pellet in game.pellets:
            if not pellet.eaten:
                pygame.draw.circle(surface, DOT_COLOR, center_of(pellet.col, pellet.row), tile * 0.3)

    if game.fruit is not None:
        pygame.draw.circle(surface, FRUIT_COLOR, center_of(game.fruit.col, game.fruit.row), tile * 0.35)

    _draw_pacman(surface, game, center_of(game.pacman.x, game.pacman.y), tile * 0.45)
    for ghost in game.ghosts:
        _draw_ghost(surface, ghost, game, center_of(ghost.x, ghost.y), tile * 0.45)

    width = surface.get_width()
    draw_text(surface, f"SCORE: {game.score}", (10, HUD_HEIGHT / 2), size=24)
    draw_text(surface, f"LEVEL {game.level}", (width / 2, HUD_HEIGHT / 2), size=24, align="center")
    draw_text(surface, f"LIVES: {game.lives}", (width - 10, HUD_HEIGHT / 2), size=24, align="right")
