"""
Pygame rendering for Asteroids.

Reads entity state only; never mutates the session.
"""

from typing import TYPE_CHECKING

import numpy as np
import pygame

from retro_arcade.engine.draw import WHITE, draw_text

if TYPE_CHECKING:
    from .game import Asteroids

BACKGROUND = (10, 10, 15)
STAR_COLOR = (51, 51, 51)
VECTOR_COLOR = (5, 217, 232)
ROCK_COLOR = (127, 140, 141)
FLAME_COLOR = (255, 107, 53)
UFO_COLOR = (255, 42, 109)

NUM_STARS = 30


def _to_points(offsets: np.ndarray, rotation: float, center: complex) -> list[tuple[float, float]]:
    """Rotate complex offsets and translate them to screen points."""
    points = offsets * np.exp(1j * rotation) + center
    return [(p.real, p.imag) for p in points]


def _draw_ship(surface: pygame.Surface, game: "Asteroids") -> None:
    ship = game.ship
    size = game.config.ship_size
    hull = np.array([size, -0.7 * size - 0.6j * size, -0.4 * size, -0.7 * size + 0.6j * size])
    pygame.draw.polygon(surface, VECTOR_COLOR, _to_points(hull, ship.rotation, ship.position), 2)

    if ship.thrusting:
        flame = np.array([-0.4 * size - 0.3j * size, -0.9 * size, -0.4 * size + 0.3j * size])
        pygame.draw.lines(surface, FLAME_COLOR, False, _to_points(flame, ship.rotation, ship.position), 2)


def _draw_mini_ship(surface: pygame.Surface, x: float, y: float) -> None:
    hull = np.array([8, -5 - 4j, -3, -5 + 4j], dtype=np.complex128)
    pygame.draw.polygon(surface, VECTOR_COLOR, _to_points(hull, -np.pi / 2, complex(x, y)), 1)


def draw_asteroids(surface: pygame.Surface, game: "Asteroids") -> None:
    """
    Draw the full Asteroids frame.

    Args:
        surface: Target surface.
        game: Session to draw.
    """
    width, height = surface.get_size()
    surface.fill(BACKGROUND)

    for i in range(NUM_STARS):
        surface.fill(STAR_COLOR, ((i * 47) % width, (i * 83) % height, 2, 2))

    for asteroid in game.asteroids:
        points = _to_points(asteroid.vertices, asteroid.rotation, asteroid.position)
        pygame.draw.polygon(surface, ROCK_COLOR, points, 2)

    for bullet in game.bullets:
        pygame.draw.circle(surface, WHITE, (int(bullet.position.real), int(bullet.position.imag)), 3)

    for bullet in game.ufo_bullets:
        pygame.draw.circle(surface, UFO_COLOR, (int(bullet.position.real), int(bullet.position.imag)), 3)

    if game.ufo is not None:
        x, y, r = game.ufo.position.real, game.ufo.position.imag, game.ufo.radius
        pygame.draw.ellipse(surface, UFO_COLOR, pygame.Rect(x - r, y - 0.4 * r, 2 * r, 0.8 * r), 2)
        pygame.draw.ellipse(surface, UFO_COLOR, pygame.Rect(x - 0.5 * r, y - 0.5 * r, r, 0.6 * r), 2)

    # Blink while invincible
    if game.invincible_timer <= 0 or int(game.invincible_timer // 100) % 2 == 0:
        _draw_ship(surface, game)

    draw_text(surface, f"SCORE: {game.score}", (10, 30), size=24)
    draw_text(surface, f"WAVE {game.wave}", (width / 2, 30), size=24, align="center")
    for i in range(game.lives):
        _draw_mini_ship(surface, width - 30 - i * 25, 25)
