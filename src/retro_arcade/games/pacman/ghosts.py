"""
Ghost roster and targeting.

Chase targets are pure functions of the ghost's identity, Pac-Man's tile and
facing, and Blinky's tile, so each personality can be tested in isolation.
"""

from typing import Callable

import numpy as np

from retro_arcade.core.constants import DIRECTION_PRIORITY, LEFT, STILL, UP

from .entities import Direction, Ghost, opposite
from .maze import Maze

Tile = tuple[int, int]

# name: (color, home tile, start direction, scatter corner)
GHOST_ROSTER: dict[str, tuple[tuple[int, int, int], Tile, Direction, Tile]] = {
    "blinky": ((255, 42, 109), (10, 8), LEFT, (19, 0)),
    "pinky": ((255, 184, 222), (10, 10), UP, (2, 0)),
    "inky": ((5, 217, 232), (9, 10), UP, (19, 20)),
    "clyde": ((255, 107, 53), (11, 10), UP, (0, 20)),
}

PINKY_LOOKAHEAD = 4
INKY_LOOKAHEAD = 2


def create_ghosts() -> list[Ghost]:
    ghosts = []
    for name, (color, home, direction, corner) in GHOST_ROSTER.items():
        ghost = Ghost(
            col=home[0],
            row=home[1],
            direction=direction,
            name=name,
            color=color,
            scatter_target=corner,
            home=home,
            start_direction=direction,
        )
        ghosts.append(ghost)
    return ghosts


def blinky_target(pacman: Tile, facing: Direction, **_) -> Tile:
    return pacman


def pinky_target(pacman: Tile, facing: Direction, **_) -> Tile:
    return pacman[0] + PINKY_LOOKAHEAD * facing[0], pacman[1] + PINKY_LOOKAHEAD * facing[1]


def inky_target(pacman: Tile, facing: Direction, blinky: Tile, **_) -> Tile:
    """Blinky's position reflected through the tile two ahead of Pac-Man."""
    pivot_col = pacman[0] + INKY_LOOKAHEAD * facing[0]
    pivot_row = pacman[1] + INKY_LOOKAHEAD * facing[1]
    return 2 * pivot_col - blinky[0], 2 * pivot_row - blinky[1]


def clyde_target(pacman: Tile, facing: Direction, ghost: Tile, corner: Tile, retreat_distance: float, **_) -> Tile:
    """Chase while far away, retreat to the corner once within retreat_distance."""
    distance = np.hypot(pacman[0] - ghost[0], pacman[1] - ghost[1])
    return pacman if distance > retreat_distance else corner


TARGETING: dict[str, Callable[..., Tile]] = {
    "blinky": blinky_target,
    "pinky": pinky_target,
    "inky": inky_target,
    "clyde": clyde_target,
}


def chase_target(
    ghost: Ghost,
    pacman: Tile,
    facing: Direction,
    blinky: Tile,
    retreat_distance: float = 8.0,
) -> Tile:
    """
    Chase-mode target tile for a ghost.

    Args:
        ghost: Ghost choosing a move.
        pacman: Pac-Man's current tile.
        facing: Pac-Man's current direction.
        blinky: Blinky's current tile.
        retreat_distance: Clyde's chase/retreat threshold in tiles.

    Returns:
        Target tile; may lie outside the maze.
    """
    targeting = TARGETING.get(ghost.name, blinky_target)
    return targeting(
        pacman=pacman,
        facing=facing,
        blinky=blinky,
        ghost=ghost.tile,
        corner=ghost.scatter_target,
        retreat_distance=retreat_distance,
    )


def choose_direction(
    ghost: Ghost,
    target: Tile | None,
    maze: Maze,
    allow_gate: bool,
    rng: np.random.Generator,
) -> Direction:
    """
    Pick the next move at a tile centre.

    Ghosts never reverse unless it is their only way out. With a target, the
    open neighbour closest to it (squared Euclidean) wins, ties broken in
    up/left/down/right order. Without one, the choice is random.

    Args:
        ghost: Ghost at a tile centre.
        target: Target tile, None for a random walk.
        maze: Maze to test walls against.
        allow_gate: Whether the ghost may pass the house gate.
        rng: Random source for the random walk.
    """
    back = opposite(ghost.direction)
    options = [
        d for d in DIRECTION_PRIORITY if d != back and maze.can_move(ghost.col, ghost.row, d, allow_gate)
    ]

    if not options:
        return back if maze.can_move(ghost.col, ghost.row, back, allow_gate) else STILL

    if target is None:
        return options[int(rng.integers(len(options)))]

    def distance_sq(direction: Direction) -> int:
        col, row = maze.neighbor(ghost.col, ghost.row, direction)
        return (col - target[0]) ** 2 + (row - target[1]) ** 2

    return min(options, key=distance_sq)
