"""
Pac-Man maze layout and grid queries.

Legend: '#' wall, '.' dot, 'o' power pellet, 'P' pacman start, 'G' ghost
house, '=' ghost house gate (open to ghosts only), ' ' open floor.
"""

from dataclasses import dataclass, field

import numpy as np

from .entities import Dot

LAYOUT: tuple[str, ...] = (
    "#####################",
    "#.........#.........#",
    "#.###.###.#.###.###.#",
    "#o###.###.#.###.###o#",
    "#...................#",
    "#.###.#.#####.#.###.#",
    "#.....#...#...#.....#",
    "#####.### # ###.#####",
    "    #.#       #.#    ",
    "#####.# ##=## #.#####",
    "     .  #GGG#  .     ",
    "#####.# ##### #.#####",
    "    #.#       #.#    ",
    "#####.# ##### #.#####",
    "#.........#.........#",
    "#.###.###.#.###.###.#",
    "#o..#.....P.....#..o#",
    "###.#.#.#####.#.#.###",
    "#.....#...#...#.....#",
    "#.#######.#.#######.#",
    "#####################",
)

WALL = 1
OPEN = 0

# Ghost house geometry
GHOST_HOUSE = (10, 10)
HOUSE_EXIT = (10, 8)
FRUIT_TILE = (10, 12)


@dataclass
class Maze:
    """
    Static tile grid plus the consumables placed on it.

    Attributes:
        grid: (rows, cols) array, 1 = wall, 0 = open.
        gates: Tiles open to ghosts only.
        house: Ghost house tiles, gate included.
        dots: Regular dots in layout order.
        pellets: Power pellets in layout order.
        pacman_start: Pac-Man's spawn tile.
    """

    grid: np.ndarray
    gates: frozenset[tuple[int, int]]
    house: frozenset[tuple[int, int]]
    dots: list[Dot] = field(default_factory=list)
    pellets: list[Dot] = field(default_factory=list)
    pacman_start: tuple[int, int] = (0, 0)

    @property
    def rows(self) -> int:
        return self.grid.shape[0]

    @property
    def cols(self) -> int:
        return self.grid.shape[1]

    def is_open(self, col: int, row: int, allow_gate: bool = False) -> bool:
        if not 0 <= row < self.rows:
            return False
        col %= self.cols
        if self.grid[row, col] == WALL:
            return False
        return allow_gate or (col, row) not in self.gates

    def neighbor(self, col: int, row: int, direction: tuple[int, int]) -> tuple[int, int]:
        """Adjacent tile, wrapping horizontally through side tunnels."""
        return (col + direction[0]) % self.cols, row + direction[1]

    def can_move(self, col: int, row: int, direction: tuple[int, int], allow_gate: bool = False) -> bool:
        if direction == (0, 0):
            return False
        next_col, next_row = self.neighbor(col, row, direction)
        return self.is_open(next_col, next_row, allow_gate)


def build_maze(layout: tuple[str, ...] = LAYOUT) -> Maze:
    """
    Parse a text layout into a fresh Maze with every dot uneaten.

    Args:
        layout: Equal-length rows using the legend above.
    """
    rows, cols = len(layout), len(layout[0])
    assert all(len(line) == cols for line in layout), "Maze rows must have equal length"

    grid = np.zeros((rows, cols), dtype=np.int8)
    gates: set[tuple[int, int]] = set()
    house: set[tuple[int, int]] = set()
    dots: list[Dot] = []
    pellets: list[Dot] = []
    pacman_start = (cols // 2, rows // 2)

    for row, line in enumerate(layout):
        for col, char in enumerate(line):
            if char == "#":
                grid[row, col] = WALL
            elif char == ".":
                dots.append(Dot(col=col, row=row))
            elif char == "o":
                pellets.append(Dot(col=col, row=row))
            elif char == "P":
                pacman_start = (col, row)
            elif char == "=":
                gates.add((col, row))
                house.add((col, row))
            elif char == "G":
                house.add((col, row))

    return Maze(
        grid=grid,
        gates=frozenset(gates),
        house=frozenset(house),
        dots=dots,
        pellets=pellets,
        pacman_start=pacman_start,
    )
