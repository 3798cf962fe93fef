"""
Pac-Man actors and consumables.

Actors live on tile (col, row) and move towards the adjacent tile along
direction; progress in [0, 1) is how far they have travelled.
"""

from dataclasses import dataclass

from retro_arcade.core.constants import STILL

Direction = tuple[int, int]


def opposite(direction: Direction) -> Direction:
    return -direction[0], -direction[1]


@dataclass
class Actor:
    col: int
    row: int
    direction: Direction = STILL
    progress: float = 0.0

    @property
    def tile(self) -> tuple[int, int]:
        return self.col, self.row

    @property
    def x(self) -> float:
        return self.col + self.direction[0] * self.progress

    @property
    def y(self) -> float:
        return self.row + self.direction[1] * self.progress

    @property
    def at_center(self) -> bool:
        return self.progress == 0.0

    def reverse(self, cols: int) -> None:
        """Turn around on the spot; mid-tile, the destination becomes the origin."""
        if self.progress > 0.0:
            self.col = (self.col + self.direction[0]) % cols
            self.row += self.direction[1]
            self.progress = 1.0 - self.progress
        self.direction = opposite(self.direction)

    def place(self, col: int, row: int, direction: Direction = STILL) -> None:
        self.col, self.row = col, row
        self.direction = direction
        self.progress = 0.0


@dataclass
class PacmanActor(Actor):
    next_direction: Direction = STILL
    mouth_angle: float = 0.0
    mouth_dir: int = 1

    def get_state(self) -> dict:
        return {
            "col": self.col,
            "row": self.row,
            "x": self.x,
            "y": self.y,
            "direction": self.direction,
            "next_direction": self.next_direction,
        }


@dataclass
class Ghost(Actor):
    name: str = ""
    color: tuple[int, int, int] = (255, 255, 255)
    scatter_target: tuple[int, int] = (0, 0)
    home: tuple[int, int] = (0, 0)
    start_direction: Direction = STILL
    frightened: bool = False
    eaten: bool = False

    def respawn(self) -> None:
        self.place(*self.home, direction=self.start_direction)
        self.frightened = False
        self.eaten = False

    def get_state(self) -> dict:
        return {
            "name": self.name,
            "col": self.col,
            "row": self.row,
            "x": self.x,
            "y": self.y,
            "direction": self.direction,
            "frightened": self.frightened,
            "eaten": self.eaten,
            "scatter_target": self.scatter_target,
        }


@dataclass
class Dot:
    col: int
    row: int
    eaten: bool = False


@dataclass
class Fruit:
    col: int
    row: int
    points: int
    timer: float

    def get_state(self) -> dict:
        return {"col": self.col, "row": self.row, "points": self.points, "timer": self.timer}
