"""
Central constants and enumerations for the Retro Arcade project.

This file is the single source of truth for control names, lifecycle states,
sound cue vocabulary and grid directions shared by every game.
"""

from enum import StrEnum


class Control(StrEnum):
    """Symbolic controls polled from the input collaborator."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    ACTION1 = "action1"
    ACTION2 = "action2"
    PAUSE = "pause"
    START = "start"


CONTROLS: tuple[Control, ...] = tuple(Control)


class GameState(StrEnum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    GAMEOVER = "gameover"


class SoundCue(StrEnum):
    JUMP = "jump"
    SHOOT = "shoot"
    EXPLOSION = "explosion"
    HIT = "hit"
    SCORE = "score"
    POWERUP = "powerup"
    DEATH = "death"
    GAME_START = "game-start"
    GAME_OVER = "game-over"


class HighScoreType(StrEnum):
    HIGHEST = "highest"
    LOWEST = "lowest"
    TIME = "time"


# =============================================================================
# Grid directions (col, row) with screen-down as +row
# =============================================================================

UP = (0, -1)
DOWN = (0, 1)
LEFT = (-1, 0)
RIGHT = (1, 0)
STILL = (0, 0)

# Classic tie-break order when two moves are equally good
DIRECTION_PRIORITY: tuple[tuple[int, int], ...] = (UP, LEFT, DOWN, RIGHT)

CONTROL_DIRECTIONS: dict[Control, tuple[int, int]] = {
    Control.UP: UP,
    Control.DOWN: DOWN,
    Control.LEFT: LEFT,
    Control.RIGHT: RIGHT,
}

# Logical tick length in milliseconds (60 Hz)
FIXED_TIME_STEP = 1000.0 / 60.0
