"""
Input collaborators.

Sessions only see the InputSource protocol. InputState is the programmatic
implementation (tests, gym wrapper, replays); KeyboardInput feeds it from the
pygame keyboard.
"""

import math
from typing import Protocol

import pygame

from retro_arcade.core.constants import Control


class InputSource(Protocol):
    def update(self) -> None: ...

    def is_pressed(self, control: str) -> bool: ...

    def is_just_pressed(self, control: str) -> bool: ...

    def direction(self) -> tuple[float, float]: ...


class InputState:
    """
    Held/edge state for the symbolic controls.

    Controls are pressed and released at any time; update() latches the held
    set so that is_pressed/is_just_pressed are stable for the duration of one
    tick. A press is "just pressed" on exactly the first update that sees it.
    """

    def __init__(self) -> None:
        self._held: set[str] = set()
        self._current: frozenset[str] = frozenset()
        self._previous: frozenset[str] = frozenset()

    def press(self, control: str) -> None:
        self._held.add(str(control))

    def release(self, control: str) -> None:
        self._held.discard(str(control))

    def release_all(self) -> None:
        self._held.clear()

    def set_held(self, controls) -> None:
        self._held = {str(c) for c in controls}

    def update(self) -> None:
        self._previous = self._current
        self._current = frozenset(self._held)

    def is_pressed(self, control: str) -> bool:
        return str(control) in self._current

    def is_just_pressed(self, control: str) -> bool:
        control = str(control)
        return control in self._current and control not in self._previous

    def direction(self) -> tuple[float, float]:
        """Unit-length direction from the d-pad controls, (0, 0) when idle."""
        dx = int(self.is_pressed(Control.RIGHT)) - int(self.is_pressed(Control.LEFT))
        dy = int(self.is_pressed(Control.DOWN)) - int(self.is_pressed(Control.UP))
        length = math.hypot(dx, dy)
        if length == 0:
            return 0.0, 0.0
        return dx / length, dy / length


# Key mappings (arrows + WASD, space/enter/z fire, shift/x secondary, esc/p pause)
DEFAULT_KEY_MAP: dict[int, Control] = {
    pygame.K_UP: Control.UP,
    pygame.K_w: Control.UP,
    pygame.K_DOWN: Control.DOWN,
    pygame.K_s: Control.DOWN,
    pygame.K_LEFT: Control.LEFT,
    pygame.K_a: Control.LEFT,
    pygame.K_RIGHT: Control.RIGHT,
    pygame.K_d: Control.RIGHT,
    pygame.K_SPACE: Control.ACTION1,
    pygame.K_z: Control.ACTION1,
    pygame.K_LSHIFT: Control.ACTION2,
    pygame.K_RSHIFT: Control.ACTION2,
    pygame.K_x: Control.ACTION2,
    pygame.K_ESCAPE: Control.PAUSE,
    pygame.K_p: Control.PAUSE,
    pygame.K_RETURN: Control.START,
}


class KeyboardInput(InputState):
    """InputState driven by pygame.key.get_pressed() on every update."""

    def __init__(self, key_map: dict[int, Control] | None = None) -> None:
        super().__init__()
        self.key_map = key_map or DEFAULT_KEY_MAP

    def update(self) -> None:
        keys = pygame.key.get_pressed()
        self.set_held(control for key, control in self.key_map.items() if keys[key])
        super().update()
