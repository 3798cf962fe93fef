import logging
from typing import Any, ClassVar

import numpy as np
import pygame

from retro_arcade.core.config import GameInfo, PacmanConfig
from retro_arcade.core.constants import CONTROL_DIRECTIONS, STILL, GameState, SoundCue
from retro_arcade.engine.session import GameSession

from .entities import Actor, Dot, Fruit, Ghost, PacmanActor, opposite
from .ghosts import chase_target, choose_direction, create_ghosts
from .maze import FRUIT_TILE, GHOST_HOUSE, HOUSE_EXIT, Maze, build_maze
from .renderer import draw_pacman

log = logging.getLogger(__name__)

SCATTER = "scatter"
FRIGHTENED = "frightened"

MOUTH_STEP = 0.15
MOUTH_MAX = 0.4


class Pacman(GameSession):
    """
    Maze chase with four ghost personalities.

    Per tick: input, mode timers, Pac-Man movement and eating, ghost movement,
    collisions, fruit, level check. Actors move tile to tile; direction
    changes are only taken at tile centres, except Pac-Man reversing.
    """

    info: ClassVar[GameInfo] = GameInfo(
        id="pacman",
        title="Pac-Man",
        description="Eat all the dots and avoid the ghosts!",
        start_lives=3,
        controls={
            "movement": "Arrow keys / WASD",
            "pause": "Escape",
        },
    )
    config_class: ClassVar[type[PacmanConfig]] = PacmanConfig
    config: PacmanConfig

    def reset_game(self) -> None:
        self.pacman_speed = self.config.pacman_speed
        self.ghost_speed = self.config.ghost_speed
        self.frightened_duration = self.config.frightened_duration
        self.reset_level()

    def reset_level(self) -> None:
        """Fresh maze, dots and actors for the current level."""
        self.maze: Maze = build_maze()
        self.dots: list[Dot] = self.maze.dots
        self.pellets: list[Dot] = self.maze.pellets
        self._dot_at = {(d.col, d.row): d for d in self.dots}
        self._pellet_at = {(p.col, p.row): p for p in self.pellets}
        self.total_dots = len(self.dots)
        self.dots_eaten = 0
        self.fruits_spawned = 0
        self.pacman = PacmanActor(*self.maze.pacman_start)
        self.ghosts: list[Ghost] = create_ghosts()
        self.reset_actors()

    def reset_actors(self) -> None:
        """Put everyone back at spawn and restart the mode schedule."""
        self.pacman.place(*self.maze.pacman_start)
        self.pacman.next_direction = STILL
        for ghost in self.ghosts:
            ghost.respawn()

        self.phase_index = 0
        self.phase_timer = self.config.mode_schedule[0][1]
        self.frightened_timer = 0.0
        self.ghosts_eaten = 0
        self.fruit: Fruit | None = None

    # ============ MODES ============

    @property
    def global_mode(self) -> str:
        return self.config.mode_schedule[self.phase_index][0]

    @property
    def mode(self) -> str:
        return FRIGHTENED if self.frightened_timer > 0 else self.global_mode

    def update_mode(self, delta_time: float) -> None:
        # The scatter/chase clock is frozen while frightened
        if self.frightened_timer > 0:
            self.frightened_timer -= delta_time
            if self.frightened_timer <= 0:
                self.end_frightened()
            return

        self.phase_timer -= delta_time
        if self.phase_timer <= 0 and self.phase_index < len(self.config.mode_schedule) - 1:
            self.phase_index += 1
            self.phase_timer = self.config.mode_schedule[self.phase_index][1]
            log.debug(f"Ghost mode -> {self.global_mode}")

    def activate_frightened(self) -> None:
        self.frightened_timer = self.frightened_duration
        self.ghosts_eaten = 0
        for ghost in self.ghosts:
            if ghost.eaten:
                continue
            ghost.frightened = True
            ghost.reverse(self.maze.cols)

    def end_frightened(self) -> None:
        self.frightened_timer = 0.0
        self.ghosts_eaten = 0
        for ghost in self.ghosts:
            ghost.frightened = False

    # ============ UPDATE ============

    def update(self, delta_time: float) -> None:
        self.handle_input()
        self.update_mode(delta_time)
        self.update_pacman()
        self.update_ghosts()
        self.check_collisions()
        if not self.is_running:
            return
        self.update_fruit(delta_time)
        if self.dots_eaten >= self.total_dots:
            self.complete_level()

    @property
    def is_running(self) -> bool:
        return self.state == GameState.RUNNING

    def handle_input(self) -> None:
        for control, direction in CONTROL_DIRECTIONS.items():
            if self.input.is_just_pressed(control):
                self.pacman.next_direction = direction

    def _advance(self, actor: Actor, speed: float, allow_gate: bool = False) -> bool:
        """
        Move an actor along its direction.

        Returns:
            True when it arrived on a new tile this tick.
        """
        if actor.direction == STILL:
            return False
        if actor.at_center and not self.maze.can_move(actor.col, actor.row, actor.direction, allow_gate):
            return False

        actor.progress += speed
        if actor.progress < 1.0:
            return False

        actor.col, actor.row = self.maze.neighbor(actor.col, actor.row, actor.direction)
        actor.progress = 0.0
        return True

    def update_pacman(self) -> None:
        pacman = self.pacman
        wanted = pacman.next_direction

        if pacman.at_center:
            if wanted != STILL and self.maze.can_move(pacman.col, pacman.row, wanted):
                pacman.direction = wanted
        elif wanted != STILL and wanted == opposite(pacman.direction):
            pacman.reverse(self.maze.cols)

        moving = pacman.direction != STILL and (
            not pacman.at_center or self.maze.can_move(pacman.col, pacman.row, pacman.direction)
        )
        self._advance(pacman, self.pacman_speed)

        if moving:
            pacman.mouth_angle += MOUTH_STEP * pacman.mouth_dir
            if pacman.mouth_angle >= MOUTH_MAX or pacman.mouth_angle <= 0:
                pacman.mouth_dir *= -1
                pacman.mouth_angle = min(max(pacman.mouth_angle, 0.0), MOUTH_MAX)

        # Only a reached tile is eaten; a mid-tile reversal points at one not yet reached
        if pacman.at_center:
            self.eat(pacman.tile)

    def eat(self, tile: tuple[int, int]) -> None:
        dot = self._dot_at.get(tile)
        if dot is not None and not dot.eaten:
            dot.eaten = True
            self.dots_eaten += 1
            self.add_score(self.config.dot_points)
            self.maybe_spawn_fruit()

        pellet = self._pellet_at.get(tile)
        if pellet is not None and not pellet.eaten:
            pellet.eaten = True
            self.add_score(self.config.pellet_points)
            self.play_sound(SoundCue.POWERUP)
            self.activate_frightened()

        if self.fruit is not None and self.fruit.col == tile[0] and self.fruit.row == tile[1]:
            self.add_score(self.fruit.points)
            log.debug(f"Fruit eaten for {self.fruit.points}")
            self.fruit = None

    def _gate_allowed(self, ghost: Ghost) -> bool:
        return ghost.eaten or ghost.tile in self.maze.house

    def ghost_target(self, ghost: Ghost) -> tuple[int, int] | None:
        """
        Current target tile, or None when wandering at random.

        Eaten ghosts head home, ghosts still in the house head for the exit,
        frightened ghosts wander, the rest follow the global mode.
        """
        if ghost.eaten:
            return GHOST_HOUSE
        if ghost.tile in self.maze.house:
            return HOUSE_EXIT
        if ghost.frightened:
            return None
        if self.global_mode == SCATTER:
            return ghost.scatter_target

        blinky = next((g for g in self.ghosts if g.name == "blinky"), ghost)
        return chase_target(
            ghost,
            pacman=self.pacman.tile,
            facing=self.pacman.direction,
            blinky=blinky.tile,
            retreat_distance=self.config.clyde_retreat_distance,
        )

    def ghost_speed_for(self, ghost: Ghost) -> float:
        if ghost.eaten:
            return self.config.eaten_speed
        if ghost.frightened:
            return self.config.frightened_speed
        return self.ghost_speed

    def update_ghosts(self) -> None:
        for ghost in self.ghosts:
            allow_gate = self._gate_allowed(ghost)
            if ghost.at_center:
                target = self.ghost_target(ghost)
                ghost.direction = choose_direction(ghost, target, self.maze, allow_gate, self.rng)

            self._advance(ghost, self.ghost_speed_for(ghost), allow_gate)

            if ghost.eaten and ghost.at_center and ghost.tile == GHOST_HOUSE:
                ghost.eaten = False
                ghost.frightened = False

    # ============ COLLISIONS ============

    def check_collisions(self) -> None:
        pacman = self.pacman
        cols = self.maze.cols
        for ghost in self.ghosts:
            if ghost.eaten:
                continue
            # Horizontal distance is measured around the tunnel
            dx = abs(pacman.x - ghost.x) % cols
            distance = np.hypot(min(dx, cols - dx), pacman.y - ghost.y)
            if distance >= self.config.collision_distance:
                continue
            if ghost.frightened:
                self.eat_ghost(ghost)
            else:
                self.die()
                return

    def eat_ghost(self, ghost: Ghost) -> None:
        ghost.eaten = True
        ghost.frightened = False
        self.ghosts_eaten += 1
        steps = min(self.ghosts_eaten, self.config.max_ghost_multiplier_steps)
        points = self.config.ghost_base_points * 2 ** (steps - 1)
        self.add_score(points)
        self.play_sound(SoundCue.HIT)
        log.debug(f"Ate {ghost.name} for {points}")

    def die(self) -> None:
        if not self.lose_life():
            return
        self.reset_actors()

    # ============ FRUIT / LEVELS ============

    def maybe_spawn_fruit(self) -> None:
        thresholds = self.config.fruit_dot_thresholds
        if self.fruit is not None or self.fruits_spawned >= len(thresholds):
            return
        if self.dots_eaten < thresholds[self.fruits_spawned]:
            return

        table = self.config.fruit_points
        points = table[min(self.level - 1, len(table) - 1)]
        self.fruit = Fruit(col=FRUIT_TILE[0], row=FRUIT_TILE[1], points=points, timer=self.config.fruit_duration)
        self.fruits_spawned += 1
        log.debug(f"Fruit spawned worth {points}")

    def update_fruit(self, delta_time: float) -> None:
        if self.fruit is None:
            return
        self.fruit.timer -= delta_time
        if self.fruit.timer <= 0:
            self.fruit = None

    def complete_level(self) -> None:
        self.next_level()
        config = self.config
        self.pacman_speed = min(config.pacman_speed + self.level * config.pacman_speed_per_level, config.max_pacman_speed)
        self.ghost_speed = min(config.ghost_speed + self.level * config.ghost_speed_per_level, config.max_ghost_speed)
        self.frightened_duration = max(
            config.frightened_duration - self.level * config.frightened_step_per_level,
            config.min_frightened_duration,
        )
        self.reset_level()

    # ============ RENDER / INSPECTION ============

    def render(self, surface: pygame.Surface) -> None:
        draw_pacman(surface, self)

    def get_game_state(self) -> dict[str, Any]:
        return {
            "mode": self.mode,
            "global_mode": self.global_mode,
            "frightened_timer": max(self.frightened_timer, 0.0),
            "ghosts_eaten": self.ghosts_eaten,
            "dots_eaten": self.dots_eaten,
            "total_dots": self.total_dots,
            "dots_remaining": sum(1 for d in self.dots if not d.eaten),
            "pellets_remaining": sum(1 for p in self.pellets if not p.eaten),
            "pacman": self.pacman.get_state(),
            "ghosts": [g.get_state() for g in self.ghosts],
            "fruit": self.fruit.get_state() if self.fruit is not None else None,
        }
