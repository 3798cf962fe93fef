from dataclasses import dataclass, field, fields

from retro_arcade.core.constants import FIXED_TIME_STEP, HighScoreType


@dataclass(frozen=True)
class GameInfo:
    """
    Static metadata describing a game to the hosting shell.

    Attributes:
        id: Registry identifier used to load the game.
        title: Display title.
        description: One-line menu description.
        start_lives: Lives shown on the menu card.
        high_score_type: How the shell ranks scores for this game.
        controls: Human-readable control labels keyed by role.
    """

    id: str
    title: str
    description: str
    start_lives: int = 3
    high_score_type: HighScoreType = HighScoreType.HIGHEST
    controls: dict[str, str] = field(default_factory=dict)


@dataclass
class SessionConfig:
    """
    Configuration shared by every game session.

    Attributes:
        start_lives: Lives granted on reset.
        fixed_time_step: Simulation tick length in milliseconds.
        max_frame_delta: Upper bound on a single frame's wall-clock delta,
            keeps a long stall from queueing hundreds of ticks.
    """

    start_lives: int = 3
    fixed_time_step: float = FIXED_TIME_STEP
    max_frame_delta: float = 250.0

    @classmethod
    def from_overrides(cls, overrides: dict | None = None):
        """Build a config from a plain mapping, rejecting unknown keys."""
        overrides = dict(overrides or {})
        known = {f.name for f in fields(cls)}
        unknown = set(overrides) - known
        if unknown:
            raise TypeError(
                f"Unknown {cls.__name__} fields: {sorted(unknown)}. Valid fields are: {sorted(known)}"
            )
        return cls(**overrides)


@dataclass
class AsteroidsConfig(SessionConfig):
    """
    Configuration for Asteroids physics, weapons and progression.

    Distances are pixels, velocities pixels per tick, timers milliseconds.
    """

    # Ship
    ship_size: float = 20.0
    rotation_speed: float = 0.1
    thrust_power: float = 0.15
    friction: float = 0.99
    max_speed: float = 8.0

    # Player bullets
    bullet_speed: float = 10.0
    bullet_lifetime: float = 1500.0
    max_bullets: int = 4
    bullet_inherit_velocity: float = 0.5

    # Invincibility windows
    start_invincibility: float = 2000.0
    respawn_invincibility: float = 3000.0
    hyperspace_invincibility: float = 500.0

    # Waves
    wave_base_count: int = 3
    max_wave_asteroids: int = 10

    # Playfield
    wrap_margin: float = 50.0

    # UFO
    ufo_spawn_interval: float = 25000.0
    ufo_speed: float = 2.0
    ufo_max_vertical_speed: float = 1.5
    ufo_small_chance: float = 0.3
    ufo_small_chance_per_wave: float = 0.05
    ufo_max_small_chance: float = 0.7
    ufo_small_fire_interval: float = 1000.0
    ufo_large_fire_interval: float = 2000.0
    ufo_bullet_speed: float = 5.0
    ufo_bullet_lifetime: float = 2000.0


@dataclass
class PacmanConfig(SessionConfig):
    """
    Configuration for Pac-Man movement, ghost AI timing and scoring.

    Speeds are tiles per tick, timers milliseconds.
    """

    # Base speeds and their per-level growth
    pacman_speed: float = 0.12
    ghost_speed: float = 0.1
    frightened_speed: float = 0.05
    eaten_speed: float = 0.2
    pacman_speed_per_level: float = 0.01
    ghost_speed_per_level: float = 0.008
    max_pacman_speed: float = 0.2
    max_ghost_speed: float = 0.18

    # Frightened window and its per-level shortening
    frightened_duration: float = 8000.0
    frightened_step_per_level: float = 500.0
    min_frightened_duration: float = 3000.0
    frightened_flash_time: float = 2000.0

    # Global scatter/chase cadence, (mode, duration) pairs; final phase never ends
    mode_schedule: tuple[tuple[str, float], ...] = (
        ("scatter", 7000.0),
        ("chase", 20000.0),
        ("scatter", 7000.0),
        ("chase", 20000.0),
        ("scatter", 5000.0),
        ("chase", 20000.0),
        ("scatter", 5000.0),
        ("chase", float("inf")),
    )

    # Ghost AI
    clyde_retreat_distance: float = 8.0
    collision_distance: float = 0.8

    # Scoring
    dot_points: int = 10
    pellet_points: int = 50
    ghost_base_points: int = 200
    max_ghost_multiplier_steps: int = 4

    # Fruit
    fruit_dot_thresholds: tuple[int, ...] = (70, 120)
    fruit_duration: float = 10000.0
    fruit_points: tuple[int, ...] = (100, 300, 500, 700, 1000, 2000, 3000, 5000)
