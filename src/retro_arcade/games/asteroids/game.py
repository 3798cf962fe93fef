import logging
from typing import Any, ClassVar

import numpy as np
import pygame

from retro_arcade.core.config import AsteroidsConfig, GameInfo
from retro_arcade.core.constants import Control, GameState, SoundCue
from retro_arcade.engine.session import GameSession

from .entities import (
    ASTEROID_SIZES,
    SPLIT_COUNT,
    UFO_LARGE,
    UFO_SMALL,
    Asteroid,
    AsteroidSize,
    Bullet,
    Ship,
    Ufo,
    circles_overlap,
    make_outline,
    wrap_coordinate,
    wrap_position,
)
from .renderer import draw_asteroids

log = logging.getLogger(__name__)


class Asteroids(GameSession):
    """
    Vector-style Asteroids.

    Per tick: input, ship physics, bullets, asteroids, UFO, collisions, wave
    check. The session level doubles as the wave counter.
    """

    info: ClassVar[GameInfo] = GameInfo(
        id="asteroids",
        title="Asteroids",
        description="Blast through the asteroid field!",
        start_lives=3,
        controls={
            "movement": "Left/Right rotate, Up thrust",
            "action1": "Fire (Space)",
            "action2": "Hyperspace (Shift)",
            "pause": "Escape",
        },
    )
    config_class: ClassVar[type[AsteroidsConfig]] = AsteroidsConfig
    config: AsteroidsConfig

    def reset_game(self) -> None:
        self.ship = Ship(position=self.center, radius=self.config.ship_size * 0.5)
        self.asteroids: list[Asteroid] = []
        self.bullets: list[Bullet] = []
        self.ufo: Ufo | None = None
        self.ufo_bullets: list[Bullet] = []
        self.ufo_timer = self.config.ufo_spawn_interval
        self.invincible_timer = self.config.start_invincibility
        self.spawn_wave()

    @property
    def center(self) -> complex:
        return complex(self.width / 2, self.height / 2)

    @property
    def wave(self) -> int:
        return self.level

    # ============ SPAWNING ============

    def wave_size(self, wave: int) -> int:
        return min(self.config.wave_base_count + wave, self.config.max_wave_asteroids)

    def spawn_wave(self) -> None:
        count = self.wave_size(self.wave)
        for _ in range(count):
            self.asteroids.append(self.create_asteroid(AsteroidSize.LARGE))
        log.debug(f"Wave {self.wave}: spawned {count} asteroids")

    def _edge_position(self) -> complex:
        edge = int(self.rng.integers(4))
        if edge == 0:
            return complex(self.rng.random() * self.width, 0.0)
        if edge == 1:
            return complex(self.width, self.rng.random() * self.height)
        if edge == 2:
            return complex(self.rng.random() * self.width, self.height)
        return complex(0.0, self.rng.random() * self.height)

    def create_asteroid(self, size: AsteroidSize, position: complex | None = None) -> Asteroid:
        """
        Build an asteroid with a random heading, speed, spin and outline.

        Args:
            size: Size class.
            position: Spawn point, a random screen edge when omitted.
        """
        spec = ASTEROID_SIZES[size]
        if position is None:
            position = self._edge_position()

        angle = self.rng.random() * 2 * np.pi
        speed = spec.speed * (0.5 + 0.5 * self.rng.random())

        return Asteroid(
            position=position,
            velocity=speed * np.exp(1j * angle),
            size=size,
            vertices=make_outline(spec.radius, self.rng),
            rotation=self.rng.random() * 2 * np.pi,
            rotation_speed=(self.rng.random() - 0.5) * 0.05,
        )

    def spawn_ufo(self) -> None:
        chance = min(
            self.config.ufo_small_chance + self.config.ufo_small_chance_per_wave * (self.wave - 1),
            self.config.ufo_max_small_chance,
        )
        is_small = bool(self.rng.random() < chance)
        from_left = bool(self.rng.random() > 0.5)
        kind = UFO_SMALL if is_small else UFO_LARGE

        x = -30.0 if from_left else self.width + 30.0
        y = 50.0 + self.rng.random() * (self.height - 100.0)
        vx = self.config.ufo_speed if from_left else -self.config.ufo_speed

        self.ufo = Ufo(
            position=complex(x, y),
            velocity=complex(vx, 0.0),
            is_small=is_small,
            radius=kind["radius"],
            points=kind["points"],
        )
        log.debug(f"Spawned {'small' if is_small else 'large'} UFO")

    # ============ UPDATE ============

    def update(self, delta_time: float) -> None:
        if self.invincible_timer > 0:
            self.invincible_timer -= delta_time

        self.handle_input()
        self.update_ship()
        self.update_bullets(delta_time)
        self.update_asteroids()
        self.update_ufo(delta_time)
        self.check_collisions()
        if self.state != GameState.RUNNING:
            return
        self.check_wave_complete()

    def handle_input(self) -> None:
        ship = self.ship

        if self.input.is_pressed(Control.LEFT):
            ship.rotation -= self.config.rotation_speed
        if self.input.is_pressed(Control.RIGHT):
            ship.rotation += self.config.rotation_speed

        ship.thrusting = self.input.is_pressed(Control.UP)
        if ship.thrusting:
            ship.velocity += self.config.thrust_power * ship.heading
            speed = abs(ship.velocity)
            if speed > self.config.max_speed:
                ship.velocity *= self.config.max_speed / speed

        if self.input.is_just_pressed(Control.ACTION1) and len(self.bullets) < self.config.max_bullets:
            self.fire_bullet()

        if self.input.is_just_pressed(Control.ACTION2):
            self.hyperspace()

    def update_ship(self) -> None:
        ship = self.ship
        ship.velocity *= self.config.friction
        ship.position = self._wrap(ship.position + ship.velocity)

    def fire_bullet(self) -> None:
        ship = self.ship
        self.bullets.append(
            Bullet(
                position=ship.position + ship.heading * self.config.ship_size,
                velocity=ship.heading * self.config.bullet_speed
                + ship.velocity * self.config.bullet_inherit_velocity,
                lifetime=self.config.bullet_lifetime,
            )
        )
        self.play_sound(SoundCue.SHOOT)

    def hyperspace(self) -> None:
        self.ship.position = complex(self.rng.random() * self.width, self.rng.random() * self.height)
        self.ship.velocity = 0j
        self.invincible_timer = self.config.hyperspace_invincibility
        self.play_sound(SoundCue.POWERUP)

    def _advance_bullets(self, bullets: list[Bullet], delta_time: float) -> list[Bullet]:
        for bullet in bullets:
            bullet.position = self._wrap(bullet.position + bullet.velocity)
            bullet.lifetime -= delta_time
            if bullet.lifetime <= 0:
                bullet.alive = False
        return [b for b in bullets if b.alive]

    def update_bullets(self, delta_time: float) -> None:
        self.bullets = self._advance_bullets(self.bullets, delta_time)
        self.ufo_bullets = self._advance_bullets(self.ufo_bullets, delta_time)

    def update_asteroids(self) -> None:
        for asteroid in self.asteroids:
            asteroid.position = self._wrap(asteroid.position + asteroid.velocity)
            asteroid.rotation += asteroid.rotation_speed

    def update_ufo(self, delta_time: float) -> None:
        if self.ufo is None:
            self.ufo_timer -= delta_time
            if self.ufo_timer <= 0:
                self.ufo_timer = self.config.ufo_spawn_interval
                self.spawn_ufo()
            return

        ufo = self.ufo
        position = ufo.position + ufo.velocity
        ufo.position = complex(
            position.real,
            wrap_coordinate(position.imag, self.height, self.config.wrap_margin),
        )

        ufo.direction_timer -= delta_time
        if ufo.direction_timer <= 0:
            ufo.direction_timer = 1000.0 + self.rng.random() * 2000.0
            vy = (self.rng.random() - 0.5) * 2 * self.config.ufo_max_vertical_speed
            ufo.velocity = complex(ufo.velocity.real, vy)

        ufo.fire_timer -= delta_time
        if ufo.fire_timer <= 0:
            ufo.fire_timer = (
                self.config.ufo_small_fire_interval if ufo.is_small else self.config.ufo_large_fire_interval
            )
            self.ufo_fire()

        margin = self.config.wrap_margin
        if ufo.position.real < -margin or ufo.position.real > self.width + margin:
            self.ufo = None

    def ufo_fire(self) -> None:
        if self.ufo is None:
            return

        if self.ufo.is_small:
            offset = self.ship.position - self.ufo.position
            angle = np.angle(offset) if offset != 0 else 0.0
        else:
            angle = self.rng.random() * 2 * np.pi

        self.ufo_bullets.append(
            Bullet(
                position=self.ufo.position,
                velocity=self.config.ufo_bullet_speed * np.exp(1j * angle),
                lifetime=self.config.ufo_bullet_lifetime,
            )
        )
        self.play_sound(SoundCue.SHOOT)

    # ============ COLLISIONS ============

    def check_collisions(self) -> None:
        """
        Resolve this tick's overlaps.

        Destroyed entities are flagged and skipped for the rest of the pass,
        split fragments join the field only after all bullets are resolved.
        """
        fragments: list[Asteroid] = []

        for bullet in self.bullets:
            for asteroid in self.asteroids:
                if asteroid.alive and circles_overlap(bullet.position, 0.0, asteroid.position, asteroid.radius):
                    bullet.alive = False
                    fragments.extend(self.destroy_asteroid(asteroid))
                    break

        if self.ufo is not None:
            for bullet in self.bullets:
                if bullet.alive and circles_overlap(bullet.position, 0.0, self.ufo.position, self.ufo.radius):
                    bullet.alive = False
                    self.destroy_ufo()
                    break

        if self.invincible_timer <= 0:
            self.check_ship_collisions(fragments)

        self.bullets = [b for b in self.bullets if b.alive]
        self.ufo_bullets = [b for b in self.ufo_bullets if b.alive]
        self.asteroids = [a for a in self.asteroids if a.alive] + fragments

    def check_ship_collisions(self, fragments: list[Asteroid]) -> None:
        ship = self.ship

        for asteroid in self.asteroids:
            if asteroid.alive and circles_overlap(ship.position, ship.radius, asteroid.position, asteroid.radius):
                fragments.extend(self.destroy_asteroid(asteroid))
                self.die()
                return

        if self.ufo is not None and circles_overlap(ship.position, ship.radius, self.ufo.position, self.ufo.radius):
            self.destroy_ufo()
            self.die()
            return

        for bullet in self.ufo_bullets:
            if bullet.alive and circles_overlap(ship.position, ship.radius, bullet.position, 0.0):
                bullet.alive = False
                self.die()
                return

    def destroy_asteroid(self, asteroid: Asteroid) -> list[Asteroid]:
        """
        Remove an asteroid, score it and return its fragments.

        Returns:
            Two next-size asteroids at the parent's position, or none for small.
        """
        asteroid.alive = False
        self.add_score(asteroid.points)
        self.play_sound(SoundCue.EXPLOSION)

        child = asteroid.spec.child
        if child is None:
            return []
        return [self.create_asteroid(child, asteroid.position) for _ in range(SPLIT_COUNT)]

    def destroy_ufo(self) -> None:
        self.add_score(self.ufo.points)
        self.play_sound(SoundCue.EXPLOSION)
        self.ufo = None

    def die(self) -> None:
        if not self.lose_life():
            return

        self.ship.position = self.center
        self.ship.velocity = 0j
        self.ship.rotation = -np.pi / 2
        self.invincible_timer = self.config.respawn_invincibility

    def check_wave_complete(self) -> None:
        if self.asteroids:
            return
        self.next_level()
        self.ufo_timer = self.config.ufo_spawn_interval
        self.spawn_wave()

    def _wrap(self, position: complex) -> complex:
        return wrap_position(position, (self.width, self.height), self.config.wrap_margin)

    # ============ RENDER / INSPECTION ============

    def render(self, surface: pygame.Surface) -> None:
        draw_asteroids(surface, self)

    def get_game_state(self) -> dict[str, Any]:
        return {
            "wave": self.wave,
            "invincible_timer": self.invincible_timer,
            "ship": self.ship.get_state(),
            "asteroids": [a.get_state() for a in self.asteroids],
            "bullets": [b.get_state() for b in self.bullets],
            "ufo": self.ufo.get_state() if self.ufo is not None else None,
            "ufo_bullets": [b.get_state() for b in self.ufo_bullets],
        }
