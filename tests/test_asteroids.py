"""
Tests for Asteroids physics, splitting, waves, UFOs and lives.
"""

import numpy as np
import pytest

from retro_arcade.core.constants import Control, GameState, SoundCue
from retro_arcade.games.asteroids.entities import (
    ASTEROID_SIZES,
    AsteroidSize,
    Bullet,
    Ufo,
    make_outline,
    wrap_coordinate,
)


def place_asteroid(game, size, position):
    asteroid = game.create_asteroid(size, position)
    asteroid.velocity = 0j
    game.asteroids = [asteroid]
    return asteroid


def tap(game, controls, control):
    """Hold a control for one input update, then release it."""
    controls.press(control)
    controls.update()
    game.handle_input()
    controls.release(control)
    controls.update()


class TestSetup:
    def test_first_wave(self, asteroids):
        assert asteroids.wave == 1
        assert len(asteroids.asteroids) == 4
        assert all(a.size == AsteroidSize.LARGE for a in asteroids.asteroids)

    def test_ship_starts_centered_and_invincible(self, asteroids):
        assert asteroids.ship.position == complex(400, 300)
        assert asteroids.ship.velocity == 0j
        assert asteroids.invincible_timer == 2000

    @pytest.mark.parametrize("wave, expected", [(1, 4), (2, 5), (6, 9), (7, 10), (20, 10)])
    def test_wave_sizes_are_capped(self, asteroids, wave, expected):
        assert asteroids.wave_size(wave) == expected

    def test_outline_vertex_count(self, rng):
        for _ in range(20):
            outline = make_outline(40.0, rng)
            assert 8 <= len(outline) <= 12
            assert np.all(np.abs(outline) <= 40.0 + 1e-9)
            assert np.all(np.abs(outline) >= 28.0 - 1e-9)


class TestSplitting:
    def test_large_splits_into_two_mediums(self, asteroids):
        asteroid = place_asteroid(asteroids, AsteroidSize.LARGE, complex(100, 100))
        fragments = asteroids.destroy_asteroid(asteroid)

        assert len(fragments) == 2
        assert all(f.size == AsteroidSize.MEDIUM for f in fragments)
        assert all(f.position == complex(100, 100) for f in fragments)
        assert asteroids.score == 20

    def test_medium_splits_into_two_smalls(self, asteroids):
        asteroid = place_asteroid(asteroids, AsteroidSize.MEDIUM, complex(100, 100))
        fragments = asteroids.destroy_asteroid(asteroid)
        assert [f.size for f in fragments] == [AsteroidSize.SMALL, AsteroidSize.SMALL]
        assert asteroids.score == 50

    def test_small_vanishes(self, asteroids):
        asteroid = place_asteroid(asteroids, AsteroidSize.SMALL, complex(100, 100))
        assert asteroids.destroy_asteroid(asteroid) == []
        assert asteroids.score == 100

    def test_fragment_speed_follows_size(self, asteroids):
        asteroid = place_asteroid(asteroids, AsteroidSize.LARGE, complex(100, 100))
        for fragment in asteroids.destroy_asteroid(asteroid):
            speed = abs(fragment.velocity)
            max_speed = ASTEROID_SIZES[AsteroidSize.MEDIUM].speed
            assert 0.5 * max_speed <= speed <= max_speed + 1e-9

    def test_bullet_hit_replaces_asteroid_with_fragments(self, asteroids, audio):
        place_asteroid(asteroids, AsteroidSize.LARGE, complex(100, 100))
        asteroids.bullets = [Bullet(position=complex(100, 100), velocity=0j, lifetime=1000)]

        asteroids.check_collisions()

        assert asteroids.bullets == []
        assert len(asteroids.asteroids) == 2
        assert asteroids.score == 20
        assert SoundCue.EXPLOSION in audio.cues

    def test_one_bullet_breaks_one_asteroid(self, asteroids):
        first = asteroids.create_asteroid(AsteroidSize.SMALL, complex(100, 100))
        second = asteroids.create_asteroid(AsteroidSize.SMALL, complex(102, 100))
        asteroids.asteroids = [first, second]
        asteroids.bullets = [Bullet(position=complex(101, 100), velocity=0j, lifetime=1000)]

        asteroids.check_collisions()

        assert len(asteroids.asteroids) == 1
        assert asteroids.score == 100


class TestShip:
    def test_wraps_just_past_right_edge(self, asteroids):
        asteroids.ship.position = complex(810, 300)
        asteroids.update_ship()
        assert asteroids.ship.position.real < 0

    def test_wraps_just_past_top_edge(self, asteroids):
        asteroids.ship.position = complex(400, -60)
        asteroids.update_ship()
        assert asteroids.ship.position.imag == pytest.approx(590.0)

    def test_wrap_coordinate(self):
        assert wrap_coordinate(400.0, 800.0, 50.0) == 400.0
        assert wrap_coordinate(-40.0, 800.0, 50.0) == -40.0
        assert wrap_coordinate(800.0, 800.0, 50.0) == -50.0
        assert wrap_coordinate(810.0, 800.0, 50.0) == pytest.approx(-40.0)
        assert wrap_coordinate(-51.0, 800.0, 50.0) == pytest.approx(799.0)

    def test_wrapped_ship_keeps_drifting_on_screen(self, asteroids):
        asteroids.ship.position = complex(799, 300)
        asteroids.ship.velocity = complex(5, 0)
        xs = []
        for _ in range(20):
            asteroids.update_ship()
            xs.append(asteroids.ship.position.real)
        assert xs[0] < 0
        assert all(later > earlier for earlier, later in zip(xs, xs[1:]))

    def test_friction(self, asteroids):
        asteroids.ship.velocity = complex(4, 0)
        asteroids.update_ship()
        assert asteroids.ship.velocity == pytest.approx(complex(3.96, 0))

    def test_thrust_is_capped(self, asteroids, controls):
        asteroids.ship.velocity = complex(100, 0)
        controls.press(Control.UP)
        controls.update()
        asteroids.handle_input()
        assert asteroids.ship.thrusting
        assert abs(asteroids.ship.velocity) == pytest.approx(8.0)

    def test_rotation(self, asteroids, controls):
        controls.press(Control.RIGHT)
        controls.update()
        asteroids.handle_input()
        assert asteroids.ship.rotation == pytest.approx(-np.pi / 2 + 0.1)

    def test_bullet_count_is_limited(self, asteroids, controls):
        for _ in range(6):
            tap(asteroids, controls, Control.ACTION1)
        assert len(asteroids.bullets) == 4

    def test_bullet_spawns_at_nose(self, asteroids, controls):
        tap(asteroids, controls, Control.ACTION1)
        bullet = asteroids.bullets[0]
        assert bullet.position == pytest.approx(complex(400, 280))
        assert bullet.velocity == pytest.approx(complex(0, -10))

    def test_bullets_expire(self, asteroids):
        asteroids.bullets = [Bullet(position=complex(10, 10), velocity=0j, lifetime=1500)]
        asteroids.update_bullets(1000)
        assert len(asteroids.bullets) == 1
        asteroids.update_bullets(500)
        assert asteroids.bullets == []

    def test_hyperspace(self, asteroids, controls):
        asteroids.ship.velocity = complex(3, 3)
        asteroids.invincible_timer = 0
        tap(asteroids, controls, Control.ACTION2)
        assert asteroids.ship.velocity == 0j
        assert asteroids.invincible_timer == 500


class TestInvincibility:
    def test_collision_ignored_while_invincible(self, asteroids):
        place_asteroid(asteroids, AsteroidSize.LARGE, asteroids.ship.position)
        asteroids.check_collisions()
        assert asteroids.lives == 3
        assert len(asteroids.asteroids) == 1

    def test_collision_after_invincibility_costs_a_life(self, asteroids):
        place_asteroid(asteroids, AsteroidSize.LARGE, asteroids.ship.position + 5)
        asteroids.invincible_timer = 0

        asteroids.check_collisions()

        assert asteroids.lives == 2
        assert asteroids.ship.position == complex(400, 300)
        assert asteroids.invincible_timer == 3000
        # The rock that hit the ship breaks too
        assert len(asteroids.asteroids) == 2

    def test_respawn_grants_invincibility(self, asteroids):
        asteroids.invincible_timer = 0
        asteroids.die()
        place_asteroid(asteroids, AsteroidSize.LARGE, asteroids.ship.position)
        asteroids.check_collisions()
        assert asteroids.lives == 2

    def test_invincibility_runs_out_with_ticks(self, asteroids, controls):
        asteroids.start()
        for _ in range(60):
            asteroids.tick()
        assert asteroids.invincible_timer == pytest.approx(1000.0)

    def test_persistent_overlap_costs_one_life(self, asteroids):
        asteroids.start()
        place_asteroid(asteroids, AsteroidSize.LARGE, asteroids.ship.position)
        asteroids.invincible_timer = 1000

        for _ in range(59):
            asteroids.tick()
        assert asteroids.lives == 3

        for _ in range(2):
            asteroids.tick()
        assert asteroids.lives == 2
        assert asteroids.invincible_timer > 2900

        # Fragments still overlap the respawned ship, the new window covers them
        for _ in range(100):
            asteroids.tick()
        assert asteroids.lives == 2

    def test_last_life_ends_game(self, asteroids, audio):
        reports = []
        asteroids.on_game_over(reports.append)
        asteroids.start()
        asteroids.lives = 1
        asteroids.invincible_timer = 0
        place_asteroid(asteroids, AsteroidSize.SMALL, asteroids.ship.position)

        asteroids.check_collisions()

        assert asteroids.lives == 0
        assert asteroids.state == GameState.GAMEOVER
        assert reports == [100]
        assert SoundCue.DEATH in audio.cues

    def test_dying_on_the_last_rock_does_not_start_a_wave(self, asteroids, audio):
        asteroids.start()
        asteroids.lives = 1
        asteroids.invincible_timer = 0
        place_asteroid(asteroids, AsteroidSize.SMALL, asteroids.ship.position)

        asteroids.update(1000 / 60)

        assert asteroids.state == GameState.GAMEOVER
        assert asteroids.wave == 1
        assert asteroids.level == 1
        assert asteroids.asteroids == []
        assert SoundCue.POWERUP not in audio.cues


class TestWaves:
    def test_cleared_field_starts_next_wave(self, asteroids):
        asteroids.asteroids = []
        asteroids.check_wave_complete()
        assert asteroids.wave == 2
        assert len(asteroids.asteroids) == 5

    def test_wave_not_complete_with_asteroids_left(self, asteroids):
        asteroids.check_wave_complete()
        assert asteroids.wave == 1


class TestUfo:
    def make_ufo(self, is_small, position=complex(100, 100)):
        return Ufo(
            position=position,
            velocity=complex(2, 0),
            is_small=is_small,
            radius=15.0 if is_small else 25.0,
            points=1000 if is_small else 200,
        )

    def test_small_ufo_aims_at_ship(self, asteroids):
        asteroids.ufo = self.make_ufo(is_small=True)
        asteroids.ship.position = complex(200, 100)

        asteroids.ufo_fire()

        bullet = asteroids.ufo_bullets[0]
        assert bullet.velocity == pytest.approx(complex(5, 0))
        assert bullet.lifetime == 2000

    def test_large_ufo_fires_at_speed(self, asteroids):
        asteroids.ufo = self.make_ufo(is_small=False)
        asteroids.ufo_fire()
        assert abs(asteroids.ufo_bullets[0].velocity) == pytest.approx(5.0)

    def test_spawns_after_interval(self, asteroids):
        asteroids.update_ufo(24999)
        assert asteroids.ufo is None
        asteroids.update_ufo(1)
        assert asteroids.ufo is not None
        assert asteroids.ufo_timer == 25000

    def test_spawn_enters_from_side(self, asteroids):
        asteroids.spawn_ufo()
        ufo = asteroids.ufo
        assert ufo.position.real in (-30.0, 830.0)
        assert 50 <= ufo.position.imag <= 550
        assert abs(ufo.velocity.real) == 2.0

    def test_despawns_past_horizontal_margin(self, asteroids):
        asteroids.ufo = self.make_ufo(is_small=False, position=complex(849, 300))
        asteroids.update_ufo(16)
        assert asteroids.ufo is None

    def test_shot_down_scores(self, asteroids):
        asteroids.asteroids = []
        asteroids.ufo = self.make_ufo(is_small=True)
        asteroids.bullets = [Bullet(position=complex(100, 100), velocity=0j, lifetime=1000)]

        asteroids.check_collisions()

        assert asteroids.ufo is None
        assert asteroids.score == 1000

    def test_ufo_bullet_kills_ship(self, asteroids):
        asteroids.asteroids = []
        asteroids.invincible_timer = 0
        asteroids.ufo_bullets = [Bullet(position=asteroids.ship.position, velocity=0j, lifetime=1000)]

        asteroids.check_collisions()

        assert asteroids.lives == 2
        assert asteroids.ufo_bullets == []


class TestInspection:
    def test_snapshot(self, asteroids):
        state = asteroids.get_state()
        assert state["game_id"] == "asteroids"
        assert state["wave"] == 1
        assert len(state["asteroids"]) == 4
        assert state["ufo"] is None
        assert state["ship"]["x"] == 400

    def test_reset_round_trip(self, asteroids, controls):
        asteroids.start()
        asteroids.add_score(300)
        asteroids.lose_life()
        asteroids.asteroids = []
        asteroids.check_wave_complete()

        asteroids.reset()

        assert asteroids.state == GameState.IDLE
        assert asteroids.score == 0
        assert asteroids.lives == 3
        assert asteroids.wave == 1
        assert len(asteroids.asteroids) == 4
        assert asteroids.bullets == []

    def test_render_does_not_mutate(self, asteroids, surface):
        before = asteroids.get_state()
        asteroids.render(surface)
        assert asteroids.get_state() == before
