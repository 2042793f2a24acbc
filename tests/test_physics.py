"""Tests for entity physics."""

import pytest

from flappy_cow.config import EntityConfig
from flappy_cow.physics import Entity, step, apply_jump, out_of_bounds

HEIGHT = 667


class TestEntity:
    def test_defaults(self):
        e = Entity()
        assert e.x == 50.0
        assert e.y == pytest.approx(333.5)
        assert e.velocity == 0.0
        assert e.gravity == 0.5
        assert e.jump_impulse == -10.0
        assert not e.flapping

    def test_from_config(self):
        e = Entity.from_config(EntityConfig(gravity=0.3), y=100.0, radius=25, hit_radius=15)
        assert e.gravity == 0.3
        assert e.y == 100.0
        assert e.radius == 25
        assert e.hit_radius == 15

    def test_reset_keeps_x(self):
        e = Entity(x=50.0, y=10.0, velocity=7.0, flapping=True, flap_timer=0.6)
        e.reset(y=333.5, radius=30, hit_radius=12)
        assert e.x == 50.0
        assert e.y == 333.5
        assert e.velocity == 0.0
        assert e.radius == 30
        assert e.hit_radius == 12
        assert not e.flapping
        assert e.flap_timer == 0.0

    def test_hitbox_uses_hit_radius(self):
        e = Entity(x=50.0, y=100.0, radius=40, hit_radius=10)
        assert e.hitbox == (40.0, 90.0, 60.0, 110.0)

    def test_bounds_follow_hitbox_not_sprite(self):
        # Sprite pokes out of the top, hitbox does not
        e = Entity(y=15.0, radius=40, hit_radius=10)
        assert e.hitbox[1] == 5.0
        assert not out_of_bounds(e, HEIGHT)
        e.y = HEIGHT - 9.0
        assert e.hitbox[3] > HEIGHT
        assert out_of_bounds(e, HEIGHT)


class TestStep:
    def test_velocity_updates_before_position(self):
        e = Entity(y=300.0, velocity=2.0)
        step(e, HEIGHT)
        assert e.velocity == 2.5
        assert e.y == 302.5

    def test_two_ticks_from_rest(self):
        """gravity=0.5, v0=0: +0.5 then +1.0."""
        e = Entity(y=300.0)
        step(e, HEIGHT)
        assert e.velocity == 0.5
        assert e.y == 300.5
        step(e, HEIGHT)
        assert e.velocity == 1.0
        assert e.y == 301.5

    def test_flap_timer_advances_with_speed(self):
        slow = Entity(y=300.0, velocity=-0.5)
        fast = Entity(y=300.0, velocity=-20.0)
        step(slow, HEIGHT)
        step(fast, HEIGHT)
        # |0| * 0.02 + 0.1 vs |-19.5| * 0.02 + 0.1
        assert slow.flap_timer == pytest.approx(0.1)
        assert fast.flap_timer == pytest.approx(0.49)

    def test_flap_toggles_when_timer_wraps(self):
        e = Entity(y=300.0, flap_timer=0.95)
        step(e, HEIGHT)
        assert e.flapping
        assert e.flap_timer == 0.0
        e.flap_timer = 0.95
        step(e, HEIGHT)
        assert not e.flapping

    def test_no_collision_in_middle(self):
        e = Entity(y=300.0)
        assert step(e, HEIGHT) is False

    def test_floor_collision_uses_hit_radius(self):
        e = Entity(y=640.0, velocity=0.0, radius=5, hit_radius=30)
        # 640.5 + 30 > 667
        assert step(e, HEIGHT) is True

    def test_ceiling_collision(self):
        e = Entity(y=25.0, velocity=-10.0, hit_radius=20)
        # y = 15.5, 15.5 - 20 < 0
        assert step(e, HEIGHT) is True

    def test_visual_radius_ignored_for_bounds(self):
        e = Entity(y=620.0, radius=60, hit_radius=10)
        assert not out_of_bounds(e, HEIGHT)

    def test_exact_boundary_is_not_collision(self):
        e = Entity(y=647.0, hit_radius=20)
        assert not out_of_bounds(e, HEIGHT)
        e.y = 20.0
        assert not out_of_bounds(e, HEIGHT)


class TestJump:
    def test_sets_velocity_to_impulse(self):
        e = Entity(velocity=8.0)
        apply_jump(e)
        assert e.velocity == -10.0
        assert e.flapping

    def test_jump_then_step(self):
        e = Entity(y=300.0, velocity=5.0)
        apply_jump(e)
        step(e, HEIGHT)
        assert e.velocity == -9.5
        assert e.y == 290.5

    def test_jump_does_not_stack(self):
        e = Entity()
        apply_jump(e)
        apply_jump(e)
        assert e.velocity == -10.0
