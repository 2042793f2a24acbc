"""Tests for configuration dataclasses and presets."""

import pytest

from flappy_cow.config import (
    EntityConfig,
    StreamConfig,
    Tunables,
    GameConfig,
    CONFIGS,
    DESIGN_WIDTH,
    DESIGN_HEIGHT,
)


class TestEntityConfig:
    def test_defaults(self):
        config = EntityConfig()
        assert config.x == 50.0
        assert config.gravity == 0.5
        assert config.jump_impulse == -10.0
        assert config.flap_speed == 0.1

    def test_round_trip(self):
        config = EntityConfig(gravity=0.4, jump_impulse=-9.0)
        assert EntityConfig.from_dict(config.to_dict()) == config


class TestStreamConfig:
    def test_defaults(self):
        config = StreamConfig()
        assert config.width == 50.0
        assert config.gap == 150.0
        assert config.spacing == 200.0
        assert config.margin == 50.0

    def test_from_partial_dict(self):
        config = StreamConfig.from_dict({"gap": 180.0})
        assert config.gap == 180.0
        assert config.spacing == 200.0


class TestTunables:
    def test_defaults(self):
        t = Tunables()
        assert t.speed == 2.0
        assert t.radius == 20
        assert t.hit_radius == 20
        assert t.sound_enabled is True

    def test_radii_are_independent(self):
        t = Tunables(radius=30, hit_radius=10)
        assert t.radius == 30
        assert t.hit_radius == 10

    def test_with_speed_clamps_to_slider_range(self):
        t = Tunables()
        assert t.with_speed(100.0).speed == Tunables.SPEED_RANGE[1]
        assert t.with_speed(-3.0).speed == Tunables.SPEED_RANGE[0]
        assert t.with_speed(3.0).speed == 3.0

    def test_with_radius_does_not_touch_hit_radius(self):
        t = Tunables(radius=20, hit_radius=14).with_radius(30)
        assert t.radius == 30
        assert t.hit_radius == 14

    def test_with_hit_radius_clamps(self):
        t = Tunables().with_hit_radius(1000)
        assert t.hit_radius == Tunables.HIT_RADIUS_RANGE[1]

    def test_sample_within_ranges(self):
        for _ in range(20):
            t = Tunables.sample()
            assert Tunables.SPEED_RANGE[0] <= t.speed <= Tunables.SPEED_RANGE[1]
            assert Tunables.RADIUS_RANGE[0] <= t.radius <= Tunables.RADIUS_RANGE[1]
            assert Tunables.HIT_RADIUS_RANGE[0] <= t.hit_radius <= Tunables.HIT_RADIUS_RANGE[1]

    def test_from_dict_coerces_types(self):
        t = Tunables.from_dict({"speed": "2.5", "radius": 22.0, "hit_radius": "18"})
        assert t.speed == 2.5
        assert t.radius == 22
        assert t.hit_radius == 18


class TestGameConfig:
    def test_defaults(self):
        config = GameConfig()
        assert config.screen_width == DESIGN_WIDTH == 375
        assert config.screen_height == DESIGN_HEIGHT == 667
        assert config.fps == 60
        assert config.background_speed_ratio == 0.5
        assert isinstance(config.tunables, Tunables)

    def test_to_dict_nested(self):
        d = GameConfig().to_dict()
        assert d["tunables"]["speed"] == 2.0
        assert d["stream"]["gap"] == 150.0
        assert d["entity"]["gravity"] == 0.5

    def test_from_dict_round_trip(self):
        config = GameConfig(tunables=Tunables(speed=3.0, hit_radius=12))
        restored = GameConfig.from_dict(config.to_dict())
        assert restored.tunables == config.tunables
        assert restored.stream == config.stream

    def test_sample_tunables(self):
        config = GameConfig.sample_tunables()
        assert isinstance(config.tunables, Tunables)
        assert config.stream == StreamConfig()


class TestPresets:
    def test_all_presets_exist(self):
        for name in ["default", "easy", "hard", "calf", "practice"]:
            assert name in CONFIGS

    def test_easy_is_more_forgiving_than_hard(self):
        easy, hard = CONFIGS["easy"].tunables, CONFIGS["hard"].tunables
        assert easy.speed < hard.speed
        assert easy.hit_radius < hard.hit_radius

    def test_easy_hitbox_smaller_than_sprite(self):
        t = CONFIGS["easy"].tunables
        assert t.hit_radius < t.radius
