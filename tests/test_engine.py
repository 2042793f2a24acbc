"""Headless tests for the pygame front-end."""

import pygame
import pytest

from flappy_cow.audio import SilentBoard
from flappy_cow.config import GameConfig, Tunables
from flappy_cow.engine import FlappyEngine, draw_world
from flappy_cow.scores import MemoryScoreStore
from flappy_cow.session import Mode


@pytest.fixture
def engine():
    eng = FlappyEngine(GameConfig(), score_store=MemoryScoreStore(), audio=SilentBoard())
    yield eng
    pygame.quit()


class TestMenuKeys:
    def test_space_starts(self, engine):
        engine.handle_key(pygame.K_SPACE)
        assert engine.mode is Mode.IDLE  # queued until the next frame
        engine.update()
        assert engine.mode is Mode.RUNNING

    def test_speed_keys(self, engine):
        engine.handle_key(pygame.K_UP)
        assert engine.simulation.tunables.speed == 2.5
        engine.handle_key(pygame.K_DOWN)
        engine.handle_key(pygame.K_DOWN)
        assert engine.simulation.tunables.speed == 1.5

    def test_speed_clamped_to_range(self, engine):
        for _ in range(20):
            engine.handle_key(pygame.K_UP)
        assert engine.simulation.tunables.speed == Tunables.SPEED_RANGE[1]

    def test_radius_keys(self, engine):
        engine.handle_key(pygame.K_RIGHT)
        assert engine.simulation.tunables.radius == 22
        engine.handle_key(pygame.K_LEFTBRACKET)
        assert engine.simulation.tunables.hit_radius == 18

    def test_sound_toggle(self, engine):
        engine.handle_key(pygame.K_s)
        assert not engine.simulation.tunables.sound_enabled
        assert not engine.simulation.audio.enabled

    def test_escape_quits(self, engine):
        engine.running = True
        engine.handle_key(pygame.K_ESCAPE)
        assert not engine.running


class TestRunningKeys:
    def test_jump(self, engine):
        engine.simulation.start()
        engine.handle_key(pygame.K_SPACE)
        engine.update()
        assert engine.simulation.entity.velocity == -9.5

    def test_escape_to_menu(self, engine):
        engine.simulation.start()
        engine.handle_key(pygame.K_ESCAPE)
        engine.update()
        assert engine.mode is Mode.IDLE

    def test_settings_keys_ignored_while_running(self, engine):
        engine.simulation.start()
        engine.handle_key(pygame.K_DOWN)
        assert engine.simulation.tunables.speed == 2.0


class TestOverKeys:
    def _crash(self, engine):
        engine.simulation.start()
        engine.simulation.entity.y = 10_000
        engine.update()
        assert engine.mode is Mode.OVER

    def test_play_again(self, engine):
        self._crash(engine)
        engine.handle_key(pygame.K_r)
        engine.update()
        assert engine.mode is Mode.RUNNING

    def test_main_menu(self, engine):
        self._crash(engine)
        engine.handle_key(pygame.K_m)
        engine.update()
        assert engine.mode is Mode.IDLE

    def test_jump_key_does_not_jump(self, engine):
        self._crash(engine)
        engine.handle_key(pygame.K_UP)
        v = engine.simulation.entity.velocity
        engine.update()
        assert engine.simulation.entity.velocity == v


class TestRender:
    def test_render_every_mode(self, engine):
        engine.render()
        engine.simulation.start()
        engine.update()
        engine.render()
        engine.simulation.entity.y = 10_000
        engine.update()
        engine.render()
        assert engine.mode is Mode.OVER

    def test_scaled_window(self):
        config = GameConfig(window_scale=0.5)
        eng = FlappyEngine(config, score_store=MemoryScoreStore(), audio=SilentBoard())
        try:
            assert eng.window_size == (187, 333)
            eng.render()
        finally:
            pygame.quit()

    def test_draw_world_on_plain_surface(self, engine):
        engine.simulation.start()
        surface = pygame.Surface((375, 667))
        draw_world(surface, engine.simulation.tick(), hud=False)
        # Sky at the top-left corner, away from gates and cow
        assert surface.get_at((0, 0))[:3] == (135, 206, 235)
