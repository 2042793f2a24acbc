"""pygame front-end: window, menus, input mapping and drawing.

The engine owns no game rules. It turns key/mouse events into simulation
commands, calls Simulation.tick() once per frame and draws the snapshot.
"""

import logging
import pygame
from dataclasses import replace
from typing import Optional, Tuple

from .audio import SoundBoard
from .config import GameConfig, Tunables
from .constraints import ConfigurationError
from .scores import ScoreStore, HighScoreStore
from .session import Simulation, Command, Mode, WorldSnapshot

logger = logging.getLogger(__name__)


# Colors (RGB)
COLOR_SKY = (135, 206, 235)
COLOR_FIELD = (0, 119, 69)
COLOR_DIRT = (139, 69, 19)
COLOR_BARN = (255, 0, 0)
COLOR_HAY = (255, 215, 0)
COLOR_GATE_DARK = (34, 139, 34)
COLOR_GATE_LIGHT = (50, 205, 50)
COLOR_GATE_CAP = (0, 100, 0)
COLOR_OUTLINE = (0, 0, 0)
COLOR_COW = (250, 250, 240)
COLOR_COW_SPOT = (40, 40, 40)
COLOR_SCORE_BOX = (212, 166, 124)
COLOR_TEXT = (0, 0, 0)
COLOR_MENU_TEXT = (255, 255, 255)
COLOR_GAME_OVER = (224, 108, 117)

GATE_CAP_HEIGHT = 20
GATE_CAP_OVERHANG = 5
GROUND_HEIGHT = 100


def _draw_background(surface: pygame.Surface, snapshot: WorldSnapshot) -> None:
    """Farm scene drawn twice side by side so the scroll wraps seamlessly."""
    w, h = int(snapshot.width), int(snapshot.height)
    surface.fill(COLOR_SKY)
    for offset in (0, w):
        x0 = int(snapshot.background_x) + offset
        pygame.draw.rect(surface, COLOR_FIELD, (x0, h // 2, w, h // 2))
        pygame.draw.rect(surface, COLOR_DIRT, (x0, h - GROUND_HEIGHT, w, GROUND_HEIGHT))
        pygame.draw.rect(surface, COLOR_HAY, (x0 + 50, h - GROUND_HEIGHT, 100, 60))
        pygame.draw.rect(surface, COLOR_BARN, (x0 + 200, h - 60, 50, 40))


def _draw_gates(surface: pygame.Surface, snapshot: WorldSnapshot) -> None:
    h = snapshot.height
    for gate in snapshot.obstacles:
        x, w = int(gate.x), int(gate.width)
        top = int(gate.top_height)
        bottom_y = int(h - gate.bottom_height)

        # Top segment with cap at its lower end
        pygame.draw.rect(surface, COLOR_GATE_DARK, (x, 0, w, max(top - GATE_CAP_HEIGHT, 0)))
        pygame.draw.rect(surface, COLOR_GATE_LIGHT, (x + w // 2, 0, w - w // 2, max(top - GATE_CAP_HEIGHT, 0)))
        cap = (x - GATE_CAP_OVERHANG, top - GATE_CAP_HEIGHT, w + 2 * GATE_CAP_OVERHANG, GATE_CAP_HEIGHT)
        pygame.draw.rect(surface, COLOR_GATE_CAP, cap)
        pygame.draw.rect(surface, COLOR_OUTLINE, cap, width=2)

        # Bottom segment with cap at its upper end
        body_h = int(gate.bottom_height) - GATE_CAP_HEIGHT
        pygame.draw.rect(surface, COLOR_GATE_DARK, (x, bottom_y + GATE_CAP_HEIGHT, w, max(body_h, 0)))
        pygame.draw.rect(surface, COLOR_GATE_LIGHT, (x + w // 2, bottom_y + GATE_CAP_HEIGHT, w - w // 2, max(body_h, 0)))
        cap = (x - GATE_CAP_OVERHANG, bottom_y, w + 2 * GATE_CAP_OVERHANG, GATE_CAP_HEIGHT)
        pygame.draw.rect(surface, COLOR_GATE_CAP, cap)
        pygame.draw.rect(surface, COLOR_OUTLINE, cap, width=2)


def _draw_cow(surface: pygame.Surface, snapshot: WorldSnapshot) -> None:
    """Cow drawn at its visual radius; the flapping frame raises the ears."""
    e = snapshot.entity
    cx, cy, r = int(e.x), int(e.y), max(int(e.radius), 1)
    pygame.draw.circle(surface, COLOR_COW, (cx, cy), r)
    pygame.draw.circle(surface, COLOR_COW_SPOT, (cx - r // 3, cy + r // 4), max(r // 4, 1))
    pygame.draw.circle(surface, COLOR_OUTLINE, (cx + r // 2, cy - r // 4), max(r // 8, 1))
    ear_dy = -r if e.flapping else -r // 2
    pygame.draw.line(surface, COLOR_OUTLINE, (cx - r // 2, cy - r // 2), (cx - r, cy + ear_dy), 2)


def _draw_score(surface: pygame.Surface, snapshot: WorldSnapshot) -> None:
    font = pygame.font.Font(None, 40)
    text = font.render(f"Score: {snapshot.score}", True, COLOR_TEXT)
    box = text.get_rect(topleft=(10, 15)).inflate(10, 10)
    pygame.draw.rect(surface, COLOR_SCORE_BOX, box, border_radius=10)
    surface.blit(text, (10, 15))


def draw_world(surface: pygame.Surface, snapshot: WorldSnapshot, hud: bool = True) -> None:
    """Draw a snapshot onto a surface of the playfield's logical size."""
    _draw_background(surface, snapshot)
    _draw_gates(surface, snapshot)
    _draw_cow(surface, snapshot)
    if hud:
        _draw_score(surface, snapshot)


class FlappyEngine:
    """Main game engine: pygame window around a Simulation.

    Handles:
    - Game loop with fixed timestep
    - Keyboard/mouse input mapped to commands
    - Start / settings / game-over menus
    - Rendering
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        score_store: Optional[ScoreStore] = None,
        audio: Optional[SoundBoard] = None,
    ):
        """Initialize game engine.

        Args:
            config: Game configuration. Uses defaults if None.
            score_store: Best-score storage. JSON file in the home directory if None.
            audio: Sound board. Reads assets from ./assets if None.
        """
        self.config = config or GameConfig()

        pygame.init()
        self.window_size = (
            int(self.config.screen_width * self.config.window_scale),
            int(self.config.screen_height * self.config.window_scale),
        )
        self.screen = pygame.display.set_mode(self.window_size)
        pygame.display.set_caption("Flappy Cow")
        self.clock = pygame.time.Clock()

        # Logical playfield; scaled to the window on flip
        self.canvas = pygame.Surface((self.config.screen_width, self.config.screen_height))

        self.simulation = Simulation(
            self.config,
            score_store=score_store or HighScoreStore(),
            audio=audio or SoundBoard(enabled=self.config.tunables.sound_enabled),
        )
        self.running = False
        self.snapshot = self.simulation.snapshot()

    @property
    def mode(self) -> Mode:
        return self.simulation.mode

    def _set_tunables(self, tunables: Tunables) -> None:
        try:
            applied = self.simulation.set_tunables(tunables)
        except ConfigurationError as exc:
            logger.warning("Rejected settings: %s", exc)
            return
        logger.info("Settings: speed=%.1f radius=%s hit_radius=%s sound=%s",
                    applied.speed, applied.radius, applied.hit_radius, applied.sound_enabled)

    def _handle_menu_key(self, key: int) -> None:
        """Start menu: start the game or adjust settings."""
        t = self.simulation.tunables
        if key in (pygame.K_SPACE, pygame.K_RETURN):
            self.simulation.submit(Command.START)
        elif key == pygame.K_ESCAPE:
            self.running = False
        elif key == pygame.K_UP:
            self._set_tunables(t.with_speed(t.speed + Tunables.SPEED_STEP))
        elif key == pygame.K_DOWN:
            self._set_tunables(t.with_speed(t.speed - Tunables.SPEED_STEP))
        elif key == pygame.K_RIGHT:
            self._set_tunables(t.with_radius(t.radius + Tunables.RADIUS_STEP))
        elif key == pygame.K_LEFT:
            self._set_tunables(t.with_radius(t.radius - Tunables.RADIUS_STEP))
        elif key == pygame.K_RIGHTBRACKET:
            self._set_tunables(t.with_hit_radius(t.hit_radius + Tunables.RADIUS_STEP))
        elif key == pygame.K_LEFTBRACKET:
            self._set_tunables(t.with_hit_radius(t.hit_radius - Tunables.RADIUS_STEP))
        elif key == pygame.K_s:
            self._set_tunables(replace(t, sound_enabled=not t.sound_enabled))

    def handle_key(self, key: int) -> None:
        """Map a key press to a command for the current mode."""
        mode = self.mode
        if mode is Mode.IDLE:
            self._handle_menu_key(key)
        elif mode is Mode.RUNNING:
            if key in (pygame.K_SPACE, pygame.K_UP, pygame.K_w):
                self.simulation.submit(Command.JUMP)
            elif key == pygame.K_ESCAPE:
                self.simulation.submit(Command.MAIN_MENU)
        elif mode is Mode.OVER:
            if key in (pygame.K_r, pygame.K_SPACE, pygame.K_RETURN):
                self.simulation.submit(Command.PLAY_AGAIN)
            elif key in (pygame.K_m, pygame.K_ESCAPE):
                self.simulation.submit(Command.MAIN_MENU)

    def handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                self.handle_key(event.key)
            elif event.type == pygame.MOUSEBUTTONDOWN:
                # Tap to flap
                if self.mode is Mode.RUNNING:
                    self.simulation.submit(Command.JUMP)

    def update(self) -> WorldSnapshot:
        """Advance the simulation by one frame."""
        self.snapshot = self.simulation.tick()
        return self.snapshot

    def _draw_lines(self, lines, color: Tuple[int, int, int], top: int) -> None:
        font = pygame.font.Font(None, 32)
        cx = self.config.screen_width // 2
        for i, line in enumerate(lines):
            surface = font.render(line, True, color)
            self.canvas.blit(surface, surface.get_rect(center=(cx, top + i * 34)))

    def _render_menu(self) -> None:
        overlay = pygame.Surface((self.config.screen_width, self.config.screen_height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 150))
        self.canvas.blit(overlay, (0, 0))

        t = self.simulation.tunables
        if self.mode is Mode.IDLE:
            self._draw_lines([
                "FLAPPY COW",
                f"High score: {self.snapshot.best_score}",
                "",
                "SPACE to start",
                f"Speed (up/down): {t.speed:.1f}",
                f"Cow size (left/right): {t.radius}",
                f"Hit radius ([ / ]): {t.hit_radius}",
                f"Sound (S): {'on' if t.sound_enabled else 'off'}",
            ], COLOR_MENU_TEXT, 160)
        elif self.mode is Mode.OVER:
            self._draw_lines([
                "GAME OVER",
                f"Score: {self.snapshot.score}",
                f"High score: {self.snapshot.best_score}",
                "",
                "R to play again",
                "M for main menu",
            ], COLOR_MENU_TEXT, 220)

    def render(self) -> None:
        """Render current snapshot."""
        draw_world(self.canvas, self.snapshot, hud=self.mode is not Mode.IDLE)
        if self.mode is not Mode.RUNNING:
            self._render_menu()

        if self.window_size != self.canvas.get_size():
            pygame.transform.scale(self.canvas, self.window_size, self.screen)
        else:
            self.screen.blit(self.canvas, (0, 0))
        pygame.display.flip()

    def run(self) -> None:
        """Main game loop: one tick per frame at config.fps."""
        self.running = True
        logger.info("Engine running at %s fps", self.config.fps)

        while self.running:
            self.handle_events()
            self.update()
            self.render()
            self.clock.tick(self.config.fps)

        self.simulation.audio.stop_music()
        pygame.quit()
