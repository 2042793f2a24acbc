"""Session state machine and the per-frame simulation tick.

Owns the one World (entity, gate stream, session counters) and advances it
once per frame. Input arrives as commands queued between ticks and drained
at the start of the next one; the renderer reads immutable snapshots.

Tick order is fixed:
    commands -> physics -> gates (spawn, advance, collide, score)
    -> background scroll -> single OVER transition
"""

from collections import deque
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Deque, Optional, Tuple, Dict, Any
import logging
import random

from .audio import SoundBoard, SilentBoard
from .config import GameConfig, Tunables
from .constraints import ConfigurationError, ParameterConstraints, clamp_tunables
from .physics import Entity, step as step_entity, apply_jump
from .scores import ScoreStore, MemoryScoreStore
from .stream import ObstacleStream

logger = logging.getLogger(__name__)


class ReentrantTickError(RuntimeError):
    """tick() was called while another tick was still running."""


class Mode(Enum):
    IDLE = "idle"
    RUNNING = "running"
    OVER = "over"


class Command(Enum):
    START = "start"
    JUMP = "jump"
    PLAY_AGAIN = "play_again"
    MAIN_MENU = "main_menu"


@dataclass
class Session:
    """Coarse game state and counters."""
    mode: Mode = Mode.IDLE
    score: int = 0
    best_score: int = 0
    background_x: float = 0.0
    ticks: int = 0  # Ticks advanced in the current run


@dataclass
class World:
    """Everything the tick mutates, in one place."""
    entity: Entity
    stream: ObstacleStream
    session: Session = field(default_factory=Session)


@dataclass(frozen=True)
class EntitySnapshot:
    x: float
    y: float
    velocity: float
    radius: float
    hit_radius: float
    flapping: bool
    flap_timer: float


@dataclass(frozen=True)
class ObstacleSnapshot:
    x: float
    width: float
    top_height: float
    bottom_height: float
    scored: bool


@dataclass(frozen=True)
class WorldSnapshot:
    """Read-only view of the world after a tick, for rendering."""
    entity: EntitySnapshot
    obstacles: Tuple[ObstacleSnapshot, ...]
    background_x: float
    score: int
    best_score: int
    mode: Mode
    speed: float
    width: float
    height: float

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["mode"] = self.mode.value
        d["obstacles"] = [asdict(o) for o in self.obstacles]
        return d


class Simulation:
    """Fixed-step simulation core.

    Usage:
        sim = Simulation(GameConfig(), score_store=HighScoreStore())
        sim.submit(Command.START)
        while True:
            sim.submit(Command.JUMP)   # from an input handler, between ticks
            snapshot = sim.tick()      # once per frame
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        score_store: Optional[ScoreStore] = None,
        audio: Optional[SoundBoard] = None,
        rng: Optional[random.Random] = None,
    ):
        """Initialize the simulation in IDLE mode.

        Args:
            config: Game configuration. Uses defaults if None.
            score_store: Best-score persistence. In-memory if None.
            audio: Sound collaborator. Silent if None.
            rng: Random source for gate heights.

        Raises:
            ConfigurationError: if the gate geometry cannot fit the playfield.
        """
        self.config = config or GameConfig()

        stream_result = ParameterConstraints.validate_stream(
            self.config.stream, self.config.screen_height
        )
        if not stream_result.valid:
            raise ConfigurationError(
                f"Invalid gate geometry: {[v.message for v in stream_result.errors]}"
            )

        self.score_store = score_store or MemoryScoreStore()
        self.audio = audio or SilentBoard(enabled=False)
        self.tunables = self._validated(self.config.tunables)
        self.audio.enabled = self.tunables.sound_enabled

        entity = Entity.from_config(
            self.config.entity,
            y=self.spawn_y,
            radius=self.tunables.radius,
            hit_radius=self.tunables.hit_radius,
        )
        stream = ObstacleStream(
            self.config.stream,
            playfield_width=self.config.screen_width,
            playfield_height=self.config.screen_height,
            speed=self.tunables.speed,
            rng=rng,
        )
        self.world = World(entity=entity, stream=stream)
        self.world.session.best_score = self.score_store.load()

        self._commands: Deque[Command] = deque()
        self._in_tick = False

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def spawn_y(self) -> float:
        return self.config.screen_height / 2

    @property
    def mode(self) -> Mode:
        return self.world.session.mode

    @property
    def score(self) -> int:
        return self.world.session.score

    @property
    def best_score(self) -> int:
        return self.world.session.best_score

    @property
    def entity(self) -> Entity:
        return self.world.entity

    @property
    def stream(self) -> ObstacleStream:
        return self.world.stream

    # ------------------------------------------------------------------
    # Tunables
    # ------------------------------------------------------------------

    def _validated(self, tunables: Tunables) -> Tunables:
        return clamp_tunables(tunables, self.config.stream, self.config.screen_height)

    def set_tunables(self, tunables: Tunables) -> Tunables:
        """Validate and store new tunables.

        Radii and speed are read into the world on the next start/play-again;
        the sound flag applies immediately.

        Returns:
            The tunables actually stored (hit radius may be clamped).

        Raises:
            ConfigurationError: for non-finite or non-positive speed or radii.
        """
        self.tunables = self._validated(tunables)
        self.audio.enabled = self.tunables.sound_enabled
        return self.tunables

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def submit(self, command: Command) -> None:
        """Queue a command to be applied at the start of the next tick."""
        self._commands.append(command)

    def apply(self, command: Command) -> None:
        """Apply a command immediately."""
        if command is Command.START:
            self.start()
        elif command is Command.JUMP:
            self.jump()
        elif command is Command.PLAY_AGAIN:
            self.play_again()
        elif command is Command.MAIN_MENU:
            self.main_menu()
        else:
            raise ValueError(f"Unknown command: {command}")

    def _drain_commands(self) -> None:
        while self._commands:
            self.apply(self._commands.popleft())

    def _reset_world(self) -> None:
        """Full reset of entity, gates and run counters; best score survives."""
        t = self.tunables
        self.entity.reset(self.spawn_y, t.radius, t.hit_radius)
        self.stream.speed = t.speed
        self.stream.clear()
        session = self.world.session
        session.score = 0
        session.background_x = 0.0
        session.ticks = 0

    def _begin_run(self) -> None:
        self._reset_world()
        self.stream.spawn(self.entity)
        self.world.session.mode = Mode.RUNNING
        self.audio.start_music()

    def start(self) -> None:
        """Start a run from any state, resetting first."""
        self._begin_run()
        logger.info("Game started: speed=%.1f radius=%s hit_radius=%s",
                    self.tunables.speed, self.tunables.radius, self.tunables.hit_radius)

    def play_again(self) -> None:
        """Start a fresh run after game over; best score is kept."""
        self._begin_run()
        logger.info("Play again (best=%s)", self.best_score)

    def main_menu(self) -> None:
        """Return to the idle menu with a fully reset world."""
        self._reset_world()
        self.world.session.mode = Mode.IDLE
        self.audio.stop_music()
        logger.info("Main menu")

    def jump(self) -> bool:
        """Apply a jump if running. Returns whether it took effect."""
        if self.mode is not Mode.RUNNING:
            return False
        apply_jump(self.entity)
        self.audio.play("jump")
        return True

    def _game_over(self) -> None:
        session = self.world.session
        session.mode = Mode.OVER
        self.audio.play("crash")
        if session.score > session.best_score:
            session.best_score = session.score
            self.score_store.save(session.best_score)
            logger.info("Game over: score=%s (new best)", session.score)
        else:
            logger.info("Game over: score=%s best=%s", session.score, session.best_score)

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def tick(self) -> WorldSnapshot:
        """Advance the world by one frame and return the new snapshot.

        Any fault raised while draining commands or advancing (bad values,
        a failing score store or sound board) is logged and the simulation
        falls back to the idle menu instead of crashing the frame loop.

        Raises:
            ReentrantTickError: if called from inside another tick.
        """
        if self._in_tick:
            raise ReentrantTickError("tick() re-entered while a tick is in progress")
        self._in_tick = True
        try:
            self._drain_commands()
            if self.mode is Mode.RUNNING:
                self._advance()
        except ReentrantTickError:
            raise
        except Exception:
            logger.exception("Simulation fault, returning to menu")
            self.main_menu()
        finally:
            self._in_tick = False
        return self.snapshot()

    def _advance(self) -> None:
        session = self.world.session
        height = self.config.screen_height

        collided = step_entity(self.entity, height)

        events = self.stream.update(self.entity)
        collided = collided or events.collided

        if events.scored:
            session.score += events.scored
            for _ in range(events.scored):
                self.audio.play("point")
            logger.debug("Score: %s", session.score)

        self._scroll_background()
        session.ticks += 1

        if collided:
            self._game_over()

    def _scroll_background(self) -> None:
        session = self.world.session
        width = self.config.screen_width
        session.background_x -= self.stream.speed * self.config.background_speed_ratio
        if session.background_x <= -width:
            session.background_x += width

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------

    def snapshot(self) -> WorldSnapshot:
        e = self.entity
        session = self.world.session
        return WorldSnapshot(
            entity=EntitySnapshot(
                x=e.x,
                y=e.y,
                velocity=e.velocity,
                radius=e.radius,
                hit_radius=e.hit_radius,
                flapping=e.flapping,
                flap_timer=e.flap_timer,
            ),
            obstacles=tuple(
                ObstacleSnapshot(
                    x=o.x,
                    width=o.width,
                    top_height=o.top_height,
                    bottom_height=o.bottom_height,
                    scored=o.scored,
                )
                for o in self.stream
            ),
            background_x=session.background_x,
            score=session.score,
            best_score=session.best_score,
            mode=session.mode,
            speed=self.stream.speed,
            width=self.config.screen_width,
            height=self.config.screen_height,
        )
