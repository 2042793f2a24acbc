"""Obstacle stream: gate spawning, scrolling, collision and scoring.

Gates spawn at the right edge of the playfield, scroll left at a fixed
speed and are retired once fully off-screen. Spawn spacing is tracked with
a dedicated last_spawn_x rather than read back from the gate list, so
retiring the leftmost gate can never make the spacing check stale.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple
import logging
import math
import random

from .config import StreamConfig, DESIGN_WIDTH, DESIGN_HEIGHT
from .constraints import ConfigurationError, top_height_range
from .physics import Entity

logger = logging.getLogger(__name__)


@dataclass
class Obstacle:
    """A gate: solid top segment, gap, solid bottom segment."""
    x: float
    top_height: float
    bottom_height: float
    width: float = 50.0
    scored: bool = False

    @property
    def right(self) -> float:
        return self.x + self.width

    def bottom_edge(self, playfield_height: float) -> float:
        """y coordinate where the bottom segment starts."""
        return playfield_height - self.bottom_height


@dataclass
class StreamEvents:
    """What happened during one advance."""
    collided: bool = False
    scored: int = 0
    spawned: int = 0
    retired: int = 0


class ObstacleStream:
    """Ordered sequence of active gates, left to right in creation order."""

    def __init__(
        self,
        config: Optional[StreamConfig] = None,
        playfield_width: float = DESIGN_WIDTH,
        playfield_height: float = DESIGN_HEIGHT,
        speed: float = 2.0,
        rng: Optional[random.Random] = None,
    ):
        """Initialize an empty stream.

        Args:
            config: Gate geometry. Uses defaults if None.
            playfield_width: Gates spawn at this x.
            playfield_height: Total height split into top, gap and bottom.
            speed: Scroll speed in px/tick.
            rng: Random source for gate heights. Uses a fresh Random if None.
        """
        self.config = config or StreamConfig()
        self.playfield_width = playfield_width
        self.playfield_height = playfield_height
        self.speed = speed
        self.rng = rng or random.Random()

        self.obstacles: List[Obstacle] = []
        self.last_spawn_x: Optional[float] = None

    def __len__(self) -> int:
        return len(self.obstacles)

    def __iter__(self):
        return iter(self.obstacles)

    def clear(self) -> None:
        """Remove all gates and forget the last spawn."""
        self.obstacles = []
        self.last_spawn_x = None

    def top_height_bounds(self, hit_radius: float) -> Tuple[float, float]:
        """Inclusive (min_top, max_top) for a new gate.

        Raises:
            ConfigurationError: if hit_radius leaves no room for the gap.
        """
        min_top, max_top = top_height_range(hit_radius, self.config, self.playfield_height)
        if max_top < min_top:
            raise ConfigurationError(
                f"Hit radius {hit_radius} leaves no room for gap {self.config.gap} "
                f"(top range [{min_top}, {max_top}] is empty)"
            )
        return min_top, max_top

    def spawn(self, entity: Entity) -> Obstacle:
        """Append a new gate at the right edge.

        Gate height depends on the entity's current hit radius, so resizing
        the hitbox changes the very next gate.
        """
        min_top, max_top = self.top_height_bounds(entity.hit_radius)
        top_height = min_top + math.floor(self.rng.random() * (max_top - min_top + 1))

        obstacle = Obstacle(
            x=float(self.playfield_width),
            top_height=top_height,
            bottom_height=self.playfield_height - top_height - self.config.gap,
            width=self.config.width,
        )
        self.obstacles.append(obstacle)
        self.last_spawn_x = obstacle.x
        logger.debug("Gate spawned: x=%.1f top=%.1f bottom=%.1f",
                     obstacle.x, obstacle.top_height, obstacle.bottom_height)
        return obstacle

    def should_spawn(self) -> bool:
        """Empty stream, or the newest gate has moved at least one spacing in."""
        if not self.obstacles or self.last_spawn_x is None:
            return True
        return self.last_spawn_x <= self.playfield_width - self.config.spacing

    def maybe_spawn(self, entity: Entity) -> Optional[Obstacle]:
        if self.should_spawn():
            return self.spawn(entity)
        return None

    def overlaps(self, entity: Entity, obstacle: Obstacle) -> bool:
        """Whether the entity's collision circle hits either segment."""
        r = entity.hit_radius
        horizontal = entity.x + r > obstacle.x and entity.x - r < obstacle.right
        if not horizontal:
            return False
        return (
            entity.y - r < obstacle.top_height
            or entity.y + r > obstacle.bottom_edge(self.playfield_height)
        )

    def advance(self, entity: Entity) -> StreamEvents:
        """Scroll every gate left by speed and evaluate it against the entity.

        First pass moves, checks collision, scores and marks retirements.
        Second pass drops retired gates, preserving order.
        """
        events = StreamEvents()
        retired = []

        for obstacle in self.obstacles:
            obstacle.x -= self.speed

            if self.overlaps(entity, obstacle):
                events.collided = True

            if not obstacle.scored and obstacle.right < entity.x - entity.hit_radius:
                obstacle.scored = True
                events.scored += 1

            if obstacle.right < 0:
                retired.append(obstacle)

        if self.last_spawn_x is not None:
            self.last_spawn_x -= self.speed

        if retired:
            # Identity, not equality: two gates can have identical fields
            retired_ids = {id(o) for o in retired}
            self.obstacles = [o for o in self.obstacles if id(o) not in retired_ids]
            events.retired = len(retired)

        return events

    def update(self, entity: Entity) -> StreamEvents:
        """One tick of the stream: spawn if due, then advance."""
        spawned = self.maybe_spawn(entity)
        events = self.advance(entity)
        events.spawned = 1 if spawned is not None else 0
        return events

    def next_obstacle(self, entity: Entity) -> Optional[Obstacle]:
        """First gate whose right edge is still ahead of the entity's hitbox."""
        for obstacle in self.obstacles:
            if obstacle.right >= entity.x - entity.hit_radius:
                return obstacle
        return None
