"""Entity physics: per-tick integration of the cow under constant gravity.

All quantities are in per-tick units (one tick = one rendered frame).
The y axis points down, so positive velocity means falling.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .config import EntityConfig, DESIGN_HEIGHT


@dataclass
class Entity:
    """The player-controlled body.

    radius is only used for drawing; hit_radius is the only one used for
    collision checks and gate generation.
    """
    x: float = 50.0
    y: float = DESIGN_HEIGHT / 2
    velocity: float = 0.0
    radius: float = 20.0
    hit_radius: float = 20.0
    gravity: float = 0.5
    jump_impulse: float = -10.0
    flapping: bool = False
    flap_timer: float = 0.0
    flap_speed: float = 0.1
    flap_velocity_factor: float = 0.02

    @classmethod
    def from_config(
        cls,
        config: Optional[EntityConfig] = None,
        y: float = DESIGN_HEIGHT / 2,
        radius: float = 20.0,
        hit_radius: float = 20.0,
    ) -> "Entity":
        """Create an entity from physics constants plus tunable radii."""
        config = config or EntityConfig()
        return cls(
            x=config.x,
            y=y,
            radius=radius,
            hit_radius=hit_radius,
            gravity=config.gravity,
            jump_impulse=config.jump_impulse,
            flap_speed=config.flap_speed,
            flap_velocity_factor=config.flap_velocity_factor,
        )

    def reset(self, y: float, radius: float, hit_radius: float) -> None:
        """Reset position, velocity and animation in place. x never changes."""
        self.y = y
        self.velocity = 0.0
        self.radius = radius
        self.hit_radius = hit_radius
        self.flapping = False
        self.flap_timer = 0.0

    @property
    def hitbox(self) -> Tuple[float, float, float, float]:
        """(left, top, right, bottom) of the collision circle's bounding box."""
        r = self.hit_radius
        return self.x - r, self.y - r, self.x + r, self.y + r


def out_of_bounds(entity: Entity, playfield_height: float) -> bool:
    """Whether the collision circle pokes above the top or below the bottom."""
    _, top, _, bottom = entity.hitbox
    return bottom > playfield_height or top < 0


def step(entity: Entity, playfield_height: float) -> bool:
    """Advance the entity by one tick.

    Velocity is updated before position. The flap animation runs faster the
    faster the cow moves in either direction.

    Returns:
        True if the entity is now outside the playfield (boundary collision).
    """
    entity.velocity += entity.gravity
    entity.y += entity.velocity

    entity.flap_timer += abs(entity.velocity) * entity.flap_velocity_factor + entity.flap_speed
    if entity.flap_timer >= 1:
        entity.flap_timer = 0.0
        entity.flapping = not entity.flapping

    return out_of_bounds(entity, playfield_height)


def apply_jump(entity: Entity) -> None:
    """Set velocity to the jump impulse and show the flapping frame.

    Mode gating (only while running) is the session's job.
    """
    entity.velocity = entity.jump_impulse
    entity.flapping = True
