"""Configuration system for the flappy-cow game.

Fixed game constants and user-adjustable tunables are kept apart:
- EntityConfig: cow physics constants (gravity, jump impulse, flap animation)
- StreamConfig: gate geometry and spawn spacing
- Tunables: what the settings menu exposes (speed, sizes, sound)
- GameConfig: everything above plus playfield and frame rate

Tunables are only read into the live world at session start; see
session.Simulation.set_tunables for validation and clamping.
"""

from dataclasses import dataclass, field, replace
from typing import Tuple, Dict, Any, ClassVar
import random


# Logical playfield size; rendering scales to the window
DESIGN_WIDTH = 375
DESIGN_HEIGHT = 667


@dataclass
class EntityConfig:
    """Physics constants for the player entity (per-tick units)."""

    x: float = 50.0  # Fixed horizontal position
    gravity: float = 0.5  # Added to velocity every tick (positive = down)
    jump_impulse: float = -10.0  # Velocity set on jump (negative = up)
    flap_speed: float = 0.1  # Constant flap-timer increment per tick
    flap_velocity_factor: float = 0.02  # Extra flap-timer increment per unit |velocity|

    def to_dict(self) -> Dict[str, float]:
        return {
            "x": self.x,
            "gravity": self.gravity,
            "jump_impulse": self.jump_impulse,
            "flap_speed": self.flap_speed,
            "flap_velocity_factor": self.flap_velocity_factor,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, float]) -> "EntityConfig":
        return cls(
            x=d.get("x", 50.0),
            gravity=d.get("gravity", 0.5),
            jump_impulse=d.get("jump_impulse", -10.0),
            flap_speed=d.get("flap_speed", 0.1),
            flap_velocity_factor=d.get("flap_velocity_factor", 0.02),
        )


@dataclass
class StreamConfig:
    """Gate geometry and spawn spacing."""

    width: float = 50.0  # Gate width
    gap: float = 150.0  # Vertical opening between top and bottom segments
    spacing: float = 200.0  # Horizontal distance between consecutive spawns
    margin: float = 50.0  # Minimum segment height beyond the hit radius

    def to_dict(self) -> Dict[str, float]:
        return {
            "width": self.width,
            "gap": self.gap,
            "spacing": self.spacing,
            "margin": self.margin,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, float]) -> "StreamConfig":
        return cls(
            width=d.get("width", 50.0),
            gap=d.get("gap", 150.0),
            spacing=d.get("spacing", 200.0),
            margin=d.get("margin", 50.0),
        )


@dataclass
class Tunables:
    """User-adjustable settings, exposed by the settings menu.

    radius and hit_radius are independent: radius is only drawn,
    hit_radius is the only one used for collision and gate generation.
    """

    speed: float = 2.0  # Gate scroll speed (px/tick)
    radius: int = 20  # Visual radius
    hit_radius: int = 20  # Collision radius
    sound_enabled: bool = True

    # Menu slider ranges
    SPEED_RANGE: ClassVar[Tuple[float, float]] = (1.0, 5.0)
    RADIUS_RANGE: ClassVar[Tuple[int, int]] = (10, 40)
    HIT_RADIUS_RANGE: ClassVar[Tuple[int, int]] = (5, 40)

    # Menu slider step sizes
    SPEED_STEP: ClassVar[float] = 0.5
    RADIUS_STEP: ClassVar[int] = 2

    @classmethod
    def sample(cls) -> "Tunables":
        """Sample random tunables within the slider ranges."""
        return cls(
            speed=random.uniform(*cls.SPEED_RANGE),
            radius=random.randint(*cls.RADIUS_RANGE),
            hit_radius=random.randint(*cls.HIT_RADIUS_RANGE),
        )

    def with_speed(self, speed: float) -> "Tunables":
        lo, hi = self.SPEED_RANGE
        return replace(self, speed=min(max(speed, lo), hi))

    def with_radius(self, radius: int) -> "Tunables":
        lo, hi = self.RADIUS_RANGE
        return replace(self, radius=min(max(radius, lo), hi))

    def with_hit_radius(self, hit_radius: int) -> "Tunables":
        lo, hi = self.HIT_RADIUS_RANGE
        return replace(self, hit_radius=min(max(hit_radius, lo), hi))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "speed": self.speed,
            "radius": self.radius,
            "hit_radius": self.hit_radius,
            "sound_enabled": self.sound_enabled,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Tunables":
        return cls(
            speed=float(d.get("speed", 2.0)),
            radius=int(d.get("radius", 20)),
            hit_radius=int(d.get("hit_radius", 20)),
            sound_enabled=bool(d.get("sound_enabled", True)),
        )


@dataclass
class GameConfig:
    """Complete game configuration."""
    entity: EntityConfig = field(default_factory=EntityConfig)
    stream: StreamConfig = field(default_factory=StreamConfig)
    tunables: Tunables = field(default_factory=Tunables)

    screen_width: int = DESIGN_WIDTH
    screen_height: int = DESIGN_HEIGHT
    fps: int = 60
    background_speed_ratio: float = 0.5  # Background scrolls at this fraction of gate speed

    # Window scale for the pygame front-end (logical size stays fixed)
    window_scale: float = 1.0

    @classmethod
    def sample_tunables(cls) -> "GameConfig":
        """Config with randomly sampled tunables and default constants."""
        return cls(tunables=Tunables.sample())

    def to_dict(self) -> Dict[str, Any]:
        """Convert to nested dictionary."""
        return {
            "entity": self.entity.to_dict(),
            "stream": self.stream.to_dict(),
            "tunables": self.tunables.to_dict(),
            "screen_width": self.screen_width,
            "screen_height": self.screen_height,
            "fps": self.fps,
            "background_speed_ratio": self.background_speed_ratio,
            "window_scale": self.window_scale,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "GameConfig":
        return cls(
            entity=EntityConfig.from_dict(d.get("entity", {})),
            stream=StreamConfig.from_dict(d.get("stream", {})),
            tunables=Tunables.from_dict(d.get("tunables", {})),
            screen_width=d.get("screen_width", DESIGN_WIDTH),
            screen_height=d.get("screen_height", DESIGN_HEIGHT),
            fps=d.get("fps", 60),
            background_speed_ratio=d.get("background_speed_ratio", 0.5),
            window_scale=d.get("window_scale", 1.0),
        )


# Predefined configurations
CONFIGS = {
    # Browser defaults
    "default": GameConfig(),

    # Slow gates, forgiving hitbox smaller than the sprite
    "easy": GameConfig(tunables=Tunables(speed=1.5, radius=20, hit_radius=12)),

    # Fast gates, hitbox larger than the sprite
    "hard": GameConfig(tunables=Tunables(speed=3.5, radius=20, hit_radius=26)),

    # Tiny cow - small sprite and hitbox
    "calf": GameConfig(tunables=Tunables(speed=2.0, radius=12, hit_radius=10)),

    # Wide gap, slow fall - practice mode
    "practice": GameConfig(
        entity=EntityConfig(gravity=0.35, jump_impulse=-8.0),
        stream=StreamConfig(gap=200.0, spacing=240.0),
        tunables=Tunables(speed=1.5),
    ),
}
