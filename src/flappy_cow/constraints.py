"""Parameter constraints and validation for playable gate streams.

Gate generation draws the top-segment height from
[hit_radius + margin, height - gap - hit_radius - margin]. If that range is
empty the stream cannot produce a gate, so configurations are checked here,
at the point tunables are applied, rather than at spawn time.
"""

from dataclasses import dataclass, replace
from typing import List, Tuple
import logging
import math

from .config import StreamConfig, Tunables, GameConfig

logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    """Raised when a configuration cannot produce a playable stream."""


@dataclass
class ConstraintViolation:
    """Describes a constraint violation."""
    param: str
    message: str
    severity: str  # "error" = unplayable, "warning" = difficult but possible


@dataclass
class ConstraintResult:
    """Result of constraint validation."""
    valid: bool
    violations: List[ConstraintViolation]

    def __bool__(self) -> bool:
        return self.valid

    @property
    def errors(self) -> List[ConstraintViolation]:
        return [v for v in self.violations if v.severity == "error"]


def top_height_range(
    hit_radius: float,
    stream: StreamConfig,
    playfield_height: float,
) -> Tuple[float, float]:
    """(min_top, max_top) for gate generation; may be empty (max < min)."""
    min_top = hit_radius + stream.margin
    max_top = playfield_height - stream.gap - hit_radius - stream.margin
    return min_top, max_top


def max_hit_radius(stream: StreamConfig, playfield_height: float) -> int:
    """Largest integer hit radius that still leaves a non-empty gate range."""
    return int(math.floor((playfield_height - stream.gap) / 2 - stream.margin))


class ParameterConstraints:
    """Defines and checks constraints on game parameters."""

    # Gates narrower than this are effectively invisible at 60fps
    GATE_WIDTH_MIN = 10.0
    # Above this, one tick can skip over a whole gate
    SPEED_WARN = 25.0

    @classmethod
    def validate_stream(cls, stream: StreamConfig, playfield_height: float) -> ConstraintResult:
        """Validate gate geometry against the playfield."""
        violations = []

        if stream.gap <= 0:
            violations.append(ConstraintViolation(
                "gap",
                f"Gap {stream.gap} must be positive",
                "error"
            ))
        if stream.spacing <= 0:
            violations.append(ConstraintViolation(
                "spacing",
                f"Spacing {stream.spacing} must be positive",
                "error"
            ))
        if stream.margin < 0:
            violations.append(ConstraintViolation(
                "margin",
                f"Margin {stream.margin} must not be negative",
                "error"
            ))
        if stream.width < cls.GATE_WIDTH_MIN:
            violations.append(ConstraintViolation(
                "width",
                f"Gate width {stream.width} < min {cls.GATE_WIDTH_MIN}",
                "error"
            ))
        if stream.gap + 2 * stream.margin >= playfield_height:
            violations.append(ConstraintViolation(
                "gap",
                f"Gap {stream.gap} + 2*margin {stream.margin} leaves no room in "
                f"playfield height {playfield_height}",
                "error"
            ))
        if stream.width >= stream.spacing:
            violations.append(ConstraintViolation(
                "spacing",
                f"Spacing {stream.spacing} <= gate width {stream.width}: gates will touch",
                "warning"
            ))

        errors = [v for v in violations if v.severity == "error"]
        return ConstraintResult(valid=len(errors) == 0, violations=violations)

    @classmethod
    def validate_tunables(
        cls,
        tunables: Tunables,
        stream: StreamConfig,
        playfield_height: float,
    ) -> ConstraintResult:
        """Validate tunables against the stream geometry."""
        violations = []

        # NaN and inf slip through every ordered comparison below
        non_finite = [
            name for name in ("speed", "radius", "hit_radius")
            if not math.isfinite(getattr(tunables, name))
        ]
        if non_finite:
            for name in non_finite:
                violations.append(ConstraintViolation(
                    name,
                    f"{name} {getattr(tunables, name)} must be a finite number",
                    "error"
                ))
            return ConstraintResult(valid=False, violations=violations)

        if tunables.speed <= 0:
            violations.append(ConstraintViolation(
                "speed",
                f"Speed {tunables.speed} must be positive",
                "error"
            ))
        elif tunables.speed > cls.SPEED_WARN:
            violations.append(ConstraintViolation(
                "speed",
                f"Speed {tunables.speed} > {cls.SPEED_WARN}: gates may skip past the cow",
                "warning"
            ))

        if tunables.radius <= 0:
            violations.append(ConstraintViolation(
                "radius",
                f"Radius {tunables.radius} must be positive",
                "error"
            ))

        if tunables.hit_radius <= 0:
            violations.append(ConstraintViolation(
                "hit_radius",
                f"Hit radius {tunables.hit_radius} must be positive",
                "error"
            ))
        else:
            min_top, max_top = top_height_range(tunables.hit_radius, stream, playfield_height)
            if max_top < min_top:
                violations.append(ConstraintViolation(
                    "hit_radius",
                    f"Hit radius {tunables.hit_radius} too large for gap {stream.gap}: "
                    f"max {max_hit_radius(stream, playfield_height)}",
                    "error"
                ))

        errors = [v for v in violations if v.severity == "error"]
        return ConstraintResult(valid=len(errors) == 0, violations=violations)

    @classmethod
    def validate_config(cls, config: GameConfig) -> ConstraintResult:
        """Validate full game config."""
        all_violations = []

        stream_result = cls.validate_stream(config.stream, config.screen_height)
        all_violations.extend(stream_result.violations)

        tunables_result = cls.validate_tunables(config.tunables, config.stream, config.screen_height)
        all_violations.extend(tunables_result.violations)

        errors = [v for v in all_violations if v.severity == "error"]
        return ConstraintResult(valid=len(errors) == 0, violations=all_violations)


def clamp_tunables(
    tunables: Tunables,
    stream: StreamConfig,
    playfield_height: float,
) -> Tunables:
    """Return tunables that are safe to apply.

    An oversized hit radius is clamped down to the largest feasible value.
    Values that are invalid outright (non-finite, or non-positive speed or
    radii) raise ConfigurationError.
    """
    values = (tunables.speed, tunables.radius, tunables.hit_radius)
    if not all(math.isfinite(v) and v > 0 for v in values):
        result = ParameterConstraints.validate_tunables(tunables, stream, playfield_height)
        raise ConfigurationError(f"Invalid tunables: {[v.message for v in result.errors]}")

    limit = max_hit_radius(stream, playfield_height)
    if limit <= 0:
        raise ConfigurationError(
            f"Gap {stream.gap} with margin {stream.margin} leaves no room for any hit radius"
        )
    if tunables.hit_radius > limit:
        logger.warning(
            "Hit radius %s too large for gap %s, clamping to %s",
            tunables.hit_radius, stream.gap, limit,
        )
        return replace(tunables, hit_radius=limit)
    return tunables
