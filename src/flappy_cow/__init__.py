"""flappy-cow: flappy-style arcade game with a headless simulation core.

A cow falls under gravity and has to flap through a stream of scrolling
gates. The simulation (entity physics, gate stream, session state machine)
runs without a display; the pygame engine, sound board and best-score store
are thin collaborators around it, and a Gymnasium environment exposes the
same core for scripted play.
"""

from .config import EntityConfig, StreamConfig, Tunables, GameConfig, CONFIGS
from .constraints import ParameterConstraints, ConstraintResult, ConstraintViolation, ConfigurationError
from .physics import Entity
from .stream import Obstacle, ObstacleStream, StreamEvents
from .session import Simulation, World, Session, Mode, Command, WorldSnapshot, ReentrantTickError
from .scores import ScoreStore, HighScoreStore, MemoryScoreStore

__all__ = [
    "EntityConfig",
    "StreamConfig",
    "Tunables",
    "GameConfig",
    "CONFIGS",
    "ParameterConstraints",
    "ConstraintResult",
    "ConstraintViolation",
    "ConfigurationError",
    "Entity",
    "Obstacle",
    "ObstacleStream",
    "StreamEvents",
    "Simulation",
    "World",
    "Session",
    "Mode",
    "Command",
    "WorldSnapshot",
    "ReentrantTickError",
    "ScoreStore",
    "HighScoreStore",
    "MemoryScoreStore",
]
