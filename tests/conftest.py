"""Pytest configuration and shared fixtures."""

import os
import random

# Ensure headless pygame for all tests
os.environ['SDL_VIDEODRIVER'] = 'dummy'
os.environ['SDL_AUDIODRIVER'] = 'dummy'

import pytest

from flappy_cow.audio import SilentBoard
from flappy_cow.config import GameConfig
from flappy_cow.physics import Entity
from flappy_cow.scores import MemoryScoreStore
from flappy_cow.session import Simulation
from flappy_cow.stream import ObstacleStream


@pytest.fixture
def game_config():
    """Default game configuration."""
    return GameConfig()


@pytest.fixture
def entity():
    """Default entity at the middle of the playfield."""
    return Entity()


@pytest.fixture
def stream():
    """Empty gate stream with a seeded random source."""
    return ObstacleStream(rng=random.Random(0))


@pytest.fixture
def sounds():
    return SilentBoard()


@pytest.fixture
def store():
    return MemoryScoreStore()


@pytest.fixture
def sim(game_config, store, sounds):
    """Fresh simulation in IDLE mode with recording collaborators."""
    return Simulation(game_config, score_store=store, audio=sounds, rng=random.Random(0))
