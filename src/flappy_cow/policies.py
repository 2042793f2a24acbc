"""Scripted policies for headless play.

Each policy takes a FlappyEnv state vector and returns a Discrete(2)
action: 0 = do nothing, 1 = jump.
"""

import numpy as np
from typing import Optional


class BasePolicy:
    """Base class for scripted policies."""

    name: str = "base"

    def __call__(self, obs: np.ndarray) -> int:
        return self.act(obs)

    def act(self, obs: np.ndarray) -> int:
        raise NotImplementedError

    def reset(self):
        """Called at the start of each episode."""
        pass


class RandomPolicy(BasePolicy):
    """Jumps at random. Dies quickly, good baseline."""

    name = "random"

    def __init__(self, jump_prob: float = 0.08, rng: Optional[np.random.Generator] = None):
        self.jump_prob = jump_prob
        self.rng = rng or np.random.default_rng()

    def act(self, obs):
        return int(self.rng.random() < self.jump_prob)


class GapSeekingPolicy(BasePolicy):
    """Jumps whenever the cow falls below a point just under the gap center.

    With default physics a jump lifts the cow exactly 95px before it
    starts falling again, so the cow settles into a band from about
    aim_offset - 95 to aim_offset + 10 around the center. The default
    offset keeps that band inside a 150px gap for a 20px hit radius.
    """

    name = "gap_seeking"

    def __init__(self, aim_offset: float = 42.0):
        self.aim_offset = aim_offset

    def act(self, obs):
        y, velocity = obs[0], obs[1]
        top, bottom_edge = obs[3], obs[4]
        target = (top + bottom_edge) / 2 + self.aim_offset
        return int(y > target and velocity >= 0)


POLICIES = {
    "random": RandomPolicy,
    "gap_seeking": GapSeekingPolicy,
}
