"""Tests for scripted policies."""

import numpy as np
import pytest

from flappy_cow.gym_env import FlappyEnv
from flappy_cow.policies import BasePolicy, RandomPolicy, GapSeekingPolicy, POLICIES


@pytest.fixture
def env():
    e = FlappyEnv(max_episode_steps=600)
    yield e
    e.close()


@pytest.fixture
def obs(env):
    o, _ = env.reset(seed=42)
    return o


def run_episode(env, policy, seed):
    obs, info = env.reset(seed=seed)
    policy.reset()
    while True:
        obs, _, terminated, truncated, info = env.step(policy(obs))
        if terminated or truncated:
            return info


class TestRandomPolicy:
    def test_returns_valid_action(self, obs):
        policy = RandomPolicy(rng=np.random.default_rng(0))
        assert policy(obs) in (0, 1)

    def test_varies_actions(self, obs):
        policy = RandomPolicy(jump_prob=0.5, rng=np.random.default_rng(0))
        actions = [policy(obs) for _ in range(50)]
        assert set(actions) == {0, 1}

    def test_never_jumps_at_zero_prob(self, obs):
        policy = RandomPolicy(jump_prob=0.0, rng=np.random.default_rng(0))
        assert all(policy(obs) == 0 for _ in range(20))


class TestGapSeekingPolicy:
    def test_jumps_below_target(self):
        policy = GapSeekingPolicy()
        # Gap from 200 to 350, center 275, target 317
        obs = np.array([330, 1.0, 100, 200, 350, 20, 2, 0], dtype=np.float32)
        assert policy(obs) == 1

    def test_waits_while_rising(self):
        policy = GapSeekingPolicy()
        obs = np.array([330, -3.0, 100, 200, 350, 20, 2, 0], dtype=np.float32)
        assert policy(obs) == 0

    def test_waits_above_target(self):
        policy = GapSeekingPolicy()
        obs = np.array([250, 4.0, 100, 200, 350, 20, 2, 0], dtype=np.float32)
        assert policy(obs) == 0

    def test_passes_first_gate(self, env):
        info = run_episode(env, GapSeekingPolicy(), seed=7)
        assert info["score"] >= 1


class TestRegistry:
    def test_all_registered(self):
        assert set(POLICIES) == {"random", "gap_seeking"}

    def test_registry_instantiates(self):
        for cls in POLICIES.values():
            policy = cls()
            assert isinstance(policy, BasePolicy)
            assert policy.name in POLICIES
