"""Gymnasium environment wrapper for the flappy-cow simulation.

Provides the standard Gym API for scripted play and data collection.
Observations are a compact state vector; RGB frames are available
through render_mode="rgb_array".
"""

import random
import numpy as np
import gymnasium
from gymnasium import spaces
from typing import Optional, Dict, Any

import pygame

from .config import GameConfig
from .engine import draw_world
from .scores import MemoryScoreStore
from .session import Simulation, Command, Mode

STATE_SIZE = 8


class FlappyEnv(gymnasium.Env):
    """Gymnasium wrapper for the game.

    Observation space: float32 array of shape (8,):
        [0] entity y
        [1] entity velocity
        [2] horizontal distance from entity x to the next gate's left edge
        [3] next gate top height (bottom of the top segment)
        [4] next gate bottom edge y (top of the bottom segment)
        [5] entity hit radius
        [6] scroll speed
        [7] score

    Action space: Discrete(2) - 0 = do nothing, 1 = jump

    Reward = weighted sum of raw signals (stored in info['reward_signals']):
        pass:  gates passed this step
        death: 1.0 on the step the session ends
        step:  1.0 every step
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 60}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        max_episode_steps: int = 2000,
        reward_weights: Optional[Dict[str, float]] = None,
    ):
        super().__init__()

        self.config = config or GameConfig()
        self.render_mode = render_mode
        self.max_episode_steps = max_episode_steps

        self.reward_weights = reward_weights or {
            "pass": 1.0,
            "death": -1.0,
            "step": 0.01,
        }

        self.action_space = spaces.Discrete(2)
        self.observation_space = spaces.Box(
            low=-np.inf, high=np.inf, shape=(STATE_SIZE,), dtype=np.float32,
        )

        # Best score persists across episodes of one env
        self._store = MemoryScoreStore()
        self._sim = Simulation(self.config, score_store=self._store)
        self._episode_steps = 0
        self._prev_score = 0

        self._surface = None
        if render_mode == "rgb_array":
            # Caller sets SDL_VIDEODRIVER for headless
            if not pygame.get_init():
                pygame.init()
            self._surface = pygame.Surface(
                (self.config.screen_width, self.config.screen_height)
            )

    @property
    def simulation(self) -> Simulation:
        return self._sim

    def reset(self, *, seed=None, options=None):
        super().reset(seed=seed)

        gate_seed = int(self.np_random.integers(0, 2**31))
        self._sim.stream.rng = random.Random(gate_seed)
        self._sim.start()

        self._episode_steps = 0
        self._prev_score = 0

        return self._get_obs(), self._get_info()

    def step(self, action):
        assert self._sim.mode is not Mode.IDLE, "Must call reset() before step()"
        was_running = self._sim.mode is Mode.RUNNING

        if int(action) == 1:
            self._sim.submit(Command.JUMP)
        self._sim.tick()
        self._episode_steps += 1

        reward_signals = self._compute_rewards(was_running)
        reward = sum(
            self.reward_weights.get(k, 0.0) * v
            for k, v in reward_signals.items()
        )

        # A fault inside the tick drops the session back to IDLE
        terminated = self._sim.mode is not Mode.RUNNING
        truncated = self._episode_steps >= self.max_episode_steps

        info = self._get_info()
        info["reward_signals"] = reward_signals
        return self._get_obs(), float(reward), terminated, truncated, info

    def _compute_rewards(self, was_running: bool):
        score = self._sim.score
        signals = {
            "pass": float(max(score - self._prev_score, 0)),
            # Only on the tick that ends the run
            "death": 1.0 if was_running and self._sim.mode is Mode.OVER else 0.0,
            "step": 1.0,
        }
        self._prev_score = score
        return signals

    def _get_obs(self):
        state = np.zeros(STATE_SIZE, dtype=np.float32)
        entity = self._sim.entity
        height = self.config.screen_height

        state[0] = entity.y
        state[1] = entity.velocity

        gate = self._sim.stream.next_obstacle(entity)
        if gate is not None:
            state[2] = gate.x - entity.x
            state[3] = gate.top_height
            state[4] = gate.bottom_edge(height)
        else:
            state[2] = self.config.screen_width - entity.x
            state[3] = 0.0
            state[4] = height

        state[5] = entity.hit_radius
        state[6] = self._sim.stream.speed
        state[7] = float(self._sim.score)
        return state

    def _get_info(self):
        return {
            "score": self._sim.score,
            "best_score": self._sim.best_score,
            "episode_steps": self._episode_steps,
            "mode": self._sim.mode.value,
            "gates": len(self._sim.stream),
        }

    def render(self):
        if self.render_mode != "rgb_array":
            return None
        draw_world(self._surface, self._sim.snapshot(), hud=False)
        # surfarray gives (W, H, 3); transpose to (H, W, 3)
        array = pygame.surfarray.array3d(self._surface)
        return np.transpose(array, (1, 0, 2)).astype(np.uint8)

    def close(self):
        self._surface = None
