from __future__ import annotations

import gymnasium as gym
import numpy as np

import falling_block.env  # noqa: F401
from falling_block.env.falling_block_env import FallingBlockEnv
from falling_block.game import Action


def test_reset_returns_observation_in_space() -> None:
    env = FallingBlockEnv()
    obs, info = env.reset(seed=0)
    assert obs["board"].shape == (20, 10)
    assert obs["board"].dtype == np.int8
    assert env.observation_space.contains(obs)
    assert (obs["board"] < 0).sum() == 4
    assert 1 <= obs["next_piece"] <= 7
    assert info["score"] == 0 and info["level"] == 1


def test_hard_drop_steps_lock_and_reward_score_delta() -> None:
    env = FallingBlockEnv()
    env.reset(seed=1)
    obs, reward, terminated, truncated, info = env.step(int(Action.HARD_DROP))
    assert reward == 10.0
    assert info["lines_cleared"] == 0
    assert info["score"] == 10
    assert not terminated and not truncated


def test_episode_terminates_with_terminal_penalty() -> None:
    env = FallingBlockEnv(terminal_penalty=-5.0)
    env.reset(seed=2)
    total = 0.0
    terminated = False
    for _ in range(500):
        _, reward, terminated, truncated, info = env.step(int(Action.HARD_DROP))
        total += reward
        if terminated:
            break
    assert terminated
    assert total == info["score"] - 5.0


def test_truncation_at_step_limit() -> None:
    env = FallingBlockEnv(max_episode_steps=3)
    env.reset(seed=0)
    results = [env.step(int(Action.NONE)) for _ in range(3)]
    assert [r[3] for r in results] == [False, False, True]


def test_registered_env_and_rgb_render() -> None:
    env = gym.make("FallingBlock-10x20-v0", render_mode="rgb_array")
    env.reset(seed=0)
    frame = env.render()
    assert frame.shape == (240, 120, 3)
    assert frame.dtype == np.uint8
    env.close()
