from __future__ import annotations

import argparse

import gymnasium as gym

import falling_block.env  # noqa: F401
from falling_block.utils.logging import setup_logger


def run_random(steps: int = 2000, seed: int | None = None) -> float:
    log = setup_logger(name="falling_block.rl.random", use_rich=True, level="info")
    env = gym.make("FallingBlock-10x20-v0")
    obs, info = env.reset(seed=seed)
    env.action_space.seed(seed)
    total_reward = 0.0
    episodes = 0
    for _ in range(steps):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            episodes += 1
            log.info("episode %d: score=%d lines=%d level=%d", episodes, info["score"], info["lines"], info["level"])
            obs, info = env.reset()
    env.close()
    log.info("random agent total reward: %.2f over %d finished episode(s)", total_reward, episodes)
    return total_reward


def main() -> None:
    p = argparse.ArgumentParser()
    p.add_argument("--steps", type=int, default=2000)
    p.add_argument("--seed", type=int, default=None)
    args = p.parse_args()
    run_random(steps=args.steps, seed=args.seed)


if __name__ == "__main__":  # pragma: no cover
    main()
