from __future__ import annotations

import argparse
from typing import Optional, Sequence

import gymnasium as gym

import falling_blocks.env  # noqa: F401


def run_random(steps: int = 200, seed: Optional[int] = None) -> float:
    env = gym.make("FallingBlocks-9x20-v0")
    env.action_space.seed(seed)
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    episodes = 0
    for _ in range(steps):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            episodes += 1
            obs, info = env.reset()
    env.close()
    print(f"Random agent total reward: {total_reward:.2f} over {episodes} finished episode(s)")
    return total_reward


def main(argv: Optional[Sequence[str]] = None) -> None:
    p = argparse.ArgumentParser()
    p.add_argument("--steps", type=int, default=200)
    p.add_argument("--seed", type=int, default=None)
    args = p.parse_args(argv)
    run_random(args.steps, args.seed)


if __name__ == "__main__":  # pragma: no cover
    main()
