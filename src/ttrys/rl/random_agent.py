from __future__ import annotations

import argparse

import gymnasium as gym

import ttrys.env  # noqa: F401  ensure registration


def run_random(steps: int = 2000, seed: int | None = None) -> float:
    env = gym.make("TTrYs-v0")
    obs, info = env.reset(seed=seed)
    env.action_space.seed(seed)
    total_reward = 0.0
    for _ in range(steps):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            obs, info = env.reset()
    env.close()
    return total_reward


def main() -> None:
    p = argparse.ArgumentParser()
    p.add_argument("--steps", type=int, default=2000)
    p.add_argument("--seed", type=int, default=None)
    args = p.parse_args()
    total = run_random(args.steps, args.seed)
    print(f"Random agent total reward: {total:.2f}")


if __name__ == "__main__":  # pragma: no cover
    main()
