from __future__ import annotations

import argparse

import gymnasium as gym

import tetris_rl.env  # noqa: F401  (registers Tetris-10x22-v0)


def run_random(steps: int = 2000, seed: int | None = None) -> float:
    env = gym.make("Tetris-10x22-v0")
    obs, info = env.reset(seed=seed)
    env.action_space.seed(seed)
    total_reward = 0.0
    episodes = 1
    for _ in range(steps):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            obs, info = env.reset()
            episodes += 1
    env.close()
    print(f"Random agent: {total_reward:.0f} rows cleared over {episodes} episode(s)")
    return total_reward


def main() -> None:
    p = argparse.ArgumentParser()
    p.add_argument("--steps", type=int, default=2000)
    p.add_argument("--seed", type=int, default=None)
    args = p.parse_args()
    run_random(args.steps, args.seed)


if __name__ == "__main__":  # pragma: no cover
    main()
