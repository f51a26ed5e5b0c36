from __future__ import annotations

import argparse

import gymnasium as gym

# Ensure envs are registered
import picture_puzzle.env  # noqa: F401


def run_random(steps: int = 200, use_hints: bool = False, seed: int | None = None) -> float:
    """Play `steps` random (or hinted) drops and return the summed reward."""
    env = gym.make("PicturePuzzle-6x6-v0")
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    for _ in range(steps):
        if use_hints and info.get("target_action") is not None:
            action = info["target_action"]
        else:
            action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            obs, info = env.reset()
    env.close()
    return total_reward


def main() -> None:  # pragma: no cover
    p = argparse.ArgumentParser()
    p.add_argument("--steps", type=int, default=200)
    p.add_argument("--hints", action="store_true", help="Always play the target action")
    p.add_argument("--seed", type=int, default=None)
    args = p.parse_args()
    total = run_random(args.steps, use_hints=args.hints, seed=args.seed)
    print(f"Random agent total reward: {total:.2f}")


if __name__ == "__main__":  # pragma: no cover
    main()
