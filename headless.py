#!/usr/bin/env python3
"""Headless simulation - runs hummingbird episodes without UI"""

import sys

from ai.brain import create_brain
from ai.gym_env import HummingbirdEnv
from core.config import Presets


class HeadlessSimulation:
    """Headless simulation without any UI"""

    def __init__(self, preset_name="training", duration=60.0, brain_type="heuristic",
                 model_path=None, seed=None):
        """Initialize headless simulation"""
        print("=" * 60)
        print(f"HEADLESS SIMULATION: {preset_name}")
        print("=" * 60)

        self.config = Presets.by_name(preset_name)

        print(f"Area diameter: {self.config.area.diameter}")
        print(f"Flowers: {self.config.area.flower_count}")
        print(f"Opponents: {self.config.opponent_count}")
        print(f"Training mode: {self.config.training_mode}")
        print(f"Brain: {brain_type}")
        print(f"Duration: {duration}s")
        print()

        self.env = HummingbirdEnv(config=self.config)
        self.brain = create_brain(brain_type, model_path=model_path)
        self.seed = seed

        self.duration = duration
        self.frame_count = 0
        self.dt = self.config.dt
        self.update_interval = self.config.update_interval

    def run(self) -> dict:
        """Run the simulation"""
        print("Frame |    Time | Episode |  Nectar |   Reward | Flowers")
        print("-" * 58)

        target_frames = int(self.duration / self.dt)
        obs, info = self.env.reset(seed=self.seed)
        episode = 1
        episode_returns = []
        episode_return = 0.0

        while self.frame_count < target_frames:
            action = self.brain.decide_action(obs, agent=self.env.agent)
            obs, reward, terminated, truncated, info = self.env.step(action)
            episode_return += reward
            self.frame_count += 1

            # Print stats every update_interval frames
            if self.frame_count % self.update_interval == 0 or self.frame_count == target_frames:
                print(f"{self.frame_count:5d} | {self.frame_count * self.dt:6.2f}s | "
                      f"{episode:7d} | {info['nectar_obtained']:7.2f} | "
                      f"{episode_return:8.3f} | {info['flowers_with_nectar']:7d}")

            if terminated or truncated:
                episode_returns.append(episode_return)
                print(f"\nEpisode {episode} finished: reward={episode_return:.3f}, "
                      f"nectar={info['nectar_obtained']:.2f}\n")
                obs, info = self.env.reset()
                episode += 1
                episode_return = 0.0

        print(f"\nFinal | frames={self.frame_count} | episodes={episode} | "
              f"nectar={info['nectar_obtained']:.2f}")
        print()
        self.env.close()

        return {
            "frames": self.frame_count,
            "episodes": episode,
            "episode_returns": episode_returns,
            "nectar_obtained": info['nectar_obtained'],
        }


def main():
    """Main function"""
    if len(sys.argv) > 1:
        preset = sys.argv[1]
    else:
        preset = "training"

    if len(sys.argv) > 2:
        duration = float(sys.argv[2])
    else:
        duration = 60.0

    sim = HeadlessSimulation(preset_name=preset, duration=duration)
    sim.run()


if __name__ == "__main__":
    main()
