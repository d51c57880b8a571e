#!/usr/bin/env python3
"""Точка входа - игровой режим с Pygame окном или headless прогон"""

import argparse


def parse_args():
    p = argparse.ArgumentParser(description="Hummingbird nectar agent")
    p.add_argument("--headless", action="store_true",
                   help="Run without UI (heuristic/rl brain only)")
    p.add_argument("--preset", choices=["training", "gameplay", "crowded"], default="training",
                   help="Config preset for headless mode (default: training)")
    p.add_argument("--duration", type=float, default=60.0,
                   help="Headless simulation length in seconds (default: 60)")
    p.add_argument("--brain", choices=["keyboard", "heuristic", "rl"], default=None,
                   help="Who controls the bird (default: keyboard in UI, heuristic headless)")
    p.add_argument("--model", type=str, default=None,
                   help="Path to PPO model .zip (for --brain rl)")
    p.add_argument("--opponents", type=int, default=0,
                   help="Heuristic birds competing for the same flowers (UI mode)")
    p.add_argument("--seed", type=int, default=None,
                   help="Random seed")
    return p.parse_args()


def main():
    """Главная функция"""
    args = parse_args()

    print("\n" + "=" * 60)
    print("HUMMINGBIRD - Nectar Collecting Agent")
    print("=" * 60 + "\n")

    if args.headless:
        brain = args.brain or "heuristic"
        if brain == "keyboard":
            print("Keyboard control needs the UI, run without --headless")
            raise SystemExit(1)

        print("Running in HEADLESS mode (no UI)\n")
        from headless import HeadlessSimulation
        sim = HeadlessSimulation(
            preset_name=args.preset,
            duration=args.duration,
            brain_type=brain,
            model_path=args.model,
            seed=args.seed,
        )
        sim.run()

    else:
        print("Running in UI mode (Pygame)\n")
        from ui.application import PlayApp
        app = PlayApp(
            brain_type=args.brain or "keyboard",
            model_path=args.model,
            opponents=args.opponents,
        )
        app.run()


if __name__ == "__main__":
    main()
