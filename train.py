#!/usr/bin/env python3
"""
train.py - headless PPO обучение колибри (stable-baselines3).

Примеры:
    python train.py --steps 500000
    python train.py --steps 2000000 --n-envs 8 --lr 1e-4
    python train.py --resume models/hummingbird_ppo.zip
    python train.py --preset crowded          # соперники пьют из тех же цветов

После обучения:
    python app.py --brain rl --model models/hummingbird_ppo.zip
"""

import argparse
import os
import time

MODEL_NAME = "hummingbird_ppo"

# Гиперпараметры PPO: короткий горизонт (награды частые и мелкие),
# несколько эпох на rollout
PPO_PARAMS = dict(
    n_epochs=3,
    gamma=0.9,
    gae_lambda=0.95,
    clip_range=0.2,
    ent_coef=0.005,
    vf_coef=0.5,
    max_grad_norm=0.5,
)
NET_ARCH = dict(pi=[256, 256], vf=[256, 256])


def parse_args():
    p = argparse.ArgumentParser(description="Train the hummingbird agent with PPO")
    p.add_argument("--preset", choices=["training", "crowded"], default="training",
                   help="Area preset (default: training)")
    p.add_argument("--steps", type=int, default=500_000,
                   help="Total environment steps (default: 500000)")
    p.add_argument("--lr", type=float, default=3e-4,
                   help="PPO learning rate (default: 3e-4)")
    p.add_argument("--batch-size", type=int, default=2048,
                   help="Minibatch size (default: 2048)")
    p.add_argument("--n-steps", type=int, default=20480,
                   help="Rollout length summed over all envs (default: 20480)")
    p.add_argument("--max-episode-steps", type=int, default=5000,
                   help="Episode length in fixed ticks (default: 5000)")
    p.add_argument("--save-dir", default="models",
                   help="Where checkpoints and the final model go (default: models/)")
    p.add_argument("--log-dir", default="logs",
                   help="Tensorboard / eval log directory (default: logs/)")
    p.add_argument("--resume", default=None,
                   help="Continue training from this .zip")
    p.add_argument("--seed", type=int, default=42,
                   help="Base seed, env i uses seed + i (default: 42)")
    p.add_argument("--device", default="auto",
                   help="auto | cpu | cuda (default: auto)")
    p.add_argument("--n-envs", type=int, default=0,
                   help="Parallel envs, 0 = CPU cores - 1")
    return p.parse_args()


def resolve_rollout(args):
    """Число сред, длина rollout на среду и размер батча"""
    if args.n_envs > 0:
        n_envs = args.n_envs
    else:
        n_envs = max(1, (os.cpu_count() or 2) - 1)

    per_env_steps = max(512, args.n_steps // n_envs)
    batch_size = min(args.batch_size, per_env_steps * n_envs)
    return n_envs, per_env_steps, batch_size


def make_env_factory(config, seed: int):
    """Фабрика для VecEnv: каждая копия среды со своим seed и Monitor"""
    from stable_baselines3.common.monitor import Monitor
    from ai.gym_env import HummingbirdEnv

    def _factory():
        env = HummingbirdEnv(config=config, seed=seed)
        env.reset(seed=seed)
        return Monitor(env)

    return _factory


def build_model(args, vec_env, per_env_steps: int, batch_size: int):
    from stable_baselines3 import PPO

    if args.resume:
        if not os.path.exists(args.resume):
            raise FileNotFoundError(f"Model to resume not found: {args.resume}")
        print(f"[train] Resuming from {args.resume}")
        return PPO.load(
            args.resume,
            env=vec_env,
            device=args.device,
            learning_rate=args.lr,
            n_steps=per_env_steps,
            batch_size=batch_size,
        )

    print("[train] New PPO model")
    return PPO(
        "MlpPolicy",
        vec_env,
        learning_rate=args.lr,
        n_steps=per_env_steps,
        batch_size=batch_size,
        seed=args.seed,
        device=args.device,
        tensorboard_log=args.log_dir,
        verbose=1,
        policy_kwargs=dict(net_arch=NET_ARCH),
        **PPO_PARAMS,
    )


def main():
    args = parse_args()

    from stable_baselines3.common.callbacks import CallbackList, CheckpointCallback, EvalCallback
    from stable_baselines3.common.vec_env import DummyVecEnv, SubprocVecEnv

    from core.config import Presets

    n_envs, per_env_steps, batch_size = resolve_rollout(args)

    config = Presets.by_name(args.preset)
    config.training_mode = True
    config.max_steps = args.max_episode_steps

    print("=" * 60)
    print(f"HUMMINGBIRD PPO TRAINING: {args.preset}")
    print("=" * 60)
    print(f"Flowers: {config.area.flower_count}, opponents: {config.opponent_count}")
    print(f"Steps: {args.steps:,} | lr: {args.lr} | batch: {batch_size}")
    print(f"Rollout: {per_env_steps} x {n_envs} envs | episode: {config.max_steps} ticks")
    print(f"Device: {args.device} | seed: {args.seed} | resume: {args.resume or '-'}")
    print("=" * 60)

    best_dir = os.path.join(args.save_dir, "best_hummingbird")
    for path in (args.save_dir, args.log_dir, best_dir):
        os.makedirs(path, exist_ok=True)

    factories = [make_env_factory(config, args.seed + i) for i in range(n_envs)]
    vec_env = SubprocVecEnv(factories) if n_envs > 1 else DummyVecEnv(factories)
    eval_env = DummyVecEnv([make_env_factory(config, args.seed + 10_000)])

    model = build_model(args, vec_env, per_env_steps, batch_size)

    callbacks = CallbackList([
        CheckpointCallback(
            save_freq=max(args.steps // (10 * n_envs), 3000),
            save_path=args.save_dir,
            name_prefix=MODEL_NAME,
            verbose=1,
        ),
        EvalCallback(
            eval_env,
            best_model_save_path=best_dir,
            log_path=args.log_dir,
            eval_freq=max(args.steps // (20 * n_envs), 2500),
            n_eval_episodes=3,
            deterministic=True,
            verbose=1,
        ),
    ])

    started = time.time()
    try:
        model.learn(
            total_timesteps=args.steps,
            callback=callbacks,
            progress_bar=True,
            reset_num_timesteps=args.resume is None,
        )
    finally:
        vec_env.close()
        eval_env.close()
    minutes = (time.time() - started) / 60.0

    final_path = os.path.join(args.save_dir, f"{MODEL_NAME}.zip")
    model.save(final_path)

    print("\n" + "=" * 60)
    print(f"Done in {minutes:.1f} min, model: {final_path}")
    print(f"tensorboard --logdir {args.log_dir}")
    print(f"python app.py --brain rl --model {final_path}")
    print("=" * 60)


if __name__ == "__main__":
    main()
