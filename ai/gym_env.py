"""Gymnasium Environment - обёртка над цветочной областью для обучения колибри."""

import random

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from ai.actions import ACTION_DIM
from ai.brain import HeuristicBrain
from ai.observation import OBS_DIM
from birds.hummingbird import Hummingbird
from core.config import SimulationConfig, Presets
from core.flower import FlowerArea
from core.physics import Vector3
from core.scene import PhysicsScene, BoundaryCollider


class HummingbirdEnv(gym.Env):
    """
    Gymnasium-среда для **одного** RL-колибри.

    Параметры:
        config:         SimulationConfig (training_mode, max_steps, dt, ...)
        opponent_brain: мозг соперников (по умолчанию эвристика); соперники
                        пьют из тех же цветов и не получают наград
        render_mode:    None | "human" (pygame окно, только для просмотра)
        seed:           seed расстановки цветов и спаунов

    Область и цветы строятся в __init__ и заново при reset(seed=...), так что
    одинаковый seed даёт одинаковые эпизоды. Без seed между эпизодами меняется
    только нектар и позиции птиц.
    """

    metadata = {"render_modes": ["human"], "render_fps": 50}

    def __init__(self, config: SimulationConfig = None, opponent_brain=None, render_mode=None,
                 seed=None):
        super().__init__()

        self.config = config or Presets.training()
        self.training_mode = self.config.training_mode
        # Вне обучения эпизод бесконечен
        self.max_steps = self.config.max_steps if self.training_mode else 0
        self.current_step = 0
        self.render_mode = render_mode
        self._renderer = None
        self._rng = random.Random(seed)

        self.observation_space = spaces.Box(low=-1.0, high=1.0, shape=(OBS_DIM,), dtype=np.float32)
        self.action_space = spaces.Box(low=-1.0, high=1.0, shape=(ACTION_DIM,), dtype=np.float32)

        self.opponent_brain = opponent_brain or HeuristicBrain(self.config.area.diameter)
        self._build_world()

    def _build_world(self):
        """Сцена, цветы и птицы; всё берёт случайность из self._rng"""
        self._build_area()
        self.agent = self._make_bird(self.training_mode)
        # Соперники не сбрасывают цветы и не получают наград
        self.opponents = [self._make_bird(False) for _ in range(self.config.opponent_count)]
        if self._renderer is not None:
            self._renderer.area = self.area

    def _build_area(self):
        cfg = self.config.area
        self.scene = PhysicsScene()
        self.area = FlowerArea(center=Vector3.zero(), diameter=cfg.diameter)
        self.scene.add_collider(BoundaryCollider(self.area.center, cfg.diameter / 2.0, cfg.boundary_height))
        self.area.spawn_flowers(
            self.scene,
            count=cfg.flower_count,
            capacity=cfg.nectar_capacity,
            rng=self._rng,
            min_radius=cfg.flower_min_radius,
            max_radius=cfg.flower_max_radius,
            min_height=cfg.flower_min_height,
            max_height=cfg.flower_max_height,
            max_tilt=cfg.flower_tilt,
            nectar_radius=cfg.nectar_radius,
            petal_radius=cfg.petal_radius,
        )

    def _make_bird(self, training_mode: bool) -> Hummingbird:
        return Hummingbird(
            self.area, self.scene,
            config=self.config.hummingbird,
            training_mode=training_mode,
            rng=self._rng,
            dt=self.config.dt,
        )

    def reset(self, seed=None, options=None):
        """Сбросить среду и начать новый эпизод."""
        super().reset(seed=seed)
        if seed is not None:
            # Тот же seed - та же расстановка цветов и тот же ход эпизода
            self._rng.seed(seed)
            self._build_world()
        self.current_step = 0

        self.agent.on_episode_begin()
        for bird in self.opponents:
            bird.on_episode_begin()

        return self.agent.collect_observations(), self._info()

    def step(self, action: np.ndarray):
        """Один фиксированный тик."""
        self.current_step += 1

        # --- Действия ---
        self.agent.on_action_received(action)
        for bird in self.opponents:
            bird.on_action_received(self.opponent_brain.decide_action(bird.collect_observations(), agent=bird))

        # --- Физика: события триггеров/столкновений начисляют награды ---
        self.scene.step(self.config.dt)

        # --- Цель могли опустошить соперники ---
        self.agent.fixed_update()
        for bird in self.opponents:
            bird.fixed_update()

        reward = self.agent.consume_reward()
        terminated = False
        truncated = self.max_steps > 0 and self.current_step >= self.max_steps

        if self.render_mode == "human":
            self.render()

        return self.agent.collect_observations(), float(reward), terminated, truncated, self._info()

    def _info(self) -> dict:
        nearest = self.agent.nearest_flower
        return {
            "nectar_obtained": self.agent.nectar_obtained,
            "cumulative_reward": self.agent.cumulative_reward,
            "nearest_flower": nearest.id if nearest is not None else None,
            "flowers_with_nectar": len(self.area.flowers_with_nectar()),
        }

    def render(self):
        if self.render_mode != "human":
            return None
        if self._renderer is None:
            from ui.pygame_renderer import PygameRenderer
            self._renderer = PygameRenderer(self.area)
        self._renderer.draw([self.agent] + self.opponents, self.current_step)
        return None

    def close(self):
        if self._renderer is not None:
            self._renderer.close()
            self._renderer = None
