"""Колибри - агент, который ищет цветы и пьёт нектар"""

import random
import uuid
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ai.actions import interpret_action, heuristic_action
from ai.nearest import NearestFlowerTracker
from ai.observation import build_observation
from ai.reward import RewardCalculator
from birds.placement import SpawnPlacer
from core.config import HummingbirdConfig
from core.errors import TrainingModeError
from core.flower import Flower
from core.physics import Vector3, RigidBody


@dataclass
class AgentState:
    """
    Состояние агента, переживающее тики.
    Сглаженные pitch/yaw не сбрасываются отдельными действиями.
    """
    smooth_pitch_change: float = 0.0
    smooth_yaw_change: float = 0.0
    frozen: bool = False
    nectar_obtained: float = 0.0
    nearest_flower: Optional[Flower] = None
    phase: str = "active"  # active | resetting


class Hummingbird:
    """
    Колибри в цветочной области.

    Жизненный цикл:
        on_episode_begin() → [collect_observations() → on_action_received() →
        scene.step() (события → награды) → fixed_update()] * N
    """

    def __init__(self, area, scene, config: HummingbirdConfig = None,
                 training_mode: bool = True, body: RigidBody = None, rng=None,
                 dt: float = 0.02):
        self.id = str(uuid.uuid4())
        self.area = area
        self.scene = scene
        self.config = config or HummingbirdConfig()
        self.training_mode = training_mode
        self.dt = dt  # фиксированный тик физики
        self.rng = rng or random

        self.body = body or RigidBody(
            radius=self.config.body_radius,
            mass=self.config.mass,
            drag=self.config.drag,
        )
        self.state = AgentState()
        self.tracker = NearestFlowerTracker(area)
        self.placer = SpawnPlacer(
            area, scene,
            check_radius=self.config.spawn_check_radius,
            max_attempts=self.config.spawn_attempts,
            rng=self.rng,
        )

        # Награда, накопленная с последнего consume_reward()
        self._pending_reward = 0.0
        self.cumulative_reward = 0.0

        self.scene.subscribe(self.body, self)

    # ------------------------------------------------------------------
    #  Геометрия
    # ------------------------------------------------------------------

    @property
    def nearest_flower(self):
        return self.state.nearest_flower

    @property
    def nectar_obtained(self) -> float:
        return self.state.nectar_obtained

    @property
    def frozen(self) -> bool:
        return self.state.frozen

    @property
    def beak_tip_position(self) -> Vector3:
        return self.body.position + self.body.rotation.forward() * self.config.beak_length

    @property
    def forward(self) -> Vector3:
        return self.body.rotation.forward()

    # ------------------------------------------------------------------
    #  Награды
    # ------------------------------------------------------------------

    def add_reward(self, reward: float):
        self._pending_reward += reward
        self.cumulative_reward += reward

    def consume_reward(self) -> float:
        """Забрать награду за шаг (обнуляет накопитель шага)"""
        reward = self._pending_reward
        self._pending_reward = 0.0
        return reward

    # ------------------------------------------------------------------
    #  Эпизод
    # ------------------------------------------------------------------

    def on_episode_begin(self):
        """Сброс эпизода: цветы, счётчики, скорости, безопасная позиция, ближайший цветок"""
        self.state.phase = "resetting"

        if self.training_mode:
            # Цветы сбрасываются только в обучении (один агент на область)
            self.area.reset_flowers()

        self.state.nectar_obtained = 0.0
        self._pending_reward = 0.0
        self.cumulative_reward = 0.0

        self.body.velocity = Vector3.zero()
        self.body.angular_velocity = Vector3.zero()

        # В игре - всегда перед цветком, в обучении - в половине случаев
        in_front_of_flower = True
        if self.training_mode:
            in_front_of_flower = self.rng.random() > 0.5

        self.move_to_safe_random_position(in_front_of_flower)

        self.update_nearest_flower()
        self.state.phase = "active"

    def move_to_safe_random_position(self, in_front_of_flower: bool):
        position, rotation = self.placer.find_safe_pose(in_front_of_flower, ignore=(self.body,))
        self.body.position = position
        self.body.rotation = rotation

    # ------------------------------------------------------------------
    #  Наблюдения и действия
    # ------------------------------------------------------------------

    def collect_observations(self) -> np.ndarray:
        return build_observation(
            self.body.rotation,
            self.beak_tip_position,
            self.forward,
            self.state.nearest_flower,
            area_diameter=self.area.diameter,
        )

    def on_action_received(self, action):
        """Применить действие (от сети или игрока). Замороженный агент игнорирует всё."""
        result = interpret_action(self.state, self.body.rotation, action, self.config, self.dt)
        if result is None:
            return

        force, rotation = result
        self.body.apply_force(force)
        self.body.rotation = rotation

    def heuristic(self, controls) -> np.ndarray:
        """Ручное управление: клавиши → действие той же формы, что у сети"""
        return heuristic_action(controls, self.body.rotation)

    # ------------------------------------------------------------------
    #  Заморозка (только игровой режим)
    # ------------------------------------------------------------------

    def freeze_agent(self):
        """Остановить агента: никаких действий и движения"""
        if self.training_mode:
            raise TrainingModeError("Freeze/Unfreeze not supported in training")
        self.state.frozen = True
        self.body.sleep()

    def unfreeze_agent(self):
        """Вернуть агенту движение и действия"""
        if self.training_mode:
            raise TrainingModeError("Freeze/Unfreeze not supported in training")
        self.state.frozen = False
        self.body.wake_up()

    # ------------------------------------------------------------------
    #  Ближайший цветок
    # ------------------------------------------------------------------

    def update_nearest_flower(self):
        self.state.nearest_flower = self.tracker.update(self.beak_tip_position, self.state.nearest_flower)

    def fixed_update(self):
        """Раз в тик: нектар цели мог выпить соперник"""
        if self.tracker.needs_update(self.state.nearest_flower):
            self.update_nearest_flower()

    # ------------------------------------------------------------------
    #  События физики
    # ------------------------------------------------------------------

    def on_trigger_enter(self, collider):
        self._trigger_enter_or_stay(collider)

    def on_trigger_stay(self, collider):
        self._trigger_enter_or_stay(collider)

    def _trigger_enter_or_stay(self, collider):
        """Контакт с нектаром: кормимся, если касается именно кончик клюва"""
        if not collider.compare_tag(RewardCalculator.NECTAR_TAG):
            return

        beak_tip = self.beak_tip_position
        closest_point_to_beak_tip = collider.closest_point(beak_tip)
        if not RewardCalculator.is_beak_contact(beak_tip, closest_point_to_beak_tip,
                                                self.config.beak_tip_radius):
            return

        flower = self.area.get_flower_from_nectar(collider)

        # Пытаемся забрать порцию нектара (каждый фиксированный тик)
        nectar_received = self.area.feed(flower, self.config.nectar_per_feed)
        self.state.nectar_obtained += nectar_received

        if self.training_mode:
            self.add_reward(RewardCalculator.nectar_reward(self.forward, flower.up_vector))

        # Цветок опустел - ищем новую цель сразу
        if not flower.has_nectar:
            self.update_nearest_flower()

    def on_collision_enter(self, collider):
        if self.training_mode:
            penalty = RewardCalculator.collision_reward(collider)
            if penalty != 0.0:
                self.add_reward(penalty)

    def __repr__(self):
        return (f"Hummingbird(id={self.id[:8]}..., pos={self.body.position}, "
                f"nectar={self.state.nectar_obtained:.2f})")
