"""Система ИИ и мозга для колибри - базовый класс, эвристика и ручное управление."""

import math
from abc import ABC, abstractmethod

import numpy as np

from ai.actions import ACTION_DIM
from ai.observation import OBS_DIM
from core.flower import FlowerArea


class Brain(ABC):
    """Абстрактный мозг: наблюдение (10 чисел) → действие (5 чисел)"""

    @abstractmethod
    def decide_action(self, observation: np.ndarray, agent=None) -> np.ndarray:
        """
        Принять решение на основе наблюдения.

        Args:
            observation: вектор из Hummingbird.collect_observations()
            agent:       управляемая птица (нужна только ручному управлению)

        Returns:
            np.ndarray формы (5,): [move_x, move_y, move_z, pitch, yaw]
        """
        pass


# ---------------------------------------------------------------------------
#  Эвристический мозг
# ---------------------------------------------------------------------------

def _forward_from_quaternion(q) -> np.ndarray:
    """Ось +Z тела в мировых координатах"""
    x, y, z, w = q
    return np.array([
        2.0 * (x * z + w * y),
        2.0 * (y * z - w * x),
        1.0 - 2.0 * (x * x + y * y),
    ])


def _wrap_degrees(angle: float) -> float:
    return (angle + 180.0) % 360.0 - 180.0


class HeuristicBrain(Brain):
    """
    Простое поведение, используя только наблюдение:
    1. Нет цели - зависнуть
    2. Развернуть клюв к цветку (pitch/yaw)
    3. Лететь к цветку, притормаживая вблизи
    """

    TURN_GAIN_DEG = 30.0   # рассогласование, при котором поворот на полной скорости
    SLOWDOWN_DISTANCE = 0.5

    def __init__(self, area_diameter: float = FlowerArea.AREA_DIAMETER):
        self.area_diameter = area_diameter

    def decide_action(self, observation: np.ndarray, agent=None) -> np.ndarray:
        obs = np.asarray(observation, dtype=np.float64)
        action = np.zeros(ACTION_DIM, dtype=np.float32)
        if obs.shape[0] != OBS_DIM or not np.any(obs):
            return action

        to_flower = obs[4:7]
        distance = obs[9] * self.area_diameter
        forward = _forward_from_quaternion(obs[0:4])

        # Поворот: разница углов yaw и pitch между клювом и направлением на цветок
        desired_yaw = math.degrees(math.atan2(to_flower[0], to_flower[2]))
        current_yaw = math.degrees(math.atan2(forward[0], forward[2]))
        desired_pitch = -math.degrees(math.asin(np.clip(to_flower[1], -1.0, 1.0)))
        current_pitch = -math.degrees(math.asin(np.clip(forward[1], -1.0, 1.0)))

        action[3] = np.clip((desired_pitch - current_pitch) / self.TURN_GAIN_DEG, -1.0, 1.0)
        action[4] = np.clip(_wrap_degrees(desired_yaw - current_yaw) / self.TURN_GAIN_DEG, -1.0, 1.0)

        speed = min(1.0, distance / self.SLOWDOWN_DISTANCE)
        action[0:3] = to_flower * speed
        return action


# ---------------------------------------------------------------------------
#  Ручное управление
# ---------------------------------------------------------------------------

class KeyboardBrain(Brain):
    """
    Действия от игрока. Активные команды (см. ai.actions.CONTROLS)
    выставляются снаружи, например из pygame.
    """

    def __init__(self):
        self.controls = set()

    def set_controls(self, controls):
        self.controls = set(controls)

    def decide_action(self, observation: np.ndarray, agent=None) -> np.ndarray:
        if agent is None:
            return np.zeros(ACTION_DIM, dtype=np.float32)
        return agent.heuristic(self.controls)


# ---------------------------------------------------------------------------
#  Фабрика мозгов
# ---------------------------------------------------------------------------

# Кэш загруженных RL-моделей (одна загрузка на путь)
_rl_brain_cache: dict = {}


def create_brain(brain_type: str, model_path: str = None) -> Brain:
    """
    Фабрика: создать мозг нужного типа.

    Args:
        brain_type: "heuristic" | "keyboard" | "rl"
        model_path: путь к модели (для RL)
    """
    if brain_type == "heuristic":
        return HeuristicBrain()

    elif brain_type == "keyboard":
        return KeyboardBrain()

    elif brain_type == "rl":
        from ai.rl_brain import RLBrain, _SharedRLBrain

        if model_path not in _rl_brain_cache:
            # Загружаем модель один раз
            _rl_brain_cache[model_path] = RLBrain(model_path=model_path)
            print(f"[create_brain] Loaded RL model from {model_path}")

        # Возвращаем лёгкую обёртку, шарящую одну модель
        return _SharedRLBrain(_rl_brain_cache[model_path])

    raise ValueError(f"Unknown brain type: {brain_type!r}")
