"""Наблюдение агента: 10 чисел о собственной ориентации и ближайшем цветке"""

import numpy as np

from core.flower import FlowerArea
from core.physics import Vector3, Rotation


OBS_DIM = 10


def build_observation(rotation: Rotation, beak_position: Vector3, beak_forward: Vector3,
                      flower=None, area_diameter: float = FlowerArea.AREA_DIAMETER) -> np.ndarray:
    """
    Порядок признаков:
        [0:4] кватернион ориентации (x, y, z, w), нормализован
        [4:7] нормализованный вектор от кончика клюва к центру цветка
        [7]   dot(to_flower, -flower.up): +1 клюв прямо перед цветком, -1 позади
        [8]   dot(beak_forward, -flower.up): +1 клюв смотрит прямо в цветок
        [9]   расстояние клюв→цветок / диаметр области

    Без цели (нектара нет нигде) - ровно 10 нулей.
    """
    if flower is None:
        return np.zeros(OBS_DIM, dtype=np.float32)

    to_flower = flower.center_position - beak_position
    to_flower_n = to_flower.normalize()
    flower_down = -flower.up_vector.normalize()

    obs = np.empty(OBS_DIM, dtype=np.float32)
    obs[0:4] = rotation.to_quaternion()
    obs[4:7] = to_flower_n.to_tuple()
    obs[7] = to_flower_n.dot(flower_down)
    obs[8] = beak_forward.normalize().dot(flower_down)
    obs[9] = to_flower.magnitude() / area_diameter
    return obs
