"""Безопасный спаун: rejection sampling позиции без пересечений"""

import math
import random

from core.errors import PlacementError
from core.physics import Vector3, Rotation


class SpawnPlacer:
    """
    Подбирает позу для старта эпизода.
    Либо перед случайным цветком (клюв смотрит на цветок), либо
    случайно в цилиндрическом объёме над областью.
    Число попыток ограничено: не нашли - это дефект сцены, а не runtime-ситуация.
    """

    MIN_FLOWER_DISTANCE = 0.1
    MAX_FLOWER_DISTANCE = 0.2
    MIN_HEIGHT = 1.2
    MAX_HEIGHT = 2.5
    MIN_RADIUS = 2.0
    MAX_RADIUS = 7.0
    MAX_SPAWN_PITCH = 60.0

    def __init__(self, area, scene, check_radius: float = 0.05, max_attempts: int = 100, rng=None):
        self.area = area
        self.scene = scene
        self.check_radius = check_radius
        self.max_attempts = max_attempts
        self.rng = rng or random

    def candidate_in_front_of_flower(self):
        """10-20 см перед случайным цветком, клювом к цветку"""
        flower = self.area.flowers[self.rng.randrange(len(self.area.flowers))]
        distance_from_flower = self.rng.uniform(self.MIN_FLOWER_DISTANCE, self.MAX_FLOWER_DISTANCE)
        position = flower.position + flower.up_vector * distance_from_flower

        to_flower = flower.center_position - position
        return position, Rotation.look_rotation(to_flower)

    def candidate_in_volume(self):
        """Случайная точка над областью, случайные pitch/yaw"""
        height = self.rng.uniform(self.MIN_HEIGHT, self.MAX_HEIGHT)
        radius = self.rng.uniform(self.MIN_RADIUS, self.MAX_RADIUS)
        direction = math.radians(self.rng.uniform(-180.0, 180.0))

        position = self.area.center + Vector3(
            math.sin(direction) * radius,
            height,
            math.cos(direction) * radius,
        )
        pitch = self.rng.uniform(-self.MAX_SPAWN_PITCH, self.MAX_SPAWN_PITCH)
        yaw = self.rng.uniform(-180.0, 180.0)
        return position, Rotation(pitch, yaw)

    def find_safe_pose(self, in_front_of_flower: bool, ignore=()):
        """
        Первая поза, вокруг которой (сфера check_radius) нет ни одного коллайдера.

        Raises:
            PlacementError: если за max_attempts попыток ничего не нашлось
        """
        if in_front_of_flower and not self.area.flowers:
            raise PlacementError("Cannot spawn in front of a flower: area has no flowers")

        attempts_remaining = self.max_attempts
        while attempts_remaining > 0:
            attempts_remaining -= 1
            if in_front_of_flower:
                position, rotation = self.candidate_in_front_of_flower()
            else:
                position, rotation = self.candidate_in_volume()

            colliders = self.scene.overlap_sphere(position, self.check_radius, ignore=ignore)
            if len(colliders) == 0:
                return position, rotation

        raise PlacementError(
            f"Could not find a safe position to spawn after {self.max_attempts} attempts"
        )
