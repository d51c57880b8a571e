"""Цветы и цветочная область: реестр нектара"""

import math
import random
import threading
import uuid

from core.errors import FlowerNotFoundError
from core.physics import Vector3
from core.scene import SphereCollider


class Flower:
    """
    Цветок с нектаром
    - position: основание цветка
    - center_position: центр нектара (куда целится клюв)
    - up_vector: ось цветка, кормиться нужно со стороны +up, клювом вдоль -up
    - нектар только убывает в течение эпизода, восстанавливается reset()
    """

    def __init__(self, position: Vector3, up_vector: Vector3 = None, capacity: float = 1.0,
                 nectar_offset: float = 0.02):
        if capacity < 0:
            raise ValueError(f"Flower capacity must be non-negative, got {capacity}")

        self.id = str(uuid.uuid4())
        self.position = position.copy()
        self.up_vector = (up_vector or Vector3.up()).normalize()
        self.center_position = self.position + self.up_vector * nectar_offset
        self.capacity = capacity
        self.nectar = capacity
        self.nectar_collider = None
        self.petal_collider = None
        self._lock = threading.Lock()

    @property
    def has_nectar(self) -> bool:
        return self.nectar > 0

    def feed(self, amount: float) -> float:
        """
        Попытаться забрать amount нектара.
        Возвращает реально отданное количество: min(amount, остаток).
        """
        if amount < 0:
            raise ValueError(f"Feed amount must be non-negative, got {amount}")

        with self._lock:
            nectar_taken = min(amount, self.nectar)
            self.nectar = max(0.0, self.nectar - nectar_taken)
        return nectar_taken

    def reset(self):
        """Восстановить нектар до полного"""
        with self._lock:
            self.nectar = self.capacity

    def __repr__(self):
        return f"Flower(pos={self.position}, nectar={self.nectar:.3f}/{self.capacity:.1f})"


class FlowerArea:
    """
    Область с цветами - общий реестр для всех колибри в ней.
    Связь коллайдер нектара → цветок один-к-одному.
    """

    AREA_DIAMETER = 20.0

    def __init__(self, center: Vector3 = None, diameter: float = AREA_DIAMETER):
        self.center = center.copy() if center else Vector3.zero()
        self.diameter = diameter
        self.flowers = []
        self._nectar_flower_dict = {}  # nectar collider id → Flower

    def add_flower(self, flower: Flower):
        """Зарегистрировать цветок (и его коллайдер нектара, если есть)"""
        if flower.nectar_collider is not None:
            key = flower.nectar_collider.id
            if key in self._nectar_flower_dict:
                raise ValueError(f"Nectar collider {key} is already registered")
            self._nectar_flower_dict[key] = flower
        self.flowers.append(flower)
        return flower

    def spawn_flowers(self, scene, count: int, capacity: float = 1.0, rng=None,
                      min_radius: float = 1.5, max_radius: float = 8.0,
                      min_height: float = 0.4, max_height: float = 2.2,
                      max_tilt: float = 50.0, nectar_radius: float = 0.02,
                      petal_radius: float = 0.03):
        """
        Разместить count цветов кольцом вокруг центра и создать их коллайдеры:
        нектар (триггер, tag="nectar") и лепестки (твёрдый, tag="flower").
        """
        rng = rng or random
        for _ in range(count):
            angle = math.radians(rng.uniform(-180.0, 180.0))
            radius = rng.uniform(min_radius, max_radius)
            height = rng.uniform(min_height, max_height)
            position = self.center + Vector3(math.sin(angle) * radius, height, math.cos(angle) * radius)

            # Ось наклонена в случайную сторону
            tilt = math.radians(rng.uniform(0.0, max_tilt))
            heading = math.radians(rng.uniform(-180.0, 180.0))
            up = Vector3(
                math.sin(tilt) * math.sin(heading),
                math.cos(tilt),
                math.sin(tilt) * math.cos(heading),
            )

            flower = Flower(position, up, capacity=capacity)
            flower.nectar_collider = scene.add_collider(
                SphereCollider(flower.center_position, nectar_radius, tag="nectar", is_trigger=True)
            )
            # Лепестки чуть позади нектара, чтобы клюв мог достать нектар спереди
            flower.petal_collider = scene.add_collider(
                SphereCollider(position - up * (petal_radius + nectar_radius), petal_radius, tag="flower")
            )
            self.add_flower(flower)

    def reset_flowers(self):
        """Восстановить нектар во всех цветах (раз в эпизод)"""
        for flower in self.flowers:
            flower.reset()

    def feed(self, flower: Flower, amount: float) -> float:
        return flower.feed(amount)

    def get_flower_from_nectar(self, collider) -> Flower:
        """Найти цветок по коллайдеру нектара (или его id)"""
        key = getattr(collider, "id", collider)
        try:
            return self._nectar_flower_dict[key]
        except KeyError:
            raise FlowerNotFoundError(key) from None

    def flowers_with_nectar(self) -> list:
        return [f for f in self.flowers if f.has_nectar]

    def total_nectar(self) -> float:
        return sum(f.nectar for f in self.flowers)

    def __repr__(self):
        return f"FlowerArea(flowers={len(self.flowers)}, nectar={self.total_nectar():.2f})"
