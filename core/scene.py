"""Физическая сцена: коллайдеры, тела, события триггеров и столкновений"""

import itertools
import math
from abc import ABC, abstractmethod

from core.physics import Vector3, CollisionSource, PhysicsBody


_collider_ids = itertools.count(1)


class Collider(ABC):
    """
    Базовый коллайдер.
    is_trigger=True - тела проходят сквозь него, генерируются enter/stay события.
    is_trigger=False - твёрдый, тело откатывается и получает collision enter.
    """

    def __init__(self, tag: str = "untagged", is_trigger: bool = False):
        self.id = next(_collider_ids)
        self.tag = tag
        self.is_trigger = is_trigger

    def compare_tag(self, tag: str) -> bool:
        return self.tag == tag

    @abstractmethod
    def penetration(self, center: Vector3, radius: float) -> float:
        """Глубина проникновения сферы в коллайдер (<= 0 - нет касания)"""
        pass

    def overlaps_sphere(self, center: Vector3, radius: float) -> bool:
        return self.penetration(center, radius) > 0.0

    @abstractmethod
    def closest_point(self, point: Vector3) -> Vector3:
        """Ближайшая к point точка коллайдера (сама point, если она внутри)"""
        pass


class SphereCollider(Collider):

    def __init__(self, center: Vector3, radius: float, tag: str = "untagged", is_trigger: bool = False):
        super().__init__(tag=tag, is_trigger=is_trigger)
        self.center = center.copy()
        self.radius = radius

    def penetration(self, center: Vector3, radius: float) -> float:
        return self.radius + radius - self.center.distance_to(center)

    def closest_point(self, point: Vector3) -> Vector3:
        offset = point - self.center
        if offset.magnitude() <= self.radius:
            return point.copy()
        return self.center + offset.normalize() * self.radius

    def __repr__(self):
        return f"SphereCollider(id={self.id}, tag={self.tag}, center={self.center}, r={self.radius})"


class BoundaryCollider(Collider):
    """
    Граница области: вертикальный цилиндр с полом и потолком.
    Пересекается со всем, что хотя бы частично выходит наружу.
    """

    def __init__(self, center: Vector3, radius: float, height: float, tag: str = "boundary"):
        super().__init__(tag=tag, is_trigger=False)
        self.center = center.copy()
        self.radius = radius
        self.height = height

    def penetration(self, center: Vector3, radius: float) -> float:
        """Насколько сфера выходит за стенку, пол или потолок (максимум из трёх)"""
        dx = center.x - self.center.x
        dz = center.z - self.center.z
        wall = math.sqrt(dx * dx + dz * dz) + radius - self.radius
        floor = self.center.y - (center.y - radius)
        ceiling = center.y + radius - (self.center.y + self.height)
        return max(wall, floor, ceiling)

    def closest_point(self, point: Vector3) -> Vector3:
        dx = point.x - self.center.x
        dz = point.z - self.center.z
        horizontal = math.sqrt(dx * dx + dz * dz)
        candidates = [
            Vector3(point.x, self.center.y, point.z),
            Vector3(point.x, self.center.y + self.height, point.z),
        ]
        if horizontal > 0:
            scale = self.radius / horizontal
            candidates.append(Vector3(self.center.x + dx * scale, point.y, self.center.z + dz * scale))
        return min(candidates, key=lambda c: c.distance_squared_to(point))

    def __repr__(self):
        return f"BoundaryCollider(id={self.id}, r={self.radius}, h={self.height})"


class PhysicsScene(CollisionSource):
    """
    Минимальная сцена для цикла агент-среда.
    Тела - сферы; столкновения тело-тело не моделируются.
    """

    def __init__(self):
        self.colliders = {}   # collider.id → collider
        self.bodies = []      # [(body, listener)]
        self._contacts = {}   # id(body) → set(collider.id) с прошлого тика

    def add_collider(self, collider: Collider) -> Collider:
        self.colliders[collider.id] = collider
        return collider

    def remove_collider(self, collider: Collider):
        self.colliders.pop(collider.id, None)

    def add_body(self, body: PhysicsBody):
        if all(b is not body for b, _ in self.bodies):
            self.bodies.append((body, None))
            self._contacts[id(body)] = set()

    def subscribe(self, body: PhysicsBody, listener):
        """Зарегистрировать тело (если ещё нет) и получателя его событий"""
        for i, (b, _) in enumerate(self.bodies):
            if b is body:
                self.bodies[i] = (body, listener)
                return
        self.bodies.append((body, listener))
        self._contacts[id(body)] = set()

    def overlap_sphere(self, center: Vector3, radius: float, ignore=()) -> list:
        hits = [c for c in self.colliders.values() if c.overlaps_sphere(center, radius)]

        # Другие тела тоже занимают место
        for body, _ in self.bodies:
            if any(body is ignored for ignored in ignore):
                continue
            reach = body.radius + radius
            if body.position.distance_squared_to(center) < reach * reach:
                hits.append(body)
        return hits

    def step(self, dt: float):
        """Продвинуть все тела на один фиксированный тик и разослать события"""
        for body, listener in self.bodies:
            previous_position = body.position.copy()
            body.integrate(dt)

            colliders = list(self.colliders.values())
            previous_contacts = self._contacts[id(body)]
            touching = set()

            # Твёрдые: блокируется только движение внутрь (новый контакт или глубже),
            # из уже существующего пересечения тело может выйти
            blocked = False
            for collider in colliders:
                if collider.is_trigger:
                    continue
                depth = collider.penetration(body.position, body.radius)
                if depth <= 0.0:
                    continue
                touching.add(collider.id)
                depth_before = max(0.0, collider.penetration(previous_position, body.radius))
                if depth > depth_before:
                    blocked = True
                if listener is not None and collider.id not in previous_contacts:
                    listener.on_collision_enter(collider)

            if blocked:
                body.position = previous_position
                body.velocity = Vector3.zero()

            # Триггеры - по позиции, в которой тело закончило тик
            for collider in colliders:
                if not collider.is_trigger or not collider.overlaps_sphere(body.position, body.radius):
                    continue
                touching.add(collider.id)
                if listener is None:
                    continue
                if collider.id in previous_contacts:
                    listener.on_trigger_stay(collider)
                else:
                    listener.on_trigger_enter(collider)

            self._contacts[id(body)] = touching
