"""Общие фикстуры: пустая сцена, область и цветы с коллайдерами нектара"""

import random

import pytest

from core.flower import Flower, FlowerArea
from core.physics import Vector3
from core.scene import PhysicsScene, SphereCollider


@pytest.fixture
def scene():
    return PhysicsScene()


@pytest.fixture
def area():
    return FlowerArea()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def make_flower(scene, area):
    """Фабрика: цветок с триггером нектара, зарегистрированный в сцене и области"""

    def _make(position, up=None, capacity=1.0, nectar_radius=0.02):
        flower = Flower(position, up or Vector3.up(), capacity=capacity)
        flower.nectar_collider = scene.add_collider(
            SphereCollider(flower.center_position, nectar_radius, tag="nectar", is_trigger=True)
        )
        return area.add_flower(flower)

    return _make


class EventRecorder:
    """Слушатель событий сцены"""

    def __init__(self):
        self.events = []

    def on_trigger_enter(self, collider):
        self.events.append(("enter", collider.id))

    def on_trigger_stay(self, collider):
        self.events.append(("stay", collider.id))

    def on_collision_enter(self, collider):
        self.events.append(("collision", collider.id))


@pytest.fixture
def recorder():
    return EventRecorder()
