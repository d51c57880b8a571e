import pytest

from ai.reward import RewardCalculator
from core.physics import Vector3
from core.scene import SphereCollider, BoundaryCollider


def test_aligned_beak_gets_full_bonus():
    reward = RewardCalculator.nectar_reward(Vector3(0, -1, 0), Vector3(0, 1, 0))
    assert reward == pytest.approx(0.03)


def test_reversed_beak_gets_only_base():
    assert RewardCalculator.nectar_reward(Vector3(0, 1, 0), Vector3(0, 1, 0)) == 0.01


def test_perpendicular_beak_gets_only_base():
    reward = RewardCalculator.nectar_reward(Vector3(1, 0, 0), Vector3(0, 1, 0))
    assert reward == pytest.approx(0.01)


def test_partial_alignment():
    forward = Vector3(1, -1, 0).normalize()
    reward = RewardCalculator.nectar_reward(forward, Vector3(0, 1, 0))
    assert reward == pytest.approx(0.01 + 0.02 * (2 ** -0.5))


def test_boundary_collision_penalty():
    boundary = BoundaryCollider(Vector3.zero(), 10.0, 5.0)
    petal = SphereCollider(Vector3.zero(), 0.03, tag="flower")
    assert RewardCalculator.collision_reward(boundary) == -0.5
    assert RewardCalculator.collision_reward(petal) == 0.0


def test_beak_contact_uses_tip_radius():
    tip = Vector3(0, 0, 0)
    assert RewardCalculator.is_beak_contact(tip, Vector3(0, 0, 0.005), 0.008)
    assert not RewardCalculator.is_beak_contact(tip, Vector3(0, 0, 0.05), 0.008)
