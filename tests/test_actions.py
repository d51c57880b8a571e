import math
import random

import numpy as np
import pytest

from ai.actions import interpret_action, heuristic_action, move_towards, ACTION_DIM
from birds.hummingbird import AgentState
from core.config import HummingbirdConfig
from core.physics import Rotation


DT = 0.02


@pytest.fixture
def config():
    return HummingbirdConfig()


class TestMoveTowards:

    def test_limited_step(self):
        assert move_towards(0.0, 1.0, 0.04) == pytest.approx(0.04)
        assert move_towards(0.0, -1.0, 0.04) == pytest.approx(-0.04)

    def test_reaches_target_when_close(self):
        assert move_towards(0.98, 1.0, 0.04) == 1.0


class TestInterpretAction:

    def test_force_scaled_and_not_clamped(self, config):
        force, _ = interpret_action(AgentState(), Rotation(), [3.0, -0.5, 1.0, 0, 0], config, DT)
        assert force.x == pytest.approx(6.0)
        assert force.y == pytest.approx(-1.0)
        assert force.z == pytest.approx(2.0)

    def test_pitch_changes_smoothly(self, config):
        state = AgentState()
        _, rotation = interpret_action(state, Rotation(), [0, 0, 0, 1, 0], config, DT)
        assert state.smooth_pitch_change == pytest.approx(0.04)
        assert rotation.pitch == pytest.approx(0.04 * DT * config.pitch_speed)

    def test_smoothing_persists_between_actions(self, config):
        state = AgentState()
        rotation = Rotation()
        for _ in range(5):
            _, rotation = interpret_action(state, rotation, [0, 0, 0, 0, 1], config, DT)
        assert state.smooth_yaw_change == pytest.approx(0.2)

        _, rotation = interpret_action(state, rotation, [0, 0, 0, 0, 0], config, DT)
        assert state.smooth_yaw_change == pytest.approx(0.16)

    def test_negative_pitch_is_unwrapped(self, config):
        _, rotation = interpret_action(AgentState(), Rotation(-10, 0), np.zeros(5), config, DT)
        assert rotation.pitch == pytest.approx(-10.0)

    def test_pitch_never_exceeds_limit(self, config):
        rnd = random.Random(3)
        state = AgentState()
        rotation = Rotation()
        for _ in range(3000):
            action = [rnd.uniform(-5, 5) for _ in range(ACTION_DIM)]
            _, rotation = interpret_action(state, rotation, action, config, DT)
            assert -config.max_pitch_angle <= rotation.pitch <= config.max_pitch_angle

    def test_constant_pitch_up_stops_at_limit(self, config):
        state = AgentState()
        rotation = Rotation()
        for _ in range(1000):
            _, rotation = interpret_action(state, rotation, [0, 0, 0, 1, 0], config, DT)
        assert rotation.pitch == pytest.approx(config.max_pitch_angle)

    def test_yaw_is_not_limited(self, config):
        state = AgentState()
        rotation = Rotation()
        for _ in range(1000):
            _, rotation = interpret_action(state, rotation, [0, 0, 0, 0, 1], config, DT)
        # Больше полного оборота: yaw просто заворачивается по модулю 360
        assert 0.0 <= rotation.euler_angles().y < 360.0

    def test_frozen_agent_ignores_action(self, config):
        state = AgentState(frozen=True, smooth_pitch_change=0.3)
        assert interpret_action(state, Rotation(), [1, 1, 1, 1, 1], config, DT) is None
        assert state.smooth_pitch_change == 0.3

    def test_wrong_length_raises(self, config):
        with pytest.raises(ValueError):
            interpret_action(AgentState(), Rotation(), [0, 0, 0], config, DT)


class TestHeuristicAction:

    def test_nothing_pressed(self):
        assert not np.any(heuristic_action(set(), Rotation()))

    def test_forward(self):
        action = heuristic_action({"forward"}, Rotation())
        assert action == pytest.approx([0, 0, 1, 0, 0], abs=1e-6)

    def test_combined_movement_is_normalized(self):
        action = heuristic_action({"forward", "right", "up"}, Rotation())
        assert np.linalg.norm(action[0:3]) == pytest.approx(1.0)
        assert action[0:3] == pytest.approx([1 / math.sqrt(3)] * 3, abs=1e-6)

    def test_movement_follows_bird_axes(self):
        action = heuristic_action({"forward"}, Rotation(0, 90))
        assert action[0:3] == pytest.approx([1, 0, 0], abs=1e-6)

    def test_dict_controls_and_rotation(self):
        action = heuristic_action({"yaw_left": True, "pitch_down": True, "forward": False}, Rotation())
        assert action == pytest.approx([0, 0, 0, -1, -1], abs=1e-6)
