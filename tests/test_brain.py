import random

import numpy as np
import pytest

from ai.brain import HeuristicBrain, KeyboardBrain, create_brain
from ai.observation import build_observation
from ai.rl_brain import RLBrain
from birds.hummingbird import Hummingbird
from core.physics import Vector3, Rotation


class TestHeuristicBrain:

    def test_hovers_without_target(self):
        action = HeuristicBrain().decide_action(np.zeros(10, dtype=np.float32))
        assert action.shape == (5,)
        assert not np.any(action)

    def test_turns_and_flies_towards_flower(self, make_flower):
        flower = make_flower(Vector3(2, 1, 2))
        rotation = Rotation()
        beak = Vector3(0, flower.center_position.y, 0)
        obs = build_observation(rotation, beak, rotation.forward(), flower)

        action = HeuristicBrain().decide_action(obs)

        # Цветок справа под 45 градусов: полный поворот вправо, pitch не нужен
        assert action[4] == pytest.approx(1.0)
        assert action[3] == pytest.approx(0.0, abs=1e-4)
        assert action[0] > 0 and action[2] > 0
        assert action[1] == pytest.approx(0.0, abs=1e-6)

    def test_slows_down_near_flower(self, make_flower):
        flower = make_flower(Vector3(0, 1, 1))
        rotation = Rotation()
        beak = flower.center_position - Vector3(0, 0, 0.1)
        obs = build_observation(rotation, beak, rotation.forward(), flower)

        action = HeuristicBrain().decide_action(obs)

        assert np.linalg.norm(action[0:3]) == pytest.approx(0.2, abs=1e-4)


class TestKeyboardBrain:

    def test_without_agent_returns_zeros(self):
        brain = KeyboardBrain()
        brain.set_controls({"forward"})
        assert not np.any(brain.decide_action(np.zeros(10)))

    def test_uses_agent_heuristic(self, scene, area):
        bird = Hummingbird(area, scene, training_mode=False, rng=random.Random(0))
        brain = KeyboardBrain()
        brain.set_controls(["forward", "yaw_right"])

        action = brain.decide_action(np.zeros(10), agent=bird)

        assert action == pytest.approx([0, 0, 1, 0, 1], abs=1e-6)


class TestCreateBrain:

    def test_known_types(self):
        assert isinstance(create_brain("heuristic"), HeuristicBrain)
        assert isinstance(create_brain("keyboard"), KeyboardBrain)

    def test_unknown_type(self):
        with pytest.raises(ValueError):
            create_brain("telepathy")

    def test_missing_model(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            create_brain("rl", model_path=str(tmp_path / "nope.zip"))


class TestRLBrain:

    @pytest.fixture
    def model_path(self, tmp_path):
        from stable_baselines3 import PPO
        from ai.gym_env import HummingbirdEnv

        env = HummingbirdEnv()
        model = PPO("MlpPolicy", env, n_steps=64, batch_size=32, device="cpu", seed=0)
        path = tmp_path / "tiny_ppo.zip"
        model.save(str(path))
        env.close()
        return str(path)

    def test_predicts_action_of_right_shape(self, model_path):
        brain = RLBrain(model_path=model_path)
        action = brain.decide_action(np.zeros(10, dtype=np.float32))
        assert action.shape == (5,)
        assert action.dtype == np.float32

    def test_factory_shares_loaded_model(self, model_path):
        first = create_brain("rl", model_path=model_path)
        second = create_brain("rl", model_path=model_path)
        assert first._shared is second._shared
