"""RL Brain - обёртка для SB3 PPO-модели, реализующая интерфейс Brain."""

import os

import numpy as np

from ai.actions import ACTION_DIM
from ai.brain import Brain
from ai.observation import OBS_DIM


class RLBrain(Brain):
    """
    Мозг, управляемый обученной PPO-моделью (stable-baselines3).

    В режиме inference загружает модель и вызывает predict().
    В режиме training используется через gym_env, а не напрямую.
    """

    DEFAULT_MODEL = "models/hummingbird_ppo.zip"

    def __init__(self, model_path: str = None, deterministic: bool = True, device: str = "cpu"):
        self.model_path = model_path or self.DEFAULT_MODEL
        self.deterministic = deterministic
        if not os.path.exists(self.model_path):
            raise FileNotFoundError(f"PPO model not found: {self.model_path}")
        self.model = self._load_model(self.model_path, device)

    @staticmethod
    def _load_model(path: str, device: str):
        """Загрузить обученную PPO модель."""
        from stable_baselines3 import PPO
        model = PPO.load(path, device=device)
        print(f"[RLBrain] Model loaded from {path}")
        return model

    def decide_action(self, observation: np.ndarray, agent=None) -> np.ndarray:
        obs = np.asarray(observation, dtype=np.float32).reshape(OBS_DIM)
        action, _ = self.model.predict(obs, deterministic=self.deterministic)
        return np.asarray(action, dtype=np.float32).reshape(ACTION_DIM)


class _SharedRLBrain(Brain):
    """
    Лёгкая обёртка - переиспользует уже загруженный RLBrain (shared model).
    Не загружает модель повторно, экономит RAM.
    """

    def __init__(self, shared_brain: RLBrain):
        self._shared = shared_brain

    def decide_action(self, observation: np.ndarray, agent=None) -> np.ndarray:
        return self._shared.decide_action(observation, agent=agent)
