"""Интерпретация действий: 5 чисел → сила и плавный поворот"""

import numpy as np

from core.physics import Vector3, Rotation, clamp


ACTION_DIM = 5


def move_towards(current: float, target: float, max_delta: float) -> float:
    """Сдвинуть current к target не более чем на max_delta"""
    if abs(target - current) <= max_delta:
        return target
    return current + max_delta if target > current else current - max_delta


def interpret_action(state, rotation: Rotation, action, config, dt: float):
    """
    Преобразовать действие в силу и новую ориентацию.

    action[i]:
        0: move x (+1 вправо, -1 влево)
        1: move y (+1 вверх, -1 вниз)
        2: move z (+1 вперёд, -1 назад)
        3: pitch (скорость изменения угла pitch, +1 / -1)
        4: yaw (+1 поворот вправо, -1 влево)

    Значения не обрезаются - выход за [-1, 1] передаётся как есть.
    state (AgentState) меняется на месте: smooth_pitch_change / smooth_yaw_change.

    Returns:
        (force: Vector3, rotation: Rotation) или None для замороженного агента
    """
    if state.frozen:
        return None

    action = np.asarray(action, dtype=np.float64).reshape(-1)
    if action.shape[0] != ACTION_DIM:
        raise ValueError(f"Expected {ACTION_DIM} action values, got {action.shape[0]}")

    move = Vector3(action[0], action[1], action[2])
    force = move * config.move_force

    euler = rotation.euler_angles()

    max_step = config.smoothing_rate * dt
    state.smooth_pitch_change = move_towards(state.smooth_pitch_change, float(action[3]), max_step)
    state.smooth_yaw_change = move_towards(state.smooth_yaw_change, float(action[4]), max_step)

    # Pitch ограничен, чтобы птица не переворачивалась
    pitch = euler.x + state.smooth_pitch_change * dt * config.pitch_speed
    if pitch > 180.0:
        pitch -= 360.0
    pitch = clamp(pitch, -config.max_pitch_angle, config.max_pitch_angle)

    yaw = euler.y + state.smooth_yaw_change * dt * config.yaw_speed

    return force, Rotation(pitch, yaw)


# ---------------------------------------------------------------------------
#  Ручное управление
# ---------------------------------------------------------------------------

CONTROLS = (
    "forward", "backward",
    "left", "right",
    "up", "down",
    "pitch_up", "pitch_down",
    "yaw_left", "yaw_right",
)


def heuristic_action(controls, rotation: Rotation) -> np.ndarray:
    """
    Действие из состояния клавиш (для режима ручного управления).
    controls: множество/словарь активных команд из CONTROLS.
    Движение складывается в локальных осях птицы и нормализуется.
    """
    def pressed(name):
        if isinstance(controls, dict):
            return bool(controls.get(name, False))
        return name in controls

    forward = Vector3.zero()
    left = Vector3.zero()
    up = Vector3.zero()
    pitch = 0.0
    yaw = 0.0

    if pressed("forward"):
        forward = rotation.forward()
    elif pressed("backward"):
        forward = -rotation.forward()

    if pressed("left"):
        left = -rotation.right()
    elif pressed("right"):
        left = rotation.right()

    if pressed("up"):
        up = rotation.up()
    elif pressed("down"):
        up = -rotation.up()

    if pressed("pitch_up"):
        pitch = 1.0
    elif pressed("pitch_down"):
        pitch = -1.0

    if pressed("yaw_left"):
        yaw = -1.0
    elif pressed("yaw_right"):
        yaw = 1.0

    combined = (forward + left + up).normalize()
    return np.array([combined.x, combined.y, combined.z, pitch, yaw], dtype=np.float32)
