"""Конфигурация параметров области, цветов и колибри"""

from dataclasses import dataclass


@dataclass
class AreaConfig:
    """Конфигурация цветочной области"""
    diameter: float = 20.0           # нормировка расстояния в наблюдении
    flower_count: int = 18
    nectar_capacity: float = 1.0
    boundary_height: float = 5.0     # потолок области
    flower_min_radius: float = 1.5
    flower_max_radius: float = 8.0
    flower_min_height: float = 0.4
    flower_max_height: float = 2.2
    flower_tilt: float = 50.0        # макс. отклонение оси цветка от вертикали (градусы)
    nectar_radius: float = 0.02
    petal_radius: float = 0.03


@dataclass
class HummingbirdConfig:
    """Конфигурация колибри"""
    move_force: float = 2.0
    pitch_speed: float = 100.0
    yaw_speed: float = 100.0
    smoothing_rate: float = 2.0      # макс. изменение сглаженного pitch/yaw в секунду
    max_pitch_angle: float = 80.0
    beak_tip_radius: float = 0.008
    beak_length: float = 0.06        # кончик клюва относительно центра тела
    body_radius: float = 0.07
    mass: float = 1.0
    drag: float = 2.0
    nectar_per_feed: float = 0.01    # за один фиксированный тик
    spawn_check_radius: float = 0.05
    spawn_attempts: int = 100


class SimulationConfig:
    """Главная конфигурация симуляции"""

    def __init__(self):
        self.area = AreaConfig()
        self.hummingbird = HummingbirdConfig()

        # Параметры симуляции
        self.dt = 0.02  # фиксированный тик, 50 Гц
        self.training_mode = True
        self.max_steps = 5000  # 0 = бесконечный эпизод
        self.opponent_count = 0
        self.update_interval = 250  # выводить статистику каждые N тиков


# Предустановки разных сценариев
class Presets:
    """Предустановленные конфигурации"""

    @staticmethod
    def training():
        """Обучение: один агент на область, награды, лимит шагов"""
        return SimulationConfig()

    @staticmethod
    def gameplay():
        """Игровой режим: без наград и без лимита шагов"""
        config = SimulationConfig()
        config.training_mode = False
        config.max_steps = 0
        return config

    @staticmethod
    def crowded():
        """Несколько колибри делят одни цветы"""
        config = SimulationConfig()
        config.area = AreaConfig(flower_count=10)
        config.opponent_count = 3
        return config

    @staticmethod
    def by_name(name: str):
        presets = {
            "training": Presets.training,
            "gameplay": Presets.gameplay,
            "crowded": Presets.crowded,
        }
        if name not in presets:
            raise ValueError(f"Unknown preset {name!r}, expected one of {sorted(presets)}")
        return presets[name]()
