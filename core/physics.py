"""Физика мира: 3D вектора, ориентация, твёрдые тела"""

import math
from abc import ABC, abstractmethod


class Vector3:
    """3D вектор с базовыми операциями"""

    def __init__(self, x=0, y=0, z=0):
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    def __add__(self, other):
        if isinstance(other, Vector3):
            return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)
        return Vector3(self.x + other, self.y + other, self.z + other)

    def __sub__(self, other):
        if isinstance(other, Vector3):
            return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)
        return Vector3(self.x - other, self.y - other, self.z - other)

    def __mul__(self, scalar):
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    def __rmul__(self, scalar):
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    def __truediv__(self, scalar):
        if scalar == 0:
            return Vector3(0, 0, 0)
        return Vector3(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self):
        return Vector3(-self.x, -self.y, -self.z)

    def __eq__(self, other):
        if not isinstance(other, Vector3):
            return NotImplemented
        return self.x == other.x and self.y == other.y and self.z == other.z

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def dot(self, other):
        """Скалярное произведение"""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other):
        """Векторное произведение"""
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def magnitude(self):
        """Длина вектора"""
        return math.sqrt(self.x ** 2 + self.y ** 2 + self.z ** 2)

    def magnitude_squared(self):
        """Квадрат длины (без sqrt, быстрее)"""
        return self.x ** 2 + self.y ** 2 + self.z ** 2

    def normalize(self):
        """Нормализованный вектор (направление, длина = 1)"""
        mag = self.magnitude()
        if mag == 0:
            return Vector3(0, 0, 0)
        return Vector3(self.x / mag, self.y / mag, self.z / mag)

    def distance_to(self, other):
        """Расстояние до другой точки"""
        return (self - other).magnitude()

    def distance_squared_to(self, other):
        """Квадрат расстояния (быстрее)"""
        return (self - other).magnitude_squared()

    def to_tuple(self):
        return (self.x, self.y, self.z)

    def __repr__(self):
        return f"Vector3({self.x:.3f}, {self.y:.3f}, {self.z:.3f})"

    def copy(self):
        return Vector3(self.x, self.y, self.z)

    @staticmethod
    def zero():
        return Vector3(0, 0, 0)

    @staticmethod
    def up():
        return Vector3(0, 1, 0)

    @staticmethod
    def forward():
        return Vector3(0, 0, 1)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def clamp01(value: float) -> float:
    return clamp(value, 0.0, 1.0)


class Rotation:
    """
    Ориентация без крена: pitch (вокруг X) и yaw (вокруг Y), в градусах.
    Левосторонние оси: +Y вверх, +Z вперёд, положительный pitch наклоняет нос вниз.
    """

    def __init__(self, pitch: float = 0.0, yaw: float = 0.0):
        self.pitch = float(pitch)
        self.yaw = float(yaw)

    def euler_angles(self) -> Vector3:
        """Углы Эйлера в диапазоне [0, 360), как их отдаёт движок"""
        return Vector3(self.pitch % 360.0, self.yaw % 360.0, 0.0)

    def to_quaternion(self) -> tuple:
        """Нормализованный кватернион (x, y, z, w) = q_yaw * q_pitch"""
        half_p = math.radians(self.pitch) / 2.0
        half_y = math.radians(self.yaw) / 2.0
        sp, cp = math.sin(half_p), math.cos(half_p)
        sy, cy = math.sin(half_y), math.cos(half_y)

        q = (cy * sp, sy * cp, -sy * sp, cy * cp)
        norm = math.sqrt(sum(c * c for c in q))
        return tuple(c / norm for c in q)

    def forward(self) -> Vector3:
        p = math.radians(self.pitch)
        y = math.radians(self.yaw)
        return Vector3(math.sin(y) * math.cos(p), -math.sin(p), math.cos(y) * math.cos(p))

    def up(self) -> Vector3:
        p = math.radians(self.pitch)
        y = math.radians(self.yaw)
        return Vector3(math.sin(y) * math.sin(p), math.cos(p), math.cos(y) * math.sin(p))

    def right(self) -> Vector3:
        y = math.radians(self.yaw)
        return Vector3(math.cos(y), 0.0, -math.sin(y))

    def rotate(self, local: Vector3) -> Vector3:
        """Перевести вектор из локальных координат тела в мировые"""
        return self.right() * local.x + self.up() * local.y + self.forward() * local.z

    @staticmethod
    def look_rotation(direction: Vector3) -> "Rotation":
        """Ориентация, при которой forward смотрит вдоль direction (up = мировой Y)"""
        d = direction.normalize()
        if d.magnitude_squared() == 0:
            return Rotation()
        yaw = math.degrees(math.atan2(d.x, d.z))
        pitch = -math.degrees(math.asin(clamp(d.y, -1.0, 1.0)))
        return Rotation(pitch, yaw)

    def copy(self):
        return Rotation(self.pitch, self.yaw)

    def __repr__(self):
        return f"Rotation(pitch={self.pitch:.2f}, yaw={self.yaw:.2f})"


# ---------------------------------------------------------------------------
#  Контракты физического движка
# ---------------------------------------------------------------------------

class PhysicsBody(ABC):
    """Узкий интерфейс твёрдого тела, от которого зависит агент"""

    position: Vector3
    rotation: Rotation
    velocity: Vector3
    angular_velocity: Vector3
    radius: float

    @abstractmethod
    def apply_force(self, force: Vector3):
        """Добавить силу в аккумулятор на текущий тик"""
        pass

    @abstractmethod
    def sleep(self):
        pass

    @abstractmethod
    def wake_up(self):
        pass

    @property
    @abstractmethod
    def is_sleeping(self) -> bool:
        pass


class CollisionSource(ABC):
    """
    Источник событий столкновений.
    listener должен иметь on_trigger_enter / on_trigger_stay / on_collision_enter.
    """

    @abstractmethod
    def subscribe(self, body: PhysicsBody, listener):
        pass

    @abstractmethod
    def overlap_sphere(self, center: Vector3, radius: float, ignore=()) -> list:
        """Все коллайдеры, пересекающие сферу (синхронно)"""
        pass


class RigidBody(PhysicsBody):
    """
    Точечное тело-сфера: явный Эйлер, линейное сопротивление, без гравитации.
    Силы накапливаются за тик и сбрасываются после integrate().
    """

    def __init__(self, position: Vector3 = None, rotation: Rotation = None,
                 radius: float = 0.07, mass: float = 1.0, drag: float = 2.0):
        self.position = position.copy() if position else Vector3.zero()
        self.rotation = rotation.copy() if rotation else Rotation()
        self.velocity = Vector3.zero()
        self.angular_velocity = Vector3.zero()
        self.radius = radius
        self.mass = mass
        self.drag = drag
        self._force = Vector3.zero()
        self._sleeping = False

    def apply_force(self, force: Vector3):
        self._force = self._force + force

    @property
    def accumulated_force(self) -> Vector3:
        return self._force.copy()

    def sleep(self):
        self._sleeping = True
        self.velocity = Vector3.zero()
        self.angular_velocity = Vector3.zero()
        self._force = Vector3.zero()

    def wake_up(self):
        self._sleeping = False

    @property
    def is_sleeping(self) -> bool:
        return self._sleeping

    def integrate(self, dt: float):
        """Один шаг интегрирования"""
        if self._sleeping:
            self._force = Vector3.zero()
            return

        acceleration = self._force / self.mass
        self.velocity = self.velocity + acceleration * dt
        # Сопротивление воздуха, не даёт скорости расти бесконечно
        self.velocity = self.velocity * max(0.0, 1.0 - self.drag * dt)
        self.position = self.position + self.velocity * dt
        self._force = Vector3.zero()

    def __repr__(self):
        return f"RigidBody(pos={self.position}, vel={self.velocity}, {self.rotation})"
