"""Отслеживание ближайшего цветка с нектаром"""

from core.physics import Vector3


class NearestFlowerTracker:
    """
    Выбирает цветок, к которому летит агент.

    Текущая цель "липкая": она заменяется только если
    (a) цели нет, (b) в цели кончился нектар, (c) найден строго более близкий цветок с нектаром.
    При равных расстояниях побеждает цветок, зарегистрированный раньше.
    """

    def __init__(self, area):
        self.area = area

    def update(self, beak_position: Vector3, current=None):
        """Пересчитать цель. Возвращает цветок или None, если нектара нет нигде."""
        nearest = current
        for flower in self.area.flowers:
            if nearest is None and flower.has_nectar:
                # Цели ещё нет, а в этом цветке есть нектар
                nearest = flower
            elif flower.has_nectar:
                distance_to_flower = flower.center_position.distance_to(beak_position)
                distance_to_current = nearest.center_position.distance_to(beak_position)
                if not nearest.has_nectar or distance_to_flower < distance_to_current:
                    nearest = flower

        if nearest is not None and not nearest.has_nectar:
            return None
        return nearest

    def needs_update(self, current) -> bool:
        """Проверка раз в тик: нектар цели мог выпить другой агент"""
        if current is not None:
            return not current.has_nectar
        return any(flower.has_nectar for flower in self.area.flowers)
