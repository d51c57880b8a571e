"""Ошибки симуляции: дефекты конфигурации и нарушения контракта реестра"""


class PlacementError(AssertionError):
    """Не удалось найти безопасную точку спауна за отведённое число попыток"""


class TrainingModeError(AssertionError):
    """Freeze/Unfreeze вызваны в режиме обучения"""


class FlowerNotFoundError(KeyError):
    """Коллайдер нектара не принадлежит ни одному цветку области"""

    def __init__(self, collider_id):
        super().__init__(collider_id)
        self.collider_id = collider_id

    def __str__(self):
        return f"No flower registered for nectar collider {self.collider_id!r}"
