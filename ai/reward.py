"""Система наград для обучения с подкреплением"""

from core.physics import Vector3, clamp01


class RewardCalculator:
    """
    Вычисляет награды колибри на основе событий в симуляции.

    Агент накапливает reward за шаг (add_reward), который потом передаётся в gym env.
    Вне режима обучения награды не начисляются вовсе - это проверяет вызывающий код.
    """

    NECTAR_BASE_REWARD = 0.01         # Каждый тик питья нектара
    NECTAR_ALIGNMENT_BONUS = 0.02     # Доп. бонус за клюв, направленный в цветок
    BOUNDARY_PENALTY = -0.5           # Врезался в границу области

    NECTAR_TAG = "nectar"
    BOUNDARY_TAG = "boundary"

    @staticmethod
    def alignment(bird_forward: Vector3, flower_up: Vector3) -> float:
        """dot(forward, -up): +1 клюв смотрит прямо в цветок, -1 - от цветка"""
        return bird_forward.normalize().dot(-flower_up.normalize())

    @staticmethod
    def nectar_reward(bird_forward: Vector3, flower_up: Vector3) -> float:
        """
        Награда за один глоток нектара.
        base + bonus * clamp01(alignment): при перпендикулярном или обратном подлёте - ровно base.
        """
        alignment = RewardCalculator.alignment(bird_forward, flower_up)
        bonus = RewardCalculator.NECTAR_ALIGNMENT_BONUS * clamp01(alignment)
        return RewardCalculator.NECTAR_BASE_REWARD + bonus

    @staticmethod
    def is_beak_contact(beak_tip: Vector3, closest_point: Vector3, beak_tip_radius: float) -> bool:
        """Касание засчитывается только кончиком клюва, а не любой частью тела"""
        return beak_tip.distance_to(closest_point) < beak_tip_radius

    @staticmethod
    def collision_reward(collider) -> float:
        """Штраф за твёрдое столкновение (только граница области)"""
        if collider.compare_tag(RewardCalculator.BOUNDARY_TAG):
            return RewardCalculator.BOUNDARY_PENALTY
        return 0.0
