"""Pygame визуализация области сверху (только для просмотра, состояние не меняет)"""

import pygame


# Клавиши ручного управления → команды ai.actions.CONTROLS
KEY_BINDINGS = {
    pygame.K_w: "forward",
    pygame.K_s: "backward",
    pygame.K_a: "left",
    pygame.K_d: "right",
    pygame.K_e: "up",
    pygame.K_c: "down",
    pygame.K_UP: "pitch_up",
    pygame.K_DOWN: "pitch_down",
    pygame.K_LEFT: "yaw_left",
    pygame.K_RIGHT: "yaw_right",
}


def read_controls(pressed) -> set:
    """Активные команды из pygame.key.get_pressed()"""
    return {command for key, command in KEY_BINDINGS.items() if pressed[key]}


class PygameRenderer:
    """Вид сверху: граница, цветы (цвет по нектару), птицы и линия клюв → цель"""

    def __init__(self, area, size: int = 720):
        pygame.init()
        self.area = area
        self.size = size
        self.screen = pygame.display.set_mode((size, size))
        pygame.display.set_caption("Hummingbird - Flower Area")
        self.clock = pygame.time.Clock()
        self.font_small = pygame.font.Font(None, 20)

        # Цвета
        self.COLOR_BG = (25, 35, 25)
        self.COLOR_BOUNDARY = (90, 90, 110)
        self.COLOR_FLOWER_FULL = (230, 80, 160)
        self.COLOR_FLOWER_EMPTY = (90, 70, 80)
        self.COLOR_BIRD = (80, 200, 240)
        self.COLOR_AGENT = (250, 220, 80)
        self.COLOR_TARGET_LINE = (80, 220, 80)
        self.COLOR_TEXT = (200, 200, 200)

        # Пикселей на метр
        self.scale = size / (area.diameter * 1.05)

    def world_to_screen(self, pos) -> tuple:
        """Проекция на плоскость XZ, центр области - центр окна"""
        x = (pos.x - self.area.center.x) * self.scale + self.size / 2
        y = self.size / 2 - (pos.z - self.area.center.z) * self.scale
        return int(x), int(y)

    def handle_events(self) -> dict:
        """
        Обработать события окна.
        Возвращает {'quit': bool, 'freeze': bool, 'controls': set}
        """
        events = {'quit': False, 'freeze': False}
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                events['quit'] = True
            elif event.type == pygame.KEYDOWN:
                if event.key in (pygame.K_ESCAPE, pygame.K_q):
                    events['quit'] = True
                elif event.key == pygame.K_f:
                    events['freeze'] = True
        events['controls'] = read_controls(pygame.key.get_pressed())
        return events

    def draw(self, birds, step: int = 0, fps: int = 50):
        self.screen.fill(self.COLOR_BG)

        center = self.world_to_screen(self.area.center)
        pygame.draw.circle(self.screen, self.COLOR_BOUNDARY, center,
                           int(self.area.diameter / 2 * self.scale), width=2)

        for flower in self.area.flowers:
            ratio = flower.nectar / flower.capacity if flower.capacity > 0 else 0.0
            color = tuple(
                int(empty + (full - empty) * ratio)
                for full, empty in zip(self.COLOR_FLOWER_FULL, self.COLOR_FLOWER_EMPTY)
            )
            pygame.draw.circle(self.screen, color, self.world_to_screen(flower.center_position), 5)

        for i, bird in enumerate(birds):
            beak = self.world_to_screen(bird.beak_tip_position)
            # Линия от клюва к текущей цели
            if bird.nearest_flower is not None:
                pygame.draw.line(self.screen, self.COLOR_TARGET_LINE, beak,
                                 self.world_to_screen(bird.nearest_flower.center_position), 1)
            color = self.COLOR_AGENT if i == 0 else self.COLOR_BIRD
            pygame.draw.circle(self.screen, color, self.world_to_screen(bird.body.position), 6)
            pygame.draw.line(self.screen, color, self.world_to_screen(bird.body.position), beak, 2)

        agent = birds[0]
        lines = [
            f"Step: {step}",
            f"Nectar: {agent.nectar_obtained:.2f}",
            f"Height: {agent.body.position.y:.2f} m",
            "Frozen" if agent.frozen else "",
        ]
        for row, text in enumerate(line for line in lines if line):
            surface = self.font_small.render(text, True, self.COLOR_TEXT)
            self.screen.blit(surface, (10, 10 + row * 18))

        pygame.display.flip()
        self.clock.tick(fps)

    def close(self):
        pygame.quit()
