"""Игровой режим: колибри под управлением игрока или обученной модели + Pygame окно"""

from ai.brain import create_brain, KeyboardBrain
from ai.gym_env import HummingbirdEnv
from core.config import Presets
from ui.pygame_renderer import PygameRenderer


class PlayApp:
    """Главное приложение игрового режима (без наград, без лимита шагов)"""

    def __init__(self, brain_type: str = "keyboard", model_path: str = None, opponents: int = 0):
        print("Starting Hummingbird - gameplay mode")

        self.config = Presets.gameplay()
        self.config.opponent_count = opponents
        self.env = HummingbirdEnv(config=self.config)
        self.brain = create_brain(brain_type, model_path=model_path)
        self.renderer = PygameRenderer(self.env.area)

        print(f"Flowers: {len(self.env.area.flowers)}")
        print(f"Opponents: {opponents}")
        print(f"Brain: {brain_type}")

    def run(self):
        """Запустить игру"""
        print("Controls: W/S A/D E/C move, arrows pitch/yaw, F freeze, Q quit")
        print("=" * 60)

        obs, info = self.env.reset()
        agent = self.env.agent
        step = 0

        try:
            while True:
                events = self.renderer.handle_events()
                if events['quit']:
                    print("\nStopped by user")
                    break

                if events['freeze']:
                    if agent.frozen:
                        agent.unfreeze_agent()
                    else:
                        agent.freeze_agent()
                    print(f"Agent {'frozen' if agent.frozen else 'unfrozen'}")

                if isinstance(self.brain, KeyboardBrain):
                    self.brain.set_controls(events['controls'])

                action = self.brain.decide_action(obs, agent=agent)
                obs, _, _, _, info = self.env.step(action)
                step += 1

                self.renderer.draw([agent] + self.env.opponents, step, fps=self.env.metadata["render_fps"])

                if step % self.config.update_interval == 0:
                    print(f"Step {step:6d} | Nectar: {info['nectar_obtained']:6.2f} | "
                          f"Flowers with nectar: {info['flowers_with_nectar']:3d}")

        except KeyboardInterrupt:
            print("\nInterrupted by user")
        finally:
            self.cleanup()

    def cleanup(self):
        print("\nClosing...")
        self.renderer.close()
        self.env.close()
