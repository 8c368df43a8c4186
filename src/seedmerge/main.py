"""Entry point for the SeedMerge sliding puzzle.

Sets up ECS world, event bus, systems, and Arcade window.
"""
import logging

from arcade import Window, run
from seedmerge.world import create_world
from seedmerge.constants import GRID_HEIGHT, GRID_WIDTH, WINDOW_HEIGHT, WINDOW_WIDTH
from seedmerge.events.bus import EVENT_KEY_PRESS, EVENT_TICK, EventBus
from seedmerge.systems.board import BoardSystem
from seedmerge.systems.input import InputSystem
from seedmerge.systems.render import RenderSystem
from seedmerge.systems.scheduler import SchedulerSystem
from seedmerge.systems.session_system import SessionSystem


class SeedMergeWindow(Window):
    def __init__(self):
        super().__init__(WINDOW_WIDTH, WINDOW_HEIGHT, "SeedMerge")
        self.set_update_rate(1/60)
        self.event_bus = EventBus()
        self.world = create_world(self.event_bus)

        # Timing and board systems
        self.scheduler_system = SchedulerSystem(self.world, self.event_bus)
        self.board_system = BoardSystem(self.world, self.event_bus, width=GRID_WIDTH, height=GRID_HEIGHT)

        # Session and interface systems
        self.session_system = SessionSystem(self.world, self.event_bus)
        self.input_system = InputSystem(self.world, self.event_bus)
        self.render_system = RenderSystem(self.world, self.event_bus, self)

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_update(self, delta_time: float):
        self.event_bus.emit(EVENT_TICK, dt=delta_time)

    def on_key_press(self, symbol: int, modifiers: int):
        self.event_bus.emit(EVENT_KEY_PRESS, symbol=symbol, modifiers=modifiers)


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    window = SeedMergeWindow()
    run()

if __name__ == "__main__":
    main()
