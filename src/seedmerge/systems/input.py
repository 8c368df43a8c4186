from esper import World

from seedmerge.components.direction import Direction
from seedmerge.components.game_state import GameMode
from seedmerge.events.bus import (
    EventBus,
    EVENT_KEY_PRESS,
    EVENT_MOVE_REQUEST,
    EVENT_NEW_GAME_REQUEST,
    EVENT_RETURN_TO_MENU,
)
from seedmerge.utils.game_state import get_game_state

# Arcade (pyglet) key symbols; kept as plain ints to avoid importing arcade here.
KEY_W, KEY_A, KEY_S, KEY_D = 119, 97, 115, 100
KEY_LEFT, KEY_UP, KEY_RIGHT, KEY_DOWN = 65361, 65362, 65363, 65364
KEY_R = 114
KEY_ESCAPE = 65307

KEY_DIRECTIONS = {
    KEY_W: Direction.UP,
    KEY_UP: Direction.UP,
    KEY_S: Direction.DOWN,
    KEY_DOWN: Direction.DOWN,
    KEY_A: Direction.LEFT,
    KEY_LEFT: Direction.LEFT,
    KEY_D: Direction.RIGHT,
    KEY_RIGHT: Direction.RIGHT,
}


class InputSystem:
    """Turns raw key presses into game requests depending on the current mode."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_KEY_PRESS, self.on_key_press)

    def on_key_press(self, sender, **kwargs):
        symbol = kwargs.get('symbol')
        if symbol is None:
            return
        state = get_game_state(self.world)
        if state is None:
            return
        if state.mode == GameMode.MENU:
            # Any key leaves the menu.
            self.event_bus.emit(EVENT_NEW_GAME_REQUEST)
            return
        if symbol == KEY_R:
            self.event_bus.emit(EVENT_NEW_GAME_REQUEST)
            return
        if symbol == KEY_ESCAPE:
            self.event_bus.emit(EVENT_RETURN_TO_MENU)
            return
        if state.mode != GameMode.PLAYING:
            return
        direction = KEY_DIRECTIONS.get(symbol)
        if direction is not None:
            self.event_bus.emit(EVENT_MOVE_REQUEST, direction=direction)
