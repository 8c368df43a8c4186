import random
from typing import Iterable, Tuple

from esper import World
from .events.bus import EventBus
from seedmerge.components.game_state import GameState, GameMode
from seedmerge.components.tile_state import Color, TileStateTable
from seedmerge.constants import TILE_STATES


def create_world(
    event_bus: EventBus,
    initial_mode: GameMode = GameMode.MENU,
    *,
    tile_states: Iterable[Tuple[int, Color, Color]] = TILE_STATES,
    rng: random.Random | None = None,
) -> World:
    world = World()
    setattr(world, "random", rng or random.Random())

    # Register the global game state resource.
    world.create_entity(GameState(mode=initial_mode))

    # Single table entity with the configured tile appearances.
    world.create_entity(TileStateTable.from_rows(tile_states))
    return world
