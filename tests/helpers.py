from __future__ import annotations

import random
from typing import Iterable, Optional, Sequence

from esper import World

from seedmerge.components.board_position import BoardPosition
from seedmerge.components.game_state import GameMode
from seedmerge.components.grid import Grid
from seedmerge.components.tile import Tile
from seedmerge.constants import TILE_STATES
from seedmerge.events.bus import EventBus, EVENT_TICK
from seedmerge.systems.board import BoardSystem
from seedmerge.systems.board_ops import get_grid, resolve_tile_state, spawn_tile_at
from seedmerge.systems.scheduler import SchedulerSystem
from seedmerge.world import create_world


def build_board(
    width: int = 4,
    height: int = 4,
    *,
    seed: int = 0,
    tile_states: Iterable = TILE_STATES,
    **board_kwargs,
) -> tuple[EventBus, World, BoardSystem]:
    """World with a scheduler and a board, already in playing mode."""

    bus = EventBus()
    world = create_world(bus, GameMode.PLAYING, tile_states=tile_states, rng=random.Random(seed))
    SchedulerSystem(world, bus)
    board = BoardSystem(world, bus, width, height, **board_kwargs)
    return bus, world, board


def place_tiles(world: World, layout: Sequence[Sequence[Optional[int]]]) -> dict[tuple[int, int], int]:
    """Spawn tiles from rows of values (row 0 on top); 0 or None leaves a cell empty."""

    placed: dict[tuple[int, int], int] = {}
    for y, row in enumerate(layout):
        for x, value in enumerate(row):
            if not value:
                continue
            entity = spawn_tile_at(world, (x, y), value)
            resolve_tile_state(world, entity)
            placed[(x, y)] = entity
    return placed


def board_values(world: World) -> list[list[int]]:
    """Current board as rows of values, 0 for empty cells."""

    grid = get_grid(world)
    rows: list[list[int]] = []
    for y in range(grid.height):
        row: list[int] = []
        for x in range(grid.width):
            entity = grid.cells[(x, y)]
            row.append(0 if entity is None else world.component_for_entity(entity, Tile).value)
        rows.append(row)
    return rows


def tile_count(world: World) -> int:
    return len(world.get_component(Tile))


def tick(bus: EventBus, seconds: float = 1.0) -> None:
    bus.emit(EVENT_TICK, dt=seconds)


def assert_grid_in_sync(world: World) -> None:
    grid: Grid = get_grid(world)
    for cell, entity in grid.cells.items():
        if entity is None:
            continue
        position = world.component_for_entity(entity, BoardPosition)
        assert position.cell == cell
    for entity, position in world.get_component(BoardPosition):
        assert grid.cells[position.cell] == entity


class EventCapture:
    """Collects payloads emitted for one event name."""

    def __init__(self, bus: EventBus, name: str):
        self.received: list[dict] = []
        bus.subscribe(name, self.on_event)

    def on_event(self, sender, **payload):
        self.received.append(payload)

    def __len__(self) -> int:
        return len(self.received)
