from __future__ import annotations

import logging
import random
from typing import List, Optional, Tuple

from esper import World

from seedmerge.components.board import Board
from seedmerge.components.board_position import BoardPosition
from seedmerge.components.direction import Direction
from seedmerge.components.expiring_tile import ExpiringTile
from seedmerge.components.grid import Cell, Grid
from seedmerge.components.tile import Tile
from seedmerge.components.tile_state import TileStateTable

logger = logging.getLogger(__name__)


class BoardError(Exception):
    """Base class for precondition violations on the board."""


class GridFullError(BoardError):
    """Raised when an empty cell is requested from a full grid."""


class CellOccupiedError(BoardError):
    """Raised when a tile is placed into a cell that already holds one."""


def get_grid(world: World) -> Grid:
    for _, grid in world.get_component(Grid):
        return grid
    raise RuntimeError("Grid component not found")


def get_board(world: World) -> Board:
    for _, board in world.get_component(Board):
        return board
    raise RuntimeError("Board component not found")


def get_tile_state_table(world: World) -> TileStateTable:
    for _, table in world.get_component(TileStateTable):
        return table
    raise RuntimeError("TileStateTable definitions not found")


# ----------------------------------------------------------------------------
# Grid queries
# ----------------------------------------------------------------------------

def cell_at(grid: Grid, x: int, y: int) -> Optional[Cell]:
    if not grid.contains(x, y):
        return None
    return (x, y)


def adjacent_cell(grid: Grid, cell: Cell, direction: Direction) -> Optional[Cell]:
    x, y = direction.step(cell)
    return cell_at(grid, x, y)


def tile_at(grid: Grid, cell: Cell) -> Optional[int]:
    return grid.cells.get(cell)


def is_occupied(grid: Grid, cell: Cell) -> bool:
    return grid.cells.get(cell) is not None


def empty_cells(grid: Grid) -> List[Cell]:
    return [cell for cell in grid.iter_cells() if grid.cells[cell] is None]


def random_empty_cell(grid: Grid, rng: random.Random | None = None) -> Cell:
    candidates = empty_cells(grid)
    if not candidates:
        raise GridFullError("No empty cell left on the grid")
    return (rng or random).choice(candidates)


def occupied_count(grid: Grid) -> int:
    return sum(1 for occupant in grid.cells.values() if occupant is not None)


def is_full(grid: Grid) -> bool:
    return occupied_count(grid) == grid.size


def live_tiles(world: World) -> List[Tuple[int, Tile]]:
    """Snapshot of tiles still in play (expiring tiles excluded)."""
    return [
        (entity, tile)
        for entity, tile in world.get_component(Tile)
        if not world.has_component(entity, ExpiringTile)
    ]


# ----------------------------------------------------------------------------
# Mutation routines: the only places that touch Grid.cells and BoardPosition.
# ----------------------------------------------------------------------------

def resolve_tile_state(world: World, entity: int) -> bool:
    """Attach the configured appearance for the tile's value.

    Returns False when the table has no entry for the value; the tile keeps no
    state and the caller carries on.
    """
    tile = world.component_for_entity(entity, Tile)
    table = get_tile_state_table(world)
    tile.state = table.state_for(tile.value)
    if tile.state is None:
        logger.error("No tile state configured for value %s (entity %s)", tile.value, entity)
        return False
    return True


def spawn_tile_at(world: World, cell: Cell, value: int) -> int:
    grid = get_grid(world)
    if not grid.contains(*cell):
        raise BoardError(f"Cell {cell} is outside the {grid.width}x{grid.height} grid")
    if is_occupied(grid, cell):
        raise CellOccupiedError(f"Cell {cell} is already occupied by tile {grid.cells[cell]}")
    entity = world.create_entity(Tile(value=value), BoardPosition(x=cell[0], y=cell[1]))
    grid.cells[cell] = entity
    return entity


def move_tile_to(world: World, entity: int, cell: Cell) -> None:
    grid = get_grid(world)
    if is_occupied(grid, cell):
        raise CellOccupiedError(f"Cannot move tile {entity} into occupied cell {cell}")
    position = world.component_for_entity(entity, BoardPosition)
    if grid.cells.get(position.cell) == entity:
        grid.cells[position.cell] = None
    position.x, position.y = cell
    grid.cells[cell] = entity


def merge_tile_into(world: World, entity: int, cell: Cell) -> int:
    """Vacate the moving tile's cell and delete it; returns the destination tile."""
    grid = get_grid(world)
    target = grid.cells.get(cell)
    if target is None:
        raise BoardError(f"Cannot merge tile {entity} into empty cell {cell}")
    remove_tile(world, entity)
    return target


def set_tile_value(world: World, entity: int, value: int) -> bool:
    tile = world.component_for_entity(entity, Tile)
    tile.value = value
    return resolve_tile_state(world, entity)


def remove_tile(world: World, entity: int) -> None:
    grid = get_grid(world)
    position = world.component_for_entity(entity, BoardPosition)
    if grid.cells.get(position.cell) == entity:
        grid.cells[position.cell] = None
    world.delete_entity(entity, immediate=True)


def clear_tiles(world: World) -> int:
    grid = get_grid(world)
    removed = 0
    for entity, _ in list(world.get_component(Tile)):
        world.delete_entity(entity, immediate=True)
        removed += 1
    for cell in grid.cells:
        grid.cells[cell] = None
    return removed
