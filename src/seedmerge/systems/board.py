from __future__ import annotations

import logging
import random
from typing import List, Optional

from esper import World

from seedmerge.components.board import Board
from seedmerge.components.board_position import BoardPosition
from seedmerge.components.direction import Direction, NEIGHBOUR_DIRECTIONS
from seedmerge.components.expiring_tile import ExpiringTile
from seedmerge.components.grid import Cell, Grid
from seedmerge.components.session import Session
from seedmerge.components.spawn_streak import SpawnStreak
from seedmerge.components.tile import Tile
from seedmerge.components.tile_state import TileStateTable
from seedmerge.constants import (
    GRID_HEIGHT,
    GRID_WIDTH,
    PRIME_REMOVAL_DELAY,
    PRIME_ROLL_RANGE,
    PRIME_ROLLS,
    PRIME_TILE_VALUES,
    SEED_MERGE_VALUE,
    SEED_VALUES,
    SETTLE_DELAY,
    TILE_STATES,
)
from seedmerge.events.bus import (
    EventBus,
    EVENT_BOARD_CLEAR_REQUEST,
    EVENT_BOARD_CLEARED,
    EVENT_BOARD_SETTLED,
    EVENT_BOARD_SWEPT,
    EVENT_GAME_OVER,
    EVENT_MOVE_REQUEST,
    EVENT_SCHEDULE_REQUEST,
    EVENT_SEED_CONVERSION,
    EVENT_SEED_TILE_REQUEST,
    EVENT_SPAWN_VALUE_CONSUMED,
    EVENT_TILE_EXPIRED,
    EVENT_TILE_SPAWNED,
    EVENT_TILE_STATE_MISSING,
    EVENT_TILES_MERGED,
)
from seedmerge.systems.board_ops import (
    adjacent_cell,
    clear_tiles,
    is_full,
    live_tiles,
    merge_tile_into,
    move_tile_to,
    random_empty_cell,
    remove_tile,
    resolve_tile_state,
    set_tile_value,
    spawn_tile_at,
    tile_at,
)
from seedmerge.systems.spawn_selection import select_spawn_value

logger = logging.getLogger(__name__)


def is_seed_pair(a: int, b: int) -> bool:
    return {a, b} == set(SEED_VALUES)


def can_merge(a: Tile, b: Tile) -> bool:
    """Whether the moving tile ``a`` may merge into the stationary tile ``b``."""
    if b.locked:
        return False
    if is_seed_pair(a.value, b.value):
        return True
    return a.value >= SEED_MERGE_VALUE and a.value == b.value


def merged_value(moving: int, stationary: int) -> int:
    if is_seed_pair(moving, stationary):
        return SEED_MERGE_VALUE
    return stationary * 2


def merge_points(value: int) -> int:
    return value * 2


class BoardSystem:
    """Owns the grid and its tiles: sweeps, merges, spawns and game-over detection."""

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        width: int = GRID_WIDTH,
        height: int = GRID_HEIGHT,
        *,
        settle_delay: float = SETTLE_DELAY,
        prime_removal_delay: float = PRIME_REMOVAL_DELAY,
        enable_prime_tiles: bool = False,
        rng: random.Random | None = None,
    ):
        self.world = world
        self.event_bus = event_bus
        self.settle_delay = settle_delay
        self.prime_removal_delay = prime_removal_delay
        self.enable_prime_tiles = enable_prime_tiles
        self.rng = rng or getattr(world, "random", None) or random.Random()
        self.board_entity = self.world.create_entity(
            Grid(width=width, height=height),
            Board(),
            SpawnStreak(),
        )
        if not list(self.world.get_component(TileStateTable)):
            self.world.create_entity(TileStateTable.from_rows(TILE_STATES))
        self.event_bus.subscribe(EVENT_MOVE_REQUEST, self.on_move_request)
        self.event_bus.subscribe(EVENT_BOARD_SETTLED, self.on_board_settled)
        self.event_bus.subscribe(EVENT_BOARD_CLEAR_REQUEST, self.on_clear_request)
        self.event_bus.subscribe(EVENT_SEED_TILE_REQUEST, self.on_seed_tile_request)
        self.event_bus.subscribe(EVENT_TILE_EXPIRED, self.on_tile_expired)

    @property
    def grid(self) -> Grid:
        return self.world.component_for_entity(self.board_entity, Grid)

    @property
    def board(self) -> Board:
        return self.world.component_for_entity(self.board_entity, Board)

    @property
    def streak(self) -> SpawnStreak:
        return self.world.component_for_entity(self.board_entity, SpawnStreak)

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def on_move_request(self, sender, **kwargs):
        direction = kwargs.get('direction')
        if not isinstance(direction, Direction):
            return
        board = self.board
        # Input during the settle delay or after game over is dropped, not queued.
        if board.waiting or board.game_over:
            return
        self.move(direction)

    def on_clear_request(self, sender, **kwargs):
        self.clear_board()

    def on_seed_tile_request(self, sender, **kwargs):
        value = kwargs.get('value')
        if value is None:
            return
        if is_full(self.grid):
            logger.warning("Ignoring seed tile %s: grid is full", value)
            return
        self.create_specific_tile(int(value))

    # ------------------------------------------------------------------
    # Sweep
    # ------------------------------------------------------------------

    def scan_order(self, direction: Direction) -> List[Cell]:
        """Cells ordered from the edge the tiles travel towards, outward."""
        grid = self.grid
        xs = list(range(grid.width))
        ys = list(range(grid.height))
        if direction is Direction.DOWN:
            ys.reverse()
        elif direction is Direction.RIGHT:
            xs.reverse()
        if direction in (Direction.UP, Direction.DOWN):
            return [(x, y) for y in ys for x in xs]
        return [(x, y) for x in xs for y in ys]

    def move(self, direction: Direction) -> bool:
        """Sweep every tile in ``direction``; returns True if anything moved or merged."""
        grid = self.grid
        changed = False
        merges = 0
        for cell in self.scan_order(direction):
            entity = tile_at(grid, cell)
            if entity is None or self.world.has_component(entity, ExpiringTile):
                continue
            moved, merged = self.move_tile(entity, direction)
            changed |= moved
            merges += int(merged)
        if changed:
            board = self.board
            board.waiting = True
            self.event_bus.emit(EVENT_BOARD_SWEPT, direction=direction, merges=merges)
            self.event_bus.emit(
                EVENT_SCHEDULE_REQUEST,
                delay=self.settle_delay,
                event=EVENT_BOARD_SETTLED,
                payload={'generation': board.generation},
            )
        return changed

    def move_tile(self, entity: int, direction: Direction) -> tuple[bool, bool]:
        """Slide one tile; returns (changed, merged)."""
        grid = self.grid
        tile = self.world.component_for_entity(entity, Tile)
        position = self.world.component_for_entity(entity, BoardPosition)
        adjacent = adjacent_cell(grid, position.cell, direction)
        last_valid: Optional[Cell] = None

        while adjacent is not None:
            occupant = tile_at(grid, adjacent)
            if occupant is not None:
                if not self.world.has_component(occupant, ExpiringTile):
                    other = self.world.component_for_entity(occupant, Tile)
                    if can_merge(tile, other):
                        self.merge(entity, occupant)
                        return True, True
                break
            last_valid = adjacent
            adjacent = adjacent_cell(grid, adjacent, direction)

        if last_valid is not None:
            move_tile_to(self.world, entity, last_valid)
            return True, False
        return False, False

    def merge(self, moving_entity: int, stationary_entity: int) -> int:
        moving = self.world.component_for_entity(moving_entity, Tile)
        stationary = self.world.component_for_entity(stationary_entity, Tile)
        position = self.world.component_for_entity(stationary_entity, BoardPosition)
        value = merged_value(moving.value, stationary.value)
        merge_tile_into(self.world, moving_entity, position.cell)
        if not set_tile_value(self.world, stationary_entity, value):
            self.event_bus.emit(EVENT_TILE_STATE_MISSING, entity=stationary_entity, value=value)
        stationary.locked = True
        points = merge_points(value)
        self.event_bus.emit(EVENT_TILES_MERGED, value=value, points=points, position=position.cell)
        return value

    # ------------------------------------------------------------------
    # Settle, spawn, game over
    # ------------------------------------------------------------------

    def on_board_settled(self, sender, **kwargs):
        board = self.board
        if kwargs.get('generation', board.generation) != board.generation:
            return
        board.waiting = False
        for _, tile in self.world.get_component(Tile):
            tile.locked = False
        if not is_full(self.grid):
            self.create_tile()
        if not board.game_over and self.check_game_over():
            board.game_over = True
            score = self._session_score()
            logger.info("Game over with score %s", score)
            self.event_bus.emit(EVENT_GAME_OVER, score=score)

    def check_game_over(self) -> bool:
        grid = self.grid
        if not is_full(grid):
            return False
        # An expiring tile frees its cell once its delay runs out.
        if list(self.world.get_component(ExpiringTile)):
            return False
        for entity, tile in live_tiles(self.world):
            position = self.world.component_for_entity(entity, BoardPosition)
            for direction in NEIGHBOUR_DIRECTIONS:
                neighbour = adjacent_cell(grid, position.cell, direction)
                if neighbour is None:
                    continue
                occupant = tile_at(grid, neighbour)
                if occupant is None or self.world.has_component(occupant, ExpiringTile):
                    continue
                if can_merge(tile, self.world.component_for_entity(occupant, Tile)):
                    return False
        return True

    def create_tile(self) -> Optional[int]:
        """Spawn the next tile: 2 or 3 from the session, filtered by anti-streak forcing."""
        if self.enable_prime_tiles:
            target = PRIME_ROLLS.get(self.rng.randrange(PRIME_ROLL_RANGE))
            if target is not None:
                return self.spawn_prime_tile(target)
        requested = self._requested_spawn_value()
        value = select_spawn_value(self.streak, requested)
        entity = self._spawn(value)
        self.event_bus.emit(EVENT_SPAWN_VALUE_CONSUMED, value=value)
        return entity

    def create_specific_tile(self, value: int) -> int:
        """Spawn a tile of the given value at a random empty cell, bypassing streak rules."""
        return self._spawn(value)

    def _spawn(self, value: int) -> int:
        cell = random_empty_cell(self.grid, self.rng)
        entity = spawn_tile_at(self.world, cell, value)
        if not resolve_tile_state(self.world, entity):
            self.event_bus.emit(EVENT_TILE_STATE_MISSING, entity=entity, value=value)
        self.event_bus.emit(EVENT_TILE_SPAWNED, entity=entity, value=value, position=cell)
        return entity

    def _requested_spawn_value(self) -> int:
        for _, session in self.world.get_component(Session):
            return session.next_value
        return self.rng.choice(SEED_VALUES)

    def _session_score(self) -> int:
        for _, session in self.world.get_component(Session):
            return session.score
        return 0

    def clear_board(self) -> None:
        clear_tiles(self.world)
        board = self.board
        board.waiting = False
        board.game_over = False
        board.generation += 1
        self.event_bus.emit(EVENT_BOARD_CLEARED)

    # ------------------------------------------------------------------
    # Seed conversion (prime tiles)
    # ------------------------------------------------------------------

    def spawn_prime_tile(self, target_value: int) -> int:
        entity = self._spawn(PRIME_TILE_VALUES[target_value])
        self.trigger_seed_conversion(target_value, entity)
        return entity

    def trigger_seed_conversion(self, target_value: int, trigger_entity: int) -> List[Cell]:
        """Turn every live tile of ``target_value`` into a 5 and retire the trigger tile.

        The trigger leaves the live set at once but keeps its cell until the
        removal delay elapses. The delay runs on its own and does not block input.
        """
        converted: List[Cell] = []
        for entity, tile in live_tiles(self.world):
            if entity == trigger_entity or tile.value != target_value:
                continue
            if not set_tile_value(self.world, entity, SEED_MERGE_VALUE):
                self.event_bus.emit(EVENT_TILE_STATE_MISSING, entity=entity, value=SEED_MERGE_VALUE)
            converted.append(self.world.component_for_entity(entity, BoardPosition).cell)
        self.world.add_component(trigger_entity, ExpiringTile(delay=self.prime_removal_delay))
        self.event_bus.emit(
            EVENT_SCHEDULE_REQUEST,
            delay=self.prime_removal_delay,
            event=EVENT_TILE_EXPIRED,
            payload={'entity': trigger_entity},
        )
        self.event_bus.emit(
            EVENT_SEED_CONVERSION,
            target_value=target_value,
            converted=converted,
            trigger=trigger_entity,
        )
        return converted

    def on_tile_expired(self, sender, **kwargs):
        entity = kwargs.get('entity')
        if entity is None or not self.world.entity_exists(entity):
            return
        if self.world.has_component(entity, ExpiringTile):
            remove_tile(self.world, entity)
