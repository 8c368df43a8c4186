import pytest

from seedmerge.components.direction import Direction
from seedmerge.components.scheduled_event import ScheduledEvent
from seedmerge.components.tile import Tile
from seedmerge.events.bus import (
    EVENT_BOARD_SWEPT,
    EVENT_MOVE_REQUEST,
    EVENT_TILE_SPAWNED,
    EVENT_TILES_MERGED,
)
from tests.helpers import (
    EventCapture,
    assert_grid_in_sync,
    board_values,
    build_board,
    place_tiles,
    tick,
    tile_count,
)


@pytest.mark.parametrize("direction", list(Direction))
def test_sweeping_empty_board_is_a_no_op(direction):
    bus, world, board = build_board()
    swept = EventCapture(bus, EVENT_BOARD_SWEPT)
    spawned = EventCapture(bus, EVENT_TILE_SPAWNED)
    merged = EventCapture(bus, EVENT_TILES_MERGED)

    bus.emit(EVENT_MOVE_REQUEST, direction=direction)
    tick(bus)

    assert not board.board.waiting
    assert len(swept) == 0
    assert len(spawned) == 0
    assert len(merged) == 0
    assert list(world.get_component(ScheduledEvent)) == []
    assert tile_count(world) == 0


def test_blocked_sweep_does_not_wait_or_spawn():
    bus, world, board = build_board()
    place_tiles(world, [[2, 2, 0, 0]])
    spawned = EventCapture(bus, EVENT_TILE_SPAWNED)

    assert board.move(Direction.LEFT) is False
    tick(bus)

    assert board_values(world)[0] == [2, 2, 0, 0]
    assert not board.board.waiting
    assert len(spawned) == 0


def test_tile_slides_to_far_edge():
    _bus, world, board = build_board()
    place_tiles(world, [[0, 0, 0, 2]])

    assert board.move(Direction.LEFT) is True

    assert board_values(world)[0] == [2, 0, 0, 0]
    assert board.board.waiting
    assert_grid_in_sync(world)


def test_seed_pair_merges_into_five():
    bus, world, board = build_board()
    place_tiles(world, [[2, 3, 0, 0], [0, 0, 3, 2]])
    merged = EventCapture(bus, EVENT_TILES_MERGED)

    board.move(Direction.LEFT)

    assert board_values(world)[:2] == [[5, 0, 0, 0], [5, 0, 0, 0]]
    assert [payload["value"] for payload in merged.received] == [5, 5]
    assert [payload["points"] for payload in merged.received] == [10, 10]


def test_equal_seeds_never_merge():
    _bus, world, board = build_board()
    place_tiles(world, [[2, 2, 3, 3]])

    assert board.move(Direction.LEFT) is False
    assert board_values(world)[0] == [2, 2, 3, 3]


def test_merged_tile_is_locked_for_the_rest_of_the_sweep():
    _bus, world, board = build_board()
    place_tiles(world, [[5, 5, 10, 0]])

    board.move(Direction.LEFT)

    assert board_values(world)[0] == [10, 10, 0, 0]
    locked = [tile.value for _, tile in world.get_component(Tile) if tile.locked]
    assert locked == [10]


def test_row_of_four_resolves_edge_first():
    bus, world, board = build_board()
    place_tiles(world, [[5, 5, 5, 5]])
    merged = EventCapture(bus, EVENT_TILES_MERGED)

    board.move(Direction.LEFT)

    assert board_values(world)[0] == [10, 10, 0, 0]
    assert [payload["points"] for payload in merged.received] == [20, 20]


def test_right_sweep_scans_from_right_edge():
    _bus, world, board = build_board()
    place_tiles(world, [[0, 2, 3, 2]])

    board.move(Direction.RIGHT)

    assert board_values(world)[0] == [0, 0, 2, 5]


def test_up_sweep_merges_column():
    _bus, world, board = build_board()
    place_tiles(world, [[0], [2], [0], [3]])

    board.move(Direction.UP)

    assert [row[0] for row in board_values(world)] == [5, 0, 0, 0]


def test_down_sweep_doubles_column():
    _bus, world, board = build_board()
    place_tiles(world, [[5], [5], [0], [0]])

    board.move(Direction.DOWN)

    assert [row[0] for row in board_values(world)] == [0, 0, 0, 10]


def test_merge_reduces_tile_count_by_one_per_merge():
    bus, world, board = build_board()
    place_tiles(world, [[2, 3, 5, 5], [10, 0, 0, 10]])
    assert tile_count(world) == 6

    board.move(Direction.LEFT)
    # Three merges: (2,3), (5,5) and (10,10).
    assert tile_count(world) == 3

    tick(bus)
    assert tile_count(world) == 4
    assert_grid_in_sync(world)


def test_input_during_settle_delay_is_dropped():
    bus, world, board = build_board()
    place_tiles(world, [[0, 2, 0, 0]])

    bus.emit(EVENT_MOVE_REQUEST, direction=Direction.LEFT)
    bus.emit(EVENT_MOVE_REQUEST, direction=Direction.RIGHT)

    assert board_values(world)[0][0] == 2
    assert board.board.waiting


def test_settle_unlocks_and_spawns_one_tile():
    bus, world, board = build_board()
    place_tiles(world, [[5, 5, 0, 0]])
    spawned = EventCapture(bus, EVENT_TILE_SPAWNED)

    bus.emit(EVENT_MOVE_REQUEST, direction=Direction.LEFT)
    assert len(spawned) == 0
    tick(bus, board.settle_delay / 2)
    assert len(spawned) == 0
    assert board.board.waiting

    tick(bus, board.settle_delay)

    assert not board.board.waiting
    assert len(spawned) == 1
    assert spawned.received[0]["value"] in (2, 3)
    assert tile_count(world) == 2
    assert all(not tile.locked for _, tile in world.get_component(Tile))

    # Input is accepted again once settled.
    bus.emit(EVENT_MOVE_REQUEST, direction=Direction.RIGHT)
    assert board.board.waiting
    assert board_values(world)[0][0] == 0


def test_settle_event_from_cleared_board_is_ignored():
    bus, world, board = build_board()
    place_tiles(world, [[0, 2, 0, 0]])
    spawned = EventCapture(bus, EVENT_TILE_SPAWNED)

    board.move(Direction.LEFT)
    board.clear_board()
    tick(bus)

    assert tile_count(world) == 0
    assert len(spawned) == 0
    assert not board.board.waiting
