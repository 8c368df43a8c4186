from seedmerge.constants import (
    BOARD_MAX_HEIGHT_PCT,
    BOARD_MAX_WIDTH_PCT,
    BOTTOM_MARGIN,
    HEADER_HEIGHT,
)


def compute_board_geometry(window_width: int, window_height: int, grid_width: int, grid_height: int):
    """Return (tile_size, start_x, start_y) for a board centred under the header.

    ``start_y`` is the bottom edge of the board in window coordinates (arcade's
    origin is bottom-left).
    """
    max_board_w = window_width * BOARD_MAX_WIDTH_PCT
    max_board_h = (window_height - BOTTOM_MARGIN - HEADER_HEIGHT) * BOARD_MAX_HEIGHT_PCT
    tile_by_w = max_board_w / grid_width
    tile_by_h = max_board_h / grid_height
    tile_size = int(min(tile_by_w, tile_by_h))
    if tile_size < 20:
        tile_size = 20
    total_width = grid_width * tile_size
    start_x = (window_width - total_width) / 2
    start_y = BOTTOM_MARGIN
    return tile_size, start_x, start_y


def cell_center(cell: tuple[int, int], grid_height: int, tile_size: int, start_x: float, start_y: float):
    """Window coordinates of a cell's centre; grid row 0 is drawn at the top."""
    x, y = cell
    row_from_bottom = grid_height - 1 - y
    return (
        start_x + x * tile_size + tile_size / 2,
        start_y + row_from_bottom * tile_size + tile_size / 2,
    )
