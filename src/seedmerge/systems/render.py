"""Rendering system drawing the board, the score header and the mode overlays."""
import arcade
from esper import World

from seedmerge.components.board_position import BoardPosition
from seedmerge.components.expiring_tile import ExpiringTile
from seedmerge.components.game_state import GameMode
from seedmerge.components.grid import Grid
from seedmerge.components.session import Session
from seedmerge.components.tile import Tile
from seedmerge.constants import DARK_TEXT, HEADER_HEIGHT, TILE_PADDING
from seedmerge.events.bus import EventBus, EVENT_SEED_CONVERSION, EVENT_TICK
from seedmerge.ui.layout import cell_center, compute_board_geometry
from seedmerge.utils.game_state import get_game_state

BACKGROUND = (250, 248, 239)
BOARD_COLOR = (187, 173, 160)
EMPTY_CELL_COLOR = (205, 193, 180)
# Tiles with no configured state are drawn with this placeholder.
MISSING_STATE_COLOR = (255, 0, 255)
OVERLAY_COLOR = (238, 228, 218, 200)
# Seconds the board flashes after a seed conversion.
CONVERSION_FLASH = 0.3


class RenderSystem:
    def __init__(self, world: World, event_bus: EventBus, window):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self._flash_remaining = 0.0
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self.event_bus.subscribe(EVENT_SEED_CONVERSION, self.on_seed_conversion)

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt', 1/60)
        if self._flash_remaining > 0.0:
            self._flash_remaining = max(0.0, self._flash_remaining - dt)

    def on_seed_conversion(self, sender, **kwargs):
        self._flash_remaining = CONVERSION_FLASH

    def _grid(self) -> Grid | None:
        for _, grid in self.world.get_component(Grid):
            return grid
        return None

    def _session(self) -> Session | None:
        for _, session in self.world.get_component(Session):
            return session
        return None

    def process(self) -> None:
        state = get_game_state(self.world)
        if state is None:
            return
        arcade.draw_lrbt_rectangle_filled(0, self.window.width, 0, self.window.height, BACKGROUND)
        if state.mode == GameMode.MENU:
            self._draw_menu()
            return
        grid = self._grid()
        if grid is not None:
            self._draw_board(grid)
        self._draw_header()
        if state.mode == GameMode.GAME_OVER:
            self._draw_game_over()

    def _draw_board(self, grid: Grid) -> None:
        tile_size, start_x, start_y = compute_board_geometry(
            self.window.width, self.window.height, grid.width, grid.height
        )
        board_color = (255, 255, 255) if self._flash_remaining > 0.0 else BOARD_COLOR
        arcade.draw_lbwh_rectangle_filled(
            start_x, start_y, grid.width * tile_size, grid.height * tile_size, board_color
        )
        inner = max(tile_size - TILE_PADDING, 4)
        for cell in grid.iter_cells():
            cx, cy = cell_center(cell, grid.height, tile_size, start_x, start_y)
            arcade.draw_lbwh_rectangle_filled(cx - inner / 2, cy - inner / 2, inner, inner, EMPTY_CELL_COLOR)

        for ent, tile in self.world.get_component(Tile):
            position = self.world.component_for_entity(ent, BoardPosition)
            cx, cy = cell_center(position.cell, grid.height, tile_size, start_x, start_y)
            if tile.state is not None:
                background, text_color = tile.state.background, tile.state.text_color
            else:
                background, text_color = MISSING_STATE_COLOR, DARK_TEXT
            if self.world.has_component(ent, ExpiringTile):
                background = (*background[:3], 160)
            arcade.draw_lbwh_rectangle_filled(cx - inner / 2, cy - inner / 2, inner, inner, background)
            label = str(tile.value)
            font_size = inner * (0.4 if len(label) <= 2 else 0.28 if len(label) <= 4 else 0.2)
            arcade.draw_text(
                label, cx, cy, text_color, font_size,
                anchor_x="center", anchor_y="center", bold=True,
            )

    def _draw_header(self) -> None:
        session = self._session()
        if session is None:
            return
        top = self.window.height - HEADER_HEIGHT / 2
        column = self.window.width / 3
        for index, (label, value) in enumerate((
            ("SCORE", session.score),
            ("BEST", session.high_score),
            ("NEXT", session.next_value),
        )):
            x = column * index + column / 2
            arcade.draw_text(label, x, top + 20, DARK_TEXT, 16, anchor_x="center", anchor_y="center")
            arcade.draw_text(str(value), x, top - 14, DARK_TEXT, 28, anchor_x="center", anchor_y="center", bold=True)

    def _draw_menu(self) -> None:
        cx = self.window.width / 2
        cy = self.window.height / 2
        arcade.draw_text("2 + 3 = 5", cx, cy + 60, DARK_TEXT, 48, anchor_x="center", anchor_y="center", bold=True)
        arcade.draw_text("Press any key", cx, cy - 20, DARK_TEXT, 22, anchor_x="center", anchor_y="center")
        session = self._session()
        if session is not None:
            arcade.draw_text(
                f"Best: {session.high_score}", cx, cy - 70, DARK_TEXT, 18,
                anchor_x="center", anchor_y="center",
            )

    def _draw_game_over(self) -> None:
        arcade.draw_lrbt_rectangle_filled(0, self.window.width, 0, self.window.height, OVERLAY_COLOR)
        cx = self.window.width / 2
        cy = self.window.height / 2
        arcade.draw_text("Game over!", cx, cy + 30, DARK_TEXT, 40, anchor_x="center", anchor_y="center", bold=True)
        arcade.draw_text(
            "R to try again, Esc for menu", cx, cy - 30, DARK_TEXT, 18,
            anchor_x="center", anchor_y="center",
        )
