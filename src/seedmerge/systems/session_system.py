from __future__ import annotations

import logging
import random
from typing import Sequence

from esper import World

from seedmerge.components.game_state import GameMode
from seedmerge.components.session import Session
from seedmerge.constants import HIGH_SCORE_KEY, NEW_GAME_SEED_TILES, SEED_TWO_PROBABILITY, SEED_VALUES
from seedmerge.events.bus import (
    EventBus,
    EVENT_BOARD_CLEAR_REQUEST,
    EVENT_GAME_OVER,
    EVENT_NEW_GAME_REQUEST,
    EVENT_NEXT_VALUE_PREPARED,
    EVENT_RETURN_TO_MENU,
    EVENT_SCORE_CHANGED,
    EVENT_SEED_TILE_REQUEST,
    EVENT_SPAWN_VALUE_CONSUMED,
    EVENT_TILES_MERGED,
)
from seedmerge.storage.highscore import HighScoreStore
from seedmerge.utils.game_state import set_game_mode

logger = logging.getLogger(__name__)


class SessionSystem:
    """Score, persisted high score and the pre-rolled value of the next spawn."""

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        store: HighScoreStore | None = None,
        rng: random.Random | None = None,
        seed_tiles: Sequence[int] = NEW_GAME_SEED_TILES,
        two_probability: float = SEED_TWO_PROBABILITY,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.store = store or HighScoreStore()
        self.rng = rng or getattr(world, "random", None) or random.Random()
        self.seed_tiles = tuple(seed_tiles)
        self.two_probability = two_probability
        self._session_entity = self._ensure_session_entity()
        self.session.high_score = self.load_high_score()
        self.prepare_next()

        self.event_bus.subscribe(EVENT_TILES_MERGED, self._on_tiles_merged)
        self.event_bus.subscribe(EVENT_SPAWN_VALUE_CONSUMED, self._on_spawn_value_consumed)
        self.event_bus.subscribe(EVENT_GAME_OVER, self._on_game_over)
        self.event_bus.subscribe(EVENT_NEW_GAME_REQUEST, self._on_new_game_request)
        self.event_bus.subscribe(EVENT_RETURN_TO_MENU, self._on_return_to_menu)

    def _ensure_session_entity(self) -> int:
        existing = list(self.world.get_component(Session))
        if existing:
            return existing[0][0]
        return self.world.create_entity(Session())

    @property
    def session(self) -> Session:
        return self.world.component_for_entity(self._session_entity, Session)

    # Event handlers -----------------------------------------------------

    def _on_tiles_merged(self, sender, **payload) -> None:
        points = payload.get("points")
        if points:
            self.increase_score(int(points))

    def _on_spawn_value_consumed(self, sender, **payload) -> None:
        self.prepare_next()

    def _on_game_over(self, sender, **payload) -> None:
        set_game_mode(self.world, self.event_bus, GameMode.GAME_OVER)

    def _on_new_game_request(self, sender, **payload) -> None:
        self.new_game()

    def _on_return_to_menu(self, sender, **payload) -> None:
        self.back_to_menu()

    # Session flow -------------------------------------------------------

    def new_game(self) -> None:
        self.set_score(0)
        self.session.high_score = self.load_high_score()
        self.event_bus.emit(EVENT_BOARD_CLEAR_REQUEST)
        for value in self.seed_tiles:
            self.event_bus.emit(EVENT_SEED_TILE_REQUEST, value=value)
        set_game_mode(self.world, self.event_bus, GameMode.PLAYING)
        self.prepare_next()
        logger.info("New game started (high score %s)", self.session.high_score)

    def back_to_menu(self) -> None:
        self.event_bus.emit(EVENT_BOARD_CLEAR_REQUEST)
        set_game_mode(self.world, self.event_bus, GameMode.MENU)

    def prepare_next(self) -> int:
        first, second = SEED_VALUES
        value = first if self.rng.random() < self.two_probability else second
        self.session.next_value = value
        self.event_bus.emit(EVENT_NEXT_VALUE_PREPARED, value=value)
        return value

    def next_spawn_value(self) -> int:
        return self.session.next_value

    # Score --------------------------------------------------------------

    def increase_score(self, points: int) -> None:
        self.set_score(self.session.score + points)

    def set_score(self, score: int) -> None:
        session = self.session
        session.score = score
        self._save_high_score()
        self.event_bus.emit(EVENT_SCORE_CHANGED, score=session.score, high_score=session.high_score)

    def load_high_score(self) -> int:
        return self.store.get_int(HIGH_SCORE_KEY, 0)

    def _save_high_score(self) -> None:
        session = self.session
        if session.score > self.load_high_score():
            self.store.set(HIGH_SCORE_KEY, session.score)
        session.high_score = max(session.high_score, session.score)
