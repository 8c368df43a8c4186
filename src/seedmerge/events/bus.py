from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Use weak=False to retain strong reference to bound methods so systems not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                # payload: dt=float
EVENT_SCHEDULE_REQUEST = "schedule_request"        # payload: delay=float, event=str, payload=dict


# ============================================================================
# INPUT
# ============================================================================
EVENT_KEY_PRESS = "key_press"                      # payload: symbol=int, modifiers=int
EVENT_MOVE_REQUEST = "move_request"                # payload: direction=Direction


# ============================================================================
# BOARD MECHANICS
# ============================================================================
EVENT_BOARD_CLEAR_REQUEST = "board_clear_request"  # payload: None
EVENT_BOARD_CLEARED = "board_cleared"              # payload: None
EVENT_SEED_TILE_REQUEST = "seed_tile_request"      # payload: value=int
EVENT_BOARD_SWEPT = "board_swept"                  # payload: direction=Direction, merges=int
EVENT_BOARD_SETTLED = "board_settled"              # payload: None
EVENT_TILE_SPAWNED = "tile_spawned"                # payload: entity=int, value=int, position=(x,y)
EVENT_TILES_MERGED = "tiles_merged"                # payload: value=int, points=int, position=(x,y)
EVENT_TILE_STATE_MISSING = "tile_state_missing"    # payload: entity=int, value=int
EVENT_SPAWN_VALUE_CONSUMED = "spawn_value_consumed"  # payload: value=int
EVENT_SEED_CONVERSION = "seed_conversion"          # payload: target_value=int, converted=list[(x,y)], trigger=int
EVENT_TILE_EXPIRED = "tile_expired"                # payload: entity=int


# ============================================================================
# GAME FLOW & SESSION
# ============================================================================
EVENT_GAME_OVER = "game_over"                      # payload: score=int
EVENT_NEW_GAME_REQUEST = "new_game_request"        # payload: None
EVENT_RETURN_TO_MENU = "return_to_menu"            # payload: None
EVENT_GAME_MODE_CHANGED = "game_mode_changed"      # payload: previous_mode=GameMode|None, new_mode=GameMode
EVENT_SCORE_CHANGED = "score_changed"              # payload: score=int, high_score=int
EVENT_NEXT_VALUE_PREPARED = "next_value_prepared"  # payload: value=int
