GRID_WIDTH = 4
GRID_HEIGHT = 4

# Seconds the board waits after a changed sweep before unlocking and spawning.
SETTLE_DELAY = 0.08
# Seconds a prime tile stays on its cell after converting the seeds.
PRIME_REMOVAL_DELAY = 1.0

SEED_VALUES = (2, 3)
# Value produced by merging the two seeds; doubling merges start here.
SEED_MERGE_VALUE = 5
NEW_GAME_SEED_TILES = (2, 3, 5)

# Probability that the session pre-selects 2 rather than 3.
SEED_TWO_PROBABILITY = 0.5
# Consecutive identical spawns allowed before the next spawn is forced to differ.
MAX_SPAWN_STREAK = 3

# Prime tiles turn every tile of their target value into SEED_MERGE_VALUE.
PRIME_TILE_VALUES = {2: 2222, 3: 3333}
# Roll range and winning rolls for the prime tile draw (disabled by default).
PRIME_ROLL_RANGE = 100
PRIME_ROLLS = {22: 2, 33: 3}

HIGH_SCORE_KEY = "hiscore"

# Tile appearance table: value -> (background, text color).
LIGHT_TEXT = (249, 246, 242)
DARK_TEXT = (119, 110, 101)
TILE_STATES = (
    (2, (238, 228, 218), DARK_TEXT),
    (3, (237, 224, 200), DARK_TEXT),
    (5, (242, 177, 121), LIGHT_TEXT),
    (10, (245, 149, 99), LIGHT_TEXT),
    (20, (246, 124, 95), LIGHT_TEXT),
    (40, (246, 94, 59), LIGHT_TEXT),
    (80, (237, 207, 114), LIGHT_TEXT),
    (160, (237, 204, 97), LIGHT_TEXT),
    (320, (237, 200, 80), LIGHT_TEXT),
    (640, (237, 197, 63), LIGHT_TEXT),
    (1280, (237, 194, 46), LIGHT_TEXT),
    (2560, (60, 58, 50), LIGHT_TEXT),
    (5120, (45, 43, 38), LIGHT_TEXT),
    (10240, (30, 29, 25), LIGHT_TEXT),
    (2222, (120, 200, 255), DARK_TEXT),
    (3333, (180, 140, 255), DARK_TEXT),
)

WINDOW_WIDTH = 600
WINDOW_HEIGHT = 720
BOTTOM_MARGIN = 20
# Height reserved above the board for score, high score and next tile.
HEADER_HEIGHT = 140

# Board maximum footprint relative to window (percentage of window width/height).
BOARD_MAX_WIDTH_PCT = 0.90
BOARD_MAX_HEIGHT_PCT = 0.90
TILE_PADDING = 8
