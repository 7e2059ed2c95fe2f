"""Game constants."""

GRID_W, GRID_H = 26, 14
MIN_GRID_W, MIN_GRID_H = 26, 14

SNAKE_LENGTH = 4
SNAKE_ROW = 3
SNAKE_FIRST_COL = 1
FOOD_CELL = (5, 4)
FOOD_SCORE = 10

SPEED_DELAYS = {
    "slow": 0.200,
    "medium": 0.150,
    "fast": 0.100,
}
DEFAULT_SPEED = "medium"

DIRECTIONS = {
    "up": (0, -1),
    "down": (0, 1),
    "left": (-1, 0),
    "right": (1, 0),
}

WEB_HOST, WEB_PORT = "127.0.0.1", 8765

# terminal layout: grid origin is shifted by (1, 3), side panel is 20 wide
GRID_ORIGIN = (1, 3)
PANEL_WIDTH = 20
