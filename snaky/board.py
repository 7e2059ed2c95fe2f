"""Board snapshot handed to renderers every tick."""

from typing import Optional

from .errors import CellOutOfRange
from .models import Cell, Food, Icon, Snake, Speed

Grid = list[list[Optional[Icon]]]


def empty_grid(width: int, height: int) -> Grid:
    return [[None] * height for _ in range(width)]


class Board:
    """
    Render-facing projection of the game state.

    The board is recomputed from the snake and the food on every tick and is
    never the source of truth. ``grid`` is indexed ``grid[i][j]`` where ``i``
    is the column and ``j`` the row.

    Attributes:
        width, height: board dimensions
        round: number of accepted direction changes
        score: points collected by eating food
        length: snake length at the last paint
        speed: game speed
        head: snake head at the last paint
        food: food cell at the last paint
        is_paused: whether the game is waiting for a start
        errors: message of the last failed move, empty when none
    """

    def __init__(
        self,
        width: int,
        height: int,
        speed: Speed,
        head: Cell,
        length: int,
        food: Cell,
    ):
        self.width = width
        self.height = height
        self.round = 0
        self.score = 0
        self.speed = speed
        self.head = head
        self.length = length
        self.food = food
        self.is_paused = True
        self.errors = ""
        self.grid: Grid = empty_grid(width, height)

    @classmethod
    def create(cls, width: int, height: int, snake: Snake, food: Food, speed: Speed) -> "Board":
        return cls(width, height, speed, snake.head(), snake.length(), food.cell)

    def paint(self, snake: Snake, food: Food):
        """Redraw the grid from the snake and the food.

        Raises CellOutOfRange when a cell falls outside the grid; the grid is
        then left partially marked.
        """
        self.update(snake, food)

        self.mark(food.cell, Icon.FOOD)
        self.mark(snake.head(), Icon.SNAKE_HEAD)
        for cell in snake.body[:-1]:
            self.mark(cell, Icon.SNAKE_BODY)

    def update(self, snake: Snake, food: Food):
        self.grid = empty_grid(self.width, self.height)
        self.head = snake.head()
        self.length = snake.length()
        self.food = food.cell

    def mark(self, cell: Cell, icon: Icon):
        if not (0 <= cell.i < self.width and 0 <= cell.j < self.height):
            raise CellOutOfRange(f"cell out of range: {cell.coord()}")
        self.grid[cell.i][cell.j] = icon

    def icon_at(self, cell: Cell) -> Optional[Icon]:
        return self.grid[cell.i][cell.j]

    def count(self, icon: Icon) -> int:
        return sum(column.count(icon) for column in self.grid)

    def __repr__(self):
        return (
            f"<Board {self.width}x{self.height} round={self.round}, score={self.score}, "
            f"length={self.length}, paused={self.is_paused}>"
        )
