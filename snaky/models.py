"""Data models."""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional

from .constants import (
    DIRECTIONS, FOOD_CELL, SNAKE_FIRST_COL, SNAKE_LENGTH, SNAKE_ROW,
    SPEED_DELAYS, DEFAULT_SPEED,
)


@dataclass(frozen=True)
class Cell:
    i: int  # column
    j: int  # row

    def coord(self) -> tuple[int, int]:
        return self.i, self.j

    def offset(self, direction: "Direction") -> "Cell":
        di, dj = direction.offset
        return Cell(self.i + di, self.j + dj)


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def offset(self) -> tuple[int, int]:
        return DIRECTIONS[self.value]

    @property
    def horizontal(self) -> bool:
        return self in (Direction.LEFT, Direction.RIGHT)


class Event(str, Enum):
    QUIT = "quit"
    RESTART = "restart"
    PAUSE = "pause"
    START = "start"
    MOVE_UP = "up"
    MOVE_DOWN = "down"
    MOVE_LEFT = "left"
    MOVE_RIGHT = "right"

    @property
    def direction(self) -> Optional[Direction]:
        try:
            return Direction(self.value)
        except ValueError:
            return None


class Speed(str, Enum):
    SLOW = "slow"
    MEDIUM = "medium"
    FAST = "fast"

    @property
    def delay(self) -> float:
        return SPEED_DELAYS[self.value]

    @classmethod
    def parse(cls, name: str) -> "Speed":
        """Exact lowercase names only; anything else falls back to the default speed."""
        try:
            return cls(name)
        except ValueError:
            return cls(DEFAULT_SPEED)


class Icon(IntEnum):
    SNAKE_HEAD = 1
    SNAKE_BODY = 2
    FOOD = 3


@dataclass
class Snake:
    heading: Direction
    body: list[Cell]

    @classmethod
    def create(cls) -> "Snake":
        body = [Cell(SNAKE_FIRST_COL + n, SNAKE_ROW) for n in range(SNAKE_LENGTH)]
        return cls(heading=Direction.RIGHT, body=body)

    def length(self) -> int:
        return len(self.body)

    def head(self) -> Cell:
        return self.body[-1]

    def is_on_body(self, cell: Cell) -> bool:
        return cell in self.body


@dataclass
class Food:
    cell: Cell

    @classmethod
    def create(cls) -> "Food":
        return cls(cell=Cell(*FOOD_CELL))
