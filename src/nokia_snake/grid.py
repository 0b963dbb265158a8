"""Play-field coordinate space for the snake game."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Iterator

import numpy as np

Cell = tuple[int, int]


class CellType(enum.IntEnum):
    """Integer codes stored in a rasterized frame."""

    EMPTY = 0
    SNAKE = 1
    HEAD = 2
    FOOD = 3


class Grid:
    """Fixed-size rectangular field of cells.

    Coordinates are ``(x, y)``: ``x`` is the column and grows to the
    right, ``y`` is the row and grows downwards.
    """

    def __init__(self, width: int = 21, height: int = 12) -> None:
        if width < 4 or height < 4:
            raise ValueError("Grid dimensions must be at least 4×4.")
        self.width = width
        self.height = height

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    @property
    def center(self) -> Cell:
        return self.width // 2, self.height // 2

    def in_bounds(self, cell: Cell) -> bool:
        """Check whether a cell lies within the field."""
        x, y = cell
        return 0 <= x < self.width and 0 <= y < self.height

    def cells(self) -> Iterator[Cell]:
        """Yield every cell in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield x, y

    def raster(
        self, snake: Iterable[Cell] = (), food: Cell | None = None,
    ) -> np.ndarray:
        """Paint snake and food onto a ``(height, width)`` int8 array.

        The first snake cell is painted as the head.
        """
        frame = np.zeros((self.height, self.width), dtype=np.int8)
        if food is not None and self.in_bounds(food):
            frame[food[1], food[0]] = CellType.FOOD
        for i, (x, y) in enumerate(snake):
            if self.in_bounds((x, y)):
                frame[y, x] = CellType.HEAD if i == 0 else CellType.SNAKE
        return frame

    def to_dict(self) -> dict:
        """Serialize grid dimensions to a dictionary."""
        return {"width": self.width, "height": self.height}
