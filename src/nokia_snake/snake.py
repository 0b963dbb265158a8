"""Snake representation and buffered turning."""

from __future__ import annotations

import enum
from collections import deque
from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from nokia_snake.grid import Cell, Grid


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> Direction:
        return Direction((-self.dx, -self.dy))


class Snake:
    """A snake represented as an ordered deque of (x, y) segments.

    The head is ``segments[0]``; the tail is ``segments[-1]``.
    ``next_direction`` holds the most recent accepted turn and becomes
    ``direction`` when :meth:`commit_turn` runs at the start of a tick.
    """

    def __init__(
        self,
        segments: Iterable[Cell],
        direction: Direction = Direction.RIGHT,
    ) -> None:
        self.segments: deque[Cell] = deque(segments)
        if not self.segments:
            raise ValueError("Snake must have at least one segment.")
        self.direction = direction
        self.next_direction = direction

    @classmethod
    def spawn(cls, grid: Grid, length: int = 3) -> Snake:
        """Create a snake centred on *grid*, moving right."""
        if length < 1:
            raise ValueError("Snake length must be at least 1.")
        hx, hy = grid.center
        return cls(
            [(hx - i, hy) for i in range(length)], Direction.RIGHT,
        )

    @property
    def head(self) -> Cell:
        """Return the head coordinate."""
        return self.segments[0]

    def __len__(self) -> int:
        return len(self.segments)

    def request_turn(self, direction: Direction) -> bool:
        """Buffer a turn if it is perpendicular to the current direction.

        Reversals (and repeats of the current heading) are dropped.
        Returns whether the turn was buffered.
        """
        if direction.dx != 0 and self.direction.dx != 0:
            return False
        if direction.dy != 0 and self.direction.dy != 0:
            return False
        self.next_direction = direction
        return True

    def commit_turn(self) -> None:
        """Apply the buffered turn as the active direction."""
        self.direction = self.next_direction

    def next_head(self) -> Cell:
        """Compute the next head position without moving."""
        x, y = self.head
        return x + self.direction.dx, y + self.direction.dy

    def occupies(self, cell: Cell) -> bool:
        """Check whether the snake occupies a given cell."""
        return cell in self.segments

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {
            "segments": [list(seg) for seg in self.segments],
            "direction": self.direction.name.lower(),
        }
