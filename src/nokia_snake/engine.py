"""One-cell-per-tick movement with wall and self collision."""

from __future__ import annotations

import enum
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from nokia_snake.grid import Cell, Grid
    from nokia_snake.snake import Snake

logger = logging.getLogger(__name__)


class TickResult(enum.Enum):
    """Outcome of advancing the snake by one cell."""

    CONTINUE = "continue"
    ATE = "ate"
    COLLIDED = "collided"


class MovementEngine:
    """Advances a snake across a grid one tick at a time.

    The engine mutates the snake in place. It never spawns food or
    touches the score; callers react to the returned :class:`TickResult`.
    """

    def __init__(self, grid: Grid) -> None:
        self.grid = grid
        self.last_collision: str | None = None

    def tick(self, snake: Snake, food: Cell | None) -> TickResult:
        """Advance *snake* by one cell towards its buffered direction."""
        self.last_collision = None
        snake.commit_turn()
        new_head = snake.next_head()

        # --- wall ---
        if not self.grid.in_bounds(new_head):
            return self._collide("wall", new_head)

        # --- self (every segment except the head, tail included) ---
        segments = snake.segments
        for i in range(1, len(segments)):
            if segments[i] == new_head:
                return self._collide("self", new_head)

        # --- move ---
        segments.appendleft(new_head)
        if food is not None and new_head == food:
            return TickResult.ATE
        segments.pop()
        return TickResult.CONTINUE

    def _collide(self, kind: str, cell: Cell) -> TickResult:
        self.last_collision = kind
        logger.debug("Collision (%s) at %s.", kind, cell)
        return TickResult.COLLIDED
