"""Exception types raised by the simulation core."""

from __future__ import annotations


class SnakeError(Exception):
    """Base class for errors raised by the game core."""


class FoodSpawnError(SnakeError):
    """No free cell is left on the grid for a new food item."""

    def __init__(self, width: int, height: int, occupied: int) -> None:
        self.width = width
        self.height = height
        self.occupied = occupied
        super().__init__(
            f"No free cell for food on a {width}x{height} grid "
            f"({occupied} cells occupied)."
        )
