"""Food placement on unoccupied cells."""

from __future__ import annotations

import logging
from collections.abc import Collection
from typing import TYPE_CHECKING

import numpy as np

from nokia_snake.errors import FoodSpawnError

if TYPE_CHECKING:
    from nokia_snake.grid import Cell, Grid

logger = logging.getLogger(__name__)


class FoodSpawner:
    """Picks a random free cell for the next food item.

    Uses an injected NumPy RNG so placement is reproducible from a seed.
    """

    def __init__(
        self,
        grid: Grid,
        rng: np.random.Generator | None = None,
        max_attempts: int = 1_000,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1.")
        self.grid = grid
        self.rng = rng if rng is not None else np.random.default_rng()
        self.max_attempts = max_attempts

    def spawn(self, occupied: Collection[Cell]) -> Cell:
        """Return a uniformly chosen cell not in *occupied*.

        Rejection-samples up to ``max_attempts`` times, then falls back
        to choosing among the free cells found by a full scan.
        """
        blocked = occupied if isinstance(occupied, (set, frozenset)) else set(occupied)

        for _ in range(self.max_attempts):
            x = int(self.rng.integers(self.grid.width))
            y = int(self.rng.integers(self.grid.height))
            if (x, y) not in blocked:
                return x, y

        free = [cell for cell in self.grid.cells() if cell not in blocked]
        if not free:
            raise FoodSpawnError(
                self.grid.width, self.grid.height, len(blocked),
            )
        logger.warning(
            "Food rejection sampling exhausted %d attempts; "
            "choosing among %d free cells.",
            self.max_attempts, len(free),
        )
        return free[int(self.rng.integers(len(free)))]
