"""Tunable game constants with JSON round-tripping."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

from nokia_snake.scoring import ScoringRules

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    """Full game configuration.

    Defaults reproduce the classic Nokia 5110 field: 21×12 cells, a
    three-segment snake, 5 ticks/s rising by 0.5 every five food items
    up to 15 ticks/s.
    """

    # Field
    grid_width: int = 21
    grid_height: int = 12
    initial_length: int = 3

    # Progression
    initial_speed: float = 5.0
    max_speed: float = 15.0
    speed_increment: float = 0.5
    foods_per_speedup: int = 5

    # Scoring
    food_points: int = 10
    speed_bonus_multiplier: int = 2

    # Food placement
    food_spawn_attempts: int = 1_000

    # Host loop
    frame_rate: int = 60

    seed: int | None = None

    def __post_init__(self) -> None:
        if self.grid_width < 4 or self.grid_height < 4:
            raise ValueError("Grid dimensions must be at least 4×4.")
        if self.initial_length < 1:
            raise ValueError("initial_length must be at least 1.")
        if self.initial_length > self.grid_width // 2 + 1:
            raise ValueError(
                "initial_length does not fit the grid from its centre; "
                "increase grid_width or reduce initial_length."
            )
        if self.initial_speed <= 0:
            raise ValueError("initial_speed must be positive.")
        if self.max_speed < self.initial_speed:
            raise ValueError("max_speed must be >= initial_speed.")
        if self.speed_increment < 0:
            raise ValueError("speed_increment must be >= 0.")
        if self.foods_per_speedup < 1:
            raise ValueError("foods_per_speedup must be at least 1.")
        if self.food_spawn_attempts < 1:
            raise ValueError("food_spawn_attempts must be at least 1.")
        if self.frame_rate < 1:
            raise ValueError("frame_rate must be at least 1.")

    def scoring_rules(self) -> ScoringRules:
        """Return the scoring/progression subset of this config."""
        return ScoringRules(
            food_points=self.food_points,
            speed_bonus_multiplier=self.speed_bonus_multiplier,
            initial_speed=self.initial_speed,
            max_speed=self.max_speed,
            speed_increment=self.speed_increment,
            foods_per_speedup=self.foods_per_speedup,
        )

    def to_dict(self) -> dict:
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file.

        Missing keys fall back to their defaults.
        """
        raw = json.loads(Path(path).read_text())
        return cls(**raw)
