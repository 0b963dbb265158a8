"""Points per food item and tick-speed progression."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from nokia_snake.game import GameState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoringRules:
    """Scoring and speed-progression constants."""

    food_points: int = 10
    speed_bonus_multiplier: int = 2
    initial_speed: float = 5.0
    max_speed: float = 15.0
    speed_increment: float = 0.5
    foods_per_speedup: int = 5


def points_for_food(
    snake_length: int, speed: float, rules: ScoringRules,
) -> int:
    """Return the points awarded for one food item.

    *snake_length* is measured after growth.
    """
    speed_bonus = math.floor(speed) * rules.speed_bonus_multiplier
    return rules.food_points + snake_length + speed_bonus


def on_food_eaten(
    state: GameState, snake_length: int, rules: ScoringRules | None = None,
) -> bool:
    """Credit one food item to *state*.

    Returns True when the speed went up.
    """
    rules = rules or ScoringRules()
    state.score += points_for_food(snake_length, state.speed, rules)
    state.food_eaten += 1

    if state.food_eaten % rules.foods_per_speedup != 0:
        return False
    if state.speed >= rules.max_speed:
        return False

    previous = state.speed
    state.speed = min(state.speed + rules.speed_increment, rules.max_speed)
    if state.speed <= previous:
        return False
    logger.debug("Speed raised from %.1f to %.1f.", previous, state.speed)
    return True


def tick_interval_ms(speed: float) -> float:
    """Milliseconds between simulation ticks at *speed* ticks/second."""
    if speed <= 0:
        raise ValueError("speed must be positive.")
    return 1000.0 / speed
