"""Nokia Snake: a deterministic arcade snake simulation core."""

from nokia_snake.actions import Action, parse_action
from nokia_snake.config import GameConfig
from nokia_snake.engine import MovementEngine, TickResult
from nokia_snake.errors import FoodSpawnError, SnakeError
from nokia_snake.food import FoodSpawner
from nokia_snake.game import Game, GameEvent, GameState, GameStatus, Snapshot
from nokia_snake.grid import CellType, Grid
from nokia_snake.loop import InputSource, LoopDriver, QueueInput, Renderer
from nokia_snake.persistence import (
    HighScoreStore,
    JsonHighScoreStore,
    MemoryHighScoreStore,
)
from nokia_snake.scoring import ScoringRules, on_food_eaten, tick_interval_ms
from nokia_snake.snake import Direction, Snake

__all__ = [
    "Action",
    "CellType",
    "Direction",
    "FoodSpawnError",
    "FoodSpawner",
    "Game",
    "GameConfig",
    "GameEvent",
    "GameState",
    "GameStatus",
    "Grid",
    "HighScoreStore",
    "InputSource",
    "JsonHighScoreStore",
    "LoopDriver",
    "MemoryHighScoreStore",
    "MovementEngine",
    "QueueInput",
    "Renderer",
    "ScoringRules",
    "Snake",
    "SnakeError",
    "Snapshot",
    "TickResult",
    "on_food_eaten",
    "parse_action",
    "tick_interval_ms",
]
