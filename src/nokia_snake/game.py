"""Game state machine wrapping the movement engine.

:class:`Game` is the simulation context: it owns the grid, snake, food,
scores and timing, and is driven purely through :meth:`Game.handle`
(symbolic input) and :meth:`Game.advance` (elapsed wall time). Hosts
observe it through :meth:`Game.snapshot` and event listeners.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from dataclasses import dataclass

import numpy as np

from nokia_snake.actions import Action, parse_action
from nokia_snake.config import GameConfig
from nokia_snake.engine import MovementEngine, TickResult
from nokia_snake.food import FoodSpawner
from nokia_snake.grid import Cell, Grid
from nokia_snake.persistence import HighScoreStore, MemoryHighScoreStore
from nokia_snake.scoring import on_food_eaten, tick_interval_ms
from nokia_snake.snake import Direction, Snake

logger = logging.getLogger(__name__)


class GameStatus(str, enum.Enum):
    """Top-level game states."""

    MENU = "menu"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class GameEvent(enum.Enum):
    """Notable transitions reported to listeners (sound cues, UI)."""

    STARTED = "started"
    TURNED = "turned"
    ATE = "ate"
    SPEED_UP = "speed_up"
    PAUSED = "paused"
    RESUMED = "resumed"
    GAME_OVER = "game_over"
    NEW_HIGH_SCORE = "new_high_score"
    MENU = "menu"


@dataclass
class GameState:
    """Mutable score and progression record for the current session."""

    status: GameStatus = GameStatus.MENU
    score: int = 0
    high_score: int = 0
    speed: float = 5.0
    food_eaten: int = 0
    ticks: int = 0


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of the game handed to renderers each frame."""

    status: GameStatus
    snake: tuple[Cell, ...]
    food: Cell | None
    direction: Direction | None
    score: int
    high_score: int
    speed: float
    food_eaten: int
    ticks: int

    def to_dict(self) -> dict:
        """Serialize to JSON-compatible primitives."""
        return {
            "status": self.status.value,
            "snake": [list(cell) for cell in self.snake],
            "food": list(self.food) if self.food is not None else None,
            "direction": (
                self.direction.name.lower() if self.direction else None
            ),
            "score": self.score,
            "high_score": self.high_score,
            "speed": self.speed,
            "food_eaten": self.food_eaten,
            "ticks": self.ticks,
        }


Listener = Callable[[GameEvent, Snapshot], None]


class Game:
    """Single-player snake session cycling MENU → PLAYING → GAME_OVER.

    Pass *rng* for deterministic food placement and *store* to persist
    the high score; both default to fresh in-process instances.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        *,
        rng: np.random.Generator | None = None,
        store: HighScoreStore | None = None,
    ) -> None:
        cfg = config or GameConfig()
        self.config = cfg
        self.grid = Grid(width=cfg.grid_width, height=cfg.grid_height)
        self.rng = rng if rng is not None else np.random.default_rng(cfg.seed)
        self.engine = MovementEngine(self.grid)
        self.spawner = FoodSpawner(
            self.grid, rng=self.rng, max_attempts=cfg.food_spawn_attempts,
        )
        self.rules = cfg.scoring_rules()
        self.store: HighScoreStore = (
            store if store is not None else MemoryHighScoreStore()
        )

        self.state = GameState(
            high_score=self.store.load(), speed=cfg.initial_speed,
        )
        self.snake: Snake | None = None
        self.food: Cell | None = None
        self._since_tick_ms = 0.0
        self._listeners: list[Listener] = []

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    @property
    def status(self) -> GameStatus:
        return self.state.status

    @property
    def tick_interval_ms(self) -> float:
        return tick_interval_ms(self.state.speed)

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def snapshot(self) -> Snapshot:
        """Return a frozen copy of everything a renderer needs."""
        snake = self.snake
        return Snapshot(
            status=self.state.status,
            snake=tuple(snake.segments) if snake is not None else (),
            food=self.food,
            direction=snake.direction if snake is not None else None,
            score=self.state.score,
            high_score=self.state.high_score,
            speed=self.state.speed,
            food_eaten=self.state.food_eaten,
            ticks=self.state.ticks,
        )

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def handle(self, action: Action | str) -> bool:
        """Apply one input action. Returns whether it changed anything.

        Unknown actions, and actions meaningless in the current state,
        are ignored.
        """
        act = parse_action(action)
        if act is None:
            logger.debug("Ignoring unknown action %r.", action)
            return False

        status = self.state.status
        if status is GameStatus.MENU:
            if act is Action.CONFIRM:
                self._start()
                return True
        elif status is GameStatus.PLAYING:
            if act is Action.PAUSE:
                self._set_status(GameStatus.PAUSED, GameEvent.PAUSED)
                return True
            direction = act.direction
            if direction is not None and self.snake.request_turn(direction):
                self._emit(GameEvent.TURNED)
                return True
        elif status is GameStatus.PAUSED:
            if act is Action.PAUSE:
                self._set_status(GameStatus.PLAYING, GameEvent.RESUMED)
                return True
        elif status is GameStatus.GAME_OVER:
            if act is Action.CONFIRM:
                self.snake = None
                self.food = None
                self._set_status(GameStatus.MENU, GameEvent.MENU)
                return True
        return False

    # ------------------------------------------------------------------
    # Time
    # ------------------------------------------------------------------

    def advance(self, elapsed_ms: float) -> TickResult | None:
        """Account for *elapsed_ms* of wall time since the last call.

        Runs at most one tick once a full tick interval has built up;
        time beyond the interval is dropped rather than caught up.
        Returns the tick result, or ``None`` if no tick ran.
        """
        if elapsed_ms < 0:
            raise ValueError("elapsed_ms must be non-negative.")
        if self.state.status is not GameStatus.PLAYING:
            return None

        self._since_tick_ms += elapsed_ms
        if self._since_tick_ms < self.tick_interval_ms:
            return None
        self._since_tick_ms = 0.0
        return self.step()

    def step(self) -> TickResult | None:
        """Run one simulation tick immediately, ignoring timing."""
        if self.state.status is not GameStatus.PLAYING:
            return None

        result = self.engine.tick(self.snake, self.food)
        self.state.ticks += 1

        if result is TickResult.COLLIDED:
            self._game_over()
        elif result is TickResult.ATE:
            sped_up = on_food_eaten(self.state, len(self.snake), self.rules)
            self.food = self.spawner.spawn(set(self.snake.segments))
            self._emit(GameEvent.ATE)
            if sped_up:
                self._emit(GameEvent.SPEED_UP)
        return result

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _start(self) -> None:
        cfg = self.config
        self.state.score = 0
        self.state.speed = cfg.initial_speed
        self.state.food_eaten = 0
        self.state.ticks = 0
        self._since_tick_ms = 0.0
        self.snake = Snake.spawn(self.grid, cfg.initial_length)
        self.food = self.spawner.spawn(set(self.snake.segments))
        logger.info("Game started (high score %d).", self.state.high_score)
        self._set_status(GameStatus.PLAYING, GameEvent.STARTED)

    def _game_over(self) -> None:
        state = self.state
        # The store may be shared; another game can have raised it since.
        state.high_score = max(state.high_score, self.store.load())
        new_record = state.score > state.high_score
        if new_record:
            state.high_score = state.score
            self.store.save(state.score)
            logger.info("New high score: %d.", state.score)

        logger.info(
            "Game over (%s collision) after %d ticks with score %d.",
            self.engine.last_collision, state.ticks, state.score,
        )
        self._set_status(GameStatus.GAME_OVER, GameEvent.GAME_OVER)
        if new_record:
            self._emit(GameEvent.NEW_HIGH_SCORE)

    def _set_status(self, status: GameStatus, event: GameEvent) -> None:
        self.state.status = status
        self._emit(event)

    def _emit(self, event: GameEvent) -> None:
        if not self._listeners:
            return
        snap = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(event, snap)
            except Exception:
                logger.exception("Listener %r failed on %s.", listener, event)
