"""Headless random-play simulation for smoke testing and fuzzing."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import numpy as np

from nokia_snake.actions import Action
from nokia_snake.config import GameConfig
from nokia_snake.game import Game, GameStatus
from nokia_snake.persistence import HighScoreStore, MemoryHighScoreStore

logger = logging.getLogger(__name__)

_TURNS = [
    Action.TURN_UP, Action.TURN_DOWN, Action.TURN_LEFT, Action.TURN_RIGHT,
]


@dataclass
class SimulationResult:
    """Aggregate results of a headless simulation run."""

    games: int
    total_ticks: int
    best_score: int
    mean_score: float
    high_score: int
    wall_time_seconds: float

    def summary(self) -> str:
        return (
            f"Simulation: {self.games} games, {self.total_ticks} ticks in "
            f"{self.wall_time_seconds:.2f}s | best {self.best_score}, "
            f"mean {self.mean_score:.1f}, high score {self.high_score}"
        )


def check_invariants(game: Game) -> None:
    """Raise ``AssertionError`` if the board is in an impossible state."""
    if game.snake is None:
        return
    segments = list(game.snake.segments)
    if len(set(segments)) != len(segments):
        raise AssertionError(f"Duplicate snake segments: {segments}")
    if game.status is GameStatus.PLAYING and game.food in segments:
        raise AssertionError(f"Food {game.food} lies on the snake.")


def simulate(
    config: GameConfig | None = None,
    *,
    games: int = 10,
    max_frames: int = 2_000,
    seed: int | None = 0,
    turn_probability: float = 0.2,
    store: HighScoreStore | None = None,
) -> tuple[SimulationResult, Game]:
    """Play *games* games with a seeded random policy.

    Each frame advances synthetic time by exactly one tick interval, so
    every frame runs one tick. Returns the result and the final game.
    """
    if games < 1:
        raise ValueError("games must be at least 1.")
    cfg = config or GameConfig()
    policy_rng = np.random.default_rng(seed)
    game = Game(
        cfg,
        rng=np.random.default_rng(seed),
        store=store if store is not None else MemoryHighScoreStore(),
    )

    scores: list[int] = []
    total_ticks = 0
    start = time.perf_counter()

    for _ in range(games):
        game.handle(Action.CONFIRM)
        for _ in range(max_frames):
            if policy_rng.random() < turn_probability:
                game.handle(_TURNS[int(policy_rng.integers(len(_TURNS)))])
            game.advance(game.tick_interval_ms)
            check_invariants(game)
            if game.status is GameStatus.GAME_OVER:
                break
        total_ticks += game.state.ticks
        scores.append(game.state.score)
        if game.status is GameStatus.GAME_OVER:
            game.handle(Action.CONFIRM)
        else:
            # Abandon an unfinished game: pausing freezes it, the menu
            # is only reachable through GAME_OVER.
            logger.debug("Game hit the %d-frame limit.", max_frames)
            game = _fresh_like(game, cfg)

    elapsed = time.perf_counter() - start
    result = SimulationResult(
        games=games,
        total_ticks=total_ticks,
        best_score=max(scores),
        mean_score=float(np.mean(scores)),
        high_score=game.state.high_score,
        wall_time_seconds=elapsed,
    )
    logger.info(result.summary())
    return result, game


def _fresh_like(game: Game, cfg: GameConfig) -> Game:
    """A new game sharing *game*'s RNG and store."""
    return Game(cfg, rng=game.rng, store=game.store)
