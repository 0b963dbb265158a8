"""Tests for headless simulation."""

import pytest

from nokia_snake.config import GameConfig
from nokia_snake.game import Game, GameStatus
from nokia_snake.persistence import MemoryHighScoreStore
from nokia_snake.simulate import check_invariants, simulate


class TestSimulate:
    def test_runs_games(self):
        result, game = simulate(games=3, max_frames=500, seed=1)
        assert result.games == 3
        assert result.total_ticks > 0
        assert result.best_score >= 0
        assert result.high_score <= result.best_score
        assert game.status is GameStatus.MENU

    def test_deterministic(self):
        a, _ = simulate(games=4, max_frames=300, seed=9)
        b, _ = simulate(games=4, max_frames=300, seed=9)
        assert (a.total_ticks, a.best_score, a.mean_score) == (
            b.total_ticks, b.best_score, b.mean_score,
        )

    def test_uses_given_store(self):
        store = MemoryHighScoreStore(10**6)
        result, _ = simulate(games=2, max_frames=200, seed=2, store=store)
        assert result.high_score == 10**6
        assert store.writes == 0

    def test_frame_limit_abandons_game(self):
        # Never turning on a huge field cannot crash within 3 frames.
        cfg = GameConfig(grid_width=40, grid_height=40)
        result, game = simulate(
            cfg, games=2, max_frames=3, seed=0, turn_probability=0.0,
        )
        assert result.total_ticks == 6
        assert game.status is GameStatus.MENU

    def test_summary(self):
        result, _ = simulate(games=1, max_frames=50, seed=0)
        assert result.summary().startswith("Simulation: 1 games")

    def test_games_must_be_positive(self):
        with pytest.raises(ValueError, match="at least 1"):
            simulate(games=0)


class TestCheckInvariants:
    def test_menu_has_nothing_to_check(self):
        check_invariants(Game())

    def test_duplicate_segments_detected(self):
        game = Game()
        game.handle("confirm")
        game.snake.segments.append(game.snake.head)
        with pytest.raises(AssertionError, match="Duplicate"):
            check_invariants(game)

    def test_food_on_snake_detected(self):
        game = Game()
        game.handle("confirm")
        game.food = game.snake.head
        with pytest.raises(AssertionError, match="lies on the snake"):
            check_invariants(game)
