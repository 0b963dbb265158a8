"""Tests for the Game state machine."""

import json
import logging

import numpy as np
import pytest

from nokia_snake.actions import Action
from nokia_snake.config import GameConfig
from nokia_snake.engine import TickResult
from nokia_snake.game import Game, GameEvent, GameStatus
from nokia_snake.persistence import JsonHighScoreStore, MemoryHighScoreStore


@pytest.fixture()
def store():
    return MemoryHighScoreStore()


@pytest.fixture()
def game(store):
    return Game(rng=np.random.default_rng(0), store=store)


def _playing(game):
    game.handle(Action.CONFIRM)
    # Park the food away from the starting row so ticks are predictable.
    game.food = (0, 0)
    return game


def _eat_ahead(game):
    # Aim at the cell the snake enters once its buffered turn is applied.
    x, y = game.snake.head
    heading = game.snake.next_direction
    game.food = (x + heading.dx, y + heading.dy)
    return game.step()


def _crash_into_wall(game):
    result = None
    while result is not TickResult.COLLIDED:
        result = game.step()
    return result


class TestInitialState:
    def test_starts_in_menu(self, game):
        snap = game.snapshot()
        assert snap.status is GameStatus.MENU
        assert snap.snake == ()
        assert snap.food is None
        assert snap.direction is None

    def test_high_score_loaded_from_store(self):
        game = Game(store=MemoryHighScoreStore(500))
        assert game.state.high_score == 500

    def test_high_score_loaded_from_json_file(self, tmp_path):
        path = tmp_path / "hs.json"
        JsonHighScoreStore(path).save(42)
        assert Game(store=JsonHighScoreStore(path)).state.high_score == 42


class TestStartTransition:
    def test_confirm_starts_game(self, game):
        assert game.handle(Action.CONFIRM)
        snap = game.snapshot()
        assert snap.status is GameStatus.PLAYING
        assert snap.score == 0
        assert snap.speed == 5.0
        assert snap.food_eaten == 0
        assert snap.snake == ((10, 6), (9, 6), (8, 6))
        assert snap.food is not None
        assert snap.food not in snap.snake

    def test_string_actions_accepted(self, game):
        assert game.handle("enter")
        assert game.status is GameStatus.PLAYING

    def test_menu_ignores_other_actions(self, game):
        assert not game.handle(Action.PAUSE)
        assert not game.handle(Action.TURN_UP)
        assert game.status is GameStatus.MENU

    def test_unknown_actions_ignored(self, game):
        assert not game.handle("jump")
        assert not game.handle(42)
        assert game.status is GameStatus.MENU


class TestTiming:
    def test_tick_after_full_interval(self, game):
        _playing(game)
        assert game.advance(150) is None
        assert game.advance(50) is TickResult.CONTINUE
        assert game.snake.head == (11, 6)

    def test_at_most_one_tick_per_advance(self, game):
        _playing(game)
        game.advance(5_000)
        assert game.state.ticks == 1
        assert game.snake.head == (11, 6)

    def test_excess_time_is_dropped(self, game):
        _playing(game)
        game.advance(350)
        assert game.advance(100) is None
        assert game.state.ticks == 1

    def test_faster_speed_shortens_interval(self, game):
        _playing(game)
        game.state.speed = 10.0
        assert game.advance(100) is TickResult.CONTINUE

    def test_no_ticks_outside_playing(self, game):
        assert game.advance(1_000) is None
        assert game.step() is None

    def test_negative_elapsed_rejected(self, game):
        with pytest.raises(ValueError, match="non-negative"):
            game.advance(-1)


class TestTurning:
    def test_turn_applied_next_tick(self, game):
        _playing(game)
        assert game.handle(Action.TURN_UP)
        game.step()
        assert game.snake.head == (10, 5)

    def test_reversal_rejected(self, game):
        _playing(game)
        assert not game.handle(Action.TURN_LEFT)
        game.step()
        assert game.snake.direction.name == "RIGHT"
        assert game.snake.head == (11, 6)


class TestPause:
    def test_pause_and_resume(self, game):
        _playing(game)
        assert game.handle(Action.PAUSE)
        assert game.status is GameStatus.PAUSED
        assert game.handle(Action.PAUSE)
        assert game.status is GameStatus.PLAYING

    def test_pause_resume_is_idempotent(self, game):
        _playing(game)
        game.advance(120)
        before = game.snapshot()
        game.handle(Action.PAUSE)
        assert game.advance(10_000) is None
        assert not game.handle(Action.TURN_UP)
        assert not game.handle(Action.CONFIRM)
        game.handle(Action.PAUSE)
        assert game.snapshot() == before

    def test_resume_continues_partial_interval(self, game):
        _playing(game)
        game.advance(150)
        game.handle(Action.PAUSE)
        game.handle(Action.PAUSE)
        assert game.advance(50) is TickResult.CONTINUE


class TestEating:
    def test_eating_scores_and_grows(self, game):
        _playing(game)
        assert _eat_ahead(game) is TickResult.ATE
        assert game.state.score == 10 + 4 + 10
        assert game.state.food_eaten == 1
        assert len(game.snake) == 4

    def test_new_food_spawned_off_snake(self, game):
        _playing(game)
        _eat_ahead(game)
        assert game.food is not None
        assert game.food not in game.snake.segments

    def test_fifth_food_raises_speed(self, game):
        _playing(game)
        for _ in range(5):
            _eat_ahead(game)
        assert game.state.food_eaten == 5
        assert game.state.speed == 5.5
        # Lengths 4..8 at speed 5 each.
        assert game.state.score == 5 * 20 + (4 + 5 + 6 + 7 + 8)


class TestGameOver:
    def test_wall_collision_ends_game(self, game):
        _playing(game)
        _crash_into_wall(game)
        assert game.status is GameStatus.GAME_OVER
        assert game.state.ticks == 11
        assert game.snake.head == (20, 6)

    def test_new_high_score_saved(self, game, store):
        _playing(game)
        _eat_ahead(game)
        game.food = (0, 0)
        _crash_into_wall(game)
        assert game.state.high_score == 24
        assert store.value == 24
        assert store.writes == 1

    def test_lower_score_keeps_high_score(self):
        store = MemoryHighScoreStore(1_000)
        game = Game(rng=np.random.default_rng(0), store=store)
        _playing(game)
        _eat_ahead(game)
        game.food = (0, 0)
        _crash_into_wall(game)
        assert game.state.high_score == 1_000
        assert store.writes == 0

    def test_high_score_monotonic_across_games(self, game):
        highs = []
        for eats in (2, 0, 1, 3):
            _playing(game)
            for _ in range(eats):
                _eat_ahead(game)
            game.food = (0, 0)
            _crash_into_wall(game)
            highs.append(game.state.high_score)
            game.handle(Action.CONFIRM)
        assert highs == sorted(highs)

    def test_shared_store_record_never_lowered(self, store):
        first = Game(rng=np.random.default_rng(1), store=store)
        second = Game(rng=np.random.default_rng(2), store=store)
        _playing(first)
        _playing(second)

        for _ in range(3):
            _eat_ahead(first)
        first.food = (0, 0)
        _crash_into_wall(first)
        assert store.value == 75

        _eat_ahead(second)
        second.food = (0, 0)
        _crash_into_wall(second)
        assert store.value == 75
        assert store.writes == 1
        assert second.state.high_score == 75

    def test_state_frozen_after_game_over(self, game):
        _playing(game)
        _crash_into_wall(game)
        before = game.snapshot()
        assert game.advance(1_000) is None
        assert not game.handle(Action.TURN_UP)
        assert not game.handle(Action.PAUSE)
        assert game.snapshot() == before

    def test_confirm_returns_to_menu(self, game):
        _playing(game)
        _crash_into_wall(game)
        assert game.handle(Action.CONFIRM)
        snap = game.snapshot()
        assert snap.status is GameStatus.MENU
        assert snap.snake == ()
        assert snap.food is None

    def test_restart_resets_score_and_speed(self, game):
        _playing(game)
        for _ in range(5):
            _eat_ahead(game)
        game.food = (0, 0)
        _crash_into_wall(game)
        game.handle(Action.CONFIRM)
        game.handle(Action.CONFIRM)
        assert game.state.score == 0
        assert game.state.speed == 5.0
        assert game.state.food_eaten == 0
        assert game.state.ticks == 0
        assert len(game.snake) == 3


class TestEvents:
    def test_event_sequence(self, game):
        events = []
        game.subscribe(lambda event, snap: events.append(event))
        _playing(game)
        game.handle(Action.TURN_DOWN)
        game.handle(Action.PAUSE)
        game.handle(Action.PAUSE)
        _eat_ahead(game)
        game.food = (0, 0)
        _crash_into_wall(game)
        game.handle(Action.CONFIRM)
        assert events == [
            GameEvent.STARTED,
            GameEvent.TURNED,
            GameEvent.PAUSED,
            GameEvent.RESUMED,
            GameEvent.ATE,
            GameEvent.GAME_OVER,
            GameEvent.NEW_HIGH_SCORE,
            GameEvent.MENU,
        ]

    def test_speed_up_event(self, game):
        events = []
        game.subscribe(lambda event, snap: events.append(event))
        _playing(game)
        for _ in range(5):
            _eat_ahead(game)
        assert events.count(GameEvent.SPEED_UP) == 1
        assert events[-1] is GameEvent.SPEED_UP

    def test_listener_receives_snapshot(self, game):
        seen = []
        game.subscribe(lambda event, snap: seen.append(snap.status))
        game.handle(Action.CONFIRM)
        assert seen == [GameStatus.PLAYING]

    def test_failing_listener_does_not_break_game(self, game, caplog):
        def boom(event, snap):
            raise RuntimeError("speaker unplugged")

        game.subscribe(boom)
        with caplog.at_level(logging.ERROR):
            assert game.handle(Action.CONFIRM)
        assert game.status is GameStatus.PLAYING
        assert "failed" in caplog.text

    def test_unsubscribe(self, game):
        events = []

        def listener(event, snap):
            events.append(event)

        game.subscribe(listener)
        game.unsubscribe(listener)
        game.handle(Action.CONFIRM)
        assert events == []


class TestInvariants:
    def test_random_play_keeps_invariants(self):
        policy = np.random.default_rng(11)
        game = Game(GameConfig(seed=11))
        turns = [
            Action.TURN_UP, Action.TURN_DOWN,
            Action.TURN_LEFT, Action.TURN_RIGHT,
        ]
        for _ in range(20):
            game.handle(Action.CONFIRM)
            while game.status is GameStatus.PLAYING:
                game.handle(turns[int(policy.integers(4))])
                game.step()
                segments = list(game.snake.segments)
                assert len(set(segments)) == len(segments)
                if game.status is GameStatus.PLAYING:
                    assert game.food not in segments
            game.handle(Action.CONFIRM)


class TestDeterminism:
    def test_same_seed_same_food(self):
        a = Game(GameConfig(seed=5))
        b = Game(GameConfig(seed=5))
        a.handle(Action.CONFIRM)
        b.handle(Action.CONFIRM)
        assert a.food == b.food

    def test_snapshot_is_json_serializable(self, game):
        _playing(game)
        data = game.snapshot().to_dict()
        assert json.loads(json.dumps(data)) == data
        assert data["status"] == "playing"
        assert data["direction"] == "right"
        assert data["snake"][0] == [10, 6]
