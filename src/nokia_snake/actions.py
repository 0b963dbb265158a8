"""Symbolic input actions consumed by the game."""

from __future__ import annotations

import enum

from nokia_snake.snake import Direction


class Action(str, enum.Enum):
    """Device-independent player actions."""

    TURN_UP = "turn-up"
    TURN_DOWN = "turn-down"
    TURN_LEFT = "turn-left"
    TURN_RIGHT = "turn-right"
    PAUSE = "pause"
    CONFIRM = "confirm"

    @property
    def direction(self) -> Direction | None:
        """Return the heading for turn actions, else ``None``."""
        return _TURNS.get(self)


_TURNS: dict[Action, Direction] = {
    Action.TURN_UP: Direction.UP,
    Action.TURN_DOWN: Direction.DOWN,
    Action.TURN_LEFT: Direction.LEFT,
    Action.TURN_RIGHT: Direction.RIGHT,
}

_ALIASES: dict[str, Action] = {
    "up": Action.TURN_UP,
    "down": Action.TURN_DOWN,
    "left": Action.TURN_LEFT,
    "right": Action.TURN_RIGHT,
    "pause-toggle": Action.PAUSE,
    "space": Action.PAUSE,
    "enter": Action.CONFIRM,
}


def parse_action(value: object) -> Action | None:
    """Normalize *value* to an :class:`Action`, or ``None`` if unknown."""
    if isinstance(value, Action):
        return value
    if not isinstance(value, str):
        return None
    key = value.strip().lower().replace("_", "-")
    try:
        return Action(key)
    except ValueError:
        return _ALIASES.get(key)
