"""Frame-driven host loop and the capabilities it plugs together."""

from __future__ import annotations

import asyncio
import logging
import time
from collections import deque
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from nokia_snake.actions import Action
    from nokia_snake.game import Game, Snapshot

logger = logging.getLogger(__name__)


class Renderer(Protocol):
    """Receives one snapshot per frame."""

    def draw(self, snapshot: Snapshot) -> None: ...


class InputSource(Protocol):
    """Yields the actions received since the previous poll."""

    def poll(self) -> list[Action | str]: ...


class NullRenderer:
    """Discards every frame."""

    def draw(self, snapshot: Snapshot) -> None:
        pass


class QueueInput:
    """FIFO input source fed by :meth:`push`."""

    def __init__(self, actions: Iterable[Action | str] = ()) -> None:
        self._queue: deque[Action | str] = deque(actions)

    def push(self, action: Action | str) -> None:
        self._queue.append(action)

    def poll(self) -> list[Action | str]:
        drained = list(self._queue)
        self._queue.clear()
        return drained

    def __len__(self) -> int:
        return len(self._queue)


class LoopDriver:
    """Drives a :class:`Game` from a monotonic clock.

    Every :meth:`frame` drains pending input, advances the simulation
    by the wall time since the previous frame and hands a snapshot to
    the renderer. Rendering happens every frame; ticks only when the
    game's interval has elapsed.
    """

    def __init__(
        self,
        game: Game,
        renderer: Renderer | None = None,
        input_source: InputSource | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.game = game
        self.renderer = renderer if renderer is not None else NullRenderer()
        self.input_source = input_source
        self.clock = clock
        self.frames = 0
        self._last: float | None = None

    def frame(self, now: float | None = None) -> None:
        """Process one frame at time *now* (seconds)."""
        if now is None:
            now = self.clock()
        elapsed_ms = 0.0 if self._last is None else (now - self._last) * 1000.0
        self._last = now

        if self.input_source is not None:
            for action in self.input_source.poll():
                self.game.handle(action)

        self.game.advance(max(elapsed_ms, 0.0))
        self.renderer.draw(self.game.snapshot())
        self.frames += 1

    async def run(self, stop_event: asyncio.Event | None = None) -> None:
        """Run frames at the configured frame rate until stopped."""
        interval = 1.0 / self.game.config.frame_rate
        try:
            while stop_event is None or not stop_event.is_set():
                self.frame()
                await asyncio.sleep(interval)
        except asyncio.CancelledError:
            logger.info("Loop cancelled after %d frames.", self.frames)
        except Exception:
            logger.exception("Loop crashed after %d frames.", self.frames)
            raise
