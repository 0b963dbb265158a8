"""In-memory session registry and per-session frame loops."""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from dataclasses import dataclass, field, replace

from starlette.websockets import WebSocket, WebSocketState

from nokia_snake.actions import Action
from nokia_snake.config import GameConfig
from nokia_snake.game import Game, Snapshot
from nokia_snake.loop import LoopDriver, QueueInput
from nokia_snake.persistence import HighScoreStore, MemoryHighScoreStore
from nokia_snake.server.models import SessionSummary

logger = logging.getLogger(__name__)

_MAX_SESSIONS = 64


class SnapshotRenderer:
    """Keeps the latest snapshot that differs from the last one drawn."""

    def __init__(self) -> None:
        self._last: Snapshot | None = None
        self._pending: Snapshot | None = None

    def draw(self, snapshot: Snapshot) -> None:
        if snapshot != self._last:
            self._last = snapshot
            self._pending = snapshot

    def take(self) -> Snapshot | None:
        """Return and clear the snapshot awaiting broadcast."""
        pending, self._pending = self._pending, None
        return pending


@dataclass
class Session:
    """All state for one single-player session."""

    session_id: str
    game: Game
    driver: LoopDriver
    inputs: QueueInput
    renderer: SnapshotRenderer
    sockets: list[WebSocket] = field(default_factory=list)
    created_at: float = field(default_factory=time.monotonic)
    closed: bool = False
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    _task: asyncio.Task | None = field(default=None, repr=False)

    @property
    def frame_rate(self) -> int:
        return self.game.config.frame_rate

    def summary(self) -> SessionSummary:
        state = self.game.state
        return SessionSummary(
            session_id=self.session_id,
            status=state.status,
            score=state.score,
            high_score=state.high_score,
            frame_rate=self.frame_rate,
        )


class SessionManager:
    """Central registry of running sessions.

    All sessions share one high-score store, so a record set in any
    session is visible to every later one.
    """

    def __init__(
        self,
        store: HighScoreStore | None = None,
        config: GameConfig | None = None,
        max_sessions: int = _MAX_SESSIONS,
    ) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1.")
        self.store: HighScoreStore = (
            store if store is not None else MemoryHighScoreStore()
        )
        self.config = config or GameConfig()
        self._sessions: dict[str, Session] = {}
        self._max_sessions = max_sessions

    def create_session(
        self, seed: int | None = None, frame_rate: int | None = None,
    ) -> Session:
        """Create a session in MENU and start its frame loop.

        Must be called from within a running event loop.
        """
        if len(self._sessions) >= self._max_sessions:
            raise ValueError("Session limit reached. Try again later.")

        overrides: dict = {"seed": seed}
        if frame_rate is not None:
            overrides["frame_rate"] = frame_rate
        game = Game(replace(self.config, **overrides), store=self.store)

        inputs = QueueInput()
        renderer = SnapshotRenderer()
        session = Session(
            session_id=uuid.uuid4().hex[:12],
            game=game,
            driver=LoopDriver(game, renderer, inputs),
            inputs=inputs,
            renderer=renderer,
        )
        self._sessions[session.session_id] = session
        session._task = asyncio.create_task(self._frame_loop(session))
        logger.info("Session %s created.", session.session_id)
        return session

    def get_session(self, session_id: str) -> Session | None:
        return self._sessions.get(session_id)

    def list_sessions(self) -> list[SessionSummary]:
        return [s.summary() for s in self._sessions.values()]

    async def apply_action(self, session: Session, action: Action) -> bool:
        """Apply *action* immediately under the session lock."""
        async with session.lock:
            return session.game.handle(action)

    async def close_session(self, session_id: str) -> bool:
        """Stop a session's loop and disconnect its sockets."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.closed = True
        task = session._task
        if task is not None and not task.done():
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)
        await self._close_connections(session)
        logger.info("Session %s closed.", session_id)
        return True

    async def _frame_loop(self, session: Session) -> None:
        """Run frames at the session frame rate, broadcasting changes."""
        interval = 1.0 / session.frame_rate
        try:
            while not session.closed:
                async with session.lock:
                    session.driver.frame()
                snapshot = session.renderer.take()
                if snapshot is not None:
                    await self._broadcast(session, snapshot)
                await asyncio.sleep(interval)
        except asyncio.CancelledError:
            logger.info("Frame loop cancelled for session %s.", session.session_id)
        except Exception:
            logger.exception("Frame loop error in session %s.", session.session_id)
            session.closed = True
        finally:
            if session.closed:
                await self._discard(session)

    async def _discard(self, session: Session) -> None:
        """Drop a dead session from the registry and disconnect it."""
        if self._sessions.get(session.session_id) is session:
            del self._sessions[session.session_id]
            await self._close_connections(session)
            logger.info(
                "Session %s removed after its frame loop stopped.",
                session.session_id,
            )

    async def _broadcast(self, session: Session, snapshot: Snapshot) -> None:
        """Send a snapshot to every connected socket."""
        payload = json.dumps(snapshot.to_dict(), separators=(",", ":"))
        dead: list[WebSocket] = []

        # Iterate over a copy so disconnect handlers can mutate the list.
        for ws in list(session.sockets):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(payload)
            except Exception:
                dead.append(ws)

        for ws in dead:
            if ws in session.sockets:
                session.sockets.remove(ws)

    async def _close_connections(self, session: Session) -> None:
        for ws in list(session.sockets):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.close(code=1000, reason="Session closed.")
            except Exception:
                logger.warning(
                    "Failed closing socket in session %s.", session.session_id,
                )
        session.sockets.clear()

    async def cleanup(self) -> None:
        """Stop every session."""
        for session_id in list(self._sessions):
            await self.close_session(session_id)
        logger.info("SessionManager cleanup complete.")
