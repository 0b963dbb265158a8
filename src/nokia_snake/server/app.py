"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from nokia_snake.persistence import HighScoreStore
from nokia_snake.server.routes import router
from nokia_snake.server.session_manager import SessionManager
from nokia_snake.server.websocket import ws_router


def create_app(store: HighScoreStore | None = None) -> FastAPI:
    """Build and return the FastAPI application.

    *store* is shared by every session; it defaults to an in-memory
    store.
    """

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        app.state.session_manager = SessionManager(store=store)
        yield
        await app.state.session_manager.cleanup()

    app = FastAPI(
        title="Nokia Snake API", version="0.1.0", lifespan=_lifespan,
    )
    app.include_router(router)
    app.include_router(ws_router)
    return app
