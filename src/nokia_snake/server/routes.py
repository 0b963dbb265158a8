"""REST API route handlers for session lifecycle and input."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, Response

from nokia_snake.actions import parse_action
from nokia_snake.server.models import (
    ActionRequest,
    ActionResponse,
    CreateSessionRequest,
    SessionSummary,
)
from nokia_snake.server.session_manager import Session, SessionManager

router = APIRouter(prefix="/sessions", tags=["sessions"])


def _get_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


def _require_session(manager: SessionManager, session_id: str) -> Session:
    session = manager.get_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found.")
    return session


@router.post("", status_code=201)
async def create_session(
    request: Request, body: CreateSessionRequest | None = None,
) -> SessionSummary:
    """Create a new session waiting in the menu."""
    body = body or CreateSessionRequest()
    manager = _get_manager(request)
    try:
        session = manager.create_session(
            seed=body.seed, frame_rate=body.frame_rate,
        )
    except ValueError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return session.summary()


@router.get("")
async def list_sessions(request: Request) -> list[SessionSummary]:
    """List all running sessions."""
    return _get_manager(request).list_sessions()


@router.get("/{session_id}")
async def get_session(session_id: str, request: Request) -> dict:
    """Return the current snapshot of a session."""
    session = _require_session(_get_manager(request), session_id)
    return session.game.snapshot().to_dict()


@router.post("/{session_id}/actions")
async def post_action(
    session_id: str, body: ActionRequest, request: Request,
) -> ActionResponse:
    """Apply one action; unknown action names are ignored."""
    manager = _get_manager(request)
    session = _require_session(manager, session_id)
    action = parse_action(body.action)
    accepted = False
    if action is not None:
        accepted = await manager.apply_action(session, action)
    return ActionResponse(
        accepted=accepted, state=session.game.snapshot().to_dict(),
    )


@router.delete("/{session_id}", status_code=204)
async def delete_session(session_id: str, request: Request) -> Response:
    """Stop a session."""
    if not await _get_manager(request).close_session(session_id):
        raise HTTPException(status_code=404, detail="Session not found.")
    return Response(status_code=204)
