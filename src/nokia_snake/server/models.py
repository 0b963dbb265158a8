"""Pydantic models for API request/response schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from nokia_snake.game import GameStatus


class CreateSessionRequest(BaseModel):
    """Request body for POST /sessions."""

    seed: int | None = Field(default=None, ge=0)
    frame_rate: int = Field(default=60, ge=1, le=120)


class ActionRequest(BaseModel):
    """Request body for POST /sessions/{session_id}/actions."""

    action: str = Field(min_length=1, max_length=32)


class SessionSummary(BaseModel):
    """Compact session info for list endpoints."""

    session_id: str
    status: GameStatus
    score: int
    high_score: int
    frame_rate: int


class ActionResponse(BaseModel):
    """Result of applying one action."""

    accepted: bool
    state: dict
