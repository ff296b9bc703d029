"""
ReelChat — Session Manager

In-memory session store for chat conversations. Each session keeps its
transcript and the latest recommendation list. Nothing is persisted.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

from reelchat.config import settings
from reelchat.models import ConversationTurn, MovieRecord, SessionContext

GREETING = (
    "Hi! What are you in the mood for today? Tell me about a movie or series "
    "you like, and I'll find your next favorite."
)

# ── In-memory store ───────────────────────────────────────

_sessions: Dict[str, SessionContext] = {}
_timestamps: Dict[str, datetime] = {}


def _now() -> datetime:
    return datetime.now(timezone.utc)


def get_or_create_session(session_id: Optional[str] = None) -> SessionContext:
    """Return existing session or create a new one (greeting included)."""
    if session_id and session_id in _sessions:
        _timestamps[session_id] = _now()
        return _sessions[session_id]

    new_id = session_id or str(uuid.uuid4())
    ctx = SessionContext(
        session_id=new_id,
        turns=[ConversationTurn(role="assistant", content=GREETING)],
    )
    _sessions[new_id] = ctx
    _timestamps[new_id] = _now()
    return ctx


def append_turn(ctx: SessionContext, role: str, content: str) -> ConversationTurn:
    """Append one turn to the transcript. Turns are never removed."""
    turn = ConversationTurn(role=role, content=content)
    ctx.turns.append(turn)
    return turn


def replace_recommendations(ctx: SessionContext, movies: List[MovieRecord]) -> None:
    ctx.recommendations = list(movies)


def get_session(session_id: str) -> Optional[SessionContext]:
    """Get a session by ID."""
    return _sessions.get(session_id)


def delete_session(session_id: str) -> bool:
    """Delete a session. Returns True if it existed."""
    existed = session_id in _sessions
    _sessions.pop(session_id, None)
    _timestamps.pop(session_id, None)
    return existed


def cleanup_expired(ttl: Optional[timedelta] = None) -> int:
    """Remove sessions idle longer than TTL. Returns count removed."""
    ttl = ttl if ttl is not None else timedelta(hours=settings.session_ttl_hours)
    now = _now()
    expired = [sid for sid, ts in _timestamps.items() if now - ts > ttl]
    for sid in expired:
        _sessions.pop(sid, None)
        _timestamps.pop(sid, None)
    return len(expired)


def clear_all() -> None:
    _sessions.clear()
    _timestamps.clear()
