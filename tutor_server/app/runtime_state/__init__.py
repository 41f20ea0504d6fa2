"""
Runtime state package for the tutor relay.

Tracks per-session conversation history so the tutor can hold multi-turn
conversations without mixing students.

Typical usage (see app/routers/ask.py):

    from app.runtime_state import session_store

    async with session_store.lock(session_id):
        turns = session_store.get(session_id) or [system_turn]
        turns.append(SessionTurn(role="user", content=text))
        session_store.put(session_id, trim_history(turns))
"""

from .sessions import (
    SessionTurn,
    SessionStore,
    session_store,
)

__all__ = [
    "SessionTurn",
    "SessionStore",
    "session_store",
]
