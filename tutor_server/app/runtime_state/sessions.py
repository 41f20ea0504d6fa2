# app/runtime_state/sessions.py
# -*- coding: utf-8 -*-
"""
Conversation Tutor Relay — Runtime Session State
------------------------------------------------

In-memory session store for the /ask endpoint.

Purpose
~~~~~~~
- Track per-session conversation history so the tutor can hold multi-turn
  conversations without mixing different students.
- Keep memory bounded: sessions idle for longer than `ttl_s` expire, and
  when more than `max_sessions` are held the least-recently-used one goes.

Design notes
~~~~~~~~~~~~
- Nothing is written to disk; a restart forgets every conversation.
- Single process only. Scaling out would need an external store.
- `get()` hands out a copy of the history. Callers modify the copy and
  `put()` it back, holding `lock(session_id)` across the whole
  read-modify-write so concurrent requests for one session do not
  overwrite each other.
"""

from __future__ import annotations

import asyncio
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Literal, Optional

from pydantic import BaseModel

from app.core.config import settings
from app.utils import get_logger


logger = get_logger("tutor.runtime_state")


# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------


TurnRole = Literal["system", "user", "assistant"]


class SessionTurn(BaseModel):
    """One turn in the conversation history."""

    role: TurnRole
    content: str

    def to_message(self) -> Dict[str, str]:
        """Provider chat message form: {"role": ..., "content": ...}."""
        return {"role": self.role, "content": self.content}


@dataclass
class _Entry:
    turns: List[SessionTurn]
    last_seen: float


# ---------------------------------------------------------------------------
# Session store implementation
# ---------------------------------------------------------------------------


class SessionStore:
    """
    In-memory session store with LRU + TTL eviction.

    Parameters
    ----------
    ttl_s:
        Seconds a session may stay idle before it is dropped. 0 disables.
    max_sessions:
        Upper bound on stored sessions; the least recently used one is
        dropped when it is exceeded. 0 disables.
    clock:
        Monotonic time source, replaceable in tests.
    """

    def __init__(
        self,
        ttl_s: float = 0.0,
        max_sessions: int = 0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_s = ttl_s
        self.max_sessions = max_sessions
        self._clock = clock
        self._entries: "OrderedDict[str, _Entry]" = OrderedDict()
        self._locks: Dict[str, asyncio.Lock] = {}

    # ------------------------------------------------------------------
    # Eviction helpers
    # ------------------------------------------------------------------

    def _expired(self, entry: _Entry, now: float) -> bool:
        return self.ttl_s > 0 and now - entry.last_seen > self.ttl_s

    def _evict(self, session_id: str, reason: str) -> None:
        self._entries.pop(session_id, None)
        lock = self._locks.get(session_id)
        if lock is not None and not lock.locked():
            del self._locks[session_id]
        logger.info("[SessionStore] Evicted session %s (%s)", session_id, reason)

    def prune_expired(self) -> int:
        """Drop every session idle for longer than ttl_s. Returns the count."""
        if self.ttl_s <= 0:
            return 0
        now = self._clock()
        stale = [sid for sid, entry in self._entries.items() if self._expired(entry, now)]
        for sid in stale:
            self._evict(sid, "expired")
        return len(stale)

    def _enforce_capacity(self) -> None:
        if self.max_sessions <= 0:
            return
        while len(self._entries) > self.max_sessions:
            oldest = next(iter(self._entries))
            self._evict(oldest, "capacity")

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get(self, session_id: str) -> Optional[List[SessionTurn]]:
        """Return a copy of the session's turns, or None if unknown/expired."""
        entry = self._entries.get(session_id)
        if entry is None:
            return None

        now = self._clock()
        if self._expired(entry, now):
            self._evict(session_id, "expired")
            return None

        entry.last_seen = now
        self._entries.move_to_end(session_id)
        return list(entry.turns)

    def put(self, session_id: str, turns: List[SessionTurn]) -> None:
        """Store `turns` as the session's history (creating it if needed)."""
        if session_id not in self._entries:
            logger.info("[SessionStore] Creating session %s", session_id)

        self._entries[session_id] = _Entry(turns=list(turns), last_seen=self._clock())
        self._entries.move_to_end(session_id)

        self.prune_expired()
        self._enforce_capacity()

    def delete(self, session_id: str) -> None:
        if session_id in self._entries:
            self._evict(session_id, "deleted")

    def lock(self, session_id: str) -> asyncio.Lock:
        """Per-session lock serializing read-modify-write of one history."""
        lock = self._locks.get(session_id)
        if lock is None:
            lock = self._locks[session_id] = asyncio.Lock()
        return lock

    def clear(self) -> None:
        self._entries.clear()
        self._locks.clear()

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def to_dict(self) -> Dict[str, Any]:
        """All sessions as plain dicts (for debugging)."""
        return {
            sid: [turn.model_dump() for turn in entry.turns]
            for sid, entry in self._entries.items()
        }


# Global instance used by the rest of the app
session_store = SessionStore(
    ttl_s=settings.session_ttl_s,
    max_sessions=settings.max_sessions,
)
