# app/core/history.py
# -*- coding: utf-8 -*-
"""
Conversation Tutor Relay — History trimming
-------------------------------------------
Keeps a conversation inside the context window:

- a leading system turn (the tutor instructions) is always kept, once;
- of the remaining turns only the newest `max_turns` survive.

Pure function (no I/O) so it is easy to test.
"""

from __future__ import annotations

from typing import Any, List, Sequence, TypeVar

T = TypeVar("T")


def _role_of(turn: Any) -> Any:
    if isinstance(turn, dict):
        return turn.get("role")
    return getattr(turn, "role", None)


def trim_history(turns: Sequence[T], max_turns: int = 20) -> List[T]:
    """
    Return a new list: the leading system turn (if any) followed by the
    last `max_turns` of the rest, in their original order.

    Turns may be SessionTurn models or plain `{"role", "content"}` dicts.
    """
    if not turns:
        return list(turns)

    head: List[T] = [turns[0]] if _role_of(turns[0]) == "system" else []
    rest = list(turns[len(head):])

    if max_turns <= 0:
        return head
    return head + rest[-max_turns:]
