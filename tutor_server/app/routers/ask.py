# app/routers/ask.py
# -*- coding: utf-8 -*-
"""
Conversation Tutor Relay — /ask router
--------------------------------------
Text chat with the tutor.

Flow:
  HTTP POST /ask  ({"message": "...", "sessionId": "..."?})
    -> resolve the session (new one gets the tutor system prompt)
    -> append the user turn, trim, store
    -> provider chat completion with the whole trimmed history
    -> append the assistant turn, trim, store
    -> {"answer": "...", "sessionId": "..."}

The per-session lock is held for the whole exchange, so two requests for
the same conversation are answered one after the other.
"""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Body, Query
from fastapi.concurrency import run_in_threadpool

from app.core.config import settings
from app.core.errors import RelayError
from app.core.history import trim_history
from app.core.prompts import get_system_prompt
from app.models.ask_request import AskRequest
from app.models.responses import AskResponse, ErrorResponse
from app.providers.openai_api import create_chat_completion
from app.runtime_state import SessionTurn, session_store

router = APIRouter(tags=["chat"])
logger = logging.getLogger(__name__)


def new_session_id() -> str:
    return uuid.uuid4().hex


@router.post(
    "/ask",
    response_model=AskResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def ask_endpoint(
    payload: Optional[AskRequest] = Body(default=None),
    session_id_param: Optional[str] = Query(default=None, alias="sessionId"),
) -> AskResponse:
    """
    Relay one student message to the chat model and return its answer.

    `sessionId` may come in the body or as a query parameter (body wins).
    An unknown id starts a fresh conversation under that id.
    """
    text = ((payload.message if payload else None) or "").strip()
    if not text:
        raise RelayError(400, "Empty message")

    session_id = (payload.session_id if payload else None) or session_id_param or new_session_id()

    async with session_store.lock(session_id):
        turns = session_store.get(session_id)
        if turns is None:
            turns = [SessionTurn(role="system", content=get_system_prompt())]

        turns.append(SessionTurn(role="user", content=text))
        turns = trim_history(turns, settings.max_history_turns)
        session_store.put(session_id, turns)

        logger.info("[/ask] session_id=%s turns=%d text_chars=%d", session_id, len(turns), len(text))

        answer = await run_in_threadpool(
            create_chat_completion,
            [turn.to_message() for turn in turns],
        )

        turns.append(SessionTurn(role="assistant", content=answer))
        turns = trim_history(turns, settings.max_history_turns)
        session_store.put(session_id, turns)

    logger.info("[/ask] session_id=%s answer_chars=%d", session_id, len(answer))
    return AskResponse(answer=answer, session_id=session_id)
