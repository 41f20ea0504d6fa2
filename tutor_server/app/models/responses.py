# app/models/responses.py
# -*- coding: utf-8 -*-
"""
Conversation Tutor Relay — response models
------------------------------------------
Shapes returned to the browser. Field names are camelCase on the wire.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class AskResponse(BaseModel):
    """Reply from POST /ask. The client must send `sessionId` back next time."""

    model_config = ConfigDict(populate_by_name=True)

    answer: str
    session_id: str = Field(alias="sessionId")


class TranscriptionResponse(BaseModel):
    """Reply from POST /stt."""

    text: str = ""


class ErrorResponse(BaseModel):
    """Body of every 4xx/5xx produced by the relay."""

    error: str


class HealthResponse(BaseModel):
    ok: bool = True
