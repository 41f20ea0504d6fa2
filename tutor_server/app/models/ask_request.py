# app/models/ask_request.py
# -*- coding: utf-8 -*-
"""
Conversation Tutor Relay — AskRequest model
-------------------------------------------
JSON body for POST /ask.

The browser sends camelCase (`sessionId`); Python code uses snake_case.
`message` is optional at the model level so that an empty or missing
message is answered with our own 400 `{"error": "Empty message"}` instead
of a validation error.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AskRequest(BaseModel):
    """
    Fields
    ------
    message:
        What the student said or typed. Whitespace is stripped by the router.
    session_id:
        Conversation token returned by a previous /ask call. Omit it to start
        a new conversation.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {"message": "Hello! I am fine, and you?", "sessionId": "5f0c2d7e9b2a4c1e8f3a6b7c9d0e1f2a"},
                {"message": "Hi"},
            ]
        },
    )

    message: Optional[str] = Field(
        default=None,
        description="Student utterance in plain text.",
    )
    session_id: Optional[str] = Field(
        default=None,
        alias="sessionId",
        description="Conversation token from a previous reply.",
    )
