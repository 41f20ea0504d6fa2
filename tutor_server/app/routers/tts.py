# app/routers/tts.py
# -*- coding: utf-8 -*-
"""
Conversation Tutor Relay — /tts router
--------------------------------------
Reads the tutor's answers aloud.

    GET /tts?text=Hello&voice=nova  ->  audio/mpeg bytes (never cached)
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Query
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response

from app.core.config import settings
from app.core.errors import RelayError
from app.core.media import clamp_tts_text, resolve_voice
from app.models.responses import ErrorResponse
from app.providers.openai_api import create_speech

router = APIRouter(tags=["speech"])
logger = logging.getLogger(__name__)

NO_CACHE_HEADERS = {"Cache-Control": "no-store, max-age=0"}


@router.get(
    "/tts",
    response_class=Response,
    responses={
        200: {"content": {"audio/mpeg": {}}},
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def tts_endpoint(
    text: Optional[str] = Query(default=None, description="Text to speak (cut at max_tts_chars)."),
    voice: Optional[str] = Query(default=None, description="Voice name; unknown names use the default."),
) -> Response:
    spoken = clamp_tts_text(text, settings.max_tts_chars)
    if not spoken:
        raise RelayError(400, "Missing ?text=")

    chosen_voice = resolve_voice(voice, settings.openai_tts_voice)
    logger.info("[/tts] voice=%s (requested=%r) chars=%d", chosen_voice, voice, len(spoken))

    audio = await run_in_threadpool(create_speech, spoken, chosen_voice)
    return Response(content=audio, media_type="audio/mpeg", headers=NO_CACHE_HEADERS)
