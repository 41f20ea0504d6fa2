# app/routers/stt.py
# -*- coding: utf-8 -*-
"""
Conversation Tutor Relay — /stt router
--------------------------------------
Speech-to-text for the browser's microphone recordings.

Flow:
  HTTP POST /stt  (multipart field "audio")
    -> reject missing files and non-audio types (400, provider not called)
    -> write the bytes to a uniquely named temp file with a matching suffix
    -> provider transcription
    -> {"text": "..."}; the temp file is removed whatever happens
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, File, UploadFile
from fastapi.concurrency import run_in_threadpool

from app.core.config import settings
from app.core.errors import RelayError
from app.core.media import base_media_type, is_allowed_audio_type, suffix_for
from app.models.responses import ErrorResponse, TranscriptionResponse
from app.providers.openai_api import create_transcription

router = APIRouter(tags=["speech"])
logger = logging.getLogger(__name__)


def write_transient_file(data: bytes, suffix: str) -> Path:
    """Write `data` to a new temp file and return its path."""
    tmp_dir = settings.upload_tmp_dir
    if tmp_dir is not None:
        Path(tmp_dir).mkdir(parents=True, exist_ok=True)

    with tempfile.NamedTemporaryFile(
        prefix="stt-upload-",
        suffix=suffix,
        dir=tmp_dir,
        delete=False,
    ) as fh:
        fh.write(data)
        return Path(fh.name)


def remove_transient_file(path: Path) -> None:
    try:
        os.unlink(path)
    except OSError as exc:
        logger.warning("[/stt] could not remove temp file %s: %s", path, exc)


@router.post(
    "/stt",
    response_model=TranscriptionResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def stt_endpoint(audio: Optional[UploadFile] = File(default=None)) -> TranscriptionResponse:
    if audio is None:
        raise RelayError(400, "No audio uploaded")

    data = await audio.read()
    if not data:
        raise RelayError(400, "No audio uploaded")

    content_type = audio.content_type
    logger.info("[/stt] content_type=%s bytes=%d", content_type, len(data))

    if not is_allowed_audio_type(content_type):
        raise RelayError(400, "Unsupported file format")

    tmp_path = await run_in_threadpool(write_transient_file, data, suffix_for(content_type))
    try:
        text = await run_in_threadpool(
            create_transcription,
            tmp_path,
            base_media_type(content_type),
        )
    finally:
        remove_transient_file(tmp_path)

    return TranscriptionResponse(text=text)
