# app/providers/openai_api.py
# -*- coding: utf-8 -*-
"""
Conversation Tutor Relay — AI provider client (OpenAI-compatible REST API)
-------------------------------------------------------------------------
This module is the ONLY place that knows how to talk to the provider.

Responsibilities:
- Build the HTTP requests (URL, auth header, JSON / multipart payload).
- Parse the responses (completion text, transcription text, audio bytes).
- Turn every failure into ProviderError, carrying the provider's HTTP
  status when there was one and the provider's own error message.

The functions are blocking (requests). Routers call them through
`run_in_threadpool` so the event loop keeps serving other requests.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import requests

from app.core.config import settings
from app.core.errors import ProviderError
from app.utils import Stopwatch

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Low-level helpers
# ---------------------------------------------------------------------------


def _url(path: str) -> str:
    return settings.openai_base_url.rstrip("/") + "/" + path.lstrip("/")


def _auth_headers() -> Dict[str, str]:
    if not settings.openai_api_key:
        raise ProviderError("Provider API key is missing.")
    return {"Authorization": f"Bearer {settings.openai_api_key}"}


def extract_error_message(resp: requests.Response) -> str:
    """
    Best-effort error text from a failed provider response.

    Tries `{"error": {"message": ...}}`, then `{"error": "..."}`, then a
    short preview of the raw body, then `HTTP <status>`.
    """
    try:
        data = resp.json()
    except ValueError:
        data = None

    if isinstance(data, dict):
        err = data.get("error")
        if isinstance(err, dict) and err.get("message"):
            return str(err["message"])
        if isinstance(err, str) and err:
            return err

    preview = (resp.text or "")[:200].replace("\n", " ").strip()
    return preview or f"HTTP {resp.status_code}"


def _post(path: str, label: str, **kwargs: Any) -> requests.Response:
    """POST to the provider; raise ProviderError on transport or HTTP failure."""
    headers = _auth_headers()
    headers.update(kwargs.pop("headers", {}) or {})

    try:
        with Stopwatch(label, logger, level=logging.DEBUG):
            resp = requests.post(
                _url(path),
                headers=headers,
                timeout=settings.openai_timeout_s,
                **kwargs,
            )
    except requests.RequestException as exc:
        logger.warning("%s: HTTP error: %s", label, exc)
        raise ProviderError(str(exc) or f"{label} failed") from exc

    if resp.status_code >= 400:
        message = extract_error_message(resp)
        logger.warning("%s: provider returned %s: %s", label, resp.status_code, message)
        raise ProviderError(message, status_code=resp.status_code)

    return resp


def _json_body(resp: requests.Response, label: str) -> Dict[str, Any]:
    try:
        data = resp.json()
    except ValueError as exc:
        raise ProviderError(f"{label}: provider returned non-JSON response.") from exc
    if not isinstance(data, dict):
        raise ProviderError(f"{label}: unexpected response shape.")
    return data


# ---------------------------------------------------------------------------
# Public operations
# ---------------------------------------------------------------------------


def create_chat_completion(
    messages: List[Dict[str, str]],
    *,
    model: Optional[str] = None,
    temperature: Optional[float] = None,
    max_tokens: Optional[int] = None,
) -> str:
    """
    Send the conversation to /chat/completions and return the first
    choice's text, stripped ("" when the provider returned none).

    Parameters
    ----------
    messages:
        List of {"role": "system"|"user"|"assistant", "content": "..."} dicts.
    """
    payload: Dict[str, Any] = {
        "model": model or settings.openai_model,
        "messages": messages,
        "temperature": settings.chat_temperature if temperature is None else temperature,
        "max_tokens": max_tokens or settings.chat_max_tokens,
    }
    resp = _post("chat/completions", "chat completion", json=payload)
    data = _json_body(resp, "chat completion")

    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        content = None

    return content.strip() if isinstance(content, str) else ""


def create_transcription(
    audio_path: Path,
    content_type: Optional[str] = None,
    *,
    model: Optional[str] = None,
) -> str:
    """Upload an audio file to /audio/transcriptions and return its text."""
    audio_path = Path(audio_path)
    with audio_path.open("rb") as fh:
        resp = _post(
            "audio/transcriptions",
            "transcription",
            files={"file": (audio_path.name, fh, content_type or "application/octet-stream")},
            data={"model": model or settings.openai_transcribe_model},
        )
    data = _json_body(resp, "transcription")
    text = data.get("text")
    return text if isinstance(text, str) else ""


def create_speech(
    text: str,
    voice: str,
    *,
    model: Optional[str] = None,
    response_format: str = "mp3",
) -> bytes:
    """Synthesize `text` with /audio/speech and return the raw audio bytes."""
    payload = {
        "model": model or settings.openai_tts_model,
        "voice": voice,
        "input": text,
        "response_format": response_format,
    }
    resp = _post("audio/speech", "speech synthesis", json=payload)
    return resp.content
