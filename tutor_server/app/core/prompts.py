# app/core/prompts.py
# -*- coding: utf-8 -*-
"""
Conversation Tutor Relay — Prompt loading
-----------------------------------------
The tutor's behaviour (tone, language switching, correction policy) lives in
app/prompts/system_prompt.txt, not in code. This module reads it once and
caches it.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional

from app.core.config import settings

logger = logging.getLogger(__name__)

SYSTEM_PROMPT_FILE = "system_prompt.txt"

# Used only if the prompt file is missing or empty.
FALLBACK_SYSTEM_PROMPT = (
    "You are a friendly English (UK) teacher for elementary students. "
    "Keep replies short, correct only real mistakes, and always end with "
    "one simple follow-up question in English."
)

_PROMPT_CACHE: Dict[str, str] = {}


def read_prompt_file(filename: str, prompts_dir: Optional[Path] = None) -> str:
    """
    Read a prompt file from `prompts_dir` (default settings.prompts_dir)
    with simple caching.

    If the file does not exist or cannot be read, returns an empty string
    and logs a warning.
    """
    base = prompts_dir or settings.prompts_dir
    path: Path = base / filename
    key = str(path)
    if key in _PROMPT_CACHE:
        return _PROMPT_CACHE[key]

    try:
        text = path.read_text(encoding="utf-8").strip()
    except OSError as exc:
        logger.warning("Prompt file not readable: %s (%s)", path, exc)
        text = ""

    _PROMPT_CACHE[key] = text
    return text


def get_system_prompt() -> str:
    """The tutor system instruction sent as the first turn of every session."""
    return read_prompt_file(SYSTEM_PROMPT_FILE) or FALLBACK_SYSTEM_PROMPT


def clear_prompt_cache() -> None:
    _PROMPT_CACHE.clear()
