# app/core/media.py
# -*- coding: utf-8 -*-
"""
Conversation Tutor Relay — Audio / voice helpers
------------------------------------------------
Central place for:
- Which uploaded audio types the transcription endpoint accepts.
- Which file suffix a transient upload gets for each type.
- Which synthesis voices are allowed, and the fallback voice.
- Clamping text before speech synthesis.

These functions are *pure* (no network, no I/O) so they are easy to test.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, Optional

# Types the provider's transcription endpoint understands
# (mp3/mpeg, wav, webm/opus, ogg/opus, mp4/m4a).
ALLOWED_AUDIO_TYPES: FrozenSet[str] = frozenset(
    {
        "audio/mpeg", "audio/mp3", "audio/mpga",
        "audio/wav",
        "audio/webm",
        "audio/ogg",
        "audio/mp4", "audio/m4a",
    }
)

EXTENSION_BY_TYPE: Dict[str, str] = {
    "audio/mpeg": ".mp3",
    "audio/mp3": ".mp3",
    "audio/mpga": ".mp3",
    "audio/wav": ".wav",
    "audio/webm": ".webm",
    "audio/ogg": ".ogg",
    "audio/mp4": ".m4a",
    "audio/m4a": ".m4a",
}

ALLOWED_VOICES = ("nova", "shimmer", "echo", "onyx", "fable", "alloy", "ash", "sage", "coral")
FALLBACK_VOICE = "alloy"


def base_media_type(content_type: Optional[str]) -> str:
    """'Audio/WebM; codecs=opus' -> 'audio/webm'."""
    return (content_type or "").split(";", 1)[0].strip().lower()


def is_allowed_audio_type(content_type: Optional[str]) -> bool:
    return base_media_type(content_type) in ALLOWED_AUDIO_TYPES


def suffix_for(content_type: Optional[str]) -> str:
    """File suffix for a transient upload; "" when the type is unmapped."""
    return EXTENSION_BY_TYPE.get(base_media_type(content_type), "")


def resolve_voice(requested: Optional[str], default: Optional[str] = None) -> str:
    """
    Pick the synthesis voice.

    - `requested` wins when it is an allowed voice (case-insensitive).
    - Otherwise `default` (normally settings.openai_tts_voice) is used,
      as long as it is itself allowed.
    - Otherwise FALLBACK_VOICE.
    """
    for candidate in (requested, default):
        voice = (candidate or "").strip().lower()
        if voice in ALLOWED_VOICES:
            return voice
    return FALLBACK_VOICE


def clamp_tts_text(text: Optional[str], max_chars: int = 1200) -> str:
    return (text or "")[:max_chars]
