# app/core/config.py
# -*- coding: utf-8 -*-
"""
Conversation Tutor Relay — Configuration
----------------------------------------
Central configuration for the relay server, including:

- app metadata and listen address
- filesystem paths (prompts, static front-end)
- provider (OpenAI-compatible REST API) credentials and model names
- chat / speech parameters
- session store bounds

Values come from the environment or from a `.env` file at the project root.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------

# This file is: tutor_server/app/core/config.py
APP_DIR: Path = Path(__file__).resolve().parents[1]   # .../tutor_server/app
ROOT_DIR: Path = APP_DIR.parent                       # .../tutor_server

PROMPTS_DIR: Path = APP_DIR / "prompts"
PUBLIC_DIR: Path = APP_DIR / "public"


# ---------------------------------------------------------------------------
# Settings model
# ---------------------------------------------------------------------------


class Settings(BaseSettings):
    """
    Global configuration for the relay.

    Instantiated once at import time as `settings` and used everywhere.
    """

    model_config = SettingsConfigDict(
        env_file=ROOT_DIR / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- App / server basics -----------------------------------------------
    app_name: str = "Conversation Tutor Relay"
    environment: Literal["development", "production", "test"] = "development"
    debug: bool = False

    api_host: str = "0.0.0.0"
    port: int = 3000

    # --- Filesystem paths ---------------------------------------------------
    prompts_dir: Path = PROMPTS_DIR
    public_dir: Path = PUBLIC_DIR

    # Directory for transient audio uploads (None -> system temp dir).
    upload_tmp_dir: Path | None = None

    # --- Provider (OpenAI-compatible REST API) ------------------------------
    # ENV: OPENAI_API_KEY=sk-...
    openai_api_key: str | None = Field(
        default=None,
        description="Provider API key (env: OPENAI_API_KEY). Required.",
    )
    openai_base_url: str = "https://api.openai.com/v1"
    openai_model: str = "gpt-4o-mini"
    openai_transcribe_model: str = "gpt-4o-transcribe"
    openai_tts_model: str = "tts-1"
    openai_tts_voice: str = "alloy"
    openai_timeout_s: float = 60.0

    # --- Chat parameters ----------------------------------------------------
    chat_temperature: float = 0.8
    chat_max_tokens: int = 500

    # --- Limits -------------------------------------------------------------
    max_history_turns: int = 20      # turns kept besides the system prompt
    max_tts_chars: int = 1200        # longer TTS input is cut

    # --- Session store bounds (0 disables the bound) ------------------------
    session_ttl_s: float = 7200.0
    max_sessions: int = 5000


# Single global settings instance used by the rest of the app.
settings = Settings()
