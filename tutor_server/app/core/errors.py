# app/core/errors.py
# -*- coding: utf-8 -*-
"""
Conversation Tutor Relay — Error types
--------------------------------------
Routers raise RelayError for anything the caller should see as
`{"error": "<message>"}` with a specific HTTP status. The exception
handler in app/main.py does the rendering.
"""

from __future__ import annotations

from typing import Optional


class RelayError(Exception):
    """An error that maps directly onto an HTTP response."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class ProviderError(RelayError):
    """
    Raised when a call to the AI provider fails.

    `status_code` is the provider-reported HTTP status when there was a
    response, otherwise 500 (network error, timeout, malformed body).
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(status_code or 500, message)
        self.remote_status = status_code
