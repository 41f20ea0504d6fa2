# app/utils/__init__.py
# -*- coding: utf-8 -*-
"""
Conversation Tutor Relay — Utility toolbox
------------------------------------------
- logging : central logging configuration
- timers  : Stopwatch for timing provider calls

    from app.utils import setup_logging, get_logger, Stopwatch
"""

from __future__ import annotations

from .logging import (  # noqa: F401
    setup_logging,
    get_logger,
)

from .timers import (  # noqa: F401
    Stopwatch,
)
