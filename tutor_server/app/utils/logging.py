# app/utils/logging.py
# -*- coding: utf-8 -*-
"""
Conversation Tutor Relay — logging utilities
--------------------------------------------
One logging setup for the whole process:
- same format in every module,
- DEBUG when settings.debug is on, INFO otherwise,
- uvicorn access lines and urllib3 connection chatter kept quiet.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    *,
    debug: bool = False,
    level: Optional[int] = None,
) -> None:
    """
    Configure root logging for the process.

    `level` overrides the debug flag when given. Calling this twice only
    adjusts levels on the existing handlers.
    """
    base_level = level if level is not None else (logging.DEBUG if debug else logging.INFO)

    root = logging.getLogger()
    if root.handlers:
        root.setLevel(base_level)
        for h in root.handlers:
            h.setLevel(base_level)
        return

    logging.basicConfig(level=base_level, format=LOG_FORMAT, datefmt=DATE_FORMAT)

    for noisy in ("uvicorn.access", "urllib3"):
        logging.getLogger(noisy).setLevel(os.getenv("TUTOR_NOISY_LOG_LEVEL", "WARNING"))


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
