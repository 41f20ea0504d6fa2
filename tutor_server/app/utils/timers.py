# app/utils/timers.py
# -*- coding: utf-8 -*-
"""
Conversation Tutor Relay — timing utilities
-------------------------------------------
Stopwatch for logging how long provider round-trips take:

    with Stopwatch("chat completion", logger) as sw:
        ...
    sw.elapsed  # seconds, also logged on exit
"""

from __future__ import annotations

import logging
import time
from typing import Optional


class Stopwatch:
    """Context manager that logs `<label> took X.XXX s` on exit."""

    def __init__(
        self,
        label: str,
        logger: Optional[logging.Logger] = None,
        level: int = logging.INFO,
    ) -> None:
        self.label = label
        self.logger = logger or logging.getLogger(__name__)
        self.level = level
        self.elapsed: float = 0.0
        self._start: float = 0.0

    def __enter__(self) -> "Stopwatch":
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, exc_tb) -> None:
        self.elapsed = time.perf_counter() - self._start
        outcome = "failed after" if exc_type is not None else "took"
        self.logger.log(self.level, "%s %s %.3f s", self.label, outcome, self.elapsed)
