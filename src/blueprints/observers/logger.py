# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/blueprints/observers/logger.py

from __future__ import annotations

import logging

from .events import BaseEvent


class LoggerObserver:
    """Writes every event as one INFO line, timestamp omitted."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def notify(self, event: BaseEvent) -> None:
        fields = ", ".join(f"{k}={v}" for k, v in event.dict().items() if k != "ts")
        self.logger.info("[EVENT] %s: %s", type(event).__name__, fields)
