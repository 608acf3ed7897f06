"""Contract for gameplay telemetry and the logging-backed sink."""

from __future__ import annotations

import logging
from typing import Protocol


class Telemetry(Protocol):
    """Reports gameplay events such as excavations, purchases and damage."""

    def emit(self, event_name: str, payload: dict) -> None:
        """Publish telemetry event to the configured sink."""


class LoggingTelemetry:
    """Writes each event as a structured log record."""

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.INFO) -> None:
        self._logger = logger or logging.getLogger("c36_grid.telemetry")
        self._level = level

    def emit(self, event_name: str, payload: dict) -> None:
        self._logger.log(self._level, event_name, extra={"telemetry": payload})


class NullTelemetry:
    def emit(self, event_name: str, payload: dict) -> None:
        return None
