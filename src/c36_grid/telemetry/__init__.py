"""Telemetry sinks for gameplay events."""

from .logging import LoggingTelemetry, NullTelemetry, Telemetry

__all__ = ["LoggingTelemetry", "NullTelemetry", "Telemetry"]
