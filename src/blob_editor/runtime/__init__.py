"""Runtime services: telemetry and cooperative cancellation."""

from . import telemetry
from .cancellation import CancellationToken, interrupt_cancels

__all__ = ["CancellationToken", "interrupt_cancels", "telemetry"]
