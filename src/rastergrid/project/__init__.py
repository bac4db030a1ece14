"""Run-level setup: logging sinks for a raster loading run."""

from .logging_manager import LoggingManager

__all__ = ['LoggingManager']
