"""Utility helpers."""

from .debug_logger import DebugLogger, Logger, NoOpLogger

__all__ = ["DebugLogger", "Logger", "NoOpLogger"]
