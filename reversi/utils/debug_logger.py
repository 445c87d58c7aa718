"""Minimal debug loggers injected into the CPU players and controller."""

import os
import threading
from datetime import datetime
from typing import Protocol


class Logger(Protocol):
    def debug(self, message: str, flush: bool = True) -> None:
        ...


class DebugLogger:
    """Thread-safe debug logger that appends to a log file"""

    def __init__(self, enabled: bool = True, log_file: str = "debug.log"):
        self._enabled = enabled
        self._file_lock = threading.Lock()
        self._log_file = log_file

    @property
    def log_file(self) -> str:
        return self._log_file

    def debug(self, message: str, flush: bool = True) -> None:
        """Write a debug message with timestamp and PID"""
        if not self._enabled:
            return

        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
        formatted_message = f"[{timestamp}] PID {os.getpid()}: {message}\n"

        with self._file_lock:
            with open(self._log_file, "a", encoding="utf-8") as f:
                f.write(formatted_message)
                if flush:
                    f.flush()


class NoOpLogger:
    """Logger that discards everything"""

    def debug(self, message: str, flush: bool = True) -> None:
        pass
