"""
Client Logger Implementation

Synchronous dispatch of log records to a list of backends. Backend
failures are contained in the backend and never reach the caller.
"""

import time
from typing import Dict, List, Optional, Any

from .interfaces import LoggerInterface, LogBackend, LogRecord, LogLevel


class Logger(LoggerInterface):
    """
    Logger with multiple backends and persistent context.

    Key features:
    - One explicit method per level
    - Persistent context merged into every record
    - Backend errors are absorbed by the backend
    """

    def __init__(self, name: str, backends: Optional[List[LogBackend]] = None):
        self.name = name
        self.backends = list(backends or [])

        # Persistent context for all log messages
        self.context: Dict[str, Any] = {}

    def _log(self, level: LogLevel, msg: str, **context) -> None:
        full_context = {**self.context, **context}
        record = LogRecord(
            timestamp=time.time(),
            level=level,
            logger_name=self.name,
            message=msg,
            context=full_context
        )

        for backend in self.backends:
            if not backend.should_handle(record):
                continue
            try:
                backend.write(record)
            except Exception as e:
                backend._handle_error(e)

    def debug(self, msg: str, **context) -> None:
        self._log(LogLevel.DEBUG, msg, **context)

    def info(self, msg: str, **context) -> None:
        self._log(LogLevel.INFO, msg, **context)

    def warning(self, msg: str, **context) -> None:
        self._log(LogLevel.WARNING, msg, **context)

    def error(self, msg: str, **context) -> None:
        self._log(LogLevel.ERROR, msg, **context)

    def critical(self, msg: str, **context) -> None:
        self._log(LogLevel.CRITICAL, msg, **context)

    def set_context(self, **context) -> None:
        """Set persistent context for all logs."""
        self.context.update(context)
