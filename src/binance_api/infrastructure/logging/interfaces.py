"""
Logging Interfaces

Pluggable logging architecture: a logger with one method per level
dispatches records to any number of backends.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict


class LogLevel(IntEnum):
    """Log levels with numeric values for fast comparison."""
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50


@dataclass
class LogRecord:
    """
    Lightweight log record.

    Formatting happens in backends, not here.
    """
    timestamp: float
    level: LogLevel
    logger_name: str
    message: str
    context: Dict[str, Any] = field(default_factory=dict)


class LogBackend(ABC):
    """
    Abstract base for all logging backends.

    Each backend handles its own formatting and output logic.
    """

    def __init__(self, name: str, min_level: LogLevel = LogLevel.DEBUG):
        self.name = name
        self.min_level = min_level
        self.enabled = True
        self._error_count = 0
        self._max_errors = 10  # Disable after too many failures

    def should_handle(self, record: LogRecord) -> bool:
        """Fast check if this backend should process the record."""
        return self.enabled and record.level >= self.min_level

    @abstractmethod
    def write(self, record: LogRecord) -> None:
        """
        Write log record to backend destination.

        Must handle errors gracefully without raising exceptions.
        """
        pass

    def _handle_error(self, error: Exception) -> None:
        """Handle backend errors gracefully."""
        self._error_count += 1
        if self._error_count >= self._max_errors:
            self.enabled = False


class LoggerInterface(ABC):
    """
    Interface for the client logger.

    This is what gets injected into the REST client and the API facade.
    Context is passed as keyword arguments and never alters the message.
    """

    @abstractmethod
    def debug(self, msg: str, **context) -> None:
        """Log debug message."""
        pass

    @abstractmethod
    def info(self, msg: str, **context) -> None:
        """Log info message."""
        pass

    @abstractmethod
    def warning(self, msg: str, **context) -> None:
        """Log warning message."""
        pass

    def warn(self, msg: str, **context) -> None:
        """Alias of warning."""
        self.warning(msg, **context)

    @abstractmethod
    def error(self, msg: str, **context) -> None:
        """Log error message."""
        pass

    @abstractmethod
    def critical(self, msg: str, **context) -> None:
        """Log critical message."""
        pass
