"""
Console Backend

Writes formatted records straight to a text stream (stderr by default).
"""

import os
import sys
from datetime import datetime
from typing import Optional, TextIO

from ..interfaces import LogBackend, LogRecord, LogLevel
from ..structs import ConsoleBackendConfig


class ConsoleBackend(LogBackend):
    """Console logging backend."""

    def __init__(self, config: Optional[ConsoleBackendConfig] = None, name: str = "console",
                 stream: Optional[TextIO] = None):
        config = config or ConsoleBackendConfig()
        super().__init__(name, LogLevel[config.min_level.upper()])
        self.config = config
        self.enabled = config.enabled
        self.include_context = config.include_context
        self.max_message_length = config.max_message_length
        self.stream = stream

    def write(self, record: LogRecord) -> None:
        stream = self.stream or sys.stderr
        stream.write(self._format_message(record) + "\n")

    def _format_message(self, record: LogRecord) -> str:
        """Format message with optional context."""
        message = record.message

        # Truncate very long messages
        if len(message) > self.max_message_length:
            message = message[:self.max_message_length] + "..."

        if self.include_context and record.context:
            context_parts = []
            for key, value in record.context.items():
                value_str = str(value)
                if len(value_str) > 100:
                    value_str = value_str[:100] + "..."
                context_parts.append(f"{key}={value_str}")
            message += f" | {', '.join(context_parts)}"

        stamp = datetime.fromtimestamp(record.timestamp).strftime("%H:%M:%S.%f")[:-3]
        return f"{stamp} {record.level.name:<8} {record.logger_name} {message}"


class ColorConsoleBackend(ConsoleBackend):
    """
    Console backend with color support for better readability.

    Adds ANSI color codes based on log level.
    """

    # ANSI color codes
    COLORS = {
        LogLevel.DEBUG: '\033[36m',    # Cyan
        LogLevel.INFO: '\033[37m',     # White
        LogLevel.WARNING: '\033[33m',  # Yellow
        LogLevel.ERROR: '\033[31m',    # Red
        LogLevel.CRITICAL: '\033[35m', # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, config: Optional[ConsoleBackendConfig] = None, name: str = "color_console",
                 stream: Optional[TextIO] = None):
        super().__init__(config, name, stream)
        target = self.stream or sys.stderr
        self.use_colors = (
            os.getenv('TERM') != 'dumb' and
            hasattr(target, 'isatty') and
            target.isatty()
        )

    def _format_message(self, record: LogRecord) -> str:
        message = super()._format_message(record)
        if self.use_colors and record.level in self.COLORS:
            message = f"{self.COLORS[record.level]}{message}{self.RESET}"
        return message
