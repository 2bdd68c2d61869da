"""
Python Logging Bridge Backend

Routes records to Python's logging system. Also the way a caller-supplied
``logging.Logger`` is attached to the client.
"""

import logging
from typing import Dict, Optional

from ..interfaces import LogBackend, LogRecord, LogLevel
from ..structs import PythonBackendConfig

_LEVEL_MAP = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.CRITICAL: logging.CRITICAL,
}


class PythonLoggingBackend(LogBackend):
    """
    Backend that bridges to Python's logging system.

    With ``target`` set every record goes to that logger; otherwise a logger
    named after the record's logger is used.
    """

    def __init__(self, config: Optional[PythonBackendConfig] = None, name: str = "python",
                 target: Optional[logging.Logger] = None):
        config = config or PythonBackendConfig()
        super().__init__(name, LogLevel[config.min_level.upper()])
        self.enabled = config.enabled
        self.target = target
        self.max_context_length = 500

        # Cache for Python loggers
        self._py_loggers: Dict[str, logging.Logger] = {}

    def write(self, record: LogRecord) -> None:
        py_logger = self.target or self._get_python_logger(record.logger_name)
        py_level = _LEVEL_MAP.get(record.level, logging.INFO)
        if not py_logger.isEnabledFor(py_level):
            return
        py_logger.log(py_level, self._format_message(record))

    def _get_python_logger(self, name: str) -> logging.Logger:
        if name not in self._py_loggers:
            self._py_loggers[name] = logging.getLogger(name)
        return self._py_loggers[name]

    def _format_message(self, record: LogRecord) -> str:
        if not record.context:
            return record.message
        context_str = ", ".join(f"{k}={v}" for k, v in record.context.items())
        if len(context_str) > self.max_context_length:
            context_str = context_str[:self.max_context_length] + "..."
        return f"{record.message} | {context_str}"
