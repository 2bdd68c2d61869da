"""
Logging Factory

Creates and caches logger instances from a LoggingConfig struct.
"""

import logging
from typing import Dict, List, Optional

from .interfaces import LoggerInterface, LogBackend, LogLevel
from .logger import Logger
from .backends.console import ConsoleBackend, ColorConsoleBackend
from .backends.python_bridge import PythonLoggingBackend
from .structs import LoggingConfig


class LoggerFactory:
    """Simple logging factory - trust config, fail fast."""

    # Cached instances for reuse
    _cached_loggers: Dict[str, LoggerInterface] = {}
    _default_config: Optional[LoggingConfig] = None

    @classmethod
    def create_logger(cls, name: str, config: Optional[LoggingConfig] = None) -> LoggerInterface:
        """Create logger instance, cached by name."""
        if name in cls._cached_loggers:
            return cls._cached_loggers[name]

        config = config or cls.get_default_config()
        logger = Logger(name=name, backends=cls._create_backends(config))

        cls._cached_loggers[name] = logger
        return logger

    @classmethod
    def from_python_logger(cls, py_logger: logging.Logger) -> LoggerInterface:
        """Wrap a standard library logger. Not cached."""
        return Logger(name=py_logger.name, backends=[PythonLoggingBackend(target=py_logger)])

    @classmethod
    def configure(cls, config: LoggingConfig) -> None:
        """Install a default config for loggers created afterwards."""
        config.validate()
        cls._default_config = config
        cls._cached_loggers.clear()

    @classmethod
    def get_default_config(cls) -> LoggingConfig:
        if cls._default_config is None:
            cls._default_config = LoggingConfig.default()
        return cls._default_config

    @classmethod
    def override_logger(cls, name: str, **overrides) -> bool:
        """
        Override logger configuration at runtime.

        Args:
            name: Logger name to override
            **overrides: Configuration overrides:
                - min_level: Change minimum log level (e.g., "ERROR")
                - enabled: Enable/disable all backends of the logger

        Returns:
            True if logger was found and modified, False otherwise

        Example:
            LoggerFactory.override_logger("binance_api.rest", min_level="ERROR")
        """
        logger = cls._cached_loggers.get(name)
        if logger is None:
            return False

        if "min_level" in overrides:
            level = overrides["min_level"]
            if isinstance(level, str):
                level = LogLevel[level.upper()]
            for backend in logger.backends:
                backend.min_level = level

        if "enabled" in overrides:
            for backend in logger.backends:
                backend.enabled = overrides["enabled"]

        return True

    @classmethod
    def clear_cache(cls) -> None:
        """Clear cached logger instances."""
        cls._cached_loggers.clear()
        cls._default_config = None

    @staticmethod
    def _create_backends(config: LoggingConfig) -> List[LogBackend]:
        backends: List[LogBackend] = []
        if config.console and config.console.enabled:
            backend_class = ColorConsoleBackend if config.console.color else ConsoleBackend
            backends.append(backend_class(config.console))
        if config.python and config.python.enabled:
            backends.append(PythonLoggingBackend(config.python))
        return backends


def get_logger(name: str) -> LoggerInterface:
    """Get logger instance. Simple, fast."""
    return LoggerFactory.create_logger(name)
