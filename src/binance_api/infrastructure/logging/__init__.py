"""
Client Logging

Usage:
    from binance_api.infrastructure.logging import get_logger

    logger = get_logger('binance_api.rest')
    logger.debug("New request", method="GET", path="/api/v1/depth")
"""

# Core interfaces
from .interfaces import (
    LogLevel,
    LogRecord,
    LogBackend,
    LoggerInterface
)

# Main logger implementation
from .logger import Logger

# Backends
from .backends import ConsoleBackend, ColorConsoleBackend, PythonLoggingBackend

# Factory for creating loggers (main entry point)
from .factory import LoggerFactory, get_logger

# Configuration structures
from .structs import (
    LoggingConfig,
    BackendConfig,
    ConsoleBackendConfig,
    PythonBackendConfig
)

__all__ = [
    'LogLevel', 'LogRecord', 'LogBackend', 'LoggerInterface',
    'Logger',
    'ConsoleBackend', 'ColorConsoleBackend', 'PythonLoggingBackend',
    'LoggerFactory', 'get_logger',
    'LoggingConfig', 'BackendConfig', 'ConsoleBackendConfig', 'PythonBackendConfig',
]
