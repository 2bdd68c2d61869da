"""
Logging Configuration Structures

Structured configuration for the client logger using msgspec.Struct.
"""

from typing import Optional
from msgspec import Struct

VALID_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class BackendConfig(Struct, frozen=True):
    """
    Base configuration for all logging backends.

    Attributes:
        enabled: Whether this backend is active
        min_level: Minimum log level to process (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    enabled: bool = True
    min_level: str = "INFO"

    def validate(self) -> None:
        if self.min_level.upper() not in VALID_LEVELS:
            raise ValueError(f"Invalid log level: {self.min_level}")


class ConsoleBackendConfig(BackendConfig, frozen=True):
    """
    Console backend configuration.

    Attributes:
        color: Enable colored output
        include_context: Include context information
        max_message_length: Maximum message length before truncation
    """
    color: bool = False
    include_context: bool = True
    max_message_length: int = 1000


class PythonBackendConfig(BackendConfig, frozen=True):
    """Bridge into the standard logging module."""
    min_level: str = "DEBUG"


class LoggingConfig(Struct, frozen=True):
    """Complete logging configuration."""
    console: Optional[ConsoleBackendConfig] = None
    python: Optional[PythonBackendConfig] = None

    def validate(self) -> None:
        for backend in (self.console, self.python):
            if backend is not None:
                backend.validate()

    @classmethod
    def default(cls) -> 'LoggingConfig':
        """Silent by default; records still reach the logging module."""
        return cls(python=PythonBackendConfig())
