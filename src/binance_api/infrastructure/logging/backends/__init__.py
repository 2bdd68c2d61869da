from .console import ConsoleBackend, ColorConsoleBackend
from .python_bridge import PythonLoggingBackend

__all__ = ['ConsoleBackend', 'ColorConsoleBackend', 'PythonLoggingBackend']
