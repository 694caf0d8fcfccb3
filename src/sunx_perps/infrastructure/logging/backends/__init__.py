from .console import ConsoleBackend, ColorConsoleBackend
from .file import FileBackend

__all__ = ['ConsoleBackend', 'ColorConsoleBackend', 'FileBackend']
