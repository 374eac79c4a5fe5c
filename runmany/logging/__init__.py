"""Module de logging."""

from runmany.logging.base import Logger
from runmany.logging.file_logger import FileLogger

__all__ = [
    "Logger",
    "FileLogger",
]
