"""Database layer root."""

from .engine import Database, MEMORY_PATH

__all__ = [
    "Database",
    "MEMORY_PATH",
]
