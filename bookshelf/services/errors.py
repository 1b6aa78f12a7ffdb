"""Service-level error taxonomy.

Errors carry a short machine code as their message (``"invalid_status"``);
the HTTP layer turns codes into user-facing text. Storage failures are not
wrapped: ``sqlalchemy.exc.SQLAlchemyError`` reaches the caller unchanged.
"""
from __future__ import annotations


class BookshelfError(Exception):
    """Base error for bookshelf services."""

    @property
    def code(self) -> str:
        return str(self.args[0]) if self.args else self.__class__.__name__


class ValidationError(BookshelfError, ValueError):
    """Raised when caller input fails validation."""


class NotFoundError(BookshelfError, LookupError):
    """Raised when a referenced book or review cannot be located."""


__all__ = ["BookshelfError", "ValidationError", "NotFoundError"]
