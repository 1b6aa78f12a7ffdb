"""Service exports (errors and domain records).

Service classes are imported from their own modules or built through
`bookshelf.services.container`.
"""

from .errors import BookshelfError, NotFoundError, ValidationError
from .domain import (
    COMPLETED,
    READING,
    READING_STATUSES,
    WANT_TO_READ,
    Book,
    BookDraft,
    BookFilters,
    BookPage,
    ReadingListEntry,
    Review,
    Shelf,
)

__all__ = [
    "BookshelfError",
    "NotFoundError",
    "ValidationError",
    "COMPLETED",
    "READING",
    "READING_STATUSES",
    "WANT_TO_READ",
    "Book",
    "BookDraft",
    "BookFilters",
    "BookPage",
    "ReadingListEntry",
    "Review",
    "Shelf",
]
