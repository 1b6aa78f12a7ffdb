"""Storage backends: in-memory containers and SQLAlchemy repositories."""
from .base import CatalogBackend, ReadingListBackend, ReviewBackend
from .memory import MemoryCatalog, MemoryReadingList, MemoryReviews
from .books_repo import SqlCatalog
from .reading_list_repo import SqlReadingList
from .reviews_repo import SqlReviews

__all__ = [
    "CatalogBackend",
    "ReadingListBackend",
    "ReviewBackend",
    "MemoryCatalog",
    "MemoryReadingList",
    "MemoryReviews",
    "SqlCatalog",
    "SqlReadingList",
    "SqlReviews",
]
