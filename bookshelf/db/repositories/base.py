"""Storage interfaces implemented by the memory and SQL backends.

Backends only store and fetch. Validation, grouping, filtering, sorting and
paging belong to the services so both backends behave identically.
"""
from __future__ import annotations

from datetime import datetime
from typing import Dict, Iterable, List, Optional, Protocol

from bookshelf.services.domain import (
    Book,
    BookDraft,
    ReadingListEntry,
    Review,
    ReviewDraft,
)


class CatalogBackend(Protocol):
    def add(self, draft: BookDraft) -> Book: ...

    def get(self, book_id: int) -> Optional[Book]: ...

    def get_many(self, book_ids: Iterable[int]) -> Dict[int, Book]: ...

    def list_all(self) -> List[Book]: ...

    def count(self) -> int: ...


class ReadingListBackend(Protocol):
    def upsert(self, user_id: int, book_id: int, status: str, now: datetime) -> ReadingListEntry: ...

    def get(self, user_id: int, book_id: int) -> Optional[ReadingListEntry]: ...

    def delete(self, user_id: int, book_id: int) -> bool: ...

    def list_for_user(self, user_id: int) -> List[ReadingListEntry]: ...


class ReviewBackend(Protocol):
    def add(self, draft: ReviewDraft) -> Review: ...

    def list_for_book(self, book_id: int) -> List[Review]: ...

    def list_for_user(self, user_id: int) -> List[Review]: ...

    def average_ratings(self) -> Dict[int, float]: ...


__all__ = ["CatalogBackend", "ReadingListBackend", "ReviewBackend"]
