"""In-memory storage backends (tests, local runs without a database)."""
from __future__ import annotations

import threading
from collections import defaultdict
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

from bookshelf.services.domain import (
    Book,
    BookDraft,
    ReadingListEntry,
    Review,
    ReviewDraft,
)


class MemoryCatalog:
    def __init__(self) -> None:
        self._books: Dict[int, Book] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def add(self, draft: BookDraft) -> Book:
        with self._lock:
            book = Book.from_draft(self._next_id, draft, datetime.utcnow())
            self._books[book.id] = book
            self._next_id += 1
            return book

    def get(self, book_id: int) -> Optional[Book]:
        return self._books.get(book_id)

    def get_many(self, book_ids: Iterable[int]) -> Dict[int, Book]:
        found: Dict[int, Book] = {}
        for book_id in book_ids:
            book = self._books.get(book_id)
            if book is not None:
                found[book_id] = book
        return found

    def list_all(self) -> List[Book]:
        with self._lock:
            return sorted(self._books.values(), key=lambda b: b.id)

    def count(self) -> int:
        return len(self._books)


class MemoryReadingList:
    """Entries keyed by (user_id, book_id); dict order is first-add order."""

    def __init__(self) -> None:
        self._entries: Dict[Tuple[int, int], ReadingListEntry] = {}
        self._lock = threading.Lock()

    def upsert(self, user_id: int, book_id: int, status: str, now: datetime) -> ReadingListEntry:
        key = (user_id, book_id)
        with self._lock:
            existing = self._entries.get(key)
            added_at = existing.added_at if existing else now
            entry = ReadingListEntry(user_id=user_id, book_id=book_id, status=status, added_at=added_at)
            # Re-assigning an existing key keeps its original position.
            self._entries[key] = entry
            return entry

    def get(self, user_id: int, book_id: int) -> Optional[ReadingListEntry]:
        return self._entries.get((user_id, book_id))

    def delete(self, user_id: int, book_id: int) -> bool:
        with self._lock:
            return self._entries.pop((user_id, book_id), None) is not None

    def list_for_user(self, user_id: int) -> List[ReadingListEntry]:
        with self._lock:
            return [e for (uid, _bid), e in self._entries.items() if uid == user_id]


class MemoryReviews:
    def __init__(self) -> None:
        self._reviews: List[Review] = []
        self._next_id = 1
        self._lock = threading.Lock()

    def add(self, draft: ReviewDraft) -> Review:
        with self._lock:
            review = Review.from_draft(self._next_id, draft, datetime.utcnow())
            self._reviews.append(review)
            self._next_id += 1
            return review

    def list_for_book(self, book_id: int) -> List[Review]:
        with self._lock:
            return [r for r in self._reviews if r.book_id == book_id]

    def list_for_user(self, user_id: int) -> List[Review]:
        with self._lock:
            return [r for r in self._reviews if r.user_id == user_id]

    def average_ratings(self) -> Dict[int, float]:
        totals: Dict[int, List[int]] = defaultdict(list)
        with self._lock:
            for review in self._reviews:
                totals[review.book_id].append(review.rating)
        return {book_id: sum(r) / len(r) for book_id, r in totals.items()}


__all__ = ["MemoryCatalog", "MemoryReadingList", "MemoryReviews"]
