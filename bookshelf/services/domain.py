"""Domain records shared by services, storage backends and routes.

Backends hand these immutable records out instead of ORM rows so the
in-memory and SQL storage options are interchangeable behind the services.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Tuple

READING = "reading"
WANT_TO_READ = "want-to-read"
COMPLETED = "completed"
READING_STATUSES: Tuple[str, ...] = (READING, WANT_TO_READ, COMPLETED)


def normalize_genre(value: Optional[str]) -> str:
    return (value or "").strip().lower()


def normalize_genres(values: Optional[Iterable[str]]) -> Tuple[str, ...]:
    """Lowercase, strip and de-duplicate tags keeping first-seen order."""
    seen: List[str] = []
    for raw in values or ():
        tag = normalize_genre(raw)
        if tag and tag not in seen:
            seen.append(tag)
    return tuple(seen)


def _iso(value: Optional[Any]) -> Optional[str]:
    return value.isoformat() if value is not None else None


@dataclass(frozen=True)
class BookDraft:
    """Validated input for creating a catalog entry (no id yet)."""

    title: str
    author: str
    description: str = ""
    cover_image: str = ""
    price: Decimal = Decimal("0")
    genres: Tuple[str, ...] = ()
    featured: bool = False
    published_date: Optional[date] = None
    publisher: Optional[str] = None
    pages: Optional[int] = None
    language: str = "English"
    isbn: Optional[str] = None


@dataclass(frozen=True)
class Book:
    id: int
    title: str
    author: str
    description: str = ""
    cover_image: str = ""
    price: Decimal = Decimal("0")
    genres: Tuple[str, ...] = ()
    featured: bool = False
    published_date: Optional[date] = None
    publisher: Optional[str] = None
    pages: Optional[int] = None
    language: str = "English"
    isbn: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_draft(cls, book_id: int, draft: BookDraft, created_at: datetime) -> "Book":
        return cls(
            id=book_id,
            title=draft.title,
            author=draft.author,
            description=draft.description,
            cover_image=draft.cover_image,
            price=draft.price,
            genres=draft.genres,
            featured=draft.featured,
            published_date=draft.published_date,
            publisher=draft.publisher,
            pages=draft.pages,
            language=draft.language,
            isbn=draft.isbn,
            created_at=created_at,
        )

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "description": self.description,
            "coverImage": self.cover_image,
            "price": str(self.price),
            "genres": list(self.genres),
            "featured": self.featured,
            "publishedDate": _iso(self.published_date),
            "publisher": self.publisher,
            "pages": self.pages,
            "language": self.language,
            "isbn": self.isbn,
            "createdAt": _iso(self.created_at),
        }


@dataclass(frozen=True)
class ReadingListEntry:
    user_id: int
    book_id: int
    status: str
    added_at: datetime

    def as_dict(self) -> Dict[str, Any]:
        return {
            "userId": self.user_id,
            "bookId": self.book_id,
            "status": self.status,
            "addedAt": _iso(self.added_at),
        }


@dataclass
class Shelf:
    """A user's reading list grouped by status, books in first-added order."""

    reading: List[Book] = field(default_factory=list)
    want_to_read: List[Book] = field(default_factory=list)
    completed: List[Book] = field(default_factory=list)

    def group(self, status: str) -> List[Book]:
        if status == READING:
            return self.reading
        if status == WANT_TO_READ:
            return self.want_to_read
        if status == COMPLETED:
            return self.completed
        raise KeyError(status)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "reading": [b.as_dict() for b in self.reading],
            "wantToRead": [b.as_dict() for b in self.want_to_read],
            "completed": [b.as_dict() for b in self.completed],
        }


@dataclass(frozen=True)
class ReviewDraft:
    book_id: int
    user_id: int
    title: str
    content: str
    rating: int
    ai_refined_content: Optional[str] = None


@dataclass(frozen=True)
class Review:
    id: int
    book_id: int
    user_id: int
    title: str
    content: str
    rating: int
    ai_refined_content: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_draft(cls, review_id: int, draft: ReviewDraft, created_at: datetime) -> "Review":
        return cls(
            id=review_id,
            book_id=draft.book_id,
            user_id=draft.user_id,
            title=draft.title,
            content=draft.content,
            rating=draft.rating,
            ai_refined_content=draft.ai_refined_content,
            created_at=created_at,
        )

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "bookId": self.book_id,
            "userId": self.user_id,
            "title": self.title,
            "content": self.content,
            "rating": self.rating,
            "aiRefinedContent": self.ai_refined_content,
            "createdAt": _iso(self.created_at),
        }


@dataclass(frozen=True)
class BookFilters:
    search_term: Optional[str] = None
    genre: Optional[str] = None


@dataclass
class BookPage:
    items: List[Book]
    total: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.page_size) if self.page_size > 0 else 0

    def as_dict(self) -> Dict[str, Any]:
        return {
            "books": [b.as_dict() for b in self.items],
            "pagination": {
                "page": self.page,
                "limit": self.page_size,
                "total": self.total,
                "totalPages": self.total_pages,
            },
        }


__all__ = [
    "READING",
    "WANT_TO_READ",
    "COMPLETED",
    "READING_STATUSES",
    "normalize_genre",
    "normalize_genres",
    "BookDraft",
    "Book",
    "ReadingListEntry",
    "Shelf",
    "ReviewDraft",
    "Review",
    "BookFilters",
    "BookPage",
]
