"""ORM models for the bookshelf DB (catalog, reading lists, reviews)."""
from __future__ import annotations

import datetime
import json
from decimal import Decimal
from typing import Iterable, List

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base

from bookshelf.services.domain import (
    Book,
    ReadingListEntry,
    Review,
    normalize_genres,
)

Base = declarative_base()


class BookRecord(Base):
    """Catalog entry. Genre tags are stored as a JSON array in ``genres``."""

    __tablename__ = "books"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(500), nullable=False)
    author = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=False, default="")
    cover_image = Column(String(1000), nullable=False, default="")
    price = Column(Numeric(10, 2), nullable=False, default=Decimal("0"))
    genres = Column(Text, nullable=True)  # JSON array
    featured = Column(Boolean, nullable=False, default=False, index=True)
    published_date = Column(Date, nullable=True)
    publisher = Column(String(255), nullable=True)
    pages = Column(Integer, nullable=True)
    language = Column(String(64), nullable=False, default="English")
    isbn = Column(String(32), nullable=True)
    created_at = Column(DateTime, default=datetime.datetime.utcnow, nullable=False)

    def set_genres(self, genres: Iterable[str]) -> None:
        self.genres = json.dumps(list(normalize_genres(genres)))

    def genres_list(self) -> List[str]:
        if not self.genres:
            return []
        try:
            data = json.loads(self.genres)
        except ValueError:
            return []
        return [str(g) for g in data] if isinstance(data, list) else []

    def to_domain(self) -> Book:
        return Book(
            id=self.id,
            title=self.title,
            author=self.author,
            description=self.description or "",
            cover_image=self.cover_image or "",
            price=Decimal(self.price) if self.price is not None else Decimal("0"),
            genres=tuple(self.genres_list()),
            featured=bool(self.featured),
            published_date=self.published_date,
            publisher=self.publisher,
            pages=self.pages,
            language=self.language or "English",
            isbn=self.isbn,
            created_at=self.created_at,
        )

    def __repr__(self) -> str:  # pragma: no cover
        return f"<BookRecord id={self.id} title={self.title!r}>"


class ReadingListRecord(Base):
    """One shelf entry per (user_id, book_id); ``id`` preserves insertion order."""

    __tablename__ = "reading_list_entries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, nullable=False, index=True)
    book_id = Column(Integer, nullable=False, index=True)
    status = Column(String(16), nullable=False)
    added_at = Column(DateTime, default=datetime.datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime,
        default=datetime.datetime.utcnow,
        onupdate=datetime.datetime.utcnow,
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("user_id", "book_id", name="uq_reading_list_user_book"),
        Index("ix_reading_list_user_status", "user_id", "status"),
    )

    def to_domain(self) -> ReadingListEntry:
        return ReadingListEntry(
            user_id=self.user_id,
            book_id=self.book_id,
            status=self.status,
            added_at=self.added_at,
        )

    def __repr__(self) -> str:  # pragma: no cover
        return "<ReadingListRecord user_id={0} book_id={1} status={2}>".format(
            self.user_id, self.book_id, self.status
        )


class ReviewRecord(Base):
    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True, autoincrement=True)
    book_id = Column(Integer, nullable=False, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    rating = Column(Integer, nullable=False)
    ai_refined_content = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.datetime.utcnow, nullable=False)

    def to_domain(self) -> Review:
        return Review(
            id=self.id,
            book_id=self.book_id,
            user_id=self.user_id,
            title=self.title,
            content=self.content,
            rating=self.rating,
            ai_refined_content=self.ai_refined_content,
            created_at=self.created_at,
        )

    def __repr__(self) -> str:  # pragma: no cover
        return f"<ReviewRecord id={self.id} book_id={self.book_id} rating={self.rating}>"


__all__ = ["Base", "BookRecord", "ReadingListRecord", "ReviewRecord"]
