"""Repository helpers for catalog records (SQL backend)."""
from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from bookshelf.db.engine import Database
from bookshelf.db.models import BookRecord
from bookshelf.services.domain import Book, BookDraft


class SqlCatalog:
    def __init__(self, db: Database) -> None:
        self._db = db

    def add(self, draft: BookDraft) -> Book:
        record = BookRecord(
            title=draft.title,
            author=draft.author,
            description=draft.description,
            cover_image=draft.cover_image,
            price=draft.price,
            featured=draft.featured,
            published_date=draft.published_date,
            publisher=draft.publisher,
            pages=draft.pages,
            language=draft.language,
            isbn=draft.isbn,
        )
        record.set_genres(draft.genres)
        with self._db.session() as session:
            session.add(record)
            session.flush()
            return record.to_domain()

    def get(self, book_id: int) -> Optional[Book]:
        with self._db.session() as session:
            record = session.query(BookRecord).filter(BookRecord.id == book_id).one_or_none()
            return record.to_domain() if record else None

    def get_many(self, book_ids: Iterable[int]) -> Dict[int, Book]:
        ids = list({int(b) for b in book_ids})
        if not ids:
            return {}
        with self._db.session() as session:
            rows = session.query(BookRecord).filter(BookRecord.id.in_(ids)).all()
            return {row.id: row.to_domain() for row in rows}

    def list_all(self) -> List[Book]:
        with self._db.session() as session:
            rows = session.query(BookRecord).order_by(BookRecord.id.asc()).all()
            return [row.to_domain() for row in rows]

    def count(self) -> int:
        with self._db.session() as session:
            return int(session.query(BookRecord).count())


__all__ = ["SqlCatalog"]
