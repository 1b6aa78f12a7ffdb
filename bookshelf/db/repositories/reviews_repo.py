"""Repository helpers for reviews (SQL backend)."""
from __future__ import annotations

from typing import Dict, List

from sqlalchemy import func

from bookshelf.db.engine import Database
from bookshelf.db.models import ReviewRecord
from bookshelf.services.domain import Review, ReviewDraft


class SqlReviews:
    def __init__(self, db: Database) -> None:
        self._db = db

    def add(self, draft: ReviewDraft) -> Review:
        record = ReviewRecord(
            book_id=draft.book_id,
            user_id=draft.user_id,
            title=draft.title,
            content=draft.content,
            rating=draft.rating,
            ai_refined_content=draft.ai_refined_content,
        )
        with self._db.session() as session:
            session.add(record)
            session.flush()
            return record.to_domain()

    def list_for_book(self, book_id: int) -> List[Review]:
        with self._db.session() as session:
            rows = (
                session.query(ReviewRecord)
                .filter(ReviewRecord.book_id == book_id)
                .order_by(ReviewRecord.id.asc())
                .all()
            )
            return [row.to_domain() for row in rows]

    def list_for_user(self, user_id: int) -> List[Review]:
        with self._db.session() as session:
            rows = (
                session.query(ReviewRecord)
                .filter(ReviewRecord.user_id == user_id)
                .order_by(ReviewRecord.id.asc())
                .all()
            )
            return [row.to_domain() for row in rows]

    def average_ratings(self) -> Dict[int, float]:
        with self._db.session() as session:
            rows = (
                session.query(ReviewRecord.book_id, func.avg(ReviewRecord.rating))
                .group_by(ReviewRecord.book_id)
                .all()
            )
            return {int(book_id): float(avg) for book_id, avg in rows if avg is not None}


__all__ = ["SqlReviews"]
