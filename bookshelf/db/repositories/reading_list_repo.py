"""Repository helpers for reading-list entries (SQL backend)."""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bookshelf.db.engine import Database
from bookshelf.db.models import ReadingListRecord
from bookshelf.services.domain import ReadingListEntry
from bookshelf.utils.logging import get_logger

LOG = get_logger("reading_list_repo")


def _find(session: Session, user_id: int, book_id: int) -> Optional[ReadingListRecord]:
    return (
        session.query(ReadingListRecord)
        .filter(
            ReadingListRecord.user_id == user_id,
            ReadingListRecord.book_id == book_id,
        )
        .one_or_none()
    )


class SqlReadingList:
    def __init__(self, db: Database) -> None:
        self._db = db

    def upsert(self, user_id: int, book_id: int, status: str, now: datetime) -> ReadingListEntry:
        """Insert or update the (user_id, book_id) row; last write wins."""
        try:
            return self._upsert_once(user_id, book_id, status, now)
        except IntegrityError:
            # A concurrent insert for the same pair won; update that row instead.
            LOG.debug("Concurrent shelf insert user_id=%s book_id=%s; retrying as update", user_id, book_id)
            return self._upsert_once(user_id, book_id, status, now)

    def _upsert_once(self, user_id: int, book_id: int, status: str, now: datetime) -> ReadingListEntry:
        with self._db.session() as session:
            record = _find(session, user_id, book_id)
            if record:
                record.status = status
                record.updated_at = now
            else:
                record = ReadingListRecord(
                    user_id=user_id,
                    book_id=book_id,
                    status=status,
                    added_at=now,
                    updated_at=now,
                )
                session.add(record)
            session.flush()
            return record.to_domain()

    def get(self, user_id: int, book_id: int) -> Optional[ReadingListEntry]:
        with self._db.session() as session:
            record = _find(session, user_id, book_id)
            return record.to_domain() if record else None

    def delete(self, user_id: int, book_id: int) -> bool:
        with self._db.session() as session:
            record = _find(session, user_id, book_id)
            if not record:
                return False
            session.delete(record)
            return True

    def list_for_user(self, user_id: int) -> List[ReadingListEntry]:
        with self._db.session() as session:
            rows = (
                session.query(ReadingListRecord)
                .filter(ReadingListRecord.user_id == user_id)
                .order_by(ReadingListRecord.id.asc())
                .all()
            )
            return [row.to_domain() for row in rows]


__all__ = ["SqlReadingList"]
