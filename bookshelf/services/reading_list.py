"""Reading-list (shelf) state per user.

Each (user_id, book_id) pair holds at most one entry whose status is one of
``reading``, ``want-to-read`` or ``completed``. Setting a status on an existing
pair overwrites the status in place and keeps the original ``added_at``.
"""
from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from bookshelf.db.repositories.base import ReadingListBackend
from bookshelf.services.catalog_service import BookCatalog
from bookshelf.services.domain import READING_STATUSES, ReadingListEntry, Shelf
from bookshelf.services.errors import ValidationError
from bookshelf.utils.logging import get_logger

LOG = get_logger("reading_list")


def validate_status(status: object) -> str:
    if not isinstance(status, str) or status not in READING_STATUSES:
        raise ValidationError("invalid_status")
    return status


class ReadingListStore:
    def __init__(
        self,
        backend: ReadingListBackend,
        catalog: BookCatalog,
        clock: Callable[[], datetime] = datetime.utcnow,
    ) -> None:
        self._backend = backend
        self._catalog = catalog
        self._clock = clock

    def set_status(self, user_id: int, book_id: int, status: str) -> ReadingListEntry:
        """Create or update the entry for the pair and return it.

        User and book existence are the caller's concern; only the status is
        checked here.
        """
        validate_status(status)
        entry = self._backend.upsert(user_id, book_id, status, self._clock())
        LOG.info("Shelf status set user_id=%s book_id=%s status=%s", user_id, book_id, status)
        return entry

    def remove(self, user_id: int, book_id: int) -> bool:
        removed = self._backend.delete(user_id, book_id)
        if removed:
            LOG.info("Shelf entry removed user_id=%s book_id=%s", user_id, book_id)
        return removed

    def get_entry(self, user_id: int, book_id: int) -> Optional[ReadingListEntry]:
        return self._backend.get(user_id, book_id)

    def get_for_user(self, user_id: int) -> Shelf:
        entries = self._backend.list_for_user(user_id)
        shelf = Shelf()
        if not entries:
            return shelf
        books = self._catalog.get_many(e.book_id for e in entries)
        for entry in entries:
            book = books.get(entry.book_id)
            if book is None:
                LOG.debug("Skipping shelf entry for missing book user_id=%s book_id=%s", user_id, entry.book_id)
                continue
            try:
                shelf.group(entry.status).append(book)
            except KeyError:
                LOG.warning("Ignoring shelf entry with unknown status user_id=%s book_id=%s status=%r", user_id, entry.book_id, entry.status)
        return shelf


__all__ = ["ReadingListStore", "validate_status"]
