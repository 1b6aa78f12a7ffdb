"""Explicit construction of the service graph.

`build_services` picks one storage backend (``memory`` or ``sql``) and wires
the catalog, query engine, reading-list store and review service on top of
it. Request handlers receive the resulting `Services` through the Flask app.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from bookshelf import config as app_config
from bookshelf.db.engine import Database
from bookshelf.db.repositories import (
    MemoryCatalog,
    MemoryReadingList,
    MemoryReviews,
    SqlCatalog,
    SqlReadingList,
    SqlReviews,
)
from bookshelf.services.book_query import BookQueryEngine
from bookshelf.services.catalog_service import BookCatalog
from bookshelf.services.reading_list import ReadingListStore
from bookshelf.services.review_refiner import ReviewRefiner
from bookshelf.services.reviews_service import ReviewService
from bookshelf.utils.logging import get_logger

LOG = get_logger("bookshelf.services")


@dataclass
class Services:
    catalog: BookCatalog
    books: BookQueryEngine
    reading_list: ReadingListStore
    reviews: ReviewService
    refiner: ReviewRefiner
    storage: str
    db: Optional[Database] = None

    def storage_ok(self) -> bool:
        return self.db.ping() if self.db is not None else True

    def close(self) -> None:
        if self.db is not None:
            self.db.dispose()


def build_services(
    storage: Optional[str] = None,
    *,
    db: Optional[Database] = None,
    refiner: Optional[ReviewRefiner] = None,
) -> Services:
    kind = (storage or app_config.storage_kind()).strip().lower()
    if kind not in ("memory", "sql"):
        raise ValueError(f"unknown storage backend: {kind}")
    if kind == "memory":
        catalog_backend, shelf_backend, review_backend = MemoryCatalog(), MemoryReadingList(), MemoryReviews()
    else:
        if db is None:
            db = Database(app_config.get_db_path())
        db.create_schema()
        catalog_backend, shelf_backend, review_backend = SqlCatalog(db), SqlReadingList(db), SqlReviews(db)

    refiner = refiner or ReviewRefiner.from_config()
    catalog = BookCatalog(catalog_backend)
    reviews = ReviewService(review_backend, catalog, refiner)
    services = Services(
        catalog=catalog,
        books=BookQueryEngine(catalog, ratings=reviews.average_ratings),
        reading_list=ReadingListStore(shelf_backend, catalog),
        reviews=reviews,
        refiner=refiner,
        storage=kind,
        db=db if kind == "sql" else None,
    )
    LOG.info("Services built storage=%s ai_enabled=%s", kind, refiner.enabled)
    return services


__all__ = ["Services", "build_services"]
