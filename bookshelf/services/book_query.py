"""Catalog listing: free-text search, genre filter, sorting and pagination.

Filters combine with AND over the whole catalog, then the sort comparator is
applied, then the page slice ``[(page-1)*page_size, page*page_size)``. Books
that compare equal on the sort key keep identifier-ascending order in both
directions.
"""
from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional

from bookshelf.services.catalog_service import BookCatalog
from bookshelf.services.domain import Book, BookFilters, BookPage, normalize_genre

SORT_TITLE = "title"
SORT_AUTHOR = "author"
SORT_PRICE = "price"
SORT_RATING = "rating"
SORT_PUBLICATION_DATE = "publicationDate"
SORT_FIELDS = (SORT_TITLE, SORT_AUTHOR, SORT_PRICE, SORT_RATING, SORT_PUBLICATION_DATE)
_SORT_ALIASES = {
    "date": SORT_PUBLICATION_DATE,
    "published_date": SORT_PUBLICATION_DATE,
    "publisheddate": SORT_PUBLICATION_DATE,
    "publicationdate": SORT_PUBLICATION_DATE,
}
ORDER_ASC = "asc"
ORDER_DESC = "desc"

RatingsProvider = Callable[[], Dict[int, float]]


def resolve_sort(sort: Optional[str]) -> str:
    """Map a requested sort name to a known field; unknown values fall back to title."""
    raw = (sort or "").strip()
    if raw in SORT_FIELDS:
        return raw
    lowered = raw.lower()
    if lowered in SORT_FIELDS:
        return lowered
    return _SORT_ALIASES.get(lowered, SORT_TITLE)


def resolve_order(order: Optional[str]) -> str:
    return ORDER_DESC if (order or "").strip().lower() == ORDER_DESC else ORDER_ASC


def _matches_search(book: Book, needle: str) -> bool:
    return (
        needle in book.title.casefold()
        or needle in book.author.casefold()
        or needle in (book.description or "").casefold()
    )


def apply_filters(books: List[Book], filters: Optional[BookFilters]) -> List[Book]:
    if filters is None:
        return list(books)
    items = list(books)
    needle = (filters.search_term or "").casefold()
    if needle.strip():
        items = [b for b in items if _matches_search(b, needle)]
    genre = normalize_genre(filters.genre)
    if genre:
        items = [b for b in items if genre in b.genres]
    return items


def _sort_key(field: str, ratings: Dict[int, float]) -> Callable[[Book], Any]:
    if field == SORT_AUTHOR:
        return lambda b: b.author.casefold()
    if field == SORT_PRICE:
        return lambda b: b.price if b.price is not None else Decimal("0")
    if field == SORT_RATING:
        return lambda b: ratings.get(b.id, 0.0)
    if field == SORT_PUBLICATION_DATE:
        return lambda b: b.published_date or date.min
    return lambda b: b.title.casefold()


def sort_books(books: List[Book], field: str, order: str, ratings: Optional[Dict[int, float]] = None) -> List[Book]:
    # Stable sorts: id order first survives as the tie-break, even with reverse=True.
    ordered = sorted(books, key=lambda b: b.id)
    ordered.sort(key=_sort_key(field, ratings or {}), reverse=(order == ORDER_DESC))
    return ordered


class BookQueryEngine:
    """Serve pages of the catalog matching optional filters in a requested order."""

    def __init__(self, catalog: BookCatalog, ratings: Optional[RatingsProvider] = None) -> None:
        self._catalog = catalog
        self._ratings = ratings

    def list(
        self,
        page: int = 1,
        page_size: int = 10,
        filters: Optional[BookFilters] = None,
        sort: Optional[str] = SORT_TITLE,
        order: Optional[str] = ORDER_ASC,
    ) -> BookPage:
        """Return one page of matches plus the pre-pagination total.

        ``page`` and ``page_size`` are expected to be validated by the caller
        (both >= 1). A page past the end yields no items and the real total.
        """
        field = resolve_sort(sort)
        direction = resolve_order(order)
        matches = apply_filters(self._catalog.all_books(), filters)
        ratings = self._ratings() if field == SORT_RATING and self._ratings else None
        ordered = sort_books(matches, field, direction, ratings)
        start = (page - 1) * page_size
        return BookPage(
            items=ordered[start:start + page_size],
            total=len(ordered),
            page=page,
            page_size=page_size,
        )

    def featured(self, limit: int = 4) -> List[Book]:
        return self._catalog.featured(limit)


__all__ = [
    "BookQueryEngine",
    "SORT_FIELDS",
    "ORDER_ASC",
    "ORDER_DESC",
    "resolve_sort",
    "resolve_order",
    "apply_filters",
    "sort_books",
]
