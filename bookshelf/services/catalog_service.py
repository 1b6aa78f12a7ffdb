"""Catalog service: book creation, lookup and featured listings."""
from __future__ import annotations

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Mapping, Optional

from bookshelf.db.repositories.base import CatalogBackend
from bookshelf.services.domain import Book, BookDraft, normalize_genres
from bookshelf.services.errors import NotFoundError, ValidationError
from bookshelf.utils.logging import get_logger

LOG = get_logger("catalog_service")
DEFAULT_FEATURED_LIMIT = 4


def _pick(payload: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in payload and payload[key] is not None:
            return payload[key]
    return None


def _optional_text(raw: Any) -> Optional[str]:
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise ValidationError("text_field_invalid")
    cleaned = raw.strip()
    return cleaned or None


def _required_text(raw: Any, code: str) -> str:
    if not isinstance(raw, str) or not raw.strip():
        raise ValidationError(code)
    return raw.strip()


def parse_price(raw: Any) -> Decimal:
    """Accept numbers or strings like ``"$18.99"``; reject negatives."""
    if raw is None or raw == "":
        return Decimal("0")
    if isinstance(raw, bool):
        raise ValidationError("price_invalid")
    text = str(raw).strip().lstrip("$").replace(",", "")
    try:
        value = Decimal(text)
    except InvalidOperation as exc:
        raise ValidationError("price_invalid") from exc
    if not value.is_finite() or value < 0:
        raise ValidationError("price_invalid")
    return value.quantize(Decimal("0.01"))


def parse_published_date(raw: Any) -> Optional[date]:
    if raw is None or raw == "":
        return None
    if isinstance(raw, date):
        return raw
    if not isinstance(raw, str):
        raise ValidationError("published_date_invalid")
    text = raw.strip()
    try:
        if len(text) == 4 and text.isdigit():
            return date(int(text), 1, 1)
        return date.fromisoformat(text[:10])
    except ValueError as exc:
        raise ValidationError("published_date_invalid") from exc


def _parse_pages(raw: Any) -> Optional[int]:
    if raw is None or raw == "":
        return None
    if isinstance(raw, bool):
        raise ValidationError("pages_invalid")
    try:
        pages = int(raw)
    except (TypeError, ValueError) as exc:
        raise ValidationError("pages_invalid") from exc
    if pages <= 0:
        raise ValidationError("pages_invalid")
    return pages


def _parse_genres(payload: Mapping[str, Any]) -> tuple:
    raw = _pick(payload, "genres", "tags")
    if raw is None:
        category = _pick(payload, "category")
        raw = [category] if category is not None else []
    if isinstance(raw, str):
        raw = [part for part in raw.split(",")]
    if not isinstance(raw, (list, tuple)) or not all(isinstance(g, str) for g in raw):
        raise ValidationError("genres_invalid")
    return normalize_genres(raw)


def build_draft(payload: Mapping[str, Any]) -> BookDraft:
    """Validate a create-book payload (camelCase or snake_case keys)."""
    if not isinstance(payload, Mapping):
        raise ValidationError("payload_invalid")
    featured_raw = _pick(payload, "featured")
    if featured_raw is not None and not isinstance(featured_raw, bool):
        raise ValidationError("featured_invalid")
    return BookDraft(
        title=_required_text(_pick(payload, "title"), "title_required"),
        author=_required_text(_pick(payload, "author"), "author_required"),
        description=_optional_text(_pick(payload, "description")) or "",
        cover_image=_optional_text(_pick(payload, "coverImage", "cover_image")) or "",
        price=parse_price(_pick(payload, "price")),
        genres=_parse_genres(payload),
        featured=bool(featured_raw),
        published_date=parse_published_date(_pick(payload, "publishedDate", "published_date")),
        publisher=_optional_text(_pick(payload, "publisher")),
        pages=_parse_pages(_pick(payload, "pages", "page_count")),
        language=_optional_text(_pick(payload, "language")) or "English",
        isbn=_optional_text(_pick(payload, "isbn")),
    )


class BookCatalog:
    """Catalog access over a storage backend."""

    def __init__(self, backend: CatalogBackend) -> None:
        self._backend = backend

    def add_book(self, draft: BookDraft) -> Book:
        book = self._backend.add(draft)
        LOG.info("Created book id=%s title=%r", book.id, book.title)
        return book

    def create_book(self, payload: Mapping[str, Any]) -> Book:
        return self.add_book(build_draft(payload))

    def get_book(self, book_id: int) -> Optional[Book]:
        return self._backend.get(book_id)

    def require_book(self, book_id: int) -> Book:
        book = self._backend.get(book_id)
        if book is None:
            raise NotFoundError("book_not_found")
        return book

    def get_many(self, book_ids: Iterable[int]) -> Dict[int, Book]:
        return self._backend.get_many(book_ids)

    def all_books(self) -> List[Book]:
        return self._backend.list_all()

    def count(self) -> int:
        return self._backend.count()

    def featured(self, limit: int = DEFAULT_FEATURED_LIMIT) -> List[Book]:
        if limit <= 0:
            return []
        return [b for b in self._backend.list_all() if b.featured][:limit]


__all__ = [
    "BookCatalog",
    "build_draft",
    "parse_price",
    "parse_published_date",
    "DEFAULT_FEATURED_LIMIT",
]
