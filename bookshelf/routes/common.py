"""Shared helpers for API blueprints: service lookup, JSON errors, parsing."""
from __future__ import annotations

from typing import Any, Dict, Optional

from flask import Blueprint, current_app, jsonify
from sqlalchemy.exc import SQLAlchemyError

from bookshelf.services.container import Services
from bookshelf.services.errors import NotFoundError, ValidationError
from bookshelf.utils.identity import AuthenticationRequired
from bookshelf.utils.logging import get_logger

LOG = get_logger("bookshelf.routes")
EXTENSION_KEY = "bookshelf"

_ERROR_MESSAGES = {
    "not_authenticated": "Not authenticated",
    "invalid_status": "Status must be one of: reading, want-to-read, completed.",
    "book_id_invalid": "Invalid book ID",
    "user_id_invalid": "Invalid user ID",
    "book_not_found": "Book not found",
    "page_invalid": "Page must be a positive integer.",
    "limit_invalid": "Limit must be a positive integer within the allowed range.",
    "book_or_user_required": "Either bookId or userId is required",
    "content_required": "Review content is required",
    "title_required": "Title is required",
    "author_required": "Author is required",
    "rating_invalid": "Rating must be an integer.",
    "rating_out_of_range": "Rating must be between 1 and 5.",
    "price_invalid": "Price must be a non-negative number.",
    "published_date_invalid": "Published date must be an ISO date (YYYY-MM-DD).",
    "pages_invalid": "Pages must be a positive integer.",
    "genres_invalid": "Genres must be a list of strings.",
    "featured_invalid": "Featured must be a boolean.",
    "payload_invalid": "Request body must be a JSON object.",
    "text_field_invalid": "Text fields must be strings.",
    "storage_error": "Internal server error",
}


def json_error(code: str, status: int = 400, *, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
    payload: Dict[str, Any] = {"error": code}
    final = message or _ERROR_MESSAGES.get(code)
    if final:
        payload["message"] = final
    if details is not None:
        payload["details"] = details
    return jsonify(payload), status


def get_services() -> Services:
    services = current_app.extensions.get(EXTENSION_KEY)
    if services is None:
        raise RuntimeError("bookshelf services not initialized on this app")
    return services


def parse_id(raw: Any, code: str) -> int:
    """Positive integer ids from path/query/body values; bools are rejected."""
    if raw is None or isinstance(raw, (bool, float)):
        raise ValidationError(code)
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError) as exc:
        raise ValidationError(code) from exc
    if value <= 0:
        raise ValidationError(code)
    return value


def parse_bounded_int(raw: Any, default: int, code: str, *, maximum: Optional[int] = None) -> int:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return default
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError) as exc:
        raise ValidationError(code) from exc
    if value < 1 or (maximum is not None and value > maximum):
        raise ValidationError(code)
    return value


def _on_validation_error(exc: ValidationError):
    return json_error(exc.code, 400)


def _on_not_found(exc: NotFoundError):
    return json_error(exc.code, 404)


def _on_auth_required(_exc: AuthenticationRequired):
    return json_error("not_authenticated", 401)


def _on_storage_error(exc: SQLAlchemyError):
    LOG.error("Storage failure: %s", exc, exc_info=True)
    return json_error("storage_error", 500)


def install_error_handlers(bp: Blueprint) -> Blueprint:
    bp.register_error_handler(ValidationError, _on_validation_error)
    bp.register_error_handler(NotFoundError, _on_not_found)
    bp.register_error_handler(AuthenticationRequired, _on_auth_required)
    bp.register_error_handler(SQLAlchemyError, _on_storage_error)
    return bp


__all__ = [
    "EXTENSION_KEY",
    "json_error",
    "get_services",
    "parse_id",
    "parse_bounded_int",
    "install_error_handlers",
]
