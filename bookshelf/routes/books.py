"""Catalog routes.

GET  /api/books             : filtered, sorted, paginated listing
GET  /api/books/featured    : featured books
GET  /api/books/<id>        : book with reviews and average rating
POST /api/books             : create a book (authenticated)
"""
from __future__ import annotations

from typing import Any

from flask import Blueprint, jsonify, request

from bookshelf import config as app_config
from bookshelf.routes.common import (
    get_services,
    install_error_handlers,
    parse_bounded_int,
    parse_id,
)
from bookshelf.services.catalog_service import DEFAULT_FEATURED_LIMIT
from bookshelf.services.domain import BookFilters
from bookshelf.utils.identity import require_user_id
from bookshelf.utils.logging import get_logger

LOG = get_logger("books.routes")

bp = install_error_handlers(Blueprint("books", __name__, url_prefix="/api/books"))


@bp.route("", methods=["GET"])
def list_books():
    args = request.args
    page = parse_bounded_int(args.get("page"), 1, "page_invalid")
    limit = parse_bounded_int(
        args.get("limit"),
        app_config.default_page_size(),
        "limit_invalid",
        maximum=app_config.max_page_size(),
    )
    filters = BookFilters(
        search_term=args.get("search") or args.get("q"),
        genre=args.get("genre") or args.get("category"),
    )
    result = get_services().books.list(
        page=page,
        page_size=limit,
        filters=filters,
        sort=args.get("sort"),
        order=args.get("order"),
    )
    return jsonify(result.as_dict())


@bp.route("/featured", methods=["GET"])
def featured_books():
    limit = parse_bounded_int(
        request.args.get("limit"),
        DEFAULT_FEATURED_LIMIT,
        "limit_invalid",
        maximum=app_config.max_page_size(),
    )
    return jsonify([b.as_dict() for b in get_services().books.featured(limit)])


@bp.route("/<book_id>", methods=["GET"])
def get_book(book_id: str):
    bid = parse_id(book_id, "book_id_invalid")
    return jsonify(get_services().reviews.book_details(bid))


@bp.route("", methods=["POST"])
def create_book():
    user_id = require_user_id()
    payload: Any = request.get_json(silent=True)
    if payload is None:
        payload = {}
    book = get_services().catalog.create_book(payload)
    LOG.info("Book created via API id=%s by user_id=%s", book.id, user_id)
    return jsonify(book.as_dict()), 201


def register_books(app: Any) -> None:
    if "books" in app.blueprints:  # idempotent
        return
    app.register_blueprint(bp)
    LOG.debug("books blueprint registered")


__all__ = ["bp", "register_books"]
