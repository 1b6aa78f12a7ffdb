"""Reading-list routes for the signed-in user.

GET    /api/users/books            : shelf grouped by status
POST   /api/users/books            : {bookId, status} add or move a book
DELETE /api/users/books/<bookId>   : remove a book from the shelf
"""
from __future__ import annotations

from typing import Any

from flask import Blueprint, jsonify, request

from bookshelf.routes.common import get_services, install_error_handlers, parse_id
from bookshelf.services.errors import ValidationError
from bookshelf.services.reading_list import validate_status
from bookshelf.utils.identity import require_user_id
from bookshelf.utils.logging import get_logger

LOG = get_logger("reading_list.routes")

bp = install_error_handlers(Blueprint("reading_list", __name__, url_prefix="/api/users/books"))


@bp.route("", methods=["GET"])
def get_shelf():
    user_id = require_user_id()
    return jsonify(get_services().reading_list.get_for_user(user_id).as_dict())


@bp.route("", methods=["POST"])
def add_to_shelf():
    user_id = require_user_id()
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ValidationError("payload_invalid")
    book_id = parse_id(payload.get("bookId"), "book_id_invalid")
    status = validate_status(payload.get("status"))

    services = get_services()
    services.catalog.require_book(book_id)
    entry = services.reading_list.set_status(user_id, book_id, status)
    return jsonify({
        "message": "Book added to list successfully",
        "status": entry.status,
        "entry": entry.as_dict(),
    })


@bp.route("/<book_id>", methods=["DELETE"])
def remove_from_shelf(book_id: str):
    user_id = require_user_id()
    bid = parse_id(book_id, "book_id_invalid")
    removed = get_services().reading_list.remove(user_id, bid)
    message = "Book removed from list successfully" if removed else "Book was not on the list"
    return jsonify({"message": message, "removed": removed})


def register_reading_list(app: Any) -> None:
    if "reading_list" in app.blueprints:  # idempotent
        return
    app.register_blueprint(bp)
    LOG.debug("reading_list blueprint registered")


__all__ = ["bp", "register_reading_list"]
