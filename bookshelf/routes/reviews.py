"""Review routes.

GET  /api/reviews?bookId=|userId=  : reviews for a book or by a user
POST /api/reviews                  : create a review (authenticated)
POST /api/reviews/refine           : AI-refined preview of review text
"""
from __future__ import annotations

from typing import Any

from flask import Blueprint, jsonify, request

from bookshelf.routes.common import get_services, install_error_handlers, json_error, parse_id
from bookshelf.services.errors import ValidationError
from bookshelf.utils.identity import require_user_id
from bookshelf.utils.logging import get_logger

LOG = get_logger("reviews.routes")

bp = install_error_handlers(Blueprint("reviews", __name__, url_prefix="/api/reviews"))


@bp.route("", methods=["GET"])
def list_reviews():
    services = get_services()
    book_raw = request.args.get("bookId")
    user_raw = request.args.get("userId")
    if book_raw:
        reviews = services.reviews.list_for_book(parse_id(book_raw, "book_id_invalid"))
    elif user_raw:
        reviews = services.reviews.list_for_user(parse_id(user_raw, "user_id_invalid"))
    else:
        return json_error("book_or_user_required", 400)
    return jsonify([r.as_dict() for r in reviews])


@bp.route("", methods=["POST"])
def create_review():
    user_id = require_user_id()
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ValidationError("payload_invalid")
    use_ai = payload.get("useAiRefinement", False)
    if not isinstance(use_ai, bool):
        raise ValidationError("payload_invalid")
    review = get_services().reviews.create(
        user_id=user_id,
        book_id=parse_id(payload.get("bookId"), "book_id_invalid"),
        title=payload.get("title"),
        content=payload.get("content"),
        rating=payload.get("rating"),
        use_ai_refinement=use_ai,
    )
    return jsonify(review.as_dict()), 201


@bp.route("/refine", methods=["POST"])
def refine_review():
    require_user_id()
    payload: Any = request.get_json(silent=True) or {}
    content = payload.get("content") if isinstance(payload, dict) else None
    if not isinstance(content, str) or not content.strip():
        return json_error("content_required", 400)
    refined = get_services().reviews.refine(content)
    return jsonify({"original": content, "refined": refined})


def register_reviews(app: Any) -> None:
    if "reviews" in app.blueprints:  # idempotent
        return
    app.register_blueprint(bp)
    LOG.debug("reviews blueprint registered")


__all__ = ["bp", "register_reviews"]
