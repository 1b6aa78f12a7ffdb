"""Review creation, listing and average ratings."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from bookshelf.db.repositories.base import ReviewBackend
from bookshelf.services.catalog_service import BookCatalog
from bookshelf.services.domain import Review, ReviewDraft
from bookshelf.services.errors import ValidationError
from bookshelf.services.review_refiner import ReviewRefiner
from bookshelf.utils.logging import get_logger

LOG = get_logger("reviews_service")
MIN_RATING = 1
MAX_RATING = 5


def _validate_rating(rating: Any) -> int:
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise ValidationError("rating_invalid")
    if not MIN_RATING <= rating <= MAX_RATING:
        raise ValidationError("rating_out_of_range")
    return rating


def _validate_text(value: Any, code: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(code)
    return value.strip()


class ReviewService:
    def __init__(
        self,
        backend: ReviewBackend,
        catalog: BookCatalog,
        refiner: Optional[ReviewRefiner] = None,
    ) -> None:
        self._backend = backend
        self._catalog = catalog
        self._refiner = refiner

    def create(
        self,
        *,
        user_id: int,
        book_id: int,
        title: str,
        content: str,
        rating: int,
        use_ai_refinement: bool = False,
    ) -> Review:
        clean_title = _validate_text(title, "title_required")
        clean_content = _validate_text(content, "content_required")
        clean_rating = _validate_rating(rating)
        self._catalog.require_book(book_id)

        refined: Optional[str] = None
        if use_ai_refinement:
            candidate = self.refine(clean_content)
            refined = candidate if candidate != clean_content else None

        review = self._backend.add(
            ReviewDraft(
                book_id=book_id,
                user_id=user_id,
                title=clean_title,
                content=clean_content,
                rating=clean_rating,
                ai_refined_content=refined,
            )
        )
        LOG.info(
            "Created review id=%s book_id=%s user_id=%s rating=%s refined=%s",
            review.id,
            book_id,
            user_id,
            clean_rating,
            refined is not None,
        )
        return review

    def refine(self, content: str) -> str:
        if self._refiner is None:
            return content
        return self._refiner.refine(content)

    def list_for_book(self, book_id: int) -> List[Review]:
        return self._backend.list_for_book(book_id)

    def list_for_user(self, user_id: int) -> List[Review]:
        return self._backend.list_for_user(user_id)

    def average_ratings(self) -> Dict[int, float]:
        return self._backend.average_ratings()

    def average_rating(self, book_id: int) -> float:
        reviews = self._backend.list_for_book(book_id)
        if not reviews:
            return 0.0
        return sum(r.rating for r in reviews) / len(reviews)

    def book_details(self, book_id: int) -> Dict[str, Any]:
        """Book record with its reviews, average rating and review count."""
        book = self._catalog.require_book(book_id)
        reviews = self._backend.list_for_book(book_id)
        average = sum(r.rating for r in reviews) / len(reviews) if reviews else 0.0
        return {
            "book": book.as_dict(),
            "reviews": [r.as_dict() for r in reviews],
            "averageRating": average,
            "reviewCount": len(reviews),
        }


__all__ = ["ReviewService", "MIN_RATING", "MAX_RATING"]
