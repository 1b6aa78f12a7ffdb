"""HTTP blueprints."""
from __future__ import annotations

from typing import Any

from .books import register_books
from .health import register_health
from .reading_list import register_reading_list
from .reviews import register_reviews


def register_all(app: Any) -> None:
    register_health(app)
    register_books(app)
    register_reading_list(app)
    register_reviews(app)


__all__ = [
    "register_all",
    "register_books",
    "register_health",
    "register_reading_list",
    "register_reviews",
]
