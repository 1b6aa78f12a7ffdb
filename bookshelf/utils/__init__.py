"""Utility helpers."""
from .identity import (
    AuthenticationRequired,
    coerce_user_id,
    get_current_user_id,
    require_user_id,
)

__all__ = [
    "AuthenticationRequired",
    "coerce_user_id",
    "get_current_user_id",
    "require_user_id",
]
