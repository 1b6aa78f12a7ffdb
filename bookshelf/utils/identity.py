"""Identity helpers for request handlers."""
from __future__ import annotations

from typing import Any, Optional

from flask import session

SESSION_USER_KEY = "user_id"


class AuthenticationRequired(Exception):
    pass


def coerce_user_id(raw: Any) -> Optional[int]:
    if raw is None or isinstance(raw, bool):
        return None
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return None
    return value if value > 0 else None


def get_current_user_id() -> Optional[int]:
    return coerce_user_id(session.get(SESSION_USER_KEY))


def require_user_id() -> int:
    user_id = get_current_user_id()
    if user_id is None:
        raise AuthenticationRequired("Not authenticated")
    return user_id


__all__ = [
    "SESSION_USER_KEY",
    "AuthenticationRequired",
    "coerce_user_id",
    "get_current_user_id",
    "require_user_id",
]
