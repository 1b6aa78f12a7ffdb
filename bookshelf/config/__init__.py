"""Application configuration accessors.

Centralizes environment variable parsing & defaults. Accessors are plain
functions read at call time so tests can monkeypatch the environment.
"""
from __future__ import annotations

import os
from functools import lru_cache

APP_NAME = "bookshelf"
APP_VERSION = "0.4.0"
APP_DESCRIPTION = "Book discovery, reading lists and reviews API"

DEFAULT_DB_PATH = "bookshelf.db"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_STORAGE = "sql"
DEFAULT_PAGE_SIZE = 10
DEFAULT_MAX_PAGE_SIZE = 100
DEFAULT_AI_MODEL = "gpt-4o"
DEFAULT_AI_TIMEOUT = 15.0
DEFAULT_OPENAI_API_BASE = "https://api.openai.com/v1"
_STORAGE_KINDS = {"sql", "memory"}
_TRUE = {"1", "true", "yes", "on"}


def _raw_env(name: str, default: str | None = None) -> str | None:
    val = os.getenv(name)
    return val if val is not None else default


def _stripped_env(name: str) -> str | None:
    value = os.getenv(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def env_bool(name: str, default: bool = False) -> bool:
    raw = _raw_env(name, str(default).lower())
    if raw is None:
        return default
    return raw.lower() in _TRUE


def env_int(name: str, default: int) -> int:
    raw = _stripped_env(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def env_float(name: str, default: float) -> float:
    raw = _stripped_env(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def storage_kind() -> str:
    """Selected storage backend: ``sql`` (default) or ``memory``."""
    raw = (_raw_env("BOOKSHELF_STORAGE", DEFAULT_STORAGE) or DEFAULT_STORAGE).strip().lower()
    return raw if raw in _STORAGE_KINDS else DEFAULT_STORAGE


def get_db_path() -> str:
    raw = _raw_env("BOOKSHELF_DB_PATH", DEFAULT_DB_PATH) or DEFAULT_DB_PATH
    if raw != ":memory:" and not os.path.isabs(raw):
        data_dir = _stripped_env("BOOKSHELF_DATA_DIR")
        if data_dir:
            return os.path.join(data_dir, raw)
    return raw


def log_level_name() -> str:
    return (_raw_env("BOOKSHELF_LOG_LEVEL", DEFAULT_LOG_LEVEL) or DEFAULT_LOG_LEVEL).upper()


def seed_sample_enabled() -> bool:
    return env_bool("BOOKSHELF_SEED_SAMPLE", default=False)


def default_page_size() -> int:
    return max(1, env_int("BOOKSHELF_DEFAULT_PAGE_SIZE", DEFAULT_PAGE_SIZE))


def max_page_size() -> int:
    return max(default_page_size(), env_int("BOOKSHELF_MAX_PAGE_SIZE", DEFAULT_MAX_PAGE_SIZE))


def secret_key() -> str:
    return _stripped_env("BOOKSHELF_SECRET_KEY") or "bookshelf-dev-secret"


def openai_api_key() -> str | None:
    """Return OPENAI_API_KEY from environment (no default)."""
    return _stripped_env("OPENAI_API_KEY")


def openai_api_base() -> str:
    return (_stripped_env("OPENAI_API_BASE") or DEFAULT_OPENAI_API_BASE).rstrip("/")


def ai_model() -> str:
    return _stripped_env("BOOKSHELF_AI_MODEL") or DEFAULT_AI_MODEL


def ai_timeout() -> float:
    return max(1.0, env_float("BOOKSHELF_AI_TIMEOUT", DEFAULT_AI_TIMEOUT))


@lru_cache(maxsize=1)
def metadata() -> dict:
    return {
        "name": APP_NAME,
        "version": APP_VERSION,
        "description": APP_DESCRIPTION,
    }


def summarize_runtime_config() -> dict:
    return {
        "storage": storage_kind(),
        "db_path": get_db_path(),
        "log_level": log_level_name(),
        "ai_enabled": openai_api_key() is not None,
    }


__all__ = [
    "APP_NAME",
    "APP_VERSION",
    "APP_DESCRIPTION",
    "env_bool",
    "env_int",
    "env_float",
    "storage_kind",
    "get_db_path",
    "log_level_name",
    "seed_sample_enabled",
    "default_page_size",
    "max_page_size",
    "secret_key",
    "openai_api_key",
    "openai_api_base",
    "ai_model",
    "ai_timeout",
    "metadata",
    "summarize_runtime_config",
]
