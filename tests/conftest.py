"""Shared fixtures: isolated environment and per-backend service graphs."""
from __future__ import annotations

import pytest

from bookshelf.db import MEMORY_PATH, Database
from bookshelf.services.container import build_services
from bookshelf.services.review_refiner import ReviewRefiner


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    for name in (
        "OPENAI_API_KEY",
        "BOOKSHELF_SEED_SAMPLE",
        "BOOKSHELF_STORAGE",
        "BOOKSHELF_DATA_DIR",
        "BOOKSHELF_DEFAULT_PAGE_SIZE",
        "BOOKSHELF_MAX_PAGE_SIZE",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("BOOKSHELF_DB_PATH", MEMORY_PATH)


@pytest.fixture(params=["memory", "sql"])
def services(request):
    db = Database(MEMORY_PATH) if request.param == "sql" else None
    built = build_services(request.param, db=db, refiner=ReviewRefiner(None))
    yield built
    if db is not None:
        db.dispose(drop=True)
