"""Tests for the sample catalog seed."""
from __future__ import annotations

from sqlalchemy.exc import OperationalError

from bookshelf.services.sample_data import SAMPLE_BOOKS, SAMPLE_REVIEWS, seed_sample_catalog
from bookshelf.startup import seed


def test_seed_populates_empty_catalog_once(services):
    summary = seed_sample_catalog(services)

    assert summary["seeded"] is True
    assert services.catalog.count() == len(SAMPLE_BOOKS)
    assert sum(len(services.reviews.list_for_book(b.id)) for b in services.catalog.all_books()) == len(SAMPLE_REVIEWS)

    again = seed_sample_catalog(services)
    assert again["seeded"] is False
    assert services.catalog.count() == len(SAMPLE_BOOKS)


def test_seeded_shelves_and_featured(services):
    seed_sample_catalog(services)

    shelf = services.reading_list.get_for_user(1)
    assert [b.title for b in shelf.reading] == ["Atomic Habits"]
    assert [b.title for b in shelf.completed] == ["Thinking, Fast and Slow"]
    assert [b.title for b in shelf.want_to_read] == ["The Midnight Library"]
    assert [b.title for b in services.books.featured(4)] == [
        "Atomic Habits",
        "Deep Work",
        "Thinking, Fast and Slow",
        "Educated",
    ]


def test_seed_command_reports_storage_failure(monkeypatch, capsys):
    def broken_build(*_a, **_k):
        raise OperationalError("CREATE TABLE books", {}, Exception("unable to open database file"))

    monkeypatch.setattr(seed, "build_services", broken_build)

    assert seed.main() == 3
    assert "[SEED] catalog ERROR" in capsys.readouterr().err


def test_seed_command_seeds_memory_storage(monkeypatch, capsys):
    monkeypatch.setenv("BOOKSHELF_STORAGE", "memory")

    assert seed.main() == 0
    out = capsys.readouterr().out
    assert "[SEED] catalog ok storage=memory created=yes" in out
