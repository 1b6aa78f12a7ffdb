"""Reading-list behaviour against both storage backends."""
from __future__ import annotations

import threading
from datetime import datetime, timedelta

import pytest

from bookshelf.db import MEMORY_PATH, Database
from bookshelf.db.repositories import MemoryCatalog, MemoryReadingList, SqlCatalog, SqlReadingList
from bookshelf.services.catalog_service import BookCatalog
from bookshelf.services.domain import COMPLETED, READING, WANT_TO_READ, BookDraft
from bookshelf.services.errors import ValidationError
from bookshelf.services.reading_list import ReadingListStore


class _Clock:
    def __init__(self) -> None:
        self.now = datetime(2024, 3, 1, 9, 0, 0)

    def __call__(self) -> datetime:
        current = self.now
        self.now += timedelta(minutes=1)
        return current


@pytest.fixture(params=["memory", "sql"])
def backends(request):
    if request.param == "memory":
        yield MemoryCatalog(), MemoryReadingList()
        return
    db = Database(MEMORY_PATH)
    db.create_schema()
    yield SqlCatalog(db), SqlReadingList(db)
    db.dispose(drop=True)


@pytest.fixture
def catalog(backends):
    return BookCatalog(backends[0])


@pytest.fixture
def store(backends, catalog):
    return ReadingListStore(backends[1], catalog, clock=_Clock())


@pytest.fixture
def books(catalog):
    return [
        catalog.add_book(BookDraft(title=title, author="Author"))
        for title in ("Atomic Habits", "Deep Work", "Educated")
    ]


def _titles(group):
    return [b.title for b in group]


def test_set_status_places_book_in_matching_group(store, books):
    entry = store.set_status(1, books[0].id, READING)

    assert entry.status == READING
    shelf = store.get_for_user(1)
    assert _titles(shelf.reading) == ["Atomic Habits"]
    assert shelf.want_to_read == [] and shelf.completed == []


def test_changing_status_moves_book_and_keeps_added_at(store, books):
    first = store.set_status(1, books[0].id, WANT_TO_READ)
    second = store.set_status(1, books[0].id, COMPLETED)

    assert second.added_at == first.added_at
    shelf = store.get_for_user(1)
    assert shelf.want_to_read == []
    assert _titles(shelf.completed) == ["Atomic Habits"]
    assert store.get_entry(1, books[0].id).status == COMPLETED


def test_setting_same_status_twice_is_idempotent(store, books):
    store.set_status(1, books[1].id, READING)
    store.set_status(1, books[1].id, READING)

    shelf = store.get_for_user(1)
    assert _titles(shelf.reading) == ["Deep Work"]


def test_groups_keep_first_added_order(store, books):
    store.set_status(1, books[0].id, READING)
    store.set_status(1, books[1].id, READING)
    store.set_status(1, books[0].id, COMPLETED)
    store.set_status(1, books[0].id, READING)

    assert _titles(store.get_for_user(1).reading) == ["Atomic Habits", "Deep Work"]


def test_invalid_status_is_rejected_without_side_effects(store, books):
    with pytest.raises(ValidationError) as excinfo:
        store.set_status(1, books[0].id, "finished")

    assert excinfo.value.code == "invalid_status"
    assert store.get_entry(1, books[0].id) is None


def test_remove_reports_whether_an_entry_existed(store, books):
    store.set_status(1, books[2].id, READING)

    assert store.remove(1, books[2].id) is True
    assert store.remove(1, books[2].id) is False
    assert store.get_for_user(1).reading == []


def test_users_do_not_see_each_other(store, books):
    store.set_status(1, books[0].id, READING)
    store.set_status(2, books[0].id, COMPLETED)

    assert _titles(store.get_for_user(1).reading) == ["Atomic Habits"]
    assert store.get_for_user(1).completed == []
    assert _titles(store.get_for_user(2).completed) == ["Atomic Habits"]


def test_unknown_user_gets_empty_shelf(store):
    shelf = store.get_for_user(404)
    assert shelf.as_dict() == {"reading": [], "wantToRead": [], "completed": []}


def test_entries_for_missing_books_are_skipped(store, books):
    store.set_status(1, 999, READING)
    store.set_status(1, books[0].id, READING)

    assert _titles(store.get_for_user(1).reading) == ["Atomic Habits"]




def test_want_to_read_then_reading_lands_only_in_reading(catalog, store):
    for idx in range(5):
        catalog.add_book(BookDraft(title=f"Book #{idx + 1}", author="Author"))

    store.set_status(1, 5, WANT_TO_READ)
    store.set_status(1, 5, READING)

    shelf = store.get_for_user(1)
    assert [b.id for b in shelf.reading] == [5]
    assert shelf.want_to_read == []
    assert shelf.completed == []


def _run_threads(targets):
    errors = []

    def wrap(fn):
        def runner():
            try:
                fn()
            except Exception as exc:  # collected and asserted below
                errors.append(exc)
        return runner

    threads = [threading.Thread(target=wrap(fn)) for fn in targets]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    return errors


def test_parallel_writes_for_different_pairs_do_not_interfere(catalog, store):
    book_ids = [catalog.add_book(BookDraft(title=f"Parallel {i}", author="A")).id for i in range(20)]
    user_ids = range(1, 7)

    def shelve(user_id):
        return lambda: [store.set_status(user_id, book_id, READING) for book_id in book_ids]

    errors = _run_threads([shelve(uid) for uid in user_ids])

    assert errors == []
    for uid in user_ids:
        assert [b.id for b in store.get_for_user(uid).reading] == book_ids


def test_parallel_writes_for_same_pair_keep_one_entry(catalog, store, books):
    statuses = [READING, WANT_TO_READ, COMPLETED] * 4

    def write(status):
        return lambda: store.set_status(9, books[0].id, status)

    errors = _run_threads([write(s) for s in statuses])

    assert errors == []
    shelf = store.get_for_user(9)
    groups = [shelf.reading, shelf.want_to_read, shelf.completed]
    assert sum(len(g) for g in groups) == 1
    assert store.get_entry(9, books[0].id).status in statuses
