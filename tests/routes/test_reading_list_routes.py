"""Tests for the signed-in user's reading-list routes."""
from __future__ import annotations

import pytest

from bookshelf.services.container import build_services
from bookshelf.services.review_refiner import ReviewRefiner
from bookshelf.startup import create_app


@pytest.fixture
def app():
    services = build_services("memory", refiner=ReviewRefiner(None))
    services.catalog.create_book({"title": "Atomic Habits", "author": "James Clear"})
    services.catalog.create_book({"title": "Deep Work", "author": "Cal Newport"})
    app = create_app(services)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    client = app.test_client()
    with client.session_transaction() as sess:
        sess["user_id"] = 42
    return client


def test_shelf_requires_login(app):
    anonymous = app.test_client()
    assert anonymous.get("/api/users/books").status_code == 401
    assert anonymous.post("/api/users/books", json={"bookId": 1, "status": "reading"}).status_code == 401
    assert anonymous.delete("/api/users/books/1").status_code == 401


def test_add_move_and_list(client):
    resp = client.post("/api/users/books", json={"bookId": 1, "status": "want-to-read"})
    assert resp.status_code == 200
    assert resp.get_json()["status"] == "want-to-read"

    client.post("/api/users/books", json={"bookId": 2, "status": "reading"})
    client.post("/api/users/books", json={"bookId": 1, "status": "completed"})

    shelf = client.get("/api/users/books").get_json()
    assert [b["title"] for b in shelf["reading"]] == ["Deep Work"]
    assert [b["title"] for b in shelf["completed"]] == ["Atomic Habits"]
    assert shelf["wantToRead"] == []


@pytest.mark.parametrize(
    "payload, status_code, code",
    [
        ({"bookId": 1, "status": "finished"}, 400, "invalid_status"),
        ({"bookId": "abc", "status": "reading"}, 400, "book_id_invalid"),
        ({"status": "reading"}, 400, "book_id_invalid"),
        ({"bookId": 999, "status": "reading"}, 404, "book_not_found"),
    ],
)
def test_add_rejects_bad_requests(client, payload, status_code, code):
    resp = client.post("/api/users/books", json=payload)
    assert resp.status_code == status_code
    assert resp.get_json()["error"] == code


def test_remove_reports_result(client):
    client.post("/api/users/books", json={"bookId": 2, "status": "reading"})

    first = client.delete("/api/users/books/2")
    assert first.status_code == 200
    assert first.get_json()["removed"] is True

    second = client.delete("/api/users/books/2")
    assert second.get_json()["removed"] is False
    assert client.delete("/api/users/books/x").status_code == 400
