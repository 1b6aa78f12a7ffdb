"""Tests for the review routes, including AI refinement preview."""
from __future__ import annotations

import pytest

from bookshelf.services.container import build_services
from bookshelf.startup import create_app


class _UpperRefiner:
    enabled = True

    def refine(self, text):
        return text.upper()


@pytest.fixture
def app():
    services = build_services("memory", refiner=_UpperRefiner())
    services.catalog.create_book({"title": "Educated", "author": "Tara Westover"})
    app = create_app(services)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    client = app.test_client()
    with client.session_transaction() as sess:
        sess["user_id"] = 5
    return client


def test_list_requires_book_or_user(client):
    resp = client.get("/api/reviews")
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "book_or_user_required"


def test_create_and_list_review(client):
    resp = client.post(
        "/api/reviews",
        json={"bookId": 1, "title": "Moving", "content": "powerful memoir", "rating": 5, "useAiRefinement": True},
    )
    assert resp.status_code == 201
    created = resp.get_json()
    assert created["userId"] == 5
    assert created["content"] == "powerful memoir"
    assert created["aiRefinedContent"] == "POWERFUL MEMOIR"

    by_book = client.get("/api/reviews?bookId=1").get_json()
    by_user = client.get("/api/reviews?userId=5").get_json()
    assert [r["id"] for r in by_book] == [created["id"]]
    assert [r["id"] for r in by_user] == [created["id"]]


def test_create_review_validation(client):
    resp = client.post("/api/reviews", json={"bookId": 1, "title": "T", "content": "C", "rating": 9})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "rating_out_of_range"

    missing = client.post("/api/reviews", json={"bookId": 77, "title": "T", "content": "C", "rating": 3})
    assert missing.status_code == 404


def test_create_review_requires_login(app):
    resp = app.test_client().post("/api/reviews", json={"bookId": 1, "title": "T", "content": "C", "rating": 3})
    assert resp.status_code == 401


def test_refine_preview(client):
    resp = client.post("/api/reviews/refine", json={"content": "nice read"})
    assert resp.status_code == 200
    assert resp.get_json() == {"original": "nice read", "refined": "NICE READ"}

    empty = client.post("/api/reviews/refine", json={"content": "  "})
    assert empty.status_code == 400
    assert empty.get_json()["error"] == "content_required"
