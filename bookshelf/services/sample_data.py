"""Sample catalog seed (books, reviews and two readers' shelves).

Only seeds an empty catalog, so it is safe to call on every start-up.
"""
from __future__ import annotations

from typing import Any, Dict, List, Tuple

from bookshelf.services.catalog_service import build_draft
from bookshelf.services.container import Services
from bookshelf.services.domain import COMPLETED, READING, WANT_TO_READ
from bookshelf.utils.logging import get_logger

LOG = get_logger("sample_data")

SAMPLE_BOOKS: List[Dict[str, Any]] = [
    {
        "title": "Atomic Habits",
        "author": "James Clear",
        "description": "Tiny changes, remarkable results. An easy and proven way to build good habits and break bad ones.",
        "coverImage": "https://images.unsplash.com/photo-1603186741833-4a7cf661bcc6?auto=format&fit=crop&w=500&q=60",
        "price": "$18.99",
        "genres": ["self-help"],
        "featured": True,
        "publishedDate": "2018-10-16",
        "publisher": "Penguin Random House",
        "pages": 320,
        "isbn": "978-0735211292",
    },
    {
        "title": "Deep Work",
        "author": "Cal Newport",
        "description": "Rules for focused success in a distracted world. Learn to focus without distraction.",
        "coverImage": "https://images.unsplash.com/photo-1544947950-fa07a98d237f?auto=format&fit=crop&w=500&q=60",
        "price": "$16.99",
        "genres": ["business"],
        "featured": True,
        "publishedDate": "2016-01-05",
        "publisher": "Grand Central Publishing",
        "pages": 296,
        "isbn": "978-1455586691",
    },
    {
        "title": "Thinking, Fast and Slow",
        "author": "Daniel Kahneman",
        "description": "A groundbreaking tour of the mind explaining the two systems that drive the way we think.",
        "coverImage": "https://images.unsplash.com/photo-1629992101753-56d196c8aabb?auto=format&fit=crop&w=500&q=60",
        "price": "$21.99",
        "genres": ["psychology"],
        "featured": True,
        "publishedDate": "2011-10-25",
        "publisher": "Farrar, Straus and Giroux",
        "pages": 499,
        "isbn": "978-0374533557",
    },
    {
        "title": "Educated",
        "author": "Tara Westover",
        "description": "A memoir about a girl who, kept out of school, leaves her survivalist family and goes on to earn a PhD.",
        "coverImage": "https://images.unsplash.com/photo-1525802637627-583e14033d80?auto=format&fit=crop&w=500&q=60",
        "price": "$14.99",
        "genres": ["biography"],
        "featured": True,
        "publishedDate": "2018-02-20",
        "publisher": "Random House",
        "pages": 334,
        "isbn": "978-0399590504",
    },
    {
        "title": "The Midnight Library",
        "author": "Matt Haig",
        "description": "Between life and death there is a library filled with books containing different versions of your life.",
        "coverImage": "https://images.unsplash.com/photo-1587387119725-9d6bac0f22fb?auto=format&fit=crop&w=300&q=80",
        "price": "$22.99",
        "genres": ["fiction"],
        "featured": False,
        "publishedDate": "2020-09-29",
        "publisher": "Viking",
        "pages": 304,
        "isbn": "978-0525559474",
    },
    {
        "title": "Project Hail Mary",
        "author": "Andy Weir",
        "description": "A lone astronaut must save the earth from disaster in this incredible new science-based thriller.",
        "coverImage": "https://images.unsplash.com/photo-1695653423053-08c5753c1924?auto=format&fit=crop&w=300&q=80",
        "price": "$24.99",
        "genres": ["science", "thriller"],
        "featured": False,
        "publishedDate": "2021-05-04",
        "publisher": "Ballantine Books",
        "pages": 496,
        "isbn": "978-0593135204",
    },
    {
        "title": "The Four Winds",
        "author": "Kristin Hannah",
        "description": "An epic novel of love and heroism and hope, set against the backdrop of the Great Depression.",
        "coverImage": "https://images.unsplash.com/photo-1633477189729-9290b3261d0a?auto=format&fit=crop&w=300&q=80",
        "price": "$19.99",
        "genres": ["fiction", "history"],
        "featured": False,
        "publishedDate": "2021-02-02",
        "publisher": "St. Martin's Press",
        "pages": 464,
        "isbn": "978-1250178602",
    },
    {
        "title": "The Lincoln Highway",
        "author": "Amor Towles",
        "description": "A captivating journey through 1950s America following the adventures of four boys.",
        "coverImage": "https://images.unsplash.com/photo-1589998059171-988d887df646?auto=format&fit=crop&w=500&q=60",
        "price": "$27.99",
        "genres": ["fiction"],
        "featured": False,
        "publishedDate": "2021-10-05",
        "publisher": "Viking",
        "pages": 592,
        "isbn": "978-0735222359",
    },
]

# (book index into SAMPLE_BOOKS, user_id, title, content, rating)
SAMPLE_REVIEWS: List[Tuple[int, int, str, str, int]] = [
    (
        7,
        1,
        "A captivating journey through time",
        "I couldn't put down \"The Lincoln Highway\" once I started. The characters feel real and the "
        "historical setting is meticulously researched.",
        4,
    ),
    (
        0,
        2,
        "Life-changing perspective on habits",
        "\"Atomic Habits\" breaks down the science of habit formation in a way that's both practical "
        "and inspiring.",
        5,
    ),
    (
        1,
        1,
        "An essential book for modern work",
        "Deep Work provides practical strategies for focusing in a distracted world.",
        4,
    ),
    (
        2,
        2,
        "Mind-blowing psychological insights",
        "Kahneman's explanations of System 1 and System 2 thinking changed how I understand my own "
        "decision making.",
        5,
    ),
]

# user_id -> [(book index, status)]
SAMPLE_SHELVES: Dict[int, List[Tuple[int, str]]] = {
    1: [(0, READING), (2, COMPLETED), (4, WANT_TO_READ)],
    2: [(1, READING), (3, COMPLETED), (5, WANT_TO_READ)],
}


def seed_sample_catalog(services: Services) -> Dict[str, Any]:
    """Populate an empty catalog; returns a summary of what was created."""
    existing = services.catalog.count()
    if existing:
        LOG.debug("Sample seed skipped; catalog already has %s books", existing)
        return {"seeded": False, "books": 0, "reviews": 0, "shelf_entries": 0}

    books = [services.catalog.add_book(build_draft(payload)) for payload in SAMPLE_BOOKS]
    for index, user_id, title, content, rating in SAMPLE_REVIEWS:
        services.reviews.create(
            user_id=user_id,
            book_id=books[index].id,
            title=title,
            content=content,
            rating=rating,
        )
    shelf_entries = 0
    for user_id, placements in SAMPLE_SHELVES.items():
        for index, status in placements:
            services.reading_list.set_status(user_id, books[index].id, status)
            shelf_entries += 1

    summary = {
        "seeded": True,
        "books": len(books),
        "reviews": len(SAMPLE_REVIEWS),
        "shelf_entries": shelf_entries,
    }
    LOG.info("Sample catalog seeded %s", summary)
    return summary


__all__ = ["seed_sample_catalog", "SAMPLE_BOOKS", "SAMPLE_REVIEWS", "SAMPLE_SHELVES"]
