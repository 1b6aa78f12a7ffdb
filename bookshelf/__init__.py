"""Bookshelf application package.

Book catalog queries, per-user reading lists and reviews behind a small Flask
JSON API. Use `bookshelf.startup.create_app` to build an application.
"""

__all__ = [
]
