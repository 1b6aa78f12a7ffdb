"""Database engine & session management.

A `Database` owns one SQLAlchemy engine and session factory. Instances are
constructed explicitly (see `bookshelf.startup.wiring`) and handed to the SQL
repositories; nothing here is a process-wide singleton.
"""
from __future__ import annotations

import os
import threading
try:  # POSIX file locking for gunicorn multi-worker safety
    import fcntl  # type: ignore
except ImportError:  # pragma: no cover - non-POSIX fallback
    fcntl = None  # type: ignore
from contextlib import contextmanager, nullcontext
from typing import Callable, Iterator, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session as SASession, sessionmaker
from sqlalchemy.pool import StaticPool

from bookshelf import config as app_config
from bookshelf.db.models import Base
from bookshelf.utils.logging import get_logger

LOG = get_logger("bookshelf.db")

MEMORY_PATH = ":memory:"


def _build_engine(db_path: str) -> Engine:
    if db_path == MEMORY_PATH:
        # One shared connection, otherwise every checkout sees an empty DB.
        return create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            future=True,
        )
    parent_dir = os.path.dirname(os.path.abspath(db_path)) or "."
    os.makedirs(parent_dir, exist_ok=True)
    if not os.access(parent_dir, os.W_OK):
        raise RuntimeError(f"bookshelf DB directory not writable: {parent_dir}")
    return create_engine(f"sqlite:///{db_path}", future=True)


class Database:
    """Engine + session factory for one SQLite database."""

    def __init__(self, db_path: Optional[str] = None) -> None:
        self.db_path = db_path or app_config.get_db_path()
        LOG.info("Initializing bookshelf database engine at %s", self.db_path)
        self.engine: Engine = _build_engine(self.db_path)
        self._session_factory: Callable[[], SASession] = sessionmaker(
            bind=self.engine, expire_on_commit=False, class_=SASession
        )
        self._lock = threading.Lock()
        # :memory: shares one connection; sessions must not interleave on it.
        self._session_lock = threading.RLock() if self.db_path == MEMORY_PATH else None

    def create_schema(self) -> None:
        """Create tables, serialized across processes when a file lock is available."""
        with self._lock:
            if self.db_path == MEMORY_PATH or fcntl is None:
                self._safe_create_schema()
                return
            parent_dir = os.path.dirname(os.path.abspath(self.db_path)) or "."
            lock_path = os.path.join(parent_dir, ".bookshelf_schema.lock")
            with open(lock_path, "w") as lf:  # lock file persists (harmless)
                try:
                    fcntl.flock(lf, fcntl.LOCK_EX)
                    self._safe_create_schema()
                finally:
                    fcntl.flock(lf, fcntl.LOCK_UN)
        LOG.debug("bookshelf schema ready")

    def _safe_create_schema(self) -> None:
        """Run metadata.create_all tolerating the 'already exists' start-up race."""
        try:
            Base.metadata.create_all(self.engine)
        except OperationalError as e:  # pragma: no cover - concurrency edge
            if "already exists" in str(e).lower():
                LOG.warning("Schema create encountered existing tables (benign race)")
            else:
                raise

    @contextmanager
    def session(self) -> Iterator[SASession]:
        with self._session_lock or nullcontext():
            sess = self._session_factory()
            try:
                yield sess
                sess.commit()
            except Exception:
                sess.rollback()
                raise
            finally:
                sess.close()

    def ping(self) -> bool:
        try:
            with self.session() as s:
                s.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            LOG.debug("DB ping failed: %s", exc)
            return False
        return True

    def dispose(self, drop: bool = False) -> None:
        if drop:
            try:
                Base.metadata.drop_all(self.engine)
            except SQLAlchemyError:
                LOG.warning("Failed dropping tables during dispose", exc_info=True)
        self.engine.dispose()


__all__ = ["Database", "MEMORY_PATH"]
