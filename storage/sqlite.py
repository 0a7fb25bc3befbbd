"""SQLite handle shared by the persistence layer."""
from __future__ import annotations

import os
import sqlite3
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import ContextManager, Iterator, Optional

from config.settings import settings


def utc_now() -> str:
    """Current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


class Database:  # Explicitly constructed data-access handle
    def __init__(self, path: str | Path, *, timeout_s: Optional[float] = None) -> None:
        self._path = Path(path)
        self._timeout_s = timeout_s if timeout_s is not None else settings.DB_TIMEOUT_S
        self._local = threading.local()

    @classmethod
    def from_settings(cls) -> "Database":  # Build a handle from application settings
        return cls(settings.DB_PATH, timeout_s=settings.DB_TIMEOUT_S)

    @property
    def path(self) -> Path:
        return self._path

    def _open(self) -> sqlite3.Connection:
        directory = os.path.dirname(str(self._path)) or "."
        os.makedirs(directory, exist_ok=True)
        conn = sqlite3.connect(self._path, timeout=self._timeout_s, isolation_level=None)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    def _active(self) -> Optional[sqlite3.Connection]:
        return getattr(self._local, "conn", None)

    @contextmanager
    def _unit(self, begin: str) -> Iterator[sqlite3.Connection]:
        conn = self._open()
        try:
            conn.execute(begin)
            yield conn
            conn.execute("COMMIT")
        except BaseException:
            if conn.in_transaction:
                conn.execute("ROLLBACK")
            raise
        finally:
            conn.close()

    @contextmanager
    def connect(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection for a short unit of work.

        Joins the transaction already open on this thread, if any.
        """

        active = self._active()
        if active is not None:
            yield active
            return
        with self._unit("BEGIN") as conn:
            yield conn

    @contextmanager
    def _joined(self, begin: str) -> Iterator[sqlite3.Connection]:
        active = self._active()
        if active is not None:
            yield active
            return
        with self._unit(begin) as conn:
            self._local.conn = conn
            try:
                yield conn
            finally:
                self._local.conn = None

    def transaction(self) -> ContextManager[sqlite3.Connection]:
        """Yield a connection holding the database write lock until exit.

        ``BEGIN IMMEDIATE`` serializes writers across threads and processes;
        everything done through this handle on the same thread joins the
        transaction and commits or rolls back with it.
        """
        return self._joined("BEGIN IMMEDIATE")

    def snapshot(self) -> ContextManager[sqlite3.Connection]:
        """Yield a connection that the thread's reads share until exit.

        Several store reads made inside see one consistent database state.
        """
        return self._joined("BEGIN")


__all__ = ["Database", "utc_now"]
