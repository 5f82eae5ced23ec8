"""SQLite-backed coffee store.

The conditional write is a single statement:

    UPDATE coffee SET name = ?, version = ? WHERE id = ? AND version = ?

Zero affected rows means either the record is gone or someone else bumped the
version first; a follow-up read tells the two apart.
"""

from __future__ import annotations

import logging
import os
import sqlite3
from threading import RLock

from .models import Coffee
from .store import CoffeeStore, RecordMissingError, StaleRecordError


log = logging.getLogger("coffee_service.sqlite_store")

_SCHEMA = """
CREATE TABLE IF NOT EXISTS coffee (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    version INTEGER NOT NULL
)
"""


def _row_to_coffee(row: sqlite3.Row) -> Coffee:
    return Coffee(id=row["id"], name=row["name"], version=row["version"])


class SqliteCoffeeStore(CoffeeStore):
    """Coffee store on a single SQLite connection.

    AUTOINCREMENT keeps ids from being reused after deletes. The connection is
    shared across request threads, so every statement runs under a lock.
    """

    def __init__(self, db_path: str = "coffee.db") -> None:
        self.db_path = db_path if db_path == ":memory:" else os.path.expanduser(db_path)
        if self.db_path != ":memory:":
            directory = os.path.dirname(self.db_path)
            if directory:
                os.makedirs(directory, exist_ok=True)

        self._lock = RLock()
        self._conn = sqlite3.connect(self.db_path, check_same_thread=False, isolation_level=None)
        self._conn.row_factory = sqlite3.Row
        self._conn.execute(_SCHEMA)
        log.info("sqlite coffee store ready at %s", self.db_path)

    def find_by_id(self, coffee_id: int) -> Coffee | None:
        with self._lock:
            row = self._conn.execute(
                "SELECT id, name, version FROM coffee WHERE id = ?", (coffee_id,)
            ).fetchone()
        return _row_to_coffee(row) if row is not None else None

    def find_all(self) -> list[Coffee]:
        with self._lock:
            rows = self._conn.execute("SELECT id, name, version FROM coffee ORDER BY id").fetchall()
        return [_row_to_coffee(r) for r in rows]

    def find_by_name(self, name: str) -> list[Coffee]:
        with self._lock:
            rows = self._conn.execute(
                "SELECT id, name, version FROM coffee WHERE name = ? ORDER BY id", (name,)
            ).fetchall()
        return [_row_to_coffee(r) for r in rows]

    def insert(self, coffee: Coffee) -> Coffee:
        with self._lock:
            cursor = self._conn.execute(
                "INSERT INTO coffee (name, version) VALUES (?, ?)", (coffee.name, coffee.version)
            )
            new_id = cursor.lastrowid
        return Coffee(id=new_id, name=coffee.name, version=coffee.version)

    def save(self, coffee: Coffee, *, expected_version: int | None = None) -> Coffee:
        if coffee.id is None:
            raise ValueError("cannot save a coffee without an id; use insert()")

        with self._lock:
            if expected_version is None:
                cursor = self._conn.execute(
                    "UPDATE coffee SET name = ?, version = ? WHERE id = ?",
                    (coffee.name, coffee.version, coffee.id),
                )
            else:
                cursor = self._conn.execute(
                    "UPDATE coffee SET name = ?, version = ? WHERE id = ? AND version = ?",
                    (coffee.name, coffee.version, coffee.id, expected_version),
                )

            if cursor.rowcount == 0:
                current = self.find_by_id(coffee.id)
                if current is None:
                    raise RecordMissingError(coffee.id)
                raise StaleRecordError(coffee.id, expected=expected_version, current=current.version)

        return coffee.copy()

    def delete_by_id(self, coffee_id: int) -> bool:
        with self._lock:
            cursor = self._conn.execute("DELETE FROM coffee WHERE id = ?", (coffee_id,))
        return cursor.rowcount > 0

    def close(self) -> None:
        with self._lock:
            self._conn.close()
