"""A small on-disk key-value store with atomic batch writes."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from types import TracebackType


@dataclass
class WriteBatch:
    """Key-value pairs collected in memory and written to a store in one go."""

    items: list[tuple[bytes, bytes]] = field(default_factory=list)

    def put(self, key: bytes, value: bytes) -> None:
        self.items.append((bytes(key), bytes(value)))

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[tuple[bytes, bytes]]:
        return iter(self.items)


class DiskKV:
    """Key-value database kept in a directory on disk."""

    DEFAULT_PATH = "./db/verkle_db"
    _FILE_NAME = "kv.sqlite3"

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.path.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(self.path / self._FILE_NAME)
        with self._conn:
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS kv (key BLOB PRIMARY KEY, value BLOB NOT NULL)"
            )

    @classmethod
    def open_default(cls) -> DiskKV:
        """Open the database at ``DEFAULT_PATH``."""
        return cls(cls.DEFAULT_PATH)

    def fetch(self, key: bytes) -> bytes | None:
        """Return the value stored at ``key``, or None."""
        row = self._conn.execute(
            "SELECT value FROM kv WHERE key = ?", (bytes(key),)
        ).fetchone()
        return None if row is None else bytes(row[0])

    def flush(self, batch: WriteBatch) -> None:
        """Write every pair of ``batch`` atomically, later puts winning."""
        with self._conn:
            self._conn.executemany(
                "INSERT OR REPLACE INTO kv (key, value) VALUES (?, ?)", list(batch)
            )

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> DiskKV:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()