from __future__ import annotations

import json
import logging
import sqlite3
from pathlib import Path
from typing import Iterable, List, NamedTuple, Optional

from .models import CanonicalRecord

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path("json") / "pokemon.db"


class StoredRecord(NamedTuple):
    id: int
    record: CanonicalRecord


class PokemonStore:
    """SQLite-backed store for canonical records.

    Rows get a database-assigned integer id; the record itself is kept as its
    JSON payload.
    """

    def __init__(self, path: Path | str = DEFAULT_DB_PATH):
        self.path = Path(path)

    def _connect(self) -> sqlite3.Connection:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.path)
        with conn:
            conn.execute(
                "CREATE TABLE IF NOT EXISTS pokemon ("
                "id INTEGER PRIMARY KEY AUTOINCREMENT, "
                "name TEXT NOT NULL, "
                "payload TEXT NOT NULL)"
            )
        return conn

    def reset(self) -> None:
        if self.path.exists():
            self.path.unlink()

    def insert_many(self, records: Iterable[CanonicalRecord]) -> int:
        """Insert *records* in one transaction; either all rows land or none."""
        rows = [
            (record.name, json.dumps(record.to_json_dict(), ensure_ascii=False))
            for record in records
        ]
        conn = self._connect()
        try:
            with conn:
                conn.executemany("INSERT INTO pokemon(name, payload) VALUES (?, ?)", rows)
        finally:
            conn.close()
        logger.info("Inserted %d records into %s", len(rows), self.path)
        return len(rows)

    def load_all(self) -> List[StoredRecord]:
        conn = self._connect()
        try:
            rows = conn.execute("SELECT id, payload FROM pokemon ORDER BY id").fetchall()
        finally:
            conn.close()
        return [
            StoredRecord(row_id, CanonicalRecord.model_validate_json(payload))
            for row_id, payload in rows
        ]

    def find_by_name(self, name: str) -> Optional[StoredRecord]:
        """Return the most recently inserted row for *name*."""
        conn = self._connect()
        try:
            row = conn.execute(
                "SELECT id, payload FROM pokemon WHERE name = ? ORDER BY id DESC LIMIT 1",
                (name,),
            ).fetchone()
        finally:
            conn.close()
        if row is None:
            return None
        return StoredRecord(row[0], CanonicalRecord.model_validate_json(row[1]))
