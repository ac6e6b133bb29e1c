"""Ledger snapshot sources used by the payable resolver.

The admin application owns ledger editing; the engine only reads.  A store
hands back one :class:`LedgerSnapshot` per ``(car_id, year)`` or ``None``
when that year has no ledger.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union

import pandas as pd

from .config import DB_PATH, ensure_data_directories
from .ledger import LedgerSnapshot

logger = logging.getLogger(__name__)

SCHEMA_SQL = """
PRAGMA journal_mode=WAL;
PRAGMA synchronous=NORMAL;

CREATE TABLE IF NOT EXISTS ledgers (
    car_id TEXT NOT NULL,
    year INTEGER NOT NULL,
    payload TEXT NOT NULL,
    updated_at TEXT,
    PRIMARY KEY (car_id, year)
);

CREATE INDEX IF NOT EXISTS ix_ledgers_car ON ledgers (car_id);
"""


class LedgerStore(ABC):
    """Interface for anything that can hand out ledger snapshots."""

    @abstractmethod
    def load(self, car_id: Any, year: int) -> Optional[LedgerSnapshot]:
        """Return the snapshot for ``(car_id, year)`` or ``None`` when absent."""


class InMemoryLedgerStore(LedgerStore):
    """Holds raw ledger payloads in a dict keyed by ``(car_id, year)``."""

    def __init__(self, payloads: Optional[Mapping[Tuple[Any, int], Mapping[str, Any]]] = None) -> None:
        self._payloads: Dict[Tuple[str, int], Mapping[str, Any]] = {}
        for (car_id, year), payload in (payloads or {}).items():
            self.put(car_id, year, payload)

    def put(self, car_id: Any, year: int, payload: Mapping[str, Any]) -> None:
        self._payloads[(str(car_id), int(year))] = payload

    def load(self, car_id: Any, year: int) -> Optional[LedgerSnapshot]:
        payload = self._payloads.get((str(car_id), int(year)))
        if payload is None:
            return None
        return LedgerSnapshot.from_payload(payload, car_id=str(car_id), year=int(year))


class SqliteLedgerStore(LedgerStore):
    """Ledger payloads persisted as JSON documents in a sqlite table."""

    def __init__(self, db_path: Union[str, Path, None] = None) -> None:
        self.db_path = Path(db_path) if db_path is not None else DB_PATH
        self.init_db()

    @contextmanager
    def connect(self) -> Iterator[sqlite3.Connection]:
        if self.db_path == DB_PATH:
            ensure_data_directories()
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(self.db_path))
        try:
            yield conn
        finally:
            conn.close()

    def init_db(self) -> None:
        with self.connect() as conn:
            conn.executescript(SCHEMA_SQL)
            conn.commit()

    def save(self, car_id: Any, year: int, payload: Union[Mapping[str, Any], LedgerSnapshot]) -> None:
        """Insert or replace the ledger payload for ``(car_id, year)``."""
        if isinstance(payload, LedgerSnapshot):
            payload = payload.to_payload()
        document = json.dumps(payload, sort_keys=True)
        with self.connect() as conn:
            conn.execute(
                "INSERT OR REPLACE INTO ledgers (car_id, year, payload, updated_at) VALUES (?, ?, ?, ?)",
                (str(car_id), int(year), document, datetime.utcnow().isoformat()),
            )
            conn.commit()

    def load(self, car_id: Any, year: int) -> Optional[LedgerSnapshot]:
        with self.connect() as conn:
            row = conn.execute(
                "SELECT payload FROM ledgers WHERE car_id = ? AND year = ?",
                (str(car_id), int(year)),
            ).fetchone()
        if row is None:
            return None
        try:
            payload = json.loads(row[0])
        except json.JSONDecodeError as exc:
            logger.warning("Unreadable ledger payload for car %s, year %s: %s", car_id, year, exc)
            return None
        if not isinstance(payload, dict):
            logger.warning("Ledger payload for car %s, year %s is not an object", car_id, year)
            return None
        return LedgerSnapshot.from_payload(payload, car_id=str(car_id), year=int(year))

    def delete(self, car_id: Any, year: int) -> None:
        with self.connect() as conn:
            conn.execute("DELETE FROM ledgers WHERE car_id = ? AND year = ?", (str(car_id), int(year)))
            conn.commit()

    def list_ledgers(self) -> pd.DataFrame:
        """Return one row per stored ledger with ``car_id``, ``year`` and ``updated_at``."""
        with self.connect() as conn:
            return pd.read_sql_query(
                "SELECT car_id, year, updated_at FROM ledgers ORDER BY car_id, year",
                conn,
            )

    def years_for_car(self, car_id: Any) -> List[int]:
        ledgers = self.list_ledgers()
        if ledgers.empty:
            return []
        return sorted(int(y) for y in ledgers.loc[ledgers['car_id'] == str(car_id), 'year'])
