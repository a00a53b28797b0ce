"""Catalogue persistence layer: one document per symbol."""

import hashlib
import sqlite3
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from ..catalogue.models import AlarmCatalogue
from ..errors import MalformedDataError, PersistenceError
from ..logging.config import get_logger


@dataclass
class StoredCatalogue:
    """Stored catalogue row with metadata."""
    symbol: str
    document: str
    as_of: Optional[str]
    alarm_count: int
    updated_at: str
    document_hash: str


class CatalogueStore:
    """
    SQLite-based catalogue store.

    Each symbol has exactly one row keyed by symbol. Storing a catalogue
    replaces the previous row wholesale.
    """

    def __init__(self, db_path: str = "catalogues.db"):
        self.db_path = Path(db_path)
        self.logger = get_logger("catalogue.store")
        self._lock = threading.Lock()

        self._init_database()

    def _document_hash(self, document: str) -> str:
        """Content hash used to spot unchanged rebuilds."""
        return hashlib.sha256(document.encode()).hexdigest()[:16]

    def _init_database(self) -> None:
        """Initialize database schema."""
        with self._get_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS catalogues (
                    id TEXT PRIMARY KEY,
                    document TEXT NOT NULL,
                    as_of TEXT,
                    alarm_count INTEGER NOT NULL,
                    updated_at TEXT NOT NULL,
                    document_hash TEXT NOT NULL
                )
            """)

            conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_catalogues_as_of ON catalogues(as_of)
            """)

            conn.commit()

    @contextmanager
    def _get_connection(self):
        """Get database connection with proper error handling."""
        conn = None
        try:
            conn = sqlite3.connect(self.db_path, timeout=30.0)
            conn.row_factory = sqlite3.Row
            yield conn
        except sqlite3.Error as e:
            if conn:
                conn.rollback()
            self.logger.error("Database error", error=str(e), db_path=str(self.db_path))
            raise
        finally:
            if conn:
                conn.close()

    def store_catalogue(self, catalogue: AlarmCatalogue) -> bool:
        """
        Store a catalogue, replacing any previous one for the symbol.

        Args:
            catalogue: Catalogue to store

        Returns:
            True if the stored document changed, False if it was identical

        Raises:
            PersistenceError: If the write fails
        """
        document = catalogue.to_json()
        document_hash = self._document_hash(document)

        with self._lock:
            try:
                with self._get_connection() as conn:
                    row = conn.execute(
                        "SELECT document_hash FROM catalogues WHERE id = ?",
                        (catalogue.symbol,)
                    ).fetchone()
                    changed = row is None or row["document_hash"] != document_hash

                    conn.execute("""
                        INSERT OR REPLACE INTO catalogues (
                            id, document, as_of, alarm_count, updated_at, document_hash
                        ) VALUES (?, ?, ?, ?, ?, ?)
                    """, (
                        catalogue.symbol,
                        document,
                        catalogue.as_of.isoformat() if catalogue.as_of else None,
                        len(catalogue),
                        datetime.now(timezone.utc).isoformat(),
                        document_hash
                    ))

                    conn.commit()

            except sqlite3.Error as e:
                self.logger.error(
                    "Failed to store catalogue",
                    symbol=catalogue.symbol,
                    error=str(e)
                )
                raise PersistenceError(
                    f"Failed to store catalogue for {catalogue.symbol}: {e}",
                    operation="store_catalogue",
                    target=catalogue.symbol
                ) from e

        self.logger.info(
            "Catalogue stored",
            symbol=catalogue.symbol,
            alarm_count=len(catalogue),
            changed=changed
        )
        return changed

    def get_stored(self, symbol: str) -> Optional[StoredCatalogue]:
        """Get the raw stored row for a symbol."""
        try:
            with self._get_connection() as conn:
                row = conn.execute("""
                    SELECT * FROM catalogues WHERE id = ?
                """, (symbol,)).fetchone()
        except sqlite3.Error as e:
            raise PersistenceError(
                f"Failed to read catalogue for {symbol}: {e}",
                operation="get_catalogue",
                target=symbol
            ) from e

        if row is None:
            return None
        return self._row_to_stored_catalogue(row)

    def get_catalogue(self, symbol: str) -> Optional[AlarmCatalogue]:
        """
        Get the stored catalogue for a symbol.

        Returns:
            The catalogue, or None if the symbol has none or its stored
            document cannot be read back
        """
        stored = self.get_stored(symbol)
        if stored is None:
            return None

        try:
            return AlarmCatalogue.from_json(stored.document)
        except MalformedDataError as e:
            self.logger.warning(
                "Stored catalogue is malformed",
                symbol=symbol,
                error=str(e)
            )
            return None

    def list_symbols(self) -> list[str]:
        """All symbols with a stored catalogue, sorted."""
        try:
            with self._get_connection() as conn:
                rows = conn.execute("SELECT id FROM catalogues ORDER BY id").fetchall()
        except sqlite3.Error as e:
            raise PersistenceError(
                f"Failed to list catalogues: {e}",
                operation="list_symbols"
            ) from e
        return [row["id"] for row in rows]

    def delete_catalogue(self, symbol: str) -> bool:
        """Remove a symbol's catalogue. Returns True if a row was deleted."""
        with self._lock:
            try:
                with self._get_connection() as conn:
                    cursor = conn.execute("DELETE FROM catalogues WHERE id = ?", (symbol,))
                    conn.commit()
                    deleted = cursor.rowcount > 0
            except sqlite3.Error as e:
                raise PersistenceError(
                    f"Failed to delete catalogue for {symbol}: {e}",
                    operation="delete_catalogue",
                    target=symbol
                ) from e

        if deleted:
            self.logger.info("Catalogue deleted", symbol=symbol)
        return deleted

    def get_stats(self) -> dict[str, Any]:
        """Get database statistics."""
        try:
            with self._get_connection() as conn:
                total_count = conn.execute("SELECT COUNT(*) FROM catalogues").fetchone()[0]
                total_alarms = conn.execute(
                    "SELECT COALESCE(SUM(alarm_count), 0) FROM catalogues"
                ).fetchone()[0]
                latest = conn.execute("SELECT MAX(as_of) FROM catalogues").fetchone()[0]

                return {
                    "total_catalogues": total_count,
                    "total_alarms": total_alarms,
                    "latest_as_of": latest
                }

        except sqlite3.Error as e:
            self.logger.error("Failed to get stats", error=str(e))
            return {}

    def _row_to_stored_catalogue(self, row: sqlite3.Row) -> StoredCatalogue:
        """Convert database row to StoredCatalogue object."""
        return StoredCatalogue(
            symbol=row["id"],
            document=row["document"],
            as_of=row["as_of"],
            alarm_count=row["alarm_count"],
            updated_at=row["updated_at"],
            document_hash=row["document_hash"]
        )
