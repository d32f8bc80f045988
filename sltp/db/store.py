"""SQLite journal store for SLTP."""

import logging
import sqlite3
from datetime import date, datetime
from pathlib import Path
from typing import Iterable, Optional

from sltp.models import LedgerEntry

logger = logging.getLogger(__name__)


class JournalStore:
    """SQLite-based local storage for ledger entries."""

    REQUIRED_TABLES = [
        "entries",
    ]

    def __init__(self, db_path: Path):
        """Initialize the journal store.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = db_path
        self._ensure_db_dir()
        self._init_schema()

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS entries (
                    id TEXT PRIMARY KEY,
                    pair TEXT NOT NULL,
                    direction TEXT NOT NULL CHECK (direction IN ('long', 'short')),
                    pnl REAL NOT NULL,
                    fee REAL NOT NULL,
                    date TEXT NOT NULL,
                    notes TEXT,
                    created_at TEXT NOT NULL
                )
            """)
            cursor.execute(
                "CREATE INDEX IF NOT EXISTS idx_entries_date ON entries (date)"
            )
            conn.commit()
        finally:
            conn.close()

    def get_tables(self) -> list[str]:
        """Get list of all tables in the database."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
            )
            return [row["name"] for row in cursor.fetchall()]
        finally:
            conn.close()

    @staticmethod
    def _row_to_entry(row: sqlite3.Row) -> LedgerEntry:
        return LedgerEntry(
            id=row["id"],
            pair=row["pair"],
            direction=row["direction"],
            pnl=row["pnl"],
            fee=row["fee"],
            date=date.fromisoformat(row["date"]),
            notes=row["notes"],
        )

    # ==================== Entries ====================

    def add_entry(self, entry: LedgerEntry) -> LedgerEntry:
        """Add an entry to the journal.

        Args:
            entry: Entry to store.

        Returns:
            The stored entry.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO entries
                (id, pair, direction, pnl, fee, date, notes, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    entry.id,
                    entry.pair,
                    entry.direction,
                    entry.pnl,
                    entry.fee,
                    entry.date.isoformat(),
                    entry.notes,
                    datetime.now().isoformat(),
                ),
            )
            conn.commit()
            logger.debug("Stored entry %s (%s %s)", entry.id, entry.pair, entry.date)
            return entry
        finally:
            conn.close()

    def get_entries(
        self, day: Optional[date] = None, oldest_first: bool = False
    ) -> list[LedgerEntry]:
        """Get entries, newest first unless ``oldest_first`` is set.

        Entries on the same date keep the order they were stored in
        (reversed when newest first).

        Args:
            day: Optional date filter. If None, returns all entries.
            oldest_first: Return entries in chronological order.

        Returns:
            List of entries.
        """
        order = "ASC" if oldest_first else "DESC"
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            if day:
                cursor.execute(
                    f"""
                    SELECT id, pair, direction, pnl, fee, date, notes
                    FROM entries
                    WHERE date = ?
                    ORDER BY rowid {order}
                    """,
                    (day.isoformat(),),
                )
            else:
                cursor.execute(
                    f"""
                    SELECT id, pair, direction, pnl, fee, date, notes
                    FROM entries
                    ORDER BY date {order}, rowid {order}
                    """
                )
            return [self._row_to_entry(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    def get_entry(self, entry_id: str) -> Optional[LedgerEntry]:
        """Get an entry by ID.

        Args:
            entry_id: Entry ID.

        Returns:
            Entry if found, None otherwise.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT id, pair, direction, pnl, fee, date, notes
                FROM entries
                WHERE id = ?
                """,
                (entry_id,),
            )
            row = cursor.fetchone()
            if row:
                return self._row_to_entry(row)
            return None
        finally:
            conn.close()

    def update_entry(self, entry: LedgerEntry) -> bool:
        """Overwrite an existing entry with the same ID.

        Args:
            entry: Entry carrying the new values.

        Returns:
            True if an entry was updated.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                UPDATE entries
                SET pair = ?, direction = ?, pnl = ?, fee = ?, date = ?, notes = ?
                WHERE id = ?
                """,
                (
                    entry.pair,
                    entry.direction,
                    entry.pnl,
                    entry.fee,
                    entry.date.isoformat(),
                    entry.notes,
                    entry.id,
                ),
            )
            conn.commit()
            return cursor.rowcount > 0
        finally:
            conn.close()

    def delete_entry(self, entry_id: str) -> bool:
        """Delete an entry.

        Args:
            entry_id: ID of the entry to delete.

        Returns:
            True if an entry was deleted.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM entries WHERE id = ?", (entry_id,))
            conn.commit()
            deleted = cursor.rowcount > 0
            if not deleted:
                logger.debug("No entry with id %s to delete", entry_id)
            return deleted
        finally:
            conn.close()

    def import_entries(self, entries: Iterable[LedgerEntry]) -> int:
        """Merge entries into the journal, skipping IDs already present.

        Args:
            entries: Entries to import.

        Returns:
            Number of entries inserted.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            imported = 0
            now = datetime.now().isoformat()
            for entry in entries:
                cursor.execute(
                    """
                    INSERT OR IGNORE INTO entries
                    (id, pair, direction, pnl, fee, date, notes, created_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        entry.id,
                        entry.pair,
                        entry.direction,
                        entry.pnl,
                        entry.fee,
                        entry.date.isoformat(),
                        entry.notes,
                        now,
                    ),
                )
                imported += cursor.rowcount
            conn.commit()
            logger.info("Imported %d entries into %s", imported, self.db_path)
            return imported
        finally:
            conn.close()

    # ==================== Stats ====================

    def get_stats(self) -> dict:
        """Get database statistics.

        Returns:
            Dictionary with table record counts.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            stats = {}
            for table in self.REQUIRED_TABLES:
                cursor.execute(f"SELECT COUNT(*) as count FROM {table}")
                stats[table] = cursor.fetchone()["count"]
            return stats
        finally:
            conn.close()
