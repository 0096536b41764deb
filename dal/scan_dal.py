"""Async Data Access Layer for the scans table.

Provides ScanDAL with the append and list operations used by the history
recorder. Rows are never updated or deleted.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Sequence

from models.scan_record import ScanRecord
from utils.database_init import AsyncDatabaseInitializer


class ScanDAL:
    """Data access layer for scan history records.

    The constructor accepts an `AsyncDatabaseInitializer` (or any object
    exposing an async `connection()` context manager that yields an
    `aiosqlite.Connection`).
    """

    _COLUMNS = (
        "id",
        "scan_id",
        "filename",
        "ai_pct",
        "human_pct",
        "width",
        "height",
        "sandbox",
        "created_at",
    )
    _COLUMN_LIST, _INSERT_COLUMNS = ", ".join(_COLUMNS), ", ".join(_COLUMNS[1:])

    def __init__(self, db_initializer: AsyncDatabaseInitializer) -> None:
        self._db = db_initializer

    async def create_scan(self, record: ScanRecord) -> int:
        """Insert a new scans row and return the new id.

        Args:
            record: ScanRecord with `id=None` and fields to insert.

        Returns:
            The integer primary key of the created row.
        """
        created_at = record.created_at or datetime.now(timezone.utc).isoformat()

        async with self._db.connection() as conn:
            cur = await conn.execute(
                f"INSERT INTO scans ({self._INSERT_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    record.scan_id,
                    record.filename,
                    record.ai_pct,
                    record.human_pct,
                    record.width,
                    record.height,
                    int(bool(record.sandbox)),
                    created_at,
                ),
            )
            await conn.commit()
            return cur.lastrowid

    async def list_recent(self, limit: int = 100) -> List[ScanRecord]:
        """Return up to `limit` scans, newest first."""
        async with self._db.connection() as conn:
            cur = await conn.execute(
                f"SELECT {self._COLUMN_LIST} FROM scans ORDER BY created_at DESC, id DESC LIMIT ?",
                (limit,),
            )
            rows = await cur.fetchall()
            return [self._row_to_record(r) for r in rows]

    @staticmethod
    def _row_to_record(row: Sequence[object]) -> ScanRecord:
        """Convert a DB row tuple into a ScanRecord."""
        return ScanRecord(
            id=row[0],
            scan_id=row[1],
            filename=row[2],
            ai_pct=row[3],
            human_pct=row[4],
            width=row[5],
            height=row[6],
            sandbox=bool(row[7]),
            created_at=row[8],
        )
