"""Optional persistence of completed scans."""

from __future__ import annotations

import logging
from typing import List, Optional

from dal.scan_dal import ScanDAL
from models.detection import DetectionRequest, DetectionResult
from models.scan_record import ScanRecord
from utils.database_init import AsyncDatabaseInitializer
from utils.errors import PersistenceFailure

LOGGER = logging.getLogger(__name__)


class HistoryRecorder:
    """Append scan summaries to the history database, when one is configured.

    With no database every operation is a silent no-op, so the relay works
    the same with history disabled.
    """

    def __init__(self, db_initializer: Optional[AsyncDatabaseInitializer] = None) -> None:
        self._db = db_initializer
        self._dal = ScanDAL(db_initializer) if db_initializer is not None else None

    @property
    def enabled(self) -> bool:
        return self._dal is not None

    async def initialize(self) -> None:
        """Create the schema up front so configuration errors show at startup."""
        if self._db is None:
            LOGGER.warning("[db] DATABASE_DIR not set; results will not be saved.")
            return
        await self._db.ensure_database()
        LOGGER.info("[db] Connected and table ready at %s.", self._db.db_path)

    async def record(self, request: DetectionRequest, result: DetectionResult) -> Optional[int]:
        """Persist one scan. Failures are logged and swallowed; returns the row id or None."""
        if self._dal is None:
            return None
        record = ScanRecord(
            id=None,
            scan_id=request.scan_id,
            filename=request.filename,
            ai_pct=result.ai_percentage,
            human_pct=result.human_percentage,
            width=result.width,
            height=result.height,
            sandbox=request.sandbox,
        )
        try:
            return await self._dal.create_scan(record)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            LOGGER.error("[db] Failed to save scan %s: %s", request.scan_id, exc)
            return None

    async def recent(self, limit: int = 100) -> List[ScanRecord]:
        """Return the newest `limit` records, or [] when history is disabled."""
        if self._dal is None:
            return []
        try:
            return await self._dal.list_recent(limit)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            LOGGER.error("[history] %s", exc)
            raise PersistenceFailure("Failed to load scan history.") from exc
