"""Status and history lookups."""

from __future__ import annotations

from typing import Any, Dict, List

from fastapi import Request

from services.credential_store import CredentialStore
from services.history_recorder import HistoryRecorder

HISTORY_LIMIT = 100


async def get_status(request: Request) -> Dict[str, bool]:
	"""Report credential presence and configuration as independent flags."""
	store: CredentialStore = request.app.state.credential_store
	settings = request.app.state.settings
	return {"authenticated": store.get() is not None, "configured": settings.configured}


async def get_history(request: Request, limit: int = HISTORY_LIMIT) -> List[Dict[str, Any]]:
	"""Return recent scans, newest first; [] when history is disabled."""
	recorder: HistoryRecorder = request.app.state.history_recorder
	records = await recorder.recent(min(max(limit, 1), HISTORY_LIMIT))
	return [record.to_dict() for record in records]
