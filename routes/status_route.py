"""FastAPI routes for relay status and scan history."""

from fastapi import APIRouter, Request

from controllers.status_controller import get_history, get_status
from utils.errors import PersistenceFailure, RelayError

router = APIRouter(prefix="/api", tags=["status"])


@router.get("/status")
async def status_route(request: Request):
	return await get_status(request)


@router.get("/history")
async def history_route(request: Request):
	"""Return up to 100 recent scans, newest first."""
	try:
		return await get_history(request)
	except PersistenceFailure as exc:
		raise RelayError(str(exc), status_code=500) from exc
