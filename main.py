import asyncio
import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

import httpx
from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from routes.detect_route import router as detect_router
from routes.status_route import router as status_router
from services.copyleaks.authenticator import Authenticator
from services.copyleaks.detection_client import DetectionClient
from services.credential_store import CredentialStore
from services.detection_relay import DetectionRelay
from services.history_recorder import HistoryRecorder
from services.token_refresher import TokenRefresher
from utils.database_init import AsyncDatabaseInitializer
from utils.errors import RelayError
from utils.settings import Settings

BASE_DIR = Path(__file__).resolve().parent
PUBLIC_DIR = BASE_DIR / "public"

load_dotenv()  # Load environment variables from .env file if present

LOGGER = logging.getLogger(__name__)


def build_lifespan(settings: Optional[Settings], transport: Optional[httpx.AsyncBaseTransport]):
    """Return a lifespan manager wiring the relay components onto `app.state`."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Lifespan manager to initialize:
          - the history database (when DATABASE_DIR is set)
          - the shared HTTP client, credential store and authenticator
          - the detection relay and the periodic token refresh task
        and attach them to `app.state`.
        """
        resolved = settings or Settings.from_env()
        app.state.settings = resolved

        db_initializer = (
            AsyncDatabaseInitializer(resolved.database_dir) if resolved.database_dir else None
        )
        recorder = HistoryRecorder(db_initializer)
        await recorder.initialize()
        app.state.history_recorder = recorder

        http_client = httpx.AsyncClient(transport=transport)
        app.state.http_client = http_client

        store = CredentialStore(resolved.token_ttl)
        authenticator = Authenticator(resolved, store, http_client)
        app.state.credential_store = store
        app.state.authenticator = authenticator
        app.state.detection_relay = DetectionRelay(
            store, authenticator, DetectionClient(resolved, http_client), recorder
        )

        # Best effort; detect requests retry on demand.
        await authenticator.authenticate()

        refresher = TokenRefresher(authenticator, resolved.token_ttl.total_seconds())
        refresh_task = asyncio.create_task(refresher.run_periodic())
        app.state.token_refresher = refresher

        try:
            yield
        finally:
            refresh_task.cancel()
            try:
                await refresh_task
            except asyncio.CancelledError:
                pass
            await http_client.aclose()

    return lifespan


def create_app(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application instance.

    `settings` defaults to the environment; `transport` lets callers route
    outbound HTTP through a custom httpx transport.
    """
    app = FastAPI(title="AI Image Detector", lifespan=build_lifespan(settings, transport))

    @app.exception_handler(RelayError)
    async def relay_error_handler(_request: Request, exc: RelayError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(_request: Request, exc: RequestValidationError):
        fields = {str(err.get("loc", ())[-1]) for err in exc.errors() if err.get("loc")}
        message = "No image file provided." if "image" in fields else "Invalid request."
        return JSONResponse(status_code=400, content={"error": message})

    if PUBLIC_DIR.exists():
        app.mount("/public", StaticFiles(directory=PUBLIC_DIR), name="public")

    @app.get("/", include_in_schema=False)
    async def serve_index():
        """
        Serve the frontend index page from the public directory.
        """
        index_path = PUBLIC_DIR / "index.html"
        if not index_path.exists():
            raise HTTPException(status_code=404, detail="Frontend not found")
        return FileResponse(index_path)

    @app.get("/health")
    async def health(request: Request):
        """
        Liveness check reporting history and credential presence.
        """
        state = request.app.state
        return {
            "ok": True,
            "history_enabled": state.history_recorder.enabled,
            "credential_present": state.credential_store.get() is not None,
        }

    app.include_router(status_router)
    app.include_router(detect_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    port = int(os.getenv("PORT", "3000"))
    LOGGER.info("AI Image Detector running at http://localhost:%s", port)
    uvicorn.run(app, host="0.0.0.0", port=port)
