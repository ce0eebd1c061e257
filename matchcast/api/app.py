"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from matchcast.api.routes import commentary, health, matches
from matchcast.api.startup_state import StartupState
from matchcast.config import VERSION
from matchcast.utilities.logging import setup_logging

logger = logging.getLogger(__name__)

# First element of a pydantic error location -> client-facing error label
_VALIDATION_LABELS = {
    "query": "Invalid query.",
    "body": "Invalid payload.",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler - runs on startup and shutdown."""
    from matchcast.database import get_db, init_db
    from matchcast.services import sync_unfinished_matches

    setup_logging()
    logger.info("[STARTUP] Starting Matchcast...")
    state = app.state.startup

    init_db()

    # Bring statuses up to date for matches that started/ended while we were down
    try:
        with get_db() as conn:
            result = await sync_unfinished_matches(conn)
        state.record_sync(result)
        logger.info(
            "[STARTUP] Status sync: %d checked, %d updated", result.checked, result.updated
        )
    except Exception as e:
        state.record_sync_failure(e)
        logger.warning(f"[STARTUP] Status sync failed: {e}")

    state.mark_ready()
    logger.info("[STARTUP] Matchcast ready")

    yield

    logger.info("[SHUTDOWN] Matchcast stopped")


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Answer request validation failures with 400 and the offending fields."""
    errors = exc.errors()
    location = errors[0]["loc"][0] if errors and errors[0].get("loc") else None
    details = [
        {key: value for key, value in error.items() if key not in ("ctx", "url")}
        for error in errors
    ]
    return JSONResponse(
        status_code=400,
        content={
            "error": _VALIDATION_LABELS.get(location, "Invalid request."),
            "details": jsonable_encoder(details),
        },
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Matchcast API",
        description="Sports matches and live commentary",
        version=VERSION,
        lifespan=lifespan,
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Real-time hooks; set by whatever pushes updates to clients
    app.state.broadcast_match_created = None
    app.state.broadcast_commentary = None

    app.state.startup = StartupState()

    app.include_router(health.router, tags=["Health"])
    app.include_router(matches.router, prefix="/api/v1")
    app.include_router(commentary.router, prefix="/api/v1")

    return app


app = create_app()
