"""Health check endpoint."""

from fastapi import APIRouter, Request

from matchcast.config import VERSION

router = APIRouter()


@router.get("/health")
def health_check(request: Request) -> dict:
    """Health check with readiness and the startup status sync counts."""
    startup = request.app.state.startup

    return {
        "status": "healthy" if startup.is_ready else "starting",
        "version": VERSION,
        "startup": startup.to_dict(),
    }
