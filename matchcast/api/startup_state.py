"""What the startup status sync did, as reported by /health."""

from dataclasses import dataclass, field
from datetime import datetime

from matchcast.services.status_sync import SyncResult
from matchcast.utilities.tz import format_iso, now_utc


@dataclass
class StartupState:
    """Readiness plus the outcome of the status sync run at startup.

    One instance lives on ``app.state.startup`` and the lifespan fills it in.
    """

    started_at: datetime = field(default_factory=now_utc)
    ready_at: datetime | None = None
    sync: SyncResult | None = None
    sync_error: str | None = None

    def record_sync(self, result: SyncResult) -> None:
        self.sync = result
        self.sync_error = None

    def record_sync_failure(self, error: Exception) -> None:
        self.sync = None
        self.sync_error = str(error)

    def mark_ready(self) -> None:
        self.ready_at = now_utc()

    @property
    def is_ready(self) -> bool:
        return self.ready_at is not None

    def to_dict(self) -> dict:
        """Convert to dict for the health response."""
        return {
            "ready": self.is_ready,
            "started_at": format_iso(self.started_at),
            "ready_at": format_iso(self.ready_at) if self.ready_at else None,
            "status_sync": {
                "checked": self.sync.checked if self.sync else 0,
                "updated": self.sync.updated if self.sync else 0,
                "error": self.sync_error,
            },
        }
