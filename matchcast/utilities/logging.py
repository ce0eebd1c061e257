"""Logging setup for the Matchcast server.

Everything goes to stdout and to a rotating ``matchcast.log``. Warnings and
errors are also copied to ``matchcast_errors.log``. Messages are tagged by
area (``[MATCHES]``, ``[SYNC]``, ``[DB]``, ``[STARTUP]``) so they can be
grepped per area.

Environment variables:
    LOG_LEVEL: console level (default: INFO)
    LOG_DIR: directory for log files (default: <project>/logs)
    LOG_FORMAT: "text" or "json" (default: text)
"""

import json
import logging
import logging.config
import os
from datetime import UTC, datetime
from pathlib import Path

LOG_FILE = "matchcast.log"
ERROR_LOG_FILE = "matchcast_errors.log"
MAX_LOG_BYTES = 5 * 1024 * 1024

TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Libraries that would otherwise log every request
QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore", "watchfiles")

_configured = False


class JSONFormatter(logging.Formatter):
    """One JSON object per line; the leading ``[TAG]`` becomes its own field."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        tag = None
        if message.startswith("[") and "]" in message:
            tag, _, rest = message[1:].partition("]")
            message = rest.lstrip()

        entry = {
            "time": datetime.fromtimestamp(record.created, UTC).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "tag": tag,
            "message": message,
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry)


def default_log_dir() -> Path:
    """LOG_DIR, else ``logs/`` next to pyproject.toml, else ``./logs``."""
    if env_dir := os.getenv("LOG_DIR"):
        return Path(env_dir)

    for parent in Path(__file__).resolve().parents:
        if (parent / "pyproject.toml").exists():
            return parent / "logs"

    return Path("logs")


def build_logging_config(
    level: str = "INFO",
    log_dir: str | Path = "logs",
    use_json: bool = False,
) -> dict:
    """Build the ``logging.config.dictConfig`` mapping for the server.

    Args:
        level: Console level name; unknown names fall back to INFO
        log_dir: Directory for the rotating log files
        use_json: Emit JSON lines instead of text

    Returns:
        A dictConfig-compatible dict
    """
    level = level.upper()
    if not isinstance(logging.getLevelName(level), int):
        level = "INFO"

    log_dir = Path(log_dir)
    formatter = "json" if use_json else "text"

    def rotating(filename: str, handler_level: str, backups: int) -> dict:
        return {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": str(log_dir / filename),
            "maxBytes": MAX_LOG_BYTES,
            "backupCount": backups,
            "encoding": "utf-8",
            "level": handler_level,
            "formatter": formatter,
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "text": {"format": TEXT_FORMAT, "datefmt": "%Y-%m-%d %H:%M:%S"},
            "json": {"()": JSONFormatter},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stdout",
                "level": level,
                "formatter": formatter,
            },
            "file": rotating(LOG_FILE, "DEBUG", 5),
            "errors": rotating(ERROR_LOG_FILE, "WARNING", 2),
        },
        "loggers": {name: {"level": "WARNING"} for name in QUIET_LOGGERS},
        "root": {"level": "DEBUG", "handlers": ["console", "file", "errors"]},
    }


def setup_logging(
    log_level: str | None = None,
    log_dir: str | Path | None = None,
    use_json: bool | None = None,
) -> None:
    """Configure logging once per process; later calls do nothing.

    Arguments override LOG_LEVEL, LOG_DIR and LOG_FORMAT.
    """
    global _configured
    if _configured:
        return

    level = log_level or os.getenv("LOG_LEVEL", "INFO")
    path = Path(log_dir) if log_dir else default_log_dir()
    if use_json is None:
        use_json = os.getenv("LOG_FORMAT", "text").lower() == "json"

    path.mkdir(parents=True, exist_ok=True)
    logging.config.dictConfig(build_logging_config(level, path, use_json))
    _configured = True

    logging.getLogger("matchcast").info(
        "[STARTUP] Logging to %s (%s, console %s)",
        path,
        "json" if use_json else "text",
        level.upper(),
    )
