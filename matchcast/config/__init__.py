"""Application configuration.

Single source of truth for all configuration values.
Loads from environment variables with .env file support.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# =============================================================================
# VERSION - Read from pyproject.toml (single source of truth)
# =============================================================================


def _get_version() -> str:
    """Read version - prefer pyproject.toml, fall back to installed metadata."""
    try:
        import tomllib

        pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"
        if pyproject_path.exists():
            with open(pyproject_path, "rb") as f:
                data = tomllib.load(f)
                return data.get("project", {}).get("version", "0.0.0")
    except (OSError, KeyError, ValueError):
        pass

    # Installed without source tree
    try:
        from importlib.metadata import PackageNotFoundError, version

        return version("matchcast")
    except (ImportError, PackageNotFoundError):
        pass

    return "0.0.0"


VERSION = _get_version()

# Load .env file from project root
_PROJECT_ROOT = Path(__file__).parent.parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"
load_dotenv(_ENV_FILE)


def _get_int(name: str, default: int) -> int:
    """Read an integer env var, falling back to default on junk values."""
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


class Config:
    """Application configuration singleton.

    All configuration values should be accessed through this class.
    Values are loaded from environment variables with sensible defaults.
    """

    # Database
    DATABASE_PATH: str = os.getenv(
        "DATABASE_PATH",
        str(_PROJECT_ROOT / "data" / "matchcast.db"),
    )

    # API
    API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
    API_PORT: int = _get_int("API_PORT", 8000)

    # Paging
    MATCHES_DEFAULT_LIMIT: int = _get_int("MATCHES_DEFAULT_LIMIT", 50)
    MATCHES_MAX_LIMIT: int = _get_int("MATCHES_MAX_LIMIT", 100)
    COMMENTARY_DEFAULT_LIMIT: int = _get_int("COMMENTARY_DEFAULT_LIMIT", 100)
    COMMENTARY_MAX_LIMIT: int = _get_int("COMMENTARY_MAX_LIMIT", 500)

    @classmethod
    def reload(cls) -> None:
        """Reload configuration from environment.

        Useful for testing or runtime config changes.
        """
        load_dotenv(_ENV_FILE, override=True)
        cls.DATABASE_PATH = os.getenv(
            "DATABASE_PATH",
            str(_PROJECT_ROOT / "data" / "matchcast.db"),
        )
        cls.API_HOST = os.getenv("API_HOST", "0.0.0.0")
        cls.API_PORT = _get_int("API_PORT", 8000)
        cls.MATCHES_DEFAULT_LIMIT = _get_int("MATCHES_DEFAULT_LIMIT", 50)
        cls.MATCHES_MAX_LIMIT = _get_int("MATCHES_MAX_LIMIT", 100)
        cls.COMMENTARY_DEFAULT_LIMIT = _get_int("COMMENTARY_DEFAULT_LIMIT", 100)
        cls.COMMENTARY_MAX_LIMIT = _get_int("COMMENTARY_MAX_LIMIT", 500)


def get_database_path() -> str:
    """Get the configured SQLite database path."""
    return Config.DATABASE_PATH


def get_matches_limit(requested: int | None) -> int:
    """Resolve the page size for match listings.

    Missing values use the default; anything above the cap is clamped.
    """
    limit = requested if requested is not None else Config.MATCHES_DEFAULT_LIMIT
    return min(limit, Config.MATCHES_MAX_LIMIT)


def get_commentary_limit(requested: int | None) -> int:
    """Resolve the page size for commentary listings."""
    limit = requested if requested is not None else Config.COMMENTARY_DEFAULT_LIMIT
    return min(limit, Config.COMMENTARY_MAX_LIMIT)
