#!/usr/bin/env python3
"""Create, read, update and delete one match against the Matchcast schema.

Runs once and exits (no server). Useful for checking a fresh database.

Usage:
    # Uses DATABASE_PATH from the environment / .env (default: data/matchcast.db)
    python scripts/crud_demo.py

    # Or point at a scratch file
    python scripts/crud_demo.py --db /tmp/matchcast-demo.db
"""

import argparse
import logging
import sqlite3
import sys
from datetime import timedelta

from matchcast.core.types import DEFAULT_MATCH_STATUS
from matchcast.database import (
    create_match,
    delete_match,
    get_db,
    get_match,
    init_db,
    update_match_score,
)
from matchcast.utilities.match_status import get_match_status
from matchcast.utilities.tz import now_utc

logger = logging.getLogger("crud_demo")


def run(db_path: str | None = None) -> None:
    """Run the demo; raises on any failed step."""
    init_db(db_path)

    with get_db(db_path) as conn:
        # === CREATE ===
        start = now_utc()
        end = start + timedelta(hours=2)
        status = get_match_status(start, end) or DEFAULT_MATCH_STATUS
        match = create_match(
            conn,
            sport="soccer",
            home_team="Admin United",
            away_team="Demo City",
            start_time=start,
            end_time=end,
            status=status,
        )
        if not match:
            raise RuntimeError("Failed to create match")
        logger.info("CREATE: %s", match.to_dict())

        # === READ ===
        found = get_match(conn, match.id)
        logger.info("READ: %s", found.to_dict() if found else None)

        # === UPDATE ===
        updated = update_match_score(conn, match.id, home_score=1, away_score=0)
        if not updated:
            raise RuntimeError("Failed to update match")
        logger.info("UPDATE: %s", updated.to_dict())

        # === DELETE ===
        if not delete_match(conn, match.id):
            raise RuntimeError("Failed to delete match")
        logger.info("DELETE: match %d removed", match.id)


def main() -> int:
    arg_parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    arg_parser.add_argument("--db", help="SQLite database path (default: DATABASE_PATH)")
    args = arg_parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    try:
        run(args.db)
    except (sqlite3.Error, RuntimeError):
        logger.exception("CRUD demo failed")
        return 1

    logger.info("CRUD demo finished without errors")
    return 0


if __name__ == "__main__":
    sys.exit(main())
