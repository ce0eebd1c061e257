"""Tests for the SQLite persistence layer."""

import sqlite3
from datetime import UTC, datetime

import pytest

from matchcast.core.types import MatchStatus
from matchcast.database import (
    create_commentary,
    create_match,
    delete_commentary,
    delete_match,
    get_commentary,
    get_match,
    init_db,
    list_commentary,
    list_matches,
    list_unfinished_matches,
    reset_db,
    update_match_score,
    update_match_status,
)

START = datetime(2025, 3, 1, 10, 0, 0, tzinfo=UTC)
END = datetime(2025, 3, 1, 12, 0, 0, tzinfo=UTC)


def _new_match(conn, **overrides):
    data = {
        "sport": "soccer",
        "home_team": "Team A",
        "away_team": "Team B",
        "start_time": START,
        "end_time": END,
    }
    data.update(overrides)
    return create_match(conn, **data)


# =============================================================================
# SCHEMA
# =============================================================================


class TestSchema:
    def test_init_is_idempotent(self, db_path, conn):
        _new_match(conn)
        init_db(db_path)
        assert len(list_matches(conn, limit=10)) == 1

    def test_status_check_constraint(self, conn):
        with pytest.raises(sqlite3.IntegrityError):
            conn.execute(
                "INSERT INTO matches (sport, home_team, away_team, status, start_time) "
                "VALUES ('soccer', 'A', 'B', 'postponed', '2025-03-01T10:00:00Z')"
            )


# =============================================================================
# MATCHES
# =============================================================================


class TestMatches:
    def test_create_applies_defaults(self, conn):
        match = _new_match(conn)

        assert match.id > 0
        assert match.status == MatchStatus.SCHEDULED
        assert (match.home_score, match.away_score) == (0, 0)
        assert match.start_time == START
        assert match.end_time == END
        assert match.created_at is not None

    def test_create_with_status_and_scores(self, conn):
        match = _new_match(conn, status=MatchStatus.LIVE, home_score=2, away_score=1)
        assert match.status == MatchStatus.LIVE
        assert (match.home_score, match.away_score) == (2, 1)

    def test_end_time_optional(self, conn):
        match = _new_match(conn, end_time=None)
        assert match.end_time is None

    def test_get_missing(self, conn):
        assert get_match(conn, 999) is None

    def test_list_newest_first_with_limit(self, conn):
        ids = [_new_match(conn, home_team=f"Team {i}").id for i in range(5)]

        listed = list_matches(conn, limit=3)

        assert [m.id for m in listed] == list(reversed(ids))[:3]

    def test_list_unfinished(self, conn):
        scheduled = _new_match(conn)
        live = _new_match(conn, status=MatchStatus.LIVE)
        _new_match(conn, status=MatchStatus.FINISHED)

        ids = {m.id for m in list_unfinished_matches(conn)}

        assert ids == {scheduled.id, live.id}

    def test_update_status(self, conn):
        match = _new_match(conn)

        assert update_match_status(conn, match.id, MatchStatus.FINISHED) is True
        assert get_match(conn, match.id).status == MatchStatus.FINISHED

    def test_update_status_missing(self, conn):
        assert update_match_status(conn, 999, MatchStatus.LIVE) is False

    def test_update_score(self, conn):
        match = _new_match(conn)

        updated = update_match_score(conn, match.id, home_score=3, away_score=2)

        assert (updated.home_score, updated.away_score) == (3, 2)

    def test_update_score_missing(self, conn):
        assert update_match_score(conn, 999, home_score=1, away_score=0) is None

    def test_delete(self, conn):
        match = _new_match(conn)

        assert delete_match(conn, match.id) is True
        assert get_match(conn, match.id) is None
        assert delete_match(conn, match.id) is False

    def test_to_dict_uses_iso_utc(self, conn):
        data = _new_match(conn).to_dict()
        assert data["start_time"] == "2025-03-01T10:00:00Z"
        assert data["status"] == "scheduled"


# =============================================================================
# COMMENTARY
# =============================================================================


class TestCommentary:
    def test_create_round_trips_json_columns(self, conn):
        match = _new_match(conn)

        entry = create_commentary(
            conn,
            match.id,
            event_type="goal",
            message="Opener!",
            minute=12,
            sequence=1,
            period="H1",
            actor="Player 9",
            team="Team A",
            metadata={"x": 0.23, "assist_by": "Player 10"},
            tags=["goal", "highlight"],
        )

        stored = get_commentary(conn, entry.id)
        assert stored.metadata == {"x": 0.23, "assist_by": "Player 10"}
        assert stored.tags == ["goal", "highlight"]
        assert stored.period == "H1"

    def test_defaults(self, conn):
        match = _new_match(conn)
        entry = create_commentary(conn, match.id, event_type="kickoff", message="Underway")
        assert entry.metadata is None
        assert entry.tags == []

    def test_requires_existing_match(self, conn):
        with pytest.raises(sqlite3.IntegrityError):
            create_commentary(conn, 999, event_type="goal", message="Ghost goal")

    def test_list_in_sequence_order(self, conn):
        match = _new_match(conn)
        create_commentary(conn, match.id, event_type="note", message="no sequence")
        create_commentary(conn, match.id, event_type="goal", message="second", sequence=2)
        create_commentary(conn, match.id, event_type="kickoff", message="first", sequence=1)

        messages = [e.message for e in list_commentary(conn, match.id, limit=10)]

        assert messages == ["first", "second", "no sequence"]

    def test_list_scoped_to_match(self, conn):
        first = _new_match(conn)
        second = _new_match(conn)
        create_commentary(conn, first.id, event_type="goal", message="one")
        create_commentary(conn, second.id, event_type="goal", message="two")

        assert [e.message for e in list_commentary(conn, second.id, limit=10)] == ["two"]

    def test_delete_match_cascades(self, conn):
        match = _new_match(conn)
        entry = create_commentary(conn, match.id, event_type="goal", message="gone soon")

        delete_match(conn, match.id)

        assert get_commentary(conn, entry.id) is None

    def test_delete(self, conn):
        match = _new_match(conn)
        entry = create_commentary(conn, match.id, event_type="goal", message="x")

        assert delete_commentary(conn, entry.id) is True
        assert delete_commentary(conn, entry.id) is False


def test_reset_db_clears_data(db_path, conn):
    _new_match(conn)

    reset_db(db_path)

    assert list_matches(conn, limit=10) == []
