"""Tests for database-backed status reconciliation."""

import asyncio
from datetime import UTC, datetime, timedelta

import pytest

from matchcast.core.types import MatchStatus
from matchcast.database import (
    create_match,
    delete_match,
    get_match,
    list_unfinished_matches,
)
from matchcast.services.status_sync import (
    MatchNotFoundError,
    sync_match,
    sync_unfinished_matches,
)

START = datetime(2025, 3, 1, 10, 0, 0, tzinfo=UTC)
END = datetime(2025, 3, 1, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def scheduled_match(conn):
    return create_match(
        conn,
        sport="soccer",
        home_team="Team A",
        away_team="Team B",
        start_time=START,
        end_time=END,
    )


class TestSyncMatch:
    def test_persists_change(self, conn, scheduled_match):
        result = asyncio.run(sync_match(conn, scheduled_match, now=START))

        assert result == MatchStatus.LIVE
        assert scheduled_match.status == MatchStatus.LIVE
        assert get_match(conn, scheduled_match.id).status == MatchStatus.LIVE

    def test_no_write_when_in_sync(self, conn, scheduled_match, monkeypatch):
        writes = []
        monkeypatch.setattr(
            "matchcast.services.status_sync.update_match_status",
            lambda *args: writes.append(args) or True,
        )

        before = START - timedelta(minutes=5)
        result = asyncio.run(sync_match(conn, scheduled_match, now=before))

        assert result == MatchStatus.SCHEDULED
        assert writes == []

    def test_missing_row_raises_and_keeps_status(self, conn, scheduled_match):
        delete_match(conn, scheduled_match.id)

        with pytest.raises(MatchNotFoundError):
            asyncio.run(sync_match(conn, scheduled_match, now=END))

        assert scheduled_match.status == MatchStatus.SCHEDULED

    def test_null_end_time_is_left_alone(self, conn, monkeypatch):
        open_ended = create_match(
            conn,
            sport="soccer",
            home_team="Team A",
            away_team="Team B",
            start_time=START,
            end_time=None,
        )
        writes = []
        monkeypatch.setattr(
            "matchcast.services.status_sync.update_match_status",
            lambda *args: writes.append(args) or True,
        )

        result = asyncio.run(sync_match(conn, open_ended, now=END + timedelta(days=1)))

        # No end time means the status cannot be derived
        assert result == MatchStatus.SCHEDULED
        assert writes == []


class TestSyncUnfinishedMatches:
    def test_counts_checked_and_updated(self, conn, scheduled_match):
        later = create_match(
            conn,
            sport="basketball",
            home_team="Team C",
            away_team="Team D",
            start_time=END,
            end_time=END + timedelta(hours=2),
        )
        create_match(
            conn,
            sport="soccer",
            home_team="Team E",
            away_team="Team F",
            start_time=START,
            end_time=END,
            status=MatchStatus.FINISHED,
        )

        result = asyncio.run(sync_unfinished_matches(conn, now=START + timedelta(hours=1)))

        assert result.checked == 2
        assert result.updated == 1
        assert result.changes == {scheduled_match.id: "live"}
        assert get_match(conn, later.id).status == MatchStatus.SCHEDULED

    def test_second_run_is_noop(self, conn, scheduled_match):
        now = END + timedelta(minutes=1)
        asyncio.run(sync_unfinished_matches(conn, now=now))

        result = asyncio.run(sync_unfinished_matches(conn, now=now))

        # Finished matches drop out of the unfinished set
        assert result.checked == 0
        assert result.updated == 0

    def test_to_dict(self, conn, scheduled_match):
        result = asyncio.run(sync_unfinished_matches(conn, now=END))
        assert result.to_dict() == {
            "checked": 1,
            "updated": 1,
            "changes": {str(scheduled_match.id): "finished"},
        }

    def test_deleted_match_does_not_abort_batch(self, conn, scheduled_match, monkeypatch):
        doomed = create_match(
            conn,
            sport="soccer",
            home_team="Team C",
            away_team="Team D",
            start_time=START,
            end_time=END,
        )
        # Listed, then deleted before its status write
        listed = list_unfinished_matches(conn)
        delete_match(conn, doomed.id)
        monkeypatch.setattr(
            "matchcast.services.status_sync.list_unfinished_matches", lambda conn: listed
        )

        result = asyncio.run(sync_unfinished_matches(conn, now=END))

        assert result.checked == 2
        assert result.updated == 1
        assert result.changes == {scheduled_match.id: "finished"}
        assert get_match(conn, scheduled_match.id).status == MatchStatus.FINISHED
