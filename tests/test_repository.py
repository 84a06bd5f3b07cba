from datetime import datetime, timedelta, timezone

import pytest

from mrz_service.exceptions import SessionNotFound
from mrz_service.repository import ScanSessionRepository
from mrz_service.settings import ScanSettings


def _repo(idle_seconds: float = 60.0) -> ScanSessionRepository:
    return ScanSessionRepository(settings=ScanSettings(session_idle_seconds=idle_seconds))


def test_touch_counts_frames_and_refreshes_activity():
    repo = _repo()
    session = repo.create()
    before = session.updated_at

    repo.touch(session)

    assert session.frame_count == 1
    assert session.updated_at >= before


def test_purge_idle_drops_only_stale_sessions():
    repo = _repo(idle_seconds=60)
    stale = repo.create()
    fresh = repo.create()
    now = datetime.now(tz=timezone.utc)
    stale.updated_at = now - timedelta(seconds=120)
    fresh.updated_at = now - timedelta(seconds=10)

    expired = repo.purge_idle(now=now)

    assert expired == [stale.session_id]
    assert repo.get(fresh.session_id) is fresh
    with pytest.raises(SessionNotFound):
        repo.get(stale.session_id)


def test_create_sweeps_idle_sessions():
    repo = _repo(idle_seconds=60)
    stale = repo.create()
    stale.updated_at = datetime.now(tz=timezone.utc) - timedelta(hours=1)

    repo.create()

    assert stale.session_id not in repo.sessions
    assert len(repo.sessions) == 1


def test_close_unknown_session():
    with pytest.raises(SessionNotFound):
        _repo().close("missing")
