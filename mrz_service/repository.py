from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import structlog

from .exceptions import SessionNotFound
from .frame_pump import FramePump
from .settings import ScanSettings
from .sinks import ResultSink


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


@dataclass
class ScanSession:
    pump: FramePump
    session_id: str = field(default_factory=lambda: str(uuid4()))
    updated_at: datetime = field(default_factory=_utcnow)
    frame_count: int = 0


class ScanSessionRepository:
    def __init__(self, *, settings: ScanSettings, sink: ResultSink | None = None) -> None:
        self.settings = settings
        self.sink = sink
        self.sessions: dict[str, ScanSession] = {}
        self.logger = structlog.get_logger("scan_sessions")

    def create(self) -> ScanSession:
        self.purge_idle()
        session = ScanSession(pump=FramePump(settings=self.settings, sink=self.sink))
        self.sessions[session.session_id] = session
        return session

    def get(self, session_id: str) -> ScanSession:
        session = self.sessions.get(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        return session

    def touch(self, session: ScanSession) -> None:
        session.frame_count += 1
        session.updated_at = _utcnow()

    def close(self, session_id: str) -> None:
        if self.sessions.pop(session_id, None) is None:
            raise SessionNotFound(session_id)

    def purge_idle(self, now: datetime | None = None) -> list[str]:
        """Drop sessions that received no frame within ``session_idle_seconds``."""
        cutoff = (now or _utcnow()) - timedelta(seconds=self.settings.session_idle_seconds)
        expired = [sid for sid, s in self.sessions.items() if s.updated_at < cutoff]
        for sid in expired:
            del self.sessions[sid]
        if expired:
            self.logger.info("scan_sessions_expired", count=len(expired))
        return expired
