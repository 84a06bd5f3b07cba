"""Per-session scanning state around the pure MRZ core.

A camera delivers frames faster than OCR can read them, so the pump admits
one frame at a time and drops the rest. Results identical to the last
accepted one are suppressed.
"""
from __future__ import annotations

import asyncio
import queue
import threading
from collections.abc import Iterable
from typing import Any

import structlog

from .engines import OCREngine
from .exceptions import MRZParseError
from .extraction import extract_can, extract_mrz_candidate
from .logging import mask_sensitive
from .models import OCRLine, ScanEvent
from .mrz_parser import parse_and_validate
from .settings import ScanSettings, settings as default_settings
from .sinks import ResultSink


class FrameGate:
    """Admits at most one frame at a time; callers never wait."""

    def __init__(self) -> None:
        self._lock = threading.Lock()

    def try_enter(self) -> bool:
        return self._lock.acquire(blocking=False)

    def leave(self) -> None:
        self._lock.release()

    @property
    def busy(self) -> bool:
        return self._lock.locked()


class ResultDeduplicator:
    """Remembers the last published (mrz, can) pair."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._last: tuple[str, str | None] | None = None

    def is_repeat(self, mrz: str, can: str | None) -> bool:
        with self._lock:
            return self._last == (mrz, can)

    def remember(self, mrz: str, can: str | None) -> None:
        with self._lock:
            self._last = (mrz, can)

    def reset(self) -> None:
        with self._lock:
            self._last = None


class LatestResultSlot:
    """Single-slot channel: a new event replaces one nobody has read yet."""

    def __init__(self) -> None:
        self._queue: queue.Queue[ScanEvent] = queue.Queue(maxsize=1)
        self._lock = threading.Lock()

    def put(self, event: ScanEvent) -> None:
        with self._lock:
            self._drain()
            self._queue.put_nowait(event)

    def take(self, timeout: float | None = None) -> ScanEvent | None:
        try:
            return self._queue.get(block=timeout is not None, timeout=timeout)
        except queue.Empty:
            return None

    def clear(self) -> None:
        with self._lock:
            self._drain()

    def _drain(self) -> None:
        try:
            self._queue.get_nowait()
        except queue.Empty:
            pass


class FramePump:
    def __init__(
        self,
        engine: OCREngine | None = None,
        *,
        settings: ScanSettings | None = None,
        sink: ResultSink | None = None,
    ) -> None:
        self.engine = engine
        self.settings = settings or default_settings
        self.sink = sink
        self.gate = FrameGate()
        self.dedup = ResultDeduplicator()
        self.slot = LatestResultSlot()
        self.logger = structlog.get_logger("frame_pump")

    def process_lines(self, lines: Iterable[OCRLine]) -> ScanEvent | None:
        texts = [ln.text for ln in lines if ln.confidence >= self.settings.min_confidence]
        mrz = extract_mrz_candidate(texts)
        if mrz is None:
            return None
        can = extract_can(texts)

        if self.dedup.is_repeat(mrz, can):
            self.logger.debug("scan_result_repeated")
            return None

        result = None
        error = None
        try:
            result = parse_and_validate(mrz, strict=self.settings.strict_charset)
        except MRZParseError as exc:
            error = exc.code

        if self.settings.require_valid and (result is None or not result.is_valid):
            self.logger.info("scan_candidate_rejected", error=error, parsed=result is not None)
            return None

        # rejected reads never replace the last published pair
        self.dedup.remember(mrz, can)
        event = ScanEvent(mrz=mrz, can=can, result=result, error=error)
        self.slot.put(event)
        self.logger.info(
            "scan_event_published",
            event_id=event.event_id,
            format=result.format.value if result else None,
            document_number=mask_sensitive(result.document_number if result else None),
            can=mask_sensitive(can),
        )
        self._deliver(event)
        return event

    def offer_lines(self, lines: Iterable[OCRLine]) -> ScanEvent | None:
        """Like process_lines(), but drops the frame while another is in flight."""
        if not self.gate.try_enter():
            self.logger.debug("frame_dropped_in_flight")
            return None
        try:
            return self.process_lines(lines)
        finally:
            self.gate.leave()

    def offer(self, image: Any) -> bool:
        """Run OCR on a frame unless another one is in flight."""
        engine = self._require_engine()
        if not self.gate.try_enter():
            self.logger.debug("frame_dropped_in_flight")
            return False
        try:
            lines = self._recognize(engine, image)
            if lines:
                self.process_lines(lines)
        finally:
            self.gate.leave()
        return True

    async def offer_async(self, image: Any) -> bool:
        engine = self._require_engine()
        if not self.gate.try_enter():
            self.logger.debug("frame_dropped_in_flight")
            return False
        try:
            lines = await asyncio.to_thread(self._recognize, engine, image)
            if lines:
                self.process_lines(lines)
        finally:
            self.gate.leave()
        return True

    def latest(self, timeout: float | None = None) -> ScanEvent | None:
        return self.slot.take(timeout=timeout)

    def reset(self) -> None:
        self.dedup.reset()
        self.slot.clear()

    def _require_engine(self) -> OCREngine:
        if self.engine is None:
            raise RuntimeError("frame pump has no OCR engine, use process_lines()")
        return self.engine

    def _recognize(self, engine: OCREngine, image: Any) -> list[OCRLine]:
        try:
            return engine.recognize(image)
        except Exception as exc:  # noqa: BLE001
            self.logger.warning("ocr_engine_failed", error=str(exc))
            return []

    def _deliver(self, event: ScanEvent) -> None:
        if self.sink is None:
            return
        try:
            self.sink.publish(event)
        except Exception as exc:  # noqa: BLE001
            self.logger.warning("scan_event_delivery_failed", event_id=event.event_id, error=str(exc))
