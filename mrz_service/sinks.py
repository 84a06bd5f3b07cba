from __future__ import annotations

import abc
import time

import requests
import structlog

from .logging import mask_sensitive
from .models import ScanEvent


class ResultSink(abc.ABC):
    """Receives de-duplicated scan events from a frame pump."""

    @abc.abstractmethod
    def publish(self, event: ScanEvent) -> None:
        raise NotImplementedError


class InMemorySink(ResultSink):
    def __init__(self) -> None:
        self.events: list[ScanEvent] = []

    def publish(self, event: ScanEvent) -> None:
        self.events.append(event)


class WebhookSink(ResultSink):
    def __init__(self, endpoint: str, *, retries: int = 3, backoff: float = 0.1, timeout: float = 3.0):
        self.endpoint = endpoint
        self.retries = retries
        self.backoff = backoff
        self.timeout = timeout
        self.logger = structlog.get_logger("webhook_sink")

    def publish(self, event: ScanEvent) -> None:
        payload = event.model_dump(mode="json")
        attempts = 0
        last_err: Exception | None = None
        while attempts < self.retries:
            attempts += 1
            try:
                response = requests.post(self.endpoint, json=payload, timeout=self.timeout)
                response.raise_for_status()
                self.logger.info("webhook_delivered", event_id=event.event_id, can=mask_sensitive(event.can), attempts=attempts)
                return
            except requests.RequestException as exc:
                last_err = exc
                self.logger.warning("webhook_attempt_failed", event_id=event.event_id, attempt=attempts, error=str(exc))
                time.sleep(self.backoff * attempts)
        if last_err:
            raise last_err
