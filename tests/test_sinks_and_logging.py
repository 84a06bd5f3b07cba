import pytest
import requests

import mrz_service.sinks as sinks_module
from mrz_service.logging import configure_logging, mask_sensitive
from mrz_service.models import ScanEvent
from mrz_service.sinks import InMemorySink, WebhookSink


class _Response:
    def __init__(self, status_code: int = 200):
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"status {self.status_code}")


def test_mask_sensitive():
    assert mask_sensitive(None) is None
    assert mask_sensitive("123") == "***"
    assert mask_sensitive("L898902C3") == "L8***C3"


def test_configure_logging_accepts_levels():
    configure_logging(level="debug", json=False)
    configure_logging(level="not-a-level", json=True)


def test_in_memory_sink_keeps_order():
    sink = InMemorySink()
    sink.publish(ScanEvent(mrz="A"))
    sink.publish(ScanEvent(mrz="B"))

    assert [e.mrz for e in sink.events] == ["A", "B"]


def test_webhook_sink_posts_event(monkeypatch):
    calls = []

    def fake_post(url, json, timeout):
        calls.append((url, json, timeout))
        return _Response()

    monkeypatch.setattr(sinks_module.requests, "post", fake_post)
    event = ScanEvent(mrz="A\nB", can="482391")

    WebhookSink("https://example.com/hook", timeout=2.0).publish(event)

    assert len(calls) == 1
    url, payload, timeout = calls[0]
    assert url == "https://example.com/hook"
    assert payload["mrz"] == "A\nB"
    assert payload["can"] == "482391"
    assert payload["event_id"] == event.event_id
    assert timeout == 2.0


def test_webhook_sink_retries_then_succeeds(monkeypatch):
    responses = iter([_Response(503), _Response(200)])
    sleeps = []

    monkeypatch.setattr(sinks_module.requests, "post", lambda *_a, **_kw: next(responses))
    monkeypatch.setattr(sinks_module.time, "sleep", sleeps.append)

    WebhookSink("https://example.com/hook", retries=3, backoff=0.5).publish(ScanEvent(mrz="A"))

    assert sleeps == [0.5]


def test_webhook_sink_raises_after_last_attempt(monkeypatch):
    attempts = []

    def failing_post(*_args, **_kwargs):
        attempts.append(1)
        raise requests.ConnectionError("refused")

    monkeypatch.setattr(sinks_module.requests, "post", failing_post)
    monkeypatch.setattr(sinks_module.time, "sleep", lambda _s: None)

    with pytest.raises(requests.ConnectionError):
        WebhookSink("https://example.com/hook", retries=2).publish(ScanEvent(mrz="A"))

    assert len(attempts) == 2
