from mrz_service.settings import ScanSettings


def test_defaults():
    cfg = ScanSettings()

    assert cfg.min_confidence == 0.4
    assert cfg.strict_charset is True
    assert cfg.require_valid is True
    assert cfg.session_idle_seconds == 600.0


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("MRZ_MIN_CONFIDENCE", "0.6")
    monkeypatch.setenv("MRZ_REQUIRE_VALID", "false")
    monkeypatch.setenv("MRZ_WEBHOOK_URL", "https://example.com/hook")

    cfg = ScanSettings()

    assert cfg.min_confidence == 0.6
    assert cfg.require_valid is False
    assert cfg.webhook_url == "https://example.com/hook"
