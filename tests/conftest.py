import pytest

from src.evplanner.config import settings


@pytest.fixture(autouse=True)
def no_http_backoff(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(settings, "http_backoff_seconds", 0.0)
    monkeypatch.setattr(settings, "http_max_retries", 1)
    monkeypatch.setattr(settings, "geocoder_min_interval_seconds", 0.0)
    yield
