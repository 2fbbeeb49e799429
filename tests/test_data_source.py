"""Unit tests for the data source client (network is stubbed)."""

from __future__ import annotations

import json
import urllib.error

import pytest

from core.data_source import DataSourceError, MalformedResponse, VehicleStatsClient

pytestmark = pytest.mark.unit


class _FakeResponse:
    def __init__(self, body: bytes, content_type: str = "application/json; charset=utf-8") -> None:
        self._body = body
        self.headers = {"Content-Type": content_type}

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> "_FakeResponse":
        return self

    def __exit__(self, *exc_info) -> None:
        return None


@pytest.fixture
def urlopen_returning(monkeypatch):
    """Patch urlopen to return a fixed body and record requested URLs."""

    requested: list[str] = []

    def install(body: bytes):
        def fake_urlopen(request, timeout):
            requested.append(request.full_url)
            return _FakeResponse(body)

        monkeypatch.setattr("urllib.request.urlopen", fake_urlopen)
        return requested

    return install


def test_fetch_metric_returns_records(urlopen_returning) -> None:
    """A JSON array of objects is returned as-is."""

    requested = urlopen_returning(json.dumps([{"MAKE": "Kia", "AVG_CONS": 7.1}]).encode())
    client = VehicleStatsClient(base_url="http://example.test/")

    assert client.fetch_metric("avgConsMake") == [{"MAKE": "Kia", "AVG_CONS": 7.1}]
    assert requested == ["http://example.test/api/avgConsMake"]


def test_fetch_raw_records_uses_ratings_endpoint(urlopen_returning) -> None:
    """Raw records come from the fuel consumption ratings endpoint."""

    requested = urlopen_returning(b"[]")
    assert VehicleStatsClient(base_url="http://example.test").fetch_raw_records() == []
    assert requested == ["http://example.test/api/fuel_consumption_ratings"]


@pytest.mark.parametrize("body", [b'{"rows": []}', b'"text"', b"[1, 2]", b"not json"])
def test_fetch_metric_rejects_non_array_payloads(urlopen_returning, body: bytes) -> None:
    """Anything but an array of objects is a malformed response."""

    urlopen_returning(body)
    with pytest.raises(MalformedResponse, match="Unexpected data format"):
        VehicleStatsClient(base_url="http://example.test").fetch_metric("avgConsMake")


def test_fetch_metric_wraps_transport_errors(monkeypatch) -> None:
    """Transport failures surface as DataSourceError with the cause chained."""

    def failing_urlopen(request, timeout):
        raise urllib.error.URLError("connection refused")

    monkeypatch.setattr("urllib.request.urlopen", failing_urlopen)
    with pytest.raises(DataSourceError) as excinfo:
        VehicleStatsClient(base_url="http://example.test").fetch_metric("bestSmog")
    assert not isinstance(excinfo.value, MalformedResponse)
    assert isinstance(excinfo.value.__cause__, urllib.error.URLError)
