"""Pytest fixtures shared across unit and Django integration tests."""

from __future__ import annotations

from collections.abc import Sequence

import pytest


@pytest.fixture
def co2_rating_records() -> list[dict[str, object]]:
    """Return raw `co2RatingPct` records spanning two model years."""

    return [
        {"MODEL_YEAR": 2022, "CO2_RATING": 3, "PERCENTAGE": 21.456},
        {"MODEL_YEAR": 2023, "CO2_RATING": 5, "PERCENTAGE": 40.0},
        {"MODEL_YEAR": 2022, "CO2_RATING": 6, "PERCENTAGE": None},
        {"MODEL_YEAR": 2022, "CO2_RATING": 4, "PERCENTAGE": 33.333},
    ]


@pytest.fixture
def avg_cons_make_records() -> list[dict[str, object]]:
    """Return raw `avgConsMake` records."""

    return [
        {"MAKE": "Toyota", "AVG_CONS": 7.8912},
        {"MAKE": "Mercedes-Benz", "AVG_CONS": 11.2},
        {"MAKE": "Kia", "AVG_CONS": None},
    ]


class FakeClient:
    """In-memory stand-in for `core.data_source.VehicleStatsClient`."""

    def __init__(
        self,
        *,
        metrics: dict[str, list[dict[str, object]]] | None = None,
        raw_records: list[dict[str, object]] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.metrics = metrics or {}
        self.raw_records = raw_records or []
        self.error = error
        self.requested: list[str] = []

    def fetch_metric(self, metric_id: str) -> list[dict[str, object]]:
        self.requested.append(metric_id)
        if self.error is not None:
            raise self.error
        return self.metrics.get(metric_id, [])

    def fetch_raw_records(self) -> list[dict[str, object]]:
        self.requested.append("fuel_consumption_ratings")
        if self.error is not None:
            raise self.error
        return self.raw_records


@pytest.fixture
def fake_client(monkeypatch):
    """Install a FakeClient for views and commands; returns a factory."""

    def install(**kwargs) -> FakeClient:
        client = FakeClient(**kwargs)
        monkeypatch.setattr("core.views.get_client", lambda: client)
        monkeypatch.setattr("core.management.commands.resolve_metric.default_client", lambda: client)
        return client

    return install


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    The suite is runnable by intent:
    - `unit`: pure, fast tests with no Django request or command machinery.
    - `integration`: tests touching Django views, management commands, or IO.

    Each test must have exactly one of these markers.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )
