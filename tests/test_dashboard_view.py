"""Django integration tests for the dashboard and chart JSON API."""

from __future__ import annotations

import json

import pytest
from django.test import override_settings

from core.data_source import DataSourceError, MalformedResponse

pytestmark = pytest.mark.integration


def test_dashboard_renders_default_metric(client, fake_client, avg_cons_make_records) -> None:
    """The dashboard charts avgConsMake when no metric is selected."""

    source = fake_client(metrics={"avgConsMake": avg_cons_make_records})

    response = client.get("/")

    assert response.status_code == 200
    assert source.requested == ["avgConsMake"]
    assert response.context["selected_metric"] == "avgConsMake"
    assert response.context["error"] is None
    payload = response.context["chart_payload"]
    assert payload["archetype"] == "category_bar"
    assert payload["panels"][0]["data"]["datasets"][0]["data"] == [7.89, 11.2, 0.0]
    assert [entry.label for entry in response.context["navigation"]][:2] == ["avg Cons Make", "top Efficient"]
    assert b"Show Original Data" in response.content


def test_dashboard_renders_partitioned_pies(client, fake_client, co2_rating_records) -> None:
    """co2RatingPct renders one section per model year."""

    fake_client(metrics={"co2RatingPct": co2_rating_records})

    response = client.get("/", {"metric": "co2RatingPct"})

    assert response.status_code == 200
    assert b"Model Year: 2022" in response.content
    assert b"Model Year: 2024" in response.content


def test_dashboard_empty_dataset_shows_no_data(client, fake_client) -> None:
    """An empty record set renders the no-data state, not an error."""

    fake_client(metrics={"bestSmog": []})

    response = client.get("/", {"metric": "bestSmog"})

    assert response.status_code == 200
    assert response.context["error"] is None
    assert b"No data available" in response.content


def test_dashboard_unknown_metric_is_not_fetched(client, fake_client) -> None:
    """Metrics outside the navigation set are reported, never fetched."""

    source = fake_client()

    response = client.get("/", {"metric": "doesNotExist"})

    assert response.status_code == 404
    assert response.context["error"] == "Unknown metric: doesNotExist."
    assert source.requested == []


def test_dashboard_shows_malformed_response_error(client, fake_client) -> None:
    """A non-array payload is surfaced as a user-visible banner."""

    fake_client(error=MalformedResponse("Unexpected data format"))

    response = client.get("/", {"metric": "topEfficient"})

    assert response.status_code == 200
    assert response.context["error"] == "Error fetching topEfficient data: Unexpected data format"
    assert response.context["chart"] is None


def test_dashboard_raw_view_lists_original_records(client, fake_client) -> None:
    """The raw view bypasses charting and renders the 15-column table."""

    fake_client(raw_records=[{"MODEL_YEAR": 2024, "MAKE": "Acura", "COMBINED_CONSUMPTION": 9.4567}])

    response = client.get("/", {"view": "raw"})

    assert response.status_code == 200
    assert response.context["show_original_data"] is True
    assert response.context["chart"] is None
    assert response.context["raw_table"].rows[0][1] == "Acura"
    assert b"Original Data Table" in response.content
    assert b"9.4567" in response.content


def test_dashboard_raw_view_reports_fetch_errors(client, fake_client) -> None:
    """Raw data failures use the original-data error message."""

    fake_client(error=DataSourceError("Failed to fetch http://localhost:5000/api/fuel_consumption_ratings"))

    response = client.get("/", {"view": "raw"})

    assert response.context["error"].startswith("Error fetching original data: Failed to fetch")


@override_settings(VEHICLE_STATS_PARTITION_YEARS=[2023, 2024])
def test_chart_api_returns_rendered_payload(client, fake_client, co2_rating_records) -> None:
    """The JSON API honors configured partition years."""

    fake_client(metrics={"co2RatingPct": co2_rating_records})

    response = client.get("/api/charts/co2RatingPct/")

    assert response.status_code == 200
    payload = json.loads(response.content)
    assert [panel["title"] for panel in payload["panels"]] == ["Model Year: 2023", "Model Year: 2024"]


def test_chart_api_unknown_metric_returns_404(client, fake_client) -> None:
    """Unknown metrics are a 404 with an error message."""

    fake_client()

    response = client.get("/api/charts/doesNotExist/")

    assert response.status_code == 404
    assert "doesNotExist" in json.loads(response.content)["error"]


def test_chart_api_data_source_error_returns_502(client, fake_client) -> None:
    """Data source failures map to a bad-gateway response."""

    fake_client(error=DataSourceError("Failed to fetch"))

    response = client.get("/api/charts/avgConsMake/")

    assert response.status_code == 502
