"""Views for the vehicle statistics dashboard."""

from __future__ import annotations

import logging

from django.http import HttpRequest, HttpResponse, JsonResponse
from django.shortcuts import render

from analysis.metric_registry import DEFAULT_METRIC_ID, NAVIGATION_METRIC_IDS, UnknownMetric
from core.charting.configs import chart_title, navigation_entries, palette_from_settings, resolver_from_settings
from core.charting.render import RenderedChart, render_chart_spec
from core.data_source import DataSourceError, VehicleStatsClient, default_client
from core.raw_data import RawDataTable, build_raw_table

logger = logging.getLogger(__name__)

RAW_DATA_VIEW = "raw"


def get_client() -> VehicleStatsClient:
    """Return the data source client used by views (patched in tests)."""

    return default_client()


def dashboard(request: HttpRequest) -> HttpResponse:
    """Render the dashboard: metric navigation plus a chart or the raw data table.

    Query parameters:
        metric: Selected metric id (defaults to the first navigation entry).
        view: `raw` switches to the original-data table instead of a chart.
    """

    metric_id = (request.GET.get("metric") or DEFAULT_METRIC_ID).strip()
    show_original_data = request.GET.get("view") == RAW_DATA_VIEW

    error: str | None = None
    chart: RenderedChart | None = None
    raw_table: RawDataTable | None = None
    status = 200

    if show_original_data:
        try:
            raw_table = build_raw_table(get_client().fetch_raw_records())
        except DataSourceError as exc:
            error = f"Error fetching original data: {exc}"
    elif metric_id not in NAVIGATION_METRIC_IDS:
        error = f"Unknown metric: {metric_id}."
        status = 404
    else:
        try:
            chart = _render_metric(metric_id)
        except DataSourceError as exc:
            error = f"Error fetching {metric_id} data: {exc}"

    if error:
        logger.warning(error)

    return render(
        request,
        "core/dashboard.html",
        {
            "navigation": navigation_entries(),
            "selected_metric": metric_id,
            "show_original_data": show_original_data,
            "error": error,
            "chart": chart,
            "chart_payload": chart.as_json() if chart is not None else None,
            "raw_table": raw_table,
        },
        status=status,
    )


def chart_api(request: HttpRequest, metric_id: str) -> JsonResponse:
    """Return the rendered Chart.js payload for a metric as JSON."""

    try:
        chart = _render_metric(metric_id)
    except UnknownMetric as exc:
        return JsonResponse({"error": str(exc)}, status=404)
    except DataSourceError as exc:
        return JsonResponse({"error": f"Error fetching {metric_id} data: {exc}"}, status=502)
    return JsonResponse(chart.as_json())


def _render_metric(metric_id: str) -> RenderedChart:
    """Fetch, resolve and render one metric.

    Raises:
        UnknownMetric: When the metric id is not registered.
        DataSourceError: When the data source fails or returns a malformed payload.
    """

    resolver = resolver_from_settings()
    descriptor = resolver.descriptor_for(metric_id)
    records = get_client().fetch_metric(descriptor.id)
    spec = resolver.resolve(metric_id, records)
    return render_chart_spec(spec, title=chart_title(metric_id), palette=palette_from_settings())
