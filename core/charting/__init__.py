"""Chart configuration and rendering helpers for the dashboard.

Metric resolution happens in the pure `analysis` package. This package wires
it to Django settings and turns the resulting `ChartSpec` objects into Chart.js
payloads for the dashboard templates and the JSON API.
"""
