"""App configuration for the dashboard Django app."""

from __future__ import annotations

from django.apps import AppConfig


class CoreConfig(AppConfig):
    """Configuration for the `core` app (dashboard views, chart rendering, data source)."""

    name = "core"
    verbose_name = "Vehicle data dashboard"
