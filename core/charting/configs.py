"""Settings-driven chart configuration for the dashboard.

Builds the resolver, palette and navigation entries from Django settings so
that the pure `analysis` package never reads global configuration itself.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from django.conf import settings

from analysis.layout import LayoutConfig
from analysis.metric_registry import DEFAULT_REGISTRY, NAVIGATION_METRIC_IDS
from analysis.resolver import ChartResolver, FallbackPolicy

from .palette import ColorPalette

_CAMEL_BOUNDARY = re.compile(r"(?=[A-Z])")


@dataclass(frozen=True, slots=True)
class NavigationEntry:
    """A selectable metric in the dashboard toolbar."""

    metric_id: str
    label: str
    title: str


def metric_button_label(metric_id: str) -> str:
    """Split a camelCase metric id into words ("avgConsMake" -> "avg Cons Make")."""

    return " ".join(part for part in _CAMEL_BOUNDARY.split(metric_id) if part)


def navigation_entries() -> tuple[NavigationEntry, ...]:
    """Return the fixed, ordered metric navigation set."""

    entries: list[NavigationEntry] = []
    for metric_id in NAVIGATION_METRIC_IDS:
        descriptor = DEFAULT_REGISTRY.resolve(metric_id)
        entries.append(
            NavigationEntry(
                metric_id=metric_id,
                label=metric_button_label(metric_id),
                title=descriptor.title or metric_id,
            )
        )
    return tuple(entries)


def layout_config_from_settings() -> LayoutConfig:
    """Return layout constants with settings overrides applied."""

    return LayoutConfig(glyph_width=settings.VEHICLE_STATS_LABEL_GLYPH_WIDTH)


def palette_from_settings() -> ColorPalette:
    """Return the chart palette configured in settings."""

    return ColorPalette(colors=tuple(settings.VEHICLE_STATS_PALETTE))


def resolver_from_settings(*, fallback: FallbackPolicy = FallbackPolicy.strict) -> ChartResolver:
    """Return a ChartResolver configured from settings.

    Args:
        fallback: Unknown-metric policy. The dashboard and JSON API are strict;
            only the CLI opts into the default line chart.
    """

    return ChartResolver(
        registry=DEFAULT_REGISTRY,
        layout_config=layout_config_from_settings(),
        partition_years=settings.VEHICLE_STATS_PARTITION_YEARS,
        fallback=fallback,
    )


def chart_title(metric_id: str) -> str:
    """Return the display title for a metric (the id itself when unregistered)."""

    descriptor = DEFAULT_REGISTRY.get(metric_id)
    if descriptor is None or not descriptor.title:
        return metric_id
    return descriptor.title
