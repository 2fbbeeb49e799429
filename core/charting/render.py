"""Render resolved ChartSpecs as Chart.js payloads.

This is the rendering backend for the dashboard: it consumes a fully resolved
`analysis.dto.ChartSpec` and emits JSON-ready Chart.js configurations. No
decisions about archetype or axes are made here.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Final, TypedDict, assert_never

from analysis.dto import ChartArchetype, ChartSpec

from .palette import DEFAULT_PALETTE, ColorPalette

EMPTY_STATE_MESSAGE: Final[str] = "No data available"
PIE_PANEL_HEIGHT: Final[int] = 400
PIE_OUTER_RADIUS: Final[int] = 150
MIN_BAR_LENGTH: Final[int] = 10
VALUE_DECIMALS: Final[int] = 2


class ChartDataset(TypedDict, total=False):
    """A Chart.js dataset payload."""

    label: str
    data: list[float | None]
    borderColor: str
    backgroundColor: str | list[str]
    barThickness: float
    minBarLength: int
    borderWidth: int
    tension: float
    fill: bool


class ChartData(TypedDict):
    """Chart.js `data` block (labels + datasets)."""

    labels: list[str]
    datasets: list[ChartDataset]


class ChartPanel(TypedDict):
    """One drawable chart section on the dashboard.

    `categoryAxisWidth` is applied client-side to the category scale;
    `valueDecimals` drives tick and tooltip formatting.
    """

    title: str | None
    type: str
    height: int
    indexAxis: str
    radius: int | None
    categoryAxisWidth: int
    valueDecimals: int
    gridColor: str
    labelColor: str
    isEmpty: bool
    data: ChartData


@dataclass(frozen=True, slots=True)
class RenderedChart:
    """A rendered chart produced from a ChartSpec."""

    metric_id: str
    archetype: ChartArchetype
    title: str
    panels: tuple[ChartPanel, ...]
    empty_state: str | None = None

    def as_json(self) -> dict[str, object]:
        """Return a JSON-serializable payload for templates and the JSON API."""

        return {
            "metricId": self.metric_id,
            "archetype": str(self.archetype),
            "title": self.title,
            "emptyState": self.empty_state,
            "panels": list(self.panels),
        }


def render_chart_spec(
    spec: ChartSpec,
    *,
    title: str = "",
    palette: ColorPalette = DEFAULT_PALETTE,
) -> RenderedChart:
    """Render a ChartSpec into Chart.js panels.

    Args:
        spec: Resolved chart specification.
        title: Chart title shown above the panels.
        palette: Colors used for bars, lines and slices.

    Returns:
        RenderedChart with one panel per drawable section. An empty spec yields
        no panels and an explicit empty-state message.
    """

    if spec.is_empty:
        return RenderedChart(
            metric_id=spec.metric_id,
            archetype=spec.archetype,
            title=title,
            panels=(),
            empty_state=EMPTY_STATE_MESSAGE,
        )

    match spec.archetype:
        case ChartArchetype.category_bar:
            panels = (_bar_panel(spec, palette=palette),)
        case ChartArchetype.pie:
            panels = (_pie_panel(spec, palette=palette, title=None),)
        case ChartArchetype.year_partitioned_pie:
            panels = tuple(
                _pie_panel(child, palette=palette, title=f"Model Year: {child.partition_value}")
                for child in spec.sub_specs
            )
        case ChartArchetype.time_series_line:
            panels = (_line_panel(spec, palette=palette),)
        case _:
            assert_never(spec.archetype)

    return RenderedChart(metric_id=spec.metric_id, archetype=spec.archetype, title=title, panels=panels)


def _bar_panel(spec: ChartSpec, *, palette: ColorPalette) -> ChartPanel:
    """Build a horizontal bar panel sized by the spec's layout."""

    dataset: ChartDataset = {
        "label": spec.value_field,
        "data": _values(spec),
        "backgroundColor": palette.primary,
        "borderColor": palette.primary,
        "barThickness": spec.layout.bar_thickness,
        "minBarLength": MIN_BAR_LENGTH,
    }
    return _panel(
        spec,
        chart_type="bar",
        height=spec.layout.chart_height,
        index_axis="y",
        category_axis_width=spec.layout.category_axis_width,
        datasets=[dataset],
        palette=palette,
    )


def _pie_panel(spec: ChartSpec, *, palette: ColorPalette, title: str | None) -> ChartPanel:
    """Build a pie panel with one palette color per slice."""

    dataset: ChartDataset = {
        "label": spec.value_field,
        "data": _values(spec),
        "backgroundColor": palette.colors_for(len(spec.records)),
        "borderColor": "#ffffff",
        "borderWidth": 1,
    }
    return _panel(
        spec,
        chart_type="pie",
        height=PIE_PANEL_HEIGHT,
        radius=PIE_OUTER_RADIUS,
        datasets=[dataset],
        palette=palette,
        title=title,
    )


def _line_panel(spec: ChartSpec, *, palette: ColorPalette) -> ChartPanel:
    """Build a single-series line panel."""

    dataset: ChartDataset = {
        "label": spec.value_field,
        "data": _values(spec),
        "borderColor": palette.primary,
        "backgroundColor": palette.primary,
        "borderWidth": 2,
        "tension": 0.4,
        "fill": False,
    }
    return _panel(
        spec,
        chart_type="line",
        height=spec.layout.chart_height,
        datasets=[dataset],
        palette=palette,
    )


def _panel(
    spec: ChartSpec,
    *,
    chart_type: str,
    height: int,
    datasets: list[ChartDataset],
    palette: ColorPalette,
    index_axis: str = "x",
    radius: int | None = None,
    category_axis_width: int = 0,
    title: str | None = None,
) -> ChartPanel:
    """Assemble a ChartPanel from its parts."""

    return {
        "title": title,
        "type": chart_type,
        "height": height,
        "indexAxis": index_axis,
        "radius": radius,
        "categoryAxisWidth": category_axis_width,
        "valueDecimals": VALUE_DECIMALS,
        "gridColor": palette.grid,
        "labelColor": palette.label,
        "isEmpty": spec.is_empty,
        "data": {"labels": _labels(spec), "datasets": datasets},
    }


def _labels(spec: ChartSpec) -> list[str]:
    """Return category labels in record order (missing labels become empty strings)."""

    labels: list[str] = []
    for record in spec.records:
        value = record.get(spec.category_field)
        labels.append("" if value is None else str(value))
    return labels


def _values(spec: ChartSpec) -> list[float | None]:
    """Return numeric values in record order; non-numeric values become None."""

    return [_numeric_or_none(record.get(spec.value_field)) for record in spec.records]


def _numeric_or_none(value: object) -> float | None:
    """Coerce a record value into a Chart.js data point."""

    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        return float(value)
    return None
