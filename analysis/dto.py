"""Data types shared by the chart resolution engine.

DTOs are plain data containers handed from the resolution engine to the
rendering layer. They intentionally avoid any Django dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import TypeAlias

Record: TypeAlias = Mapping[str, object]


class ChartArchetype(StrEnum):
    """Chart family chosen for a metric.

    Values are stable identifiers used in JSON payloads and templates.
    """

    category_bar = "category_bar"
    pie = "pie"
    year_partitioned_pie = "year_partitioned_pie"
    time_series_line = "time_series_line"


@dataclass(frozen=True, slots=True)
class MetricDescriptor:
    """Describe how a metric is charted.

    Args:
        id: Stable metric identifier (also the data source endpoint name).
        archetype: Chart family used for the metric.
        category_field: Record field bound to the category axis (or slice names).
        value_field: Record field bound to the measured value.
        partition_field: Field used to split records into sub-charts; required
            for `year_partitioned_pie`.
        title: Human-friendly chart title.
    """

    id: str
    archetype: ChartArchetype
    category_field: str
    value_field: str
    partition_field: str | None = None
    title: str = ""


@dataclass(frozen=True, slots=True)
class LayoutParams:
    """Cardinality-driven layout parameters for one chart."""

    bar_thickness: float
    chart_height: int
    category_axis_width: int


@dataclass(frozen=True, slots=True)
class ChartSpec:
    """Fully resolved, renderer-agnostic description of one chart.

    Args:
        metric_id: Metric identifier the spec was resolved for.
        archetype: Chart family to draw.
        category_field: Field bound to the category axis.
        value_field: Field bound to the value axis.
        records: Normalized records, in source order.
        layout: Layout parameters derived from `records`.
        sub_specs: Child `pie` specs, one per partition (partitioned pies only).
        partition_value: Partition key this spec was filtered to (child specs only).
    """

    metric_id: str
    archetype: ChartArchetype
    category_field: str
    value_field: str
    records: tuple[Record, ...]
    layout: LayoutParams
    sub_specs: tuple["ChartSpec", ...] = ()
    partition_value: int | None = None

    @property
    def is_empty(self) -> bool:
        """Return True when the spec has no records to draw."""

        return not self.records

    def as_dict(self) -> dict[str, object]:
        """Return a JSON-serializable representation of the spec."""

        payload: dict[str, object] = {
            "metricId": self.metric_id,
            "archetype": str(self.archetype),
            "categoryField": self.category_field,
            "valueField": self.value_field,
            "records": [dict(record) for record in self.records],
            "layout": {
                "barThickness": self.layout.bar_thickness,
                "chartHeight": self.layout.chart_height,
                "categoryAxisWidth": self.layout.category_axis_width,
            },
        }
        if self.partition_value is not None:
            payload["partitionValue"] = self.partition_value
        if self.sub_specs:
            payload["subSpecs"] = [child.as_dict() for child in self.sub_specs]
        return payload
