"""Split one record set into year-scoped pie charts.

Used only for `year_partitioned_pie` metrics: every configured year yields a
section, even when no record matches it, so the dashboard always shows the
same predictable set of pies.
"""

from __future__ import annotations

from collections.abc import Sequence

from .dto import ChartArchetype, ChartSpec, MetricDescriptor, Record
from .layout import DEFAULT_LAYOUT_CONFIG, LayoutConfig, compute_layout


def split_by_year(
    records: Sequence[Record],
    years: Sequence[int],
    *,
    metric_id: str,
    partition_field: str,
    category_field: str,
    value_field: str,
    layout_config: LayoutConfig = DEFAULT_LAYOUT_CONFIG,
) -> tuple[ChartSpec, ...]:
    """Build one `pie` ChartSpec per year.

    Args:
        records: Normalized records containing the partition field.
        years: Partition values, in output order.
        metric_id: Metric identifier stamped on every child spec.
        partition_field: Field compared (by equality) against each year.
        category_field: Field naming each slice.
        value_field: Field sizing each slice.
        layout_config: Layout constants for the child specs.

    Returns:
        A tuple with exactly one spec per entry in `years`. Records keep their
        original relative order; years without records get an empty spec.
    """

    specs: list[ChartSpec] = []
    for year in years:
        subset = tuple(record for record in records if record.get(partition_field) == year)
        specs.append(
            ChartSpec(
                metric_id=metric_id,
                archetype=ChartArchetype.pie,
                category_field=category_field,
                value_field=value_field,
                records=subset,
                layout=compute_layout(subset, category_field, config=layout_config),
                partition_value=year,
            )
        )
    return tuple(specs)


def build_partitioned_spec(
    descriptor: MetricDescriptor,
    records: Sequence[Record],
    years: Sequence[int],
    *,
    metric_id: str | None = None,
    layout_config: LayoutConfig = DEFAULT_LAYOUT_CONFIG,
) -> ChartSpec:
    """Build the composite spec for a `year_partitioned_pie` descriptor.

    The registry guarantees partitioned descriptors declare a partition field.
    """

    resolved_id = metric_id or descriptor.id
    children = split_by_year(
        records,
        years,
        metric_id=resolved_id,
        partition_field=descriptor.partition_field or "",
        category_field=descriptor.category_field,
        value_field=descriptor.value_field,
        layout_config=layout_config,
    )
    return ChartSpec(
        metric_id=resolved_id,
        archetype=ChartArchetype.year_partitioned_pie,
        category_field=descriptor.category_field,
        value_field=descriptor.value_field,
        records=tuple(records),
        layout=compute_layout(records, descriptor.category_field, config=layout_config),
        sub_specs=children,
    )
