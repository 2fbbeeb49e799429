"""Resolve a metric and its raw records into a ChartSpec.

Resolution is a pure function of `(metric_id, raw_records)` plus the injected,
read-only configuration (registry, layout constants, partition years).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from enum import StrEnum
from typing import Final, assert_never

from .dto import ChartArchetype, ChartSpec, MetricDescriptor, Record
from .layout import DEFAULT_LAYOUT_CONFIG, LayoutConfig, compute_layout
from .metric_registry import DEFAULT_REGISTRY, MetricRegistry, UnknownMetric
from .normalize import normalize_records
from .splitter import build_partitioned_spec

logger = logging.getLogger(__name__)

DEFAULT_PARTITION_YEARS: Final[tuple[int, ...]] = (2022, 2023, 2024)


class FallbackPolicy(StrEnum):
    """How a resolver treats metric ids missing from the registry.

    `strict` propagates `UnknownMetric`; `default_descriptor` charts the
    metric as a line using the registry's default descriptor.
    """

    strict = "strict"
    default_descriptor = "default_descriptor"


class ChartResolver:
    """Turn metric ids and raw records into fully resolved ChartSpecs."""

    def __init__(
        self,
        *,
        registry: MetricRegistry = DEFAULT_REGISTRY,
        layout_config: LayoutConfig = DEFAULT_LAYOUT_CONFIG,
        partition_years: Iterable[int] = DEFAULT_PARTITION_YEARS,
        fallback: FallbackPolicy = FallbackPolicy.strict,
    ) -> None:
        self.registry = registry
        self.layout_config = layout_config
        self.partition_years: tuple[int, ...] = tuple(sorted(set(partition_years)))
        self.fallback = fallback

    def descriptor_for(self, metric_id: str) -> MetricDescriptor:
        """Return the descriptor for a metric id under this resolver's policy.

        Raises:
            UnknownMetric: When the id is unknown and the policy is strict.
        """

        try:
            return self.registry.resolve(metric_id)
        except UnknownMetric:
            if self.fallback is FallbackPolicy.strict:
                raise
            logger.warning("Metric %r is not registered; using the default line chart.", metric_id)
            return self.registry.default_descriptor(metric_id)

    def resolve(self, metric_id: str, raw_records: Sequence[Record]) -> ChartSpec:
        """Resolve a metric and its raw records into a ChartSpec.

        Args:
            metric_id: Metric identifier.
            raw_records: Records as delivered by the data source (not mutated).

        Returns:
            A newly constructed ChartSpec. Empty input yields an empty spec;
            the "no data" state is the renderer's concern.

        Raises:
            UnknownMetric: When the id is unknown and the policy is strict.
        """

        records = normalize_records(raw_records)
        descriptor = self.descriptor_for(metric_id)
        logger.debug(
            "Resolving metric %r as %s over %d records.", metric_id, descriptor.archetype, len(records)
        )

        match descriptor.archetype:
            case ChartArchetype.year_partitioned_pie:
                return build_partitioned_spec(
                    descriptor,
                    records,
                    self.partition_years,
                    metric_id=metric_id,
                    layout_config=self.layout_config,
                )
            case ChartArchetype.category_bar | ChartArchetype.pie | ChartArchetype.time_series_line:
                return ChartSpec(
                    metric_id=metric_id,
                    archetype=descriptor.archetype,
                    category_field=descriptor.category_field,
                    value_field=descriptor.value_field,
                    records=records,
                    layout=compute_layout(records, descriptor.category_field, config=self.layout_config),
                )
            case _:
                assert_never(descriptor.archetype)


DEFAULT_RESOLVER: Final[ChartResolver] = ChartResolver()


def resolve_chart(metric_id: str, raw_records: Sequence[Record]) -> ChartSpec:
    """Resolve with the default registry and strict unknown-metric policy."""

    return DEFAULT_RESOLVER.resolve(metric_id, raw_records)
