"""Registry of chartable vehicle metrics.

Each metric id maps to exactly one MetricDescriptor (archetype plus axis
bindings). The table is static and read-only; it is shared by the dashboard,
the JSON API and the `resolve_metric` management command.

Unknown ids fail loudly with `UnknownMetric`. The permissive
`default_descriptor()` exists for callers that explicitly opt into a fallback
(see `analysis.resolver.FallbackPolicy`).
"""

from __future__ import annotations

from typing import Final, Iterable

from .dto import ChartArchetype, MetricDescriptor

DEFAULT_CATEGORY_FIELD: Final[str] = "x"
DEFAULT_VALUE_FIELD: Final[str] = "y"


class UnknownMetric(LookupError):
    """Raised when a metric id is not present in the registry.

    This is a configuration error, not a transient failure.
    """

    def __init__(self, metric_id: str) -> None:
        self.metric_id = metric_id
        super().__init__(f"Unknown metric: {metric_id!r}")


class MetricRegistry:
    """Lookup helpers for metric descriptors."""

    def __init__(self, descriptors: Iterable[MetricDescriptor]) -> None:
        """Initialize a registry from a collection of descriptors."""

        self._descriptors: dict[str, MetricDescriptor] = {}
        for descriptor in descriptors:
            if descriptor.id in self._descriptors:
                raise ValueError(f"Duplicate MetricDescriptor id: {descriptor.id!r}")
            if not isinstance(descriptor.archetype, ChartArchetype):
                raise ValueError(
                    f"MetricDescriptor[{descriptor.id!r}] has invalid archetype={descriptor.archetype!r}; "
                    "expected ChartArchetype."
                )
            if descriptor.archetype is ChartArchetype.year_partitioned_pie and not descriptor.partition_field:
                raise ValueError(
                    f"MetricDescriptor[{descriptor.id!r}] is a year-partitioned pie and requires a partition_field."
                )
            self._descriptors[descriptor.id] = descriptor

    def resolve(self, metric_id: str) -> MetricDescriptor:
        """Return the descriptor for a metric id.

        Raises:
            UnknownMetric: When `metric_id` is not registered.
        """

        try:
            return self._descriptors[metric_id]
        except KeyError:
            raise UnknownMetric(metric_id) from None

    def get(self, metric_id: str) -> MetricDescriptor | None:
        """Return a descriptor for a metric id, or None when missing."""

        return self._descriptors.get(metric_id)

    def default_descriptor(self, metric_id: str = "") -> MetricDescriptor:
        """Return the permissive line-chart descriptor used for unlisted metrics."""

        return MetricDescriptor(
            id=metric_id,
            archetype=ChartArchetype.time_series_line,
            category_field=DEFAULT_CATEGORY_FIELD,
            value_field=DEFAULT_VALUE_FIELD,
            title=metric_id,
        )

    def ids(self) -> tuple[str, ...]:
        """Return registered metric ids in registration order."""

        return tuple(self._descriptors)

    def __contains__(self, metric_id: object) -> bool:
        return metric_id in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)


MODEL_YEAR_FIELD: Final[str] = "MODEL_YEAR"

_DESCRIPTORS: Final[tuple[MetricDescriptor, ...]] = (
    MetricDescriptor(
        id="avgConsMake",
        archetype=ChartArchetype.category_bar,
        category_field="MAKE",
        value_field="AVG_CONS",
        title="Average Consumption by Make",
    ),
    MetricDescriptor(
        id="topEfficient",
        archetype=ChartArchetype.category_bar,
        category_field="MODEL",
        value_field="COMB_CONS",
        title="Most Efficient Models",
    ),
    MetricDescriptor(
        id="fuelTypeDist",
        archetype=ChartArchetype.pie,
        category_field="FUEL_TYPE",
        value_field="COUNT_FT",
        title="Fuel Type Distribution",
    ),
    MetricDescriptor(
        id="co2ByClass",
        archetype=ChartArchetype.category_bar,
        category_field="VEH_CLASS",
        value_field="AVG_CO2",
        title="CO2 Emissions by Vehicle Class",
    ),
    MetricDescriptor(
        id="bestSmog",
        archetype=ChartArchetype.category_bar,
        category_field="MODEL",
        value_field="SMOG_RATING",
        title="Best Smog Ratings",
    ),
    MetricDescriptor(
        id="consByTrans",
        archetype=ChartArchetype.category_bar,
        category_field="TRANS",
        value_field="AVG_CONS",
        title="Consumption by Transmission",
    ),
    MetricDescriptor(
        id="co2RatingPct",
        archetype=ChartArchetype.year_partitioned_pie,
        category_field="CO2_RATING",
        value_field="PERCENTAGE",
        partition_field=MODEL_YEAR_FIELD,
        title="CO2 Rating Share by Model Year",
    ),
    MetricDescriptor(
        id="topLowCo2",
        archetype=ChartArchetype.category_bar,
        category_field="MAKE",
        value_field="AVG_CO2",
        title="Makes with the Lowest CO2",
    ),
)

DEFAULT_REGISTRY: Final[MetricRegistry] = MetricRegistry(_DESCRIPTORS)

NAVIGATION_METRIC_IDS: Final[tuple[str, ...]] = DEFAULT_REGISTRY.ids()

DEFAULT_METRIC_ID: Final[str] = NAVIGATION_METRIC_IDS[0]
