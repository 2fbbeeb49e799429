"""Tabular "original data" display mode.

Raw ratings records bypass chart resolution entirely: no rounding, no
zero-filling, just a fixed 15-column listing.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True, slots=True)
class RawDataColumn:
    """One column of the raw data table."""

    field: str
    header: str


RAW_DATA_COLUMNS: Final[tuple[RawDataColumn, ...]] = (
    RawDataColumn(field="MODEL_YEAR", header="Model Year"),
    RawDataColumn(field="MAKE", header="Make"),
    RawDataColumn(field="MODEL", header="Model"),
    RawDataColumn(field="VEHICLE_CLASS", header="Vehicle Class"),
    RawDataColumn(field="ENGINE_SIZE", header="Engine Size"),
    RawDataColumn(field="CYLINDERS", header="Cylinders"),
    RawDataColumn(field="TRANSMISSION", header="Transmission"),
    RawDataColumn(field="FUEL_TYPE", header="Fuel Type"),
    RawDataColumn(field="CITY_CONSUMPTION", header="City Consumption"),
    RawDataColumn(field="HIGHWAY_CONSUMPTION", header="Highway Consumption"),
    RawDataColumn(field="COMBINED_CONSUMPTION", header="Combined Consumption"),
    RawDataColumn(field="COMBINED_MPG", header="Combined MPG"),
    RawDataColumn(field="CO2_EMISSIONS", header="CO2 Emissions"),
    RawDataColumn(field="CO2_RATING", header="CO2 Rating"),
    RawDataColumn(field="SMOG_RATING", header="Smog Rating"),
)


@dataclass(frozen=True, slots=True)
class RawDataTable:
    """Template-ready raw data table."""

    headers: tuple[str, ...]
    rows: tuple[tuple[object, ...], ...]


def build_raw_table(
    records: Iterable[Mapping[str, object]],
    *,
    columns: tuple[RawDataColumn, ...] = RAW_DATA_COLUMNS,
) -> RawDataTable:
    """Project raw records onto the fixed column schema.

    Missing fields render as empty cells; values are not formatted.
    """

    rows = tuple(
        tuple("" if record.get(column.field) is None else record.get(column.field) for column in columns)
        for record in records
    )
    return RawDataTable(headers=tuple(column.header for column in columns), rows=rows)
