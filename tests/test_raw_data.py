"""Unit tests for the raw data table."""

from __future__ import annotations

import pytest

from core.raw_data import RAW_DATA_COLUMNS, build_raw_table

pytestmark = pytest.mark.unit


def test_raw_data_schema_has_fifteen_columns() -> None:
    """The original-data listing uses a fixed 15-column schema."""

    assert len(RAW_DATA_COLUMNS) == 15
    assert RAW_DATA_COLUMNS[0].header == "Model Year"
    assert RAW_DATA_COLUMNS[-1].header == "Smog Rating"


def test_build_raw_table_projects_records_without_formatting() -> None:
    """Values are passed through unrounded; missing fields become empty cells."""

    table = build_raw_table([{"MODEL_YEAR": 2023, "MAKE": "Kia", "COMBINED_CONSUMPTION": 7.8912, "MODEL": None}])

    (row,) = table.rows
    assert len(row) == 15
    assert row[0] == 2023
    assert row[1] == "Kia"
    assert row[2] == ""
    assert row[10] == 7.8912
    assert table.headers[10] == "Combined Consumption"
