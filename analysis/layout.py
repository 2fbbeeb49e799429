"""Cardinality-driven layout sizing for charts.

Bar thickness, canvas height and the category-axis width all depend on how
many records a chart has and how long its labels are. Everything here is a
total function: empty inputs produce the minimum-bound layout.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from .dto import LayoutParams, Record

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LayoutConfig:
    """Tunable constants used by `compute_layout`.

    Args:
        min_bar_thickness: Lower bound for bar thickness (pixels).
        bar_thickness_budget: Total thickness shared by all bars before the floor applies.
        min_chart_height: Lower bound for the chart canvas height (pixels).
        row_height: Height reserved per record (pixels).
        glyph_width: Approximate average label glyph width (pixels).
    """

    min_bar_thickness: int = 40
    bar_thickness_budget: int = 200
    min_chart_height: int = 500
    row_height: int = 40
    glyph_width: int = 8


DEFAULT_LAYOUT_CONFIG = LayoutConfig()


def compute_layout(
    records: Sequence[Record],
    category_field: str,
    *,
    config: LayoutConfig = DEFAULT_LAYOUT_CONFIG,
) -> LayoutParams:
    """Compute layout parameters for a record set.

    Args:
        records: Normalized records to be drawn.
        category_field: Field whose values label the category axis.
        config: Layout constants.

    Returns:
        LayoutParams where `bar_thickness = max(min, budget / count)`,
        `chart_height = max(min, count * row_height)` and the category-axis
        width fits the longest label.
    """

    count = len(records)
    if count:
        bar_thickness = max(config.min_bar_thickness, config.bar_thickness_budget / count)
    else:
        bar_thickness = config.min_bar_thickness

    return LayoutParams(
        bar_thickness=bar_thickness,
        chart_height=max(config.min_chart_height, count * config.row_height),
        category_axis_width=category_axis_width(records, category_field, glyph_width=config.glyph_width),
    )


def label_width(label: object, *, glyph_width: int) -> int:
    """Estimate the rendered width of a label in pixels.

    Missing, empty and zero labels take no width. Nulls are normalized to `0`
    before layout, so they land here as zero.
    """

    if not label:
        return 0
    return len(str(label)) * glyph_width


def category_axis_width(records: Sequence[Record], category_field: str, *, glyph_width: int) -> int:
    """Return the width needed by the widest category label (0 when none)."""

    widths = [
        label_width(record[category_field], glyph_width=glyph_width)
        for record in records
        if category_field in record
    ]
    if records and not widths:
        logger.debug("Category field %r is missing from all %d records.", category_field, len(records))
    return max(widths, default=0)
