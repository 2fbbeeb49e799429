"""Resolve a metric into a ChartSpec from the command line."""

from __future__ import annotations

import json
from pathlib import Path

from django.core.management.base import BaseCommand, CommandError
from django.core.serializers.json import DjangoJSONEncoder

from analysis.metric_registry import UnknownMetric
from analysis.resolver import FallbackPolicy
from core.charting.configs import chart_title, palette_from_settings, resolver_from_settings
from core.charting.render import render_chart_spec
from core.data_source import DataSourceError, default_client


class Command(BaseCommand):
    """Print the resolved ChartSpec (or rendered Chart.js payload) for a metric.

    Records come either from a local JSON file (`--input`) or from the
    configured data source (`--fetch`).
    """

    help = "Resolve a metric and its records into a ChartSpec and print it as JSON."

    def add_arguments(self, parser) -> None:
        """Add command arguments."""

        parser.add_argument("metric_id", help="Metric identifier, e.g. avgConsMake.")
        parser.add_argument(
            "--input",
            type=Path,
            default=None,
            help="Path to a JSON file containing an array of records.",
        )
        parser.add_argument(
            "--fetch",
            action="store_true",
            help="Fetch records from the configured data source.",
        )
        parser.add_argument(
            "--allow-fallback",
            action="store_true",
            help="Chart unregistered metrics as a default line chart instead of failing.",
        )
        parser.add_argument(
            "--render",
            action="store_true",
            help="Print the rendered Chart.js payload instead of the ChartSpec.",
        )

    def handle(self, *args, **options) -> str | None:
        """Run the command."""

        metric_id: str = options["metric_id"]
        input_path: Path | None = options["input"]
        fetch: bool = options["fetch"]
        fallback = FallbackPolicy.default_descriptor if options["allow_fallback"] else FallbackPolicy.strict

        if (input_path is None) == (not fetch):
            raise CommandError("Provide exactly one record source: --input FILE or --fetch.")

        resolver = resolver_from_settings(fallback=fallback)
        try:
            descriptor = resolver.descriptor_for(metric_id)
        except UnknownMetric as exc:
            raise CommandError(str(exc)) from exc

        if input_path is not None:
            records = _load_records(input_path)
        else:
            try:
                records = default_client().fetch_metric(descriptor.id)
            except DataSourceError as exc:
                raise CommandError(f"Error fetching {metric_id} data: {exc}") from exc

        spec = resolver.resolve(metric_id, records)
        if options["render"]:
            payload = render_chart_spec(spec, title=chart_title(metric_id), palette=palette_from_settings()).as_json()
        else:
            payload = spec.as_dict()
        self.stdout.write(json.dumps(payload, indent=2, cls=DjangoJSONEncoder))
        return None


def _load_records(path: Path) -> list[dict[str, object]]:
    """Load a JSON array of records from disk.

    Raises:
        CommandError: When the file is missing, not JSON, or not an array of objects.
    """

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise CommandError(f"Cannot read records file: {path}") from exc
    except json.JSONDecodeError as exc:
        raise CommandError(f"Records file is not valid JSON: {path}") from exc

    if not isinstance(payload, list) or not all(isinstance(item, dict) for item in payload):
        raise CommandError("Unexpected data format: records file must contain a JSON array of objects.")
    return payload
