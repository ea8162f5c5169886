"""CSV and JSON serializations of a session report."""

from __future__ import annotations

import csv
import io
import json

from .models import CSV_COLUMNS, SessionReport


def export_csv(report: SessionReport) -> str:
    """One row per participant, columns in CSV_COLUMNS order.

    Empty cells mean the value does not apply to this drill.
    """
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=CSV_COLUMNS, lineterminator="\n")
    writer.writeheader()
    for row in report.rows():
        writer.writerow({k: ("" if v is None else v) for k, v in row.items()})
    return buffer.getvalue()


def export_json(report: SessionReport, indent: int = 2) -> str:
    """Nested JSON document for the report."""
    return json.dumps(report.to_dict(), indent=indent)


def export_json_rows(report: SessionReport) -> str:
    """The flat rows as a JSON array (same shape as the CSV)."""
    return json.dumps(report.rows(), indent=2)
