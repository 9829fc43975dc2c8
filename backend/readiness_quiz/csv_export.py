"""CSV export of stored assessments.

The column order is consumed by downstream dashboards and must not change.
"""
from __future__ import annotations

import csv
import io
from datetime import datetime
from typing import Any, Dict, Iterable, List

from .records import AssessmentRecord

CSV_COLUMNS: tuple[str, ...] = (
    "session_id",
    "timestamp",
    "numeracy_score",
    "reading_score",
    "computer_score",
    "logic_score",
    "communication_score",
    "mindset_score",
    "readiness_level",
    "readiness_title",
)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

_INT_COLUMNS = {c for c in CSV_COLUMNS if c.endswith("_score")} | {"readiness_level"}


def _row(record: AssessmentRecord) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key in CSV_COLUMNS:
        val = getattr(record, key)
        if key == "timestamp":
            out[key] = val.strftime(TIMESTAMP_FORMAT) if val is not None else ""
        else:
            out[key] = "" if val is None else val
    return out


def to_csv(records: Iterable[AssessmentRecord]) -> str:
    """Render records with a fixed header; fields are quoted only when needed."""

    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=CSV_COLUMNS, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
    writer.writeheader()
    for record in records:
        writer.writerow(_row(record))
    return buf.getvalue()


def parse_csv(text: str) -> List[AssessmentRecord]:
    reader = csv.DictReader(io.StringIO(text))
    if tuple(reader.fieldnames or ()) != CSV_COLUMNS:
        raise ValueError(f"unexpected CSV header: {reader.fieldnames}")
    out: List[AssessmentRecord] = []
    for row in reader:
        values: Dict[str, Any] = {}
        for key in CSV_COLUMNS:
            raw = row[key]
            if key in _INT_COLUMNS:
                values[key] = int(raw)
            elif key == "timestamp":
                values[key] = datetime.strptime(raw, TIMESTAMP_FORMAT)
            else:
                values[key] = raw
        out.append(AssessmentRecord(user_ip_hash=None, consent_given=None, **values))
    return out


__all__ = ["CSV_COLUMNS", "to_csv", "parse_csv"]
