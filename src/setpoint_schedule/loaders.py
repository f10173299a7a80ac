"""Data loading utilities for calendar event records."""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path

from setpoint_schedule.schema import parse_timestamp, validate_event_record
from setpoint_schedule.types import RawEvent


def raw_event_from_dict(item: dict) -> RawEvent:
    """Convert a calendar-API event object to a RawEvent.

    Expected shape:
    {
        "summary": "21",
        "start": {"dateTime": "2025-01-06T08:00:00Z"} | {"date": "2025-01-06"},
        "end":   {"dateTime": "..."} | {"date": "..."},
        "created": "2025-01-01T12:00:00Z"
    }

    The record is assumed valid; see schema.validate_event_record.
    """
    start = item["start"]
    end = item["end"]
    return RawEvent(
        label=item.get("summary") or "",
        created_at=parse_timestamp(item["created"]),
        start=parse_timestamp(start["dateTime"]) if "dateTime" in start else None,
        start_date=date.fromisoformat(start["date"]) if "dateTime" not in start else None,
        end=parse_timestamp(end["dateTime"]) if "dateTime" in end else None,
        end_date=date.fromisoformat(end["date"]) if "dateTime" not in end else None,
    )


def load_events_json(path: str | Path) -> list[RawEvent]:
    """Load raw events from a JSON file.

    Accepts either a bare list of event objects or a calendar-API
    response of the form {"items": [...]}.

    Raises ValueError if validation fails.
    """
    path = Path(path)
    with open(path) as f:
        data = json.load(f)

    items = data.get("items", []) if isinstance(data, dict) else data
    if not isinstance(items, list):
        raise ValueError(f"Validation errors in {path.name}:\n  - expected a list of events")

    errors: list[str] = []
    for i, item in enumerate(items):
        errors.extend(validate_event_record(i, item))
    if errors:
        raise ValueError(
            f"Validation errors in {path.name}:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )

    return [raw_event_from_dict(item) for item in items]
