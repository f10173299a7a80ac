"""Input validation for settings and calendar event records."""

from __future__ import annotations

from datetime import date, datetime


def parse_timestamp(value: str) -> datetime:
    """Parse an RFC 3339 / ISO-8601 timestamp. A trailing 'Z' means UTC."""
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def validate_config(
    calendar_name: object,
    granularity_minutes: object,
    lookahead_minutes: object,
    default_target: object,
) -> list[str]:
    """Validate target settings. Returns list of error messages (empty = valid).

    Checks:
    - calendar_name is a non-empty string
    - granularity is an integer >= 1
    - lookahead is an integer >= 0
    - default_target is an integer
    """
    errors: list[str] = []

    if not isinstance(calendar_name, str) or not calendar_name:
        errors.append(f"calendar_name must be a non-empty string, got {calendar_name!r}")

    for name, value, minimum in (
        ("granularity_minutes", granularity_minutes, 1),
        ("lookahead_minutes", lookahead_minutes, 0),
    ):
        if isinstance(value, bool) or not isinstance(value, int):
            errors.append(f"{name} must be an integer, got {value!r}")
        elif value < minimum:
            errors.append(f"{name} must be >= {minimum}, got {value}")

    if isinstance(default_target, bool) or not isinstance(default_target, int):
        errors.append(f"default_target must be an integer, got {default_target!r}")

    return errors


def _validate_endpoint(index: int, field: str, endpoint: object) -> list[str]:
    prefix = f"Event {index}, {field}"
    if not isinstance(endpoint, dict):
        return [f"{prefix}: expected an object with 'dateTime' or 'date'"]

    if "dateTime" in endpoint:
        try:
            parsed = parse_timestamp(endpoint["dateTime"])
        except (ValueError, TypeError, AttributeError):
            return [f"{prefix}: invalid dateTime {endpoint['dateTime']!r}"]
        if parsed.utcoffset() is None:
            return [f"{prefix}: dateTime {endpoint['dateTime']!r} has no UTC offset"]
    elif "date" in endpoint:
        try:
            date.fromisoformat(endpoint["date"])
        except (ValueError, TypeError):
            return [f"{prefix}: invalid date {endpoint['date']!r}"]
    else:
        return [f"{prefix}: missing 'dateTime' or 'date'"]
    return []


def validate_event_record(index: int, item: object) -> list[str]:
    """Validate one calendar event record. Returns list of error messages.

    Checks:
    - The record is an object
    - 'summary', when present, is a string
    - 'start' and 'end' carry a parseable 'dateTime' or 'date'
    - 'created' is a parseable timestamp
    - every timestamp carries a UTC offset ('Z' or +hh:mm), as calendar
      services send them; all-day dates need none

    A non-numeric summary is valid here; it is filtered at normalisation.
    """
    if not isinstance(item, dict):
        return [f"Event {index}: expected an object, got {type(item).__name__}"]

    errors: list[str] = []

    summary = item.get("summary")
    if summary is not None and not isinstance(summary, str):
        errors.append(f"Event {index}: 'summary' must be a string")

    for field in ("start", "end"):
        if field not in item:
            errors.append(f"Event {index}: missing '{field}'")
        else:
            errors.extend(_validate_endpoint(index, field, item[field]))

    if "created" not in item:
        errors.append(f"Event {index}: missing 'created'")
    else:
        try:
            created = parse_timestamp(item["created"])
        except (ValueError, TypeError, AttributeError):
            errors.append(f"Event {index}: invalid created {item['created']!r}")
        else:
            if created.utcoffset() is None:
                errors.append(f"Event {index}: created {item['created']!r} has no UTC offset")

    return errors
