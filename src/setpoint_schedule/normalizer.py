"""EventNormalizer: raw calendar records to canonical [start, end) events.

Only events whose label is a base-10 integer are eligible. Excluding the
rest is ordinary filtering, not an error.

All-day endpoints use one boundary convention everywhere: midnight at the
start of the date, in the timezone of the resolution pass (naive if the
pass is naive). In an aware pass every instant is carried in UTC; a naive
value there, or an aware one in a naive pass, is a ConfigurationError.

All-day end dates are exclusive, as calendar services deliver them, so an
event dated 6 Jan to 7 Jan covers all of 6 Jan.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime, time, timezone, tzinfo
from typing import Iterable

from setpoint_schedule.types import ConfigurationError, Event, RawEvent

log = logging.getLogger(__name__)

_INTEGER_LABEL = re.compile(r"[+-]?[0-9]+")


def parse_label(label: str | None) -> int | None:
    """Parse a label as a signed base-10 integer. None if it is not one.

    Surrounding whitespace, underscores and non-ASCII digits are rejected.
    """
    if label is None or not _INTEGER_LABEL.fullmatch(label):
        return None
    return int(label)


def all_day_start(d: date, tz: tzinfo | None = None) -> datetime:
    """Instant at which date d begins: midnight local to tz."""
    return datetime.combine(d, time(0, 0), tzinfo=tz)


def _endpoint(
    precise: datetime | None, day: date | None, tz: tzinfo | None
) -> datetime | None:
    """Prefer the precise timestamp; fall back to the all-day boundary."""
    if precise is not None:
        return precise
    if day is not None:
        return all_day_start(day, tz)
    return None


def _align(label: str, field: str, value: datetime, aware: bool) -> datetime:
    """Match value to the pass's awareness; aware values become UTC."""
    if (value.tzinfo is not None) != aware:
        kind = "timezone-aware" if aware else "naive"
        raise ConfigurationError(
            field,
            value.isoformat(),
            f"event {label!r} cannot be resolved against a {kind} 'now'; "
            "naive and timezone-aware datetimes cannot be mixed",
        )
    return value.astimezone(timezone.utc) if aware else value


def normalize_event(raw: RawEvent, tz: tzinfo | None = None) -> Event | None:
    """Normalise one record. Returns None when the event is not eligible.

    tz is the timezone of the resolution pass; None means a naive pass.
    Raises ConfigurationError when the record's datetimes disagree with it.
    """
    value = parse_label(raw.label)
    if value is None:
        log.debug("Skipping event with non-integer label %r", raw.label)
        return None

    start = _endpoint(raw.start, raw.start_date, tz)
    end = _endpoint(raw.end, raw.end_date, tz)
    if start is None or end is None:
        log.warning("Skipping event %r: missing start or end", raw.label)
        return None

    aware = tz is not None
    start = _align(raw.label, "start", start, aware)
    end = _align(raw.label, "end", end, aware)
    created_at = _align(raw.label, "created_at", raw.created_at, aware)
    if start >= end:
        log.debug(
            "Skipping event %r: empty interval [%s, %s)",
            raw.label, start.isoformat(), end.isoformat(),
        )
        return None

    return Event(
        label=raw.label,
        value=value,
        start=start,
        end=end,
        created_at=created_at,
    )


def normalize_events(
    raws: Iterable[RawEvent], tz: tzinfo | None = None
) -> list[Event]:
    """Normalise a batch, dropping ineligible records. Order is kept."""
    events: list[Event] = []
    for raw in raws:
        event = normalize_event(raw, tz)
        if event is not None:
            events.append(event)
    return events
