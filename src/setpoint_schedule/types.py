"""Shared types: RawEvent, Event, ConfigurationError and EventSourceError."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class RawEvent:
    """An event record as supplied by a calendar source.

    Each endpoint is either a precise timestamp or an all-day date.
    The label is free text; only integer labels are eligible targets.
    """

    label: str
    created_at: datetime
    start: datetime | None = None
    start_date: date | None = None
    end: datetime | None = None
    end_date: date | None = None


@dataclass(frozen=True)
class Event:
    """Normalised event covering the half-open interval [start, end).

    Invariants:
        - start < end
        - value == int(label)
    """

    label: str
    value: int
    start: datetime
    end: datetime
    created_at: datetime

    def covers(self, instant: datetime) -> bool:
        """True if instant falls in [start, end)."""
        return self.start <= instant < self.end

    @property
    def duration_minutes(self) -> int:
        return int((self.end - self.start).total_seconds()) // 60


class ConfigurationError(ValueError):
    """Raised when granularity, lookahead or other settings are invalid."""

    def __init__(self, parameter: str, value: object, reason: str) -> None:
        self.parameter = parameter
        self.value = value
        self.reason = reason
        super().__init__(
            f"Invalid configuration: {parameter}={value!r} ({reason})"
        )


class EventSourceError(Exception):
    """Raised by an event source when events cannot be retrieved."""
