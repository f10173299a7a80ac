"""Boundary: BucketResolution — floored "now" and the bucket sequence."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Iterator

from setpoint_schedule.types import ConfigurationError


def _check_minutes(name: str, value: object, minimum: int) -> None:
    """Reject non-integer or too-small minute counts."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(name, value, "must be an integer number of minutes")
    if value < minimum:
        raise ConfigurationError(name, value, f"must be >= {minimum}")


@dataclass(frozen=True)
class BucketResolution:
    """Fixed bucket granularity in minutes. Immutable.

    The granularity is validated once at construction; floor() and
    buckets() are pure functions of their arguments.
    """

    granularity_minutes: int

    def __post_init__(self) -> None:
        _check_minutes("granularity_minutes", self.granularity_minutes, 1)

    @property
    def step(self) -> timedelta:
        return timedelta(minutes=self.granularity_minutes)

    def floor(self, now: datetime) -> datetime:
        """Zero seconds and below, round minute-of-hour down to a multiple of g.

        tzinfo is preserved. A granularity above 60 floors to the hour.
        """
        g = self.granularity_minutes
        minute = (now.minute // g) * g
        return now.replace(minute=minute, second=0, microsecond=0)

    def bucket_of(self, now: datetime) -> datetime:
        """Schedule key of the bucket containing now.

        This is floor(now) for naive values. Aware values are floored on
        their own wall clock and then expressed in UTC, so keys stay
        distinct across a repeated DST hour.
        """
        floored = self.floor(now)
        if floored.tzinfo is None:
            return floored
        return floored.astimezone(timezone.utc)

    def buckets(self, now: datetime, lookahead_minutes: int) -> Iterator[datetime]:
        """Yield bucket_of(now) + k*g while strictly before bucket_of(now) + lookahead.

        Aware buckets are UTC instants, so the step is elapsed time rather
        than wall-clock time. Empty when lookahead < g. Raises
        ConfigurationError for a negative lookahead before yielding anything.
        """
        _check_minutes("lookahead_minutes", lookahead_minutes, 0)
        return self._iter_buckets(self.bucket_of(now), lookahead_minutes)

    def _iter_buckets(self, first: datetime, lookahead_minutes: int) -> Iterator[datetime]:
        if lookahead_minutes < self.granularity_minutes:
            return
        window_end = first + timedelta(minutes=lookahead_minutes)
        step = self.step
        bucket = first
        while bucket < window_end:
            yield bucket
            bucket += step

    def bucket_count(self, lookahead_minutes: int) -> int:
        """Number of buckets buckets() yields: ceil(L / g), or 0 when L < g."""
        _check_minutes("lookahead_minutes", lookahead_minutes, 0)
        g = self.granularity_minutes
        if lookahead_minutes < g:
            return 0
        return -(-lookahead_minutes // g)


FIFTEEN_MINUTES = BucketResolution(granularity_minutes=15)
