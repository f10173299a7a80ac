"""Entry points and the service that composes them.

resolve() and lookup() are pure. TargetService wires them to an event
source, a ScheduleStore and a clock, and applies the default-value policy.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Callable, Iterable

from setpoint_schedule.config import TargetConfig
from setpoint_schedule.normalizer import normalize_events
from setpoint_schedule.resolution import BucketResolution
from setpoint_schedule.resolver import TieBreak, resolve_buckets
from setpoint_schedule.schedule import Schedule
from setpoint_schedule.store import MemoryScheduleStore, ScheduleStore
from setpoint_schedule.types import EventSourceError, RawEvent

log = logging.getLogger(__name__)

# (window_start, window_end) -> raw events overlapping the window
EventSource = Callable[[datetime, datetime], Iterable[RawEvent]]


def local_now() -> datetime:
    """Current local time as a timezone-aware datetime."""
    return datetime.now().astimezone()


def resolve(
    events: Iterable[RawEvent],
    now: datetime,
    granularity: int,
    lookahead: int,
    tie_break: TieBreak = TieBreak.EARLIEST_CREATED,
) -> Schedule:
    """Resolve raw events into a Schedule for the window starting at floor(now).

    All-day dates are anchored to midnight in now's timezone. When now is
    aware the schedule is keyed by UTC instants.
    Raises ConfigurationError for granularity <= 0, lookahead < 0, or
    events whose awareness differs from now's; no partial schedule is
    produced in that case.
    """
    resolution = BucketResolution(granularity)
    buckets = resolution.buckets(now, lookahead)
    events = normalize_events(events, tz=now.tzinfo)
    return resolve_buckets(resolution, buckets, events, tie_break)


def lookup(schedule: Schedule, now: datetime, granularity: int) -> int | None:
    """Exact-key lookup of the bucket containing now. None when there is no target."""
    return schedule.get(BucketResolution(granularity).bucket_of(now))


class TargetService:
    """Keeps a resolved schedule fresh and answers "target right now".

    The event source is the only collaborator that may block. Failures it
    signals with EventSourceError are logged and the stored schedule is
    kept.
    """

    def __init__(
        self,
        config: TargetConfig,
        source: EventSource,
        store: ScheduleStore | None = None,
        clock: Callable[[], datetime] = local_now,
    ) -> None:
        self.config = config
        self._source = source
        self._store = store if store is not None else MemoryScheduleStore()
        self._clock = clock

    def window(self, now: datetime) -> tuple[datetime, datetime]:
        """[start, end) of the lookahead window for now."""
        start = self.config.resolution.bucket_of(now)
        return start, start + timedelta(minutes=self.config.lookahead_minutes)

    def refresh(self, now: datetime | None = None) -> Schedule | None:
        """Fetch, resolve and store a new schedule.

        Returns the new schedule, or the previously stored one (possibly
        None) when the source fails.
        """
        if now is None:
            now = self._clock()
        window_start, window_end = self.window(now)

        try:
            raws = list(self._source(window_start, window_end))
        except EventSourceError as e:
            log.warning(
                "Unable to read events from calendar %r: %s",
                self.config.calendar_name, e,
            )
            return self._store.load()

        schedule = resolve(
            raws,
            now,
            self.config.granularity_minutes,
            self.config.lookahead_minutes,
            self.config.tie_break,
        )
        self._store.save(schedule)
        log.info(
            "Calendar %r: %d event(s) -> %d target bucket(s) from %s",
            self.config.calendar_name, len(raws), len(schedule),
            window_start.isoformat(),
        )
        return schedule

    def _lookup_stored(self, now: datetime) -> int | None:
        schedule = self._store.load()
        if schedule is None or schedule.resolution != self.config.resolution:
            return None
        return lookup(schedule, now, self.config.granularity_minutes)

    def current_target(self, now: datetime | None = None) -> int | None:
        """Target for now; refreshes once on a miss. None if still missing."""
        if now is None:
            now = self._clock()

        value = self._lookup_stored(now)
        if value is not None:
            return value

        self.refresh(now)
        return self._lookup_stored(now)

    def target_or_default(self, now: datetime | None = None) -> int:
        """current_target() with config.default_target substituted on a miss."""
        value = self.current_target(now)
        if value is None:
            log.debug("No target available; using default %d", self.config.default_target)
            return self.config.default_target
        return value
