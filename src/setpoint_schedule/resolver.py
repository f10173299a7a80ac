"""IntervalResolver — pick one covering event per bucket.

An event covers bucket b when event.start <= b < event.end. Buckets with
no covering event contribute nothing. When several events cover a bucket
the tie-break policy chooses exactly one winner.
"""

from __future__ import annotations

import enum
import logging
from datetime import datetime
from typing import Iterable

from setpoint_schedule.resolution import BucketResolution
from setpoint_schedule.schedule import Schedule
from setpoint_schedule.types import Event

log = logging.getLogger(__name__)


class TieBreak(str, enum.Enum):
    """Which overlapping event governs a bucket."""

    # The target set first keeps precedence over later overlapping edits.
    EARLIEST_CREATED = "earliest_created"
    # The most recently authored overlapping event wins.
    LATEST_CREATED = "latest_created"


def _secondary_key(event: Event) -> tuple:
    """Total order for events sharing a created_at."""
    return (event.start, event.end, event.value, event.label)


def rank_events(events: Iterable[Event], tie_break: TieBreak) -> list[Event]:
    """Order events from strongest to weakest claim on a shared bucket.

    The result depends only on the events' fields, never on input order.
    """
    ranked = sorted(events, key=_secondary_key)
    # Stable sort keeps the secondary order within equal created_at.
    ranked.sort(
        key=lambda e: e.created_at,
        reverse=tie_break is TieBreak.LATEST_CREATED,
    )
    return ranked


def resolve_buckets(
    resolution: BucketResolution,
    buckets: Iterable[datetime],
    events: Iterable[Event],
    tie_break: TieBreak = TieBreak.EARLIEST_CREATED,
) -> Schedule:
    """Build a Schedule from buckets (increasing) and normalised events.

    Never raises for missing coverage: no events, or no overlap with the
    window, yields an empty Schedule.
    """
    tie_break = TieBreak(tie_break)
    ranked = rank_events(events, tie_break)
    # (rank, event) sorted by start so the scan can stop early.
    by_start = sorted(enumerate(ranked), key=lambda pair: pair[1].start)

    targets: list[tuple[datetime, int]] = []
    for bucket in buckets:
        winner_rank: int | None = None
        winner: Event | None = None
        for rank, event in by_start:
            if event.start > bucket:
                break
            if bucket < event.end and (winner_rank is None or rank < winner_rank):
                winner_rank = rank
                winner = event
        if winner is not None:
            targets.append((bucket, winner.value))

    schedule = Schedule(resolution, targets)
    log.debug(
        "Resolved %d event(s) into %d target bucket(s) (%s)",
        len(ranked), len(schedule), tie_break.value,
    )
    return schedule
