"""Schedule: ordered bucket -> target mapping with point lookup."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Iterable, Iterator

from setpoint_schedule.resolution import BucketResolution


class Schedule(Mapping):
    """Immutable ordered mapping from bucket timestamp to target value.

    Invariants:
        - Keys are strictly increasing (iteration order == bucket order)
        - At most one entry per bucket
        - Buckets with no covering event are absent, never None/default

    The resolution that produced the schedule travels with it so lookups
    floor "now" with the same granularity.
    """

    def __init__(
        self,
        resolution: BucketResolution,
        targets: Iterable[tuple[datetime, int]] = (),
    ) -> None:
        self.resolution = resolution
        self._targets: dict[datetime, int] = {}
        previous: datetime | None = None
        for bucket, value in targets:
            if previous is not None and bucket <= previous:
                raise ValueError(
                    f"Schedule buckets must be strictly increasing: "
                    f"{bucket.isoformat()} follows {previous.isoformat()}"
                )
            self._targets[bucket] = value
            previous = bucket

    @classmethod
    def empty(cls, resolution: BucketResolution) -> Schedule:
        return cls(resolution)

    # Mapping protocol

    def __getitem__(self, bucket: datetime) -> int:
        return self._targets[bucket]

    def __iter__(self) -> Iterator[datetime]:
        return iter(self._targets)

    def __len__(self) -> int:
        return len(self._targets)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Schedule):
            return NotImplemented
        return (
            self.resolution == other.resolution
            and list(self._targets.items()) == list(other._targets.items())
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"Schedule(granularity={self.resolution.granularity_minutes}, "
            f"entries={len(self)})"
        )

    @property
    def first_bucket(self) -> datetime | None:
        return next(iter(self._targets), None)

    @property
    def last_bucket(self) -> datetime | None:
        return next(reversed(self._targets), None)

    def lookup(self, now: datetime) -> int | None:
        """Target for the bucket containing now, or None if there is none.

        None covers both "no event in that bucket" and "schedule is stale".
        Substituting a default value is the caller's policy.
        """
        return self._targets.get(self.resolution.bucket_of(now))

    # Persistence form

    def to_dict(self) -> dict:
        """JSON-ready form: granularity plus ISO-8601 keyed targets in order."""
        return {
            "granularity_minutes": self.resolution.granularity_minutes,
            "targets": {
                bucket.isoformat(): value for bucket, value in self._targets.items()
            },
        }

    @classmethod
    def from_dict(cls, data: dict) -> Schedule:
        """Inverse of to_dict(). Targets are re-sorted by bucket."""
        resolution = BucketResolution(int(data["granularity_minutes"]))
        targets = sorted(
            (datetime.fromisoformat(key), int(value))
            for key, value in data["targets"].items()
        )
        return cls(resolution, targets)
