"""ScheduleStore: durable copy of the latest resolved Schedule.

Stores publish whole schedules only. A reader sees either the previous
schedule or the new one, never a partially written one.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from pathlib import Path

from setpoint_schedule.schedule import Schedule

log = logging.getLogger(__name__)


class ScheduleStore(ABC):
    """Save/load contract used between resolution passes."""

    @abstractmethod
    def save(self, schedule: Schedule) -> None:
        """Replace the stored schedule."""

    @abstractmethod
    def load(self) -> Schedule | None:
        """Return the stored schedule, or None if nothing is stored."""


class MemoryScheduleStore(ScheduleStore):
    """Holds the schedule in memory. Writers swap the reference under a lock."""

    def __init__(self, schedule: Schedule | None = None) -> None:
        self._schedule = schedule
        self._lock = threading.Lock()

    def save(self, schedule: Schedule) -> None:
        with self._lock:
            self._schedule = schedule

    def load(self) -> Schedule | None:
        # Reading a single reference needs no lock.
        return self._schedule


class JsonFileScheduleStore(ScheduleStore):
    """Persists the schedule as a JSON file.

    Format: {"granularity_minutes": 15, "targets": {"<iso bucket>": 21, ...}}

    An empty schedule removes the file, so a later load() reports that
    nothing is stored.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def save(self, schedule: Schedule) -> None:
        with self._lock:
            if not schedule:
                self.path.unlink(missing_ok=True)
                log.debug("Empty schedule; removed %s", self.path)
                return

            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w") as f:
                    json.dump(schedule.to_dict(), f, indent=2)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
            log.debug("Saved %d target bucket(s) to %s", len(schedule), self.path)

    def load(self) -> Schedule | None:
        try:
            with open(self.path) as f:
                data = json.load(f)
        except FileNotFoundError:
            return None
        except json.JSONDecodeError as e:
            raise ValueError(f"Corrupt schedule file {self.path}: {e}") from e

        try:
            return Schedule.from_dict(data)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ValueError(f"Corrupt schedule file {self.path}: {e}") from e
