"""setpoint-schedule: Calendar events to a time-bucketed target schedule."""

from setpoint_schedule.config import TargetConfig
from setpoint_schedule.normalizer import all_day_start, normalize_events, parse_label
from setpoint_schedule.resolution import FIFTEEN_MINUTES, BucketResolution
from setpoint_schedule.resolver import TieBreak, resolve_buckets
from setpoint_schedule.schedule import Schedule
from setpoint_schedule.service import TargetService, local_now, lookup, resolve
from setpoint_schedule.store import (
    JsonFileScheduleStore,
    MemoryScheduleStore,
    ScheduleStore,
)
from setpoint_schedule.types import (
    ConfigurationError,
    Event,
    EventSourceError,
    RawEvent,
)

__all__ = [
    "BucketResolution",
    "ConfigurationError",
    "Event",
    "EventSourceError",
    "FIFTEEN_MINUTES",
    "JsonFileScheduleStore",
    "MemoryScheduleStore",
    "RawEvent",
    "Schedule",
    "ScheduleStore",
    "TargetConfig",
    "TargetService",
    "TieBreak",
    "all_day_start",
    "local_now",
    "lookup",
    "normalize_events",
    "parse_label",
    "resolve",
    "resolve_buckets",
]
