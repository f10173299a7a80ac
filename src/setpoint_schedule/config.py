"""TargetConfig: settings validated once at startup and passed explicitly."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from setpoint_schedule.resolution import BucketResolution
from setpoint_schedule.resolver import TieBreak
from setpoint_schedule.schema import validate_config
from setpoint_schedule.types import ConfigurationError

log = logging.getLogger(__name__)

DEFAULT_CALENDAR_NAME = "Thermostat"
DEFAULT_GRANULARITY_MINUTES = 15
DEFAULT_LOOKAHEAD_MINUTES = 180
DEFAULT_TARGET = 0


@dataclass(frozen=True)
class TargetConfig:
    """Immutable settings for resolution and lookup.

    default_target is the fallback applied by TargetService when no
    schedule entry exists; it is a policy choice, not part of resolution.
    """

    calendar_name: str = DEFAULT_CALENDAR_NAME
    granularity_minutes: int = DEFAULT_GRANULARITY_MINUTES
    lookahead_minutes: int = DEFAULT_LOOKAHEAD_MINUTES
    default_target: int = DEFAULT_TARGET
    tie_break: TieBreak = TieBreak.EARLIEST_CREATED

    def __post_init__(self) -> None:
        errors = validate_config(
            self.calendar_name,
            self.granularity_minutes,
            self.lookahead_minutes,
            self.default_target,
        )
        try:
            tie_break = TieBreak(self.tie_break)
        except ValueError:
            errors.append(
                "tie_break must be one of "
                + ", ".join(t.value for t in TieBreak)
                + f", got {self.tie_break!r}"
            )
        if errors:
            raise ConfigurationError("config", self.calendar_name, "; ".join(errors))
        # Accept the plain string form of the policy.
        object.__setattr__(self, "tie_break", tie_break)

    @property
    def resolution(self) -> BucketResolution:
        return BucketResolution(self.granularity_minutes)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> TargetConfig:
        """Build from string-valued settings, e.g. an engine's config admin.

        Keys: calendarName, calendarGranularity, calendarLookahead,
        defaultTarget, tieBreak. Missing or empty values keep defaults.
        Values that do not parse as integers are logged and ignored;
        values that parse but are out of range raise ConfigurationError.
        """
        kwargs: dict[str, Any] = {}

        name = mapping.get("calendarName")
        if name:
            kwargs["calendar_name"] = name

        for key, field in (
            ("calendarGranularity", "granularity_minutes"),
            ("calendarLookahead", "lookahead_minutes"),
            ("defaultTarget", "default_target"),
        ):
            raw = mapping.get(key)
            if raw is None or raw == "":
                continue
            try:
                kwargs[field] = int(raw)
            except (TypeError, ValueError):
                log.warning("Invalid value for %s: %r", key, raw)

        tie_break = mapping.get("tieBreak")
        if tie_break:
            kwargs["tie_break"] = tie_break

        return cls(**kwargs)
