"""ASCII visualisation for development-time verification.

This module is dev-only and not imported by production code.
"""

from __future__ import annotations

from setpoint_schedule.schedule import Schedule


def show_schedule(schedule: Schedule, bar_char: str = "#") -> str:
    """Print one row per target bucket: day, time, value and a bar.

    Gaps between consecutive buckets (uncovered periods) are shown as a
    '...' row. Returns the string and also prints to stdout.
    """
    lines: list[str] = [
        f"granularity: {schedule.resolution.granularity_minutes} min, "
        f"entries: {len(schedule)}"
    ]
    if not schedule:
        lines.append("(no targets)")
        result = "\n".join(lines)
        print(result)
        return result

    step = schedule.resolution.step
    low = min(schedule.values())
    previous = None

    for bucket, value in schedule.items():
        if previous is not None and bucket - previous > step:
            lines.append("  ...")
        # Bar length is relative to the lowest target so small spreads show.
        bar = bar_char * (value - low + 1)
        lines.append(f"  {bucket.strftime('%a %d %b %H:%M')}  {value:>4d}  {bar}")
        previous = bucket

    result = "\n".join(lines)
    print(result)
    return result
