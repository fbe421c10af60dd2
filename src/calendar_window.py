# src/calendar_window.py
from __future__ import annotations

import calendar
import re
from datetime import date, timedelta
from typing import Sequence

from models import Batch, BatchMonthStats, CalendarWindow, MonthUnit, TimeRange, as_day

MONTH_KEY_RE = re.compile(r"^(\d{4})-(\d{2})$")

SHORT_COURSE_LEVELS = {"A1", "A2"}


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    y, m0 = divmod(month - 1 + delta, 12)
    return year + y, m0 + 1


def month_key(d: date) -> str:
    return f"{d.year}-{d.month:02d}"


def parse_month_key(key: str) -> tuple[int, int]:
    m = MONTH_KEY_RE.match(key.strip())
    if not m or not 1 <= int(m.group(2)) <= 12:
        raise ValueError(f"invalid_month_key: {key!r} (expected YYYY-MM)")
    return int(m.group(1)), int(m.group(2))


def month_unit(year: int, month: int) -> MonthUnit:
    day_count = calendar.monthrange(year, month)[1]
    return MonthUnit(
        key=f"{year}-{month:02d}",
        label=f"{calendar.month_name[month]} {year}",
        year=year,
        month=month,
        start=date(year, month, 1),
        end=date(year, month, day_count),
        day_count=day_count,
    )


def build_window(
    reference: date, months_before: int = 5, months_after: int = 6
) -> CalendarWindow:
    """
    Rolling window of whole calendar months around the reference month.
    Defaults give 5 past + current + 6 future = 12 months.
    """
    ref = as_day(reference)
    before = max(0, months_before)
    after = max(0, months_after)

    units = tuple(
        month_unit(*shift_month(ref.year, ref.month, i))
        for i in range(-before, after + 1)
    )
    return CalendarWindow(start=units[0].start, end=units[-1].end, units=units)


def total_days(window: CalendarWindow) -> int:
    return (window.end - window.start).days + 1


def day_offset(window: CalendarWindow, d: date) -> int:
    return (as_day(d) - window.start).days


def today_position(window: CalendarWindow, now: date) -> float | None:
    """Percentage across the window where the "Today" marker sits."""
    today = as_day(now)
    if today < window.start or today > window.end:
        return None
    return day_offset(window, today) / total_days(window) * 100


def is_current_month(key: str, now: date) -> bool:
    return key == month_key(as_day(now))


def overlaps_range(r: TimeRange, start: date, end: date) -> bool:
    # closed intervals on both sides
    if not r.is_well_formed:
        return False
    return r.end >= start and r.start <= end


def ends_in_month(r: TimeRange, key: str) -> bool:
    if r.end is None:
        return False
    return (r.end.year, r.end.month) == parse_month_key(key)


def starts_in_month(r: TimeRange, key: str) -> bool:
    if r.start is None:
        return False
    return (r.start.year, r.start.month) == parse_month_key(key)


def is_running_in_month(r: TimeRange, key: str) -> bool:
    unit = month_unit(*parse_month_key(key))
    return overlaps_range(r, unit.start, unit.end)


def batches_starting_in_month(batches: Sequence[Batch], key: str) -> list[Batch]:
    return [b for b in batches if starts_in_month(b.time_range, key)]


def batches_ending_in_month(batches: Sequence[Batch], key: str) -> list[Batch]:
    return [b for b in batches if ends_in_month(b.time_range, key)]


def batches_running_in_month(batches: Sequence[Batch], key: str) -> list[Batch]:
    return [b for b in batches if is_running_in_month(b.time_range, key)]


def batch_month_stats(batches: Sequence[Batch], key: str) -> BatchMonthStats:
    """
    Header counts for one month of the calendar.
    A batch that starts and ends inside the month is counted in all three
    buckets but only once in total.
    """
    starting = batches_starting_in_month(batches, key)
    ending = batches_ending_in_month(batches, key)
    running = batches_running_in_month(batches, key)
    touched = {b.batch_id for b in starting + ending + running}
    return BatchMonthStats(
        key=key,
        starting=len(starting),
        ending=len(ending),
        running=len(running),
        total=len(touched),
    )


def weeks_of_month(year: int, month: int) -> list[list[date]]:
    """
    Monday-first week rows for a month view.
    The first and last rows are padded with days from the neighbouring months.
    """
    first = date(year, month, 1)
    last = date(year, month, calendar.monthrange(year, month)[1])

    cursor = first - timedelta(days=first.weekday())
    weeks: list[list[date]] = []
    while cursor <= last:
        weeks.append([cursor + timedelta(days=i) for i in range(7)])
        cursor += timedelta(days=7)
    return weeks


def batch_duration_weeks(level: str) -> int:
    return 8 if level in SHORT_COURSE_LEVELS else 12
