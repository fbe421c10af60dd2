from __future__ import annotations

from datetime import date
from typing import Literal

from models import TimeRange, as_day

LifecycleStage = Literal["not_started", "running", "ended"]

ENDING_SOON_DAYS = 14


def progress(r: TimeRange, now: date) -> float:
    """
    Elapsed share of the range in percent (0..100).
    Unbounded or reversed ranges report 0.
    """
    if not r.is_well_formed:
        return 0.0

    today = as_day(now)
    if today < r.start:
        return 0.0
    if today > r.end:
        return 100.0

    total = (r.end - r.start).days
    if total == 0:
        return 100.0

    elapsed = (today - r.start).days
    return min(100.0, max(0.0, elapsed / total * 100))


def days_remaining(r: TimeRange, now: date) -> int:
    if r.end is None:
        return 0
    return max(0, (r.end - as_day(now)).days)


def days_until_end(r: TimeRange, now: date) -> int | None:
    # signed: negative once the range has ended, None when open-ended
    if r.end is None:
        return None
    return (r.end - as_day(now)).days


def days_since_start(r: TimeRange, now: date) -> int | None:
    # negative while the range has not started yet
    if r.start is None:
        return None
    return (as_day(now) - r.start).days


def color_weight(pct: float) -> float:
    """Bar intensity: 1.0 at the start of a batch fading to 0.1 at its end."""
    clamped = min(100.0, max(0.0, pct))
    return 1 - 0.9 * clamped / 100


def lifecycle_stage(r: TimeRange, now: date) -> LifecycleStage:
    today = as_day(now)
    if r.start is None or today < r.start:
        return "not_started"
    if r.end is not None and today > r.end:
        return "ended"
    return "running"


def is_ending_soon(
    r: TimeRange, now: date, threshold_days: int = ENDING_SOON_DAYS
) -> bool:
    if r.end is None:
        return False
    left = (r.end - as_day(now)).days
    return 0 < left <= threshold_days
