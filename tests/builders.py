from __future__ import annotations

from datetime import date, timedelta

from models import Batch, Teacher

BASE_DAY = date(2024, 3, 1)


def day(n: int) -> date:
    """Day n of March 2024 (day(1) == 2024-03-01)."""
    return BASE_DAY + timedelta(days=n - 1)


def teacher(
    teacher_id: str = "T1",
    name: str | None = None,
    levels=("A1", "A2"),
    slots=("Morning", "Evening"),
    max_concurrent: int = 3,
    active: bool = True,
) -> Teacher:
    return Teacher(
        teacher_id=teacher_id,
        full_name=name or f"Teacher {teacher_id}",
        skill_levels=frozenset(levels),
        time_slots=frozenset(slots),
        max_concurrent=max_concurrent,
        active=active,
    )


def batch(
    batch_id: str = "B1",
    start: date | None = None,
    end: date | None = None,
    teacher_id: str | None = "T1",
    slot: str | None = "Morning",
    level: str = "A1",
    status: str = "RUNNING",
) -> Batch:
    return Batch(
        batch_id=batch_id,
        batch_code=f"{level}-{batch_id}",
        level=level,
        teacher_id=teacher_id,
        time_slot=slot,
        start_date=start,
        end_date=end,
        status=status,
        enrolled_count=5,
        total_seats=12,
    )
