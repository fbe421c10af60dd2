# src/availability.py
from __future__ import annotations

from datetime import date
from typing import Iterable, Sequence

from calendar_window import ends_in_month
from indexes import index_batches_by_teacher, index_teachers_by_id
from models import (
    SLOTS,
    TERMINAL_STATUSES,
    Batch,
    CapacityStatus,
    DateCapacity,
    DayOverview,
    Slot,
    SlotStatus,
    Teacher,
    TeacherAvailability,
    TeacherFreeing,
    as_day,
)

CAPACITY_RANK: dict[CapacityStatus, int] = {"AVAILABLE": 2, "PARTIAL": 1, "FULL": 0}

MIN_DATE_CAPACITY = 10
DATE_CAPACITY_BUFFER = 3


def capacity_rank(status: CapacityStatus) -> int:
    return CAPACITY_RANK[status]


def slot_tag(b: Batch) -> Slot | None:
    """
    Only the explicit time_slot field classifies a batch.
    Schedule text and batch codes are never parsed for Morning/Evening.
    """
    return b.time_slot if b.time_slot in SLOTS else None


def is_active_on(b: Batch, day: date) -> bool:
    if b.status in TERMINAL_STATUSES:
        return False
    return b.time_range.contains(as_day(day))


def active_batches_for(
    teacher_id: str, batches: Iterable[Batch], day: date
) -> list[Batch]:
    out = [b for b in batches if b.teacher_id == teacher_id and is_active_on(b, day)]
    out.sort(key=lambda b: (b.start_date, b.batch_id))
    return out


def occupied_slots(active: Iterable[Batch]) -> set[Slot]:
    return {slot_tag(b) for b in active} - {None}


def _capacity_status(
    teacher: Teacher, current_load: int, occupied: set[Slot]
) -> CapacityStatus:
    if not teacher.active or not teacher.time_slots:
        return "FULL"
    # every slot of the day is taken, whatever the teacher opted into
    if current_load >= teacher.max_concurrent or occupied >= set(SLOTS):
        return "FULL"
    if current_load == 0:
        return "AVAILABLE"
    return "PARTIAL"


def availability(
    teacher: Teacher, batches: Iterable[Batch], day: date
) -> TeacherAvailability:
    """
    Snapshot of a teacher's slots and load on one day.
    Only declared slots appear in slot_status. A deactivated teacher is
    always FULL with zero capacity.
    """
    active = active_batches_for(teacher.teacher_id, batches, day)

    slot_status: dict[Slot, SlotStatus] = {}
    for slot in SLOTS:
        if slot not in teacher.time_slots:
            continue
        occupant = next((b for b in active if slot_tag(b) == slot), None)
        slot_status[slot] = SlotStatus(free=occupant is None, batch=occupant)

    current_load = len(active)
    status = _capacity_status(teacher, current_load, occupied_slots(active))

    capacity = 0
    if teacher.active:
        capacity = max(0, teacher.max_concurrent - current_load)

    data_quality = tuple(
        f"slot_unclassified({b.batch_id})" for b in active if slot_tag(b) is None
    )

    return TeacherAvailability(
        teacher_id=teacher.teacher_id,
        slot_status=slot_status,
        current_load=current_load,
        max_concurrent=teacher.max_concurrent,
        available_capacity=capacity,
        capacity_status=status,
        next_available_date=min((b.end_date for b in active), default=None),
        data_quality=data_quality,
    )


def exclusion_reasons(teacher: Teacher, avail: TeacherAvailability) -> list[str]:
    """Reason codes explaining why a teacher is FULL (empty otherwise)."""
    if avail.capacity_status != "FULL":
        return []

    if not teacher.active:
        return ["teacher_inactive"]
    if not teacher.time_slots:
        return ["no_declared_slots"]

    reasons: list[str] = []
    if avail.current_load >= teacher.max_concurrent:
        reasons.append(f"at_max_concurrent({avail.current_load}/{teacher.max_concurrent})")
    if not avail.free_slots:
        reasons.append("no_free_slot")
    return reasons


def availability_by_teacher(
    teachers: Sequence[Teacher], batches: Sequence[Batch], day: date
) -> dict[str, TeacherAvailability]:
    teachers_by_id = index_teachers_by_id(teachers)
    by_teacher = index_batches_by_teacher(batches, set(teachers_by_id))
    return {
        tid: availability(t, by_teacher.get(tid, []), day)
        for tid, t in teachers_by_id.items()
    }


def teachers_with_capacity(
    teachers: Sequence[Teacher], batches: Sequence[Batch], day: date
) -> tuple[list[TeacherAvailability], dict[str, list[str]]]:
    """
    Split the roster for a day:
    - with capacity (AVAILABLE / PARTIAL), roster order
    - rejected (FULL), with reason codes
    """
    teachers_by_id = index_teachers_by_id(teachers)
    open_: list[TeacherAvailability] = []
    rejected: dict[str, list[str]] = {}

    for tid, avail in availability_by_teacher(teachers, batches, day).items():
        if avail.capacity_status == "FULL":
            rejected[tid] = exclusion_reasons(teachers_by_id[tid], avail)
        else:
            open_.append(avail)

    return open_, rejected


def teachers_freeing_in_month(
    teachers: Sequence[Teacher], batches: Sequence[Batch], key: str
) -> list[TeacherFreeing]:
    """
    One entry per batch of an active teacher that ends in the given month,
    earliest first.
    """
    teachers_by_id = index_teachers_by_id(teachers)
    by_teacher = index_batches_by_teacher(batches, set(teachers_by_id))

    out: list[TeacherFreeing] = []
    for tid, t in teachers_by_id.items():
        if not t.active:
            continue
        for b in by_teacher.get(tid, []):
            if b.status == "CANCELLED" or not ends_in_month(b.time_range, key):
                continue
            out.append(
                TeacherFreeing(
                    teacher_id=tid,
                    batch_id=b.batch_id,
                    batch_code=b.batch_code,
                    level=b.level,
                    available_from=b.end_date,
                    slot=slot_tag(b),
                )
            )

    out.sort(key=lambda f: (f.available_from, f.teacher_id, f.batch_id))
    return out


def day_overview(
    teachers: Sequence[Teacher], batches: Sequence[Batch], day: date
) -> DayOverview:
    d = as_day(day)
    running = tuple(
        sorted(
            (b for b in batches if b.time_range.contains(d)),
            key=lambda b: (b.start_date, b.batch_id),
        )
    )

    teachers_by_id = index_teachers_by_id(teachers)
    avails = availability_by_teacher(teachers, batches, d)

    return DayOverview(
        day=d,
        batches_running=running,
        teachers_available=tuple(
            tid for tid, a in avails.items() if a.capacity_status != "FULL"
        ),
        teachers_occupied=tuple(
            tid for tid, a in avails.items() if a.capacity_status == "FULL"
        ),
        total_capacity=sum(
            t.max_concurrent for t in teachers_by_id.values() if t.active
        ),
        used_capacity=sum(a.current_load for a in avails.values()),
    )


def date_capacity(batches: Iterable[Batch], day: date) -> DateCapacity:
    """Rough per-cell capacity for the month view."""
    d = as_day(day)
    used = sum(1 for b in batches if b.time_range.contains(d))
    total = max(MIN_DATE_CAPACITY, used + DATE_CAPACITY_BUFFER)
    return DateCapacity(
        used=used, total=total, available=total - used, percentage=used / total * 100
    )


def filter_teachers(
    teachers: Iterable[Teacher],
    level: str | None = None,
    slot: Slot | None = None,
) -> list[Teacher]:
    out = [t for t in teachers if t.active]
    if level:
        out = [t for t in out if level in t.skill_levels]
    if slot:
        out = [t for t in out if slot in t.time_slots]
    return out
