from __future__ import annotations

from datetime import date
from typing import Iterable

from models import Batch, Teacher


def _sort_key(b: Batch) -> tuple[date, str]:
    # undated batches sort last
    return (b.start_date or date.max, b.batch_id)


def index_teachers_by_id(teachers: Iterable[Teacher]) -> dict[str, Teacher]:
    # first occurrence of a duplicated id wins
    out: dict[str, Teacher] = {}
    for t in teachers:
        out.setdefault(t.teacher_id, t)
    return out


# given the roster, collect every batch a known teacher owns so availability
# and timeline lanes don't rescan the full batch list per teacher.
def index_batches_by_teacher(
    batches: Iterable[Batch],
    known_teacher_ids: set[str],
) -> dict[str, list[Batch]]:
    out: dict[str, list[Batch]] = {}
    for b in batches:
        if b.teacher_id and b.teacher_id in known_teacher_ids:
            out.setdefault(b.teacher_id, []).append(b)

    for arr in out.values():
        arr.sort(key=_sort_key)
    return out


def unassigned_batches(
    batches: Iterable[Batch],
    known_teacher_ids: set[str],
) -> list[Batch]:
    """
    Batches with no teacher, or pointing at a teacher missing from the roster.
    Both are laid out in the unassigned lane.
    """
    out = [
        b for b in batches if not b.teacher_id or b.teacher_id not in known_teacher_ids
    ]
    out.sort(key=_sort_key)
    return out
