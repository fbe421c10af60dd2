# src/suggestions.py
from __future__ import annotations

from datetime import date
from typing import Sequence

from availability import teachers_with_capacity
from indexes import index_teachers_by_id
from models import Batch, Slot, Suggestion, Teacher, TeacherAvailability
from reason_library import match_reasons

DEFAULT_LEVELS = ("A1", "A2", "B1", "B2")

BASE_SCORE = 100
SKILL_MISMATCH_PENALTY = 50
SLOT_TAKEN_PENALTY = 100
LOADED_PENALTY = 10
OPTED_IN_BONUS = 20
NOT_OPTED_IN_PENALTY = 100


def feasibility_score(
    teacher: Teacher, level: str, slot: Slot, avail: TeacherAvailability
) -> int:
    """
    Hand-tuned placement score, clamped to 0..100.
    The weights are part of the UI contract; keep them as they are.
    """
    score = BASE_SCORE

    if level not in teacher.skill_levels:
        score -= SKILL_MISMATCH_PENALTY

    status = avail.slot_status.get(slot)
    if status is None or not status.free:
        score -= SLOT_TAKEN_PENALTY

    # a loaded teacher never scores above a less loaded one
    if avail.current_load >= 1:
        score -= LOADED_PENALTY

    if slot in teacher.time_slots:
        score += OPTED_IN_BONUS
    else:
        score -= NOT_OPTED_IN_PENALTY

    return max(0, min(100, score))


def suggestion_codes(teacher: Teacher, level: str, avail: TeacherAvailability) -> list[str]:
    codes: list[str] = []
    if avail.current_load == 1:
        codes.append("already_has_one_batch")
    elif avail.current_load > 1:
        codes.append(f"already_has_batches({avail.current_load})")

    if level not in teacher.skill_levels:
        codes.append(f"capability_not_confirmed({level})")
    return codes


def build_rationale(
    teacher: Teacher, level: str, slot: Slot, avail: TeacherAvailability
) -> list[str]:
    parts = [f"{teacher.full_name} is available {slot.lower()}"]

    if level in teacher.skill_levels:
        parts.append(f"can teach {level}")
    else:
        parts.append(f"{level} not in listed levels")

    if avail.current_load == 0:
        parts.append("not teaching any batches")
    elif avail.current_load == 1:
        parts.append("teaching 1 batch (has 1 slot free)")
    else:
        parts.append(f"teaching {avail.current_load} batches")

    return parts


def _unique(levels: Sequence[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for lv in levels:
        if lv not in seen:
            seen.add(lv)
            out.append(lv)
    return out


def suggest(
    teachers: Sequence[Teacher],
    batches: Sequence[Batch],
    day: date,
    candidate_levels: Sequence[str] = DEFAULT_LEVELS,
) -> list[Suggestion]:
    """
    Ranked (teacher, level, slot) placements for a new batch starting on `day`.
    - FULL teachers are dropped (deactivated, no slots, at max load)
    - every free declared slot x candidate level is scored
    - zero scores are dropped
    Order: score desc, then teacher id asc, then generation order.
    """
    teachers_by_id = index_teachers_by_id(teachers)
    open_teachers, _rejected = teachers_with_capacity(teachers, batches, day)
    levels = _unique(candidate_levels)

    out: list[Suggestion] = []
    for avail in open_teachers:
        teacher = teachers_by_id[avail.teacher_id]

        for slot in avail.free_slots:
            for level in levels:
                score = feasibility_score(teacher, level, slot, avail)
                if score <= 0:
                    continue

                out.append(
                    Suggestion(
                        teacher_id=teacher.teacher_id,
                        level=level,
                        slot=slot,
                        score=score,
                        rationale=tuple(build_rationale(teacher, level, slot, avail)),
                        warnings=tuple(
                            match_reasons(suggestion_codes(teacher, level, avail))
                        ),
                    )
                )

    # sorted() is stable, so equal keys keep slot/level generation order
    return sorted(out, key=lambda s: (-s.score, s.teacher_id))


def rejected_teachers(
    teachers: Sequence[Teacher], batches: Sequence[Batch], day: date
) -> dict[str, list[str]]:
    """Teachers left out of suggest() for the day, with reason codes."""
    _open, rejected = teachers_with_capacity(teachers, batches, day)
    return rejected
