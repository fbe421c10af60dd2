from __future__ import annotations

from datetime import date

from models import Suggestion, Teacher, TeacherAvailability
from reason_library import match_reasons
from time_fmt import fmt_date

STATUS_ICON = {"AVAILABLE": "🟢", "PARTIAL": "🟡", "FULL": "🔴"}
STATUS_LABEL = {
    "AVAILABLE": "Available Now",
    "PARTIAL": "Partially Available",
    "FULL": "Fully Booked",
}


def teacher_name(teachers_by_id: dict[str, Teacher], tid: str) -> str:
    t = teachers_by_id.get(tid)
    return t.full_name if t else tid


def format_suggestions_message(
    day: date,
    suggestions: list[Suggestion],
    teachers_by_id: dict[str, Teacher],
    rejected: dict[str, list[str]] | None = None,
    max_shown: int = 8,
    max_rejected: int = 5,
) -> str:
    lines: list[str] = []
    lines.append(f"💡 *Batch suggestions for {fmt_date(day)}*")
    lines.append("")

    if not suggestions:
        lines.append("• No teachers available on this date.")
    else:
        for s in suggestions[:max_shown]:
            name = teacher_name(teachers_by_id, s.teacher_id)
            lines.append(f"• {s.score}% — {name} ({s.teacher_id}) • {s.level} • {s.slot}")
            lines.append(f"    {', '.join(s.rationale)}")
            for w in s.warnings:
                lines.append(f"    ⚠️ {w}")
        if len(suggestions) > max_shown:
            lines.append(f"• … and {len(suggestions) - max_shown} more")

    if rejected:
        lines.append("")
        lines.append("🔴 *Fully booked*")
        shown = 0
        for tid, codes in rejected.items():
            if shown >= max_rejected:
                break
            friendly = match_reasons(codes)[0] if codes else "Fully booked."
            lines.append(f"• {teacher_name(teachers_by_id, tid)} ({tid}) — {friendly}")
            shown += 1

    return "\n".join(lines)


def format_availability_line(
    avail: TeacherAvailability, teachers_by_id: dict[str, Teacher]
) -> str:
    icon = STATUS_ICON[avail.capacity_status]
    name = teacher_name(teachers_by_id, avail.teacher_id)

    slots = []
    for slot, st in avail.slot_status.items():
        slots.append(f"{slot}: free" if st.free else f"{slot}: {st.batch.batch_code}")
    slot_text = ", ".join(slots) if slots else "no slots"

    line = (
        f"{icon} {name} — {STATUS_LABEL[avail.capacity_status]} "
        f"(load {avail.current_load}/{avail.max_concurrent}; {slot_text})"
    )
    if avail.next_available_date is not None and avail.current_load > 0:
        line += f" • frees up {fmt_date(avail.next_available_date)}"
    return line


def format_availability_message(
    day: date,
    avails: list[TeacherAvailability],
    teachers_by_id: dict[str, Teacher],
) -> str:
    lines = [f"📋 *Teacher availability on {fmt_date(day)}*", ""]
    if not avails:
        lines.append("• (no teachers)")
    for a in avails:
        lines.append(f"• {format_availability_line(a, teachers_by_id)}")
        for note in match_reasons(list(a.data_quality)):
            lines.append(f"    ℹ️ {note}")
    return "\n".join(lines)
