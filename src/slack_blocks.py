from __future__ import annotations

from datetime import date

from models import Suggestion, Teacher, TeacherAvailability, TeacherFreeing
from reason_library import match_reason, match_reasons
from sample_output import format_availability_line, teacher_name
from time_fmt import fmt_date

MAX_SUGGESTION_SECTIONS = 15


def frozen_blocks(text: str) -> list[dict]:
    return [{"type": "section", "text": {"type": "mrkdwn", "text": text}}]


def error_blocks(code: str) -> list[dict]:
    return frozen_blocks(f"⚠️ {match_reason(code)}")


def suggestion_blocks(
    day: date,
    suggestions: list[Suggestion],
    teachers_by_id: dict[str, Teacher],
) -> list[dict]:
    blocks: list[dict] = [
        {
            "type": "header",
            "text": {
                "type": "plain_text",
                "text": f"Batch suggestions for {fmt_date(day)}",
            },
        },
        {
            "type": "context",
            "elements": [
                {
                    "type": "mrkdwn",
                    "text": (
                        f"{len(suggestions)} batch opportunities based on teacher availability"
                        if suggestions
                        else "No batch opportunities found for this date"
                    ),
                }
            ],
        },
    ]

    if not suggestions:
        blocks.extend(
            frozen_blocks(
                "All teachers are fully booked on this date.\n"
                "Try a different date or check when teachers become available."
            )
        )
        return blocks

    blocks.append({"type": "divider"})

    for s in suggestions[:MAX_SUGGESTION_SECTIONS]:
        name = teacher_name(teachers_by_id, s.teacher_id)
        text = f"*{name}* (`{s.teacher_id}`) • *{s.level}* • {s.slot} — *{s.score}%*\n"
        text += ", ".join(s.rationale)
        if s.warnings:
            text += "\n" + "\n".join(f"⚠️ {w}" for w in s.warnings)
        blocks.extend(frozen_blocks(text))

    hidden = len(suggestions) - MAX_SUGGESTION_SECTIONS
    if hidden > 0:
        blocks.append(
            {
                "type": "context",
                "elements": [{"type": "mrkdwn", "text": f"…and {hidden} more"}],
            }
        )

    return blocks


def availability_blocks(
    day: date,
    avails: list[TeacherAvailability],
    teachers_by_id: dict[str, Teacher],
) -> list[dict]:
    blocks: list[dict] = [
        {
            "type": "header",
            "text": {
                "type": "plain_text",
                "text": f"Teacher availability — {fmt_date(day)}",
            },
        },
        {"type": "divider"},
    ]

    if not avails:
        blocks.extend(frozen_blocks("No teachers on the roster."))
        return blocks

    for a in avails:
        text = format_availability_line(a, teachers_by_id)
        notes = match_reasons(list(a.data_quality))
        if notes:
            text += "\n" + "\n".join(f"ℹ️ {n}" for n in notes)
        blocks.extend(frozen_blocks(text))

    return blocks


def freeing_blocks(
    key: str,
    freeing: list[TeacherFreeing],
    teachers_by_id: dict[str, Teacher],
) -> list[dict]:
    blocks: list[dict] = [
        {
            "type": "header",
            "text": {"type": "plain_text", "text": f"Teachers freeing up in {key}"},
        }
    ]

    if not freeing:
        blocks.extend(frozen_blocks("No batches end this month."))
        return blocks

    lines = []
    for f in freeing:
        slot = f.slot or "unclassified slot"
        lines.append(
            f"• {teacher_name(teachers_by_id, f.teacher_id)} — available after "
            f"{fmt_date(f.available_from)} ({f.batch_code}, {f.level}, {slot})"
        )
    blocks.extend(frozen_blocks("\n".join(lines)))
    return blocks
