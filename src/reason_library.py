from __future__ import annotations

import re


def match_reason(code: str) -> str:
    # Direct matches
    if code == "already_has_one_batch":
        return "already has 1 batch"
    if code == "teacher_inactive":
        return "Teacher is deactivated."
    if code == "no_declared_slots":
        return "Teacher has not opted into Morning or Evening."
    if code == "no_free_slot":
        return "Every slot the teacher opted into is taken."

    # Patterned codes
    m = re.match(r"capability_not_confirmed\((.+)\)", code)
    if m:
        level = m.group(1)
        return f"capability not confirmed for {level}"

    m = re.match(r"already_has_batches\((\d+)\)", code)
    if m:
        n = int(m.group(1))
        return f"already has {n} batches"

    m = re.match(r"at_max_concurrent\((\d+)/(\d+)\)", code)
    if m:
        load, limit = m.group(1), m.group(2)
        return f"Already teaching {load} of {limit} batches."

    m = re.match(r"slot_unclassified\((.+)\)", code)
    if m:
        batch_id = m.group(1)
        return f"Batch {batch_id} has no Morning/Evening tag."

    m = re.match(r"invalid_date\((.*)\)", code)
    if m:
        raw = m.group(1)
        return f"Could not read date '{raw}' (use YYYY-MM-DD)."

    m = re.match(r"invalid_month_key\((.*)\)", code)
    if m:
        raw = m.group(1)
        return f"Could not read month '{raw}' (use YYYY-MM)."

    # Fallback
    return code


def match_reasons(codes: list[str]) -> list[str]:
    return [match_reason(c) for c in codes]
