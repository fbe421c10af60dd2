# src/layout.py
from __future__ import annotations

import calendar
from dataclasses import replace
from datetime import date
from typing import Sequence

from calendar_window import day_offset, total_days, weeks_of_month
from indexes import index_batches_by_teacher, index_teachers_by_id, unassigned_batches
from models import (
    TERMINAL_STATUSES,
    Batch,
    CalendarWindow,
    Placement,
    Teacher,
    TeacherLane,
    WeekSegment,
)

Span = tuple[int, int]  # half-open [start, end)

UNASSIGNED_LABEL = "Unassigned Batches"


def _hidden(entity_id: str) -> Placement:
    return Placement(
        entity_id=entity_id, column_start=0, column_end=0, row=-1, visible=False
    )


def spans_intersect(a: Span, b: Span) -> bool:
    return a[0] < b[1] and b[0] < a[1]


def pack_rows(spans: Sequence[Span]) -> list[int]:
    """
    Greedy first-fit row packing.
    Spans are taken in the given order; each goes on the lowest row where it
    intersects nothing already placed. Returns the row per span.
    """
    rows: list[list[Span]] = []
    out: list[int] = []

    for span in spans:
        for row_index, placed in enumerate(rows):
            if not any(spans_intersect(span, p) for p in placed):
                placed.append(span)
                out.append(row_index)
                break
        else:
            out.append(len(rows))
            rows.append([span])

    return out


def place(entity: Batch, window: CalendarWindow) -> Placement:
    """
    Clip an entity to the window and map it to 1-indexed grid columns.
    Row is left unassigned (0) for visible entities; layout() packs rows.
    """
    r = entity.time_range
    if not r.is_well_formed:
        return _hidden(entity.batch_id)

    if r.end < window.start or r.start > window.end:
        return _hidden(entity.batch_id)

    shown_start = max(r.start, window.start)
    shown_end = min(r.end, window.end)

    column_start = day_offset(window, shown_start) + 1
    column_end = min(day_offset(window, shown_end) + 2, total_days(window) + 1)

    return Placement(
        entity_id=entity.batch_id,
        column_start=column_start,
        column_end=column_end,
        row=0,
        visible=True,
        clipped_start=r.start < window.start,
        clipped_end=r.end > window.end,
    )


def layout(entities: Sequence[Batch], window: CalendarWindow) -> list[Placement]:
    """
    Non-overlapping placement of entities on the window grid.
    Output keeps the input order; hidden entities get row -1.
    """
    placed = [place(e, window) for e in entities]

    order = sorted(
        (i for i, p in enumerate(placed) if p.visible),
        key=lambda i: (placed[i].column_start, placed[i].entity_id),
    )
    rows = pack_rows([(placed[i].column_start, placed[i].column_end) for i in order])

    out = list(placed)
    for i, row in zip(order, rows):
        out[i] = replace(placed[i], row=row)
    return out


def row_count(placements: Sequence[Placement]) -> int:
    return max((p.row for p in placements if p.visible), default=-1) + 1


def layout_month(
    entities: Sequence[Batch], year: int, month: int
) -> list[WeekSegment]:
    """
    Month view: every entity touching the month is cut into one segment per
    week row it crosses. Rows are packed per week, so a multi-week entity may
    sit on different rows in different weeks.
    """
    month_start = date(year, month, 1)
    month_end = date(year, month, calendar.monthrange(year, month)[1])
    weeks = weeks_of_month(year, month)

    by_week: dict[int, list[WeekSegment]] = {}

    for e in entities:
        r = e.time_range
        if not r.is_well_formed:
            continue
        if r.end < month_start or r.start > month_end:
            continue

        for week_index, week in enumerate(weeks):
            week_start, week_end = week[0], week[-1]
            if r.end < week_start or r.start > week_end:
                continue

            seg_start = max(r.start, week_start)
            seg_end = min(r.end, week_end)
            by_week.setdefault(week_index, []).append(
                WeekSegment(
                    entity_id=e.batch_id,
                    week_index=week_index,
                    start_col=seg_start.weekday(),
                    span=(seg_end - seg_start).days + 1,
                    row=0,
                    start_day=seg_start,
                    end_day=seg_end,
                    continues_before=r.start < week_start,
                    continues_after=r.end > week_end,
                )
            )

    out: list[WeekSegment] = []
    for week_index in sorted(by_week):
        segs = sorted(by_week[week_index], key=lambda s: (s.start_col, s.entity_id))
        rows = pack_rows([(s.start_col, s.start_col + s.span) for s in segs])
        out.extend(replace(s, row=row) for s, row in zip(segs, rows))
    return out


def _lane(
    teacher_id: str | None,
    label: str,
    batches: list[Batch],
    window: CalendarWindow,
) -> TeacherLane:
    placements = [p for p in layout(batches, window) if p.visible]
    visible_ids = {p.entity_id for p in placements}
    open_batches = sum(
        1
        for b in batches
        if b.batch_id in visible_ids and b.status not in TERMINAL_STATUSES
    )
    return TeacherLane(
        teacher_id=teacher_id,
        label=label,
        placements=tuple(placements),
        row_count=row_count(placements),
        open_batches=open_batches,
    )


def timeline_rows(
    teachers: Sequence[Teacher],
    entities: Sequence[Batch],
    window: CalendarWindow,
) -> list[TeacherLane]:
    """
    One lane per roster teacher (roster order), plus a trailing unassigned
    lane when any entity has no known teacher.
    """
    teachers_by_id = index_teachers_by_id(teachers)
    known = set(teachers_by_id)
    by_teacher = index_batches_by_teacher(entities, known)

    lanes = [
        _lane(tid, t.full_name, by_teacher.get(tid, []), window)
        for tid, t in teachers_by_id.items()
    ]

    orphans = unassigned_batches(entities, known)
    if orphans:
        lanes.append(_lane(None, UNASSIGNED_LABEL, orphans, window))

    return lanes
