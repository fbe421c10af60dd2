from __future__ import annotations

from datetime import date


def fmt_date(d: date | None) -> str:
    # "Mar 15, 2024"
    if d is None:
        return "open"
    return f"{d:%b} {d.day}, {d.year}"


def fmt_range(start: date | None, end: date | None) -> str:
    if start is not None and end is not None and start.year == end.year:
        # Same year: "Mar 1 – Apr 30, 2024"
        return f"{start:%b} {start.day} – {fmt_date(end)}"
    return f"{fmt_date(start)} – {fmt_date(end)}"


def fmt_days_remaining(days: int | None) -> str:
    if days is None:
        return "No end date"
    if days < 0:
        return "Ended"
    if days == 0:
        return "Ends today"
    if days == 1:
        return "1 day left"
    return f"{days} days left"
