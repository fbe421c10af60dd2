from __future__ import annotations

import re
from datetime import date

from calendar_window import month_key, parse_month_key

DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
LEVEL_RE = re.compile(r"^[A-Za-z]\d$")


def parse_day(token: str) -> date:
    try:
        return date.fromisoformat(token)
    except ValueError:
        raise ValueError(f"invalid_date({token})") from None


def parse_suggest_args(text: str, today: date) -> tuple[date, list[str]]:
    """
    "/batch-suggest [YYYY-MM-DD] [LEVEL ...]"
    Returns (day, levels); levels is empty when none were given.
    """
    tokens = (text or "").split()
    day = today

    if tokens and (DATE_RE.match(tokens[0]) or not LEVEL_RE.match(tokens[0])):
        day = parse_day(tokens[0])
        tokens = tokens[1:]

    levels = [t.upper() for t in tokens]
    return day, levels


def parse_day_arg(text: str, today: date) -> date:
    token = (text or "").strip()
    return parse_day(token) if token else today


def parse_month_arg(text: str, today: date) -> str:
    token = (text or "").strip()
    if not token:
        return month_key(today)
    try:
        year, month = parse_month_key(token)
    except ValueError:
        raise ValueError(f"invalid_month_key({token})") from None
    return f"{year}-{month:02d}"
