from __future__ import annotations

from datetime import date
import pandas as pd

TRUE_VALUES = {"true", "yes", "1", "y"}
FALSE_VALUES = {"false", "no", "0", "n"}


def split_pipe(s: str) -> list[str]:
    return [x.strip() for x in str(s).split("|") if x.strip()]


def blank_to_none(s: str) -> str | None:
    s = str(s).strip()
    return s or None


def parse_bool(s: str, default: bool = True) -> bool:
    v = str(s).strip().lower()
    if not v:
        return default
    if v in TRUE_VALUES:
        return True
    if v in FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean {s!r}")


def parse_int(s: str, default: int = 0) -> int:
    v = str(s).strip()
    return int(v) if v else default


def parse_iso_date(s: str) -> date | None:
    """
    Accepts YYYY-MM-DD or a full RFC3339 timestamp.
    Timestamps are reduced to their calendar date as written (no tz shift);
    the host is expected to have normalised them already.
    """
    v = str(s).strip()
    if not v:
        return None
    return pd.to_datetime(v, format="ISO8601").date()
