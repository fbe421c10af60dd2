# src/settings.py
from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from zoneinfo import ZoneInfo

from dotenv import load_dotenv

from models import DEFAULT_MAX_CONCURRENT

load_dotenv()


@dataclass(frozen=True)
class Settings:
    assets_dir: Path
    months_before: int
    months_after: int
    default_max_concurrent: int
    candidate_levels: tuple[str, ...]
    local_tz: ZoneInfo


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"invalid_setting: {name}={raw!r}") from None


def load_settings() -> Settings:
    levels = tuple(
        x.strip()
        for x in os.environ.get("CANDIDATE_LEVELS", "A1,A2,B1,B2").split(",")
        if x.strip()
    )
    return Settings(
        assets_dir=Path(os.environ.get("ASSETS_DIR", "assets").strip() or "assets"),
        months_before=_env_int("WINDOW_MONTHS_BEFORE", 5),
        months_after=_env_int("WINDOW_MONTHS_AFTER", 6),
        default_max_concurrent=_env_int("DEFAULT_MAX_CONCURRENT", DEFAULT_MAX_CONCURRENT),
        candidate_levels=levels,
        local_tz=ZoneInfo(os.environ.get("LOCAL_TZ", "Asia/Kolkata").strip()),
    )


def local_today(settings: Settings) -> date:
    # host-side only; engine functions always receive the day explicitly
    return datetime.now(settings.local_tz).date()
