from pathlib import Path

import pytest

from settings import load_settings

ENV_NAMES = (
    "ASSETS_DIR",
    "WINDOW_MONTHS_BEFORE",
    "WINDOW_MONTHS_AFTER",
    "DEFAULT_MAX_CONCURRENT",
    "CANDIDATE_LEVELS",
    "LOCAL_TZ",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    s = load_settings()

    assert s.assets_dir == Path("assets")
    assert (s.months_before, s.months_after) == (5, 6)
    assert s.default_max_concurrent == 3
    assert s.candidate_levels == ("A1", "A2", "B1", "B2")
    assert s.local_tz.key == "Asia/Kolkata"


def test_overrides(clean_env):
    clean_env.setenv("ASSETS_DIR", "/data/rosters")
    clean_env.setenv("WINDOW_MONTHS_BEFORE", "2")
    clean_env.setenv("DEFAULT_MAX_CONCURRENT", " 4 ")
    clean_env.setenv("CANDIDATE_LEVELS", "B1, C1,,")
    clean_env.setenv("LOCAL_TZ", "Europe/Berlin")

    s = load_settings()

    assert s.assets_dir == Path("/data/rosters")
    assert s.months_before == 2
    assert s.months_after == 6
    assert s.default_max_concurrent == 4
    assert s.candidate_levels == ("B1", "C1")
    assert s.local_tz.key == "Europe/Berlin"


def test_bad_int_is_reported_by_name(clean_env):
    clean_env.setenv("WINDOW_MONTHS_AFTER", "six")
    with pytest.raises(ValueError, match="invalid_setting: WINDOW_MONTHS_AFTER='six'"):
        load_settings()
