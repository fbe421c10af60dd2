from datetime import date, datetime

import pytest

from builders import batch
from calendar_window import (
    batch_month_stats,
    batch_duration_weeks,
    batches_ending_in_month,
    batches_running_in_month,
    batches_starting_in_month,
    build_window,
    day_offset,
    ends_in_month,
    is_current_month,
    is_running_in_month,
    month_key,
    overlaps_range,
    parse_month_key,
    starts_in_month,
    today_position,
    total_days,
    weeks_of_month,
)
from models import TimeRange


def test_three_month_window_around_leap_february():
    w = build_window(date(2024, 3, 15), 1, 1)

    assert [u.key for u in w.units] == ["2024-02", "2024-03", "2024-04"]
    assert [u.day_count for u in w.units] == [29, 31, 30]
    assert w.start == date(2024, 2, 1)
    assert w.end == date(2024, 4, 30)
    assert w.units[1].label == "March 2024"


def test_default_window_is_twelve_months():
    w = build_window(date(2026, 10, 19))

    assert len(w.units) == 12
    assert w.units[0].key == "2026-05"
    assert w.units[-1].key == "2027-04"
    assert w.start == date(2026, 5, 1)
    assert w.end == date(2027, 4, 30)


def test_units_are_contiguous_and_cover_window():
    w = build_window(date(2023, 12, 31), 3, 3)

    assert w.units[0].start == w.start
    assert w.units[-1].end == w.end
    for prev, nxt in zip(w.units, w.units[1:]):
        assert (nxt.start - prev.end).days == 1
    assert sum(u.day_count for u in w.units) == total_days(w)


def test_negative_month_counts_clamp_to_zero():
    w = build_window(date(2024, 2, 10), -4, -1)

    assert [u.key for u in w.units] == ["2024-02"]
    assert w.units[0].day_count == 29


def test_same_day_gives_identical_window():
    a = build_window(date(2024, 3, 15), 5, 6)
    b = build_window(datetime(2024, 3, 15, 23, 59), 5, 6)
    assert a == b


def test_non_leap_february():
    w = build_window(date(2023, 2, 1), 0, 0)
    assert w.units[0].day_count == 28


def test_day_offset_and_today_position():
    w = build_window(date(2024, 3, 15), 0, 0)

    assert day_offset(w, date(2024, 3, 1)) == 0
    assert day_offset(w, date(2024, 3, 31)) == 30
    assert today_position(w, date(2024, 3, 1)) == 0
    assert today_position(w, date(2024, 3, 16)) == pytest.approx(15 / 31 * 100)
    assert today_position(w, date(2024, 4, 1)) is None


def test_month_key_helpers():
    assert month_key(date(2024, 3, 9)) == "2024-03"
    assert parse_month_key("2024-11") == (2024, 11)
    assert is_current_month("2024-03", date(2024, 3, 31))
    assert not is_current_month("2024-04", date(2024, 3, 31))

    with pytest.raises(ValueError, match="invalid_month_key"):
        parse_month_key("2024-13")
    with pytest.raises(ValueError, match="invalid_month_key"):
        parse_month_key("March")


def test_month_membership_checks():
    r = TimeRange(date(2024, 1, 20), date(2024, 3, 5))

    assert starts_in_month(r, "2024-01")
    assert ends_in_month(r, "2024-03")
    assert is_running_in_month(r, "2024-02")
    assert not is_running_in_month(r, "2024-04")
    assert not ends_in_month(TimeRange(date(2024, 1, 1), None), "2024-01")


def test_overlaps_range_is_closed_and_ignores_malformed():
    r = TimeRange(date(2024, 3, 1), date(2024, 3, 10))

    assert overlaps_range(r, date(2024, 3, 10), date(2024, 3, 20))
    assert not overlaps_range(r, date(2024, 3, 11), date(2024, 3, 20))
    assert not overlaps_range(
        TimeRange(date(2024, 3, 10), date(2024, 3, 1)), date(2024, 1, 1), date(2025, 1, 1)
    )


def test_weeks_of_month_are_monday_first_and_padded():
    weeks = weeks_of_month(2024, 3)  # March 1st 2024 is a Friday

    assert len(weeks) == 5
    assert all(len(w) == 7 for w in weeks)
    assert weeks[0][0] == date(2024, 2, 26)
    assert weeks[0][4] == date(2024, 3, 1)
    assert weeks[-1][-1] == date(2024, 3, 31)


def test_batch_duration_weeks():
    assert batch_duration_weeks("A1") == 8
    assert batch_duration_weeks("A2") == 8
    assert batch_duration_weeks("B1") == 12


def test_month_filters_and_stats():
    batches = [
        batch("jan_mar", date(2024, 1, 20), date(2024, 3, 5)),
        batch("inside", date(2024, 3, 4), date(2024, 3, 20)),
        batch("mar_may", date(2024, 3, 25), date(2024, 5, 10)),
        batch("open", date(2024, 3, 8), None),
        batch("april", date(2024, 4, 1), date(2024, 4, 30)),
    ]

    assert [b.batch_id for b in batches_starting_in_month(batches, "2024-03")] == [
        "inside",
        "mar_may",
        "open",
    ]
    assert [b.batch_id for b in batches_ending_in_month(batches, "2024-03")] == [
        "jan_mar",
        "inside",
    ]
    # open-ended batches are never drawn, so they never count as running
    assert [b.batch_id for b in batches_running_in_month(batches, "2024-03")] == [
        "jan_mar",
        "inside",
        "mar_may",
    ]

    stats = batch_month_stats(batches, "2024-03")
    assert (stats.key, stats.starting, stats.ending, stats.running, stats.total) == (
        "2024-03",
        3,
        2,
        3,
        4,
    )

    empty = batch_month_stats(batches, "2023-12")
    assert (empty.starting, empty.ending, empty.running, empty.total) == (0, 0, 0, 0)
