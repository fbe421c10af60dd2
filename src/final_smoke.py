from availability import availability_by_teacher, day_overview
from batch_progress import days_until_end
from calendar_window import batch_month_stats, build_window, month_key, today_position
from csv_loader import load_rosters
from indexes import index_teachers_by_id
from layout import layout_month, timeline_rows
from sample_output import format_availability_message, format_suggestions_message
from settings import load_settings, local_today
from suggestions import rejected_teachers, suggest
from time_fmt import fmt_days_remaining


def main():
    settings = load_settings()
    teachers, batches = load_rosters(settings.assets_dir, settings.default_max_concurrent)
    teachers_by_id = index_teachers_by_id(teachers)
    today = local_today(settings)

    window = build_window(today, settings.months_before, settings.months_after)
    print(
        f"Window: {window.start} -> {window.end} "
        f"({len(window.units)} months, today at {today_position(window, today)}%)"
    )

    # 1) Timeline lanes
    print("\nTimeline:")
    for lane in timeline_rows(teachers, batches, window):
        print(
            f"  {lane.label}: {len(lane.placements)} bars on {lane.row_count} rows, "
            f"open={lane.open_batches}"
        )

    # 2) Month view for the current month
    segments = layout_month(batches, today.year, today.month)
    print(f"\nMonth view {month_key(today)}: {len(segments)} week segments")
    for unit in window.units:
        stats = batch_month_stats(batches, unit.key)
        if stats.total:
            print(
                f"  {unit.label}: {stats.starting} starting, {stats.ending} ending, "
                f"{stats.running} running"
            )

    overview = day_overview(teachers, batches, today)
    for b in overview.batches_running:
        print(f"  {b.batch_code}: {fmt_days_remaining(days_until_end(b.time_range, today))}")

    # 3) Availability + suggestions for today
    avails = list(availability_by_teacher(teachers, batches, today).values())
    print()
    print(format_availability_message(today, avails, teachers_by_id))

    suggestions = suggest(teachers, batches, today, settings.candidate_levels)
    rejected = rejected_teachers(teachers, batches, today)
    print()
    print(format_suggestions_message(today, suggestions, teachers_by_id, rejected))

    print(
        f"\nCapacity used {overview.used_capacity}/{overview.total_capacity}, "
        f"{len(overview.batches_running)} batches running"
    )


if __name__ == "__main__":
    main()
