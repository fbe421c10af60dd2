from __future__ import annotations

from pathlib import Path
import pandas as pd

from models import DEFAULT_MAX_CONCURRENT, Batch, Teacher
from csv_parse_helpers import (
    blank_to_none,
    parse_bool,
    parse_int,
    parse_iso_date,
    split_pipe,
)
from csv_validator import read_csv_or_fail, validate_batches, validate_teachers


def load_validated_frames(assets_dir: Path) -> tuple[pd.DataFrame, pd.DataFrame]:
    teachers = read_csv_or_fail(assets_dir / "teachers.csv")
    batches = read_csv_or_fail(assets_dir / "batches.csv")

    validate_teachers(teachers)
    validate_batches(batches)

    return teachers, batches


def teachers_from_df(
    df: pd.DataFrame, default_max_concurrent: int = DEFAULT_MAX_CONCURRENT
) -> list[Teacher]:
    teachers: list[Teacher] = []

    for _, row in df.iterrows():
        teachers.append(
            Teacher(
                teacher_id=row["teacher_id"].strip(),
                full_name=row["full_name"].strip(),
                skill_levels=frozenset(split_pipe(row["skill_levels"])),
                time_slots=frozenset(
                    split_pipe(row["time_slots"])
                ),  # validator enforces Morning/Evening
                max_concurrent=parse_int(
                    row["max_concurrent"], default=default_max_concurrent
                ),
                active=parse_bool(row["active"]),
            )
        )

    return teachers


def batches_from_df(df: pd.DataFrame) -> list[Batch]:
    batches: list[Batch] = []

    for _, row in df.iterrows():
        batches.append(
            Batch(
                batch_id=row["batch_id"].strip(),
                batch_code=row["batch_code"].strip(),
                level=row["level"].strip(),
                teacher_id=blank_to_none(row["teacher_id"]),
                time_slot=blank_to_none(row["time_slot"]),
                start_date=parse_iso_date(row["start_date"]),
                end_date=parse_iso_date(row["end_date"]),
                status=row["status"].strip(),  # validator enforces allowed values
                enrolled_count=parse_int(row["enrolled_count"]),
                total_seats=parse_int(row["total_seats"]),
                schedule=blank_to_none(row["schedule"]),
            )
        )

    return batches


def load_rosters(
    assets_dir: Path, default_max_concurrent: int = DEFAULT_MAX_CONCURRENT
) -> tuple[list[Teacher], list[Batch]]:
    teachers_df, batches_df = load_validated_frames(assets_dir)
    return teachers_from_df(teachers_df, default_max_concurrent), batches_from_df(
        batches_df
    )


def main() -> None:
    teachers, batches = load_rosters(Path("assets"))

    print(f"\nLoaded {len(teachers)} teachers into objects\n")
    print(f"Loaded {len(batches)} batches into objects\n")

    if teachers:
        print("Sample Teacher object:")
        print(teachers[0])

    if batches:
        print("\nSample Batch object:")
        print(batches[0])


if __name__ == "__main__":
    main()
