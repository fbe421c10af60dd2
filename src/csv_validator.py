from __future__ import annotations

from pathlib import Path
import sys
import pandas as pd

from csv_parse_helpers import parse_bool, parse_iso_date, split_pipe
from models import BATCH_STATUSES, SLOTS

# data definitions
TEACHERS_COLUMNS = [
    "teacher_id",
    "full_name",
    "skill_levels",
    "time_slots",
    "max_concurrent",
    "active",
]

BATCHES_COLUMNS = [
    "batch_id",
    "batch_code",
    "teacher_id",
    "level",
    "time_slot",
    "start_date",
    "end_date",
    "status",
    "enrolled_count",
    "total_seats",
    "schedule",
]

ALLOWED_SLOTS = set(SLOTS)
ALLOWED_STATUSES = set(BATCH_STATUSES)


def fail(msg: str) -> None:
    raise ValueError(msg)


def read_csv_or_fail(path: Path) -> pd.DataFrame:
    if not path.exists():
        fail(f"File not found: {path}")
    try:
        return pd.read_csv(path, dtype=str).fillna("")
    except Exception as e:
        fail(f"Could not read CSV '{path}': {e}")


def require_columns(df: pd.DataFrame, required: list[str], name: str) -> None:
    missing = [c for c in required if c not in df.columns]
    extra = [c for c in df.columns if c not in required]
    if missing:
        fail(f"{name}: missing required columns: {missing}")
    if extra:
        fail(f"{name}: unexpected extra columns: {extra}")


# checks to see if there's blank or duplicate values
def require_unique_nonempty(df: pd.DataFrame, col: str, name: str) -> None:
    if (df[col].str.strip() == "").any():
        bad = df.index[df[col].str.strip() == ""].tolist()[:10]
        fail(f"{name}: '{col}' contains blank values: {bad}")

    dupes = df[col][df[col].duplicated()].unique().tolist()
    if dupes:
        fail(f"{name}: '{col}' has duplicate values: {dupes}")


def _is_int(x: str, allow_blank: bool = False) -> bool:
    if allow_blank and not str(x).strip():
        return True
    try:
        return int(x) >= 0
    except Exception:
        return False


def _is_bool(x: str) -> bool:
    try:
        parse_bool(x)
        return True
    except ValueError:
        return False


def _is_date_or_blank(x: str) -> bool:
    try:
        parse_iso_date(x)
        return True
    except Exception:
        return False


def require_int_column(
    df: pd.DataFrame, col: str, name: str, allow_blank: bool = False
) -> None:
    bad = (
        df.loc[~df[col].apply(lambda x: _is_int(x, allow_blank)), col]
        .unique()
        .tolist()
    )
    if bad:
        fail(f"{name}: {col} must be a non-negative int. Bad values: {bad}")


# validates every teacher from teachers.csv
def validate_teachers(df: pd.DataFrame) -> None:
    require_columns(df, TEACHERS_COLUMNS, "teachers")
    require_unique_nonempty(df, "teacher_id", "teachers")

    # time_slots must be Morning/Evening (empty is allowed: teacher can't be assigned)
    bad_slot_rows = []
    for i, s in enumerate(df["time_slots"].tolist()):
        bad = [v for v in split_pipe(s) if v not in ALLOWED_SLOTS]
        if bad:
            bad_slot_rows.append((i, bad))
    if bad_slot_rows:
        fail(
            f"teachers: invalid time_slots. Examples: {bad_slot_rows[:5]} (allowed: {sorted(ALLOWED_SLOTS)})"
        )

    require_int_column(df, "max_concurrent", "teachers", allow_blank=True)

    bad_active = df.loc[~df["active"].apply(_is_bool), "active"].unique().tolist()
    if bad_active:
        fail(f"teachers: active must be true/false. Bad values: {bad_active}")


# checks every batch from batches.csv
def validate_batches(df: pd.DataFrame) -> None:
    """
    Unknown teacher_id references and start > end pass validation;
    the engine lays those batches out as unassigned / hidden.
    """
    require_columns(df, BATCHES_COLUMNS, "batches")
    require_unique_nonempty(df, "batch_id", "batches")

    bad_status = (
        df.loc[~df["status"].isin(ALLOWED_STATUSES), "status"].unique().tolist()
    )
    if bad_status:
        fail(
            f"batches: invalid status values: {bad_status} (allowed: {sorted(ALLOWED_STATUSES)})"
        )

    slot_col = df["time_slot"].str.strip()
    bad_slot = (
        df.loc[(slot_col != "") & ~slot_col.isin(ALLOWED_SLOTS), "time_slot"]
        .unique()
        .tolist()
    )
    if bad_slot:
        fail(
            f"batches: invalid time_slot values: {bad_slot} (allowed: {sorted(ALLOWED_SLOTS)} or blank)"
        )

    require_int_column(df, "enrolled_count", "batches", allow_blank=True)
    require_int_column(df, "total_seats", "batches", allow_blank=True)

    for col in ("start_date", "end_date"):
        bad = df.loc[~df[col].apply(_is_date_or_blank), col].unique().tolist()
        if bad:
            fail(f"batches: {col} must be an ISO date or blank. Bad values: {bad}")


def main() -> None:
    assets = Path("assets")

    teachers = read_csv_or_fail(assets / "teachers.csv")
    batches = read_csv_or_fail(assets / "batches.csv")

    validate_teachers(teachers)
    validate_batches(batches)

    print("\nCSVs loaded and validated\n")

    print(f"Teachers: {len(teachers)} rows")
    print(teachers.head(5).to_string(index=False))

    print("\n---\n")

    print(f"Batches: {len(batches)} rows")
    print(batches.head(5).to_string(index=False))


if __name__ == "__main__":
    try:
        main()
    except Exception as e:
        print(f"\nVALIDATION ERROR: {e}\n", file=sys.stderr)
        sys.exit(1)
