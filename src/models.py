from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Literal

Slot = Literal["Morning", "Evening"]
SLOTS: tuple[Slot, ...] = ("Morning", "Evening")

BatchStatus = Literal[
    "PLANNING", "FILLING", "FULL", "RUNNING", "COMPLETED", "CANCELLED"
]
BATCH_STATUSES: tuple[BatchStatus, ...] = (
    "PLANNING",
    "FILLING",
    "FULL",
    "RUNNING",
    "COMPLETED",
    "CANCELLED",
)
TERMINAL_STATUSES = {"COMPLETED", "CANCELLED"}

CapacityStatus = Literal["AVAILABLE", "PARTIAL", "FULL"]

DEFAULT_MAX_CONCURRENT = 3


def as_day(d: date | None) -> date | None:
    # datetimes are compared at day precision
    if isinstance(d, datetime):
        return d.date()
    return d


@dataclass(frozen=True)
class TimeRange:
    start: date | None
    end: date | None

    def __post_init__(self):
        object.__setattr__(self, "start", as_day(self.start))
        object.__setattr__(self, "end", as_day(self.end))

    @property
    def is_bounded(self) -> bool:
        return self.start is not None and self.end is not None

    @property
    def is_well_formed(self) -> bool:
        # both bounds present and ordered
        return self.is_bounded and self.start <= self.end

    def contains(self, d: date) -> bool:
        return self.is_well_formed and self.start <= as_day(d) <= self.end


@dataclass(frozen=True)
class Teacher:
    teacher_id: str
    full_name: str
    skill_levels: frozenset[str]
    time_slots: frozenset[Slot]
    max_concurrent: int = DEFAULT_MAX_CONCURRENT
    active: bool = True


@dataclass(frozen=True)
class Batch:
    batch_id: str
    batch_code: str
    level: str
    teacher_id: str | None
    time_slot: Slot | None
    start_date: date | None
    end_date: date | None
    status: BatchStatus
    enrolled_count: int = 0
    total_seats: int = 0
    schedule: str | None = None

    def __post_init__(self):
        object.__setattr__(self, "start_date", as_day(self.start_date))
        object.__setattr__(self, "end_date", as_day(self.end_date))

    @property
    def time_range(self) -> TimeRange:
        return TimeRange(self.start_date, self.end_date)


# ----------------------------
# Calendar window
# ----------------------------
@dataclass(frozen=True)
class MonthUnit:
    key: str  # YYYY-MM
    label: str  # "March 2024"
    year: int
    month: int  # 1-12
    start: date
    end: date
    day_count: int


@dataclass(frozen=True)
class CalendarWindow:
    start: date
    end: date
    units: tuple[MonthUnit, ...]


@dataclass(frozen=True)
class BatchMonthStats:
    key: str  # YYYY-MM
    starting: int
    ending: int
    running: int
    total: int  # distinct batches touching the month


# ----------------------------
# Layout output
# ----------------------------
@dataclass(frozen=True)
class Placement:
    entity_id: str
    column_start: int
    column_end: int  # exclusive
    row: int
    visible: bool
    clipped_start: bool = False
    clipped_end: bool = False


@dataclass(frozen=True)
class WeekSegment:
    entity_id: str
    week_index: int  # 0-5
    start_col: int  # 0 = Monday
    span: int
    row: int
    start_day: date
    end_day: date
    continues_before: bool = False
    continues_after: bool = False


@dataclass(frozen=True)
class TeacherLane:
    teacher_id: str | None  # None = unassigned lane
    label: str
    placements: tuple[Placement, ...]
    row_count: int
    open_batches: int


# ----------------------------
# Availability
# ----------------------------
@dataclass(frozen=True)
class SlotStatus:
    free: bool
    batch: Batch | None = None


@dataclass(frozen=True)
class TeacherAvailability:
    teacher_id: str
    slot_status: dict[Slot, SlotStatus]
    current_load: int
    max_concurrent: int
    available_capacity: int
    capacity_status: CapacityStatus
    next_available_date: date | None = None
    data_quality: tuple[str, ...] = ()

    @property
    def free_slots(self) -> list[Slot]:
        return [s for s in SLOTS if s in self.slot_status and self.slot_status[s].free]


@dataclass(frozen=True)
class TeacherFreeing:
    teacher_id: str
    batch_id: str
    batch_code: str
    level: str
    available_from: date
    slot: Slot | None


@dataclass(frozen=True)
class DayOverview:
    day: date
    batches_running: tuple[Batch, ...]
    teachers_available: tuple[str, ...]
    teachers_occupied: tuple[str, ...]
    total_capacity: int
    used_capacity: int


@dataclass(frozen=True)
class DateCapacity:
    used: int
    total: int
    available: int
    percentage: float


# ----------------------------
# Suggestions
# ----------------------------
@dataclass(frozen=True)
class Suggestion:
    teacher_id: str
    level: str
    slot: Slot
    score: int
    rationale: tuple[str, ...] = field(default_factory=tuple)
    warnings: tuple[str, ...] = field(default_factory=tuple)
