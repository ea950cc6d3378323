import datetime
import json
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import ConfigurationError
from .models import (
    DEFAULT_MAX_LOAD,
    DEFAULT_SEAT_COLORS,
    SEAT_COLOR_PALETTE,
    Day,
    ExamSlot,
    ExamType,
)

SNUG_ROOM_MARGIN = 10


class SlotConfig(BaseModel):
    day: Day
    start: str
    end: str

    @field_validator("day", mode="before")
    @classmethod
    def _parse_day(cls, value):
        return Day.parse(value)

    def slot(self) -> ExamSlot:
        return ExamSlot.parse(self.day, f"{self.start}-{self.end}")


class ExamWindow(BaseModel):
    weeks: int
    days: list[Day]
    slots: list[SlotConfig]

    @field_validator("days", mode="before")
    @classmethod
    def _parse_days(cls, values):
        return [Day.parse(v) for v in values]

    def exam_slots(self) -> list[ExamSlot]:
        return [s.slot() for s in self.slots]


def _blocks(days: list[Day], starts: list[str]) -> list[SlotConfig]:
    slots = []
    for day in days:
        for start in starts:
            hour = int(start.split(":")[0])
            slots.append(SlotConfig(day=day, start=start, end=f"{hour + 2:02d}:00"))
    return slots


def default_windows() -> dict[ExamType, ExamWindow]:
    midterm_days = [Day.FRI, Day.SAT]
    final_days = [Day.MON, Day.TUE, Day.WED, Day.THU]
    return {
        ExamType.MIDTERM: ExamWindow(
            weeks=4,
            days=midterm_days,
            slots=_blocks(midterm_days, ["08:00", "10:00", "12:00"]),
        ),
        ExamType.FINAL: ExamWindow(
            weeks=6,
            days=final_days,
            slots=_blocks(final_days, ["08:00", "10:00", "12:00", "14:00"]),
        ),
    }


class TimeSlotConfig(BaseModel):
    windows: dict[ExamType, ExamWindow] = Field(default_factory=default_windows)

    def window(self, exam_type: ExamType) -> ExamWindow:
        if exam_type not in self.windows:
            raise ConfigurationError(f"No exam window configured for {exam_type}")
        return self.windows[exam_type]


class SchedulingConfig(BaseModel):
    semester_start: datetime.date = Field(default=datetime.date(2024, 10, 1))
    exam_type: ExamType = Field(default=ExamType.MIDTERM)
    midterm_start_week: int = Field(default=7, ge=1)
    final_start_week: int = Field(default=16, ge=1)
    exam_duration: float = Field(default=2, gt=0)

    @property
    def start_week(self) -> int:
        if self.exam_type == ExamType.MIDTERM:
            return self.midterm_start_week
        return self.final_start_week

    def exam_date(self, week: int, day: Day) -> datetime.date:
        """
        Calendar date of weekday offset `day` in semester week `week` (1-based)
        """
        return self.semester_start + datetime.timedelta(days=(week - 1) * 7 + int(day))


def load_config_from_file[T: SchedulingConfig | TimeSlotConfig](
    config_cls: type[T], filename: str
) -> T:
    """Load scheduler configuration from a JSON file."""
    try:
        with open(filename, encoding="utf-8") as f:
            data = json.load(f)
        return config_cls(**data)
    except (OSError, TypeError, json.JSONDecodeError, ValidationError) as e:
        raise ConfigurationError(f"Invalid configuration in {filename}: {e}") from e


def load_optional_config[T: SchedulingConfig | TimeSlotConfig](
    config_cls: type[T], filename: Optional[str]
) -> T:
    if filename is None:
        return config_cls()
    return load_config_from_file(config_cls, filename)


__all__ = [
    "DEFAULT_MAX_LOAD",
    "DEFAULT_SEAT_COLORS",
    "SEAT_COLOR_PALETTE",
    "SNUG_ROOM_MARGIN",
    "ExamType",
    "SlotConfig",
    "ExamWindow",
    "TimeSlotConfig",
    "SchedulingConfig",
    "default_windows",
    "load_config_from_file",
    "load_optional_config",
]
