from pydantic import BaseModel

from .day import Day


class TimePoint(BaseModel):
    timepoint: int

    @staticmethod
    def make_from(hr: int, min: int) -> "TimePoint":
        return TimePoint(timepoint=(60 * hr + min))

    @staticmethod
    def parse(text: str) -> "TimePoint":
        """
        Parse "HH:MM" into a time point
        """
        hour, minute = text.strip().split(":")
        return TimePoint.make_from(int(hour), int(minute))

    @property
    def hour(self):
        return self.timepoint // 60

    @property
    def minute(self):
        return self.timepoint % 60

    @property
    def value(self):
        return self.timepoint

    def __lt__(self, other: "TimePoint") -> bool:
        return self.value < other.value

    def __le__(self, other: "TimePoint") -> bool:
        return self.value <= other.value

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"

    def __repr__(self) -> str:
        return f"TimePoint(timepoint={self.value})"


class ExamSlot(BaseModel):
    """
    A two-hour (or other) exam block on a given weekday offset.

    The slot's string form ("08:00 - 10:00") is what exams store in their
    `time` field and what all conflict checks compare.
    """

    day: Day
    start: TimePoint
    stop: TimePoint

    @staticmethod
    def parse(day: Day, text: str) -> "ExamSlot":
        start, stop = text.split("-")
        return ExamSlot(day=day, start=TimePoint.parse(start), stop=TimePoint.parse(stop))

    @property
    def value(self) -> str:
        return f"{self.start} - {self.stop}"

    @property
    def duration(self) -> int:
        """
        Length of the block in minutes
        """
        return self.stop.value - self.start.value

    @property
    def label(self) -> str:
        return f"{self.day.full_name} {self.start}-{self.stop}"

    def __str__(self) -> str:
        return self.value
