import datetime
import uuid
from enum import Enum
from typing import Optional

from pydantic import Field

from .entity import Entity


class ExamType(str, Enum):
    MIDTERM = "midterm"
    FINAL = "final"

    def __str__(self) -> str:
        return self.value


def new_exam_id() -> str:
    return uuid.uuid4().hex


class Exam(Entity):
    id: str = Field(default_factory=new_exam_id)
    course_code: str
    course: str = ""
    instructor: str = ""
    instructor_id: Optional[str] = None
    room: str = ""
    building: str = ""
    seat_color: Optional[str] = None
    date: datetime.date
    time: str
    duration: float = 2
    enrolled_students: int = 0
    room_capacity: int = 0
    exam_type: ExamType = ExamType.MIDTERM
    course_level: Optional[int] = None
    status: str = "scheduled"
    auto_scheduled: bool = False
    created_at: Optional[datetime.datetime] = None

    @property
    def slot_key(self) -> tuple[datetime.date, str]:
        return (self.date, self.time)

    @property
    def overflow(self) -> int:
        return max(0, self.enrolled_students - self.room_capacity)

    def __str__(self) -> str:
        return f"{self.course_code}@{self.room}/{self.seat_color} {self.date} {self.time}"
