"""
Conflict detection over a snapshot of exams, courses, instructors, rooms and
students.

`detect_conflicts` never mutates its inputs and never raises on dangling
references: an exam naming a room or course that no longer exists is simply
skipped by the capacity check.
"""

import datetime
import itertools
from enum import Enum
from typing import Annotated, Iterable, Literal, Sequence, Union

from pydantic import Field

from .logging import logger
from .models import Course, Entity, Exam, Instructor, Room, Roster, Student


class Severity(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Conflict(Entity):
    conflict_id: str
    severity: Severity
    date: datetime.date
    time: str


class RoomConflict(Conflict):
    type: Literal["room"] = "room"
    exam1: Exam
    exam2: Exam
    room: str
    seat_color: str | None = None
    severity: Severity = Severity.HIGH


class CapacityConflict(Conflict):
    type: Literal["capacity"] = "capacity"
    exam: Exam
    course: Course
    room: Room
    students_enrolled: int
    room_capacity: int
    severity: Severity = Severity.HIGH

    @property
    def overflow(self) -> int:
        return self.students_enrolled - self.room_capacity


class InstructorConflict(Conflict):
    type: Literal["instructor"] = "instructor"
    exam1: Exam
    exam2: Exam
    instructor: str
    severity: Severity = Severity.HIGH


class StudentConflict(Conflict):
    type: Literal["student"] = "student"
    student_id: str
    student_name: str = ""
    exam1: Exam
    exam2: Exam
    severity: Severity = Severity.MEDIUM


RoomCategoryConflict = Annotated[
    Union[RoomConflict, CapacityConflict], Field(discriminator="type")
]


RESOLUTION_HINTS = {
    "room": "Reschedule one of the exams to a different time slot or assign different seat colors",
    "instructor": "Assign a different proctor or reschedule the exam",
    "student": "Consider creating a makeup exam or adjusting student enrollment",
    "capacity": "Move the exam to a larger room or split into multiple sessions",
}


class ConflictReport(Entity):
    room: list[RoomCategoryConflict] = Field(default_factory=list)
    instructor: list[InstructorConflict] = Field(default_factory=list)
    student: list[StudentConflict] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.room) + len(self.instructor) + len(self.student)

    @property
    def is_clean(self) -> bool:
        return self.total == 0

    def counts(self) -> dict[str, int]:
        return {
            "room": len(self.room),
            "instructor": len(self.instructor),
            "student": len(self.student),
        }

    def room_conflicts(self) -> list[RoomConflict]:
        return [c for c in self.room if isinstance(c, RoomConflict)]

    def capacity_conflicts(self) -> list[CapacityConflict]:
        return [c for c in self.room if isinstance(c, CapacityConflict)]

    def by_student(self) -> dict[str, list[StudentConflict]]:
        grouped: dict[str, list[StudentConflict]] = {}
        for conflict in self.student:
            grouped.setdefault(conflict.student_id, []).append(conflict)
        return grouped

    def all(self) -> list[Conflict]:
        return [*self.room, *self.instructor, *self.student]


def _same_slot(a: Exam, b: Exam) -> bool:
    return a.date == b.date and a.time == b.time


def _room_conflicts(exams: Sequence[Exam]) -> list[RoomConflict]:
    conflicts = []
    for a, b in itertools.combinations(exams, 2):
        # same room and time is fine as long as the seat colors differ
        if _same_slot(a, b) and a.room == b.room and a.seat_color == b.seat_color:
            conflicts.append(
                RoomConflict(
                    conflict_id=f"{a.id}-{b.id}",
                    exam1=a,
                    exam2=b,
                    room=a.room,
                    seat_color=a.seat_color,
                    date=a.date,
                    time=a.time,
                )
            )
    return conflicts


def _instructor_conflicts(
    exams: Sequence[Exam], roster: Roster
) -> list[InstructorConflict]:
    conflicts = []
    for a, b in itertools.combinations(exams, 2):
        if _same_slot(a, b) and roster.key(a) == roster.key(b):
            conflicts.append(
                InstructorConflict(
                    conflict_id=f"{a.id}-{b.id}",
                    exam1=a,
                    exam2=b,
                    instructor=a.instructor,
                    date=a.date,
                    time=a.time,
                )
            )
    return conflicts


def _student_conflicts(
    exams: Sequence[Exam], students: Iterable[Student]
) -> list[StudentConflict]:
    conflicts = []
    seen: set[tuple[str, str, str]] = set()
    for student in students:
        enrolled = set(student.enrolled_courses)
        student_exams = [e for e in exams if e.course_code in enrolled]
        for a, b in itertools.combinations(student_exams, 2):
            if not _same_slot(a, b):
                continue
            key = (student.student_id, a.id, b.id)
            if key in seen:
                continue
            seen.add(key)
            conflicts.append(
                StudentConflict(
                    conflict_id="-".join(key),
                    student_id=student.student_id,
                    student_name=student.name,
                    exam1=a,
                    exam2=b,
                    date=a.date,
                    time=a.time,
                )
            )
    return conflicts


def _capacity_conflicts(
    exams: Sequence[Exam], courses: Iterable[Course], rooms: Iterable[Room]
) -> list[CapacityConflict]:
    # first record wins when a key is duplicated
    courses_by_code: dict[str, Course] = {}
    for course in courses:
        courses_by_code.setdefault(course.code, course)
    rooms_by_name: dict[str, Room] = {}
    for room in rooms:
        rooms_by_name.setdefault(room.name, room)

    conflicts = []
    for exam in exams:
        course = courses_by_code.get(exam.course_code)
        room = rooms_by_name.get(exam.room)
        if course is None or room is None:
            continue
        if course.enrolled > room.capacity:
            conflicts.append(
                CapacityConflict(
                    conflict_id=f"{exam.id}-capacity",
                    exam=exam,
                    course=course,
                    room=room,
                    students_enrolled=course.enrolled,
                    room_capacity=room.capacity,
                    date=exam.date,
                    time=exam.time,
                )
            )
    return conflicts


def detect_conflicts(
    exams: Iterable[Exam],
    courses: Iterable[Course],
    instructors: Iterable[Instructor],
    rooms: Iterable[Room],
    students: Iterable[Student],
) -> ConflictReport:
    """
    Classify every room, instructor, student and capacity violation in a
    snapshot.

    Args:
        exams: All exams to audit, persisted and newly scheduled alike
        courses: Looked up by code for the capacity check
        instructors: Resolve exam proctors to employees, so exams recorded
            by id and exams recorded by name still compare
        rooms: Looked up by name for the capacity check
        students: Their enrolled courses drive the student check

    Returns:
        A ConflictReport whose `room` list holds room and capacity conflicts
    """
    exams = list(exams)
    report = ConflictReport(
        room=[*_room_conflicts(exams), *_capacity_conflicts(exams, courses, rooms)],
        instructor=_instructor_conflicts(exams, Roster(instructors)),
        student=_student_conflicts(exams, students),
    )
    logger.debug(f"Detected conflicts: {report.counts()}")
    return report
