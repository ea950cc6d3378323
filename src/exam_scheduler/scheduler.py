"""
Greedy, backtracking exam scheduler.

Courses are placed one at a time, highest level first. For each course the
search walks instructor x week x day x slot x room x seat color and keeps the
first placement that breaks no student, instructor or room constraint.
Nothing is optimized beyond that search order.
"""

import datetime
import itertools
from collections import Counter, defaultdict
from dataclasses import dataclass
from typing import (
    TYPE_CHECKING,
    Callable,
    Collection,
    Iterable,
    Iterator,
    Optional,
    Sequence,
)

from .config import SNUG_ROOM_MARGIN, SchedulingConfig, TimeSlotConfig
from .logging import logger
from .models import (
    LEVELS,
    Course,
    Entity,
    Exam,
    ExamSlot,
    Instructor,
    Room,
    Student,
)

if TYPE_CHECKING:
    from .store import DataStore

NO_INSTRUCTORS = "No available instructors"
NO_PLACEMENT = "No available time slots or rooms after trying all options"


class UnscheduledCourse(Entity):
    course: Course
    reason: str


class ScheduleResult(Entity):
    new_exams: list[Exam]
    unscheduled_courses: list[UnscheduledCourse]
    instructors: list[Instructor]


@dataclass
class ScheduleProgress:
    step: str
    completed: int
    total: int

    @property
    def percent(self) -> float:
        if self.total == 0:
            return 100.0
        return 100.0 * self.completed / self.total


@dataclass
class Placement:
    instructor: Instructor
    date: datetime.date
    slot: ExamSlot


@dataclass
class RoomAssignment:
    room: Room
    seat_color: str


def partition_courses(
    courses: Iterable[Course], existing_exams: Iterable[Exam]
) -> tuple[list[Course], list[Course]]:
    """
    Split courses into (already scheduled, candidates). Candidates are active
    courses without an exam; inactive unscheduled courses are in neither list.
    """
    scheduled_codes = {e.course_code for e in existing_exams}
    scheduled, candidates = [], []
    for course in courses:
        if course.code in scheduled_codes:
            scheduled.append(course)
        elif course.is_active:
            candidates.append(course)
    return scheduled, candidates


def group_courses_by_level(courses: Iterable[Course]) -> dict[int, list[Course]]:
    grouped: dict[int, list[Course]] = {level: [] for level in LEVELS}
    for course in courses:
        grouped[course.level].append(course)
    return grouped


def unscheduled_courses(courses: Iterable[Course], exams: Iterable[Exam]) -> list[Course]:
    _, candidates = partition_courses(courses, exams)
    return candidates


def recompute_instructor_loads(
    instructors: Iterable[Instructor], exams: Sequence[Exam]
) -> list[Instructor]:
    instructors = list(instructors)
    known_ids = {i.employee_id for i in instructors}
    return [
        i.model_copy(
            update={"current_load": sum(1 for e in exams if i.teaches(e, known_ids))}
        )
        for i in instructors
    ]


def find_duplicate_instructor_names(instructors: Iterable[Instructor]) -> list[str]:
    counts = Counter(i.full_name for i in instructors)
    return [name for name, n in counts.items() if n > 1]


def co_enrolled_courses(course_code: str, students: Iterable[Student]) -> set[str]:
    """
    Every course code taken by at least one student of `course_code`
    """
    codes: set[str] = set()
    for student in students:
        if student.is_enrolled(course_code):
            codes.update(student.enrolled_courses)
    return codes


def _at(exams: Iterable[Exam], date: datetime.date, time: str) -> Iterator[Exam]:
    return (e for e in exams if e.date == date and e.time == time)


def has_student_conflict(
    co_enrolled: set[str], date: datetime.date, time: str, booked: Iterable[Exam]
) -> bool:
    return any(e.course_code in co_enrolled for e in _at(booked, date, time))


def has_instructor_conflict(
    instructor: Instructor,
    date: datetime.date,
    time: str,
    booked: Iterable[Exam],
    known_ids: Collection[str] = (),
) -> bool:
    return any(instructor.teaches(e, known_ids) for e in _at(booked, date, time))


def assign_room(
    course: Course,
    date: datetime.date,
    time: str,
    level: int,
    rooms: Sequence[Room],
    booked: Sequence[Exam],
) -> Optional[RoomAssignment]:
    """
    Pick a room and seat color for `course` at (date, time).

    Snug rooms (capacity within SNUG_ROOM_MARGIN of enrollment) are tried
    before larger ones, each group in collection order. A room is rejected
    when an exam of the same level already sits in it at that time or when
    all of its seat colors are claimed.

    Returns:
        The first acceptable room with its first unclaimed color, or None
    """
    fitting = [r for r in rooms if r.is_available and r.capacity >= course.enrolled]
    snug = [r for r in fitting if r.capacity <= course.enrolled + SNUG_ROOM_MARGIN]
    larger = [r for r in fitting if r.capacity > course.enrolled + SNUG_ROOM_MARGIN]

    for room in snug + larger:
        in_room = [e for e in _at(booked, date, time) if e.room == room.name]
        if any(e.course_level == level for e in in_room):
            continue
        free = room.free_seat_colors(e.seat_color for e in in_room)
        if free:
            return RoomAssignment(room=room, seat_color=free[0])
    return None


class Scheduler:
    def __init__(
        self,
        config: SchedulingConfig,
        time_slot_config: Optional[TimeSlotConfig] = None,
        on_progress: Optional[Callable[[ScheduleProgress], None]] = None,
    ):
        """
        Initialize the scheduler.

        Args:
            config: Semester start, exam type and duration for this run
            time_slot_config: Exam windows per exam type (defaults to the
                standard midterm/final tables)
            on_progress: Called once per course and once at the end
        """
        self._config = config
        self._time_slot_config = time_slot_config or TimeSlotConfig()
        self._window = self._time_slot_config.window(config.exam_type)
        self._slots = self._window.exam_slots()
        self._on_progress = on_progress

    @property
    def config(self) -> SchedulingConfig:
        return self._config

    def _report(self, step: str, completed: int, total: int) -> None:
        if self._on_progress is not None:
            self._on_progress(ScheduleProgress(step=step, completed=completed, total=total))

    def candidate_dates(self) -> Iterator[tuple[datetime.date, ExamSlot]]:
        """
        Yields (date, slot) in search order: week, then day, then slot
        """
        for week_offset in range(self._window.weeks):
            week = self._config.start_week + week_offset
            for day in self._window.days:
                date = self._config.exam_date(week, day)
                for slot in self._slots:
                    if slot.day != day:
                        continue
                    yield date, slot

    def candidate_placements(
        self, instructors: Sequence[Instructor], loads: dict[str, int]
    ) -> Iterator[Placement]:
        for instructor in instructors:
            if loads[instructor.employee_id] >= instructor.effective_max_load:
                continue
            for date, slot in self.candidate_dates():
                yield Placement(instructor=instructor, date=date, slot=slot)

    def _place(
        self,
        course: Course,
        level: int,
        instructors: Sequence[Instructor],
        loads: dict[str, int],
        rooms: Sequence[Room],
        students: Sequence[Student],
        existing_exams: Sequence[Exam],
        placed: list[Exam],
        known_ids: Collection[str],
    ) -> Optional[Exam]:
        co_enrolled = co_enrolled_courses(course.code, students)
        booked = [*existing_exams, *placed]
        for candidate in self.candidate_placements(instructors, loads):
            date, time = candidate.date, candidate.slot.value
            if has_student_conflict(co_enrolled, date, time, booked):
                continue
            if has_instructor_conflict(
                candidate.instructor, date, time, booked, known_ids
            ):
                continue
            assignment = assign_room(course, date, time, level, rooms, booked)
            if assignment is None:
                continue
            return self._materialize(course, level, candidate, assignment)
        return None

    def _materialize(
        self, course: Course, level: int, candidate: Placement, assignment: RoomAssignment
    ) -> Exam:
        return Exam(
            course_code=course.code,
            course=course.name,
            instructor=candidate.instructor.full_name,
            instructor_id=candidate.instructor.employee_id,
            room=assignment.room.name,
            building=assignment.room.building,
            seat_color=assignment.seat_color,
            date=candidate.date,
            time=candidate.slot.value,
            duration=self._config.exam_duration,
            enrolled_students=course.enrolled,
            room_capacity=assignment.room.capacity,
            exam_type=self._config.exam_type,
            course_level=level,
            status="scheduled",
            auto_scheduled=True,
            created_at=datetime.datetime.now(datetime.timezone.utc),
        )

    def schedule(
        self,
        courses: Sequence[Course],
        instructors: Sequence[Instructor],
        rooms: Sequence[Room],
        students: Sequence[Student],
        existing_exams: Sequence[Exam],
    ) -> ScheduleResult:
        """
        Schedule every active course that has no exam yet.

        Returns:
            The new exams, the courses that could not be placed with a reason,
            and the instructors with loads recomputed over existing + new exams
        """
        scheduled, candidates = partition_courses(courses, existing_exams)
        if not candidates:
            logger.info("All courses are already scheduled")
            self._report("Done", 0, 0)
            return ScheduleResult(
                new_exams=[],
                unscheduled_courses=[],
                instructors=recompute_instructor_loads(instructors, existing_exams),
            )

        for name in find_duplicate_instructor_names(instructors):
            logger.warning(f"Instructor name {name!r} is shared by several instructors")

        logger.info(
            f"Scheduling {len(candidates)} {self._config.exam_type} exams "
            f"({len(scheduled)} courses already scheduled)"
        )

        known_ids = {i.employee_id for i in instructors}
        loads: dict[str, int] = defaultdict(int)
        for instructor in instructors:
            loads[instructor.employee_id] = sum(
                1 for e in existing_exams if instructor.teaches(e, known_ids)
            )

        placed: list[Exam] = []
        unscheduled: list[UnscheduledCourse] = []
        grouped = group_courses_by_level(candidates)
        completed = 0

        for level in LEVELS:
            for course in grouped[level]:
                self._report(
                    f"Scheduling {course.code} ({level}-level)...",
                    completed,
                    len(candidates),
                )
                completed += 1

                eligible = sorted(
                    (
                        i
                        for i in instructors
                        if i.department == course.department and i.is_available
                    ),
                    key=lambda i: loads[i.employee_id],
                )
                if not eligible:
                    logger.info(f"{course.code}: {NO_INSTRUCTORS}")
                    unscheduled.append(UnscheduledCourse(course=course, reason=NO_INSTRUCTORS))
                    continue

                exam = self._place(
                    course,
                    level,
                    eligible,
                    loads,
                    rooms,
                    students,
                    existing_exams,
                    placed,
                    known_ids,
                )
                if exam is None:
                    logger.info(f"{course.code}: {NO_PLACEMENT}")
                    unscheduled.append(UnscheduledCourse(course=course, reason=NO_PLACEMENT))
                    continue

                placed.append(exam)
                loads[exam.instructor_id] += 1
                logger.debug(f"Placed {exam} with {exam.instructor}")

        self._report("Done", completed, len(candidates))
        logger.info(
            f"Scheduled {len(placed)} exams, {len(unscheduled)} courses left unscheduled"
        )
        return ScheduleResult(
            new_exams=placed,
            unscheduled_courses=unscheduled,
            instructors=recompute_instructor_loads(
                instructors, list(itertools.chain(existing_exams, placed))
            ),
        )


def auto_schedule(
    config: SchedulingConfig,
    courses: Sequence[Course],
    instructors: Sequence[Instructor],
    rooms: Sequence[Room],
    students: Sequence[Student],
    existing_exams: Sequence[Exam],
    time_slot_config: Optional[TimeSlotConfig] = None,
) -> ScheduleResult:
    return Scheduler(config, time_slot_config).schedule(
        courses, instructors, rooms, students, existing_exams
    )


def run_scheduling(
    store: "DataStore",
    config: SchedulingConfig,
    time_slot_config: Optional[TimeSlotConfig] = None,
    on_progress: Optional[Callable[[ScheduleProgress], None]] = None,
) -> ScheduleResult:
    """
    Load a snapshot from `store`, schedule it and write the results back:
    all exams (existing + new) when anything was placed, and the instructors
    with recomputed loads.
    """
    existing = store.get_exams()
    result = Scheduler(config, time_slot_config, on_progress).schedule(
        store.get_courses(),
        store.get_instructors(),
        store.get_rooms(),
        store.get_students(),
        existing,
    )
    if result.new_exams:
        store.save_exams([*existing, *result.new_exams])
    store.save_instructors(result.instructors)
    return result
