from typing import Collection, Iterable, Optional, Sequence

from .models import Entity, Exam, ExamType, Instructor, Student


class ScheduleStatistics(Entity):
    total_exams: int
    exams_of_type: int
    rooms_used: int
    instructors_used: int
    average_enrolled: float


def exams_of_type(exams: Iterable[Exam], exam_type: ExamType) -> list[Exam]:
    return [e for e in exams if e.exam_type == exam_type]


def schedule_statistics(
    exams: Sequence[Exam], exam_type: Optional[ExamType] = None
) -> ScheduleStatistics:
    average = sum(e.enrolled_students for e in exams) / len(exams) if exams else 0.0
    return ScheduleStatistics(
        total_exams=len(exams),
        exams_of_type=len(exams_of_type(exams, exam_type)) if exam_type else len(exams),
        rooms_used=len({e.room for e in exams}),
        instructors_used=len({e.instructor for e in exams}),
        average_enrolled=round(average, 1),
    )


def _chronological(exams: Iterable[Exam]) -> list[Exam]:
    return sorted(exams, key=lambda e: (e.date, e.time))


def student_timetable(student: Student, exams: Iterable[Exam]) -> list[Exam]:
    return _chronological(e for e in exams if student.is_enrolled(e.course_code))


def instructor_timetable(
    instructor: Instructor, exams: Iterable[Exam], known_ids: Collection[str] = ()
) -> list[Exam]:
    return _chronological(e for e in exams if instructor.teaches(e, known_ids))


def instructor_loads(
    instructors: Iterable[Instructor], exams: Sequence[Exam]
) -> list[tuple[Instructor, int, int]]:
    """
    (instructor, assigned exams, load ceiling) for every active instructor
    """
    instructors = list(instructors)
    known_ids = {i.employee_id for i in instructors}
    return [
        (i, sum(1 for e in exams if i.teaches(e, known_ids)), i.effective_max_load)
        for i in instructors
        if i.is_available
    ]
