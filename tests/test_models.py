import pytest
from pydantic import ValidationError

from exam_scheduler.models import (
    Course,
    Day,
    Exam,
    ExamSlot,
    Instructor,
    Room,
    Roster,
    Student,
    course_level,
)

from .conftest import make_exam


@pytest.mark.parametrize(
    "code,level",
    [
        ("CSCI101", 100),
        ("MATH201", 200),
        ("CS350", 300),
        ("ENGL455", 400),
        ("CS1000", 400),
        ("CSCI99", 100),
        ("SEMINAR", 100),
        ("", 100),
    ],
)
def test_course_level_from_code(code, level):
    assert course_level(code) == level


def test_course_reads_camel_case_snapshot():
    course = Course.model_validate(
        {"code": "MATH201", "name": "Calculus II", "enrolled": 40, "capacity": 50,
         "prerequisites": ["MATH101"], "status": "active"}
    )
    assert course.level == 200
    assert course.enrollment_ratio == pytest.approx(0.8)
    assert course.as_json()["level"] == 200


def test_enrollment_ratio_without_capacity():
    assert Course(code="X100", capacity=0, enrolled=5).enrollment_ratio == 0.0


def test_instructor_default_max_load():
    unset = Instructor.model_validate({"employeeId": "P1", "fullName": "Dr. One"})
    zero = Instructor.model_validate({"employeeId": "P2", "fullName": "Dr. Two", "maxLoad": 0})
    three = Instructor(employee_id="P3", full_name="Dr. Three", max_load=3, current_load=2)
    assert unset.effective_max_load == 8
    assert zero.effective_max_load == 8
    assert three.load_label == "2/3"


def test_instructor_matches_exam_by_id_then_name():
    instructor = Instructor(employee_id="P1", full_name="Dr. One")
    known_ids = {"P1", "P9"}
    assert instructor.teaches(make_exam("1", instructor="Someone", instructor_id="P1"))
    other = make_exam("2", instructor="Dr. One", instructor_id="P9")
    assert not instructor.teaches(other, known_ids)
    assert instructor.teaches(make_exam("3", instructor="Dr. One"), known_ids)
    # ids that name no known employee fall back to the name
    assert instructor.teaches(make_exam("4", instructor="Dr. One", instructor_id="1"), known_ids)
    assert not instructor.teaches(make_exam("5", instructor="Dr. Two", instructor_id="1"))


def test_room_rejects_colors_outside_palette():
    with pytest.raises(ValidationError):
        Room(name="C3", capacity=50, seat_colors=["Red", "Pink"])


def test_room_seat_colors_are_an_ordered_set():
    room = Room(name="C3", capacity=50, seat_colors=["Blue", "Red", "Blue"])
    assert room.seat_colors == ["Blue", "Red"]
    assert room.free_seat_colors(["Blue"]) == ["Red"]


def test_clear_used_seat_colors_returns_copy():
    room = Room(name="C3", capacity=50, used_seat_colors=["Red"])
    cleared = room.clear_used_seat_colors()
    assert cleared.used_seat_colors == []
    assert room.used_seat_colors == ["Red"]


def test_student_enrolled_courses_collapse_duplicates():
    student = Student.model_validate(
        {"studentId": 20230001, "name": "John", "enrolledCourses": ["CSCI101", "CSCI101", "MATH201"]}
    )
    assert student.student_id == "20230001"
    assert student.enrolled_courses == ["CSCI101", "MATH201"]


def test_exam_accepts_numeric_ids():
    exam = Exam.model_validate(
        {"id": 1700000000000.5, "courseCode": "CSCI101", "date": "2024-11-17",
         "time": "08:00 - 10:00", "enrolledStudents": 60, "roomCapacity": 50}
    )
    assert isinstance(exam.id, str)
    assert exam.overflow == 10
    assert exam.as_json()["courseCode"] == "CSCI101"


def test_roster_resolves_exams_to_employees():
    roster = Roster(
        [
            Instructor(employee_id="P1", full_name="Dr. One"),
            Instructor(employee_id="P2", full_name="Dr. Lee"),
            Instructor(employee_id="P3", full_name="Dr. Lee"),
        ]
    )
    assert roster.key(make_exam("1", instructor="Renamed", instructor_id="P1")) == "P1"
    assert roster.key(make_exam("2", instructor="Dr. One")) == "P1"
    assert roster.key(make_exam("3", instructor="Dr. One", instructor_id="7")) == "P1"
    # shared names stay unresolved
    assert roster.key(make_exam("4", instructor="Dr. Lee")) == "Dr. Lee"
    assert roster.key(make_exam("5", instructor="Guest")) == "Guest"


def test_day_parse():
    assert Day.parse("Friday") == Day.FRI
    assert Day.parse("sat") == Day.SAT
    assert Day.parse(1) == Day.MON
    assert Day.parse("4") == Day.THU
    with pytest.raises(ValueError):
        Day.parse("Sunday")


def test_exam_slot_parse():
    slot = ExamSlot.parse(Day.FRI, "08:00 - 10:00")
    assert slot.value == "08:00 - 10:00"
    assert slot.duration == 120
    assert slot.label == "Friday 08:00-10:00"
