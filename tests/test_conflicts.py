import datetime

from exam_scheduler.conflicts import (
    CapacityConflict,
    ConflictReport,
    RoomConflict,
    Severity,
    detect_conflicts,
)
from exam_scheduler.models import Exam, Student

from .conftest import make_course, make_exam, make_instructor, make_room


def _detect(exams, courses=(), rooms=(), students=()):
    return detect_conflicts(exams, courses, [], rooms, students)


def test_same_room_time_and_color_is_one_room_conflict():
    exams = [
        make_exam("a", "CSCI101", room="C3", date=datetime.date(2024, 10, 11),
                  time="10:00-12:00", seat_color="Red", instructor="Dr. A"),
        make_exam("b", "MATH201", room="C3", date=datetime.date(2024, 10, 11),
                  time="10:00-12:00", seat_color="Red", instructor="Dr. B"),
    ]
    report = _detect(exams)
    assert len(report.room) == 1
    conflict = report.room[0]
    assert isinstance(conflict, RoomConflict)
    assert conflict.room == "C3"
    assert conflict.seat_color == "Red"
    assert conflict.conflict_id == "a-b"
    assert conflict.severity == Severity.HIGH


def test_different_seat_colors_share_a_room():
    exams = [
        make_exam("a", "CSCI101", room="C3", seat_color="Red", instructor="Dr. A"),
        make_exam("b", "MATH201", room="C3", seat_color="Green", instructor="Dr. B"),
    ]
    assert _detect(exams).is_clean


def test_capacity_overflow():
    course = make_course("CSCI101", enrolled=60)
    room = make_room("C3", capacity=50)
    report = _detect([make_exam("a", "CSCI101", room="C3")], [course], [room])
    assert len(report.room) == 1
    conflict = report.room[0]
    assert isinstance(conflict, CapacityConflict)
    assert conflict.overflow == 10
    assert conflict.conflict_id == "a-capacity"
    assert report.capacity_conflicts() == [conflict]
    assert report.room_conflicts() == []


def test_dangling_references_are_skipped():
    course = make_course("CSCI101", enrolled=60)
    exams = [
        make_exam("a", "CSCI101", room="Demolished"),
        make_exam("b", "GONE999", room="C3", seat_color="Blue", instructor="Dr. B"),
    ]
    report = _detect(exams, [course], [make_room("C3", capacity=50)])
    assert report.is_clean


def test_instructor_double_booking():
    exams = [
        make_exam("a", "CSCI101", room="C3", instructor="Dr. A"),
        make_exam("b", "MATH201", room="D4", instructor="Dr. A"),
        make_exam("c", "PHYS101", room="E1", instructor="Dr. A", time="10:00 - 12:00"),
    ]
    report = _detect(exams)
    assert len(report.instructor) == 1
    assert report.instructor[0].instructor == "Dr. A"
    assert report.instructor[0].conflict_id == "a-b"


def test_known_instructor_ids_take_precedence_over_names():
    exams = [
        make_exam("a", "CSCI101", room="C3", instructor="Dr. Lee", instructor_id="P1"),
        make_exam("b", "MATH201", room="D4", instructor="Dr. Lee", instructor_id="P2"),
    ]
    instructors = [
        make_instructor("P1", full_name="Dr. Lee"),
        make_instructor("P2", full_name="Dr. Lee"),
    ]
    assert detect_conflicts(exams, [], instructors, [], []).instructor == []
    # without a roster the ids cannot be resolved, so the shared name counts
    assert len(_detect(exams).instructor) == 1


def test_exam_with_id_clashes_with_exam_recorded_by_name():
    exams = [
        make_exam("a", "CSCI101", room="C3", instructor="Dr. A", instructor_id="P1"),
        make_exam("b", "MATH201", room="D4", instructor="Dr. A"),
    ]
    assert len(_detect(exams).instructor) == 1

    # a renamed instructor still resolves through the roster
    exams[0] = make_exam(
        "a", "CSCI101", room="C3", instructor="Dr. A (old)", instructor_id="P1"
    )
    report = detect_conflicts(exams, [], [make_instructor("P1", full_name="Dr. A")], [], [])
    assert [c.conflict_id for c in report.instructor] == ["a-b"]


def test_legacy_numeric_instructor_id_falls_back_to_name():
    legacy = Exam.model_validate(
        {
            "id": "a",
            "courseCode": "CSCI101",
            "instructor": "Dr. P1",
            "instructorId": 1,
            "room": "C3",
            "date": "2024-11-17",
            "time": "08:00 - 10:00",
        }
    )
    assert legacy.instructor_id == "1"
    exams = [legacy, make_exam("b", "MATH201", room="D4", instructor="Dr. P1", instructor_id="P1")]
    report = detect_conflicts(exams, [], [make_instructor("P1")], [], [])
    assert len(report.instructor) == 1


def test_student_conflicts_per_student():
    exams = [
        make_exam("a", "CSCI101", room="C3", instructor="Dr. A"),
        make_exam("b", "MATH201", room="D4", instructor="Dr. B"),
        make_exam("c", "PHYS101", room="E1", instructor="Dr. C", time="12:00 - 14:00"),
    ]
    students = [
        Student(student_id="S1", name="Ada", enrolled_courses=["CSCI101", "MATH201", "MATH201"]),
        Student(student_id="S2", name="Grace", enrolled_courses=["CSCI101", "MATH201", "PHYS101"]),
        Student(student_id="S3", name="Alan", enrolled_courses=["CSCI101", "PHYS101"]),
    ]
    report = _detect(exams, students=students)
    assert [c.conflict_id for c in report.student] == ["S1-a-b", "S2-a-b"]
    assert all(c.severity == Severity.MEDIUM for c in report.student)
    assert set(report.by_student()) == {"S1", "S2"}
    assert report.counts() == {"room": 0, "instructor": 0, "student": 2}


def test_detection_is_idempotent(students):
    exams = [
        make_exam("a", "CSCI101", room="C3", instructor="Dr. A"),
        make_exam("b", "CSCI201", room="C3", instructor="Dr. A"),
    ]
    courses = [make_course("CSCI101", enrolled=60), make_course("CSCI201")]
    rooms = [make_room("C3", capacity=50)]
    first = detect_conflicts(exams, courses, [], rooms, students)
    second = detect_conflicts(exams, courses, [], rooms, students)
    assert first.as_json() == second.as_json()
    assert first.total == 4


def test_report_round_trips_through_json():
    exams = [
        make_exam("a", "CSCI101", room="C3", instructor="Dr. A"),
        make_exam("b", "MATH201", room="C3", instructor="Dr. B"),
    ]
    report = _detect(exams, [make_course("CSCI101", enrolled=60)], [make_room("C3", capacity=50)])
    restored = ConflictReport.model_validate(report.as_json())
    assert [type(c) for c in restored.room] == [RoomConflict, CapacityConflict]
    assert restored.as_json() == report.as_json()


def test_detection_does_not_mutate_inputs():
    exams = [make_exam("a", "CSCI101"), make_exam("b", "CSCI101")]
    before = [e.as_json() for e in exams]
    _detect(exams)
    assert [e.as_json() for e in exams] == before
