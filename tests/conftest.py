import datetime

import pytest

from exam_scheduler.config import SchedulingConfig
from exam_scheduler.models import Course, Exam, Instructor, Room, Student
from exam_scheduler.store import DataStore

FIRST_MIDTERM_DATE = datetime.date(2024, 11, 17)
SECOND_MIDTERM_DATE = datetime.date(2024, 11, 18)


def make_course(code, enrolled=30, department="Computer Science", **kwargs):
    kwargs.setdefault("name", f"Course {code}")
    kwargs.setdefault("capacity", enrolled + 5)
    return Course(code=code, enrolled=enrolled, department=department, **kwargs)


def make_instructor(employee_id, department="Computer Science", **kwargs):
    kwargs.setdefault("full_name", f"Dr. {employee_id}")
    return Instructor(employee_id=employee_id, department=department, **kwargs)


def make_room(name, capacity=35, colors=("Red", "Green", "Blue"), **kwargs):
    kwargs.setdefault("building", "Building A")
    return Room(name=name, capacity=capacity, seat_colors=list(colors), **kwargs)


def make_exam(exam_id, course_code="CSCI101", **kwargs):
    kwargs.setdefault("date", FIRST_MIDTERM_DATE)
    kwargs.setdefault("time", "08:00 - 10:00")
    kwargs.setdefault("room", "C3")
    kwargs.setdefault("seat_color", "Red")
    kwargs.setdefault("instructor", "Dr. Sarah Johnson")
    return Exam(id=exam_id, course_code=course_code, **kwargs)


@pytest.fixture
def config():
    return SchedulingConfig(semester_start=datetime.date(2024, 10, 1))


@pytest.fixture
def store(tmp_path):
    return DataStore(tmp_path / "data")


@pytest.fixture
def students():
    return [
        Student(student_id="S1", name="Ada", enrolled_courses=["CSCI101", "CSCI201"]),
        Student(student_id="S2", name="Grace", enrolled_courses=["CSCI201", "CSCI301"]),
    ]
