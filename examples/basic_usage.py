"""
Basic usage example for the exam scheduler library.

This example demonstrates how to:
1. Build a snapshot of courses, instructors, rooms and students
2. Run the scheduler for one exam type
3. Audit the result with the conflict detector
"""

import datetime
import json

from exam_scheduler import (
    Course,
    ExamType,
    Instructor,
    Room,
    SchedulingConfig,
    Student,
    auto_schedule,
    detect_conflicts,
)


def main():
    courses = [
        Course(code="CSCI101", name="Introduction to Programming",
               department="Computer Science", capacity=45, enrolled=42),
        Course(code="CSCI301", name="Algorithms",
               department="Computer Science", capacity=40, enrolled=35),
        Course(code="MATH201", name="Calculus II",
               department="Mathematics", capacity=60, enrolled=55),
    ]
    instructors = [
        Instructor(employee_id="PROF001", full_name="Dr. Sarah Johnson",
                   department="Computer Science", max_load=3),
        Instructor(employee_id="PROF002", full_name="Dr. Omar Haddad",
                   department="Mathematics"),
    ]
    rooms = [
        Room(name="Auditorium", building="Building E", capacity=100,
             seat_colors=["Red", "Green", "Blue", "Yellow"]),
        Room(name="C3", building="Building C", capacity=50),
    ]
    students = [
        Student(student_id="20230001", name="John Doe",
                enrolled_courses=["CSCI101", "MATH201"]),
    ]

    config = SchedulingConfig(
        semester_start=datetime.date(2024, 10, 1), exam_type=ExamType.MIDTERM
    )

    print("\nScheduling midterms...")
    result = auto_schedule(config, courses, instructors, rooms, students, [])

    print("\nNew exams:")
    print(json.dumps([e.as_json() for e in result.new_exams], indent=2))
    for item in result.unscheduled_courses:
        print(f"Unscheduled {item.course.code}: {item.reason}")

    report = detect_conflicts(result.new_exams, courses, instructors, rooms, students)
    print(f"\nConflicts found: {report.total}")


if __name__ == "__main__":
    main()
