from .day import Day
from .entity import Entity
from .course import Course, course_level, LEVELS
from .instructor import Instructor, Roster, DEFAULT_MAX_LOAD
from .room import Room, SEAT_COLOR_PALETTE, DEFAULT_SEAT_COLORS
from .student import Student
from .exam import Exam, ExamType, new_exam_id
from .time_slot import ExamSlot, TimePoint

__all__ = [
    'Day',
    'Entity',
    'Course',
    'course_level',
    'LEVELS',
    'Instructor',
    'Roster',
    'DEFAULT_MAX_LOAD',
    'Room',
    'SEAT_COLOR_PALETTE',
    'DEFAULT_SEAT_COLORS',
    'Student',
    'Exam',
    'ExamType',
    'new_exam_id',
    'ExamSlot',
    'TimePoint',
]
