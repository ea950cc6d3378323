from .scheduler import (
    Scheduler,
    ScheduleResult,
    ScheduleProgress,
    UnscheduledCourse,
    assign_room,
    auto_schedule,
    recompute_instructor_loads,
    run_scheduling,
)
from .conflicts import ConflictReport, Severity, detect_conflicts
from .config import SchedulingConfig, TimeSlotConfig, ExamWindow, SlotConfig, load_config_from_file
from .models import Course, Exam, ExamType, Instructor, Room, Student
from .store import DataStore
from .exceptions import (
    SchedulerError,
    ConfigurationError,
    StoreError,
    ExportError
)

__all__ = [
    'Scheduler',
    'ScheduleResult',
    'ScheduleProgress',
    'UnscheduledCourse',
    'assign_room',
    'auto_schedule',
    'recompute_instructor_loads',
    'run_scheduling',
    'ConflictReport',
    'Severity',
    'detect_conflicts',
    'SchedulingConfig',
    'TimeSlotConfig',
    'ExamWindow',
    'SlotConfig',
    'load_config_from_file',
    'Course',
    'Exam',
    'ExamType',
    'Instructor',
    'Room',
    'Student',
    'DataStore',
    'SchedulerError',
    'ConfigurationError',
    'StoreError',
    'ExportError'
]
