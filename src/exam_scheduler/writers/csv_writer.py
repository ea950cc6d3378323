import csv
import io
from typing import Iterable, Optional

from ..conflicts import CapacityConflict, ConflictReport, StudentConflict
from ..exceptions import ExportError
from ..models import Exam

EXAM_COLUMNS = [
    "id",
    "courseCode",
    "course",
    "instructor",
    "room",
    "building",
    "seatColor",
    "date",
    "time",
    "enrolledStudents",
    "roomCapacity",
    "examType",
    "courseLevel",
    "autoScheduled",
]

CONFLICT_COLUMNS = ["type", "conflictId", "severity", "date", "time", "subject", "details"]


def _conflict_row(conflict) -> list:
    if isinstance(conflict, CapacityConflict):
        subject = conflict.room.name
        details = f"{conflict.exam.course_code} over capacity by {conflict.overflow}"
    elif isinstance(conflict, StudentConflict):
        subject = conflict.student_id
        details = f"{conflict.exam1.course_code} / {conflict.exam2.course_code}"
    else:
        subject = conflict.room if conflict.type == "room" else conflict.instructor
        details = f"{conflict.exam1.course_code} / {conflict.exam2.course_code}"
    return [
        conflict.type,
        conflict.conflict_id,
        conflict.severity.value,
        conflict.date.isoformat(),
        conflict.time,
        subject,
        details,
    ]


class CSVWriter:
    """Writer class for CSV output with consistent interface."""

    def __init__(self, filename: Optional[str] = None):
        self.filename = filename
        self.sections: list[str] = []

    def __enter__(self):
        return self

    def _add(self, header: list[str], rows: Iterable[list]) -> None:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(header)
        writer.writerows(rows)
        data = buffer.getvalue().rstrip("\n")
        if self.filename:
            self.sections.append(data)
        else:
            print(data)

    def add_exams(self, exams: Iterable[Exam]) -> None:
        """Add an exam table to be written."""
        rows = []
        for exam in exams:
            record = exam.as_json()
            rows.append([record[column] for column in EXAM_COLUMNS])
        self._add(EXAM_COLUMNS, rows)

    def add_conflicts(self, report: ConflictReport) -> None:
        """Add a conflict table to be written."""
        self._add(CONFLICT_COLUMNS, (_conflict_row(c) for c in report.all()))

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        """Write all accumulated tables."""
        if self.filename and exc_type is None:
            content = "\n\n".join(self.sections)
            try:
                with open(self.filename, "w", encoding="utf-8", newline="") as f:
                    f.write(content + "\n")
            except OSError as e:
                raise ExportError(f"Cannot write {self.filename}: {e}") from e
