import json
from typing import Any, Iterable, Optional

from ..conflicts import ConflictReport
from ..exceptions import ExportError
from ..models import Exam


class JSONWriter:
    """Writer class for JSON output with consistent interface."""

    def __init__(self, filename: Optional[str] = None):
        self.filename = filename
        self.documents: dict[str, Any] = {}

    def __enter__(self):
        return self

    def _add(self, key: str, data: Any) -> None:
        if self.filename:
            self.documents[key] = data
        else:
            print(json.dumps(data, indent=2))

    def add_exams(self, exams: Iterable[Exam]) -> None:
        self._add("exams", [e.as_json() for e in exams])

    def add_conflicts(self, report: ConflictReport) -> None:
        self._add("conflicts", report.as_json())

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        if self.filename and exc_type is None:
            try:
                with open(self.filename, "w", encoding="utf-8") as f:
                    json.dump(self.documents, f, indent=2)
            except OSError as e:
                raise ExportError(f"Cannot write {self.filename}: {e}") from e
