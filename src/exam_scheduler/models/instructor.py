from collections import Counter
from typing import TYPE_CHECKING, Collection, Iterable, Literal, Optional

from .entity import Entity

if TYPE_CHECKING:
    from .exam import Exam

DEFAULT_MAX_LOAD = 8


class Instructor(Entity):
    employee_id: str
    full_name: str
    department: str = ""
    status: Literal["active", "on-leave", "part-time"] = "active"
    max_load: Optional[int] = None
    current_load: int = 0

    @property
    def effective_max_load(self) -> int:
        # unset and zero both mean "use the default ceiling"
        return self.max_load or DEFAULT_MAX_LOAD

    @property
    def is_available(self) -> bool:
        return self.status == "active"

    @property
    def load_label(self) -> str:
        return f"{self.current_load}/{self.effective_max_load}"

    def teaches(self, exam: "Exam", known_ids: Collection[str] = ()) -> bool:
        """
        True if the exam is proctored by this instructor.

        An exam whose instructor id is this instructor's employee id matches.
        An id naming another employee in `known_ids` does not. Any other id
        (missing, or a legacy internal number) falls back to the name.
        """
        if exam.instructor_id == self.employee_id:
            return True
        if exam.instructor_id in known_ids:
            return False
        return exam.instructor == self.full_name

    def __str__(self) -> str:
        return self.full_name


class Roster:
    """
    Resolves the proctor of an exam to a stable key: the employee id when the
    exam's id is a known one, else the employee id of the only instructor
    with that name, else the name itself.
    """

    def __init__(self, instructors: Iterable[Instructor]):
        instructors = list(instructors)
        self.employee_ids = frozenset(i.employee_id for i in instructors)
        names = Counter(i.full_name for i in instructors)
        self._ids_by_name = {
            i.full_name: i.employee_id for i in instructors if names[i.full_name] == 1
        }

    def key(self, exam: "Exam") -> str:
        if exam.instructor_id in self.employee_ids:
            return exam.instructor_id
        return self._ids_by_name.get(exam.instructor, exam.instructor)
