import re
from typing import Literal, Optional

from pydantic import Field, computed_field

from .entity import Entity

LEVELS = (400, 300, 200, 100)

_COURSE_NUMBER = re.compile(r"\d+")


def course_level(code: Optional[str]) -> int:
    """
    Coarse level of a course taken from the first number in its code:
    CSCI101 -> 100, MATH201 -> 200, ENGL455 -> 400.
    """
    match = _COURSE_NUMBER.search(code or "")
    if match is None:
        return 100
    number = int(match.group())
    for level in LEVELS:
        if number >= level:
            return level
    return 100


class Course(Entity):
    code: str
    name: str = ""
    department: str = ""
    credits: int = 3
    capacity: int = 0
    enrolled: int = 0
    status: Literal["active", "inactive"] = "active"
    prerequisites: list[str] = Field(default_factory=list)
    instructor: Optional[str] = None

    @computed_field
    @property
    def level(self) -> int:
        return course_level(self.code)

    @property
    def is_active(self) -> bool:
        return self.status == "active"

    @property
    def enrollment_ratio(self) -> float:
        if self.capacity <= 0:
            return 0.0
        return self.enrolled / self.capacity

    def __str__(self) -> str:
        return self.code
