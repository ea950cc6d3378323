from pydantic import Field, field_validator

from .entity import Entity


class Student(Entity):
    student_id: str
    name: str = ""
    major: str = ""
    enrolled_courses: list[str] = Field(default_factory=list)

    @field_validator("enrolled_courses")
    @classmethod
    def _collapse_duplicates(cls, codes: list[str]) -> list[str]:
        return list(dict.fromkeys(codes))

    def is_enrolled(self, course_code: str) -> bool:
        return course_code in self.enrolled_courses

    def __str__(self):
        return f"{self.name} ({self.student_id})"
