"""
Snapshot persistence: one JSON file per collection.

Every collection is read whole and replaced whole; there are no partial
updates. Reading a collection that was never written stores and returns its
seed data.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Callable, Optional

from pydantic import TypeAdapter, ValidationError

from .exceptions import StoreError
from .logging import logger
from .models import Course, Entity, Exam, Instructor, Room, Student


def seed_students() -> list[Student]:
    return [
        Student(
            student_id="20230001",
            name="John Doe",
            major="Computer Science",
            enrolled_courses=["CSCI101"],
        ),
        Student(
            student_id="20230002",
            name="Jane Smith",
            major="Mathematics",
            enrolled_courses=["MATH201"],
        ),
    ]


def seed_courses() -> list[Course]:
    return [
        Course(
            code="CSCI101",
            name="Introduction to Programming",
            department="Computer Science",
            credits=3,
            capacity=45,
            enrolled=42,
            status="active",
            instructor="Dr. Sarah Johnson",
        )
    ]


def seed_instructors() -> list[Instructor]:
    return [
        Instructor(
            employee_id="PROF001",
            full_name="Dr. Sarah Johnson",
            department="Computer Science",
            status="active",
            max_load=3,
            current_load=2,
        )
    ]


def seed_rooms() -> list[Room]:
    return [
        Room(
            name="Auditorium",
            building="Building E",
            capacity=100,
            seat_colors=["Red", "Green", "Blue", "Yellow"],
        ),
        Room(
            name="C3",
            building="Building C",
            capacity=50,
            seat_colors=["Red", "Green", "Blue"],
        ),
        Room(
            name="D4",
            building="Building D",
            capacity=75,
            seat_colors=["Red", "Green", "Blue", "Yellow"],
        ),
    ]


COLLECTIONS: dict[str, tuple[type[Entity], Callable[[], list]]] = {
    "students": (Student, seed_students),
    "courses": (Course, seed_courses),
    "instructors": (Instructor, seed_instructors),
    "rooms": (Room, seed_rooms),
    "exams": (Exam, list),
}


class DataStore:
    def __init__(self, data_dir: str | Path):
        self.data_dir = Path(data_dir)

    def _path(self, collection: str) -> Path:
        return self.data_dir / f"{collection}.json"

    def _load(self, collection: str) -> list:
        entity_cls, seed = COLLECTIONS[collection]
        path = self._path(collection)
        if not path.exists():
            items = seed()
            self._save(collection, items)
            return items
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
            return TypeAdapter(list[entity_cls]).validate_python(data)
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            raise StoreError(f"Cannot read {collection} from {path}: {e}") from e

    def _save(self, collection: str, items: list) -> None:
        path = self._path(collection)
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            # readers only ever see the old file or the complete new one
            fd, tmp = tempfile.mkstemp(
                dir=self.data_dir, prefix=f".{collection}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump([item.as_json() for item in items], f, indent=2)
                os.replace(tmp, path)
            except BaseException:
                os.unlink(tmp)
                raise
        except OSError as e:
            raise StoreError(f"Cannot write {collection} to {path}: {e}") from e
        logger.debug(f"Saved {len(items)} {collection} to {path}")

    def get_students(self) -> list[Student]:
        return self._load("students")

    def save_students(self, students: list[Student]) -> None:
        self._save("students", students)

    def get_courses(self) -> list[Course]:
        return self._load("courses")

    def save_courses(self, courses: list[Course]) -> None:
        self._save("courses", courses)

    def get_instructors(self) -> list[Instructor]:
        return self._load("instructors")

    def save_instructors(self, instructors: list[Instructor]) -> None:
        self._save("instructors", instructors)

    def get_rooms(self) -> list[Room]:
        return self._load("rooms")

    def save_rooms(self, rooms: list[Room]) -> None:
        self._save("rooms", rooms)

    def get_exams(self) -> list[Exam]:
        return self._load("exams")

    def save_exams(self, exams: list[Exam]) -> None:
        self._save("exams", exams)

    def delete_exam(self, exam_id: str) -> Optional[Exam]:
        """
        Remove one exam. Returns the removed exam, or None if no exam has that id.
        """
        exams = self.get_exams()
        remaining = [e for e in exams if e.id != exam_id]
        if len(remaining) == len(exams):
            return None
        self.save_exams(remaining)
        return next(e for e in exams if e.id == exam_id)

    def clear_exams(self) -> int:
        count = len(self.get_exams())
        self.save_exams([])
        return count

    def clear_used_seat_colors(self, room_name: str) -> bool:
        rooms = self.get_rooms()
        if not any(r.name == room_name for r in rooms):
            return False
        self.save_rooms(
            [r.clear_used_seat_colors() if r.name == room_name else r for r in rooms]
        )
        return True

    def clear_all(self) -> None:
        for collection in COLLECTIONS:
            path = self._path(collection)
            if path.exists():
                path.unlink()
