import datetime
import json

import pytest

from exam_scheduler.config import SchedulingConfig
from exam_scheduler.exceptions import StoreError
from exam_scheduler.models import Room
from exam_scheduler.scheduler import run_scheduling

from .conftest import make_exam


def test_missing_collections_are_seeded(store):
    rooms = store.get_rooms()
    assert [r.name for r in rooms] == ["Auditorium", "C3", "D4"]
    assert (store.data_dir / "rooms.json").exists()
    assert store.get_exams() == []
    assert store.get_courses()[0].code == "CSCI101"
    assert store.get_instructors()[0].full_name == "Dr. Sarah Johnson"
    assert [s.student_id for s in store.get_students()] == ["20230001", "20230002"]


def test_collections_are_stored_with_camel_case_keys(store):
    store.get_instructors()
    data = json.loads((store.data_dir / "instructors.json").read_text())
    assert data[0]["employeeId"] == "PROF001"
    assert data[0]["maxLoad"] == 3


def test_replace_all(store):
    store.save_rooms([Room(name="Lab", capacity=20)])
    assert [r.name for r in store.get_rooms()] == ["Lab"]
    store.save_exams([make_exam("a"), make_exam("b")])
    assert [e.id for e in store.get_exams()] == ["a", "b"]


def test_delete_and_clear_exams(store):
    store.save_exams([make_exam("a"), make_exam("b")])
    assert store.delete_exam("a").id == "a"
    assert store.delete_exam("missing") is None
    assert [e.id for e in store.get_exams()] == ["b"]
    assert store.clear_exams() == 1
    assert store.get_exams() == []


def test_clear_used_seat_colors(store):
    store.save_rooms([Room(name="C3", capacity=50, used_seat_colors=["Red"])])
    assert store.clear_used_seat_colors("C3")
    assert not store.clear_used_seat_colors("Nowhere")
    assert store.get_rooms()[0].used_seat_colors == []


def test_clear_all_restores_seeds(store):
    store.save_rooms([Room(name="Lab", capacity=20)])
    store.clear_all()
    assert len(store.get_rooms()) == 3


def test_unreadable_collection(store):
    store.data_dir.mkdir(parents=True)
    (store.data_dir / "exams.json").write_text("[{broken")
    with pytest.raises(StoreError):
        store.get_exams()
    (store.data_dir / "exams.json").write_text(json.dumps([{"courseCode": "X"}]))
    with pytest.raises(StoreError):
        store.get_exams()


def test_run_scheduling_against_seed_data(store):
    result = run_scheduling(store, SchedulingConfig(semester_start=datetime.date(2024, 10, 1)))
    assert len(result.new_exams) == 1
    exam = result.new_exams[0]
    # 42 enrolled: C3 (capacity 50) is the only room within the snug margin
    assert (exam.room, exam.building, exam.seat_color) == ("C3", "Building C", "Red")
    assert exam.date == datetime.date(2024, 11, 17)

    assert [e.id for e in store.get_exams()] == [exam.id]
    assert store.get_instructors()[0].current_load == 1

    again = run_scheduling(store, SchedulingConfig())
    assert again.new_exams == [] and again.unscheduled_courses == []
    assert len(store.get_exams()) == 1


def test_failed_write_keeps_previous_collection(store, monkeypatch):
    store.save_exams([make_exam("a")])

    def broken_dump(data, f, **kwargs):
        f.write('[{"id": "b"')
        raise OSError("disk full")

    monkeypatch.setattr("exam_scheduler.store.json.dump", broken_dump)
    with pytest.raises(StoreError):
        store.save_exams([make_exam("a"), make_exam("b")])
    monkeypatch.undo()

    assert [e.id for e in store.get_exams()] == ["a"]
    assert list(store.data_dir.glob("*.tmp")) == []
