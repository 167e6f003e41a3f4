import json
import tempfile
import unittest
from datetime import datetime
from pathlib import Path

from aluplanner.models.entities import (
    AcademicSession,
    Assignment,
    AssignmentType,
    Priority,
    SessionType,
    Student,
)
from aluplanner.services.repository import ALL_KEYS, DecodeError, Repository
from aluplanner.services.store import JsonFileStore


def _essay(completed: bool = False) -> Assignment:
    return Assignment(
        id="1",
        title="Essay",
        due_date=datetime(2025, 3, 10),
        course="Course 1",
        priority=Priority.HIGH,
        type=AssignmentType.SUMMATIVE,
        is_completed=completed,
    )


def _lecture(sid: str = "s1", attended: bool = False) -> AcademicSession:
    return AcademicSession(
        id=sid,
        title="Lecture",
        date=datetime(2025, 3, 11),
        start_time="09:00",
        end_time="10:30",
        session_type=SessionType.CLASS,
        location="Room 4",
        is_attended=attended,
    )


class RepositoryTests(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = Path(self.tmp.name) / "store.json"
        self.store = JsonFileStore(self.path)
        self.repo = Repository(self.store)

    def tearDown(self):
        self.tmp.cleanup()

    def test_no_student_yet(self):
        self.assertIsNone(self.repo.get_student())

    def test_student_round_trip(self):
        self.repo.insert_student(Student("a@b.c", "secret", ["Math", "Bio", "Art"]))
        student = self.repo.get_student()
        self.assertEqual(student, Student("a@b.c", "secret", ["Math", "Bio", "Art"]))
        self.assertEqual(self.store.get_list("student_courses"), ["Math", "Bio", "Art"])

    def test_student_courses_padded_on_load(self):
        self.store.set("student_email", "a@b.c")
        self.store.set_list("student_courses", ["Math"])
        self.assertEqual(self.repo.get_student().courses, ["Math", "Course 2", "Course 3"])

    def test_upsert_replaces_by_id(self):
        self.repo.insert_assignment(_essay())
        self.repo.update_assignment(_essay(completed=True))
        assignments = self.repo.get_assignments()
        self.assertEqual(len(assignments), 1)
        self.assertEqual(assignments[0].id, "1")
        self.assertTrue(assignments[0].is_completed)
        self.assertEqual(assignments[0], _essay(completed=True))

    def test_repeated_upserts_keep_last(self):
        for title in ("a", "b", "c"):
            session = _lecture()
            session.title = title
            self.repo.insert_session(session)
        self.repo.insert_session(_lecture("s2"))
        sessions = self.repo.get_sessions()
        self.assertEqual([(s.id, s.title) for s in sessions], [("s1", "c"), ("s2", "Lecture")])

    def test_upsert_moves_record_to_end(self):
        self.repo.insert_session(_lecture("s1"))
        self.repo.insert_session(_lecture("s2"))
        self.repo.insert_session(_lecture("s1", attended=True))
        self.assertEqual([s.id for s in self.repo.get_sessions()], ["s2", "s1"])

    def test_stored_json_layout(self):
        self.repo.insert_assignment(_essay())
        stored = json.loads(self.store.get("assignments"))
        self.assertEqual(
            stored,
            [
                {
                    "id": "1",
                    "title": "Essay",
                    "dueDate": "2025-03-10T00:00:00",
                    "course": "Course 1",
                    "priority": "High",
                    "type": "Summative",
                    "isCompleted": False,
                }
            ],
        )

    def test_delete(self):
        self.repo.insert_session(_lecture("s1"))
        self.repo.insert_session(_lecture("s2"))
        self.repo.delete_session("s1")
        self.assertEqual([s.id for s in self.repo.get_sessions()], ["s2"])

    def test_delete_missing_id_is_noop(self):
        self.repo.insert_assignment(_essay())
        before_value = self.store.get("assignments")
        before_bytes = self.path.read_bytes()
        self.repo.delete_assignment("does-not-exist")
        self.assertEqual(self.store.get("assignments"), before_value)
        self.assertEqual(self.path.read_bytes(), before_bytes)

    def test_delete_on_empty_store(self):
        self.repo.delete_assignment("1")
        self.assertIsNone(self.store.get("assignments"))
        self.assertEqual(self.repo.get_assignments(), [])

    def test_numeric_stored_id_matches_fetched_id(self):
        stored = _essay().to_json()
        stored["id"] = 5
        self.store.set("assignments", json.dumps([stored]))
        fetched = self.repo.get_assignments()[0]
        self.assertEqual(fetched.id, "5")

        fetched.is_completed = True
        self.repo.update_assignment(fetched)
        assignments = self.repo.get_assignments()
        self.assertEqual(len(assignments), 1)
        self.assertTrue(assignments[0].is_completed)

        self.repo.delete_assignment("5")
        self.assertEqual(self.repo.get_assignments(), [])

    def test_malformed_record_is_skipped(self):
        good = _essay().to_json()
        self.store.set("assignments", json.dumps([good, {"title": "no id"}, "junk"]))
        with self.assertLogs("aluplanner.services.repository", level="WARNING") as logs:
            assignments = self.repo.get_assignments()
        self.assertEqual([a.id for a in assignments], ["1"])
        self.assertEqual(len(logs.records), 2)

    def test_undecodable_collection_raises(self):
        self.store.set("sessions", "{oops")
        with self.assertRaises(DecodeError):
            self.repo.get_sessions()
        self.store.set("sessions", json.dumps({"id": "s1"}))
        with self.assertRaises(DecodeError):
            self.repo.get_sessions()

    def test_clear_all_data(self):
        self.repo.insert_student(Student.with_default_courses("a@b.c", "pw"))
        self.repo.insert_assignment(_essay())
        self.repo.insert_session(_lecture())
        self.repo.clear_all_data()
        stored = json.loads(self.path.read_text(encoding="utf-8"))
        self.assertFalse(set(ALL_KEYS) & set(stored))
        self.assertIsNone(self.repo.get_student())
        self.assertEqual(self.repo.get_assignments(), [])
        self.assertEqual(self.repo.get_sessions(), [])


if __name__ == "__main__":
    unittest.main()
