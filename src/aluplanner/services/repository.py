from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, List, Optional, TypeVar

from aluplanner.models.entities import AcademicSession, Assignment, Student
from aluplanner.services.store import PersistentStore

logger = logging.getLogger(__name__)

STUDENT_EMAIL_KEY = "student_email"
STUDENT_PASSWORD_KEY = "student_password"
STUDENT_COURSES_KEY = "student_courses"
ASSIGNMENTS_KEY = "assignments"
SESSIONS_KEY = "sessions"

ALL_KEYS = (
    STUDENT_EMAIL_KEY,
    STUDENT_PASSWORD_KEY,
    STUDENT_COURSES_KEY,
    ASSIGNMENTS_KEY,
    SESSIONS_KEY,
)

T = TypeVar("T")


class DecodeError(Exception):
    pass


class Repository:
    """Typed access to the student, assignments and sessions kept in a store.

    Collections are stored as one JSON array string per kind. Inserting and
    updating are the same operation: any element with the incoming id is
    dropped and the new one appended.
    """

    def __init__(self, store: PersistentStore) -> None:
        self.store = store

    # Student

    def insert_student(self, student: Student) -> None:
        self.store.set(STUDENT_EMAIL_KEY, student.email)
        self.store.set(STUDENT_PASSWORD_KEY, student.password)
        self.store.set_list(STUDENT_COURSES_KEY, student.courses)

    def get_student(self) -> Optional[Student]:
        email = self.store.get(STUDENT_EMAIL_KEY)
        if email is None:
            return None
        return Student.from_json(
            {
                "email": email,
                "password": self.store.get(STUDENT_PASSWORD_KEY) or "",
                "courses": self.store.get_list(STUDENT_COURSES_KEY) or [],
            }
        )

    # Assignments

    def insert_assignment(self, assignment: Assignment) -> None:
        self._upsert(ASSIGNMENTS_KEY, assignment.id, assignment.to_json())

    def update_assignment(self, assignment: Assignment) -> None:
        self.insert_assignment(assignment)

    def get_assignments(self) -> List[Assignment]:
        return self._fetch_all(ASSIGNMENTS_KEY, Assignment.from_json)

    def delete_assignment(self, assignment_id: str) -> None:
        self._delete(ASSIGNMENTS_KEY, assignment_id)

    # Sessions

    def insert_session(self, session: AcademicSession) -> None:
        self._upsert(SESSIONS_KEY, session.id, session.to_json())

    def update_session(self, session: AcademicSession) -> None:
        self.insert_session(session)

    def get_sessions(self) -> List[AcademicSession]:
        return self._fetch_all(SESSIONS_KEY, AcademicSession.from_json)

    def delete_session(self, session_id: str) -> None:
        self._delete(SESSIONS_KEY, session_id)

    def clear_all_data(self) -> None:
        for key in ALL_KEYS:
            self.store.remove(key)
        logger.info("Cleared all planner data")

    def _read_collection(self, key: str) -> List[Dict[str, Any]]:
        raw = self.store.get(key)
        if raw is None:
            return []
        try:
            items = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise DecodeError(f"Stored '{key}' is not valid JSON") from exc
        if not isinstance(items, list):
            raise DecodeError(f"Stored '{key}' is not a JSON array")
        return items

    def _write_collection(self, key: str, items: List[Dict[str, Any]]) -> None:
        self.store.set(key, json.dumps(items))

    def _upsert(self, key: str, record_id: str, record: Dict[str, Any]) -> None:
        items = [item for item in self._read_collection(key) if not _has_id(item, record_id)]
        items.append(record)
        self._write_collection(key, items)

    def _delete(self, key: str, record_id: str) -> None:
        items = self._read_collection(key)
        kept = [item for item in items if not _has_id(item, record_id)]
        if len(kept) == len(items):
            return
        self._write_collection(key, kept)

    def _fetch_all(self, key: str, decode: Callable[[Dict[str, Any]], T]) -> List[T]:
        records: List[T] = []
        for index, item in enumerate(self._read_collection(key)):
            if not isinstance(item, dict):
                logger.warning("Skipping non-object entry %d in '%s'", index, key)
                continue
            try:
                records.append(decode(item))
            except (KeyError, ValueError, TypeError) as exc:
                logger.warning("Skipping malformed entry %d in '%s': %r", index, key, exc)
        return records


def _has_id(item: Any, record_id: str) -> bool:
    return isinstance(item, dict) and "id" in item and str(item["id"]) == record_id
