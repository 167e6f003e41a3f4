from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

COURSE_COUNT = 3


def default_course_name(position: int) -> str:
    return f"Course {position}"


def new_record_id() -> str:
    """Millisecond timestamp, the id convention for user-created records."""
    return str(int(time.time() * 1000))


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 string as naive local time; offset values are converted."""
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


class Priority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class AssignmentType(str, Enum):
    FORMATIVE = "Formative"
    SUMMATIVE = "Summative"


class SessionType(str, Enum):
    CLASS = "Class session"
    GROUP_ACTIVITY = "Group activity session"
    GROUP_STUDY = "Group study session"
    OFFICE_HOURS = "Office hours session"


def normalize_courses(courses: List[str]) -> List[str]:
    result = [str(course) for course in courses]
    while len(result) < COURSE_COUNT:
        result.append(default_course_name(len(result) + 1))
    return result[:COURSE_COUNT]


@dataclass
class Student:
    email: str
    password: str
    courses: List[str] = field(default_factory=list)

    @classmethod
    def with_default_courses(
        cls, email: str, password: str, courses: Optional[List[str]] = None
    ) -> "Student":
        if courses is None:
            courses = [default_course_name(i) for i in range(1, COURSE_COUNT + 1)]
        return cls(email=email, password=password, courses=list(courses))

    def to_json(self) -> Dict[str, Any]:
        return {
            "email": self.email,
            "password": self.password,
            "courses": list(self.courses),
            # read by older builds
            "selectedCourses": list(self.courses),
        }

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Student":
        raw_courses = data.get("courses")
        if raw_courses is None:
            raw_courses = data.get("selectedCourses") or []
        return cls(
            email=data.get("email") or "",
            password=data.get("password") or "",
            courses=normalize_courses(list(raw_courses)),
        )


@dataclass
class Assignment:
    id: str
    title: str
    due_date: datetime
    course: str
    priority: Priority = Priority.MEDIUM
    type: AssignmentType = AssignmentType.FORMATIVE
    is_completed: bool = False

    def to_json(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "dueDate": self.due_date.isoformat(),
            "course": self.course,
            "priority": Priority(self.priority).value,
            "type": AssignmentType(self.type).value,
            "isCompleted": self.is_completed,
        }

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Assignment":
        """Build an assignment from its stored form.

        ``id``, ``title``, ``dueDate`` and ``course`` are required and raise
        ``KeyError`` when absent; a bad date or enum value raises
        ``ValueError``.
        """
        return cls(
            id=str(data["id"]),
            title=str(data["title"]),
            due_date=parse_timestamp(data["dueDate"]),
            course=str(data["course"]),
            priority=Priority(data.get("priority") or Priority.MEDIUM.value),
            type=AssignmentType(data.get("type") or AssignmentType.FORMATIVE.value),
            is_completed=bool(data.get("isCompleted", False)),
        )


@dataclass
class AcademicSession:
    id: str
    title: str
    date: datetime
    start_time: str
    end_time: str
    session_type: SessionType
    location: str = ""
    is_attended: bool = False

    def to_json(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "date": self.date.isoformat(),
            "startTime": self.start_time,
            "endTime": self.end_time,
            "location": self.location,
            "sessionType": SessionType(self.session_type).value,
            "isAttended": self.is_attended,
        }

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "AcademicSession":
        return cls(
            id=str(data["id"]),
            title=str(data["title"]),
            date=parse_timestamp(data["date"]),
            start_time=str(data["startTime"]),
            end_time=str(data["endTime"]),
            session_type=SessionType(data["sessionType"]),
            location=data.get("location") or "",
            is_attended=bool(data.get("isAttended", False)),
        )
