from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional

from aluplanner.config.settings import Settings, settings as default_settings
from aluplanner.core.attendance import attendance_status, calculate_attendance_percentage
from aluplanner.core.schedule import (
    academic_week,
    group_sessions_by_day,
    pending_assignments_count,
    today_sessions,
    upcoming_assignments,
    week_start,
)
from aluplanner.models.entities import (
    AcademicSession,
    Assignment,
    Student,
    default_course_name,
    normalize_courses,
)
from aluplanner.services.repository import Repository

logger = logging.getLogger(__name__)


@dataclass
class DashboardSummary:
    upcoming: List[Assignment] = field(default_factory=list)
    today: List[AcademicSession] = field(default_factory=list)
    pending_count: int = 0
    attendance_percentage: float = 0.0
    attendance_status: str = ""
    academic_week: str = ""


class PlannerService:
    """API for the presentation layer.

    Storage calls are forwarded to the repository unchanged; nothing here sorts
    or validates what is saved. The dashboard and schedule helpers are
    read-only views computed from stored data.
    """

    def __init__(self, repository: Repository, config: Optional[Settings] = None) -> None:
        self.repository = repository
        self.config = config or default_settings

    # Student

    def save_student(self, student: Student) -> None:
        self.repository.insert_student(student)

    def get_student(self) -> Optional[Student]:
        return self.repository.get_student()

    def update_courses(self, courses: List[str]) -> Optional[Student]:
        student = self.get_student()
        if student is None:
            return None
        names = [name.strip() or default_course_name(i) for i, name in enumerate(courses, start=1)]
        updated = Student(email=student.email, password=student.password, courses=normalize_courses(names))
        self.save_student(updated)
        return updated

    # Assignments

    def save_assignments(self, assignments: Iterable[Assignment]) -> None:
        for assignment in assignments:
            self.repository.insert_assignment(assignment)

    def get_assignments(self) -> List[Assignment]:
        return self.repository.get_assignments()

    def add_assignment(self, assignment: Assignment) -> None:
        self.repository.insert_assignment(assignment)

    def update_assignment(self, assignment: Assignment) -> None:
        self.repository.update_assignment(assignment)

    def delete_assignment(self, assignment_id: str) -> None:
        self.repository.delete_assignment(assignment_id)

    def toggle_assignment_completed(self, assignment: Assignment) -> Assignment:
        assignment.is_completed = not assignment.is_completed
        self.repository.update_assignment(assignment)
        return assignment

    # Sessions

    def save_sessions(self, sessions: Iterable[AcademicSession]) -> None:
        for session in sessions:
            self.repository.insert_session(session)

    def get_sessions(self) -> List[AcademicSession]:
        return self.repository.get_sessions()

    def add_session(self, session: AcademicSession) -> None:
        self.repository.insert_session(session)

    def update_session(self, session: AcademicSession) -> None:
        self.repository.update_session(session)

    def delete_session(self, session_id: str) -> None:
        self.repository.delete_session(session_id)

    def toggle_session_attendance(self, session: AcademicSession) -> AcademicSession:
        session.is_attended = not session.is_attended
        self.repository.update_session(session)
        return session

    # Derived views

    def calculate_attendance_percentage(self, sessions: Iterable[AcademicSession]) -> float:
        return calculate_attendance_percentage(sessions)

    def get_dashboard(self, now: Optional[datetime] = None, course: Optional[str] = None) -> DashboardSummary:
        now = now or datetime.now()
        assignments = self.get_assignments()
        sessions = self.get_sessions()
        percentage = calculate_attendance_percentage(sessions)
        return DashboardSummary(
            upcoming=upcoming_assignments(assignments, now, days=self.config.upcoming_days, course=course),
            today=today_sessions(sessions, now),
            pending_count=pending_assignments_count(assignments, course=course),
            attendance_percentage=percentage,
            attendance_status=attendance_status(
                percentage,
                good=self.config.attendance_good,
                warning=self.config.attendance_warning,
            ),
            academic_week=academic_week(now, start_month=self.config.academic_start_month),
        )

    def get_week_schedule(self, week_of: Optional[date] = None) -> Dict[date, List[AcademicSession]]:
        start = week_start(week_of or date.today())
        return group_sessions_by_day(self.get_sessions(), start)

    def clear_all_data(self) -> None:
        self.repository.clear_all_data()
