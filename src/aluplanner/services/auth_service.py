from dataclasses import dataclass
from typing import Optional

from aluplanner.models.entities import Student
from aluplanner.services.planner_service import PlannerService
from aluplanner.state.session_state import SessionState


class AuthServiceError(Exception):
    pass


@dataclass
class AuthResult:
    email: str
    student: Student


class LocalAuthService:
    """Checks credentials against the single student stored on this device."""

    NO_ACCOUNT = "NO_ACCOUNT"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"

    def __init__(self, planner: PlannerService, session: Optional[SessionState] = None) -> None:
        self.planner = planner
        self.session = session

    def sign_up(self, email: str, password: str) -> AuthResult:
        student = Student.with_default_courses(email=email.strip(), password=password)
        self.planner.save_student(student)
        return AuthResult(email=student.email, student=student)

    def sign_in(self, email: str, password: str) -> AuthResult:
        student = self.planner.get_student()
        if student is None:
            raise AuthServiceError(self.NO_ACCOUNT)
        if student.email != email.strip() or student.password != password:
            raise AuthServiceError(self.INVALID_CREDENTIALS)
        if self.session is not None:
            self.session.email = student.email
        return AuthResult(email=student.email, student=student)

    def sign_out(self) -> None:
        if self.session is not None:
            self.session.clear()
