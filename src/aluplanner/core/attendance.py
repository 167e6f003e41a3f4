from __future__ import annotations

from typing import Iterable

from aluplanner.models.entities import AcademicSession

GOOD = "good"
WARNING = "warning"
CRITICAL = "critical"


def calculate_attendance_percentage(sessions: Iterable[AcademicSession]) -> float:
    """
    Share of sessions marked attended, 0-100.
    Past and future sessions both count; no sessions gives 0.0.
    """
    total = 0
    attended = 0
    for session in sessions:
        total += 1
        if session.is_attended:
            attended += 1
    if total == 0:
        return 0.0
    return (attended / total) * 100


def attendance_status(percentage: float, good: float = 75, warning: float = 60) -> str:
    if percentage >= good:
        return GOOD
    if percentage >= warning:
        return WARNING
    return CRITICAL
