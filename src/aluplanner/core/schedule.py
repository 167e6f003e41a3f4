from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional

from aluplanner.models.entities import AcademicSession, Assignment

ALL_COURSES = "All Courses"
DAYS_IN_WEEK = 7


def _day_of(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def _matches_course(assignment: Assignment, course: Optional[str]) -> bool:
    return course in (None, ALL_COURSES) or assignment.course == course


def upcoming_assignments(
    assignments: Iterable[Assignment],
    now: datetime,
    days: int = 7,
    course: Optional[str] = None,
) -> List[Assignment]:
    """Incomplete assignments due strictly between ``now`` and ``now + days``, earliest first."""
    horizon = now + timedelta(days=days)
    upcoming = [
        a
        for a in assignments
        if not a.is_completed and now < a.due_date < horizon and _matches_course(a, course)
    ]
    upcoming.sort(key=lambda a: a.due_date)
    return upcoming


def pending_assignments_count(assignments: Iterable[Assignment], course: Optional[str] = None) -> int:
    return sum(1 for a in assignments if not a.is_completed and _matches_course(a, course))


def today_sessions(sessions: Iterable[AcademicSession], now: datetime) -> List[AcademicSession]:
    today = now.date()
    return sorted(
        (s for s in sessions if s.date.date() == today),
        key=lambda s: s.start_time,
    )


def week_start(day: date | datetime) -> date:
    """Monday of the week containing ``day``."""
    day = _day_of(day)
    return day - timedelta(days=day.weekday())


def sessions_for_week(sessions: Iterable[AcademicSession], start: date | datetime) -> List[AcademicSession]:
    first = _day_of(start)
    last = first + timedelta(days=DAYS_IN_WEEK - 1)
    return [s for s in sessions if first <= s.date.date() <= last]


def group_sessions_by_day(
    sessions: Iterable[AcademicSession], start: date | datetime
) -> Dict[date, List[AcademicSession]]:
    """
    Bucket a week's sessions by calendar day.
    All seven days are present, empty ones included, in calendar order.
    Each day's sessions are sorted by start time.
    """
    first = _day_of(start)
    grouped: Dict[date, List[AcademicSession]] = {
        first + timedelta(days=offset): [] for offset in range(DAYS_IN_WEEK)
    }
    for session in sessions_for_week(sessions, first):
        grouped[session.date.date()].append(session)
    for day_sessions in grouped.values():
        day_sessions.sort(key=lambda s: s.start_time)
    return grouped


def academic_week(now: datetime, start_month: int = 9) -> str:
    year = now.year if now.month >= start_month else now.year - 1
    year_start = now.replace(year=year, month=start_month, day=1, hour=0, minute=0, second=0, microsecond=0)
    week_number = (now - year_start).days // 7 + 1
    return f"Week {week_number}"
