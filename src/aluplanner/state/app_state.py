from dataclasses import dataclass, field
from typing import Optional

from aluplanner.services.planner_service import PlannerService
from aluplanner.state.session_state import SessionState


@dataclass
class AppState:
    session: SessionState = field(default_factory=SessionState)
    planner: Optional[PlannerService] = None
