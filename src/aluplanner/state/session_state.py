from dataclasses import dataclass
from typing import Optional


@dataclass
class SessionState:
    email: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.email)

    def clear(self) -> None:
        self.email = None
