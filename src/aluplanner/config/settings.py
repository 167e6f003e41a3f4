from dataclasses import dataclass
import os
from pathlib import Path
from dotenv import load_dotenv


load_dotenv()


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name, "").strip()
    return int(value) if value else default


@dataclass(frozen=True)
class Settings:
    data_dir: str = os.getenv("ALUPLANNER_DATA_DIR", "data")
    store_file: str = os.getenv("ALUPLANNER_STORE_FILE", "aluplanner.json")
    log_level: str = os.getenv("ALUPLANNER_LOG_LEVEL", "INFO").upper()

    web_mode: bool = os.getenv("ALUPLANNER_WEB", "0") == "1"
    port: int = _env_int("PORT", 8550)

    upcoming_days: int = _env_int("ALUPLANNER_UPCOMING_DAYS", 7)
    attendance_good: int = _env_int("ALUPLANNER_ATTENDANCE_GOOD", 75)
    attendance_warning: int = _env_int("ALUPLANNER_ATTENDANCE_WARNING", 60)
    academic_start_month: int = _env_int("ALUPLANNER_ACADEMIC_START_MONTH", 9)

    @property
    def store_path(self) -> Path:
        return Path(self.data_dir) / self.store_file


settings = Settings()
