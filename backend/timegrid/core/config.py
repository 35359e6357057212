from functools import lru_cache
import json
from pathlib import Path

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from timegrid.models.slot import TIME_PATTERN, DayWindow


BACKEND_ENV_FILE = Path(__file__).resolve().parents[2] / ".env"


class Settings(BaseSettings):
    # Resolve to backend/.env so `uvicorn --app-dir backend` works from any cwd.
    model_config = SettingsConfigDict(
        env_file=str(BACKEND_ENV_FILE),
        env_file_encoding="utf-8",
        env_prefix="TIMEGRID_",
    )

    project_name: str = "timegrid"
    api_prefix: str = "/api"
    log_level: str = "INFO"

    day_window_start: str = "07:00"
    day_window_end: str = "19:00"
    day_column_height_px: int = 1920
    grid_step_minutes: int = 15
    compact_slot_height_px: int = 64
    ultra_short_minutes: int = 15

    max_slots_per_request: int = 2000

    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    @field_validator("day_window_start", "day_window_end")
    @classmethod
    def validate_window_time(cls, value: str) -> str:
        value = value.strip()
        if not TIME_PATTERN.match(value):
            raise ValueError("Time must be in HH:MM 24-hour format")
        return value

    @field_validator("grid_step_minutes", "ultra_short_minutes", "max_slots_per_request")
    @classmethod
    def validate_positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError("Value must be at least 1")
        return value

    @model_validator(mode="after")
    def validate_window_order(self) -> "Settings":
        if self.day_window_end <= self.day_window_start:
            raise ValueError("day_window_end must be after day_window_start")
        return self

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_cors_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            stripped = value.strip()
            if stripped.startswith("["):
                try:
                    parsed = json.loads(stripped)
                    if isinstance(parsed, list):
                        return [str(item).strip() for item in parsed if str(item).strip()]
                except json.JSONDecodeError:
                    pass
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    def default_window(self) -> DayWindow:
        return DayWindow.from_times(self.day_window_start, self.day_window_end)


@lru_cache
def get_settings() -> Settings:
    return Settings()
