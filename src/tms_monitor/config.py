"""Application configuration and settings management."""

from typing import Any

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="TMS_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "TMS Monitor API"
    api_prefix: str = "/api"
    source_url: str = Field(
        default=(
            "https://script.google.com/macros/s/"
            "AKfycbxQqlOy1VSgUY1X_NbWL8Wkn0KZ5if3uxy9oA_IEGUdwAMx4OhJ0bNHVmR-6aMcdNEPPw/exec"
        ),
        description="JSON endpoint returning delivery items and filter options.",
    )
    source_timeout_seconds: float = Field(default=15.0, gt=0.0)
    source_max_retries: int = Field(default=1, ge=0)
    source_backoff_seconds: float = Field(default=1.0, ge=0.0)
    refresh_interval_seconds: float = Field(
        default=50.0,
        gt=0.0,
        description="Background refresh cadence. Lower means fresher data and more load on the source.",
    )
    page_size: int = Field(default=10, ge=1)
    page_window_size: int = Field(default=5, ge=1)
    delivered_status: str = "ส่งแล้ว"
    cancelled_status: str = "ยกเลิก"
    connectivity_error_message: str = "ไม่สามารถเชื่อมต่อข้อมูลได้"
    display_utc_offset_hours: float = Field(
        default=7.0,
        ge=-14.0,
        le=14.0,
        description="UTC offset used to turn machine timestamps into calendar dates and sync labels.",
    )
    autostart_polling: bool = Field(
        default=True,
        description="Start the initial fetch and background refresh when the API boots.",
    )
    log_level: str = "info"
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
