import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    default_algorithm: str = Field("balanced", alias="VLT_DEFAULT_ALGORITHM")
    algorithm_mode: bool = Field(True, alias="VLT_ALGORITHM_MODE")
    default_list_id: str = Field("default", alias="VLT_DEFAULT_LIST_ID")
    default_timer_duration: int = Field(60, alias="VLT_DEFAULT_TIMER_DURATION", ge=0)
    store_path: Optional[Path] = Field(None, alias="VLT_STORE_PATH")
    weekly_goal: int = Field(5, alias="VLT_WEEKLY_GOAL", ge=1)

    class Config:
        env_file = os.getenv("ENV_FILE", ".env")
        env_file_encoding = "utf-8"
        case_sensitive = True


@lru_cache
def get_settings() -> Settings:
    try:
        return Settings()  # type: ignore[arg-type]
    except ValidationError as exc:
        raise RuntimeError(f"Invalid trainer configuration: {exc}") from exc
