from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    api_prefix: str = "/api/v1"
    cors_allow_origins: List[str] = Field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    default_group_size: int = Field(5, ge=5, le=11)
    # Non-playing staff dropped from groups smaller than a full XI
    excluded_names: List[str] = Field(default_factory=lambda: ["Hendra", "Fadzri", "Adhitia Putra Herawan"])
    export_top_players: int = 5
    export_summary_rows: int = 3

    class Config:
        env_prefix = "SQUAD_"
        env_file = ".env"
        case_sensitive = False


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
