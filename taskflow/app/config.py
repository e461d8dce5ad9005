from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Page heading and OpenAPI title
    app_title: str = Field("TaskFlow")

    # Task store backend: "memory" (default, resets on restart) or "sql"
    task_store_backend: str = Field("memory")
    database_url: str = Field("sqlite:///./taskflow.db")

    # Multiplier on the simulated store latency; 0 disables the delay
    store_latency_scale: float = Field(1.0, ge=0)

    # Load the three demo tasks into an empty store
    seed_demo_tasks: bool = Field(True)

    # UI language settings
    ui_lang: str = Field("en")

    # Extra origins allowed to call the JSON API (JSON list in env)
    cors_allow_origins: List[str] = Field(default_factory=list)


@lru_cache()
def get_settings() -> Settings:
    return Settings()
