from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # DATABASE_URL: SQLAlchemy URL of the Supabase Postgres database.
    #   Optional at import time so the app can start for health checks;
    #   the first session request fails with ConfigurationError when it is absent.
    database_url: str | None = None
    project_name: str = "Gourmet Ranking API"
    api_v1_prefix: str = "/api/v1"

    # SUPABASE_URL: Full Supabase project URL (e.g., https://xxx.supabase.co)
    #   Only reported by /health; the database itself is reached through DATABASE_URL
    supabase_url: str | None = None

    # Owner key of the full-course rows. There is a single owner today.
    full_course_owner_key: str = "default"

    log_level: str = "INFO"

    # Debug flag; also turns on SQL echo
    debug: bool = Field(default=False, alias="DEBUG")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="forbid",
    )


settings = Settings()
