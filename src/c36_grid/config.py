"""Runtime configuration for the C-36 grid generator."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven runtime settings."""

    model_config = SettingsConfigDict(env_prefix="C36_GRID_", env_file=".env", extra="ignore")

    app_name: str = "c36-grid"
    log_level: str = "INFO"
    default_profile: str = Field(
        default="ancient",
        description="Built-in design profile used by the CLI when no profile file is given.",
    )
    report_log_path: str | None = Field(
        default=None,
        description="JSONL file where scan reports are appended; in-memory only when unset.",
    )
    scan_queue_size: int = 1_000
    telemetry_enabled: bool = True


settings = Settings()
