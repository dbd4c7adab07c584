from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="GYMJOURNAL_",
        case_sensitive=False,
    )

    # App
    env: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    db_url: str = "sqlite+aiosqlite:///./gymjournal.db"

    # Auth gateway: the user id arrives already validated in this header
    user_id_header: str = "X-User-Id"

    # Query windows
    snapshot_window: int = 300
    metric_history_days: int = 90
    exercise_history_limit: int = 300

    # Hydration
    water_daily_goal_ml: int = 2500


def get_settings() -> Settings:
    return Settings()
