from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Rule defaults (used when a staff member has no preference set)
    DEFAULT_MIN_REST_HOURS: float = 10
    DEFAULT_MAX_CONSECUTIVE_DAYS: int = 5
    DEFAULT_MAX_HOURS_PER_WEEK: float = 38

    # Budget tracking
    NEAR_BUDGET_PERCENT: float = 90
    PERCENT_USED_CAP: float = 150

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
