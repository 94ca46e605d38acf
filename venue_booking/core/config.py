from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    # All booking timestamps are normalised to this zone (UTC+8).
    BOOKING_TIMEZONE: str = "Asia/Manila"
    BASE_DURATION_HOURS: int = 4
    MAX_ADDITIONAL_HOURS: int = 10
    MIN_LEAD_DAYS: int = 7

    MAX_DISHES: int = 5
    APPROVAL_CONFLICT_POLICY: str = "block"  # "block" | "warn"


settings = Settings()
