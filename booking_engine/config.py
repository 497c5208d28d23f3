from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./bookings.db"

    LOG_LEVEL: str = "INFO"

    # How far ahead /blocked-dates looks for bookings
    BLOCKED_DATES_HORIZON_DAYS: int = 365

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
