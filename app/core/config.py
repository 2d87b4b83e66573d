# app/core/config.py

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Values come from the process environment (docker compose / systemd unit).
    model_config = SettingsConfigDict(extra="ignore")

    # The environment mode: 'local' or 'prod'
    ENV: str = "local"

    # --- Database URLs ---
    DATABASE_URL_PROD: str = "postgresql://postgres:postgres@db:5432/room_reservation"
    DATABASE_URL_LOCAL: str = "sqlite:///./room_reservation.db"

    # --- Auth ---
    JWT_SECRET: str = "change-me"
    JWT_ALGORITHM: str = "HS256"

    # --- Background jobs / request limits ---
    SCHEDULER_ENABLED: bool = True
    RATE_LIMIT_ENABLED: bool = True

    # Ban lift dates are reported to users in campus local time.
    BAN_DISPLAY_TIMEZONE: str = "Asia/Seoul"

    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    # --- Dynamic Properties ---
    @property
    def DATABASE_URL(self) -> str:
        return (
            self.DATABASE_URL_LOCAL if self.ENV == "local" else self.DATABASE_URL_PROD
        )


# Create a single instance of the settings
settings = Settings()
