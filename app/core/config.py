# app/core/config.py

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    ENV: str = "development"
    DEBUG: bool = False

    # Database
    DATABASE_URL: str

    # Frontend
    CORS_ORIGINS: list[str] = [
        "http://127.0.0.1:3000",
        "http://localhost:3000",
    ]

    # Listings
    SALES_HISTORY_LIMIT: int = 50
    TOP_ITEMS_LIMIT: int = 10

    # Rate limits
    CHECKOUT_RATE_LIMIT: str = "30/minute"
    EXPORT_RATE_LIMIT: str = "10/minute"

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="forbid",
    )


settings = Settings()
