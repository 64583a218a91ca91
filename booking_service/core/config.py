from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"
    BUSINESS_TIMEZONE: str = "America/Edmonton"

    # Unset: JSON file store under ENV=dev/local, in-memory store otherwise.
    STORE_PROVIDER: str | None = None
    STORE_DATA_FILE: str = "./data/bookings.json"
    REDIS_URL: str | None = None
    BOOKINGS_KEY: str = "callsal:bookings"

    ADMIN_SECRET: str | None = None
    TRUST_IDENTITY_HEADERS: bool = False
    CLIENT_CANCEL_ENABLED: bool = True

    NOTIFY_WEBHOOK_URL: str | None = None
    NOTIFY_TIMEOUT_SECONDS: float = 10.0

    AVAILABILITY_HORIZON_DAYS: int = 14
    AVAILABILITY_MAX_HORIZON_DAYS: int = 90

    ALLOWED_ORIGINS: list[str] = [
        "https://callsal.app",
        "https://www.callsal.app",
        "https://crm.callsal.app",
        "http://localhost:3000",
        "http://localhost:5173",
    ]


settings = Settings()
