from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATABASE_URL: str
    # Hosted Postgres (e.g. Supabase) needs "require"
    DATABASE_SSLMODE: str | None = None
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10

    SECRET_KEY: str = "dev-insecure-key-change-in-production"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    CORS_ORIGINS: list[str] = ["http://localhost:5173"]

    # Login throttling, per client IP
    LOGIN_RATE_LIMIT: int = 5
    LOGIN_RATE_WINDOW_SECONDS: int = 60

    # Calendar-day boundaries for daily reports and dashboard "today" figures
    REPORT_TIMEZONE: str = "UTC"

    LOG_LEVEL: str = "INFO"

    # Display only; used by PDF exports
    CURRENCY_LABEL: str = "Rs."


settings = Settings()  # type: ignore[call-arg]
