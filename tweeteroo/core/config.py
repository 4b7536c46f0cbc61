import os
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _split_csv(val: str | None) -> list[str]:
    return [v.strip() for v in (val or "").split(",") if v.strip()]


class Settings(BaseSettings):
    # App
    APP_NAME: str = "Tweeteroo Backend"
    ENV: str = os.getenv("ENV", "production")
    LOG_LEVEL: str = "INFO"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = Field(default=5000, ge=1, le=65535)

    # CORS (everything open unless ALLOWED_ORIGINS is set)
    ALLOW_ORIGINS: list[str] = Field(default_factory=list)  # override via ALLOWED_ORIGINS (CSV)
    ALLOW_METHODS: list[str] = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    ALLOW_HEADERS: list[str] = ["*"]
    ALLOW_CREDENTIALS: bool = False

    # DB
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./tweeteroo.db")

    # Load .env file
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


def build_settings() -> Settings:
    s = Settings()

    # SQLAlchemy only knows the "postgresql" dialect name
    if s.DATABASE_URL.startswith("postgres://"):
        s.DATABASE_URL = s.DATABASE_URL.replace("postgres://", "postgresql://", 1)

    # Load CORS overrides
    env_origins = _split_csv(os.getenv("ALLOWED_ORIGINS"))
    if env_origins:
        s.ALLOW_ORIGINS = env_origins
    elif not s.ALLOW_ORIGINS:
        s.ALLOW_ORIGINS = ["*"]

    s.LOG_LEVEL = s.LOG_LEVEL.upper()
    return s


settings = build_settings()
