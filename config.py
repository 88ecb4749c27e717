"""
Application configuration using Pydantic Settings.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./video_linter.db"

    # Redis
    REDIS_URL: str = "redis://localhost:6379"

    # API
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Gemini
    GEMINI_API_KEY: str = ""
    LLM_MODEL: str = "gemini-2.5-flash"

    # Linting
    LINT_TEMPERATURE: float = 0.2
    LINT_MAX_OUTPUT_TOKENS: int = 4096
    LINT_TIMEOUT_SECONDS: float = 120.0
    ANALYZER_POLL_INTERVAL_SECONDS: float = 1.0
    ANALYZER_POLL_MAX_ATTEMPTS: int = 60
    LINT_SCORE_WEIGHTING: str = "mean"  # mean, format
    LINT_CACHE_TTL_SECONDS: int = 0
    LINT_RATE_LIMIT_PER_MINUTE: int = 10

    # Security
    JWT_SECRET: str = "change_me_in_production"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRATION_HOURS: int = 24
    AUTO_CREATE_DB_SCHEMA: bool = True

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)


settings = Settings()


def has_gemini_api_key() -> bool:
    """Return True when a usable (non-placeholder) Gemini key is configured."""
    api_key = (settings.GEMINI_API_KEY or "").strip()
    return bool(api_key) and "your_" not in api_key and api_key != "test-key"


def validate_security_settings() -> None:
    """Fail fast when insecure default secrets are still configured."""
    insecure_values = {
        "",
        "change_me_in_production",
        "your_jwt_secret_change_in_production",
    }
    jwt_secret = (settings.JWT_SECRET or "").strip()

    if jwt_secret in insecure_values or len(jwt_secret) < 24:
        raise ValueError("JWT_SECRET is insecure. Configure a strong non-default secret (>=24 chars).")
