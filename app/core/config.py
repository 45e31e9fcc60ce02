from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve .env from the project root so it loads regardless of cwd
_BACKEND_ROOT = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = _BACKEND_ROOT / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=(str(_ENV_FILE), ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str
    database_ssl: bool = True  # only applied to asyncpg connections
    create_tables_on_startup: bool = True

    # JWT
    secret_key: str
    access_token_expire_minutes: int = 60 * 24
    algorithm: str = "HS256"
    bcrypt_rounds: int = 12

    # HTTP
    cors_origins: str = "http://localhost:3000"
    api_prefix: str = "/api"

    # Google Calendar (service account). Leave email or key empty to disable sync.
    google_service_account_email: str = ""
    google_private_key: str = ""
    google_calendar_id: str = "primary"
    google_calendar_timeout_seconds: float = 10.0

    # Initial admin, created on startup when both are set
    seed_admin_email: str = ""
    seed_admin_password: str = ""

    # Env
    env: str = "development"

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def calendar_enabled(self) -> bool:
        return bool(self.google_service_account_email and self.google_private_key)


@lru_cache()
def get_settings() -> Settings:
    """Settings loaded from the environment and .env, cached per process."""
    return Settings()
