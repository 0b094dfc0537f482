from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    # ─────────── APP ───────────
    app_name: str = "NagarConnect"
    environment: str = "dev"
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:5173,http://localhost:3000"
    request_id_header: str = "X-Request-Id"

    # ─────────── DATA PLATFORM ───────────
    database_url: str
    sql_echo: bool = False

    # ─────────── JWT / AUTH ───────────
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    jwt_access_token_minutes: int = 1440  # 24 hours
    admin_emails: str = ""

    # ─────────── MAP ───────────
    mapbox_public_token: Optional[str] = None

    # ─────────── EMAIL ───────────
    resend_api_key: Optional[str] = None
    email_from: str = "NagarConnect <onboarding@resend.dev>"
    notification_function_url: Optional[str] = None

    # ─────────── STORAGE ───────────
    storage_dir: str = "uploads"
    public_base_url: str = "http://localhost:8000"

    # ─────────── REALTIME ───────────
    realtime_poll_seconds: float = 30.0
    realtime_debounce_seconds: float = 0.25

    @property
    def admin_email_list(self) -> List[str]:
        return [e.strip().lower() for e in self.admin_emails.split(",") if e.strip()]

    @property
    def cors_origin_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
