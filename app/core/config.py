# app/core/config.py
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - SUPABASE_URL
      - SUPABASE_KEY (anon key)
      - SUPABASE_JWT_SECRET (JWT signing secret from Supabase project settings)

    Optional:
      - SUPABASE_SERVICE_ROLE_KEY (admin Supabase client, used for all writes)
      - SESSION_SECRET (signs the admin session cookie; defaults to the JWT secret)
    """

    PROJECT_NAME: str = "Pub Site API"
    API_PREFIX: str = "/api"

    # Supabase config
    SUPABASE_URL: str
    SUPABASE_KEY: str

    # Identity token verification (backend-side)
    SUPABASE_JWT_SECRET: str
    SUPABASE_JWT_ALG: str = "HS256"

    # Service role key bypasses RLS (backend only)
    SUPABASE_SERVICE_ROLE_KEY: str | None = None

    # Admin session cookie
    SESSION_SECRET: str | None = None
    SESSION_COOKIE_NAME: str = "__session"
    SESSION_MAX_AGE_DAYS: int = 5
    SESSION_COOKIE_SECURE: bool = True
    LOGIN_PATH: str = "/admin/login"

    # Storage bucket holding uploaded images
    STORAGE_BUCKET: str = "assets"

    # Role given to a user record created on first sign-in.
    # Admins are promoted explicitly.
    DEFAULT_USER_ROLE: Literal["user", "admin"] = "user"

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def session_secret(self) -> str:
        return self.SESSION_SECRET or self.SUPABASE_JWT_SECRET

    @property
    def session_max_age_seconds(self) -> int:
        return self.SESSION_MAX_AGE_DAYS * 24 * 60 * 60


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
