from typing import Any, Optional, Sequence

from pydantic_settings import BaseSettings, SettingsConfigDict

SUPABASE_URL_KEYS = ("SUPABASE_URL", "REACT_APP_SUPABASE_URL")
SUPABASE_ANON_KEY_KEYS = ("SUPABASE_ANON_KEY", "REACT_APP_SUPABASE_ANON_KEY")
SUPABASE_SERVICE_ROLE_KEY_KEYS = ("SUPABASE_SERVICE_ROLE_KEY", "SUPABASE_SERVICE_ROLE")


def _first_value(data: Any, keys: Sequence[str]) -> str:
    """Return the first non-empty attribute among ``keys``."""
    for key in keys:
        value = getattr(data, key, None)
        if value:
            return value
    return ""


class Settings(BaseSettings):
    SUPABASE_URL: Optional[str] = None
    REACT_APP_SUPABASE_URL: Optional[str] = None
    SUPABASE_ANON_KEY: Optional[str] = None
    REACT_APP_SUPABASE_ANON_KEY: Optional[str] = None
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = None
    SUPABASE_SERVICE_ROLE: Optional[str] = None
    SUPABASE_TIMEOUT_SECONDS: float = 10.0

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def supabase_url(self) -> str:
        return _first_value(self, SUPABASE_URL_KEYS)

    @property
    def supabase_anon_key(self) -> str:
        return _first_value(self, SUPABASE_ANON_KEY_KEYS)

    @property
    def supabase_service_role_key(self) -> str:
        return _first_value(self, SUPABASE_SERVICE_ROLE_KEY_KEYS)


settings = Settings()


def get_settings() -> Settings:
    return settings
