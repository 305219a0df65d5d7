from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """
    Connection settings for the diagnostic scripts.

    Kept apart from the API settings so neither side can stop the other from
    loading. DB_PORT stays a string and is validated by the driver on connect.
    """

    DATABASE_URL: Optional[str] = None
    NODE_ENV: Optional[str] = None
    DB_HOST: str = "localhost"
    DB_PORT: str = "5432"
    DB_NAME: str = "nova_accounting"
    DB_USER: str = "postgres"
    DB_PASSWORD: str = ""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
