from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional

import psycopg

from app.db.config import DatabaseSettings


@dataclass(frozen=True)
class ConnectionConfig:
    conninfo: Optional[str] = None
    host: Optional[str] = None
    port: Optional[str] = None
    dbname: Optional[str] = None
    user: Optional[str] = None
    password: Optional[str] = None
    sslmode: str = "disable"

    @property
    def uses_connection_string(self) -> bool:
        return bool(self.conninfo)

    def connect_kwargs(self) -> Dict[str, Any]:
        if self.conninfo:
            return {"conninfo": self.conninfo, "sslmode": self.sslmode}
        return {
            "host": self.host,
            "port": self.port,
            "dbname": self.dbname,
            "user": self.user,
            "password": self.password,
            "sslmode": self.sslmode,
        }


def build_connection_config(settings: DatabaseSettings) -> ConnectionConfig:
    """
    Prefer DATABASE_URL; otherwise assemble the DB_* fields.

    SSL is only requested for a connection string in production. The server
    certificate is not verified.
    """
    if settings.DATABASE_URL:
        production = settings.NODE_ENV == "production"
        return ConnectionConfig(
            conninfo=settings.DATABASE_URL,
            sslmode="require" if production else "disable",
        )

    return ConnectionConfig(
        host=settings.DB_HOST,
        port=settings.DB_PORT,
        dbname=settings.DB_NAME,
        user=settings.DB_USER,
        password=settings.DB_PASSWORD,
    )


@contextmanager
def get_db_connection(config: ConnectionConfig) -> Iterator[psycopg.Connection]:
    conn = psycopg.connect(**config.connect_kwargs())
    try:
        yield conn
    finally:
        conn.close()
