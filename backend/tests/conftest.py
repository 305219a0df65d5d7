from typing import Callable, Dict, List, Optional
from unittest.mock import MagicMock

import httpx
import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings, get_settings
from app.core.supabase import get_http_client
from app.db.config import DatabaseSettings
from app.main import app

SUPABASE_URL = "https://project.supabase.co"


def make_settings(**overrides) -> Settings:
    values = {
        "SUPABASE_URL": SUPABASE_URL,
        "REACT_APP_SUPABASE_URL": None,
        "SUPABASE_ANON_KEY": "anon-key",
        "REACT_APP_SUPABASE_ANON_KEY": None,
        "SUPABASE_SERVICE_ROLE_KEY": "service-key",
        "SUPABASE_SERVICE_ROLE": None,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_db_settings(**overrides) -> DatabaseSettings:
    values = {
        "DATABASE_URL": None,
        "NODE_ENV": None,
        "DB_HOST": "localhost",
        "DB_PORT": "5432",
        "DB_NAME": "nova_accounting",
        "DB_USER": "postgres",
        "DB_PASSWORD": "",
    }
    values.update(overrides)
    return DatabaseSettings(_env_file=None, **values)


class FakeSupabase:
    """
    Routes requests by path to canned responses and records every call.

    ``routes`` maps a path such as ``/rest/v1/users`` to a callable taking the
    request and returning an ``httpx.Response``.
    """

    def __init__(self):
        self.routes: Dict[str, Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: List[httpx.Request] = []

    def on(self, path: str, status_code: int = 200, json=None, text: Optional[str] = None):
        def handler(request: httpx.Request) -> httpx.Response:
            if text is not None:
                return httpx.Response(status_code, text=text)
            return httpx.Response(status_code, json=json)

        self.routes[path] = handler

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get(request.url.path)
        if handler is None:
            return httpx.Response(404, json={"message": "not found"})
        return handler(request)

    def calls(self, path: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path == path]


@pytest.fixture
def supabase():
    return FakeSupabase()


@pytest.fixture
def api_settings():
    return make_settings()


@pytest.fixture
def client(supabase, api_settings):
    async def _http_client():
        async with httpx.AsyncClient(transport=httpx.MockTransport(supabase.handle)) as http:
            yield http

    app.dependency_overrides[get_settings] = lambda: api_settings
    app.dependency_overrides[get_http_client] = _http_client
    try:
        yield TestClient(app, raise_server_exceptions=False)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def mock_db_connection(mocker):
    """
    Mock psycopg.connect as used by app.db.session.
    Usage:
        def test_something(mock_db_connection):
            mock_conn, mock_cursor = mock_db_connection
            mock_cursor.fetchone.return_value = (...)
    """
    mock_conn = MagicMock()
    mock_cursor = MagicMock()

    mock_conn.cursor.return_value = mock_cursor
    mock_cursor.__enter__.return_value = mock_cursor
    mock_cursor.__exit__.return_value = None

    mocker.patch("app.db.session.psycopg.connect", return_value=mock_conn)
    return mock_conn, mock_cursor
