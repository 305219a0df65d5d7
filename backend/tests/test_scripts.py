import asyncio
import runpy
from datetime import datetime
from pathlib import Path

import httpx
import psycopg
import pytest

from app.core.supabase import get_http_client

from conftest import make_settings

SCRIPTS_DIR = Path(__file__).resolve().parent.parent / "scripts"


@pytest.fixture
def clean_db_env(monkeypatch, tmp_path):
    """Run scripts without a .env file or inherited DB_* variables"""
    monkeypatch.chdir(tmp_path)
    for key in ("DATABASE_URL", "NODE_ENV", "DB_HOST", "DB_PORT", "DB_NAME", "DB_USER", "DB_PASSWORD"):
        monkeypatch.delenv(key, raising=False)


def _load_main(name: str):
    return runpy.run_path(str(SCRIPTS_DIR / f"{name}.py"), run_name=name)["main"]


def test_verify_postgres_script_exits_zero(clean_db_env, mock_db_connection):
    _, mock_cursor = mock_db_connection
    mock_cursor.fetchone.return_value = (datetime(2024, 5, 1), "PostgreSQL 16.2 on x86_64")
    mock_cursor.fetchall.return_value = []

    with pytest.raises(SystemExit) as exc:
        _load_main("verify_postgres")()
    assert exc.value.code == 0


@pytest.mark.parametrize("name", ["verify_postgres", "check_db", "verify_schema"])
def test_scripts_exit_one_when_database_unreachable(clean_db_env, mocker, name):
    mocker.patch(
        "app.db.session.psycopg.connect",
        side_effect=psycopg.OperationalError("connection refused"),
    )

    with pytest.raises(SystemExit) as exc:
        _load_main(name)()
    assert exc.value.code == 1


def test_check_db_script_exits_zero(clean_db_env, mock_db_connection):
    _, mock_cursor = mock_db_connection
    mock_cursor.fetchone.side_effect = [(0,), None]

    with pytest.raises(SystemExit) as exc:
        _load_main("check_db")()
    assert exc.value.code == 0


def test_verify_schema_script_uses_db_port_from_env(clean_db_env, monkeypatch, mock_db_connection):
    monkeypatch.setenv("DB_PORT", "6543")
    _, mock_cursor = mock_db_connection
    mock_cursor.fetchall.return_value = []

    with pytest.raises(SystemExit) as exc:
        _load_main("verify_schema")()
    assert exc.value.code == 0
    assert psycopg.connect.call_args.kwargs["port"] == "6543"


def test_http_client_uses_configured_timeout():
    async def run():
        clients = get_http_client(make_settings(SUPABASE_TIMEOUT_SECONDS=3.5))
        client = await clients.__anext__()
        try:
            assert client.timeout == httpx.Timeout(3.5)
        finally:
            await clients.aclose()
        assert client.is_closed

    asyncio.run(run())
