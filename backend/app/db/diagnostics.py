"""
Operator diagnostics for the PostgreSQL database.

Each entry point opens a single connection, prints a human-readable report
and returns the process exit status (0 on success, 1 on failure).
"""
import sys
from typing import List

from app.db.config import DatabaseSettings
from app.db.session import ConnectionConfig, build_connection_config, get_db_connection

FROM_URL = "from DATABASE_URL"

REQUIRED_EMPLOYEE_COLUMNS = [
    "id",
    "name",
    "phone",
    "email",
    "address",
    "receives_transportation",
    "salary",
    "emergency_contact_name",
    "emergency_contact_number",
    "emergency_contact_relation",
    "id_document_path",
    "notes",
    "created_at",
]


def _print_config(config: ConnectionConfig) -> None:
    print("Configuration:")
    print(f"  Host: {config.host or FROM_URL}")
    print(f"  Port: {config.port or FROM_URL}")
    print(f"  Database: {config.dbname or FROM_URL}")
    print(f"  User: {config.user or FROM_URL}")
    print(f"  SSL: {config.sslmode}")
    print("")


def _troubleshooting(settings: DatabaseSettings) -> List[str]:
    return [
        "1. Make sure PostgreSQL is running: pg_isready",
        "2. Check your .env file has correct credentials",
        f"3. Verify database exists: psql -l | grep {settings.DB_NAME}",
        f"4. Check PostgreSQL is listening: lsof -i :{settings.DB_PORT}",
    ]


def short_version(pg_version: str) -> str:
    return " ".join(pg_version.split()[:2])


def verify_postgres(settings: DatabaseSettings) -> int:
    config = build_connection_config(settings)

    print("Testing PostgreSQL connection...\n")
    _print_config(config)

    try:
        with get_db_connection(config) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT NOW() AS current_time, version() AS pg_version")
                current_time, pg_version = cur.fetchone()
                print("Successfully connected to PostgreSQL!")
                print(f"  Current time: {current_time}")
                print(f"  PostgreSQL version: {short_version(pg_version)}")
                print("")

                cur.execute(
                    """
                    SELECT table_name
                    FROM information_schema.tables
                    WHERE table_schema = 'public'
                    ORDER BY table_name
                    """
                )
                tables = [row[0] for row in cur.fetchall()]
    except Exception as exc:
        print("Connection failed!", file=sys.stderr)
        print("", file=sys.stderr)
        print(f"Error: {exc}", file=sys.stderr)
        print("", file=sys.stderr)
        print("Troubleshooting:", file=sys.stderr)
        for line in _troubleshooting(settings):
            print(line, file=sys.stderr)
        return 1

    if tables:
        print(f"Found {len(tables)} tables:")
        for table in tables:
            print(f"   - {table}")
    else:
        print("WARNING: No tables found. Start the server once to initialize the database.")
    print("")
    print("PostgreSQL setup is working correctly!")
    return 0


def check_db(settings: DatabaseSettings) -> int:
    config = build_connection_config(settings)
    print("Checking database...\n")

    try:
        with get_db_connection(config) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT COUNT(*) FROM users")
                (count,) = cur.fetchone()
                print(f"Total users in database: {count}")

                cur.execute(
                    """
                    SELECT username, email, role, created_at
                    FROM users
                    WHERE username = %s
                    """,
                    ("admin",),
                )
                admin = cur.fetchone()
    except Exception as exc:
        print(f"Error checking users table: {exc}", file=sys.stderr)
        return 1

    if admin:
        username, email, role, created_at = admin
        print("Admin user exists:")
        print(f"  - Username: {username}")
        print(f"  - Email: {email}")
        print(f"  - Role: {role}")
        print(f"  - Created: {created_at}")
    else:
        print("Admin user does NOT exist!")
        print("  The database may not be initialized properly.")
        print("  Try restarting the server to initialize the database.")
    return 0


def verify_schema(settings: DatabaseSettings) -> int:
    config = build_connection_config(settings)
    print("Verifying database schema...\n")

    try:
        with get_db_connection(config) as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    SELECT column_name
                    FROM information_schema.columns
                    WHERE table_schema = 'public' AND table_name = %s
                    ORDER BY ordinal_position
                    """,
                    ("employees",),
                )
                columns = [row[0] for row in cur.fetchall()]
    except Exception as exc:
        print(f"Error checking employees table: {exc}", file=sys.stderr)
        return 1

    print("Employees table columns:")
    print(", ".join(columns))

    print("\nChecking for required columns:")
    missing = [col for col in REQUIRED_EMPLOYEE_COLUMNS if col not in columns]
    if missing:
        print(f"Missing columns: {', '.join(missing)}")
        print("\nTo fix: Restart the server to run migrations, or manually add the columns.")
    else:
        print("All required columns exist")
    return 0
