import os
import sys

sys.path.append(os.path.join(os.path.dirname(__file__), ".."))
from app.db.config import DatabaseSettings  # noqa: E402
from app.db.diagnostics import verify_postgres  # noqa: E402


def main() -> None:
    sys.exit(verify_postgres(DatabaseSettings()))


if __name__ == "__main__":
    main()
