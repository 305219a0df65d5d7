import os
import sys

sys.path.append(os.path.join(os.path.dirname(__file__), ".."))
from app.db.config import DatabaseSettings  # noqa: E402
from app.db.diagnostics import check_db  # noqa: E402


def main() -> None:
    sys.exit(check_db(DatabaseSettings()))


if __name__ == "__main__":
    main()
