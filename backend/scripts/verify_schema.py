import os
import sys

sys.path.append(os.path.join(os.path.dirname(__file__), ".."))
from app.db.config import DatabaseSettings  # noqa: E402
from app.db.diagnostics import verify_schema  # noqa: E402


def main() -> None:
    sys.exit(verify_schema(DatabaseSettings()))


if __name__ == "__main__":
    main()
