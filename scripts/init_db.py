from __future__ import annotations

import importlib

from dotenv import load_dotenv

from wagetrack.config import get_settings_module
from wagetrack.container import connect
from wagetrack.database.bootstrap import apply_schema, list_tables


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    conn = connect(dict(settings.DB_CONFIG))

    apply_schema(conn)
    tables = list_tables(conn)
    print(f"OK: Applied schema.sql -> {conn.config.describe()} (tables={len(tables)})")


if __name__ == "__main__":
    main()
