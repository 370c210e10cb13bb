from __future__ import annotations

from tender_tracker.database.bootstrap import init_schema, list_tables
from tender_tracker.main import create_app


def main() -> None:
    app = create_app({"STORAGE_BACKEND": "database", "AUTO_INIT_DB": False, "AUTO_SEED_ADMIN": False})
    with app.app_context():
        init_schema()
        tables = list_tables()
    print(f"OK: Created schema -> {app.config['SQLALCHEMY_DATABASE_URI']} (tables={len(tables)})")


if __name__ == "__main__":
    main()
