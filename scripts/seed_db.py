from __future__ import annotations

from tender_tracker.database.bootstrap import ensure_admin_user, init_schema
from tender_tracker.main import create_app


def main() -> None:
    app = create_app({"STORAGE_BACKEND": "database", "AUTO_INIT_DB": False, "AUTO_SEED_ADMIN": False})
    container = app.extensions["tender_tracker"]

    with app.app_context():
        init_schema()
        created = ensure_admin_user(
            container.users_repo,
            username=app.config.get("ADMIN_USERNAME", "admin"),
            password=app.config.get("ADMIN_PASSWORD"),
        )

    if created:
        print(f"OK: Seeded admin account {app.config.get('ADMIN_USERNAME')!r}")
    else:
        print("OK: Users already exist (or ADMIN_PASSWORD unset), nothing to seed")


if __name__ == "__main__":
    main()
