import os

# No default: startup fails when no signing secret is configured.
SECRET_KEY = os.getenv("SESSION_SECRET") or os.getenv("SECRET_KEY")

# No default: startup fails when the connection string is absent.
DATABASE_URL = os.getenv("DATABASE_URL")

STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "database")
SESSION_BACKEND = os.getenv("SESSION_BACKEND", "database")

API_PREFIX = os.getenv("API_PREFIX", "/api")
CORS_ORIGIN = os.getenv("CORS_ORIGIN", "*")

SESSION_DAYS = int(os.getenv("SESSION_DAYS", "7"))
# Cross-site cookie for a frontend served from another origin
SESSION_COOKIE_SECURE = True
SESSION_COOKIE_SAMESITE = "None"

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE") or None
LOG_JSON = bool(int(os.getenv("LOG_JSON", "1")))

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_ADMIN = bool(int(os.getenv("AUTO_SEED_ADMIN", "0")))
ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD")
