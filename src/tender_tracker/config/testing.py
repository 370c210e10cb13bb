import os

SECRET_KEY = "test-secret"

DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite://")

STORAGE_BACKEND = "memory"
SESSION_BACKEND = "memory"

API_PREFIX = "/api"
CORS_ORIGIN = "*"

SESSION_DAYS = 7
SESSION_COOKIE_SECURE = False
SESSION_COOKIE_SAMESITE = "Lax"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
LOG_FILE = None
LOG_JSON = False

AUTO_INIT_DB = True
AUTO_SEED_ADMIN = False
ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin-password"
