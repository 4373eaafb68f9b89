import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "path": os.getenv("DB_PATH", ":memory:"),
    "timeout": 1.0,
}

DEBUG = False
TESTING = True

REQUEST_TIMEOUT_SECONDS = 0

CSRF_ENABLED = True

AUTO_SEED_DB = False
