import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "path": os.getenv("DB_PATH", os.path.join("instance", "office_portal.db")),
    "timeout": float(os.getenv("DB_TIMEOUT", "5")),
}

DEBUG = False

REQUEST_TIMEOUT_SECONDS = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "30"))

CSRF_ENABLED = True

AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
