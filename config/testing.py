import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "music_school_test"),
}

DEBUG = False
TESTING = True

STORAGE_BACKEND = "memory"
DEFAULT_DATA_MODE = "production"

LOG_LEVEL = "WARNING"
LOG_FILE = None

AUTO_INIT_DB = False
AUTO_SEED_DB = False
