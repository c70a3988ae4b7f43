import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "music_school_db"),
}

DEBUG = True

# mysql | memory
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "mysql")
DEFAULT_DATA_MODE = os.getenv("DEFAULT_DATA_MODE", "production")

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LOG_FILE = os.getenv("LOG_FILE", "logs/music_school.log")

# If enabled, app creates the collection tables on startup (CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed the default catalog and admin account
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "1")))
