"""Settings modules for the music school backend.

`APP_ENV` picks one of them; `main.create_app()` and the scripts import the
module by name.
"""

import os

_SETTINGS_BY_ENV = {
    "prod": "config.production",
    "production": "config.production",
    "test": "config.testing",
    "testing": "config.testing",
}

DEFAULT_SETTINGS = "config.development"


def get_settings_module() -> str:
    # Unknown or unset APP_ENV runs against the local development database.
    env = os.getenv("APP_ENV", "development").strip().lower()
    return _SETTINGS_BY_ENV.get(env, DEFAULT_SETTINGS)
