import os

_SETTINGS_BY_ENV = {
    "prod": "config.production",
    "production": "config.production",
    "test": "config.testing",
    "testing": "config.testing",
}


def get_settings_module() -> str:
    """Dotted path of the settings module for the current process.

    BREAKTIME_SETTINGS wins when set; otherwise APP_ENV picks one of the
    bundled modules and anything unrecognised falls back to development.
    """
    explicit = os.getenv("BREAKTIME_SETTINGS")
    if explicit:
        return explicit

    env = os.getenv("APP_ENV", "development").strip().lower()
    return _SETTINGS_BY_ENV.get(env, "config.development")
