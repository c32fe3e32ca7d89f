import os


def get_settings_module() -> str:
    # APP_ENV picks the settings module, defaulting to development.
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "office_presence.settings.production"

    if env in {"test", "testing"}:
        return "office_presence.settings.testing"

    return "office_presence.settings.development"


def env_flag(name: str, default: str) -> bool:
    return bool(int(os.getenv(name, default)))
