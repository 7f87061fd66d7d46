from blogdoc.configs.settings import ENV_FILE, Settings, settings

__all__ = [
    "ENV_FILE",
    "Settings",
    "settings",
]
