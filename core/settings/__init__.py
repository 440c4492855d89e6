# Settings package
from core.settings.modules import (
    AppSettings,
    AuthSettings,
    HashIdSettings,
    OrderSettings,
    get_app_settings,
)

__all__ = [
    "get_app_settings",
    "AppSettings",
    "AuthSettings",
    "HashIdSettings",
    "OrderSettings",
]
