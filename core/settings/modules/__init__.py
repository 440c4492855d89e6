# Settings modules
from .app_settings import AppSettings, get_app_settings
from .auth_settings import AuthSettings
from .hashids_settings import HashIdSettings
from .order_settings import OrderSettings

__all__ = [
    "AppSettings",
    "get_app_settings",
    "AuthSettings",
    "HashIdSettings",
    "OrderSettings",
]
