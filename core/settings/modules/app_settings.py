from __future__ import annotations

from functools import lru_cache

from pydantic import BaseModel, ConfigDict

from core.infrastructure.database.config import DatabaseSettings
from core.settings.modules.auth_settings import AuthSettings
from core.settings.modules.hashids_settings import HashIdSettings
from core.settings.modules.order_settings import OrderSettings


class AppSettings(BaseModel):
    """
    Application settings aggregator.

    Built once at startup and passed to the components that need a
    section; nothing reads the environment after that.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="ignore", frozen=True)

    database: DatabaseSettings
    auth: AuthSettings
    hashids: HashIdSettings
    orders: OrderSettings


@lru_cache()
def get_app_settings() -> AppSettings:
    return AppSettings(
        database=DatabaseSettings(),
        auth=AuthSettings(),
        hashids=HashIdSettings(),
        orders=OrderSettings(),
    )
