from __future__ import annotations

from pydantic import Field

from core.settings.base_settings import StorefrontBaseSettings


class OrderSettings(StorefrontBaseSettings):
    """Order placement tuning."""

    # Attempts at drawing an unused ORD-YYYYMMDD-NNNNNN number
    order_number_max_attempts: int = Field(default=5, alias="ORDER_NUMBER_MAX_ATTEMPTS", ge=1)
