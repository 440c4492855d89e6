from __future__ import annotations

from pydantic import Field

from core.settings.base_settings import StorefrontBaseSettings


class HashIdSettings(StorefrontBaseSettings):
    """Salt and padding for the public (hashed) ids."""

    salt: str = Field(default="", alias="HASHIDS_SALT")
    min_length: int = Field(default=8, alias="HASHIDS_MIN_LENGTH", ge=0)
