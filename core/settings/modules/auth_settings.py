from __future__ import annotations

from pydantic import Field

from core.settings.base_settings import StorefrontBaseSettings


class AuthSettings(StorefrontBaseSettings):
    """
    Bearer-token verification settings.

    The secret has no default: the process refuses to start without
    AUTH_JWT_SECRET in the environment or .env file.
    """

    jwt_secret: str = Field(..., alias="AUTH_JWT_SECRET", min_length=16)
    jwt_algorithm: str = Field(default="HS256", alias="AUTH_JWT_ALGORITHM")
