"""Bearer-token verification with PyJWT."""
import logging
from typing import Any, Dict

import jwt

from core.application.interfaces import IIdentityProvider
from core.domain.enums.user_role import UserRole
from core.domain.exceptions import AuthenticationRequired
from core.domain.value_objects import CallerIdentity
from core.settings import AuthSettings

logger = logging.getLogger(__name__)


class JwtIdentityProvider(IIdentityProvider):
    """
    Turns a signed token into a CallerIdentity.

    Expected claims: sub (user id), role ("store" | "admin"),
    store_id (int or null), exp.
    """

    def __init__(self, settings: AuthSettings) -> None:
        self._secret = settings.jwt_secret
        self._algorithm = settings.jwt_algorithm

    def verify(self, token: str) -> CallerIdentity:
        if not token:
            raise AuthenticationRequired("Missing bearer token")

        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError:
            raise AuthenticationRequired("Token has expired")
        except jwt.InvalidTokenError as e:
            logger.warning(f"Rejected bearer token: {e}")
            raise AuthenticationRequired("Invalid token")

        return self._to_identity(claims)

    @staticmethod
    def _to_identity(claims: Dict[str, Any]) -> CallerIdentity:
        raw_role = str(claims.get("role", "")).lower()
        try:
            role = UserRole(raw_role)
        except ValueError:
            raise AuthenticationRequired(f"Unknown role: {raw_role or '<none>'}")

        try:
            user_id = int(claims["sub"])
            store_id = claims.get("store_id")
            store_id = int(store_id) if store_id is not None else None
        except (TypeError, ValueError):
            raise AuthenticationRequired("Malformed token claims")

        return CallerIdentity(user_id=user_id, role=role, store_id=store_id)
