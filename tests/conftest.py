"""Shared fixtures: settings, id codec and signed bearer tokens."""
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
import pytest

from core.domain.enums import UserRole
from core.domain.value_objects import CallerIdentity
from core.infrastructure.security import HashIdCodec, JwtIdentityProvider
from core.settings import AuthSettings, HashIdSettings, OrderSettings

TEST_JWT_SECRET = "storefront-test-secret-0123456789abcdef"
TEST_HASHIDS_SALT = "storefront-tests"


@pytest.fixture
def auth_settings() -> AuthSettings:
    return AuthSettings(AUTH_JWT_SECRET=TEST_JWT_SECRET)


@pytest.fixture
def hashid_settings() -> HashIdSettings:
    return HashIdSettings(HASHIDS_SALT=TEST_HASHIDS_SALT, HASHIDS_MIN_LENGTH=8)


@pytest.fixture
def order_settings() -> OrderSettings:
    return OrderSettings(ORDER_NUMBER_MAX_ATTEMPTS=5)


@pytest.fixture
def codec(hashid_settings) -> HashIdCodec:
    return HashIdCodec(hashid_settings)


@pytest.fixture
def identity_provider(auth_settings) -> JwtIdentityProvider:
    return JwtIdentityProvider(auth_settings)


@pytest.fixture
def make_token():
    """Sign a token the way the auth service would."""

    def _make(
        user_id: int,
        role: str,
        store_id: Optional[int] = None,
        expires_in: int = 3600,
        secret: str = TEST_JWT_SECRET,
    ) -> str:
        claims = {
            "sub": str(user_id),
            "role": role,
            "store_id": store_id,
            "exp": datetime.now(timezone.utc) + timedelta(seconds=expires_in),
        }
        return jwt.encode(claims, secret, algorithm="HS256")

    return _make


@pytest.fixture
def admin() -> CallerIdentity:
    return CallerIdentity(user_id=1, role=UserRole.ADMIN)


@pytest.fixture
def store_user() -> CallerIdentity:
    """Employee of store 1."""
    return CallerIdentity(user_id=10, role=UserRole.STORE, store_id=1)


@pytest.fixture
def other_store_user() -> CallerIdentity:
    """Employee of store 2."""
    return CallerIdentity(user_id=20, role=UserRole.STORE, store_id=2)
