"""Boundary security adapters: public id codec and token verification."""
from .hash_ids import HashIdCodec
from .jwt_identity_provider import JwtIdentityProvider

__all__ = ["HashIdCodec", "JwtIdentityProvider"]
