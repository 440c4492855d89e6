"""Authenticated caller value object."""
from dataclasses import dataclass
from typing import Optional

from ..enums.user_role import UserRole


@dataclass(frozen=True)
class CallerIdentity:
    """
    Who is calling the core.

    Supplied by the identity provider after the bearer token is verified.
    Store users carry their store affiliation; admins usually don't.
    """
    user_id: int
    role: UserRole
    store_id: Optional[int] = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_store(self) -> bool:
        return self.role == UserRole.STORE
