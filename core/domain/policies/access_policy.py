"""
Ownership rules.

Admins see and act on every store. Store users are scoped to the one
store they are affiliated with; a store user without an affiliation
cannot be resolved to any scope.
"""
from typing import Optional

from ..exceptions import AccessDenied
from ..value_objects import CallerIdentity


def _require_store_affiliation(identity: CallerIdentity) -> int:
    if identity.store_id is None:
        raise AccessDenied("Store user has no store affiliation")
    return identity.store_id


def resolve_list_scope(identity: CallerIdentity) -> Optional[int]:
    """
    Store id to filter listings by.

    Returns:
        None for admins (no filter), the caller's store id otherwise
    """
    if identity.is_admin:
        return None
    return _require_store_affiliation(identity)


def ensure_store_scope(identity: CallerIdentity, store_id: int, action: str = "access") -> None:
    """
    Single ownership gate for reads, placement and status changes.

    Args:
        identity: Authenticated caller
        store_id: Store the order belongs (or will belong) to
        action: Verb used in the denial message ("access", "create", "update")

    Raises:
        AccessDenied: store user outside their own store
    """
    if identity.is_admin:
        return
    if _require_store_affiliation(identity) != store_id:
        raise AccessDenied(f"You can only {action} orders for your own store")
