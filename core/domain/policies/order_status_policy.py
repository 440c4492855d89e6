"""
Order status state machine.

    Admin  Pending   -> Shipped | Delivered
    Admin  other     -> rejected
    Store  any live  -> Delivered   (Delivered -> Delivered is a no-op)

Cancelled and Refunded are terminal; nothing in this table leaves them.
Ownership is checked before the table is consulted.
"""
from enum import Enum
from typing import Dict, FrozenSet

from ..enums.order_status import OrderStatus
from ..exceptions import AccessDenied, InvalidTransition
from ..value_objects import CallerIdentity
from .access_policy import ensure_store_scope

ADMIN_TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.SHIPPED, OrderStatus.DELIVERED}),
}

STORE_TARGETS: FrozenSet[OrderStatus] = frozenset({OrderStatus.DELIVERED})

TERMINAL_STATES: FrozenSet[OrderStatus] = frozenset(
    {OrderStatus.CANCELLED, OrderStatus.REFUNDED}
)


class TransitionOutcome(str, Enum):
    APPLY = "apply"
    NO_OP = "no_op"


def decide_transition(
    identity: CallerIdentity,
    order_store_id: int,
    current: OrderStatus,
    target: OrderStatus,
) -> TransitionOutcome:
    """
    Validate a status change for this caller.

    Returns:
        APPLY when the change must be written, NO_OP for the repeated
        Delivered request from a store user

    Raises:
        AccessDenied: store user acting on another store's order
        InvalidTransition: transition not in the table
    """
    if identity.is_store:
        ensure_store_scope(identity, order_store_id, "update")
        return _decide_for_store(current, target)

    if identity.is_admin:
        return _decide_for_admin(current, target)

    raise AccessDenied(f"Role {identity.role} cannot update orders")


def _decide_for_admin(current: OrderStatus, target: OrderStatus) -> TransitionOutcome:
    allowed = ADMIN_TRANSITIONS.get(current)
    if allowed is None:
        raise InvalidTransition("Only Pending orders can be updated by admin")
    if target not in allowed:
        raise InvalidTransition(
            f"Admin cannot move an order from {current.value} to {target.value}"
        )
    return TransitionOutcome.APPLY


def _decide_for_store(current: OrderStatus, target: OrderStatus) -> TransitionOutcome:
    if target not in STORE_TARGETS:
        raise InvalidTransition("Store users can only mark orders as Delivered")
    if current == OrderStatus.DELIVERED:
        return TransitionOutcome.NO_OP
    if current in TERMINAL_STATES:
        raise InvalidTransition(f"Order is {current.value} and cannot be delivered")
    return TransitionOutcome.APPLY
