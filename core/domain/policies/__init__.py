"""Role and ownership rules for orders."""
from .access_policy import ensure_store_scope, resolve_list_scope
from .order_status_policy import (
    ADMIN_TRANSITIONS,
    STORE_TARGETS,
    TERMINAL_STATES,
    TransitionOutcome,
    decide_transition,
)

__all__ = [
    "ADMIN_TRANSITIONS",
    "STORE_TARGETS",
    "TERMINAL_STATES",
    "TransitionOutcome",
    "decide_transition",
    "ensure_store_scope",
    "resolve_list_scope",
]
