# =============================================================================
# core/lifecycle.py - Package Status Transition Guard
# =============================================================================
# Decides whether a package may move from its current status to a requested
# one. This is a pure predicate: it reads no state and writes nothing.
# Callers persist the merged record only when it returns True and raise
# InvalidTransitionError otherwise.
#
# Rules, checked in order:
#   1. No current status, or PENDING -> anything is allowed
#   2. Same status -> allowed (idempotent resubmission)
#   3. PACKED -> DISPATCHED or DELIVERED (skipping dispatch is allowed)
#   4. DISPATCHED -> DELIVERED only
#   5. DELIVERED -> nothing
#   6. Unknown current status -> allowed, with a warning
# =============================================================================

import logging

from core.models.package import PackingStatus

logger = logging.getLogger(__name__)

# Statuses reachable from each non-initial, known status.
ALLOWED_TRANSITIONS: dict[PackingStatus, frozenset[PackingStatus]] = {
    PackingStatus.PACKED: frozenset({PackingStatus.DISPATCHED, PackingStatus.DELIVERED}),
    PackingStatus.DISPATCHED: frozenset({PackingStatus.DELIVERED}),
    PackingStatus.DELIVERED: frozenset(),
}


def _coerce(status: PackingStatus | str | None) -> PackingStatus | str | None:
    """Map raw strings onto PackingStatus where possible; keep unknowns as-is."""
    if status is None or isinstance(status, PackingStatus):
        return status
    try:
        return PackingStatus(status)
    except ValueError:
        return status


def is_valid_transition(
    current_status: PackingStatus | str | None,
    requested_status: PackingStatus | str,
) -> bool:
    """
    Check whether a package may move from `current_status` to `requested_status`.

    Args:
        current_status: Stored status; None or "" is treated as pending
        requested_status: Status the caller wants to set

    Returns:
        True if the transition is legal

    Example:
        is_valid_transition("packed", "delivered")   # True
        is_valid_transition("dispatched", "packed")  # False
    """
    current = _coerce(current_status or None)
    requested = _coerce(requested_status)

    if current is None or current == PackingStatus.PENDING:
        return True

    if requested == current:
        return True

    if not isinstance(current, PackingStatus):
        # Permissive fallback kept on purpose; pending product-owner review
        # of whether unknown statuses should be rejected instead.
        logger.warning(
            f"Unknown current status {current!r}; allowing transition to {requested!r}"
        )
        return True

    return requested in ALLOWED_TRANSITIONS[current]


def allowed_next_statuses(current_status: PackingStatus | str | None) -> list[PackingStatus]:
    """
    Statuses a package may move to next, excluding the no-op same status.

    Useful for scanners that want to offer only legal actions.
    """
    current = _coerce(current_status or None)
    if current is None or current == PackingStatus.PENDING:
        return [s for s in PackingStatus if s != PackingStatus.PENDING]
    if not isinstance(current, PackingStatus):
        return list(PackingStatus)
    return [s for s in PackingStatus if s in ALLOWED_TRANSITIONS[current]]
