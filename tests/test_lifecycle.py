# =============================================================================
# tests/test_lifecycle.py - Transition Guard Tests
# =============================================================================
# The guard is a pure predicate, so these tests call it directly over the
# whole status matrix.
# =============================================================================

import logging

import pytest

from core.lifecycle import allowed_next_statuses, is_valid_transition
from core.models.package import PackingStatus

PENDING = PackingStatus.PENDING
PACKED = PackingStatus.PACKED
DISPATCHED = PackingStatus.DISPATCHED
DELIVERED = PackingStatus.DELIVERED


class TestIsValidTransition:
    """Full (current, requested) matrix."""

    @pytest.mark.parametrize("requested", list(PackingStatus))
    def test_pending_allows_anything(self, requested):
        assert is_valid_transition(PENDING, requested) is True

    @pytest.mark.parametrize("current", [None, ""])
    @pytest.mark.parametrize("requested", list(PackingStatus))
    def test_missing_status_treated_as_pending(self, current, requested):
        assert is_valid_transition(current, requested) is True

    @pytest.mark.parametrize("status", list(PackingStatus))
    def test_same_status_is_idempotent(self, status):
        assert is_valid_transition(status, status) is True

    @pytest.mark.parametrize("current,requested,expected", [
        (PACKED, PENDING, False),
        (PACKED, DISPATCHED, True),
        (PACKED, DELIVERED, True),
        (DISPATCHED, PENDING, False),
        (DISPATCHED, PACKED, False),
        (DISPATCHED, DELIVERED, True),
        (DELIVERED, PENDING, False),
        (DELIVERED, PACKED, False),
        (DELIVERED, DISPATCHED, False),
    ])
    def test_forward_only(self, current, requested, expected):
        assert is_valid_transition(current, requested) is expected

    def test_accepts_raw_strings(self):
        assert is_valid_transition("packed", "delivered") is True
        assert is_valid_transition("dispatched", "packed") is False

    def test_unknown_current_status_is_allowed_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="core.lifecycle"):
            assert is_valid_transition("lost", PACKED) is True
        assert "Unknown current status" in caplog.text

    def test_never_moves_backwards(self):
        order = list(PackingStatus)
        for i, current in enumerate(order[1:], start=1):
            for requested in order[:i]:
                assert is_valid_transition(current, requested) is False


class TestAllowedNextStatuses:

    def test_from_pending(self):
        assert allowed_next_statuses(PENDING) == [PACKED, DISPATCHED, DELIVERED]

    def test_from_none(self):
        assert allowed_next_statuses(None) == [PACKED, DISPATCHED, DELIVERED]

    def test_from_packed(self):
        assert allowed_next_statuses("packed") == [DISPATCHED, DELIVERED]

    def test_from_dispatched(self):
        assert allowed_next_statuses(DISPATCHED) == [DELIVERED]

    def test_delivered_is_terminal(self):
        assert allowed_next_statuses(DELIVERED) == []

    def test_agrees_with_guard(self):
        for current in PackingStatus:
            for requested in allowed_next_statuses(current):
                assert is_valid_transition(current, requested)
