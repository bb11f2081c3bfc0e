"""
Unit tests for the job status transition table.
"""

import pytest

from field_service.domain.value_objects.job_status import (
    ALLOWED_TRANSITIONS,
    JobStatus,
    can_transition,
    get_next_statuses,
)

S = JobStatus.SCHEDULED
P = JobStatus.IN_PROGRESS
C = JobStatus.COMPLETED
X = JobStatus.CANCELLED

EXPECTED = {
    (S, S): False,
    (S, P): True,
    (S, C): False,
    (S, X): True,
    (P, S): False,
    (P, P): False,
    (P, C): True,
    (P, X): True,
    (C, S): False,
    (C, P): False,
    (C, C): False,
    (C, X): False,
    (X, S): False,
    (X, P): False,
    (X, C): False,
    (X, X): False,
}


class TestCanTransition:
    """Test can_transition over every status pair."""

    def test_table_covers_every_pair(self):
        """Test that all sixteen pairs are specified."""
        assert len(EXPECTED) == len(JobStatus) ** 2

    @pytest.mark.parametrize("pair,allowed", list(EXPECTED.items()))
    def test_pair(self, pair, allowed):
        """Test each pair against the lifecycle table."""
        from_status, to_status = pair
        assert can_transition(from_status, to_status) is allowed

    @pytest.mark.parametrize("status", list(JobStatus))
    def test_no_self_transition(self, status):
        """Test that re-entering the same status is never legal."""
        assert can_transition(status, status) is False

    @pytest.mark.parametrize("terminal", [C, X])
    def test_terminal_statuses_have_no_exits(self, terminal):
        """Test that completed and cancelled jobs cannot be resurrected."""
        assert all(not can_transition(terminal, target) for target in JobStatus)

    def test_accepts_wire_values(self):
        """Test that plain string values are accepted."""
        assert can_transition("scheduled", "in_progress") is True
        assert can_transition("in_progress", "scheduled") is False

    def test_unknown_status_is_rejected_before_lookup(self):
        """Test that enum coercion rejects unknown values."""
        with pytest.raises(ValueError):
            can_transition("scheduled", "on_hold")


class TestNextStatuses:
    """Test get_next_statuses and JobStatus helpers."""

    def test_next_statuses_in_declaration_order(self):
        """Test reachable statuses are listed in enum order."""
        assert get_next_statuses(S) == [P, X]
        assert get_next_statuses(P) == [C, X]
        assert get_next_statuses(C) == []
        assert get_next_statuses(X) == []

    def test_next_statuses_match_table(self):
        """Test helper agrees with the transition table."""
        for status in JobStatus:
            assert set(status.next_statuses()) == ALLOWED_TRANSITIONS[status]

    def test_is_terminal(self):
        """Test terminal classification."""
        assert C.is_terminal() is True
        assert X.is_terminal() is True
        assert S.is_terminal() is False
        assert P.is_terminal() is False

    def test_is_active(self):
        """Test active classification."""
        assert S.is_active() is True
        assert P.is_active() is True
        assert C.is_active() is False
        assert X.is_active() is False

    def test_can_transition_to(self):
        """Test instance helper delegates to the table."""
        assert S.can_transition_to(P) is True
        assert P.can_transition_to(S) is False

    def test_wire_values(self):
        """Test the enum string values."""
        assert [s.value for s in JobStatus] == [
            "scheduled",
            "in_progress",
            "completed",
            "cancelled",
        ]
