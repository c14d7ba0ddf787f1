"""
Unit Tests for the Election Workflow State Machine

Tests for:
- WorkflowStatus ordering and phase predicates
- Forward transitions and the GENESIS side effect
- Rejected transitions (wrong phase, wrong caller)
- Status change events
"""

import pytest

from permissioned_voting.domain.shared.enums import WorkflowStatus
from permissioned_voting.domain.shared.events import WorkflowStatusChanged
from permissioned_voting.domain.shared.exceptions import (
    InvalidWorkflowStatusError,
    UnauthorizedError,
)
from permissioned_voting.domain.voting.session import VotingSession
from permissioned_voting.domain.voting.value_objects import GENESIS_DESCRIPTION

ADMIN = "admin"
ALICE = "alice"

TRANSITIONS = [
    ("start_proposals_registering", WorkflowStatus.REGISTERING_VOTERS),
    ("end_proposals_registering", WorkflowStatus.PROPOSALS_REGISTRATION_STARTED),
    ("start_voting_session", WorkflowStatus.PROPOSALS_REGISTRATION_ENDED),
    ("end_voting_session", WorkflowStatus.VOTING_SESSION_STARTED),
]


def _session_in(status: WorkflowStatus) -> VotingSession:
    session = VotingSession.create(ADMIN)
    session.status = status
    return session


# =============================================================================
# WorkflowStatus Tests
# =============================================================================


class TestWorkflowStatus:
    """Unit tests for the WorkflowStatus enum."""

    def test_phase_order(self):
        """Members should be declared in lifecycle order."""
        assert [s.value for s in WorkflowStatus] == [
            "RegisteringVoters",
            "ProposalsRegistrationStarted",
            "ProposalsRegistrationEnded",
            "VotingSessionStarted",
            "VotingSessionEnded",
            "VotesTallied",
        ]

    def test_ordinal(self):
        """ordinal should be the zero-based position."""
        assert WorkflowStatus.REGISTERING_VOTERS.ordinal == 0
        assert WorkflowStatus.VOTES_TALLIED.ordinal == 5

    def test_next_moves_forward(self):
        """next should return the following phase."""
        assert WorkflowStatus.REGISTERING_VOTERS.next is WorkflowStatus.PROPOSALS_REGISTRATION_STARTED
        assert WorkflowStatus.VOTING_SESSION_ENDED.next is WorkflowStatus.VOTES_TALLIED

    def test_next_after_tallied_loops_back(self):
        """A tallied session resets to voter registration."""
        assert WorkflowStatus.VOTES_TALLIED.next is WorkflowStatus.REGISTERING_VOTERS

    def test_phase_predicates(self):
        """Each predicate should hold for exactly one phase."""
        assert [s for s in WorkflowStatus if s.accepts_registrations] == [
            WorkflowStatus.REGISTERING_VOTERS
        ]
        assert [s for s in WorkflowStatus if s.accepts_proposals] == [
            WorkflowStatus.PROPOSALS_REGISTRATION_STARTED
        ]
        assert [s for s in WorkflowStatus if s.accepts_votes] == [
            WorkflowStatus.VOTING_SESSION_STARTED
        ]
        assert [s for s in WorkflowStatus if s.is_tallied] == [WorkflowStatus.VOTES_TALLIED]


# =============================================================================
# Transition Tests
# =============================================================================


class TestTransitions:
    """Unit tests for the administrator-driven phase transitions."""

    def test_initial_status(self, session):
        """New sessions start in RegisteringVoters with no proposals."""
        assert session.status is WorkflowStatus.REGISTERING_VOTERS
        assert session.proposal_count == 0
        assert session.result is None

    @pytest.mark.parametrize(("operation", "predecessor"), TRANSITIONS)
    def test_transition_from_predecessor(self, operation, predecessor):
        """Each transition should advance exactly one phase."""
        session = _session_in(predecessor)

        getattr(session, operation)(ADMIN)

        assert session.status is predecessor.next

    @pytest.mark.parametrize(("operation", "predecessor"), TRANSITIONS)
    def test_transition_emits_status_change(self, operation, predecessor):
        """A transition should emit one (previous, new) status event."""
        session = _session_in(predecessor)

        getattr(session, operation)(ADMIN)
        events = session.pull_events()

        assert len(events) == 1
        assert isinstance(events[0], WorkflowStatusChanged)
        assert events[0].previous_status is predecessor
        assert events[0].new_status is predecessor.next

    @pytest.mark.parametrize(("operation", "predecessor"), TRANSITIONS)
    def test_transition_from_any_other_phase_fails(self, operation, predecessor):
        """Skipping or going backward should fail InvalidWorkflowStatus."""
        for status in WorkflowStatus:
            if status is predecessor:
                continue
            session = _session_in(status)

            with pytest.raises(InvalidWorkflowStatusError) as exc_info:
                getattr(session, operation)(ADMIN)

            assert exc_info.value.code == "InvalidWorkflowStatus"
            assert exc_info.value.operation == operation
            assert session.status is status

    @pytest.mark.parametrize(("operation", "predecessor"), TRANSITIONS)
    def test_transition_requires_administrator(self, operation, predecessor):
        """Non-administrators should be rejected before the phase check."""
        session = _session_in(WorkflowStatus.VOTES_TALLIED)

        with pytest.raises(UnauthorizedError):
            getattr(session, operation)(ALICE)

    def test_start_proposals_inserts_genesis(self, session):
        """Entering proposal registration should append GENESIS at index 0."""
        session.start_proposals_registering(ADMIN)

        assert session.proposal_count == 1
        assert session.proposals[0].description == GENESIS_DESCRIPTION
        assert session.proposals[0].vote_count == 0

    def test_genesis_has_no_proposal_event(self, session):
        """GENESIS is inserted silently; only the status change is emitted."""
        session.start_proposals_registering(ADMIN)

        assert [e.event_type for e in session.pull_events()] == ["WorkflowStatusChanged"]

    def test_full_forward_walk(self, session):
        """Walking the four transitions should end in VotingSessionEnded."""
        for operation, _ in TRANSITIONS:
            getattr(session, operation)(ADMIN)

        assert session.status is WorkflowStatus.VOTING_SESSION_ENDED
        assert session.proposal_count == 1
