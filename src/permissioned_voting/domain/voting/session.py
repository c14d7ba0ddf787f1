"""The voting session aggregate: workflow, registries, ballots and tally."""

from __future__ import annotations

from pydantic import BaseModel, Field, PrivateAttr

from permissioned_voting.domain.access.ownable import Ownable
from permissioned_voting.domain.shared.enums import WorkflowStatus
from permissioned_voting.domain.shared.events import (
    DomainEvent,
    OwnershipTransferred,
    ProposalRegistered,
    Voted,
    VoterRegistered,
    VotesTallied,
    VotingReset,
    WorkflowStatusChanged,
)
from permissioned_voting.domain.shared.exceptions import (
    AlreadyRegisteredError,
    AlreadyVotedError,
    CannotResetBeforeTallyingError,
    EmptyProposalError,
    InvalidWorkflowStatusError,
    NotVoterError,
    ProposalNotFoundError,
    ProposalsNotAllowedError,
    VoterRegistrationClosedError,
    VotingSessionNotStartedError,
)
from permissioned_voting.domain.shared.types import SessionName
from permissioned_voting.domain.voting.entities import Proposal, Voter
from permissioned_voting.domain.voting.services import TallyService
from permissioned_voting.domain.voting.value_objects import GENESIS_DESCRIPTION, TallyResult


class VotingSession(BaseModel):
    """Aggregate owning all state of one election.

    Every operation takes the caller identity first and runs its guards in a
    fixed order (role, phase, remaining preconditions) before the first
    mutation, so a rejected call leaves the aggregate untouched. Committed
    calls buffer their events in order; drain them with ``pull_events()``.
    """

    session_id: SessionName = "default"
    access: Ownable
    status: WorkflowStatus = WorkflowStatus.REGISTERING_VOTERS
    voters: dict[str, Voter] = Field(default_factory=dict)
    voter_ids: list[str] = Field(default_factory=list)
    proposals: list[Proposal] = Field(default_factory=list)
    result: TallyResult | None = None

    _pending_events: list[DomainEvent] = PrivateAttr(default_factory=list)

    @classmethod
    def create(cls, administrator: str, session_id: str = "default") -> VotingSession:
        return cls(session_id=session_id, access=Ownable(owner=administrator))

    # === Read-only views ===

    @property
    def owner(self) -> str:
        return self.access.owner

    @property
    def proposal_count(self) -> int:
        return len(self.proposals)

    @property
    def registered_voters(self) -> tuple[str, ...]:
        return tuple(self.voter_ids)

    @property
    def pending_events(self) -> tuple[DomainEvent, ...]:
        return tuple(self._pending_events)

    def pull_events(self) -> list[DomainEvent]:
        """Return and clear the events of committed calls, oldest first."""
        events, self._pending_events = self._pending_events, []
        return events

    # === Access control ===

    def is_voter(self, identity: str) -> bool:
        voter = self.voters.get(identity)
        return voter is not None and voter.is_registered

    def _only_owner(self, caller: str) -> None:
        self.access.check_owner(caller)

    def _only_voter(self, caller: str) -> None:
        if not self.is_voter(caller):
            raise NotVoterError(caller)

    def transfer_ownership(self, caller: str, new_owner: str) -> None:
        previous = self.access.transfer_ownership(caller, new_owner)
        self._emit(OwnershipTransferred(previous_owner=previous, new_owner=new_owner))

    # === Registries ===

    def register_voter(self, caller: str, identity: str) -> None:
        self._only_owner(caller)
        if not self.status.accepts_registrations:
            raise VoterRegistrationClosedError(self.status.value)
        if self.is_voter(identity):
            raise AlreadyRegisteredError(identity)

        event = VoterRegistered(voter=identity)
        self.voters[identity] = Voter(is_registered=True)
        self.voter_ids.append(identity)
        self._emit(event)

    def get_voter(self, caller: str, identity: str) -> Voter:
        self._only_voter(caller)
        voter = self.voters.get(identity)
        return voter.model_copy() if voter is not None else Voter()

    def submit_proposal(self, caller: str, description: str) -> int:
        self._only_voter(caller)
        if not self.status.accepts_proposals:
            raise ProposalsNotAllowedError(self.status.value)
        if description == "":
            raise EmptyProposalError()

        self.proposals.append(Proposal(description=description))
        proposal_id = len(self.proposals) - 1
        self._emit(ProposalRegistered(proposal_id=proposal_id, description=description))
        return proposal_id

    def get_proposal(self, caller: str, index: int) -> Proposal:
        self._only_voter(caller)
        return self._proposal_at(index).model_copy()

    def _proposal_at(self, index: int) -> Proposal:
        if not 0 <= index < len(self.proposals):
            raise ProposalNotFoundError(index, len(self.proposals))
        return self.proposals[index]

    # === Workflow ===

    def start_proposals_registering(self, caller: str) -> None:
        self._advance(
            caller, "start_proposals_registering", WorkflowStatus.REGISTERING_VOTERS
        )

    def end_proposals_registering(self, caller: str) -> None:
        self._advance(
            caller, "end_proposals_registering", WorkflowStatus.PROPOSALS_REGISTRATION_STARTED
        )

    def start_voting_session(self, caller: str) -> None:
        self._advance(caller, "start_voting_session", WorkflowStatus.PROPOSALS_REGISTRATION_ENDED)

    def end_voting_session(self, caller: str) -> None:
        self._advance(caller, "end_voting_session", WorkflowStatus.VOTING_SESSION_STARTED)

    def _advance(self, caller: str, operation: str, expected: WorkflowStatus) -> None:
        self._only_owner(caller)
        if self.status is not expected:
            raise InvalidWorkflowStatusError(operation, self.status.value)

        new_status = expected.next
        if new_status is WorkflowStatus.PROPOSALS_REGISTRATION_STARTED:
            self.proposals.append(Proposal(description=GENESIS_DESCRIPTION))
        self._set_status(new_status)

    def _set_status(self, new_status: WorkflowStatus) -> None:
        previous, self.status = self.status, new_status
        self._emit(WorkflowStatusChanged(previous_status=previous, new_status=new_status))

    # === Ballots ===

    def cast_vote(self, caller: str, proposal_index: int) -> None:
        self._only_voter(caller)
        if not self.status.accepts_votes:
            raise VotingSessionNotStartedError(self.status.value)
        voter = self.voters[caller]
        if voter.has_voted:
            raise AlreadyVotedError(caller)
        proposal = self._proposal_at(proposal_index)

        voter.record_vote(proposal_index)
        proposal.add_vote()
        self._emit(Voted(voter=caller, proposal_id=proposal_index))

    # === Tally ===

    def tally_votes(self, caller: str) -> TallyResult:
        self._only_owner(caller)
        if self.status is not WorkflowStatus.VOTING_SESSION_ENDED:
            raise InvalidWorkflowStatusError("tally_votes", self.status.value)

        self.result = TallyService.tally(self.proposals)
        self._emit(
            VotesTallied(
                winning_proposal_id=self.result.winning_proposal_id,
                is_tie=self.result.is_tie,
            )
        )
        self._set_status(WorkflowStatus.VOTES_TALLIED)
        return self.result

    def reset_voting(self, caller: str) -> None:
        self._only_owner(caller)
        if not self.status.is_tallied:
            raise CannotResetBeforeTallyingError(self.status.value)

        self.result = None
        self.proposals.clear()
        for identity in self.voter_ids:
            self.voters[identity].clear_ballot()
        self._emit(VotingReset())
        self._set_status(WorkflowStatus.REGISTERING_VOTERS)

    def _emit(self, event: DomainEvent) -> None:
        if not event.session_id:
            event = event.model_copy(update={"session_id": self.session_id})
        self._pending_events.append(event)
