"""Shared string enumerations for type-safe comparisons across layers."""

from __future__ import annotations

from enum import StrEnum


class WorkflowStatus(StrEnum):
    """The six phases of an election, in lifecycle order."""

    REGISTERING_VOTERS = "RegisteringVoters"
    PROPOSALS_REGISTRATION_STARTED = "ProposalsRegistrationStarted"
    PROPOSALS_REGISTRATION_ENDED = "ProposalsRegistrationEnded"
    VOTING_SESSION_STARTED = "VotingSessionStarted"
    VOTING_SESSION_ENDED = "VotingSessionEnded"
    VOTES_TALLIED = "VotesTallied"

    @property
    def ordinal(self) -> int:
        return list(WorkflowStatus).index(self)

    @property
    def next(self) -> WorkflowStatus:
        """The phase that follows this one; tallied sessions loop back on reset."""
        members = list(WorkflowStatus)
        return members[(self.ordinal + 1) % len(members)]

    @property
    def accepts_registrations(self) -> bool:
        return self is WorkflowStatus.REGISTERING_VOTERS

    @property
    def accepts_proposals(self) -> bool:
        return self is WorkflowStatus.PROPOSALS_REGISTRATION_STARTED

    @property
    def accepts_votes(self) -> bool:
        return self is WorkflowStatus.VOTING_SESSION_STARTED

    @property
    def is_tallied(self) -> bool:
        return self is WorkflowStatus.VOTES_TALLIED


class OutputFormat(StrEnum):
    """CLI output formats."""

    TEXT = "text"
    JSON = "json"
