"""Registry entries for the voting bounded context."""

from __future__ import annotations

from pydantic import BaseModel

from permissioned_voting.domain.shared.types import NonEmptyStr, NonNegativeInt, ProposalIndex


class Voter(BaseModel):
    """Registration and ballot state of one identity.

    Identities that were never registered read as the default instance.
    """

    is_registered: bool = False
    has_voted: bool = False
    voted_proposal_id: ProposalIndex = 0

    def record_vote(self, proposal_id: int) -> None:
        self.has_voted = True
        self.voted_proposal_id = proposal_id

    def clear_ballot(self) -> None:
        self.has_voted = False
        self.voted_proposal_id = 0


class Proposal(BaseModel):
    """A proposal; its index in the session's sequence is its identity."""

    description: NonEmptyStr
    vote_count: NonNegativeInt = 0

    def add_vote(self) -> int:
        self.vote_count += 1
        return self.vote_count
