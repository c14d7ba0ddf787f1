"""Query for the outcome of a tallied voting session."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from permissioned_voting.domain.shared.enums import WorkflowStatus
from permissioned_voting.domain.shared.exceptions import (
    InvalidWorkflowStatusError,
    SessionNotFoundError,
)
from permissioned_voting.domain.shared.types import NonNegativeInt, ProposalIndex, SessionName
from permissioned_voting.domain.voting.services import TallyService

if TYPE_CHECKING:
    from ...domain.voting.repository import VotingSessionRepository


class GetResultsQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    session_id: SessionName


class ProposalStanding(BaseModel):

    proposal_id: ProposalIndex
    description: str
    vote_count: NonNegativeInt


class ElectionResults(BaseModel):

    session_id: SessionName
    status: WorkflowStatus
    winning_proposal_id: ProposalIndex
    winning_description: str
    winning_vote_count: NonNegativeInt
    is_tie: bool
    standings: list[ProposalStanding]

    @property
    def total_votes(self) -> int:
        return sum(s.vote_count for s in self.standings)


class GetResultsHandler:
    """Public read of a tallied session; no caller identity is involved."""

    def __init__(self, *, session_repository: VotingSessionRepository) -> None:
        self._session_repo = session_repository

    async def handle(self, query: GetResultsQuery) -> ElectionResults:
        session = await self._session_repo.get(query.session_id)
        if session is None:
            raise SessionNotFoundError(query.session_id)

        if session.result is None or not session.status.is_tallied:
            raise InvalidWorkflowStatusError("get_results", session.status.value)

        winner = session.proposals[session.result.winning_proposal_id]
        return ElectionResults(
            session_id=session.session_id,
            status=session.status,
            winning_proposal_id=session.result.winning_proposal_id,
            winning_description=winner.description,
            winning_vote_count=winner.vote_count,
            is_tie=session.result.is_tie,
            standings=[
                ProposalStanding(
                    proposal_id=index,
                    description=proposal.description,
                    vote_count=proposal.vote_count,
                )
                for index, proposal in TallyService.standings(session.proposals)
            ],
        )
