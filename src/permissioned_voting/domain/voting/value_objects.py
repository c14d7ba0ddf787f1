"""
Voting Domain Value Objects

Immutable value objects for the voting bounded context.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from permissioned_voting.domain.shared.types import ProposalIndex

GENESIS_DESCRIPTION = "GENESIS"


class TallyResult(BaseModel):
    """Outcome of a tally: earliest proposal at the top count, plus the tie flag."""

    model_config = ConfigDict(frozen=True)

    winning_proposal_id: ProposalIndex = 0
    is_tie: bool = False
