"""
Voting Domain Services

Domain services containing voting business logic.
"""

from __future__ import annotations

from collections.abc import Sequence

from permissioned_voting.domain.voting.entities import Proposal
from permissioned_voting.domain.voting.value_objects import TallyResult


class TallyService:
    """Computes the winning proposal and tie flag once voting has closed."""

    @classmethod
    def tally(cls, proposals: Sequence[Proposal]) -> TallyResult:
        """Scan the proposals once, in index order.

        A strictly higher count takes the lead and clears the tie flag. An equal,
        non-zero count sets the tie flag without moving the lead, so the winner
        is always the earliest proposal to reach the final maximum while
        ``is_tie`` reports whether any later proposal matched it.

        Args:
            proposals: The session's proposal sequence (GENESIS at index 0).

        Returns:
            The tally result. An all-zero sequence tallies to proposal 0, no tie.
        """
        winning_id = 0
        highest = 0
        is_tie = False

        for index, proposal in enumerate(proposals):
            if proposal.vote_count > highest:
                highest = proposal.vote_count
                winning_id = index
                is_tie = False
            elif proposal.vote_count == highest and highest > 0:
                is_tie = True

        return TallyResult(winning_proposal_id=winning_id, is_tie=is_tie)

    @classmethod
    def standings(cls, proposals: Sequence[Proposal]) -> list[tuple[int, Proposal]]:
        """Proposals ordered by vote count (descending), index breaking ties."""
        return sorted(enumerate(proposals), key=lambda item: (-item[1].vote_count, item[0]))
