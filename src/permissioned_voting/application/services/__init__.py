"""Application services."""

from permissioned_voting.application.services.voting_service import VotingApplicationService

__all__ = ["VotingApplicationService"]
