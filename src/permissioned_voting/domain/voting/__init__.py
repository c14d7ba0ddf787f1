"""
Voting Bounded Context

Election workflow, voter and proposal registries, ballots and tallying.
"""

from permissioned_voting.domain.voting.entities import Proposal, Voter
from permissioned_voting.domain.voting.repository import (
    AuditRecord,
    AuditTrailRepository,
    VotingSessionRepository,
)
from permissioned_voting.domain.voting.services import TallyService
from permissioned_voting.domain.voting.session import VotingSession
from permissioned_voting.domain.voting.value_objects import GENESIS_DESCRIPTION, TallyResult

__all__ = [
    # Entities
    "Voter",
    "Proposal",
    # Aggregate
    "VotingSession",
    # Value Objects
    "TallyResult",
    "GENESIS_DESCRIPTION",
    # Repository
    "VotingSessionRepository",
    "AuditTrailRepository",
    "AuditRecord",
    # Services
    "TallyService",
]
