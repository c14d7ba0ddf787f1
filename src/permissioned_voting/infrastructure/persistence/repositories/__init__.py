"""SQLite repository implementations."""

from permissioned_voting.infrastructure.persistence.repositories.audit_repository import (
    SQLiteAuditTrailRepository,
)
from permissioned_voting.infrastructure.persistence.repositories.session_repository import (
    SQLiteVotingSessionRepository,
)

__all__ = [
    "SQLiteVotingSessionRepository",
    "SQLiteAuditTrailRepository",
]
