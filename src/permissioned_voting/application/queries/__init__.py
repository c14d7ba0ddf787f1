"""Query handlers (read side)."""

from permissioned_voting.application.queries.get_audit_trail import (
    GetAuditTrailHandler,
    GetAuditTrailQuery,
)
from permissioned_voting.application.queries.get_results import (
    ElectionResults,
    GetResultsHandler,
    GetResultsQuery,
    ProposalStanding,
)

__all__ = [
    "GetResultsQuery",
    "GetResultsHandler",
    "ElectionResults",
    "ProposalStanding",
    "GetAuditTrailQuery",
    "GetAuditTrailHandler",
]
