# ruff: noqa: N999
"""
Domain Layer

Contains pure business logic organized by bounded contexts:
- shared/: Cross-cutting types, events and exceptions
- access/: Administrator role and ownership transfer
- voting/: Election workflow, registries, ballots and tally
"""

from permissioned_voting.domain.shared import WorkflowStatus
from permissioned_voting.domain.shared.exceptions import DomainError

__all__ = [
    "WorkflowStatus",
    "DomainError",
]
