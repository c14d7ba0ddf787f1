"""
Shared Domain Kernel

Contains enumerations and exceptions shared across all bounded contexts.
"""

from permissioned_voting.domain.shared.enums import WorkflowStatus
from permissioned_voting.domain.shared.exceptions import (
    AuthorizationError,
    BusinessRuleViolationError,
    DomainError,
    EntityNotFoundError,
    InvalidOperationError,
    ValidationError,
)

__all__ = [
    "WorkflowStatus",
    "DomainError",
    "ValidationError",
    "EntityNotFoundError",
    "BusinessRuleViolationError",
    "InvalidOperationError",
    "AuthorizationError",
]
