"""Base exception classes for domain-level errors.

Every rejected call surfaces as a ``DomainError`` subclass whose ``code`` is the
stable name callers match on (``Unauthorized``, ``AlreadyVoted``, ...).
"""

from __future__ import annotations

from permissioned_voting.domain.shared.messages import ErrorMessages


class DomainError(Exception):
    """Base exception for all domain-level errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class ValidationError(DomainError):
    """Raised when domain validation fails."""

    def __init__(self, message: str, field: str | None = None, code: str | None = None) -> None:
        super().__init__(message, code=code or "VALIDATION_ERROR")
        self.field = field


class EntityNotFoundError(DomainError):
    """Raised when a requested entity does not exist."""

    def __init__(
        self,
        entity_type: str,
        identifier: str | int,
        message: str | None = None,
        code: str | None = None,
    ) -> None:
        msg = message or f"{entity_type} with id '{identifier}' not found"
        super().__init__(msg, code=code or "ENTITY_NOT_FOUND")
        self.entity_type = entity_type
        self.identifier = identifier


class BusinessRuleViolationError(DomainError):
    """Raised when a business rule is violated."""

    def __init__(self, rule: str, message: str | None = None, code: str | None = None) -> None:
        msg = message or f"Business rule violated: {rule}"
        super().__init__(msg, code=code or "BUSINESS_RULE_VIOLATION")
        self.rule = rule


class InvalidOperationError(DomainError):
    """Raised when an operation is invalid in the current state."""

    def __init__(
        self,
        operation: str,
        current_state: str,
        message: str | None = None,
        code: str | None = None,
    ) -> None:
        msg = message or f"Cannot perform '{operation}' in state '{current_state}'"
        super().__init__(msg, code=code or "INVALID_OPERATION")
        self.operation = operation
        self.current_state = current_state


class AuthorizationError(DomainError):
    """Raised when the caller does not hold the role an operation requires."""

    def __init__(self, caller: str, message: str, code: str | None = None) -> None:
        super().__init__(message, code=code or "AUTHORIZATION_ERROR")
        self.caller = caller


# === Access control ===


class UnauthorizedError(AuthorizationError):
    def __init__(self, caller: str) -> None:
        super().__init__(caller, ErrorMessages.UNAUTHORIZED.format(caller=caller), code="Unauthorized")


class NotVoterError(AuthorizationError):
    def __init__(self, caller: str) -> None:
        super().__init__(caller, ErrorMessages.NOT_VOTER.format(caller=caller), code="NotVoter")


class InvalidOwnerError(ValidationError):
    def __init__(self) -> None:
        super().__init__(ErrorMessages.INVALID_OWNER, field="new_owner", code="InvalidOwner")


# === Registries ===


class VoterRegistrationClosedError(InvalidOperationError):
    def __init__(self, current_state: str) -> None:
        super().__init__(
            "register_voter",
            current_state,
            ErrorMessages.VOTER_REGISTRATION_CLOSED,
            code="VoterRegistrationClosed",
        )


class AlreadyRegisteredError(BusinessRuleViolationError):
    def __init__(self, identity: str) -> None:
        super().__init__(
            "single_registration",
            ErrorMessages.ALREADY_REGISTERED.format(identity=identity),
            code="AlreadyRegistered",
        )
        self.identity = identity


class ProposalsNotAllowedError(InvalidOperationError):
    def __init__(self, current_state: str) -> None:
        super().__init__(
            "submit_proposal",
            current_state,
            ErrorMessages.PROPOSALS_NOT_ALLOWED,
            code="ProposalsNotAllowed",
        )


class EmptyProposalError(ValidationError):
    def __init__(self) -> None:
        super().__init__(ErrorMessages.EMPTY_PROPOSAL, field="description", code="EmptyProposal")


class ProposalNotFoundError(EntityNotFoundError):
    def __init__(self, index: int, count: int) -> None:
        super().__init__(
            "Proposal",
            index,
            ErrorMessages.PROPOSAL_NOT_FOUND.format(index=index, count=count),
            code="ProposalNotFound",
        )


# === Voting ===


class VotingSessionNotStartedError(InvalidOperationError):
    def __init__(self, current_state: str) -> None:
        super().__init__(
            "cast_vote",
            current_state,
            ErrorMessages.VOTING_SESSION_NOT_STARTED,
            code="VotingSessionNotStarted",
        )


class AlreadyVotedError(BusinessRuleViolationError):
    def __init__(self, identity: str) -> None:
        super().__init__(
            "single_vote",
            ErrorMessages.ALREADY_VOTED.format(identity=identity),
            code="AlreadyVoted",
        )
        self.identity = identity


# === Workflow ===


class InvalidWorkflowStatusError(InvalidOperationError):
    def __init__(self, operation: str, current_state: str) -> None:
        super().__init__(
            operation,
            current_state,
            ErrorMessages.INVALID_WORKFLOW_STATUS.format(operation=operation, status=current_state),
            code="InvalidWorkflowStatus",
        )


class CannotResetBeforeTallyingError(InvalidOperationError):
    def __init__(self, current_state: str) -> None:
        super().__init__(
            "reset_voting",
            current_state,
            ErrorMessages.CANNOT_RESET_BEFORE_TALLYING,
            code="CannotResetBeforeTallying",
        )


# === Sessions ===


class SessionNotFoundError(EntityNotFoundError):
    def __init__(self, session_id: str) -> None:
        super().__init__(
            "VotingSession",
            session_id,
            ErrorMessages.SESSION_NOT_FOUND.format(session_id=session_id),
            code="SessionNotFound",
        )


class SessionAlreadyExistsError(BusinessRuleViolationError):
    def __init__(self, session_id: str) -> None:
        super().__init__(
            "unique_session",
            ErrorMessages.SESSION_ALREADY_EXISTS.format(session_id=session_id),
            code="SessionAlreadyExists",
        )
        self.session_id = session_id
