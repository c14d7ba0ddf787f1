"""Centralized message constants for error messages, log templates, and CLI output."""

from __future__ import annotations


class ErrorMessages:
    """Error messages for exceptions and validation failures."""

    # Access control
    UNAUTHORIZED = "Caller '{caller}' is not the administrator"
    NOT_VOTER = "Caller '{caller}' is not a registered voter"
    INVALID_OWNER = "New administrator identity cannot be empty"

    # Registries
    VOTER_REGISTRATION_CLOSED = "Voter registration is not open"
    ALREADY_REGISTERED = "Voter '{identity}' is already registered"
    PROPOSALS_NOT_ALLOWED = "Proposal registration is not open"
    EMPTY_PROPOSAL = "Proposal description cannot be empty"
    PROPOSAL_NOT_FOUND = "Proposal {index} does not exist ({count} registered)"

    # Voting
    VOTING_SESSION_NOT_STARTED = "Voting session has not started"
    ALREADY_VOTED = "Voter '{identity}' has already voted"

    # Workflow
    INVALID_WORKFLOW_STATUS = "Cannot perform '{operation}' while status is '{status}'"
    CANNOT_RESET_BEFORE_TALLYING = "Votes must be tallied before the session can be reset"

    # Sessions
    SESSION_NOT_FOUND = "Voting session '{session_id}' does not exist"
    SESSION_ALREADY_EXISTS = "Voting session '{session_id}' already exists"

    # Validation
    TIMEZONE_REQUIRED_UTC_DATETIME = "UtcDateTime requires a timezone-aware datetime"
    UNKNOWN_EVENT_TYPE = "Unknown audit event type: {event_type}"

    # Settings
    INVALID_DATABASE_URL = "Database URL must start with sqlite://"
    INVALID_LOG_LEVEL = "Invalid log level: {level}. Must be one of {valid_levels}"


class LogTemplates:
    """Log message templates for structured logging.

    Use these with logger.info(), logger.error(), etc. and pass values as parameters
    for proper log formatting and structured logging support.
    """

    # Database lifecycle
    DATABASE_INITIALIZED = "Database initialized at %s"
    DATABASE_CLOSED = "Database manager closed"

    # Repositories
    SESSION_SAVED = "Saved voting session %s (status=%s, %d events)"
    SESSION_DELETED = "Deleted voting session %s"

    # Application service
    SESSION_OPENED = "Opened voting session %s administered by %s"
    OPERATION_COMMITTED = "%s committed on session %s by %s"
    OPERATION_REJECTED = "%s rejected on session %s for %s: [%s] %s"

    # Audit log
    AUDIT_EVENT = "audit %s session=%s %s"
    AUDIT_SUBSCRIBED = "Subscribed audit handler %s"
    AUDIT_UNSUBSCRIBED = "Unsubscribed audit handler %s"
    AUDIT_HANDLER_FAILED = "Audit handler failed for %s: %s"

    # Container / CLI
    CONTAINER_INITIALIZED = "Container initialized"
    CONTAINER_SHUTDOWN = "Container shut down"
    LOGGING_CONFIG_FALLBACK = "Could not load logging config from %s, using basic logging"
    CLI_STARTING = "Running %s on session %s (environment=%s)"


class CliMessages:
    """User-facing output of the command line interface."""

    OK = "[ok] {text}"
    ERR = "[err] {code}: {message}"

    SESSION_OPENED = "Opened session {session_id} administered by {administrator}"
    VOTER_REGISTERED = "Registered voter {identity}"
    VOTER_INFO = (
        "Voter {identity}: registered={is_registered} voted={has_voted} "
        "proposal={voted_proposal_id}"
    )
    PROPOSAL_SUBMITTED = "Proposal #{index} registered: {description}"
    PROPOSAL_INFO = "Proposal #{index}: {description} ({vote_count} votes)"
    VOTE_CAST = "Vote recorded for proposal #{index}"
    STATUS_CHANGED = "Status is now {status}"
    TALLIED = "Winner: proposal #{winning_proposal_id} (tie={is_tie})"
    RESET = "Session reset, status is now {status}"
    OWNERSHIP_TRANSFERRED = "Administrator is now {owner}"
    STATUS_INFO = (
        "Session {session_id}: status={status} administrator={owner} "
        "voters={voters} proposals={proposals}"
    )
    RESULT_LINE = "  #{proposal_id} {description}: {vote_count}"
    HISTORY_LINE = "{sequence:>4} {occurred_at} {event_type} {details}"
