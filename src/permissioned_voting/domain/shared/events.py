"""Domain events and the append-only audit log they are written to."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable, Iterable
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from permissioned_voting.domain.shared.datetime_utils import utcnow
from permissioned_voting.domain.shared.enums import WorkflowStatus
from permissioned_voting.domain.shared.messages import ErrorMessages, LogTemplates
from permissioned_voting.domain.shared.types import (
    Identity,
    NonEmptyStr,
    ProposalIndex,
    UtcDatetimeField,
)

logger = logging.getLogger(__name__)

AuditHandler = Callable[["DomainEvent"], None]

DEFAULT_RETAINED_EVENTS = 1000


class DomainEvent(BaseModel):
    """Base class for all domain events."""

    model_config = ConfigDict(frozen=True)

    event_id: NonEmptyStr = Field(default_factory=lambda: str(uuid4()))
    occurred_at: UtcDatetimeField = Field(default_factory=utcnow)
    session_id: str = ""

    @property
    def event_type(self) -> str:
        return type(self).__name__

    def details(self) -> dict[str, Any]:
        """Event-specific payload without the envelope fields."""
        return self.model_dump(mode="json", exclude={"event_id", "occurred_at", "session_id"})


# === Registry Events ===


class VoterRegistered(DomainEvent):
    voter: Identity


class ProposalRegistered(DomainEvent):
    proposal_id: ProposalIndex
    description: NonEmptyStr


# === Voting Events ===


class Voted(DomainEvent):
    voter: Identity
    proposal_id: ProposalIndex


class VotesTallied(DomainEvent):
    winning_proposal_id: ProposalIndex
    is_tie: bool


class VotingReset(DomainEvent):
    pass


# === Workflow Events ===


class WorkflowStatusChanged(DomainEvent):
    previous_status: WorkflowStatus
    new_status: WorkflowStatus


# === Access Events ===


class OwnershipTransferred(DomainEvent):
    previous_owner: Identity
    new_owner: Identity


EVENT_TYPES: dict[str, type[DomainEvent]] = {
    cls.__name__: cls
    for cls in (
        VoterRegistered,
        ProposalRegistered,
        Voted,
        VotesTallied,
        VotingReset,
        WorkflowStatusChanged,
        OwnershipTransferred,
    )
}


def event_from_payload(event_type: str, payload: dict[str, Any]) -> DomainEvent:
    """Rebuild a stored event from its type name and JSON payload."""
    try:
        cls = EVENT_TYPES[event_type]
    except KeyError:
        raise ValueError(ErrorMessages.UNKNOWN_EVENT_TYPE.format(event_type=event_type)) from None
    return cls.model_validate(payload)


# === Audit Log ===


class AuditLog:
    """In-process, append-only log of committed domain events.

    Handlers are called synchronously, in subscription order, as each event is
    appended. Exceptions in handlers are logged but do not prevent other
    handlers from running. Only the most recent ``max_events`` events are
    retained in memory; the durable trail is the SQLite audit table. The log is
    never read back by the voting core.
    """

    def __init__(self, max_events: int = DEFAULT_RETAINED_EVENTS) -> None:
        self._events: deque[DomainEvent] = deque(maxlen=max_events)
        self._handlers: list[tuple[type[DomainEvent], AuditHandler]] = []

    def subscribe(self, handler: AuditHandler, event_type: type[DomainEvent] = DomainEvent) -> None:
        self._handlers.append((event_type, handler))
        logger.debug(LogTemplates.AUDIT_SUBSCRIBED, getattr(handler, "__name__", handler))

    def unsubscribe(self, handler: AuditHandler) -> None:
        before = len(self._handlers)
        self._handlers = [(t, h) for t, h in self._handlers if h != handler]
        if len(self._handlers) != before:
            logger.debug(LogTemplates.AUDIT_UNSUBSCRIBED, getattr(handler, "__name__", handler))

    def append(self, event: DomainEvent) -> None:
        self._events.append(event)
        for event_type, handler in list(self._handlers):
            if not isinstance(event, event_type):
                continue
            try:
                handler(event)
            except Exception as e:
                logger.exception(LogTemplates.AUDIT_HANDLER_FAILED, event.event_type, e)

    def extend(self, events: Iterable[DomainEvent]) -> None:
        for event in events:
            self.append(event)

    @property
    def events(self) -> tuple[DomainEvent, ...]:
        return tuple(self._events)

    def for_session(self, session_id: str) -> list[DomainEvent]:
        return [e for e in self._events if e.session_id == session_id]

    def __len__(self) -> int:
        return len(self._events)

    def clear(self) -> None:
        """Drop recorded events and handlers (for testing)."""
        self._events.clear()
        self._handlers.clear()
