"""
Voting Domain Repository Interfaces

Abstract base classes defining the contracts for session state and audit trail
persistence.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict

from permissioned_voting.domain.shared.events import DomainEvent
from permissioned_voting.domain.shared.types import EventSequence
from permissioned_voting.domain.voting.session import VotingSession


class AuditRecord(BaseModel):
    """A committed event together with its position in the durable trail."""

    model_config = ConfigDict(frozen=True)

    sequence: EventSequence
    event: DomainEvent


class VotingSessionRepository(ABC):
    """Abstract repository for voting session state."""

    @abstractmethod
    async def get(self, session_id: str) -> VotingSession | None:
        """Retrieve a voting session.

        Args:
            session_id: The election name.

        Returns:
            The session if it exists, None otherwise.
        """
        ...

    @abstractmethod
    async def exists(self, session_id: str) -> bool:
        ...

    @abstractmethod
    async def save(self, session: VotingSession, events: Sequence[DomainEvent] = ()) -> None:
        """Persist the session state and append its committed events.

        State and events are written atomically: either both land or neither.

        Args:
            session: The session to save.
            events: Events produced by the call being committed, oldest first.
        """
        ...

    @abstractmethod
    async def delete(self, session_id: str) -> bool:
        """Delete a session's state. The audit trail is kept.

        Returns:
            True if a session was deleted.
        """
        ...


class AuditTrailRepository(ABC):
    """Read side of the append-only audit trail."""

    @abstractmethod
    async def list_events(self, session_id: str, after_sequence: int = 0) -> list[AuditRecord]:
        """List committed events of a session in commit order.

        Args:
            session_id: The election name.
            after_sequence: Only return records with a greater sequence number.
        """
        ...

    @abstractmethod
    async def count(self, session_id: str) -> int:
        ...
