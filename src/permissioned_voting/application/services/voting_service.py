"""Voting Application Service - hosts sessions and commits their calls."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, TypeVar

from pydantic import TypeAdapter

from ...domain.shared.exceptions import (
    DomainError,
    SessionAlreadyExistsError,
    SessionNotFoundError,
)
from ...domain.shared.messages import LogTemplates
from ...domain.shared.types import Identity, SessionName
from ...domain.voting.entities import Proposal, Voter
from ...domain.voting.session import VotingSession
from ...domain.voting.value_objects import TallyResult

if TYPE_CHECKING:
    from ...domain.shared.events import AuditLog
    from ...domain.voting.repository import VotingSessionRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")

_identity = TypeAdapter(Identity)
_session_name = TypeAdapter(SessionName)


class VotingApplicationService:
    """Runs domain operations against persisted voting sessions.

    Calls are serialised: each one loads the session, applies the operation,
    writes state plus the call's events in one transaction and only then
    appends the events to the audit log. A rejected call writes nothing.
    """

    def __init__(
        self,
        *,
        session_repository: VotingSessionRepository,
        audit_log: AuditLog,
    ) -> None:
        self._session_repo = session_repository
        self._audit_log = audit_log
        self._lock = asyncio.Lock()

    async def open_session(self, session_id: str, administrator: str) -> VotingSession:
        session_id = _session_name.validate_python(session_id)
        administrator = _identity.validate_python(administrator)

        async with self._lock:
            if await self._session_repo.exists(session_id):
                raise SessionAlreadyExistsError(session_id)
            session = VotingSession.create(administrator, session_id=session_id)
            await self._session_repo.save(session)

        logger.info(LogTemplates.SESSION_OPENED, session_id, administrator)
        return session

    async def get_session(self, session_id: str) -> VotingSession:
        session = await self._session_repo.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    # === Access control ===

    async def transfer_ownership(self, session_id: str, caller: str, new_owner: str) -> None:
        await self._execute(
            session_id, caller, "transfer_ownership", lambda s: s.transfer_ownership(caller, new_owner)
        )

    # === Registries ===

    async def register_voter(self, session_id: str, caller: str, identity: str) -> None:
        identity = _identity.validate_python(identity)
        await self._execute(
            session_id, caller, "register_voter", lambda s: s.register_voter(caller, identity)
        )

    async def get_voter(self, session_id: str, caller: str, identity: str) -> Voter:
        return await self._read(
            session_id, caller, "get_voter", lambda s: s.get_voter(caller, identity)
        )

    async def submit_proposal(self, session_id: str, caller: str, description: str) -> int:
        return await self._execute(
            session_id, caller, "submit_proposal", lambda s: s.submit_proposal(caller, description)
        )

    async def get_proposal(self, session_id: str, caller: str, index: int) -> Proposal:
        return await self._read(
            session_id, caller, "get_proposal", lambda s: s.get_proposal(caller, index)
        )

    # === Workflow ===

    async def start_proposals_registering(self, session_id: str, caller: str) -> None:
        await self._execute(
            session_id,
            caller,
            "start_proposals_registering",
            lambda s: s.start_proposals_registering(caller),
        )

    async def end_proposals_registering(self, session_id: str, caller: str) -> None:
        await self._execute(
            session_id,
            caller,
            "end_proposals_registering",
            lambda s: s.end_proposals_registering(caller),
        )

    async def start_voting_session(self, session_id: str, caller: str) -> None:
        await self._execute(
            session_id, caller, "start_voting_session", lambda s: s.start_voting_session(caller)
        )

    async def end_voting_session(self, session_id: str, caller: str) -> None:
        await self._execute(
            session_id, caller, "end_voting_session", lambda s: s.end_voting_session(caller)
        )

    # === Ballots and tally ===

    async def cast_vote(self, session_id: str, caller: str, proposal_index: int) -> None:
        await self._execute(
            session_id, caller, "cast_vote", lambda s: s.cast_vote(caller, proposal_index)
        )

    async def tally_votes(self, session_id: str, caller: str) -> TallyResult:
        return await self._execute(
            session_id, caller, "tally_votes", lambda s: s.tally_votes(caller)
        )

    async def reset_voting(self, session_id: str, caller: str) -> None:
        await self._execute(session_id, caller, "reset_voting", lambda s: s.reset_voting(caller))

    # === Plumbing ===

    async def _execute(
        self,
        session_id: str,
        caller: str,
        operation: str,
        action: Callable[[VotingSession], T],
    ) -> T:
        async with self._lock:
            session = await self.get_session(session_id)
            outcome = self._apply(session, caller, operation, action)

            events = session.pull_events()
            await self._session_repo.save(session, events)
            # Published under the lock so the audit log order is the commit order.
            self._audit_log.extend(events)

        logger.info(LogTemplates.OPERATION_COMMITTED, operation, session_id, caller)
        return outcome

    async def _read(
        self,
        session_id: str,
        caller: str,
        operation: str,
        action: Callable[[VotingSession], T],
    ) -> T:
        async with self._lock:
            session = await self.get_session(session_id)
            return self._apply(session, caller, operation, action)

    @staticmethod
    def _apply(
        session: VotingSession,
        caller: str,
        operation: str,
        action: Callable[[VotingSession], T],
    ) -> T:
        try:
            return action(session)
        except DomainError as e:
            logger.warning(
                LogTemplates.OPERATION_REJECTED, operation, session.session_id, caller, e.code, e.message
            )
            raise
