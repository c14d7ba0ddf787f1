"""SQLite implementation of the voting session repository."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from permissioned_voting.domain.access.ownable import Ownable
from permissioned_voting.domain.shared.datetime_utils import UtcDateTime
from permissioned_voting.domain.shared.enums import WorkflowStatus
from permissioned_voting.domain.shared.events import DomainEvent
from permissioned_voting.domain.shared.messages import LogTemplates
from permissioned_voting.domain.voting.entities import Proposal, Voter
from permissioned_voting.domain.voting.repository import VotingSessionRepository
from permissioned_voting.domain.voting.session import VotingSession
from permissioned_voting.domain.voting.value_objects import TallyResult

if TYPE_CHECKING:
    from ..database import Database

logger = logging.getLogger(__name__)


class SQLiteVotingSessionRepository(VotingSessionRepository):
    def __init__(self, database: Database) -> None:
        self._db = database

    async def get(self, session_id: str) -> VotingSession | None:
        session_row = await self._db.fetch_one(
            "SELECT * FROM voting_sessions WHERE session_id = ?",
            (session_id,),
        )

        if session_row is None:
            return None

        voter_rows = await self._db.fetch_all(
            """
            SELECT * FROM voters
            WHERE session_id = ?
            ORDER BY position ASC
            """,
            (session_id,),
        )
        proposal_rows = await self._db.fetch_all(
            """
            SELECT * FROM proposals
            WHERE session_id = ?
            ORDER BY proposal_id ASC
            """,
            (session_id,),
        )

        voters = {row["identity"]: self._row_to_voter(row) for row in voter_rows}
        voter_ids = [row["identity"] for row in voter_rows if row["is_registered"]]

        result: TallyResult | None = None
        if session_row["winning_proposal_id"] is not None:
            result = TallyResult(
                winning_proposal_id=session_row["winning_proposal_id"],
                is_tie=bool(session_row["is_tie"]),
            )

        return VotingSession(
            session_id=session_id,
            access=Ownable(owner=session_row["owner"]),
            status=WorkflowStatus(session_row["status"]),
            voters=voters,
            voter_ids=voter_ids,
            proposals=[self._row_to_proposal(row) for row in proposal_rows],
            result=result,
        )

    async def exists(self, session_id: str) -> bool:
        row = await self._db.fetch_one(
            "SELECT 1 FROM voting_sessions WHERE session_id = ?",
            (session_id,),
        )
        return row is not None

    async def save(self, session: VotingSession, events: Sequence[DomainEvent] = ()) -> None:
        now = UtcDateTime.now().iso
        result = session.result

        async with self._db.transaction() as conn:
            await conn.execute(
                """
                INSERT INTO voting_sessions (
                    session_id, owner, status, winning_proposal_id, is_tie, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(session_id) DO UPDATE SET
                    owner = excluded.owner,
                    status = excluded.status,
                    winning_proposal_id = excluded.winning_proposal_id,
                    is_tie = excluded.is_tie,
                    updated_at = excluded.updated_at
                """,
                (
                    session.session_id,
                    session.owner,
                    session.status.value,
                    result.winning_proposal_id if result else None,
                    int(result.is_tie) if result else None,
                    now,
                    now,
                ),
            )

            await conn.execute("DELETE FROM voters WHERE session_id = ?", (session.session_id,))
            for position, identity in enumerate(session.voter_ids):
                voter = session.voters[identity]
                await conn.execute(
                    """
                    INSERT INTO voters (
                        session_id, identity, position, is_registered, has_voted, voted_proposal_id
                    ) VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (
                        session.session_id,
                        identity,
                        position,
                        int(voter.is_registered),
                        int(voter.has_voted),
                        voter.voted_proposal_id,
                    ),
                )

            await conn.execute("DELETE FROM proposals WHERE session_id = ?", (session.session_id,))
            for proposal_id, proposal in enumerate(session.proposals):
                await conn.execute(
                    """
                    INSERT INTO proposals (session_id, proposal_id, description, vote_count)
                    VALUES (?, ?, ?, ?)
                    """,
                    (session.session_id, proposal_id, proposal.description, proposal.vote_count),
                )

            for event in events:
                await conn.execute(
                    """
                    INSERT INTO audit_events (session_id, event_id, event_type, payload, occurred_at)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    self._event_to_params(event, session.session_id),
                )

        logger.debug(LogTemplates.SESSION_SAVED, session.session_id, session.status.value, len(events))

    async def delete(self, session_id: str) -> bool:
        exists = await self.exists(session_id)
        if not exists:
            return False

        await self._db.execute("DELETE FROM voting_sessions WHERE session_id = ?", (session_id,))
        logger.debug(LogTemplates.SESSION_DELETED, session_id)
        return True

    @staticmethod
    def _row_to_voter(row: dict[str, Any]) -> Voter:
        return Voter(
            is_registered=bool(row["is_registered"]),
            has_voted=bool(row["has_voted"]),
            voted_proposal_id=row["voted_proposal_id"],
        )

    @staticmethod
    def _row_to_proposal(row: dict[str, Any]) -> Proposal:
        return Proposal(description=row["description"], vote_count=row["vote_count"])

    @staticmethod
    def _event_to_params(event: DomainEvent, session_id: str) -> tuple[Any, ...]:
        payload = event.model_dump(mode="json")
        return (
            event.session_id or session_id,
            event.event_id,
            event.event_type,
            json.dumps(payload),
            UtcDateTime(event.occurred_at).iso,
        )
