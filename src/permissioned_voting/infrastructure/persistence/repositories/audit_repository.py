"""SQLite implementation of the audit trail read side."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from permissioned_voting.domain.shared.events import event_from_payload
from permissioned_voting.domain.voting.repository import AuditRecord, AuditTrailRepository

if TYPE_CHECKING:
    from ..database import Database


class SQLiteAuditTrailRepository(AuditTrailRepository):
    def __init__(self, database: Database) -> None:
        self._db = database

    async def list_events(self, session_id: str, after_sequence: int = 0) -> list[AuditRecord]:
        rows = await self._db.fetch_all(
            """
            SELECT sequence, event_type, payload FROM audit_events
            WHERE session_id = ? AND sequence > ?
            ORDER BY sequence ASC
            """,
            (session_id, after_sequence),
        )
        return [
            AuditRecord(
                sequence=row["sequence"],
                event=event_from_payload(row["event_type"], json.loads(row["payload"])),
            )
            for row in rows
        ]

    async def count(self, session_id: str) -> int:
        row = await self._db.fetch_one(
            "SELECT COUNT(*) AS count FROM audit_events WHERE session_id = ?",
            (session_id,),
        )
        return row["count"] if row else 0
