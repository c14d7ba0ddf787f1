"""Query for the committed event history of a voting session."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from permissioned_voting.domain.shared.types import NonNegativeInt, SessionName
from permissioned_voting.domain.voting.repository import AuditRecord

if TYPE_CHECKING:
    from ...domain.voting.repository import AuditTrailRepository


class GetAuditTrailQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    session_id: SessionName
    after_sequence: NonNegativeInt = 0


class GetAuditTrailHandler:

    def __init__(self, *, audit_trail_repository: AuditTrailRepository) -> None:
        self._audit_repo = audit_trail_repository

    async def handle(self, query: GetAuditTrailQuery) -> list[AuditRecord]:
        return await self._audit_repo.list_events(query.session_id, query.after_sequence)
