"""Dependency Injection Container

Manages the application's dependency graph, providing lazy initialization
and lifecycle management for the database, repositories, audit log, the
voting application service and the query handlers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..domain.shared.messages import LogTemplates

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from ..application.queries.get_audit_trail import GetAuditTrailHandler
    from ..application.queries.get_results import GetResultsHandler
    from ..application.services.voting_service import VotingApplicationService
    from ..domain.shared.events import AuditLog
    from ..domain.voting.repository import AuditTrailRepository, VotingSessionRepository
    from ..infrastructure.persistence.database import Database
    from .settings import Settings


@dataclass
class Container:
    """Dependency injection container.

    Components are lazily initialized when first accessed and cached for the
    container's lifetime.
    """

    settings: Settings

    # Persistence layer
    _database: Database | None = None
    _session_repository: VotingSessionRepository | None = None
    _audit_trail_repository: AuditTrailRepository | None = None

    # Audit
    _audit_log: AuditLog | None = None

    # Application services
    _voting_service: VotingApplicationService | None = None

    # Query handlers
    _get_results_handler: GetResultsHandler | None = None
    _get_audit_trail_handler: GetAuditTrailHandler | None = None

    # === Database ===

    @property
    def database(self) -> Database:
        """Get the database connection manager."""
        if self._database is None:
            from ..infrastructure.persistence.database import Database

            self._database = Database(self.settings.database.url, settings=self.settings.database)
        return self._database

    # === Repositories ===

    @property
    def session_repository(self) -> VotingSessionRepository:
        """Get the voting session repository."""
        if self._session_repository is None:
            from ..infrastructure.persistence.repositories.session_repository import (
                SQLiteVotingSessionRepository,
            )

            self._session_repository = SQLiteVotingSessionRepository(self.database)
        return self._session_repository

    @property
    def audit_trail_repository(self) -> AuditTrailRepository:
        """Get the audit trail repository."""
        if self._audit_trail_repository is None:
            from ..infrastructure.persistence.repositories.audit_repository import (
                SQLiteAuditTrailRepository,
            )

            self._audit_trail_repository = SQLiteAuditTrailRepository(self.database)
        return self._audit_trail_repository

    # === Audit ===

    @property
    def audit_log(self) -> AuditLog:
        """Get the in-process audit log, with the logging subscriber attached."""
        if self._audit_log is None:
            from ..domain.shared.events import AuditLog
            from ..utils.logging import AuditEventLogger

            self._audit_log = AuditLog()
            self._audit_log.subscribe(AuditEventLogger())
        return self._audit_log

    # === Application Services ===

    @property
    def voting_service(self) -> VotingApplicationService:
        """Get the voting application service."""
        if self._voting_service is None:
            from ..application.services.voting_service import VotingApplicationService

            self._voting_service = VotingApplicationService(
                session_repository=self.session_repository,
                audit_log=self.audit_log,
            )
        return self._voting_service

    # === Query Handlers ===

    @property
    def get_results_handler(self) -> GetResultsHandler:
        """Get the election results query handler."""
        if self._get_results_handler is None:
            from ..application.queries.get_results import GetResultsHandler

            self._get_results_handler = GetResultsHandler(
                session_repository=self.session_repository
            )
        return self._get_results_handler

    @property
    def get_audit_trail_handler(self) -> GetAuditTrailHandler:
        """Get the audit trail query handler."""
        if self._get_audit_trail_handler is None:
            from ..application.queries.get_audit_trail import GetAuditTrailHandler

            self._get_audit_trail_handler = GetAuditTrailHandler(
                audit_trail_repository=self.audit_trail_repository
            )
        return self._get_audit_trail_handler

    # === Lifecycle ===

    async def initialize(self) -> None:
        """Initialize all async resources."""
        await self.database.initialize()
        logger.debug(LogTemplates.CONTAINER_INITIALIZED)

    async def shutdown(self) -> None:
        """Shutdown and cleanup all resources."""
        if self._database is not None:
            await self._database.close()
        logger.debug(LogTemplates.CONTAINER_SHUTDOWN)


def create_container(settings: Settings) -> Container:
    """Create a new dependency injection container."""
    return Container(settings)
