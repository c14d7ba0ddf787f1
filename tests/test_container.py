"""
Unit Tests for the Dependency Injection Container

Tests for:
- Lazy initialization and caching of every component
- Wiring between the service, repositories and audit log
- Lifecycle methods (initialize, shutdown)
"""

import logging

import pytest

from permissioned_voting.application.queries.get_audit_trail import GetAuditTrailHandler
from permissioned_voting.application.queries.get_results import GetResultsHandler
from permissioned_voting.application.services.voting_service import VotingApplicationService
from permissioned_voting.config.container import Container, create_container
from permissioned_voting.config.settings import DatabaseSettings, Settings
from permissioned_voting.domain.shared.events import AuditLog
from permissioned_voting.infrastructure.persistence.database import Database
from permissioned_voting.infrastructure.persistence.repositories import (
    SQLiteAuditTrailRepository,
    SQLiteVotingSessionRepository,
)


@pytest.fixture
def settings():
    return Settings(_env_file=None, database=DatabaseSettings(url="sqlite:///:memory:"))


@pytest.fixture
def container(settings):
    return create_container(settings)


class TestContainer:
    """Unit tests for the Container."""

    def test_create_container(self, container, settings):
        assert isinstance(container, Container)
        assert container.settings is settings

    def test_nothing_built_eagerly(self, container):
        assert container._database is None
        assert container._voting_service is None

    @pytest.mark.parametrize(
        ("attribute", "expected_type"),
        [
            ("database", Database),
            ("session_repository", SQLiteVotingSessionRepository),
            ("audit_trail_repository", SQLiteAuditTrailRepository),
            ("audit_log", AuditLog),
            ("voting_service", VotingApplicationService),
            ("get_results_handler", GetResultsHandler),
            ("get_audit_trail_handler", GetAuditTrailHandler),
        ],
    )
    def test_lazy_and_cached(self, container, attribute, expected_type):
        first = getattr(container, attribute)

        assert isinstance(first, expected_type)
        assert getattr(container, attribute) is first

    def test_database_uses_settings(self, container):
        assert container.database.db_path == ":memory:"

    def test_repositories_share_database(self, container):
        assert container.session_repository._db is container.database
        assert container.audit_trail_repository._db is container.database

    def test_audit_log_logs_committed_events(self, container, caplog):
        from permissioned_voting.domain.shared.events import VoterRegistered

        with caplog.at_level(logging.INFO, logger="permissioned_voting.audit"):
            container.audit_log.append(VoterRegistered(session_id="s1", voter="alice"))

        assert "audit VoterRegistered session=s1 voter=alice" in caplog.text


class TestContainerLifecycle:
    """Lifecycle of the container's async resources."""

    async def test_initialize_and_shutdown(self, container):
        await container.initialize()
        assert container.database.is_initialized

        await container.shutdown()
        assert not container.database.is_initialized

    async def test_shutdown_without_database(self, container):
        await container.shutdown()

        assert container._database is None

    async def test_service_round_trip(self, container):
        await container.initialize()
        try:
            await container.voting_service.open_session("wired", "admin")
            await container.voting_service.register_voter("wired", "admin", "alice")

            records = await container.audit_trail_repository.list_events("wired")

            assert [r.event.event_type for r in records] == ["VoterRegistered"]
            assert len(container.audit_log) == 1
        finally:
            await container.shutdown()
