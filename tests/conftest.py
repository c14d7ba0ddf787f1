import pytest
import pytest_asyncio

ADMIN = "admin"
ALICE = "alice"
BOB = "bob"
CAROL = "carol"
OUTSIDER = "mallory"

# ============================================================================
# Database Fixtures
# ============================================================================


@pytest_asyncio.fixture
async def in_memory_database():
    """Create an in-memory SQLite database for testing."""
    from permissioned_voting.infrastructure.persistence.database import Database

    db = Database(":memory:")
    await db.initialize()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def session_repository(in_memory_database):
    """Create a voting session repository with in-memory database."""
    from permissioned_voting.infrastructure.persistence.repositories.session_repository import (
        SQLiteVotingSessionRepository,
    )

    return SQLiteVotingSessionRepository(in_memory_database)


@pytest_asyncio.fixture
async def audit_trail_repository(in_memory_database):
    """Create an audit trail repository with in-memory database."""
    from permissioned_voting.infrastructure.persistence.repositories.audit_repository import (
        SQLiteAuditTrailRepository,
    )

    return SQLiteAuditTrailRepository(in_memory_database)


@pytest.fixture
def audit_log():
    """Create an empty in-process audit log."""
    from permissioned_voting.domain.shared.events import AuditLog

    return AuditLog()


@pytest_asyncio.fixture
async def voting_service(session_repository, audit_log):
    """Create a voting application service backed by the in-memory database."""
    from permissioned_voting.application.services.voting_service import (
        VotingApplicationService,
    )

    return VotingApplicationService(session_repository=session_repository, audit_log=audit_log)


# ============================================================================
# Domain Fixtures
# ============================================================================


@pytest.fixture
def session():
    """A fresh session administered by ADMIN, still registering voters."""
    from permissioned_voting.domain.voting.session import VotingSession

    return VotingSession.create(ADMIN, session_id="test-election")


@pytest.fixture
def registered_session(session):
    """Session with ALICE, BOB and CAROL registered and events drained."""
    for identity in (ALICE, BOB, CAROL):
        session.register_voter(ADMIN, identity)
    session.pull_events()
    return session


@pytest.fixture
def proposals_session(registered_session):
    """Session in ProposalsRegistrationStarted with GENESIS only."""
    registered_session.start_proposals_registering(ADMIN)
    registered_session.pull_events()
    return registered_session


@pytest.fixture
def voting_session(proposals_session):
    """Session in VotingSessionStarted with proposals X (1) and Y (2)."""
    proposals_session.submit_proposal(ALICE, "X")
    proposals_session.submit_proposal(BOB, "Y")
    proposals_session.end_proposals_registering(ADMIN)
    proposals_session.start_voting_session(ADMIN)
    proposals_session.pull_events()
    return proposals_session


@pytest.fixture
def ended_session(voting_session):
    """Session in VotingSessionEnded after A->X, B->X, C->Y."""
    voting_session.cast_vote(ALICE, 1)
    voting_session.cast_vote(BOB, 1)
    voting_session.cast_vote(CAROL, 2)
    voting_session.end_voting_session(ADMIN)
    voting_session.pull_events()
    return voting_session


@pytest.fixture
def tallied_session(ended_session):
    """Session in VotesTallied."""
    ended_session.tally_votes(ADMIN)
    ended_session.pull_events()
    return ended_session
