"""Pytest configuration and fixtures for worktrack.

Service and API tests run against a throwaway SQLite database (aiosqlite)
created per test from the ORM metadata. Tests that need real row-level
concurrency run against Postgres (TEST_POSTGRES_URL) and are marked
requires_db; they are skipped when it is not set.
"""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./worktrack-test.db"
os.environ["SECRET_KEY"] = "test-secret-key-for-unit-tests-only-min-32-chars"
os.environ["REDIS_ENABLED"] = "false"
os.environ["RATE_LIMIT_WRITES"] = "1000/minute"

from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from types import SimpleNamespace

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from worktrack.core.config import get_settings

get_settings.cache_clear()

from worktrack.application.services.history_recorder import HistoryRecorder
from worktrack.application.services.permission_gate import PermissionGate
from worktrack.application.use_cases.tasks import (
    CollaborationService,
    PublicClaimService,
    TaskService,
    TimerService,
    TransferService,
)
from worktrack.infrastructure.persistence.database import (
    Base,
    get_db,
    get_db_transactional,
)
from worktrack.infrastructure.persistence.models import (
    Company,
    CompanyMember,
    Department,
    DepartmentMember,
)
from worktrack.infrastructure.persistence.repositories import (
    MembershipRepository,
    TaskAttachmentRepository,
    TaskCommentRepository,
    TaskHistoryRepository,
    TaskRepository,
    TaskTimeLogRepository,
    TaskTransferRepository,
)
from worktrack.infrastructure.security.jwt import create_access_token
from worktrack.infrastructure.services import CompanyRbacSeeder, PermissionResolver
from worktrack.main import create_app


class FakeClock:
    """Deterministic clock for services; advance() moves time forward."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 3, 2, 9, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@dataclass(frozen=True)
class Org:
    """Seeded company. Engineering: alice, bob, manager. Operations: carol.

    viewer is a company member without roles; outsider belongs to no company.
    alice is also a member of a second company (other_company_id).
    """

    company_id: str
    department_id: str
    other_department_id: str
    other_company_id: str
    admin: str = "u-admin"
    manager: str = "u-manager"
    alice: str = "u-alice"
    bob: str = "u-bob"
    carol: str = "u-carol"
    viewer: str = "u-viewer"
    outsider: str = "u-outsider"


async def seed_org(session: AsyncSession) -> Org:
    """Create companies, departments, memberships and default roles; commit."""
    company = Company(name="Acme", is_active=True)
    other_company = Company(name="Globex", is_active=True)
    session.add_all([company, other_company])
    await session.flush()
    engineering = Department(company_id=company.id, name="Engineering")
    operations = Department(company_id=company.id, name="Operations")
    session.add_all([engineering, operations])
    await session.flush()

    org = Org(
        company_id=company.id,
        department_id=engineering.id,
        other_department_id=operations.id,
        other_company_id=other_company.id,
    )
    for user_id in (org.admin, org.manager, org.alice, org.bob, org.carol, org.viewer):
        session.add(CompanyMember(company_id=org.company_id, user_id=user_id, is_active=True))
    session.add(CompanyMember(company_id=org.other_company_id, user_id=org.alice, is_active=True))
    for user_id in (org.manager, org.alice, org.bob):
        session.add(
            DepartmentMember(department_id=org.department_id, user_id=user_id, is_active=True)
        )
    session.add(
        DepartmentMember(department_id=org.other_department_id, user_id=org.carol, is_active=True)
    )
    await session.flush()

    seeder = CompanyRbacSeeder(session)
    await seeder.seed_default_roles(org.company_id)
    await seeder.seed_default_roles(org.other_company_id)
    await seeder.assign_role(org.company_id, org.admin, "admin")
    await seeder.assign_role(org.company_id, org.manager, "manager")
    for user_id in (org.alice, org.bob, org.carol):
        await seeder.assign_role(org.company_id, user_id, "member")
    await seeder.assign_role(org.other_company_id, org.alice, "admin")
    await session.commit()
    return org


def build_services(session: AsyncSession, clock: FakeClock) -> SimpleNamespace:
    """Wire every task service to real repositories on one session."""
    gate = PermissionGate(PermissionResolver(session))
    history = HistoryRecorder(TaskHistoryRepository(session))
    membership = MembershipRepository(session)
    task_repo = TaskRepository(session)
    return SimpleNamespace(
        tasks=TaskService(task_repo, history, gate, membership, clock),
        timers=TimerService(task_repo, TaskTimeLogRepository(session), history, gate, clock),
        transfers=TransferService(
            task_repo, TaskTransferRepository(session), membership, gate, clock
        ),
        claims=PublicClaimService(task_repo, history, gate, clock),
        collaboration=CollaborationService(
            task_repo,
            TaskCommentRepository(session),
            TaskAttachmentRepository(session),
            history,
            gate,
            clock,
        ),
        history_repo=TaskHistoryRepository(session),
    )


@pytest.fixture
async def engine(tmp_path) -> AsyncIterator[AsyncEngine]:
    """Fresh SQLite database file with all tables."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'worktrack.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    async with session_factory() as session:
        yield session


@pytest.fixture
async def org(db_session: AsyncSession) -> Org:
    return await seed_org(db_session)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def services(db_session: AsyncSession, clock: FakeClock) -> SimpleNamespace:
    return build_services(db_session, clock)


@pytest.fixture
def services_for(clock: FakeClock) -> Callable[[AsyncSession], SimpleNamespace]:
    """Build services on a caller-managed session (one per concurrent request)."""
    return lambda session: build_services(session, clock)


@pytest.fixture
async def pg_session_factory() -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    """Session factory on TEST_POSTGRES_URL with fresh tables; skips when unset."""
    url = os.environ.get("TEST_POSTGRES_URL")
    if not url:
        pytest.skip("TEST_POSTGRES_URL not set")
    pg_engine = create_async_engine(url, pool_size=10)
    async with pg_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(pg_engine, class_=AsyncSession, expire_on_commit=False)
    async with pg_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await pg_engine.dispose()


@pytest.fixture
async def pg_org(pg_session_factory: async_sessionmaker[AsyncSession]) -> Org:
    async with pg_session_factory() as session:
        return await seed_org(session)


@pytest.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against a fresh app whose DB dependencies use the test database."""

    async def override_get_db() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            yield session

    async def override_get_db_transactional() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            async with session.begin():
                yield session

    app = create_app()
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_db_transactional] = override_get_db_transactional
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def headers_for(org: Org) -> Callable[..., dict[str, str]]:
    """Build Authorization + X-Company-ID headers for a user (defaults to org's company)."""

    def _headers(user_id: str, company_id: str | None = None) -> dict[str, str]:
        token = create_access_token({"sub": user_id})
        return {
            "Authorization": f"Bearer {token}",
            "X-Company-ID": company_id or org.company_id,
        }

    return _headers
