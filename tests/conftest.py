# Shared pytest configuration and fixtures for all test types
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from slowapi import Limiter
from slowapi.util import get_remote_address
from unittest.mock import patch

# Create test limiter with no limits and in-memory storage
test_limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[],
    storage_uri="memory://",
)

# Patch the limiter before importing the app so decorators use test limiter
with patch("common.providers.rate_limiter.limiter.limiter", test_limiter):
    from api.main import app

from common.db.session import get_db
from common.db.base import Base
from packages.auth.dependencies import get_current_active_user
from packages.auth.models.domain.authenticated_user import AuthenticatedUser
from packages.users.models.database.user import UserEntity
from packages.plans.models.database.plan import PlanConfigEntity, UserPlanEntity
from packages.teams.models.database.team import TeamEntity, TeamMembershipEntity
from packages.workspaces.models.database.workspace import WorkspaceEntity
from packages.query_collections.models.database.collection import (
    QueryCollectionEntity,
)
from packages.queries.models.database.query import QueryItemEntity

# Test database URL
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create test database engine and initialize schema."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def test_connection(test_engine):
    """Create test connection with outer transaction for rollback isolation."""
    async with test_engine.connect() as connection:
        trans = await connection.begin()
        yield connection
        await trans.rollback()


@pytest_asyncio.fixture(scope="function")
async def test_session_factory(test_connection):
    """Create session factory bound to test connection.

    Using join_transaction_mode="create_savepoint" so nested transaction()
    calls create savepoints instead of real nested transactions.
    """
    return async_sessionmaker(
        bind=test_connection,
        class_=AsyncSession,
        expire_on_commit=False,
        join_transaction_mode="create_savepoint",
    )


@pytest_asyncio.fixture(scope="function")
async def test_db(test_session_factory):
    """Create a test database session."""
    async with test_session_factory() as session:
        yield session


@pytest_asyncio.fixture(scope="function", autouse=True)
async def patch_lazy_sessions(test_session_factory, monkeypatch):
    """
    Patch the session factory to use test database.

    This allows real transaction() and get_session() to run with proper
    commit/rollback/ContextVar semantics while using the test database.
    """
    monkeypatch.setattr("common.db.scoped.AsyncSessionLocal", test_session_factory)


@pytest_asyncio.fixture(scope="function")
async def client(test_db: AsyncSession, test_user):
    """Create a test client."""

    def override_get_db():
        try:
            yield test_db
        finally:
            pass

    def override_get_current_active_user():
        return test_user

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_active_user] = override_get_current_active_user

    try:
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def sample_user_entity(test_db: AsyncSession):
    """Create a user with a linked Stripe customer."""
    user = UserEntity(
        email="test@example.com",
        first_name="Test",
        last_name="User",
        stripe_customer_id="cus_test123",
    )
    test_db.add(user)
    await test_db.commit()
    await test_db.refresh(user)
    return user


@pytest_asyncio.fixture
async def second_user_entity(test_db: AsyncSession):
    """Create a second user without a Stripe customer."""
    user = UserEntity(
        email="second@example.com",
        first_name="Second",
        last_name="User",
    )
    test_db.add(user)
    await test_db.commit()
    await test_db.refresh(user)
    return user


@pytest_asyncio.fixture(scope="function")
async def test_user(sample_user_entity):
    """Create a test authenticated user."""
    return AuthenticatedUser(
        user_id=sample_user_entity.id,
        email=sample_user_entity.email,
    )


@pytest_asyncio.fixture
async def basic_plan_config(test_db: AsyncSession):
    """Seed the basic plan used as the fallback for unassigned users."""
    plan = PlanConfigEntity(
        id="basic",
        max_query_count=20,
        max_team_count=1,
        max_team_member_count=2,
        allow_more_team_members=False,
    )
    test_db.add(plan)
    await test_db.commit()
    await test_db.refresh(plan)
    return plan


@pytest_asyncio.fixture
async def pro_plan_config(test_db: AsyncSession):
    """Seed a paid plan that allows buying team member seats."""
    plan = PlanConfigEntity(
        id="pro",
        stripe_product_id="prod_pro",
        max_query_count=1000,
        max_team_count=10,
        max_team_member_count=5,
        allow_more_team_members=True,
    )
    test_db.add(plan)
    await test_db.commit()
    await test_db.refresh(plan)
    return plan


@pytest_asyncio.fixture
async def sample_user_plan(test_db: AsyncSession, sample_user_entity, pro_plan_config):
    """Assign the sample user to the pro plan with one seat."""
    user_plan = UserPlanEntity(
        user_id=sample_user_entity.id,
        plan_config_id=pro_plan_config.id,
        quantity=1,
    )
    test_db.add(user_plan)
    await test_db.commit()
    await test_db.refresh(user_plan)
    return user_plan


@pytest_asyncio.fixture
async def sample_workspace(test_db: AsyncSession, sample_user_entity):
    """Create a workspace owned by the sample user."""
    workspace = WorkspaceEntity(name="My workspace", owner_id=sample_user_entity.id)
    test_db.add(workspace)
    await test_db.commit()
    await test_db.refresh(workspace)
    return workspace


@pytest_asyncio.fixture
async def sharing_world(test_db: AsyncSession, sample_user_entity, second_user_entity):
    """
    Teams, workspaces, collections and queries shared between two users.

    From the sample user's point of view:
        teams:       own 1, access 2
        collections: own 2, access 3
        queries:     own 3, access 4
    """
    me = sample_user_entity.id
    other = second_user_entity.id

    my_team = TeamEntity(name="Mine", owner_id=me)
    joined_team = TeamEntity(name="Joined", owner_id=other)
    foreign_team = TeamEntity(name="Foreign", owner_id=other)
    deleted_team = TeamEntity(name="Gone", owner_id=me, deleted=True)
    test_db.add_all([my_team, joined_team, foreign_team, deleted_team])
    await test_db.flush()

    test_db.add(TeamMembershipEntity(team_id=joined_team.id, user_id=me))

    my_ws = WorkspaceEntity(name="My workspace", owner_id=me)
    joined_ws = WorkspaceEntity(name="Joined", owner_id=other, team_id=joined_team.id)
    foreign_ws = WorkspaceEntity(
        name="Foreign", owner_id=other, team_id=foreign_team.id
    )
    private_ws = WorkspaceEntity(name="Private", owner_id=other)
    deleted_ws = WorkspaceEntity(
        name="Gone", owner_id=other, team_id=joined_team.id, deleted=True
    )
    test_db.add_all([my_ws, joined_ws, foreign_ws, private_ws, deleted_ws])
    await test_db.flush()

    mine = QueryCollectionEntity(name="Mine", owner_id=me, workspace_id=my_ws.id)
    shared = QueryCollectionEntity(
        name="Shared", owner_id=other, workspace_id=joined_ws.id
    )
    foreign = QueryCollectionEntity(
        name="Foreign", owner_id=other, workspace_id=foreign_ws.id
    )
    mine_elsewhere = QueryCollectionEntity(
        name="Mine elsewhere", owner_id=me, workspace_id=private_ws.id
    )
    mine_deleted = QueryCollectionEntity(
        name="Gone", owner_id=me, workspace_id=my_ws.id, deleted=True
    )
    in_deleted_ws = QueryCollectionEntity(
        name="In deleted workspace", owner_id=other, workspace_id=deleted_ws.id
    )
    test_db.add_all(
        [mine, shared, foreign, mine_elsewhere, mine_deleted, in_deleted_ws]
    )
    await test_db.flush()

    test_db.add_all(
        [
            QueryItemEntity(name="q1", owner_id=me, collection_id=mine.id),
            QueryItemEntity(name="q2", owner_id=me, collection_id=mine.id),
            QueryItemEntity(name="q3", owner_id=other, collection_id=shared.id),
            QueryItemEntity(name="q4", owner_id=other, collection_id=foreign.id),
            QueryItemEntity(name="q5", owner_id=me, collection_id=foreign.id),
            QueryItemEntity(
                name="q6", owner_id=me, collection_id=mine.id, deleted=True
            ),
        ]
    )
    await test_db.commit()
    return sample_user_entity
