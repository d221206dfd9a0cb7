"""
Ministry Hub - Test Configuration and Fixtures
"""
import os
from typing import AsyncGenerator
import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool
from faker import Faker

# Set testing environment before the app reads its settings
os.environ['ENVIRONMENT'] = 'test'
os.environ['DATABASE_URL'] = 'sqlite+aiosqlite:///./test.db'
os.environ['SECRET_KEY'] = 'test-secret-key-for-testing-only'
os.environ['JWT_SECRET_KEY'] = 'test-jwt-secret-key-for-testing'
os.environ['ANTHROPIC_API_KEY'] = ''
os.environ['GIVING_WEBHOOK_SECRET'] = 'test-webhook-secret'
os.environ['RATE_LIMIT_ENABLED'] = 'false'
os.environ['REDIS_URL'] = ''
os.environ['BCRYPT_ROUNDS'] = '4'
os.environ['LOG_FILE'] = ''
os.environ['LOG_LEVEL'] = 'WARNING'

from ministry_hub.main import app
from ministry_hub.core.database import Base, get_db
from ministry_hub.core.security import get_password_hash, create_access_token, token_payload_for
from ministry_hub.models import Member, MemberRole, MemberTier

fake = Faker()

TEST_PASSWORD = 'testpassword123'

# Test database setup
TEST_DATABASE_URL = 'sqlite+aiosqlite:///./test.db'
test_engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)
TestSessionLocal = async_sessionmaker(
    bind=test_engine,
    class_=AsyncSession,
    expire_on_commit=False
)


@pytest.fixture(scope='function')
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database for each test"""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionLocal() as session:
        yield session
        await session.rollback()

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database override"""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac

    app.dependency_overrides.clear()


async def create_member(db_session: AsyncSession, tier: MemberTier = MemberTier.FREE,
                        role: MemberRole = MemberRole.MEMBER, **kwargs) -> Member:
    member = Member(
        email=kwargs.pop('email', None) or f"{fake.user_name()}.{fake.random_int(1000, 9999)}@example.com",
        hashed_password=get_password_hash(TEST_PASSWORD),
        first_name=kwargs.pop('first_name', None) or fake.first_name(),
        last_name=kwargs.pop('last_name', None) or fake.last_name(),
        tier=tier.value,
        role=role.value,
        is_active=kwargs.pop('is_active', True),
        **kwargs
    )
    db_session.add(member)
    await db_session.commit()
    await db_session.refresh(member)
    return member


def headers_for(member: Member) -> dict:
    """Bearer header for a member"""
    token = create_access_token(token_payload_for(member))
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
async def test_member(db_session: AsyncSession) -> Member:
    """A free-tier member"""
    return await create_member(db_session)


@pytest.fixture
async def partner_member(db_session: AsyncSession) -> Member:
    return await create_member(db_session, tier=MemberTier.PARTNER)


@pytest.fixture
async def staff_member(db_session: AsyncSession) -> Member:
    return await create_member(db_session, role=MemberRole.STAFF)


@pytest.fixture
async def admin_member(db_session: AsyncSession) -> Member:
    return await create_member(db_session, tier=MemberTier.COVENANT, role=MemberRole.ADMIN)


@pytest.fixture
def auth_headers(test_member: Member) -> dict:
    return headers_for(test_member)


@pytest.fixture
def partner_headers(partner_member: Member) -> dict:
    return headers_for(partner_member)


@pytest.fixture
def staff_headers(staff_member: Member) -> dict:
    return headers_for(staff_member)


@pytest.fixture
def admin_headers(admin_member: Member) -> dict:
    return headers_for(admin_member)


@pytest.fixture
def test_member_data() -> dict:
    """Registration payload"""
    return {
        'email': f"{fake.user_name()}.{fake.random_int(1000, 9999)}@example.com",
        'password': 'SecurePassword123!',
        'first_name': fake.first_name(),
        'last_name': fake.last_name(),
    }
