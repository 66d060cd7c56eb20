# Shared pytest configuration and fixtures for all test types
import pytest_asyncio
from datetime import datetime, timezone
from decimal import Decimal
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

from common.db.base import Base
from common.db.session import Database
from packages.billing.models.database import (
    CreditUsageEntity,
    PaymentHistoryEntity,
    SubscriptionPlanEntity,
    UserSubscriptionEntity,
)
from packages.billing.models.domain.enums import (
    BillingInterval,
    PaymentStatus,
    UserSubscriptionStatus,
)

# Test database URL
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

FIXED_NOW = datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


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

    Using join_transaction_mode="create_savepoint" so Database.transaction()
    commits and rollbacks act on savepoints inside the outer test transaction.
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


@pytest_asyncio.fixture(scope="function")
async def database(test_session_factory):
    """Database handle backed by the test connection."""
    return Database(test_session_factory)


@pytest_asyncio.fixture(scope="function")
async def client(database: Database):
    """Create a test client."""
    app.state.database = database

    try:
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as ac:
            yield ac
    finally:
        del app.state.database


@pytest_asyncio.fixture(scope="function")
async def sample_plan(test_db: AsyncSession):
    """Create a sample monthly plan for testing."""
    plan = SubscriptionPlanEntity(
        name="Pro",
        description="Pro monthly plan",
        price=Decimal("19.90"),
        currency="USD",
        interval=BillingInterval.MONTH.value,
        credit=1000,
        creem_product_id="prod_pro_monthly",
        is_active=True,
    )
    test_db.add(plan)
    await test_db.commit()
    await test_db.refresh(plan)
    return plan


@pytest_asyncio.fixture(scope="function")
async def sample_credit_usage(test_db: AsyncSession):
    """Create a credit usage record for user_1 with some credits spent."""
    usage = CreditUsageEntity(
        user_id="user_1",
        credit_used=30,
        credit_total=100,
        period_start=datetime(2025, 1, 1, tzinfo=timezone.utc),
        period_end=datetime(2025, 2, 1, tzinfo=timezone.utc),
    )
    test_db.add(usage)
    await test_db.commit()
    await test_db.refresh(usage)
    return usage


@pytest_asyncio.fixture(scope="function")
async def sample_subscription(test_db: AsyncSession):
    """Create an active subscription for user_1."""
    subscription = UserSubscriptionEntity(
        user_id="user_1",
        subscription_plan_id=1,
        status=UserSubscriptionStatus.ACTIVE.value,
        current_period_start=datetime(2025, 1, 1, tzinfo=timezone.utc),
        current_period_end=datetime(2025, 2, 1, tzinfo=timezone.utc),
        creem_subscription_id="sub_1",
        creem_customer_id="cust_1",
    )
    test_db.add(subscription)
    await test_db.commit()
    await test_db.refresh(subscription)
    return subscription


@pytest_asyncio.fixture(scope="function")
async def sample_payment(test_db: AsyncSession):
    """Create a completed one-time payment for user_1."""
    payment = PaymentHistoryEntity(
        user_id="user_1",
        subscription_plan_id=1,
        amount=Decimal("9.99"),
        currency="USD",
        interval=BillingInterval.MONTH.value,
        status=PaymentStatus.COMPLETED.value,
        creem_payment_intent_id="ch_1",
        creem_product_id="prod_credits",
        creem_customer_id="cust_1",
    )
    test_db.add(payment)
    await test_db.commit()
    await test_db.refresh(payment)
    return payment
