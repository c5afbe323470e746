"""
Centralized Test Configuration.
"""

import pytest
from decimal import Decimal
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from flightschool.app.main import app
from flightschool.app.db.session import get_db, Base
from flightschool.app.core.jwt import create_access_token
import flightschool.app.core.redis_client as redis_client_module
from flightschool.app.models.enums import UserRole
from flightschool.app.models.user import User, UserRoleAssignment
from flightschool.app.models.invoice import Invoice, InvoiceClient, InvoiceItem
from flightschool.app.models.flight_log import FlightLog
from flightschool.app.models.ledger_enums import InvoiceStatus

# Setup In-Memory Test Database
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Event handler to enable foreign keys for SQLite
from sqlalchemy import event
from sqlalchemy.pool import Pool

@event.listens_for(Pool, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    """Enable foreign key constraints for SQLite."""
    if 'sqlite' in str(type(dbapi_conn)):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

engine = create_async_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)


# Mock Redis for reliability in CI/CD
class MockRedis:
    def __init__(self):
        self.store = {}

    async def set(self, key, value, ex=None):
        self.store[key] = value
        return True

    async def exists(self, key):
        return 1 if key in self.store else 0

    async def flushdb(self):
        self.store = {}


@pytest.fixture(scope="session")
def redis_client_session():
    return MockRedis()


@pytest.fixture(scope="session", autouse=True)
def apply_overrides(redis_client_session):
    """Apply overrides once for the session."""
    original_client = redis_client_module.redis_client
    redis_client_module.redis_client = redis_client_session

    async def override_get_db():
        async with TestingSessionLocal() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield

    # Restore and clear
    app.dependency_overrides = {}
    redis_client_module.redis_client = original_client


@pytest.fixture(autouse=True)
async def setup_database(redis_client_session):
    """Create tables before each test function and drop after."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    await redis_client_session.flushdb()

    yield

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def client():
    """Async client for testing."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


# Shared session for fixture data creation
@pytest.fixture
async def db_session():
    async with TestingSessionLocal() as session:
        yield session


# Data factories

@pytest.fixture
def create_user(db_session):
    async def _create_user(email, roles=(UserRole.PILOT,), is_active=True):
        user = User(
            email=email,
            full_name=email.split("@")[0].title(),
            is_active=is_active,
            roles=[UserRoleAssignment(role=role) for role in roles],
        )
        db_session.add(user)
        await db_session.commit()
        return user
    return _create_user


@pytest.fixture
def create_invoice(db_session):
    async def _create_invoice(
        user_id,
        issue_date,
        items,
        status=InvoiceStatus.PAID,
        smartbill_id=None,
        currency="RON",
    ):
        """items: list of (quantity, unit, name, total_amount) tuples."""
        invoice = Invoice(
            smartbill_id=smartbill_id,
            issue_date=issue_date,
            currency=currency,
            status=status,
            total_amount=sum((Decimal(str(item[3] or 0)) for item in items), Decimal("0")),
        )
        db_session.add(invoice)
        await db_session.flush()

        db_session.add(InvoiceClient(invoice_id=invoice.id, name="Client", user_id=user_id))
        for line_id, (quantity, unit, name, total_amount) in enumerate(items, start=1):
            db_session.add(InvoiceItem(
                invoice_id=invoice.id,
                line_id=line_id,
                name=name,
                quantity=Decimal(str(quantity)),
                unit=unit,
                total_amount=Decimal(str(total_amount)) if total_amount is not None else None,
            ))
        await db_session.commit()
        return invoice
    return _create_invoice


@pytest.fixture
def create_flight(db_session):
    async def _create_flight(
        flight_date,
        pilot_id,
        total_hours,
        flight_type="SCHOOL",
        payer_id=None,
        instructor_id=None,
    ):
        flight = FlightLog(
            date=flight_date,
            pilot_id=pilot_id,
            payer_id=payer_id,
            instructor_id=instructor_id,
            total_hours=Decimal(str(total_hours)) if total_hours is not None else None,
            flight_type=flight_type,
        )
        db_session.add(flight)
        await db_session.commit()
        return flight
    return _create_flight


@pytest.fixture
def auth_headers():
    def _auth_headers(user):
        token = create_access_token(data={"user_id": user.id, "email": user.email})
        return {"Authorization": f"Bearer {token}"}
    return _auth_headers


@pytest.fixture
async def pilot(create_user):
    return await create_user("pilot@cruiser.test", roles=(UserRole.PILOT, UserRole.STUDENT))


@pytest.fixture
async def charterer(create_user):
    return await create_user("charterer@cruiser.test", roles=(UserRole.PILOT,))


@pytest.fixture
async def admin(create_user):
    return await create_user("admin@cruiser.test", roles=(UserRole.ADMIN,))
