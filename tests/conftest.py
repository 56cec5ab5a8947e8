import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./test_billing.db")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-billing-api")
os.environ["BILL_GENERATION_ENABLED"] = "false"  # Tests drive the generator directly
os.environ.setdefault("LOG_FORMAT", "console")

import pytest
from datetime import date, datetime, timedelta, UTC
from decimal import Decimal
from uuid import UUID, uuid4
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from jose import jwt

from app.database import get_db
from app.config import settings
# Importing the package registers every model with Base.metadata
from app.models import (
    Base,
    Tenant,
    Account,
    ApplicationUser,
    TenantUser,
    AccountUser,
    BillSchedule,
    Bill,
)
# Import FastAPI app AFTER model imports
from app.main import app

# Test database (SQLite in-memory for speed)
# Use StaticPool to ensure all connections share the same in-memory database
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Actor stamped on fixture rows
SEED_USER_ID = UUID("00000000-0000-0000-0000-00000000beef")


@pytest.fixture(scope="function")
def db_session():
    """Create fresh database for each test"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """FastAPI test client with test database"""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def create_test_token(user_id: str | UUID | None = None, expired: bool = False) -> str:
    """
    Generate valid JWT token for testing.

    Args:
        user_id: User ID to embed in 'sub' claim (omitted when None)
        expired: If True, create expired token

    Returns:
        Encoded JWT token
    """
    if expired:
        exp = datetime.now(UTC) - timedelta(minutes=5)
    else:
        exp = datetime.now(UTC) + timedelta(minutes=15)

    payload = {"exp": exp, "iat": datetime.now(UTC)}
    if user_id is not None:
        payload["sub"] = str(user_id)

    token = jwt.encode(payload, settings.SECRET_KEY, algorithm="HS256")
    return token


def headers_for(user_id: str | UUID) -> dict:
    """Authorization headers for a given user id"""
    return {"Authorization": f"Bearer {create_test_token(user_id)}"}


# User identities


@pytest.fixture
def app_user_id(db_session) -> UUID:
    """User holding an application-level grant"""
    user_id = uuid4()
    db_session.add(ApplicationUser(user_id=user_id, created_user=SEED_USER_ID))
    db_session.commit()
    return user_id


@pytest.fixture
def tenant_user_id(db_session, tenant) -> UUID:
    """User holding a grant on `tenant`"""
    user_id = uuid4()
    db_session.add(TenantUser(user_id=user_id, tenant_id=tenant.id, created_user=SEED_USER_ID))
    db_session.commit()
    return user_id


@pytest.fixture
def account_user_id(db_session, account) -> UUID:
    """User holding a grant on `account` only"""
    user_id = uuid4()
    db_session.add(AccountUser(user_id=user_id, account_id=account.id, created_user=SEED_USER_ID))
    db_session.commit()
    return user_id


@pytest.fixture
def outsider_id() -> UUID:
    """User with no membership anywhere"""
    return uuid4()


@pytest.fixture
def app_headers(app_user_id):
    return headers_for(app_user_id)


@pytest.fixture
def tenant_headers(tenant_user_id):
    return headers_for(tenant_user_id)


@pytest.fixture
def account_headers(account_user_id):
    return headers_for(account_user_id)


@pytest.fixture
def outsider_headers(outsider_id):
    return headers_for(outsider_id)


# Domain rows


@pytest.fixture
def tenant(db_session) -> Tenant:
    tenant = Tenant(name="Riverside Utilities", created_user=SEED_USER_ID)
    db_session.add(tenant)
    db_session.commit()
    return tenant


@pytest.fixture
def other_tenant(db_session) -> Tenant:
    tenant = Tenant(name="Hilltop Water Co", created_user=SEED_USER_ID)
    db_session.add(tenant)
    db_session.commit()
    return tenant


@pytest.fixture
def account(db_session, tenant) -> Account:
    account = Account(
        tenant_id=tenant.id,
        name="Jane Doe",
        address="12 Elm Street",
        reference_id="CUST-0001",
        created_user=SEED_USER_ID,
    )
    db_session.add(account)
    db_session.commit()
    return account


@pytest.fixture
def sibling_account(db_session, tenant) -> Account:
    """Second account of the same tenant"""
    account = Account(
        tenant_id=tenant.id,
        name="John Roe",
        address="14 Elm Street",
        created_user=SEED_USER_ID,
    )
    db_session.add(account)
    db_session.commit()
    return account


@pytest.fixture
def foreign_account(db_session, other_tenant) -> Account:
    """Account of a different tenant"""
    account = Account(
        tenant_id=other_tenant.id,
        name="Mary Major",
        address="1 Hill Road",
        created_user=SEED_USER_ID,
    )
    db_session.add(account)
    db_session.commit()
    return account


@pytest.fixture
def make_schedule(db_session, account):
    """Factory for bill schedules on `account` (override fields via kwargs)"""

    def _make(**overrides) -> BillSchedule:
        fields = {
            "account_id": account.id,
            "name": "Water service",
            "amount": Decimal("42.50"),
            "currency": "USD",
            "day_due": 5,
            "month_interval": 1,
            "enabled": True,
            "created_user": SEED_USER_ID,
        }
        fields.update(overrides)
        schedule = BillSchedule(**fields)
        db_session.add(schedule)
        db_session.commit()
        return schedule

    return _make


@pytest.fixture
def make_bill(db_session):
    """Factory for bills already generated from a schedule"""

    def _make(schedule: BillSchedule, due_date: date, **overrides) -> Bill:
        fields = {
            "account_id": schedule.account_id,
            "bill_schedule_id": schedule.id,
            "name": schedule.name,
            "amount": schedule.amount,
            "currency": schedule.currency,
            "due_date": due_date,
            "created_user": SEED_USER_ID,
        }
        fields.update(overrides)
        bill = Bill(**fields)
        db_session.add(bill)
        db_session.commit()
        return bill

    return _make
