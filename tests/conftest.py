"""
Shared test fixtures.

Sets up an isolated SQLite database so tests never touch the
real database. Tables are created before and dropped after
every test.
"""

import os

# Must be set before the application modules build their engine
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from finance_tracker.main import app
from finance_tracker.models import Base
from finance_tracker.models.base import get_db
from finance_tracker.models.enums import TransactionType
from finance_tracker.schemas.account import AccountCreate
from finance_tracker.schemas.category import CategoryCreate
from finance_tracker.services.account_service import AccountService
from finance_tracker.services.api_key_gate import ApiKeyGate, OwnerScope
from finance_tracker.services.category_service import CategoryService


TEST_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    TEST_DATABASE_URL,
    # timeout lets concurrent writers wait for the SQLite write lock
    connect_args={"check_same_thread": False, "timeout": 30},
)

TestSessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


@pytest.fixture(autouse=True)
def setup_database():
    """Create all tables before each test, drop them after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def session_factory():
    """Factory for extra sessions, e.g. one per simulated request."""
    return TestSessionLocal


@pytest.fixture
def db_session():
    """Provide a database session for direct service testing."""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def client(db_session):
    """
    Provide a test client with the test database.

    get_db is overridden so the app, including the API key
    dependency, uses the test session.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def owner():
    return OwnerScope(owner_id="user-1")


@pytest.fixture
def other_owner():
    return OwnerScope(owner_id="user-2")


@pytest.fixture
def api_key(db_session, owner):
    """A raw API key belonging to owner."""
    _, raw_key = ApiKeyGate(db_session).issue(owner.owner_id, "test script")
    db_session.commit()
    return raw_key


@pytest.fixture
def auth_headers(api_key):
    return {"x-api-key": api_key}


@pytest.fixture
def make_account(db_session, owner):
    """Factory: committed account with an opening balance."""
    def _make(name="Bank", balance="0", scope=None):
        account = AccountService(db_session).create_account(
            scope or owner, AccountCreate(name=name, balance=Decimal(balance))
        )
        db_session.commit()
        return account
    return _make


@pytest.fixture
def make_category(db_session, owner):
    """Factory: committed category."""
    def _make(name="Salary", type=TransactionType.INCOME, scope=None):
        category = CategoryService(db_session).create_category(
            scope or owner, CategoryCreate(name=name, type=type)
        )
        db_session.commit()
        return category
    return _make
