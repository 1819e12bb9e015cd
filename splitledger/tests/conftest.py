"""
Shared fixtures for ledger and API tests.
"""
import pytest
from datetime import datetime, timezone
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
import splitledger.models  # noqa: F401
from splitledger.db.base import Base
from splitledger.db.session import get_db
from splitledger.main import app
from splitledger.schemas.expense import Expense, PayerAllocation, ShareAllocation
from splitledger.schemas.member import Participant


@pytest.fixture
def db_session():
    """In-memory database shared by every connection of one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture
def client(db_session):
    """Test client whose requests use the in-memory database."""
    def override_get_db():
        yield db_session
    
    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def members():
    """Alice, Bob and Charlie as members of one group."""
    return [
        Participant(membership_id="member1", user_id="user1", name="Alice", email="alice@example.com", role="OWNER"),
        Participant(membership_id="member2", user_id="user2", name="Bob", email="bob@example.com"),
        Participant(membership_id="member3", user_id="user3", name="Charlie", email="charlie@example.com"),
    ]


@pytest.fixture
def make_expense():
    """Factory for already-allocated expenses: payers and shares as (membership_id, cents)."""
    counter = {"n": 0}
    
    def _make(payers, shares, currency="USD"):
        counter["n"] += 1
        return Expense(
            id=f"expense{counter['n']}",
            description="Test expense",
            currency=currency,
            total_amount_cents=sum(amount for _, amount in payers),
            occurred_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
            payers=[PayerAllocation(membership_id=m, amount_cents=a) for m, a in payers],
            shares=[ShareAllocation(membership_id=m, weight=1, amount_cents=a) for m, a in shares],
        )
    
    return _make
