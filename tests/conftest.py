"""Shared test fixtures: in-memory database, API client and signed-in users."""
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from pricelist.core.auth import create_access_token, get_password_hash
from pricelist.core.database import Base, get_db
from pricelist.models import PricingSnapshot, SnapshotTable, User


TEST_PASSWORD = "correct-horse-battery"

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# =============================================================================
# Database
# =============================================================================

@pytest.fixture
def db_session():
    """Fresh schema per test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """API client whose requests share the test session."""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


# =============================================================================
# Users
# =============================================================================

def make_user(db, email: str, name: str = "Shop Owner") -> User:
    user = User(name=name, email=email, password=get_password_hash(TEST_PASSWORD))
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def auth_headers_for(user: User) -> dict:
    token = create_access_token(data={"sub": user.id, "email": user.email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def owner(db_session):
    return make_user(db_session, "owner@hamdan-shop.com")


@pytest.fixture
def other_user(db_session):
    return make_user(db_session, "someone@else-shop.com", name="Someone Else")


@pytest.fixture
def auth_headers(owner):
    return auth_headers_for(owner)


# =============================================================================
# Snapshots
# =============================================================================

def insert_snapshot(db, user, title, created_at, rate=Decimal("1500"), tables=None):
    """Insert a snapshot row directly with a fixed creation time."""
    snapshot = PricingSnapshot(
        user_id=user.id,
        title=title,
        rate=rate,
        created_at=created_at,
        updated_at=created_at,
    )
    for index, (table_title, entries) in enumerate(tables or []):
        snapshot.tables.append(
            SnapshotTable(
                title=table_title,
                order=index,
                entries=[
                    {"name": name, "priceUsd": price, "order": i}
                    for i, (name, price) in enumerate(entries)
                ],
            )
        )
    db.add(snapshot)
    db.commit()
    return snapshot


@pytest.fixture
def fifteen_snapshots(db_session, owner):
    """Fifteen snapshots one minute apart; #15 is the newest."""
    start = datetime(2026, 1, 1, 9, 0, tzinfo=timezone.utc)
    return [
        insert_snapshot(db_session, owner, f"Snapshot {n}", start + timedelta(minutes=n))
        for n in range(1, 16)
    ]


@pytest.fixture
def phones_payload():
    return {
        "title": "Morning prices",
        "rate": 1500,
        "tables": [
            {
                "title": "Phones",
                "entries": [
                    {"name": "X1", "priceUsd": 100},
                    {"name": "X2", "priceUsd": 250.5},
                    {"name": "X3", "priceUsd": 0},
                ],
            },
            {
                "title": "Chargers",
                "entries": [
                    {"name": "USB-C 20W", "priceUsd": 7.25},
                    {"name": "Lightning", "priceUsd": 5},
                ],
            },
        ],
    }
