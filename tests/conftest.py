import os
from datetime import date, datetime, timedelta

# Must be set before the app builds its engine
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.base import Base
from app.db.session import get_db
from app.main import app
from app.models.center import Center
from app.models.reservation import Reservation
from app.services.store import SqlStoreGateway

# Fixed clock for service-level tests: the morning of DAY
DAY = "2030-01-01"
NOW = datetime(2030, 1, 1, 8, 0)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def store(db):
    return SqlStoreGateway(db)


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def future_day() -> str:
    """A date safely ahead of the real clock, for tests going through the API."""
    return (date.today() + timedelta(days=30)).isoformat()


@pytest.fixture
def make_center(db):
    def _make(center_id="c1", capacity=None, name=None, category="Fitness", address=None):
        center = Center(
            id=center_id,
            name=name or f"Center {center_id}",
            category=category,
            address=address,
            capacity=capacity,
        )
        db.add(center)
        db.commit()
        return center

    return _make


@pytest.fixture
def make_reservation(db):
    """Insert a reservation row directly, bypassing the admission rules."""

    def _make(user_id="u1", center_id="c1", day=DAY, hour="10:00", status="pending"):
        reservation = Reservation(
            center_id=center_id, user_id=user_id, date=day, hour=hour, status=status
        )
        db.add(reservation)
        db.commit()
        db.refresh(reservation)
        return reservation

    return _make
