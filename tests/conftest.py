# tests/conftest.py
from datetime import datetime, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

import infra.db.models  # noqa: F401
from core.domain.clock import fixed_clock
from core.events.domain_events import DomainEvents
from infra.db.base import Base
from infra.services import build_service_dict

# 2024-07-01 is day 182 of the 365-day span 2024-01-01 .. 2024-12-31
NOW = datetime(2024, 7, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def session():
    # separate in-memory DB for tests
    engine = create_engine("sqlite:///:memory:", future=True)
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, future=True)
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture
def events():
    return DomainEvents()


@pytest.fixture
def services(session, events, monkeypatch):
    # Recreate what the app wires, but with the test session and a frozen clock
    monkeypatch.delenv("PM_ADMIN_EMAIL", raising=False)
    return build_service_dict(session, clock=fixed_clock(NOW), events=events)
