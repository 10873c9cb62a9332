"""Shared fixtures: in-memory database, API client and row factories."""

import itertools
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from app.database import enable_sqlite_foreign_keys, get_session
from app.main import app
from app.models.billing import Billing, BillingSituation
from app.models.horse import Horse
from app.models.lesson import Lesson, LessonStatus
from app.models.performed_service import PerformedService, ServiceType
from app.models.user import Role, User


UTC = timezone.utc


@pytest.fixture(name="engine")
def engine_fixture():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session):
    app.dependency_overrides[get_session] = lambda: session
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


def _save(session, row):
    session.add(row)
    session.commit()
    session.refresh(row)
    return row


@pytest.fixture
def make_user(session):
    counter = itertools.count(1)

    def _make(role=Role.CUSTOMER, **kwargs):
        n = next(counter)
        data = dict(
            first_name=f"First{n}",
            last_name=f"Last{n}",
            email=f"user{n}@example.com",
            role=role,
        )
        data.update(kwargs)
        return _save(session, User(**data))

    return _make


@pytest.fixture
def make_horse(session):
    def _make(owner, **kwargs):
        data = dict(owner_id=owner.id, name="Spirit")
        data.update(kwargs)
        return _save(session, Horse(**data))

    return _make


@pytest.fixture
def make_lesson(session):
    def _make(customer, monitor, horse, **kwargs):
        data = dict(
            date=datetime(2024, 3, 15, 10, 0, tzinfo=UTC),
            desc="Dressage training",
            status=LessonStatus.PENDING,
            customer_id=customer.id,
            monitor_id=monitor.id,
            horse_id=horse.id,
        )
        data.update(kwargs)
        return _save(session, Lesson(**data))

    return _make


@pytest.fixture
def make_billing(session):
    def _make(**kwargs):
        data = dict(date=datetime(2024, 3, 1, tzinfo=UTC), situation=BillingSituation.UNPAYED)
        data.update(kwargs)
        return _save(session, Billing(**data))

    return _make


@pytest.fixture
def make_service(session):
    def _make(billing, user, lesson, **kwargs):
        data = dict(
            billing_id=billing.id,
            user_id=user.id,
            service_id=lesson.id,
            amount=40.0,
            service_type=ServiceType.LESSON,
        )
        data.update(kwargs)
        return _save(session, PerformedService(**data))

    return _make


@pytest.fixture
def lesson_parties(make_user, make_horse):
    """Customer, monitor and horse needed by any lesson."""
    owner = make_user(role=Role.OWNER)
    customer = make_user(role=Role.CUSTOMER)
    monitor = make_user(role=Role.MONITOR)
    horse = make_horse(owner)
    return customer, monitor, horse
