"""Shared fixtures: a fresh in-memory database per test and a fixed clock."""

from datetime import datetime

import pytest
from sqlalchemy.orm import sessionmaker

from registrar.core.clock import FixedClock
from registrar.db.base import Base
from registrar.db.session import build_engine
from registrar.services.catalog_service import catalog_service
from registrar.services.enrollment_service import EnrollmentService
from registrar.services.payment_service import PaymentService
from registrar.services.student_service import StudentService
import registrar.models  # noqa: F401


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
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
    yield session
    session.close()


@pytest.fixture
def clock():
    return FixedClock(datetime(2026, 1, 15, 9, 30, 0))


@pytest.fixture
def students(clock):
    return StudentService(clock=clock)


@pytest.fixture
def enrollments(clock):
    return EnrollmentService(clock=clock)


@pytest.fixture
def payments(clock):
    return PaymentService(clock=clock)


@pytest.fixture
def asha(db, students):
    return students.register(
        db, "Asha", "Patel", email="asha.patel@example.com", phone="9988776655", gender="F"
    )


@pytest.fixture
def db101(db):
    return catalog_service.create_course(
        db, "Database Systems", 4, code="DB101",
        description="Introduction to relational databases and SQL",
    )
