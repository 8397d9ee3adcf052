"""
Pytest fixtures for the admission billing test suite.

Provides:
- Structured logging configured once per session
- A deterministic clock
- Pricing configuration and engine fixtures
- In-memory SQLite sessions for the persistence and service tests
"""

import json
import logging
from datetime import date, datetime, timezone
from decimal import Decimal
from io import StringIO
from typing import Generator
from uuid import UUID, uuid4

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from admission_config.schema import PricingConfig
from admission_engines.editing import AdmissionSession, open_admission
from admission_engines.status import StatusTransitionEngine
from admission_kernel.db.base import Base
from admission_kernel.domain.clock import DeterministicClock
from admission_kernel.domain.intake import AdmissionIntake
from admission_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
import admission_kernel.models  # noqa: F401

TEST_ACTOR_ID = uuid4()

DEFAULT_FEE = Decimal("300")


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture admission_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs):
            engine.cancel(admission)
            logs = captured_logs()
            assert any(r["message"] == "charges_zeroed" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("admission_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Clock / config fixtures
# =============================================================================


@pytest.fixture
def test_actor_id() -> UUID:
    return TEST_ACTOR_ID


@pytest.fixture
def deterministic_clock():
    return DeterministicClock(datetime(2024, 3, 15, 9, 30, tzinfo=timezone.utc))


@pytest.fixture
def pricing() -> PricingConfig:
    return PricingConfig(admission_fee=DEFAULT_FEE)


# =============================================================================
# Engine fixtures
# =============================================================================


@pytest.fixture
def transitions(deterministic_clock) -> StatusTransitionEngine:
    return StatusTransitionEngine(default_fee=DEFAULT_FEE, clock=deterministic_clock)


@pytest.fixture
def valid_intake() -> AdmissionIntake:
    """A creation form that passes every check."""
    return AdmissionIntake(
        hospital_name="City General",
        patient_first_name="Rahim",
        patient_last_name="Uddin",
        patient_gender="Male",
        patient_phone="+880 1712-345678",
        patient_date_of_birth=date(1985, 6, 1),
        patient_email="rahim@example.com",
        department_id=3,
        doctor_id=7,
        hospital_id=1,
        patient_id=42,
    )


@pytest.fixture
def new_admission(valid_intake, deterministic_clock):
    """Freshly opened admission: Admitted, fee 300, nothing else."""
    return open_admission(
        valid_intake,
        admission_fee=DEFAULT_FEE,
        clock=deterministic_clock,
        admission_number="ADM-20240315-0001",
    )


@pytest.fixture
def editing_session(new_admission, transitions) -> AdmissionSession:
    return AdmissionSession(new_admission, transitions)


# =============================================================================
# Database fixtures
# =============================================================================


@pytest.fixture
def db_engine():
    """In-memory SQLite engine with all tables, one per test."""
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(eng)
    yield eng
    Base.metadata.drop_all(eng)
    eng.dispose()


@pytest.fixture
def session(db_engine) -> Generator[Session, None, None]:
    """Provide a database session; rolled back at teardown."""
    sess = Session(bind=db_engine, expire_on_commit=False)
    yield sess
    sess.rollback()
    sess.close()
