"""Shared fixtures: every test gets a fresh app on in-memory storage."""

from datetime import date, time

import pytest

from studio.audit import AuditLogger
from studio.config import Settings
from studio.orchestrator import create_app_components
from studio.services.storage import InMemoryStorage


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def studio(storage):
    """A StudioApp wired to the in-memory storage fixture."""
    return create_app_components(
        settings=Settings(),
        storage=storage,
        setup_logging=False,
    )


@pytest.fixture
def audit_logger():
    return AuditLogger(recent_limit=100)


@pytest.fixture
def ana_manicure(studio):
    """The canonical appointment: Ana, Manicure, 2024-06-01 10:00, R$ 50."""
    return studio.scheduler.add(
        client_name="Ana",
        service="Manicure",
        date=date(2024, 6, 1),
        time=time(10, 0),
        price=50,
    )
