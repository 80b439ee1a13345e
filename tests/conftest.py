"""
Configuration and fixtures for tests.
"""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from rich.console import Console

from smartmatcher.models.consultant import ConsultantProfile
from smartmatcher.models.job import JobDescription
from smartmatcher.storage import LocalStorage
from smartmatcher.views.cache import QueryCache
from smartmatcher.views.notifications import Notifier


@pytest.fixture
def storage(tmp_path: Path) -> LocalStorage:
    return LocalStorage(tmp_path / "storage.json")


@pytest.fixture
def console() -> Console:
    return Console(record=True, width=200, force_terminal=False)


@pytest.fixture
def notifier(console: Console) -> Notifier:
    return Notifier(console=console)


@pytest.fixture
def cache() -> QueryCache:
    return QueryCache()


@pytest.fixture
def api() -> MagicMock:
    """An ApiClient double with awaitable request helpers."""
    client = MagicMock()
    client.get = AsyncMock()
    client.post = AsyncMock()
    client.put = AsyncMock()
    client.delete = AsyncMock()
    client.post_form = AsyncMock()
    client.upload_files = AsyncMock()
    return client


@pytest.fixture
def sample_job() -> JobDescription:
    return JobDescription(
        id=7,
        title="Senior Python Developer",
        department="Engineering",
        location="Berlin",
        description="Build and operate async services for the matching platform.",
        skills=["Python", "AsyncIO", "PostgreSQL"],
        experience="5+ years",
        created_at="2024-03-01T09:30:00",
        status="pending",
        workflow={"jd_parsed": True, "profiles_compared": False},
    )


@pytest.fixture
def sample_consultant() -> ConsultantProfile:
    return ConsultantProfile(
        id=3,
        name="Ada Lovelace",
        email="ada@example.com",
        phone="+44 20 1234",
        skills=["Python", "Mathematics"],
        experience=8,
        location="London",
        project="Analytical engine programme design",
        availability="available",
    )


# Configure pytest to use asyncio for async tests
def pytest_configure(config):
    """Configure pytest for asyncio tests."""
    config.option.asyncio_mode = "auto"
