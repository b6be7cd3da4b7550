"""Shared fixtures: services wired to in-memory repositories, and a temporary SQLite database."""

import pytest
import pytest_asyncio

from project_hub_api.app.core import config, db
from project_hub_api.app.services.event_service import EventService
from project_hub_api.app.services.incident_service import IncidentService
from project_hub_api.app.services.message_service import MessageService
from project_hub_api.app.services.project_service import ProjectService
from tests.fakes import (
    InMemoryEventRepository,
    InMemoryIncidentRepository,
    InMemoryMessageRepository,
    InMemoryProjectRepository,
)

OWNER = 1
MEMBER = 2
OUTSIDER = 3


@pytest.fixture
def project_repo():
    return InMemoryProjectRepository()


@pytest.fixture
def project_service(project_repo):
    return ProjectService(project_repo)


@pytest.fixture
def event_repo():
    return InMemoryEventRepository()


@pytest.fixture
def event_service(event_repo, project_service):
    return EventService(event_repo, project_service)


@pytest.fixture
def incident_repo():
    return InMemoryIncidentRepository()


@pytest.fixture
def incident_service(incident_repo, project_service):
    return IncidentService(incident_repo, project_service)


@pytest.fixture
def message_repo():
    return InMemoryMessageRepository()


@pytest.fixture
def message_service(message_repo):
    return MessageService(message_repo)


@pytest_asyncio.fixture
async def project(project_service):
    """A project owned by ``OWNER`` with ``MEMBER`` on the team."""
    created = await project_service.create_project("Riverside tower", OWNER)
    return await project_service.add_member(created.id, MEMBER, OWNER)


@pytest.fixture
def sqlite_db(tmp_path, monkeypatch):
    """Point the application at a fresh database file and migrate it."""
    path = tmp_path / "project_hub_test.db"
    monkeypatch.setattr(config.settings, "database_url", str(path))
    db.init_db()
    return path
