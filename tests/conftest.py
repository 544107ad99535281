import uuid
from datetime import date, datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from microdiary.api_service.core.database import get_db
from microdiary.api_service.core.models import DiaryEntry
from microdiary.api_service.main import app

DIARY_DATE = date(2024, 1, 15)


def _make_db_entry(**overrides) -> DiaryEntry:
    """A stored entry as the ORM would hand it back."""
    created = datetime(2024, 1, 15, 7, 0, tzinfo=timezone.utc)
    values = dict(
        id=uuid.UUID("00000000-0000-0000-0000-000000000001"),
        date=DIARY_DATE,
        activity="Morning run",
        category="leisure",
        start_time="07:00",
        end_time="08:00",
        notes=None,
        created_at=created,
        updated_at=created,
        source="manual-entry",
        client_id="test-client",
        time_zone="Europe/London",
        schema_version="1.0",
        app_version="0.1.0",
    )
    values.update(overrides)
    return DiaryEntry(**values)


@pytest.fixture
def mock_db_session():
    session = MagicMock()
    session.execute = AsyncMock()
    session.get = AsyncMock(return_value=None)
    session.commit = AsyncMock()
    session.refresh = AsyncMock()
    session.delete = AsyncMock()
    session.rollback = AsyncMock()
    return session


@pytest.fixture
def client(mock_db_session):
    async def override_get_db():
        yield mock_db_session

    app.dependency_overrides[get_db] = override_get_db
    # Not used as a context manager, so the lifespan (and real DB init) never runs
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_db_entry():
    return _make_db_entry
