from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from moments.api.deps import get_moment_service
from moments.domain.models import Event, Location
from moments.domain.reviewed_set import ReviewedSet
from moments.domain.sources import InMemoryEventSource
from moments.domain.storage.memory import InMemoryReviewedStore
from moments.services.moment import MomentService

BASE_TIME = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)
FIXED_NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_event():
    """Builds an event `offset_sec` seconds after BASE_TIME (None = no timestamp)."""

    def _make(
        event_id: str,
        offset_sec: Optional[float] = 0.0,
        lat: Optional[float] = None,
        lon: Optional[float] = None,
        curated: bool = False,
    ) -> Event:
        timestamp = BASE_TIME + timedelta(seconds=offset_sec) if offset_sec is not None else None
        location = Location(lat=lat, lon=lon) if lat is not None and lon is not None else None
        return Event(id=event_id, timestamp=timestamp, location=location, is_curated=curated)

    return _make


@pytest.fixture
def reviewed_store():
    return InMemoryReviewedStore()


@pytest.fixture
def reviewed_set(reviewed_store):
    return ReviewedSet(reviewed_store)


@pytest.fixture
def library_events(make_event):
    # Morning outing, an outing three days later, and a curated evening
    return [
        make_event("a1", 0, lat=48.8584, lon=2.2945),
        make_event("a2", 120),
        make_event("a3", 300),
        make_event("b1", 3 * 86400),
        make_event("b2", 3 * 86400 + 600),
        make_event("c1", 6 * 86400),
        make_event("c2", 6 * 86400 + 60, curated=True),
    ]


@pytest.fixture
def event_source(library_events):
    return InMemoryEventSource(library_events)


@pytest.fixture
def moment_service(event_source, reviewed_set):
    return MomentService(event_source=event_source, reviewed_set=reviewed_set, clock=lambda: FIXED_NOW)


@pytest_asyncio.fixture
async def client(moment_service) -> AsyncGenerator[AsyncClient, None]:
    from moments.main import app

    await moment_service.rebuild()

    async def override_get_moment_service():
        return moment_service

    app.dependency_overrides[get_moment_service] = override_get_moment_service

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    # Clean up
    app.dependency_overrides = {}
