"""Pytest fixtures: in-memory stores, seeded randomness, a fixed clock."""

import random
from datetime import datetime, timezone

import pytest

from fakes import FakeIncidentStore, FakeTripStore
from travelsafe.services.advisory import AdvisoryRefresher
from travelsafe.services.generator import IncidentGenerator
from travelsafe.services.incident_service import IncidentService
from travelsafe.services.trip_service import TripService

FIXED_NOW = datetime(2024, 6, 15, 12, 0, 0, tzinfo=timezone.utc)
FIXED_TODAY = FIXED_NOW.date()


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def incident_store():
    return FakeIncidentStore()


@pytest.fixture
def trip_store():
    return FakeTripStore()


@pytest.fixture
def incident_service(incident_store, clock):
    return IncidentService(
        incident_store,
        IncidentGenerator(rng=random.Random(7), clock=clock),
        AdvisoryRefresher(rng=random.Random(8), clock=clock),
        clock=clock,
    )


@pytest.fixture
def trip_service(trip_store):
    return TripService(trip_store, today=lambda: FIXED_TODAY)


@pytest.fixture
def app(incident_service, trip_service):
    """Application with stores, auth and the events client swapped for local fakes."""
    from travelsafe.main import app
    from travelsafe.services.auth import require_user
    from travelsafe.services.events import EventsClient, get_events_client
    from travelsafe.services.incident_service import get_incident_service
    from travelsafe.services.trip_service import get_trip_service

    app.dependency_overrides[get_incident_service] = lambda: incident_service
    app.dependency_overrides[get_trip_service] = lambda: trip_service
    app.dependency_overrides[require_user] = lambda: "user-1"
    app.dependency_overrides[get_events_client] = lambda: EventsClient(api_key="", rng=random.Random(3))
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    from fastapi.testclient import TestClient

    with TestClient(app) as c:
        yield c


@pytest.fixture
def today():
    return FIXED_TODAY
