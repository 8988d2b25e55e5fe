from __future__ import annotations

import datetime as dt

import pytest
from django.conf import settings
from rest_framework.test import APIClient

from confapp.attendees.models import Attendee
from confapp.clock import VirtualClock
from confapp.clock import get_clock
from confapp.schedule.services import store_snapshot

SESSION_START = dt.datetime(2026, 6, 1, 10, 0, tzinfo=dt.timezone.utc)


class ScriptedWallClock:
    """Wall clock that only moves when the test says so."""

    def __init__(self, start: dt.datetime = SESSION_START):
        self.current = start

    def __call__(self) -> dt.datetime:
        return self.current

    def advance(self, **delta) -> dt.datetime:
        self.current += dt.timedelta(**delta)
        return self.current


@pytest.fixture(autouse=True)
def _reset_demo_clock():
    yield
    get_clock().clear_override()


@pytest.fixture
def wall_clock() -> ScriptedWallClock:
    return ScriptedWallClock()


@pytest.fixture
def virtual_clock(wall_clock) -> VirtualClock:
    return VirtualClock(wall_clock=wall_clock)


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def attendee(db) -> Attendee:
    return Attendee.objects.create(token="attendee-token-1")  # noqa: S106


@pytest.fixture
def attendee_client(attendee) -> APIClient:
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {attendee.token}")
    return client


@pytest.fixture
def operator_client() -> APIClient:
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {settings.CONFAPP_ADMIN_SECRET}")
    return client


def make_session(session_id: str, starts_at: str | None, **extra) -> dict:
    return {
        "id": session_id,
        "title": extra.pop("title", f"Session {session_id}"),
        "roomId": extra.pop("roomId", 1),
        "startsAt": starts_at,
        "endsAt": extra.pop("endsAt", None),
        **extra,
    }


@pytest.fixture
def schedule(db):
    """Store a schedule with one started, one upcoming and one unscheduled talk.

    Start times are naive Sessionize local times, read in ``TIME_ZONE`` (UTC
    under test settings).
    """
    return store_snapshot(
        {
            "sessions": [
                make_session("started", "2026-06-01T09:00:00"),
                make_session("upcoming", "2026-06-01T11:00:00"),
                make_session("unscheduled", None),
            ],
            "rooms": [{"id": 1, "name": "Hall A"}],
        },
        source_url="test",
    )
