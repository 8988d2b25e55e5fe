import json
import urllib.error
from http import HTTPStatus
from unittest import mock

import pytest
from django.urls import reverse

from confapp.audit.models import AuditLog
from confapp.favorites.services import add_favorite
from confapp.live.services import set_live_video
from confapp.schedule.models import ScheduleSnapshot
from conftest import make_session

pytestmark = pytest.mark.django_db


def test_all_for_anonymous_caller(api_client, schedule):
    set_live_video(1, "https://video.test/hall-a")
    resp = api_client.get(reverse("api_v1:all"))
    assert resp.status_code == HTTPStatus.OK
    data = resp.json()
    assert [s["id"] for s in data["allData"]["sessions"]] == [
        "started",
        "upcoming",
        "unscheduled",
    ]
    assert data["allData"]["rooms"] == [{"id": 1, "name": "Hall A"}]
    assert data["favorites"] == []
    assert data["votes"] == []
    assert data["liveVideos"] == [{"room": 1, "video": "https://video.test/hall-a"}]


def test_all_includes_attendee_state(attendee_client, attendee, schedule):
    add_favorite(attendee, "upcoming")
    resp = attendee_client.get("/all")
    assert resp.status_code == HTTPStatus.OK
    assert resp.json()["favorites"] == ["upcoming"]


def test_all_before_first_sync(api_client):
    resp = api_client.get(reverse("api_v1:all"))
    assert resp.status_code == HTTPStatus.OK
    assert resp.json()["allData"]["sessions"] == []


def test_sessionize_sync_by_operator(operator_client):
    body = json.dumps({"sessions": [make_session("9", None)]}).encode()
    with mock.patch(
        "confapp.schedule.services.urllib.request.urlopen"
    ) as mocked_urlopen:
        mocked_urlopen.return_value.__enter__.return_value.read.return_value = body
        resp = operator_client.post(reverse("api_v1:sessionize-sync"))
    assert resp.status_code == HTTPStatus.OK
    assert resp.json()["sessions"] == 1
    assert ScheduleSnapshot.objects.count() == 1
    assert AuditLog.objects.filter(action="schedule_synchronized").exists()


def test_sessionize_sync_upstream_failure_is_502(operator_client, schedule):
    with mock.patch(
        "confapp.schedule.services.urllib.request.urlopen",
        side_effect=urllib.error.URLError("unreachable"),
    ):
        resp = operator_client.post("/sessionizeSync")
    assert resp.status_code == HTTPStatus.BAD_GATEWAY
    assert ScheduleSnapshot.objects.count() == 1


def test_sessionize_sync_requires_operator(attendee_client):
    resp = attendee_client.post(reverse("api_v1:sessionize-sync"))
    assert resp.status_code == HTTPStatus.UNAUTHORIZED
