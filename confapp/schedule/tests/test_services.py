import datetime as dt
import json
import urllib.error
from unittest import mock

import pytest

from confapp.schedule.models import ScheduleSnapshot
from confapp.schedule.services import KEEP_SNAPSHOTS
from confapp.schedule.services import ScheduleSyncError
from confapp.schedule.services import current_document
from confapp.schedule.services import fetch_sessionize
from confapp.schedule.services import find_session
from confapp.schedule.services import list_sessions
from confapp.schedule.services import normalize_document
from confapp.schedule.services import parse_session_time
from confapp.schedule.services import store_snapshot
from confapp.schedule.services import synchronize_with_sessionize
from confapp.schedule.tasks import synchronize_task
from conftest import make_session

SESSIONIZE_DOCUMENT = {
    "sessions": [make_session("101", "2026-06-01T09:00:00")],
    "rooms": [{"id": 1, "name": "Hall A"}],
    "speakers": [{"id": "sp1", "fullName": "Ada"}],
}


def _urlopen_returning(body: bytes):
    patcher = mock.patch("confapp.schedule.services.urllib.request.urlopen")
    mocked = patcher.start()
    mocked.return_value.__enter__.return_value.read.return_value = body
    return patcher, mocked


@pytest.fixture
def sessionize_ok():
    patcher, mocked = _urlopen_returning(json.dumps(SESSIONIZE_DOCUMENT).encode())
    yield mocked
    patcher.stop()


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("2026-06-01T09:00:00", dt.datetime(2026, 6, 1, 9, tzinfo=dt.timezone.utc)),
        (
            "2026-06-01T09:00:00+02:00",
            dt.datetime(2026, 6, 1, 7, tzinfo=dt.timezone.utc),
        ),
        ("", None),
        ("tomorrow", None),
        ("2026-13-45T99:00:00", None),
        (None, None),
        (1717232400, None),
    ],
)
def test_parse_session_time(raw, expected):
    assert parse_session_time(raw) == expected


def test_empty_document_before_first_sync(db):
    doc = current_document()
    assert doc["sessions"] == []
    assert set(doc) >= {"sessions", "rooms", "speakers", "questions", "categories"}
    assert find_session("101") is None


def test_find_session_reads_latest_snapshot(schedule):
    session = find_session("upcoming")
    assert session is not None
    assert session.room_id == 1
    assert session.starts_at == dt.datetime(2026, 6, 1, 11, tzinfo=dt.timezone.utc)
    assert find_session("unscheduled").starts_at is None
    assert [s.id for s in list_sessions()] == ["started", "upcoming", "unscheduled"]


def test_normalize_document_fills_missing_sections():
    doc = normalize_document({"sessions": [], "rooms": "broken"})
    assert doc["rooms"] == []
    assert doc["categories"] == []


@pytest.mark.parametrize("obj", [[], {"rooms": []}, {"sessions": {}}, "x"])
def test_normalize_document_rejects_wrong_shape(obj):
    with pytest.raises(ScheduleSyncError):
        normalize_document(obj)


@pytest.mark.django_db
def test_store_snapshot_prunes_old_rows():
    for n in range(KEEP_SNAPSHOTS + 3):
        store_snapshot({"sessions": [make_session(str(n), None)]})
    assert ScheduleSnapshot.objects.count() == KEEP_SNAPSHOTS
    assert find_session(str(KEEP_SNAPSHOTS + 2)) is not None


def test_fetch_sessionize_parses_document(sessionize_ok):
    doc = fetch_sessionize("https://sessionize.test/all", timeout=1)
    assert doc["speakers"][0]["fullName"] == "Ada"
    request = sessionize_ok.call_args.args[0]
    assert request.full_url == "https://sessionize.test/all"
    assert sessionize_ok.call_args.kwargs["timeout"] == 1


def test_fetch_sessionize_wraps_network_errors():
    with mock.patch(
        "confapp.schedule.services.urllib.request.urlopen",
        side_effect=urllib.error.URLError("down"),
    ), pytest.raises(ScheduleSyncError):
        fetch_sessionize("https://sessionize.test/all")


def test_fetch_sessionize_rejects_invalid_json():
    patcher, _ = _urlopen_returning(b"<html>")
    try:
        with pytest.raises(ScheduleSyncError):
            fetch_sessionize("https://sessionize.test/all")
    finally:
        patcher.stop()


@pytest.mark.django_db
def test_synchronize_stores_snapshot(sessionize_ok, settings):
    snapshot = synchronize_with_sessionize()
    assert snapshot.source_url == settings.SESSIONIZE_URL
    assert find_session("101") is not None


@pytest.mark.django_db
def test_synchronize_without_url_fails(settings):
    settings.SESSIONIZE_URL = ""
    with pytest.raises(ScheduleSyncError):
        synchronize_with_sessionize()


@pytest.mark.django_db
def test_synchronize_task_reports_status(sessionize_ok):
    result = synchronize_task.delay().get()
    assert result["ok"] is True
    assert result["sessions"] == 1


@pytest.mark.django_db
def test_synchronize_task_keeps_previous_snapshot_on_failure(schedule):
    with mock.patch(
        "confapp.schedule.services.urllib.request.urlopen",
        side_effect=TimeoutError("slow"),
    ):
        result = synchronize_task()
    assert result["ok"] is False
    assert "slow" in result["error"]
    assert find_session("started") is not None


def test_synchronize_task_skips_without_url(settings):
    settings.SESSIONIZE_URL = ""
    assert synchronize_task() == {"ok": False, "skipped": True}
