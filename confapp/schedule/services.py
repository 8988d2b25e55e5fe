"""Schedule storage and Sessionize synchronization."""

from __future__ import annotations

import copy
import json
import logging
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import TYPE_CHECKING
from typing import Any

from django.conf import settings
from django.db import transaction
from django.utils import timezone
from django.utils.dateparse import parse_datetime

from confapp.schedule.models import ScheduleSnapshot

if TYPE_CHECKING:
    import datetime as dt

logger = logging.getLogger(__name__)

DOCUMENT_SECTIONS = ("sessions", "rooms", "speakers", "questions", "categories")
KEEP_SNAPSHOTS = 10


class ScheduleSyncError(Exception):
    """Raised when the schedule source cannot be fetched or understood."""


@dataclass(frozen=True)
class ScheduledSession:
    id: str
    title: str
    room_id: int | None
    starts_at: dt.datetime | None
    ends_at: dt.datetime | None

    @classmethod
    def from_document(cls, raw: dict[str, Any]) -> ScheduledSession:
        room_id = raw.get("roomId")
        return cls(
            id=str(raw.get("id", "")),
            title=str(raw.get("title") or ""),
            room_id=room_id if isinstance(room_id, int) else None,
            starts_at=parse_session_time(raw.get("startsAt")),
            ends_at=parse_session_time(raw.get("endsAt")),
        )


def parse_session_time(value: Any) -> dt.datetime | None:
    """Parse a Sessionize local date-time, tolerating offsets and junk.

    Naive values are interpreted in the conference time zone (``TIME_ZONE``).
    """
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        parsed = parse_datetime(value.strip())
    except ValueError:
        return None
    if parsed is None:
        return None
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed, timezone.get_default_timezone())
    return parsed


def empty_document() -> dict[str, list]:
    return {section: [] for section in DOCUMENT_SECTIONS}


def current_snapshot() -> ScheduleSnapshot | None:
    return ScheduleSnapshot.objects.order_by("-synchronized_at", "-id").first()


def current_document() -> dict[str, Any]:
    """Return the live schedule document, or an empty one before first sync."""
    snapshot = current_snapshot()
    out = empty_document()
    if snapshot is None or not isinstance(snapshot.document, dict):
        return out
    out.update(copy.deepcopy(snapshot.document))
    return out


def list_sessions() -> list[ScheduledSession]:
    return [
        ScheduledSession.from_document(raw)
        for raw in current_document()["sessions"]
        if isinstance(raw, dict)
    ]


def find_session(session_id: str) -> ScheduledSession | None:
    for session in list_sessions():
        if session.id == str(session_id):
            return session
    return None


def normalize_document(obj: Any) -> dict[str, Any]:
    """Validate the Sessionize ``all`` shape and fill missing sections."""
    if not isinstance(obj, dict):
        msg = "Schedule document must be a JSON object"
        raise ScheduleSyncError(msg)
    sessions = obj.get("sessions")
    if not isinstance(sessions, list):
        msg = "Schedule document has no 'sessions' list"
        raise ScheduleSyncError(msg)
    out = empty_document()
    for section in DOCUMENT_SECTIONS:
        value = obj.get(section)
        if isinstance(value, list):
            out[section] = value
    return out


def fetch_sessionize(url: str, timeout: float | None = None) -> dict[str, Any]:
    if timeout is None:
        timeout = float(getattr(settings, "SESSIONIZE_TIMEOUT", 15.0))
    req = urllib.request.Request(  # noqa: S310 - external URL by config
        url,
        headers={"Accept": "application/json"},
        method="GET",
    )
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:  # noqa: S310 - external URL by config
            raw = resp.read()
    except (urllib.error.URLError, TimeoutError) as exc:
        logger.warning("Sessionize request failed: %s", exc)
        msg = f"Sessionize request failed: {exc}"
        raise ScheduleSyncError(msg) from exc
    try:
        obj = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.warning("Sessionize returned invalid JSON: %s", exc)
        msg = "Sessionize returned invalid JSON"
        raise ScheduleSyncError(msg) from exc
    return normalize_document(obj)


@transaction.atomic
def store_snapshot(document: dict[str, Any], source_url: str = "") -> ScheduleSnapshot:
    snapshot = ScheduleSnapshot.objects.create(
        source_url=source_url,
        document=normalize_document(document),
    )
    stale_ids = list(
        ScheduleSnapshot.objects.order_by("-synchronized_at", "-id").values_list(
            "id", flat=True
        )[KEEP_SNAPSHOTS:]
    )
    if stale_ids:
        ScheduleSnapshot.objects.filter(id__in=stale_ids).delete()
    return snapshot


def synchronize_with_sessionize(url: str | None = None) -> ScheduleSnapshot:
    """Fetch the Sessionize document and make it the live schedule."""
    url = url or getattr(settings, "SESSIONIZE_URL", "")
    if not url:
        msg = "SESSIONIZE_URL not configured"
        raise ScheduleSyncError(msg)
    document = fetch_sessionize(url)
    snapshot = store_snapshot(document, source_url=url)
    logger.info(
        "Schedule synchronized from %s: %d sessions",
        url,
        len(document["sessions"]),
    )
    return snapshot
