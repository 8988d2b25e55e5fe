import logging

from celery import shared_task
from django.conf import settings

from confapp.schedule.services import ScheduleSyncError
from confapp.schedule.services import synchronize_with_sessionize

logger = logging.getLogger(__name__)


@shared_task(name="schedule.synchronize")
def synchronize_task(url: str | None = None) -> dict:
    """Periodic Sessionize import.

    Returns a small status dict; a failed fetch keeps the previous snapshot
    live and is reported instead of raised so beat keeps its cadence.
    """
    url = url or getattr(settings, "SESSIONIZE_URL", "")
    if not url:
        return {"ok": False, "skipped": True}
    try:
        snapshot = synchronize_with_sessionize(url)
    except ScheduleSyncError as exc:
        logger.warning("Scheduled Sessionize sync failed: %s", exc)
        return {"ok": False, "error": str(exc)}
    return {
        "ok": True,
        "snapshot": snapshot.pk,
        "sessions": len(snapshot.document.get("sessions", [])),
    }
