from celery import shared_task

from confapp.feed.services import refresh_feed


@shared_task(name="feed.refresh")
def refresh_feed_task() -> int:
    """Refresh the cached feed; returns the number of statuses served."""
    return len(refresh_feed()["statuses"])
