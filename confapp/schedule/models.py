from django.db import models


class ScheduleSnapshot(models.Model):
    """One imported copy of the Sessionize ``all`` document.

    The newest row is the live schedule. ``document`` keeps the Sessionize
    shape untouched (``sessions``, ``rooms``, ``speakers``, ``questions``,
    ``categories``) because the mobile client consumes it as-is.
    """

    source_url = models.CharField(max_length=500, blank=True)
    document = models.JSONField(default=dict, blank=True)
    synchronized_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-synchronized_at", "-id"]
        get_latest_by = ["synchronized_at", "id"]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"ScheduleSnapshot({self.pk}@{self.synchronized_at})"
