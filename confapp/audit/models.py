from django.db import models


class AuditLog(models.Model):
    action = models.CharField(max_length=100)
    # "admin", "attendee:<id>" or "system" for scheduled tasks
    actor = models.CharField(max_length=64, default="system")
    message = models.TextField(blank=True)
    before = models.JSONField(null=True, blank=True)
    after = models.JSONField(null=True, blank=True)
    ip_address = models.CharField(max_length=64, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"[{self.created_at}] {self.actor}: {self.action}"
