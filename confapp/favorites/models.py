from django.db import models


class Favorite(models.Model):
    attendee = models.ForeignKey(
        "attendees.Attendee",
        on_delete=models.CASCADE,
        related_name="favorites",
    )
    # Sessionize ids are strings and live in the schedule snapshot, not a table.
    session_id = models.CharField(max_length=64)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at", "id"]
        unique_together = (("attendee", "session_id"),)

    def __str__(self) -> str:  # pragma: no cover - simple repr
        return f"Favorite({self.attendee_id}:{self.session_id})"
