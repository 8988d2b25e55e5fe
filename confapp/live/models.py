from django.db import models


class LiveVideo(models.Model):
    """Stream currently shown for a room; no row means the room is offline."""

    room_id = models.PositiveIntegerField(unique=True)
    video = models.CharField(max_length=500)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["room_id"]

    def __str__(self) -> str:  # pragma: no cover - simple repr
        return f"LiveVideo(room={self.room_id})"
