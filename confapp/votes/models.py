from django.db import models
from django.utils.translation import gettext_lazy as _


class Vote(models.Model):
    """An attendee's rating of one session; re-voting overwrites it."""

    class Rating(models.IntegerChoices):
        BAD = -1, _("Bad")
        OK = 0, _("OK")
        GOOD = 1, _("Good")

    attendee = models.ForeignKey(
        "attendees.Attendee",
        on_delete=models.CASCADE,
        related_name="votes",
    )
    session_id = models.CharField(max_length=64, db_index=True)
    rating = models.SmallIntegerField(choices=Rating.choices)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at", "id"]
        unique_together = (("attendee", "session_id"),)

    def __str__(self) -> str:  # pragma: no cover - simple repr
        return f"Vote({self.attendee_id}:{self.session_id}={self.rating})"
